"""Invoice management commands."""

import click
from invoicekit.cli.error_handling import handle_domain_error
from invoicekit.domain.entities import STATUS_DISPLAY, InvoiceStatus
from invoicekit.domain.errors import DomainError
from invoicekit.domain.invoice import InvoiceService, parse_status
from invoicekit.domain.settings import CompanySettingsService
from invoicekit.rendering.assets import FileAssetResolver
from invoicekit.rendering.document import DEFAULT_PAYMENT_BASE_URL, InvoiceDocumentRenderer
from invoicekit.utils.date_parser import parse_date
from invoicekit.utils.formatting import format_currency, format_date_long, format_quantity

STATUS_CHOICES = [status.value for status in InvoiceStatus]


def _short_date(value) -> str:
    return value.isoformat() if value else "-"


@click.group()
def invoice_group():
    """Manage invoices."""
    pass


@invoice_group.command("import")
@click.argument("json_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def import_invoices(ctx, json_file: str):
    """Import invoices from a JSON export.

    The file holds a list of invoice records (or an object with an
    "invoices" list) using the document-store field names, e.g.
    invoiceNumber, issueDate, dueDate, items, financial, billingDetails.

    Examples:
        invoicekit invoice import invoices.json
    """
    db = ctx.obj["db"]
    service = InvoiceService(db)

    try:
        result = service.import_file(json_file)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo("\nImport complete:")
    click.echo(f"  Imported: {result['imported']} invoices")
    click.echo(f"  Skipped: {result['skipped']} duplicates")
    if result["errors"]:
        click.echo(f"  Errors: {len(result['errors'])}")
        for error in result["errors"]:
            click.echo(f"    {error}", err=True)


@invoice_group.command("list")
@click.option("--status", type=click.Choice(STATUS_CHOICES), help="Only show invoices with this status")
@click.pass_context
def list_invoices(ctx, status: str | None):
    """List invoices ordered by issue date."""
    db = ctx.obj["db"]
    service = InvoiceService(db)

    invoices = service.list_invoices(status=parse_status(status) if status else None)
    if not invoices:
        click.echo("No invoices found.")
        return

    click.echo(f"\nFound {len(invoices)} invoice(s):")
    click.echo("-" * 96)
    click.echo(
        f"{'Number':<16} {'Client':<28} {'Issued':<10} {'Due':<10} {'Status':<14} {'Total':>14}"
    )
    click.echo("-" * 96)
    for inv in invoices:
        client = (inv.recipient_name or "-")[:28]
        label = STATUS_DISPLAY[inv.status].label
        total = format_currency(inv.total_amount, inv.currency)
        click.echo(
            f"{inv.invoice_number:<16} {client:<28} {_short_date(inv.issue_date):<10} "
            f"{_short_date(inv.due_date):<10} {label:<14} {total:>14}"
        )


@invoice_group.command("show")
@click.argument("invoice_ref", metavar="NUMBER")
@click.pass_context
def show_invoice(ctx, invoice_ref: str):
    """Show invoice details.

    NUMBER can be an invoice number or invoice ID.
    """
    db = ctx.obj["db"]
    service = InvoiceService(db)

    try:
        inv = service.get_invoice(invoice_ref)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    currency = inv.currency
    click.echo(f"\nInvoice {inv.invoice_number} (ID: {inv.id})")
    click.echo("=" * 80)
    click.echo(f"  Status: {STATUS_DISPLAY[inv.status].label}")
    click.echo(f"  Client: {inv.recipient_name or '-'}")
    click.echo(f"  Issue date: {format_date_long(inv.issue_date) if inv.issue_date else '-'}")
    click.echo(f"  Due date: {format_date_long(inv.due_date) if inv.due_date else '-'}")
    if inv.paid_date:
        click.echo(f"  Paid date: {format_date_long(inv.paid_date)}")

    if inv.items:
        click.echo("\n  Items:")
        for item in inv.items:
            click.echo(
                f"    {item.description[:44]:<44} {format_quantity(item.quantity):>6} x "
                f"{format_currency(item.unit_price, currency):>12} = "
                f"{format_currency(item.total, currency):>12}"
            )

    if inv.financial is None:
        click.echo("\n  No financial data.")
        return
    fin = inv.financial
    click.echo("")
    click.echo(f"  {'Subtotal:':<14} {format_currency(fin.subtotal, currency):>14}")
    if fin.discount > 0:
        click.echo(f"  {'Discount:':<14} {format_currency(-fin.discount, currency):>14}")
    click.echo(f"  {'BTW:':<14} {format_currency(fin.tax, currency):>14}")
    click.echo(f"  {'Total:':<14} {format_currency(fin.total, currency):>14}")
    click.echo(f"  {'Paid:':<14} {format_currency(fin.paid, currency):>14}")
    click.echo(f"  {'Outstanding:':<14} {format_currency(inv.outstanding_amount, currency):>14}")


@invoice_group.command("status")
@click.argument("invoice_ref", metavar="NUMBER")
@click.argument("status", type=click.Choice(STATUS_CHOICES))
@click.option("--paid-date", help="Payment date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.pass_context
def set_status(ctx, invoice_ref: str, status: str, paid_date: str | None):
    """Change an invoice status.

    Marking an invoice paid without --paid-date records today as the paid date.

    Examples:
        invoicekit invoice status INV-2024-001 sent
        invoicekit invoice status INV-2024-001 paid --paid-date yesterday
    """
    db = ctx.obj["db"]
    service = InvoiceService(db)

    paid = None
    if paid_date:
        try:
            paid = parse_date(paid_date)
        except ValueError as e:
            click.echo(f"Error: Invalid paid date: {e}", err=True)
            ctx.exit(1)

    try:
        inv = service.update_status(invoice_ref, status, paid_date=paid)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Invoice {inv.invoice_number} is now '{STATUS_DISPLAY[inv.status].label}'")
    if inv.paid_date and inv.status == InvoiceStatus.PAID:
        click.echo(f"Paid date set to {inv.paid_date.isoformat()}")


@invoice_group.command("pdf")
@click.argument("invoice_ref", metavar="NUMBER")
@click.option("--output", "-o", type=click.Path(), help="Output file or directory (default: factuur-<number>.pdf)")
@click.option("--base64", "as_base64", is_flag=True, help="Print the PDF as base64 instead of writing a file")
@click.option("--payment-url", help="Explicit online payment URL")
@click.option(
    "--base-url",
    envvar="INVOICEKIT_BASE_URL",
    default=DEFAULT_PAYMENT_BASE_URL,
    show_default=True,
    help="Base URL for the generated payment link",
)
@click.option(
    "--logo",
    type=click.Path(dir_okay=False),
    help="Logo image (overrides INVOICEKIT_LOGO_PATH environment variable)",
)
@click.pass_context
def render_pdf(
    ctx,
    invoice_ref: str,
    output: str | None,
    as_base64: bool,
    payment_url: str | None,
    base_url: str,
    logo: str | None,
):
    """Render an invoice as a PDF document.

    Examples:
        invoicekit invoice pdf INV-2024-001
        invoicekit invoice pdf INV-2024-001 --output ~/Documents/
        invoicekit invoice pdf INV-2024-001 --base64 > invoice.b64
    """
    db = ctx.obj["db"]
    service = InvoiceService(db)
    settings_service = CompanySettingsService(db)

    try:
        inv = service.get_invoice(invoice_ref)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    renderer = InvoiceDocumentRenderer(
        settings_source=settings_service.get_company_settings,
        asset_resolver=FileAssetResolver.from_environment(extra=logo),
        payment_base_url=base_url,
    )
    document = renderer.render(inv, payment_url=payment_url)

    if as_base64:
        click.echo(document.to_base64())
    if output or not as_base64:
        try:
            path = document.save(output or document.filename)
        except OSError as e:
            click.echo(f"Error: Could not write PDF: {e}", err=True)
            ctx.exit(1)
        click.echo(f"Wrote {path} ({document.page_count} page(s))", err=as_base64)


def register_commands(cli):
    """Register invoice commands with main CLI."""
    cli.add_command(invoice_group, name="invoice")
