"""Company settings commands."""

import dataclasses

import click
from invoicekit.cli.error_handling import handle_domain_error
from invoicekit.domain.errors import DomainError
from invoicekit.domain.settings import SETTINGS_FIELDS, CompanySettingsService


@click.group()
def settings_group():
    """Manage company settings used on invoice documents."""
    pass


@settings_group.command("show")
@click.pass_context
def show_settings(ctx):
    """Show the company settings."""
    db = ctx.obj["db"]
    service = CompanySettingsService(db)

    settings = service.get_company_settings()
    if db.get_company_settings() is None:
        click.echo("(no settings stored; showing defaults)")

    click.echo("\nCompany settings:")
    click.echo("-" * 60)
    for name, value in dataclasses.asdict(settings).items():
        click.echo(f"{name:<28} {value if value != '' else '-'}")


@settings_group.command("set")
@click.argument("field_name", metavar="FIELD", type=click.Choice(SETTINGS_FIELDS))
@click.argument("value")
@click.pass_context
def set_setting(ctx, field_name: str, value: str):
    """Update a single settings field.

    Examples:
        invoicekit settings set iban NL91ABNA0417164300
        invoicekit settings set default_payment_terms_days 14
    """
    db = ctx.obj["db"]
    service = CompanySettingsService(db)

    try:
        settings = service.update_field(field_name, value)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Updated {field_name} to '{getattr(settings, field_name)}'")


def register_commands(cli):
    """Register settings commands with main CLI."""
    cli.add_command(settings_group, name="settings")
