"""Main CLI entry point."""

import logging

import click
from invoicekit.database.factories import create_sqlite_database

# Import and register all commands at module level
from invoicekit.cli.commands import invoice, report, settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides INVOICEKIT_DB_PATH environment variable)",
    envvar="INVOICEKIT_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Invoicekit - Invoice documents and financial reports.

    Import invoices, render them as PDF documents and produce BTW, revenue
    and receivables aging reports.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
invoice.register_commands(cli)
report.register_commands(cli)
settings.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
