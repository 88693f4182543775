"""Main CLI entry point."""

import logging

import click
from ledgerclose.database.factories import create_sqlite_storage

# Import and register all commands at module level
from ledgerclose.cli.commands import ledger

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERCLOSE_DB_PATH environment variable)",
    envvar="LEDGERCLOSE_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging level",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Ledgerclose - inspect migrated double-entry ledgers.

    Lists the entities, fiscal years, statements and transactions stored by
    a ledger load, and checks that every year balances.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Open storage only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is not None:
        storage = create_sqlite_storage(database_path=db_path)
        storage.connect()
        ctx.obj["storage"] = storage
        ctx.call_on_close(storage.disconnect)


# Register all commands
ledger.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
