"""Commands for inspecting stored ledgers."""

import click

from ledgerclose.cli.date_filters import resolve_cli_date_range
from ledgerclose.cli.error_handling import handle_domain_error
from ledgerclose.domain.entities import StatementType
from ledgerclose.domain.errors import DomainError
from ledgerclose.domain.statement import Statement
from ledgerclose.domain.validation import check_year
from ledgerclose.utils.date_parser import format_legacy_date
from ledgerclose.utils.money import format_amount


@click.command("entities")
@click.pass_context
def list_entities(ctx):
    """List stored accounting entities."""
    storage = ctx.obj["storage"]
    names = storage.list_entities()
    if not names:
        click.echo("No entities found.")
        return
    for name in names:
        click.echo(name)


@click.command("years")
@click.argument("entity", metavar="ENTITY")
@click.pass_context
def list_years(ctx, entity: str):
    """List the fiscal years of an entity with their balance status.

    Examples:
        ledgerclose years "Poesys"
    """
    storage = ctx.obj["storage"]
    try:
        ledger = storage.load_ledger(entity)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not ledger.fiscal_years:
        click.echo(f"No fiscal years found for {entity}.")
        return

    click.echo(f"\nFiscal years for {entity}:")
    click.echo("-" * 78)
    for fiscal_year in ledger.fiscal_years:
        balance = check_year(ledger, fiscal_year.year)
        status = "OK" if balance.is_balanced else "UNBALANCED"
        click.echo(
            f"{fiscal_year.year} | {fiscal_year.start:%Y-%m-%d} - {fiscal_year.end:%Y-%m-%d} | "
            f"{len(fiscal_year.transactions):6d} transactions | "
            f"BS {format_amount(balance.balance_sheet):>12s} | "
            f"IS {format_amount(balance.income_statement):>12s} | {status}"
        )


@click.command("statement")
@click.argument("entity", metavar="ENTITY")
@click.argument("year", type=int)
@click.option("--income", is_flag=True, help="Show the income statement instead of the balance sheet")
@click.option("--details", is_flag=True, help="Show one line per posting instead of account totals")
@click.pass_context
def show_statement(ctx, entity: str, year: int, income: bool, details: bool):
    """Print statement data for a fiscal year as tab-separated lines.

    Examples:
        ledgerclose statement "Poesys" 2017
        ledgerclose statement "Poesys" 2017 --income --details
    """
    storage = ctx.obj["storage"]
    statement_type = StatementType.INCOME_STATEMENT if income else StatementType.BALANCE_SHEET
    try:
        ledger = storage.load_ledger(entity)
        statement = Statement(ledger, year, statement_type)
        data = statement.to_detail_data() if details else statement.to_data()
        balance = statement.get_balance()
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if data:
        click.echo(data)
    click.echo(f"{statement.name} balance for {year}: {format_amount(balance)}")


@click.command("transactions")
@click.argument("entity", metavar="ENTITY")
@click.argument("year", type=int)
@click.option("--account", help="Only transactions with an item against this account")
@click.option("--start-date", help="Start date (e.g. 2017-01-31 or 31-Jan-17)")
@click.option("--end-date", help="End date (e.g. 2017-12-31 or 31-Dec-17)")
@click.pass_context
def list_transactions(
    ctx,
    entity: str,
    year: int,
    account: str | None,
    start_date: str | None,
    end_date: str | None,
):
    """List the stored transactions of a fiscal year.

    Examples:
        ledgerclose transactions "Poesys" 2017
        ledgerclose transactions "Poesys" 2017 --account "Checking" --start-date 2017-06-01
    """
    storage = ctx.obj["storage"]
    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date)
    try:
        transactions = storage.list_transactions(
            entity, year, account_name=account, start_date=start, end_date=end
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not transactions:
        click.echo("No transactions found.")
        return

    for transaction in transactions:
        click.echo(
            f"{transaction.id:6d} | {format_legacy_date(transaction.date)} | "
            f"{transaction.description or ''}"
        )
        for item in transaction.items:
            side = "DR" if item.debit else "CR"
            click.echo(f"       {side} {format_amount(item.amount):>12s}  {item.account.name}")


@click.command("validate")
@click.argument("entity", metavar="ENTITY")
@click.pass_context
def validate_entity(ctx, entity: str):
    """Check that every stored fiscal year of an entity balances.

    Exits with status 1 when a year does not balance.
    """
    storage = ctx.obj["storage"]
    try:
        ledger = storage.load_ledger(entity)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not ledger.fiscal_years:
        click.echo(f"Error: No fiscal years found for {entity}.", err=True)
        ctx.exit(1)

    unbalanced = []
    for fiscal_year in ledger.fiscal_years:
        balance = check_year(ledger, fiscal_year.year)
        if not balance.is_balanced:
            unbalanced.append(fiscal_year.year)
            click.echo(
                f"{fiscal_year.year}: does not balance "
                f"({format_amount(balance.balance_sheet)} vs. "
                f"{format_amount(balance.income_statement)})"
            )

    if unbalanced:
        ctx.exit(1)
    click.echo(f"All {len(ledger.fiscal_years)} fiscal years balance for {entity}.")


def register_commands(cli):
    """Register ledger commands with main CLI."""
    cli.add_command(list_entities)
    cli.add_command(list_years)
    cli.add_command(show_statement)
    cli.add_command(list_transactions)
    cli.add_command(validate_entity)
