"""Tests for the ledgerclose command line."""

from ledgerclose.cli.main import cli

ENTITY_NAME = "Sample Partners"


def _invoke(cli_runner, storage, *args):
    return cli_runner.invoke(cli, ["--db-path", storage.database_path, *args])


def test_help(cli_runner):
    """Test help does not need a database."""
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "statement" in result.output
    assert "validate" in result.output


def test_entities(cli_runner, temp_storage, stored_ledger):
    """Test listing stored entities."""
    result = _invoke(cli_runner, temp_storage, "entities")
    assert result.exit_code == 0
    assert result.output.strip() == ENTITY_NAME


def test_entities_empty(cli_runner, temp_storage):
    """Test listing entities of an empty database."""
    result = _invoke(cli_runner, temp_storage, "entities")
    assert result.exit_code == 0
    assert "No entities found." in result.output


def test_years(cli_runner, temp_storage, stored_ledger):
    """Test fiscal years are listed with their balance status."""
    result = _invoke(cli_runner, temp_storage, "years", ENTITY_NAME)
    assert result.exit_code == 0
    assert f"Fiscal years for {ENTITY_NAME}:" in result.output
    line = next(line for line in result.output.split("\n") if line.startswith("2017"))
    assert "2017-01-01 - 2017-12-31" in line
    assert line.endswith("OK")


def test_statement(cli_runner, temp_storage, stored_ledger):
    """Test printing balance sheet data."""
    result = _invoke(cli_runner, temp_storage, "statement", ENTITY_NAME, "2017")
    assert result.exit_code == 0
    lines = result.output.strip().split("\n")
    assert lines[0] == "Assets\tCash\tChecking\t-1135.01"
    assert "Equity\tCapital\tCapital A\t575.00" in lines
    assert lines[-1] == "Balance Sheet balance for 2017: 0.00"


def test_statement_income_details(cli_runner, temp_storage, stored_ledger):
    """Test printing income statement detail lines."""
    result = _invoke(
        cli_runner, temp_storage, "statement", ENTITY_NAME, "2017", "--income", "--details"
    )
    assert result.exit_code == 0
    assert "Income\tRevenue\tRevenue\t1\t15-Feb-17\t300.01" in result.output
    assert "Income Statement balance for 2017: 0.00" in result.output


def test_statement_unknown_year(cli_runner, temp_storage, stored_ledger):
    """Test a year the entity does not have."""
    result = _invoke(cli_runner, temp_storage, "statement", ENTITY_NAME, "2030")
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_transactions_by_account(cli_runner, temp_storage, stored_ledger):
    """Test listing the transactions touching one account."""
    result = _invoke(
        cli_runner, temp_storage, "transactions", ENTITY_NAME, "2017", "--account", "Receivable"
    )
    assert result.exit_code == 0
    assert "     4 | 15-Jul-17 | Loan to client" in result.output
    assert "     5 | 15-Sep-17 | Loan repayment" in result.output
    assert "Consulting fee" not in result.output


def test_transactions_by_date(cli_runner, temp_storage, stored_ledger):
    """Test legacy dates are accepted as filters."""
    result = _invoke(
        cli_runner,
        temp_storage,
        "transactions",
        ENTITY_NAME,
        "2017",
        "--start-date",
        "01-Dec-17",
    )
    assert result.exit_code == 0
    assert "Summarize income for 2017" in result.output
    assert "Consulting fee" not in result.output


def test_transactions_invalid_date(cli_runner, temp_storage, stored_ledger):
    """Test an unparseable date exits with failure."""
    result = _invoke(
        cli_runner, temp_storage, "transactions", ENTITY_NAME, "2017", "--end-date", "someday"
    )
    assert result.exit_code == 1
    assert "Invalid end date" in result.output


def test_transactions_none_found(cli_runner, temp_storage, stored_ledger):
    """Test an empty result."""
    result = _invoke(cli_runner, temp_storage, "transactions", ENTITY_NAME, "2018")
    assert result.exit_code == 0
    assert "No transactions found." in result.output


def test_validate(cli_runner, temp_storage, stored_ledger):
    """Test a stored closed ledger validates."""
    result = _invoke(cli_runner, temp_storage, "validate", ENTITY_NAME)
    assert result.exit_code == 0
    assert f"All 1 fiscal years balance for {ENTITY_NAME}." in result.output


def test_unknown_entity(cli_runner, temp_storage):
    """Test commands for an entity that was never stored."""
    for command in (["years"], ["validate"], ["statement", "2017"], ["transactions", "2017"]):
        name, *rest = command
        result = _invoke(cli_runner, temp_storage, name, "Nobody", *rest)
        assert result.exit_code == 1
        assert "Entity 'Nobody' not found" in result.output
