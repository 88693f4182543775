"""Tests for statements and rollups."""

import pytest
from decimal import Decimal

from ledgerclose.domain.entities import Account, AccountType, StatementType
from ledgerclose.domain.errors import InvalidInputError, NotFoundError
from ledgerclose.domain.statement import Rollup, Statement


def test_statement_requires_parameters(ledger):
    """Test missing statement parameters."""
    with pytest.raises(InvalidInputError):
        Statement(None, 2017, StatementType.BALANCE_SHEET)
    with pytest.raises(InvalidInputError):
        Statement(ledger, None, StatementType.BALANCE_SHEET)
    with pytest.raises(InvalidInputError):
        Statement(ledger, 2017, "Balance Sheet")
    with pytest.raises(NotFoundError):
        Statement(ledger, 1999, StatementType.BALANCE_SHEET)


def test_rollup_totals(ledger):
    """Test rollups sum credits positive and debits negative."""
    balance_sheet = Statement.balance_sheet(ledger, 2017)
    totals = {rollup.account.name: rollup.total() for rollup in balance_sheet.rollups()}

    assert totals == {
        "Checking": Decimal("-1135.01"),
        "Receivable": Decimal("-15.00"),
        "Capital A": Decimal("500.00"),
        "Capital B": Decimal("500.00"),
        "Distribution A": Decimal("-50.00"),
        "Distribution B": Decimal("0.00"),
    }


def test_statement_balances(ledger):
    """Test each statement sums only its own categories."""
    balance_sheet = Statement.balance_sheet(ledger, 2017)
    income_statement = Statement.income_statement(ledger, 2017)

    assert balance_sheet.get_balance() == Decimal("-200.01")
    assert income_statement.get_balance() == Decimal("200.01")
    assert balance_sheet.get_balance() + income_statement.get_balance() == Decimal("0.00")


def test_account_balance(ledger):
    """Test a single account balance, and an inactive account."""
    balance_sheet = Statement.balance_sheet(ledger, 2017)
    assert balance_sheet.get_account_balance(ledger.require_account("Capital A")) == Decimal(
        "500.00"
    )
    stranger = Account("Savings", "Not in the ledger", AccountType.ASSETS, True)
    assert balance_sheet.get_account_balance(stranger) == Decimal("0.00")


def test_rollup_for_inactive_account(ledger):
    """Test a rollup needs an account active in the year."""
    statement = Statement.balance_sheet(ledger, 2017)
    stranger = Account("Savings", "Not in the ledger", AccountType.ASSETS, True)
    with pytest.raises(NotFoundError):
        Rollup(statement, stranger)


def test_balance_sheet_is_cumulative(ledger_factory):
    """Test balance sheets carry prior years while income statements do not."""
    ledger = ledger_factory((2017, 2018))

    assert Statement.income_statement(ledger, 2018).get_balance() == Decimal("200.01")
    assert Statement.balance_sheet(ledger, 2017).get_balance() == Decimal("-200.01")
    assert Statement.balance_sheet(ledger, 2018).get_balance() == Decimal("-400.02")


def test_statement_reflects_new_transactions(ledger, structure):
    """Test statements are recomputed from the ledger on every call."""
    income_statement = Statement.income_statement(ledger, 2017)
    assert income_statement.get_balance() == Decimal("200.01")

    year = ledger.get_fiscal_year(2017)
    ledger.add_transaction(structure.get_income_to_capital_transaction(year, ledger))
    assert income_statement.get_balance() == Decimal("0.00")


def test_to_data(ledger):
    """Test tab-delimited statement data in link order."""
    assert Statement.balance_sheet(ledger, 2017).to_data().split("\n") == [
        "Assets\tCash\tChecking\t-1135.01",
        "Assets\tAccounts Receivable\tReceivable\t-15.00",
        "Equity\tCapital\tCapital A\t500.00",
        "Equity\tCapital\tCapital B\t500.00",
        "Equity\tDistributions\tDistribution A\t-50.00",
        "Equity\tDistributions\tDistribution B\t0.00",
    ]
    assert Statement.income_statement(ledger, 2017).to_data().split("\n") == [
        "Income\tRevenue\tRevenue\t300.01",
        "Income\tIncome Summary\tIncome Summary\t0.00",
        "Expenses\tOperating Expenses\tExpenses\t-100.00",
    ]


def test_to_detail_data(ledger):
    """Test one detail line per posting, sorted by date, without empty accounts."""
    lines = Statement.balance_sheet(ledger, 2017).to_detail_data().split("\n")

    assert lines[0] == "Assets\tCash\tChecking\t100000\t01-Jan-17\t-1000.00"
    assert lines[1] == "Assets\tCash\tChecking\t1\t15-Feb-17\t-300.01"
    assert "Assets\tAccounts Receivable\tReceivable\t4\t15-Jul-17\t-40.00" in lines
    assert not any("Distribution B" in line for line in lines)
    assert not lines[-1] == ""
