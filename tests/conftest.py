"""Shared pytest fixtures for ledgerclose tests."""

import tempfile
import os
from datetime import datetime
from decimal import Decimal
import pytest

from ledgerclose.database.factories import create_sqlite_storage
from ledgerclose.database.storage import StorageManager
from ledgerclose.domain.builder import Builder
from ledgerclose.domain.capital import CapitalEntity, CapitalStructure
from ledgerclose.domain.closing import PartnershipYearUpdater
from ledgerclose.domain.entities import Account, AccountType
from ledgerclose.domain.ledger import Ledger
from ledgerclose.domain.transaction import Transaction

ENTITY_NAME = "Sample Partners"

# name, description, type, debit default, receivable, group
ACCOUNTS = [
    ("Checking", "Checking account", AccountType.ASSETS, True, False, "Cash"),
    ("Receivable", "Loans to others", AccountType.ASSETS, True, True, "Accounts Receivable"),
    ("Capital A", "Partner A capital", AccountType.EQUITY, False, False, "Capital"),
    ("Capital B", "Partner B capital", AccountType.EQUITY, False, False, "Capital"),
    ("Distribution A", "Partner A draws", AccountType.EQUITY, True, False, "Distributions"),
    ("Distribution B", "Partner B draws", AccountType.EQUITY, True, False, "Distributions"),
    ("Revenue", "Consulting revenue", AccountType.INCOME, False, False, "Revenue"),
    ("Income Summary", "Income summary", AccountType.INCOME, False, False, "Income Summary"),
    ("Expenses", "Operating expenses", AccountType.EXPENSES, True, False, "Operating Expenses"),
]

GROUP_ORDER = {
    "Cash": 1,
    "Accounts Receivable": 2,
    "Capital": 1,
    "Distributions": 2,
    "Revenue": 1,
    "Income Summary": 2,
    "Operating Expenses": 1,
}


def add_accounts(ledger, year):
    """Add the sample accounts (once) and activate them in a fiscal year."""
    for order, (name, description, account_type, debit, receivable, group) in enumerate(
        ACCOUNTS, start=1
    ):
        if ledger.get_account_by_name(name) is None:
            ledger.add_account(Account(name, description, account_type, debit, receivable, group))
        ledger.link_account(year, name, group, GROUP_ORDER[group], order)


def add_opening_balances(ledger, year):
    """Opening balances: 1,000.00 cash owned equally by both partners."""
    fiscal_year = ledger.get_fiscal_year(year)
    fiscal_year.add_balance(ledger.require_account("Checking"), Decimal("1000.00"), True)
    fiscal_year.add_balance(ledger.require_account("Capital A"), Decimal("500.00"), False)
    fiscal_year.add_balance(ledger.require_account("Capital B"), Decimal("500.00"), False)


def add_transactions(ledger, year):
    """Revenue 300.01, expenses 100.00, a 50.00 draw and a 40.00 loan repaid in part."""
    account = ledger.require_account
    entries = [
        (1, "Consulting fee", 2, [("300.01", "Checking", True), ("300.01", "Revenue", False)]),
        (2, "Office supplies", 3, [("100.00", "Expenses", True), ("100.00", "Checking", False)]),
        (3, "Draw", 6, [("50.00", "Distribution A", True), ("50.00", "Checking", False)]),
        (4, "Loan to client", 7, [("40.00", "Receivable", True), ("40.00", "Checking", False)]),
        (5, "Loan repayment", 9, [("25.00", "Checking", True), ("25.00", "Receivable", False)]),
    ]
    transactions = {}
    for transaction_id, description, month, items in entries:
        transaction = Transaction(transaction_id, description, datetime(year, month, 15))
        for amount, name, debit in items:
            transaction.add_item(Decimal(amount), account(name), debit)
        ledger.add_transaction(transaction)
        transactions[transaction_id] = transaction
    return transactions


def add_reimbursements(ledger, year):
    """Repayment 5 settles 25.00 of loan 4."""
    receivable_account = ledger.require_account("Receivable")
    loan = ledger.get_transaction(year, 4).get_item(receivable_account)
    repayment = ledger.get_transaction(year, 5).get_item(receivable_account)
    return loan.reimburse(repayment, Decimal("25.00"))


def make_structure():
    structure = CapitalStructure("Income Summary")
    structure.add_entities(
        [
            CapitalEntity("Partner A", "Capital A", "Distribution A", Decimal("0.5")),
            CapitalEntity("Partner B", "Capital B", "Distribution B", Decimal("0.5")),
        ]
    )
    return structure


def make_ledger(years=(2017,)):
    """Sample ledger with opening balances in the first year, not yet closed."""
    ledger = Ledger()
    for year in years:
        ledger.add_fiscal_year(year)
        add_accounts(ledger, year)
        if year == years[0]:
            add_opening_balances(ledger, year)
        add_transactions(ledger, year)
        add_reimbursements(ledger, year)
    return ledger


class SampleBuilder(Builder):
    """Builder over the sample data that records the order of its steps."""

    def __init__(self):
        self._ledger = Ledger()
        self._fiscal_year = None
        self._structure = None
        self.account_map = {}
        self.steps = []

    @property
    def ledger(self):
        return self._ledger

    @property
    def fiscal_year(self):
        return self._fiscal_year

    @property
    def capital_structure(self):
        return self._structure

    def build_capital_structure(self):
        self.steps.append("capital_structure")
        self._structure = make_structure()

    def build_fiscal_year(self, year):
        self.steps.append(f"fiscal_year {year}")
        self._fiscal_year = self._ledger.add_fiscal_year(year)

    def build_account_groups(self):
        self.steps.append("account_groups")
        for group in GROUP_ORDER:
            self._ledger.add_group(group)

    def build_account_map(self):
        self.steps.append("account_map")
        self.account_map = {number: row[0] for number, row in enumerate(ACCOUNTS, start=100)}

    def build_accounts(self):
        self.steps.append("accounts")
        add_accounts(self._ledger, self._fiscal_year.year)

    def build_balances(self):
        self.steps.append("balances")
        add_opening_balances(self._ledger, self._fiscal_year.year)

    def build_transactions(self):
        self.steps.append("transactions")
        add_transactions(self._ledger, self._fiscal_year.year)

    def build_reimbursements(self):
        self.steps.append("reimbursements")
        add_reimbursements(self._ledger, self._fiscal_year.year)


@pytest.fixture
def ledger():
    """Unclosed sample ledger for 2017."""
    return make_ledger()


@pytest.fixture
def ledger_factory():
    """Return a function building unclosed sample ledgers for a run of years."""
    return make_ledger


@pytest.fixture
def structure():
    """Two equal partners closing into Capital A and Capital B."""
    return make_structure()


@pytest.fixture
def closed_ledger(ledger, structure):
    """Sample ledger with 2017 closed by the partnership updater."""
    PartnershipYearUpdater().update(ledger.get_fiscal_year(2017), ledger, structure)
    return ledger


@pytest.fixture
def sample_builder():
    """Create a builder over the sample data."""
    return SampleBuilder()


@pytest.fixture
def temp_storage():
    """Create a temporary storage database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    storage = create_sqlite_storage(database_path=db_path)
    # Store the path for tests that need it
    storage.database_path = db_path
    storage.connect()

    yield storage

    # Cleanup
    storage.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def stored_ledger(temp_storage, closed_ledger, structure):
    """Closed sample ledger stored under ENTITY_NAME."""
    StorageManager(temp_storage).store(ENTITY_NAME, structure, closed_ledger)
    return closed_ledger


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
