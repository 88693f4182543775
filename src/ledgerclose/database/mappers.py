"""Mapper functions to convert SQLAlchemy models into domain objects.

This layer isolates the conversion logic, so schema changes stay out of the
domain classes.
"""

from ledgerclose.domain.capital import CapitalEntity
from ledgerclose.domain.entities import Account, AccountType, FiscalYearAccount
from ledgerclose.domain.fiscal_year import FiscalYear
from ledgerclose.domain.transaction import Transaction
from ledgerclose.database.models import (
    AccountRecord,
    CapitalEntityRecord,
    FiscalYearAccountRecord,
    FiscalYearRecord,
    TransactionRecord,
)


def account_to_domain(orm_account: AccountRecord) -> Account:
    """Convert SQLAlchemy AccountRecord model to domain Account entity."""
    return Account(
        name=orm_account.name,
        description=orm_account.description,
        account_type=AccountType.from_database(orm_account.account_type),
        debit_default=orm_account.debit_default,
        receivable=orm_account.receivable,
        group_name=orm_account.group_name,
    )


def capital_entity_to_domain(orm_entity: CapitalEntityRecord) -> CapitalEntity:
    """Convert SQLAlchemy CapitalEntityRecord model to domain CapitalEntity."""
    return CapitalEntity(
        name=orm_entity.name,
        capital_account_name=orm_entity.capital_account_name,
        distribution_account_name=orm_entity.distribution_account_name,
        ownership=orm_entity.ownership,
    )


def fiscal_year_to_domain(orm_year: FiscalYearRecord) -> FiscalYear:
    """Convert SQLAlchemy FiscalYearRecord model to an empty domain FiscalYear."""
    return FiscalYear(orm_year.year, orm_year.start, orm_year.end)


def fiscal_year_account_to_domain(orm_link: FiscalYearAccountRecord) -> FiscalYearAccount:
    """Convert SQLAlchemy FiscalYearAccountRecord model to domain FiscalYearAccount."""
    return FiscalYearAccount(
        year=orm_link.fiscal_year.year,
        account_name=orm_link.account.name,
        account_type=AccountType.from_database(orm_link.account_type),
        group_name=orm_link.group.name,
        group_order=orm_link.group_order,
        account_order=orm_link.account_order,
    )


def transaction_to_domain(
    orm_transaction: TransactionRecord, accounts: dict[str, Account]
) -> Transaction:
    """Convert SQLAlchemy TransactionRecord model and its items to a domain Transaction.

    The domain transaction keeps the ledger id it had before storage.

    Args:
        orm_transaction: Stored transaction with its old-id mapping
        accounts: Domain accounts keyed by name
    """
    old_id = orm_transaction.old_id.old_id if orm_transaction.old_id else orm_transaction.id
    transaction = Transaction(
        old_id,
        orm_transaction.description,
        orm_transaction.date,
        checked=orm_transaction.checked,
        balance=orm_transaction.balance,
        year=orm_transaction.fiscal_year.year,
    )
    for orm_item in orm_transaction.items:
        transaction.add_item(
            orm_item.amount,
            accounts[orm_item.account.name],
            orm_item.debit,
            orm_item.checked,
        )
    return transaction
