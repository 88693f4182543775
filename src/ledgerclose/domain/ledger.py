"""Ledger: flat name- and id-keyed tables of the migrated accounting data.

Accounts, groups and fiscal years live in their own tables; the links between
them are name and year references, never object back-pointers.
"""

import logging
from typing import Iterator, Optional

from ledgerclose.domain.entities import (
    Account,
    AccountGroup,
    AccountType,
    FiscalYearAccount,
)
from ledgerclose.domain.errors import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    account_not_found,
    duplicate_account,
    no_fiscal_year_for_date,
    required,
)
from ledgerclose.domain.fiscal_year import FiscalYear
from ledgerclose.domain.transaction import Item, Transaction

logger = logging.getLogger(__name__)


class Ledger:
    """In-memory store of one accounting entity's migrated books."""

    def __init__(self):
        self._groups: dict[str, AccountGroup] = {}
        self._accounts: dict[str, Account] = {}
        self._years: dict[int, FiscalYear] = {}
        self._links: dict[str, dict[int, FiscalYearAccount]] = {}

    # Groups

    def add_group(self, name: str) -> AccountGroup:
        """Add an account group, returning the existing one for a known name."""
        group = self._groups.get(name)
        if group is None:
            group = AccountGroup(name)
            self._groups[name] = group
        return group

    def get_group_by_name(self, name: str) -> Optional[AccountGroup]:
        return self._groups.get(name)

    @property
    def groups(self) -> tuple[AccountGroup, ...]:
        return tuple(self._groups.values())

    # Accounts

    def add_account(self, account: Account) -> Account:
        """Add an account.

        Raises:
            InvalidInputError: If the account is missing
            ConflictError: If an account with the same name exists
        """
        if account is None:
            raise InvalidInputError(required("account"))
        if account.name in self._accounts:
            raise ConflictError(duplicate_account(account.name))
        self._accounts[account.name] = account
        logger.debug("Added account %s (%s)", account.name, account.account_type)
        return account

    def get_account_by_name(self, name: str) -> Optional[Account]:
        return self._accounts.get(name)

    def require_account(self, name: str) -> Account:
        """Get an account by name.

        Raises:
            NotFoundError: If no account has the name
        """
        account = self._accounts.get(name)
        if account is None:
            raise NotFoundError(account_not_found(name))
        return account

    @property
    def accounts(self) -> tuple[Account, ...]:
        return tuple(self._accounts.values())

    # Fiscal years

    def add_fiscal_year(self, year) -> FiscalYear:
        """Add a fiscal year, given as a FiscalYear or a calendar year number."""
        if year is None:
            raise InvalidInputError(required("fiscal year"))
        fiscal_year = year if isinstance(year, FiscalYear) else FiscalYear(year)
        if fiscal_year.year in self._years:
            raise ConflictError(f"Fiscal year {fiscal_year.year} already exists")
        self._years[fiscal_year.year] = fiscal_year
        logger.debug("Added fiscal year %s", fiscal_year.year)
        return fiscal_year

    def get_fiscal_year(self, year: int) -> Optional[FiscalYear]:
        return self._years.get(year)

    def require_fiscal_year(self, year: int) -> FiscalYear:
        fiscal_year = self._years.get(year)
        if fiscal_year is None:
            raise NotFoundError(f"Fiscal year {year} not found")
        return fiscal_year

    @property
    def fiscal_years(self) -> tuple[FiscalYear, ...]:
        return tuple(self._years[year] for year in sorted(self._years))

    # Per-year account links

    def link_account(
        self,
        year: int,
        account_name: str,
        group_name: str,
        group_order: int,
        account_order: int,
        account_type: Optional[AccountType] = None,
    ) -> FiscalYearAccount:
        """Activate an account in a fiscal year with its group and ordering.

        The account type defaults to the account's own type.

        Raises:
            NotFoundError: If the account or fiscal year does not exist
            InvalidInputError: If the account is already active in the year
        """
        account = self.require_account(account_name)
        fiscal_year = self.require_fiscal_year(year)
        self.add_group(group_name)
        link = FiscalYearAccount(
            year=fiscal_year.year,
            account_name=account.name,
            account_type=account_type or account.account_type,
            group_name=group_name,
            group_order=group_order,
            account_order=account_order,
        )
        fiscal_year.add_account(link)
        self._links.setdefault(account.name, {})[fiscal_year.year] = link
        return link

    def links_for(self, account_name: str) -> tuple[FiscalYearAccount, ...]:
        """Per-year links of an account, ordered by year."""
        links = self._links.get(account_name, {})
        return tuple(links[year] for year in sorted(links))

    def get_group(self, account_name: str, year: int) -> Optional[AccountGroup]:
        """Get the group an account belongs to in the given fiscal year."""
        link = self._links.get(account_name, {}).get(year)
        if link is None:
            return None
        return self._groups.get(link.group_name)

    # Transactions

    def year_for_date(self, value) -> Optional[FiscalYear]:
        for fiscal_year in self._years.values():
            if fiscal_year.contains(value):
                return fiscal_year
        return None

    def add_transaction(self, transaction: Transaction) -> FiscalYear:
        """Add a transaction to the fiscal year containing its date.

        Raises:
            InvalidInputError: If no fiscal year contains the date
        """
        if transaction is None:
            raise InvalidInputError(required("transaction"))
        fiscal_year = self.year_for_date(transaction.date)
        if fiscal_year is None:
            raise InvalidInputError(no_fiscal_year_for_date(transaction.date))
        fiscal_year.add_transaction(transaction)
        return fiscal_year

    def get_transaction(self, year: int, transaction_id: int) -> Optional[Transaction]:
        fiscal_year = self._years.get(year)
        if fiscal_year is None:
            return None
        return fiscal_year.get_transaction(transaction_id)

    def postings(
        self, account_name: str, through_year: Optional[int] = None
    ) -> Iterator[tuple[Transaction, Item]]:
        """Yield (transaction, item) pairs against an account.

        Args:
            account_name: Account to collect postings for
            through_year: Last fiscal year to include; all years when None
        """
        for fiscal_year in self.fiscal_years:
            if through_year is not None and fiscal_year.year > through_year:
                break
            for transaction in fiscal_year.transactions_for(account_name):
                for item in transaction.items_for(account_name):
                    yield transaction, item
