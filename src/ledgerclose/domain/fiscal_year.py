"""Fiscal year: accounts active in the year and the transactions dated in it."""

import logging
from datetime import datetime
from typing import Optional

from ledgerclose.domain.entities import Account, FiscalYearAccount
from ledgerclose.domain.errors import (
    InvalidInputError,
    InvalidOperationError,
    duplicate_transaction,
    required,
)
from ledgerclose.domain.transaction import Transaction
from ledgerclose.utils.date_parser import fiscal_year_bounds

logger = logging.getLogger(__name__)

# Legacy transaction ids all lie below this; balance and closing
# transactions are numbered from here up.
SYSTEM_TRANSACTION_BASE_ID = 100000


class FiscalYear:
    """An annual accounting period with start and end timestamps.

    The year keeps an incremental index from account name to the transactions
    touching that account, so rollups never scan the whole year.
    """

    def __init__(
        self,
        year: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ):
        if year is None:
            raise InvalidInputError(required("fiscal year"))
        default_start, default_end = fiscal_year_bounds(year)
        self._year = int(year)
        self._start = start or default_start
        self._end = end or default_end
        if self._end < self._start:
            raise InvalidInputError(
                f"Fiscal year {year} ends ({self._end}) before it starts ({self._start})"
            )
        self._accounts: dict[str, FiscalYearAccount] = {}
        self._transactions: dict[int, Transaction] = {}
        self._by_account: dict[str, list[Transaction]] = {}
        self._last_id = 0

    @classmethod
    def starting(cls, year: int, month: int) -> "FiscalYear":
        """Create a fiscal year that starts on the first of the given month."""
        start, end = fiscal_year_bounds(year, month)
        return cls(year, start, end)

    @property
    def year(self) -> int:
        return self._year

    @property
    def start(self) -> datetime:
        return self._start

    @property
    def end(self) -> datetime:
        return self._end

    @property
    def last_id(self) -> int:
        return self._last_id

    @property
    def accounts(self) -> tuple[FiscalYearAccount, ...]:
        """Account links for the year, in statement order."""
        return tuple(sorted(self._accounts.values(), key=lambda link: link.sort_key))

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return tuple(self._transactions.values())

    def add_account(self, link: FiscalYearAccount) -> None:
        """Activate an account in the year.

        Raises:
            InvalidInputError: If the link is missing, belongs to another year or
                the account is already active
        """
        if link is None:
            raise InvalidInputError(required("fiscal year account"))
        if link.year != self._year:
            raise InvalidInputError(
                f"Account link for {link.year} cannot be added to fiscal year {self._year}"
            )
        if link.account_name in self._accounts:
            raise InvalidInputError(
                f"Account '{link.account_name}' is already active in fiscal year {self._year}"
            )
        self._accounts[link.account_name] = link

    def link_for(self, account_name: str) -> Optional[FiscalYearAccount]:
        return self._accounts.get(account_name)

    def has_account(self, account_name: str) -> bool:
        return account_name in self._accounts

    def add_transaction(self, transaction: Transaction) -> None:
        """Add a transaction and index it under every account it touches.

        A transaction whose year was taken from its date joins this year when
        the date falls inside it.

        Raises:
            InvalidInputError: If the transaction is missing, belongs to another
                year or its id is already used in this year
        """
        if transaction is None:
            raise InvalidInputError(required("transaction"))
        moves = transaction.year != self._year
        if moves and (transaction.year_given or not self.contains(transaction.date)):
            raise InvalidInputError(
                f"Transaction {transaction.id} of {transaction.year} cannot be added "
                f"to fiscal year {self._year}"
            )
        if transaction.id in self._transactions:
            raise InvalidInputError(duplicate_transaction(transaction.id, self._year))

        if moves:
            try:
                transaction.assign_year(self._year)
            except InvalidOperationError as e:
                raise InvalidInputError(str(e)) from e
        self._transactions[transaction.id] = transaction
        seen = set()
        for item in transaction.items:
            name = item.account.name
            if name not in seen:
                seen.add(name)
                self._by_account.setdefault(name, []).append(transaction)
        self.set_last_id(transaction.id)
        logger.debug("Added transaction %s to fiscal year %s", transaction.id, self._year)

    def transactions_for(self, account_name: str) -> tuple[Transaction, ...]:
        return tuple(self._by_account.get(account_name, ()))

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        return self._transactions.get(transaction_id)

    def contains(self, value: datetime) -> bool:
        return self._start <= value <= self._end

    def contains_or_precedes(self, value: datetime) -> bool:
        return value <= self._end

    def set_last_id(self, transaction_id: int) -> None:
        """Raise the id counter; a lower id leaves it unchanged."""
        if transaction_id > self._last_id:
            self._last_id = transaction_id

    def next_id(self) -> int:
        """Reserve the next id for a system-generated transaction."""
        next_id = max(self._last_id + 1, SYSTEM_TRANSACTION_BASE_ID)
        self._last_id = next_id
        return next_id

    def add_balance(self, account: Account, amount, debit: bool) -> Transaction:
        """Record an opening balance as a single-item balance transaction.

        Args:
            account: Account carrying the balance
            amount: Non-negative balance amount
            debit: Whether the balance is a debit balance

        Returns:
            The balance transaction, already added to the year
        """
        if account is None:
            raise InvalidInputError(required("balance account"))
        transaction = Transaction(
            self.next_id(),
            f"Balance for {account.name}",
            self._start,
            checked=True,
            balance=True,
            year=self._year,
        )
        transaction.add_item(amount, account, debit, checked=True)
        self.add_transaction(transaction)
        return transaction

    def __repr__(self) -> str:
        return f"FiscalYear({self._year}, start={self._start}, end={self._end})"
