"""Double-entry transactions, items and reimbursements."""

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ledgerclose.domain.entities import Account
from ledgerclose.domain.errors import (
    InvalidAmountError,
    InvalidInputError,
    InvalidOperationError,
    required,
)
from ledgerclose.utils.money import ZERO, to_money

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ItemRef:
    """Arena reference to an item: fiscal year, transaction id, account, position."""

    year: int
    transaction_id: int
    account_name: str
    sequence: int


@dataclass(frozen=True)
class Reimbursement:
    """Settlement of part of a receivable item by a later reimbursing item.

    The reimbursed amount is the money received; the allocated amount is the
    part written off without payment.
    """

    receivable: ItemRef
    reimbursing: ItemRef
    reimbursed_amount: Decimal
    allocated_amount: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.reimbursed_amount + self.allocated_amount


class Item:
    """A single debit or credit against one account within one transaction.

    Items are created through Transaction.add_item and never change account,
    transaction, amount or polarity afterwards.
    """

    def __init__(
        self,
        transaction: "Transaction",
        sequence: int,
        amount,
        account: Account,
        debit: bool,
        checked: bool = False,
    ):
        if transaction is None or account is None or debit is None or amount is None:
            raise InvalidInputError(
                f"item parameters are required but one is null: "
                f"{transaction}, {amount}, {account}, {debit}"
            )
        try:
            amount = to_money(amount)
        except ValueError as e:
            raise InvalidInputError(str(e))
        if amount < 0:
            raise InvalidInputError(f"item amount must not be negative: {amount}")

        self._ref = ItemRef(transaction.year, transaction.id, account.name, sequence)
        self._transaction_date = transaction.date
        self._transaction_description = transaction.description
        self._amount = amount
        self._account = account
        self._debit = bool(debit)
        self._checked = bool(checked)
        self._reimbursements: list[Reimbursement] = []

    @property
    def ref(self) -> ItemRef:
        return self._ref

    @property
    def transaction_id(self) -> int:
        return self._ref.transaction_id

    @property
    def year(self) -> int:
        return self._ref.year

    @property
    def date(self) -> datetime:
        return self._transaction_date

    @property
    def amount(self) -> Decimal:
        return self._amount

    @property
    def account(self) -> Account:
        return self._account

    @property
    def debit(self) -> bool:
        return self._debit

    @property
    def checked(self) -> bool:
        return self._checked

    @property
    def signed_amount(self) -> Decimal:
        """Amount with debits negative and credits positive."""
        return -self._amount if self._debit else self._amount

    @property
    def reimbursements(self) -> tuple[Reimbursement, ...]:
        return tuple(self._reimbursements)

    def reimbursed_total(self) -> Decimal:
        """Reimbursed plus allocated amounts settled against this receivable."""
        total = ZERO
        for reimbursement in self._reimbursements:
            if reimbursement.receivable == self._ref:
                total += reimbursement.total
        return total

    def unreimbursed_amount(self) -> Decimal:
        return self._amount - self.reimbursed_total()

    def reimburse(
        self,
        reimbursing_item: "Item",
        reimbursed_amount,
        allocated_amount=None,
    ) -> Reimbursement:
        """Record that reimbursing_item settles part of this receivable item.

        Args:
            reimbursing_item: Credit item against the same receivable account
            reimbursed_amount: Amount of the reimbursing item applied here
            allocated_amount: Amount written off; defaults to 0.00

        Returns:
            The new Reimbursement, visible from both items

        Raises:
            InvalidInputError: If the reimbursing item or amount is missing
            InvalidOperationError: If this item is not a receivable debit
            InvalidAmountError: If the reimbursement exceeds the receivable or
                the reimbursing item, or the accounts do not match
        """
        if reimbursing_item is None:
            raise InvalidInputError(required("reimbursing item"))
        if reimbursed_amount is None:
            raise InvalidInputError(required("reimbursed amount"))
        reimbursed = to_money(reimbursed_amount)
        allocated = ZERO if allocated_amount is None else to_money(allocated_amount)

        if not (self._account.receivable and self._debit):
            raise InvalidOperationError(f"Cannot reimburse non-receivable item {self}")

        total = reimbursed + allocated + self.reimbursed_total()
        if total > self._amount:
            raise InvalidAmountError(
                f"Total reimbursement is {total} but receivable amount is {self._amount}; "
                f"check for prior-year reimbursement of receivable in "
                f"{list(self._reimbursements)}"
            )
        if reimbursed > reimbursing_item.amount:
            raise InvalidAmountError(
                f"reimbursed amount must be less than or equal to item amount "
                f"{reimbursing_item.amount}: {reimbursed}"
            )
        if reimbursing_item.account != self._account:
            raise InvalidAmountError(
                f"reimbursement must have same receivable account as receivable: "
                f"{self._account.name} vs. {reimbursing_item.account.name}"
            )
        if not reimbursing_item.account.receivable:
            raise InvalidAmountError(
                f"account is not receivable account: {reimbursing_item.account.name}"
            )

        reimbursement = Reimbursement(self._ref, reimbursing_item.ref, reimbursed, allocated)
        self._reimbursements.append(reimbursement)
        reimbursing_item._reimbursements.append(reimbursement)
        logger.debug("Reimbursed %s with %s", self._ref, reimbursement)
        return reimbursement

    def _move_to_year(self, year: int) -> None:
        self._ref = replace(self._ref, year=year)

    def __repr__(self) -> str:
        return (
            f"Item(year={self.year}, transaction={self.transaction_id}, "
            f"description={self._transaction_description!r}, amount={self._amount}, "
            f"account={self._account.name!r}, debit={self._debit}, checked={self._checked})"
        )


class Transaction:
    """Dated, described set of items that must net to zero.

    A balance transaction carries an opening balance and has exactly one item.
    The fiscal year defaults to the calendar year of the date until the
    transaction is added to the fiscal year containing that date.
    """

    def __init__(
        self,
        id: int,
        description: Optional[str],
        date: datetime,
        checked: bool = False,
        balance: bool = False,
        year: Optional[int] = None,
    ):
        if id is None or date is None:
            raise InvalidInputError("Transaction parameters are required but one is null")
        self._id = int(id)
        self._description = description
        self._date = date
        self._checked = bool(checked)
        self._balance = bool(balance)
        self._year = date.year if year is None else int(year)
        self._year_given = year is not None
        self._items: list[Item] = []

    @property
    def id(self) -> int:
        return self._id

    @property
    def description(self) -> Optional[str]:
        return self._description

    @property
    def date(self) -> datetime:
        return self._date

    @property
    def year(self) -> int:
        return self._year

    @property
    def year_given(self) -> bool:
        """Whether the fiscal year was passed in rather than taken from the date."""
        return self._year_given

    @property
    def checked(self) -> bool:
        return self._checked

    @property
    def balance(self) -> bool:
        return self._balance

    def assign_year(self, year: int) -> None:
        """Move the transaction and its items to another fiscal year.

        Raises:
            InvalidOperationError: If the year was given explicitly or an item
                already takes part in a reimbursement
        """
        year = int(year)
        if year == self._year:
            return
        if self._year_given:
            raise InvalidOperationError(
                f"Transaction {self._id} already belongs to fiscal year {self._year}"
            )
        if any(item.reimbursements for item in self._items):
            raise InvalidOperationError(
                f"Transaction {self._id} has reimbursed items and cannot change fiscal year"
            )
        self._year = year
        self._year_given = True
        for item in self._items:
            item._move_to_year(year)

    @property
    def items(self) -> tuple[Item, ...]:
        return tuple(self._items)

    def add_item(self, amount, account: Account, debit: bool, checked: bool = False) -> Item:
        """Add an item to the transaction.

        Raises:
            InvalidInputError: If a parameter is missing or the amount is negative
        """
        item = Item(self, len(self._items), amount, account, debit, checked)
        self._items.append(item)
        logger.debug("Added item to account %s: %r", account.name, item)
        return item

    def get_item(self, account: Account) -> Optional[Item]:
        """Get the first item against an account, or None."""
        for item in self._items:
            if item.account == account:
                return item
        return None

    def items_for(self, account_name: str) -> list[Item]:
        return [item for item in self._items if item.account.name == account_name]

    def is_checked(self) -> bool:
        """Checked only if the transaction flag and every item are checked."""
        return self._checked and all(item.checked for item in self._items)

    def signed_total(self) -> Decimal:
        """Sum of item amounts, debits negative."""
        return sum((item.signed_amount for item in self._items), ZERO)

    def is_valid(self) -> bool:
        """Whether the transaction is a well-formed double entry."""
        count = len(self._items)
        if self._balance:
            if count == 1:
                return True
            if count > 1:
                logger.error("Balance transaction has more than one item: %r", self)
            else:
                logger.error("Balance transaction has no balance item: %r", self)
            return False
        if count < 2:
            logger.error("Transaction has less than 2 items: %r", self)
            return False
        total = self.signed_total()
        if total != ZERO:
            logger.error("Transaction does not balance (%s): %r", total, self)
            return False
        return True

    def is_zero(self) -> bool:
        """Whether every item amount is zero."""
        return all(item.amount == ZERO for item in self._items)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Transaction):
            return NotImplemented
        return self.year == other.year and self._id == other._id

    def __hash__(self) -> int:
        return hash((self.year, self._id))

    def __repr__(self) -> str:
        return (
            f"Transaction(id={self._id}, description={self._description!r}, "
            f"date={self._date}, checked={self._checked}, balance={self._balance}, "
            f"items={len(self._items)})"
        )
