"""Penny-accurate allocation of an amount across a set of accounts.

All arithmetic is on integer cents. Amounts enter and leave as 2-place
Decimals; conversion happens only in add_balance, the constructor and the
getters.
"""

import logging
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping

from ledgerclose.domain.entities import Account
from ledgerclose.domain.errors import (
    INVALID_COLLECTION,
    NO_BALANCES,
    InvalidInputError,
    InvalidStateError,
    account_not_added,
    required,
)
from ledgerclose.utils.money import from_cents, to_cents

logger = logging.getLogger(__name__)

PENNY = 1


def _truncating_divmod(amount: int, count: int) -> tuple[int, int]:
    """Divide rounding toward zero; the remainder takes the sign of amount."""
    quotient = abs(amount) // count
    if amount < 0:
        quotient = -quotient
    return quotient, amount - quotient * count


class AccountCollectionDistributor:
    """Split an amount across accounts so their balances end up equal or a cent apart.

    Typical use for a closing split::

        distributor = AccountCollectionDistributor(net_income)
        for account in capital_accounts:
            distributor.add_balance(account, balance_of(account))
        distributor.distribute_amount()
        distributor.distribute_remainder()
        amounts = distributor.item_amounts

    With an amount of zero, equalize() instead moves cents from the largest
    to the smallest balance until the balances are within a cent.
    """

    def __init__(self, amount: Decimal):
        if amount is None:
            raise InvalidInputError(required("amount"))
        self._amount = to_cents(amount)
        self._accounts: dict[str, Account] = {}
        self._balances: dict[str, int] = {}
        self._item_amounts: dict[str, int] = {}
        self._anchor: str | None = None

    @property
    def amount(self) -> int:
        """Amount to distribute, in cents."""
        return self._amount

    @property
    def balances(self) -> Mapping[str, int]:
        """Read-only snapshot of the balances in cents, keyed by account name."""
        return MappingProxyType(dict(self._balances))

    @property
    def item_amounts(self) -> Mapping[str, int]:
        """Read-only snapshot of the item amounts in cents, keyed by account name."""
        return MappingProxyType(dict(self._item_amounts))

    @property
    def accounts(self) -> tuple[Account, ...]:
        """Accounts in the order they were first added."""
        return tuple(self._accounts.values())

    def add_balance(self, account: Account, balance: Decimal) -> None:
        """Register an account with its current balance.

        Adding an account again replaces its balance and resets its item
        amount. The first account ever added receives the remainder cent
        when balances are equal.

        Raises:
            InvalidInputError: If the account or balance is missing
        """
        if account is None:
            raise InvalidInputError(required("account"))
        if balance is None:
            raise InvalidInputError(required("balance"))
        self._accounts[account.name] = account
        self._balances[account.name] = to_cents(balance)
        self._item_amounts[account.name] = 0
        if self._anchor is None:
            self._anchor = account.name

    def _require_added(self, account: Account) -> str:
        if account is None:
            raise InvalidInputError(required("account"))
        if account.name not in self._balances:
            raise InvalidInputError(account_not_added(account.name))
        return account.name

    def get_balance(self, account: Account) -> Decimal:
        return from_cents(self._balances[self._require_added(account)])

    def get_item_amount(self, account: Account) -> Decimal:
        return from_cents(self._item_amounts[self._require_added(account)])

    def is_valid(self) -> bool:
        """Whether there are balances and no two differ by more than a cent."""
        if not self._balances:
            logger.warning("No balances added to distributor")
            return False
        low = min(self._balances.values())
        high = max(self._balances.values())
        if high - low > PENNY:
            logger.warning(
                "Imbalance between capital accounts %s and %s: %s vs. %s",
                self._min_name(),
                self._max_name(),
                low,
                high,
            )
            return False
        return True

    def equal(self) -> bool:
        """Whether every balance is identical."""
        return len(set(self._balances.values())) <= 1

    def _max_name(self) -> str:
        if not self._balances:
            raise InvalidStateError(NO_BALANCES)
        max_name = None
        for name, balance in self._balances.items():
            if max_name is None or balance > self._balances[max_name]:
                max_name = name
        return max_name

    def _min_name(self) -> str:
        if not self._balances:
            raise InvalidStateError(NO_BALANCES)
        min_name = None
        for name, balance in self._balances.items():
            if min_name is None or balance < self._balances[min_name]:
                min_name = name
        return min_name

    def get_maximum_balance_account(self) -> Account:
        """Account with the largest balance; the first added wins ties.

        Raises:
            InvalidStateError: If no balances were added
        """
        return self._accounts[self._max_name()]

    def get_minimum_balance_account(self) -> Account:
        """Account with the smallest balance; the first added wins ties.

        Raises:
            InvalidStateError: If no balances were added
        """
        return self._accounts[self._min_name()]

    def _move(self, name: str, cents: int) -> None:
        self._balances[name] += cents
        self._item_amounts[name] += cents

    def distribute_amount(self) -> None:
        """Add the truncated equal share of the amount to every account.

        Raises:
            InvalidStateError: If the balances are not valid
        """
        if not self.is_valid():
            raise InvalidStateError(INVALID_COLLECTION)
        share, _ = _truncating_divmod(self._amount, len(self._balances))
        for name in self._balances:
            self._move(name, share)
        logger.debug("Distributed %s cents to each of %s accounts", share, len(self._balances))

    def distribute_remainder(self) -> None:
        """Hand out what distribute_amount left over, one cent at a time.

        While the balances are all equal, each cent goes to the first account
        added. Otherwise a positive remainder goes to the smallest balance and
        a negative remainder comes from the largest.

        Raises:
            InvalidStateError: If there are no accounts, or there is a
                remainder and the balances are not valid
        """
        if not self._balances:
            raise InvalidStateError(INVALID_COLLECTION)
        _, remainder = _truncating_divmod(self._amount, len(self._balances))
        if remainder == 0:
            return
        if not self.is_valid():
            raise InvalidStateError(INVALID_COLLECTION)

        penny = PENNY if remainder > 0 else -PENNY
        while remainder != 0:
            if self.equal():
                name = self._anchor
            elif remainder > 0:
                name = self._min_name()
            else:
                name = self._max_name()
            self._move(name, penny)
            remainder -= penny
            logger.debug("Distributed remainder cent %s to %s", penny, name)

    def equalize(self) -> bool:
        """Move cents from the largest to the smallest balance until within a cent.

        Returns:
            True if any cent moved
        """
        if not self._balances:
            return False
        moved = False
        while True:
            high = self._max_name()
            low = self._min_name()
            if self._balances[high] - self._balances[low] <= PENNY:
                break
            self._move(high, -PENNY)
            self._move(low, PENNY)
            moved = True
        if moved:
            logger.debug("Equalized balances: %s", self._balances)
        return moved

    def __repr__(self) -> str:
        return (
            f"AccountCollectionDistributor(amount={self._amount}, "
            f"balances={self._balances}, item_amounts={self._item_amounts})"
        )
