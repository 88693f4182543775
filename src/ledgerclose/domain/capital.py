"""Capital structure of an accounting entity and its year-end closing transactions."""

import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from ledgerclose.domain.distributor import AccountCollectionDistributor
from ledgerclose.domain.entities import Account
from ledgerclose.domain.errors import (
    NO_ENTITIES,
    OWNERSHIP_NOT_WHOLE,
    InvalidInputError,
    InvalidStateError,
    InvariantError,
    required,
)
from ledgerclose.domain.fiscal_year import FiscalYear
from ledgerclose.domain.ledger import Ledger
from ledgerclose.domain.statement import Statement
from ledgerclose.domain.transaction import Transaction
from ledgerclose.utils.money import ZERO

logger = logging.getLogger(__name__)

OWNERSHIP_PLACES = Decimal("0.001")
WHOLE = Decimal("1.000")

INCOME_SUMMARY_DESCRIPTION = "Summarize income for {year}"
DISTRIBUTION_DESCRIPTION = "Transfer distribution to capital for {account} for {year}"
ADJUST_DESCRIPTION = "Adjust capital accounts to ownership"


def _ownership(value) -> Decimal:
    if value is None:
        return WHOLE
    return Decimal(str(value)).quantize(OWNERSHIP_PLACES, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class CapitalEntity:
    """An owner of the accounting entity.

    Attributes:
        name: Owner name
        capital_account_name: Equity account holding the owner's capital
        distribution_account_name: Contra-equity account for draws, if any
        ownership: Ownership fraction, three decimal places
    """

    name: str
    capital_account_name: str
    distribution_account_name: Optional[str] = None
    ownership: Decimal = field(default=WHOLE)

    def __post_init__(self):
        if not self.name:
            raise InvalidInputError("no capital entity name but one is required")
        if not self.capital_account_name:
            raise InvalidInputError("no capital account name but one is required")
        object.__setattr__(self, "ownership", _ownership(self.ownership))


class CapitalStructure:
    """Owners of an entity plus the income summary account used at year end."""

    def __init__(self, income_summary_account_name: str):
        if not income_summary_account_name:
            raise InvalidInputError(required("income summary account name"))
        self._income_summary_account_name = income_summary_account_name
        self._entities: list[CapitalEntity] = []

    @property
    def income_summary_account_name(self) -> str:
        return self._income_summary_account_name

    @property
    def entities(self) -> tuple[CapitalEntity, ...]:
        return tuple(self._entities)

    def add_entities(self, entities: Iterable[CapitalEntity]) -> None:
        """Add owners; the ownership of all owners must then sum to exactly 1.

        Raises:
            InvalidInputError: If the ownership does not sum to 1; the entities
                are not added
        """
        if entities is None:
            raise InvalidInputError(required("capital entities"))
        previous = list(self._entities)
        self._entities.extend(entities)
        try:
            valid = self.is_valid()
        except InvalidStateError:
            valid = False
        if not valid:
            self._entities = previous
            raise InvalidInputError(OWNERSHIP_NOT_WHOLE)

    def is_valid(self) -> bool:
        """Whether the ownership fractions sum to exactly 1.

        Raises:
            InvalidStateError: If there are no entities
        """
        if not self._entities:
            raise InvalidStateError(NO_ENTITIES)
        total = sum((entity.ownership for entity in self._entities), Decimal("0.000"))
        return total == WHOLE

    def capital_accounts(self, ledger: Ledger) -> list[Account]:
        return [ledger.require_account(entity.capital_account_name) for entity in self._entities]

    def get_income_to_capital_transaction(self, year: FiscalYear, ledger: Ledger) -> Transaction:
        """Build the transaction closing the year's net income into capital.

        The income summary account takes the absolute net income, debited for
        a gain and credited for a loss. Each capital account takes its share
        with the opposite polarity.

        Raises:
            NotFoundError: If the income summary or a capital account is missing
            InvalidStateError: If the capital balances differ by more than a cent
            InvariantError: If the resulting transaction does not balance
        """
        capital_accounts = self.capital_accounts(ledger)
        income_summary = ledger.require_account(self._income_summary_account_name)

        balance_sheet = Statement.balance_sheet(ledger, year)
        net_income = Statement.income_statement(ledger, year).get_balance()

        distributor = AccountCollectionDistributor(net_income)
        for account in capital_accounts:
            distributor.add_balance(account, balance_sheet.get_account_balance(account))
        distributor.distribute_amount()
        distributor.distribute_remainder()

        debit = net_income >= ZERO
        transaction = Transaction(
            year.next_id(),
            INCOME_SUMMARY_DESCRIPTION.format(year=year.year),
            year.end,
            year=year.year,
        )
        transaction.add_item(abs(net_income), income_summary, debit)
        for account in capital_accounts:
            transaction.add_item(abs(distributor.get_item_amount(account)), account, not debit)

        if not transaction.is_valid():
            raise InvariantError(f"invalid income summary transaction {transaction!r}")
        for item in transaction.items:
            logger.debug("added capital transfer item %r", item)
        return transaction

    def get_distribution_transactions(self, year: FiscalYear, ledger: Ledger) -> list[Transaction]:
        """Build one transaction per owner moving the distribution balance to capital.

        Owners without a distribution account are skipped.
        """
        balance_sheet = Statement.balance_sheet(ledger, year)
        transactions = []
        for entity in self._entities:
            if not entity.distribution_account_name:
                continue
            capital_account = ledger.require_account(entity.capital_account_name)
            distribution_account = ledger.require_account(entity.distribution_account_name)

            balance = balance_sheet.get_account_balance(distribution_account)
            # Distribution is contra-equity: a debit balance reads as negative.
            debit = balance < ZERO
            transaction = Transaction(
                year.next_id(),
                DISTRIBUTION_DESCRIPTION.format(account=distribution_account.name, year=year.year),
                year.end,
                year=year.year,
            )
            transaction.add_item(abs(balance), distribution_account, not debit)
            transaction.add_item(abs(balance), capital_account, debit)
            for item in transaction.items:
                logger.debug("added distribution transfer item %r", item)
            transactions.append(transaction)
        return transactions

    def get_capital_adjustment_transaction(
        self, year: FiscalYear, ledger: Ledger
    ) -> Optional[Transaction]:
        """Build a transaction evening out drift between the capital accounts.

        Returns:
            The adjustment transaction, or None when the balances are already
            within a cent of each other
        """
        balance_sheet = Statement.balance_sheet(ledger, year)
        distributor = AccountCollectionDistributor(ZERO)
        capital_accounts = self.capital_accounts(ledger)
        for account in capital_accounts:
            distributor.add_balance(account, balance_sheet.get_account_balance(account))

        if not distributor.equalize():
            return None

        transaction = Transaction(year.next_id(), ADJUST_DESCRIPTION, year.end, year=year.year)
        for account in capital_accounts:
            amount = distributor.get_item_amount(account)
            if amount != ZERO:
                transaction.add_item(abs(amount), account, amount < ZERO)
        logger.info("Adjusted capital accounts for %s: %s", year.year, distributor.item_amounts)
        return transaction

    def __repr__(self) -> str:
        return (
            f"CapitalStructure(income_summary_account_name="
            f"{self._income_summary_account_name!r}, entities={self._entities})"
        )
