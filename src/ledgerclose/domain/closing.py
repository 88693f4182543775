"""Year-end closing strategies.

Each accounting entity closes its books differently; an updater decides which
closing transactions a year needs and adds them to the ledger.
"""

import logging
from abc import ABC, abstractmethod

from ledgerclose.domain.capital import CapitalStructure
from ledgerclose.domain.errors import InvalidInputError, required
from ledgerclose.domain.fiscal_year import FiscalYear
from ledgerclose.domain.ledger import Ledger
from ledgerclose.domain.transaction import Transaction

logger = logging.getLogger(__name__)


class FiscalYearUpdater(ABC):
    """Adds the closing transactions of one fiscal year to the ledger."""

    @abstractmethod
    def update(
        self, year: FiscalYear, ledger: Ledger, structure: CapitalStructure
    ) -> list[Transaction]:
        """Close the year.

        Each transaction is added to the ledger before the next one is
        computed, since later steps read the balances earlier ones produce.

        Args:
            year: Fiscal year to close
            ledger: Ledger holding the year
            structure: Capital structure of the entity

        Returns:
            The transactions added, in order
        """
        pass


def _add(ledger: Ledger, transaction: Transaction, added: list[Transaction]) -> None:
    ledger.add_transaction(transaction)
    added.append(transaction)


class PartnershipYearUpdater(FiscalYearUpdater):
    """Close income to capital, move distributions to capital, then even out capital."""

    def update(self, year, ledger, structure):
        added: list[Transaction] = []
        _add(ledger, structure.get_income_to_capital_transaction(year, ledger), added)

        distributions = structure.get_distribution_transactions(year, ledger)
        if distributions:
            logger.debug("Adding distribution transactions: %s", distributions)
        for transaction in distributions:
            _add(ledger, transaction, added)

        adjustment = structure.get_capital_adjustment_transaction(year, ledger)
        if adjustment is not None:
            logger.debug("Adding capital adjustment transaction: %r", adjustment)
            _add(ledger, adjustment, added)
        return added


class IncomeOnlyYearUpdater(FiscalYearUpdater):
    """Close income to capital only."""

    def update(self, year, ledger, structure):
        added: list[Transaction] = []
        _add(ledger, structure.get_income_to_capital_transaction(year, ledger), added)
        return added


class NoOpYearUpdater(FiscalYearUpdater):
    """Leave the year as loaded."""

    def update(self, year, ledger, structure):
        return []


UPDATERS = {
    "partnership": PartnershipYearUpdater,
    "income-only": IncomeOnlyYearUpdater,
    "none": NoOpYearUpdater,
}


def get_updater(name: str) -> FiscalYearUpdater:
    """Get a closing strategy by name.

    Raises:
        InvalidInputError: If the name is not a known strategy
    """
    if not name:
        raise InvalidInputError(required("updater name"))
    updater_class = UPDATERS.get(name.lower())
    if updater_class is None:
        raise InvalidInputError(
            f"Unknown updater '{name}'. Valid updaters: {', '.join(sorted(UPDATERS))}"
        )
    return updater_class()
