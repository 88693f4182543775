"""Year balance checks run before the ledger is handed to storage."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from ledgerclose.domain.errors import InvalidInputError, InvariantError
from ledgerclose.domain.ledger import Ledger
from ledgerclose.domain.statement import Statement
from ledgerclose.utils.money import ZERO

logger = logging.getLogger(__name__)

NO_YEARS_TO_VALIDATE = "no years to validate"


@dataclass(frozen=True)
class YearBalance:
    """Balance sheet and income statement balances of one fiscal year."""

    year: int
    balance_sheet: Decimal
    income_statement: Decimal

    @property
    def total(self) -> Decimal:
        return self.balance_sheet + self.income_statement

    @property
    def is_balanced(self) -> bool:
        return self.total == ZERO

    @property
    def is_zero(self) -> bool:
        return self.balance_sheet == ZERO and self.income_statement == ZERO


def check_year(ledger: Ledger, year: int) -> YearBalance:
    """Compute both statement balances for a fiscal year."""
    fiscal_year = ledger.require_fiscal_year(year)
    balance_sheet = Statement.balance_sheet(ledger, fiscal_year).get_balance()
    income_statement = Statement.income_statement(ledger, fiscal_year).get_balance()
    logger.debug("Validating %s balance sheet balance: %s", year, balance_sheet)
    logger.debug("Validating %s income statement balance: %s", year, income_statement)
    return YearBalance(fiscal_year.year, balance_sheet, income_statement)


def _years(years: Iterable[int]) -> list[int]:
    years = list(years) if years is not None else []
    if not years:
        raise InvalidInputError(NO_YEARS_TO_VALIDATE)
    return years


def validate_years(ledger: Ledger, years: Iterable[int]) -> bool:
    """Check that balance sheet plus income statement nets to zero in every year.

    Stops at the first year that does not balance.

    Raises:
        InvalidInputError: If no years are given
    """
    for year in _years(years):
        balance = check_year(ledger, year)
        if not balance.is_balanced:
            logger.error(
                "Statements don't balance for year %s: %s vs. %s",
                year,
                balance.balance_sheet,
                balance.income_statement,
            )
            return False
    return True


def require_balanced(ledger: Ledger, years: Iterable[int]) -> None:
    """Raise when any year does not balance.

    Raises:
        InvalidInputError: If no years are given
        InvariantError: Naming the first year that does not balance
    """
    for year in _years(years):
        balance = check_year(ledger, year)
        if not balance.is_balanced:
            raise InvariantError(
                f"Statements don't balance for year {year}: "
                f"balance sheet {balance.balance_sheet}, "
                f"income statement {balance.income_statement}"
            )
