"""Loading pipeline: build each fiscal year, close it, validate, then store."""

import logging
from dataclasses import dataclass
from typing import Optional

from ledgerclose.domain.builder import Builder
from ledgerclose.domain.closing import get_updater
from ledgerclose.domain.errors import InvalidInputError, InvariantError, required
from ledgerclose.domain.ledger import Ledger
from ledgerclose.domain.reports import StatementWriter
from ledgerclose.domain.validation import check_year

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoaderSettings:
    """Settings for one load of an accounting entity."""

    entity_name: str
    start_year: int
    end_year: int
    updater: str = "none"
    output_dir: Optional[str] = None

    def validate(self) -> None:
        """Raise InvalidInputError for an unusable configuration."""
        if not self.entity_name:
            raise InvalidInputError(required("entity name"))
        if self.start_year is None or self.end_year is None:
            raise InvalidInputError("Null start or end year in settings")
        if self.start_year > self.end_year:
            raise InvalidInputError(
                f"Start year greater than end year in settings: "
                f"{self.start_year}, {self.end_year}"
            )

    @property
    def years(self) -> range:
        return range(self.start_year, self.end_year + 1)


class DataLoader:
    """Directs a Builder through the years of a load."""

    def construct(self, settings: LoaderSettings, builder: Builder, storage_manager=None) -> Ledger:
        """Build, close and validate every year, then store the result.

        Args:
            settings: Entity and year range to load
            builder: Reader of the legacy data
            storage_manager: Validates and stores the ledger; nothing is
                stored when None

        Returns:
            The loaded ledger

        Raises:
            InvalidInputError: If the settings are invalid
            InvariantError: If a year does not balance; nothing is stored
        """
        if settings is None:
            raise InvalidInputError(required("loader settings"))
        if builder is None:
            raise InvalidInputError(required("builder"))
        settings.validate()
        updater = get_updater(settings.updater)
        writer = StatementWriter(settings.output_dir) if settings.output_dir else None

        builder.build_capital_structure()
        for year in settings.years:
            logger.info("Loading fiscal year %s for %s", year, settings.entity_name)
            builder.build_fiscal_year(year)
            builder.build_account_groups()
            builder.build_account_map()
            builder.build_accounts()
            if year == settings.start_year:
                builder.build_balances()
            builder.build_transactions()
            builder.build_reimbursements()

            added = updater.update(builder.fiscal_year, builder.ledger, builder.capital_structure)
            if added:
                logger.info("Added %s closing transactions to %s", len(added), year)
            self.report_year(builder.ledger, year)
            if writer is not None:
                writer.write_year(builder.ledger, year)

        ledger = builder.ledger
        years = list(settings.years)
        if storage_manager is None:
            return ledger
        if not storage_manager.validate(ledger, years):
            raise InvariantError("Fatal error: statements don't balance")
        storage_manager.store(settings.entity_name, builder.capital_structure, ledger)
        return ledger

    def report_year(self, ledger: Ledger, year: int) -> None:
        """Log whether the year's statements match and are zero."""
        balance = check_year(ledger, year)
        if not balance.is_balanced:
            logger.warning(
                "balances do not match for %s: $%s vs. $%s",
                year,
                balance.balance_sheet,
                balance.income_statement,
            )
        elif not balance.is_zero:
            logger.warning(
                "balances are not zero for %s: $%s vs. $%s",
                year,
                balance.balance_sheet,
                balance.income_statement,
            )
        else:
            logger.info("balances are zero and match for %s", year)
