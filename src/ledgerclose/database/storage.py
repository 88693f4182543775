"""Validate a loaded ledger, then hand it to a storage service."""

import logging
from typing import Iterable

from ledgerclose.database.base import StorageService
from ledgerclose.domain.capital import CapitalStructure
from ledgerclose.domain.errors import InvalidInputError, required
from ledgerclose.domain.ledger import Ledger
from ledgerclose.domain.validation import validate_years

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """A storage operation failed; the cause is chained."""


class StorageManager:
    """Stores a validated ledger in two ordered steps.

    Entity, capital structure, fiscal years and accounts go first since the
    transactions refer to them; transactions follow in a second commit.
    """

    def __init__(self, service: StorageService):
        if service is None:
            raise InvalidInputError(required("storage service"))
        self.service = service

    def validate(self, ledger: Ledger, years: Iterable[int]) -> bool:
        """Whether every year's balance sheet and income statement net to zero."""
        return validate_years(ledger, years)

    def store(self, entity_name: str, structure: CapitalStructure, ledger: Ledger) -> None:
        """Store the ledger.

        Raises:
            StorageError: If either storage step fails
        """
        try:
            self.service.store_entity(entity_name, structure, ledger)
            self.service.store_transactions(entity_name, ledger)
        except Exception as e:
            raise StorageError(f"exception in fiscal year storage operation: {e}") from e
        logger.info("Stored all fiscal years for %s", entity_name)
