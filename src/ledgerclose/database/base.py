"""Abstract storage interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from ledgerclose.domain.capital import CapitalStructure
from ledgerclose.domain.fiscal_year import FiscalYear
from ledgerclose.domain.ledger import Ledger
from ledgerclose.domain.transaction import Transaction


class StorageService(ABC):
    """Abstract storage interface for loaded ledgers."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    # Write operations
    @abstractmethod
    def store_entity(self, entity_name: str, structure: CapitalStructure, ledger: Ledger) -> None:
        """Store the entity, its capital structure, fiscal years, groups and accounts."""
        pass

    @abstractmethod
    def store_transactions(self, entity_name: str, ledger: Ledger) -> None:
        """Store every transaction of the ledger with its items and reimbursements."""
        pass

    # Read operations
    @abstractmethod
    def list_entities(self) -> list[str]:
        """List stored entity names."""
        pass

    @abstractmethod
    def list_fiscal_years(self, entity_name: str) -> list[FiscalYear]:
        """List the stored fiscal years of an entity, without transactions."""
        pass

    @abstractmethod
    def load_capital_structure(self, entity_name: str) -> CapitalStructure:
        """Load the capital structure of an entity."""
        pass

    @abstractmethod
    def load_ledger(self, entity_name: str) -> Ledger:
        """Load the full ledger of an entity."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        entity_name: str,
        year: int,
        account_name: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> list[Transaction]:
        """List stored transactions of a fiscal year with optional filters."""
        pass
