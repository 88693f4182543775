"""Builder interface implemented by readers of legacy accounting data."""

from abc import ABC, abstractmethod
from typing import Optional

from ledgerclose.domain.capital import CapitalStructure
from ledgerclose.domain.entities import Account
from ledgerclose.domain.fiscal_year import FiscalYear
from ledgerclose.domain.ledger import Ledger


class Builder(ABC):
    """Builds a ledger one fiscal year at a time.

    The loader calls the build steps of a year in the order they are declared
    here; each step may rely on the ones before it.
    """

    @property
    @abstractmethod
    def ledger(self) -> Ledger:
        """Ledger being built."""
        pass

    @property
    @abstractmethod
    def fiscal_year(self) -> Optional[FiscalYear]:
        """Fiscal year currently being built."""
        pass

    @property
    @abstractmethod
    def capital_structure(self) -> Optional[CapitalStructure]:
        """Capital structure built by build_capital_structure."""
        pass

    @abstractmethod
    def build_capital_structure(self) -> None:
        pass

    @abstractmethod
    def build_fiscal_year(self, year: int) -> None:
        """Start a new fiscal year and make it the current one."""
        pass

    @abstractmethod
    def build_account_groups(self) -> None:
        pass

    @abstractmethod
    def build_account_map(self) -> None:
        """Read the mapping from legacy account numbers to account names."""
        pass

    @abstractmethod
    def build_accounts(self) -> None:
        """Add the accounts and activate them in the current year."""
        pass

    @abstractmethod
    def build_balances(self) -> None:
        """Add opening balances; only called for the first year loaded."""
        pass

    @abstractmethod
    def build_transactions(self) -> None:
        pass

    @abstractmethod
    def build_reimbursements(self) -> None:
        pass

    def get_account_by_name(self, name: str) -> Optional[Account]:
        return self.ledger.get_account_by_name(name)
