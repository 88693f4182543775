"""Domain layer for ledgerclose application."""

from ledgerclose.domain.capital import CapitalEntity, CapitalStructure
from ledgerclose.domain.distributor import AccountCollectionDistributor
from ledgerclose.domain.entities import (
    Account,
    AccountGroup,
    AccountType,
    FiscalYearAccount,
    StatementType,
)
from ledgerclose.domain.fiscal_year import FiscalYear
from ledgerclose.domain.ledger import Ledger
from ledgerclose.domain.loader import DataLoader, LoaderSettings
from ledgerclose.domain.statement import Rollup, Statement
from ledgerclose.domain.transaction import Item, Reimbursement, Transaction

__all__ = [
    "Account",
    "AccountCollectionDistributor",
    "AccountGroup",
    "AccountType",
    "CapitalEntity",
    "CapitalStructure",
    "DataLoader",
    "FiscalYear",
    "FiscalYearAccount",
    "Item",
    "Ledger",
    "LoaderSettings",
    "Reimbursement",
    "Rollup",
    "Statement",
    "StatementType",
    "Transaction",
]
