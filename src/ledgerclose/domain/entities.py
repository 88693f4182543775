"""Domain model entities for ledgerclose.

These are plain data classes for the reference data of the ledger: accounts,
account groups and the per-year links that classify and order them. Accounts
and groups are identified by name; relationships are expressed as name
references so the object graph stays acyclic.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ledgerclose.domain.errors import InvalidInputError, required


class AccountType(Enum):
    """Account category, in statement order."""

    ASSETS = "Assets"
    LIABILITIES = "Liabilities"
    EQUITY = "Equity"
    INCOME = "Income"
    EXPENSES = "Expenses"

    @property
    def order(self) -> int:
        return _TYPE_ORDER[self]

    @property
    def is_balance_sheet(self) -> bool:
        return self in (AccountType.ASSETS, AccountType.LIABILITIES, AccountType.EQUITY)

    @property
    def is_income_statement(self) -> bool:
        return self in (AccountType.INCOME, AccountType.EXPENSES)

    @classmethod
    def from_database(cls, value: str) -> "AccountType":
        """Get the account type for its database representation.

        Raises:
            InvalidInputError: If the value is not a known account type
        """
        for member in cls:
            if member.value == value:
                return member
        raise InvalidInputError(f"Unknown account type: {value}")

    def __str__(self) -> str:
        return self.value


_TYPE_ORDER = {member: index for index, member in enumerate(AccountType)}


class StatementType(Enum):
    """Kind of financial statement."""

    BALANCE_SHEET = "Balance Sheet"
    INCOME_STATEMENT = "Income Statement"

    def includes(self, account_type: AccountType) -> bool:
        """Whether accounts of this type roll up into the statement."""
        if self is StatementType.BALANCE_SHEET:
            return account_type.is_balance_sheet
        return account_type.is_income_statement


@dataclass(frozen=True)
class Account:
    """Ledger account, identified by its globally unique name."""

    name: str
    description: str = field(compare=False)
    account_type: AccountType = field(compare=False)
    debit_default: bool = field(compare=False)
    receivable: bool = field(default=False, compare=False)
    group_name: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        if not self.name:
            raise InvalidInputError(required("account name"))
        if self.description is None:
            raise InvalidInputError(required("account description"))
        if not isinstance(self.account_type, AccountType):
            raise InvalidInputError(required("account type"))
        if self.debit_default is None:
            raise InvalidInputError(required("debit default"))
        if self.receivable is None:
            object.__setattr__(self, "receivable", False)


@dataclass(frozen=True)
class AccountGroup:
    """Named group of accounts (e.g. "Cash", "Accounts Receivable")."""

    name: str

    def __post_init__(self):
        if not self.name:
            raise InvalidInputError(required("account group name"))


@dataclass(frozen=True)
class FiscalYearAccount:
    """Link classifying and ordering an account within one fiscal year."""

    year: int
    account_name: str
    account_type: AccountType
    group_name: str
    group_order: int
    account_order: int

    @property
    def sort_key(self) -> tuple[int, int, int, int]:
        """Order by year, account type, group order, then account order."""
        return (self.year, self.account_type.order, self.group_order, self.account_order)
