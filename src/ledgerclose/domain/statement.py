"""Balance sheet and income statement computation.

A Statement is computed on demand from the ledger: one Rollup per account
active in the fiscal year, summed over the categories the statement covers.
Nothing here is cached, so a statement always reflects the transactions
currently in the ledger.
"""

import logging
from decimal import Decimal
from typing import Optional

from ledgerclose.domain.entities import Account, FiscalYearAccount, StatementType
from ledgerclose.domain.errors import InvalidInputError, NotFoundError, required
from ledgerclose.domain.fiscal_year import FiscalYear
from ledgerclose.domain.ledger import Ledger
from ledgerclose.domain.transaction import Item, Transaction
from ledgerclose.utils.date_parser import format_legacy_date
from ledgerclose.utils.money import ZERO, format_amount

logger = logging.getLogger(__name__)

DELIMITER = "\t"
LINE_DELIMITER = "\n"


class Rollup:
    """Net sum of the items against one account for a statement's year."""

    def __init__(self, statement: "Statement", account: Account):
        if statement is None or account is None:
            raise InvalidInputError("Rollup parameters are required but one is null")
        link = statement.fiscal_year.link_for(account.name)
        if link is None:
            raise NotFoundError(
                f"Account '{account.name}' is not active in fiscal year {statement.year}"
            )
        self._statement = statement
        self._account = account
        self._link = link

    @property
    def account(self) -> Account:
        return self._account

    @property
    def link(self) -> FiscalYearAccount:
        return self._link

    def postings(self) -> list[tuple[Transaction, Item]]:
        """Postings counted by this rollup, sorted by date then transaction id.

        Balance sheet accounts carry every posting dated on or before the end
        of the year; income statement accounts only postings inside the year.
        """
        fiscal_year = self._statement.fiscal_year
        if self._link.account_type.is_balance_sheet:
            selected = [
                (transaction, item)
                for transaction, item in self._statement.ledger.postings(self._account.name)
                if fiscal_year.contains_or_precedes(transaction.date)
            ]
        else:
            selected = [
                (transaction, item)
                for transaction in fiscal_year.transactions_for(self._account.name)
                if fiscal_year.contains(transaction.date)
                for item in transaction.items_for(self._account.name)
            ]
        selected.sort(key=lambda posting: (posting[0].date, posting[0].id))
        return selected

    def total(self) -> Decimal:
        """Sum of the items, credits positive and debits negative."""
        total = ZERO
        for _, item in self.postings():
            total += item.signed_amount
        logger.debug(
            "%s total for fiscal year %s: %s",
            self._account.name,
            self._statement.year,
            total,
        )
        return total

    def _prefix(self) -> str:
        return DELIMITER.join(
            (str(self._link.account_type), self._link.group_name, self._account.name)
        )

    def to_data(self) -> str:
        """Tab-delimited line: account type, group, account name, total."""
        return DELIMITER.join((self._prefix(), format_amount(self.total())))

    def to_detail_data(self) -> str:
        """One tab-delimited line per posting, without a trailing newline."""
        prefix = self._prefix()
        lines = []
        for transaction, item in self.postings():
            lines.append(
                DELIMITER.join(
                    (
                        prefix,
                        str(transaction.id),
                        format_legacy_date(transaction.date),
                        format_amount(item.signed_amount),
                    )
                )
            )
        return LINE_DELIMITER.join(lines)

    def __repr__(self) -> str:
        return f"Rollup(year={self._statement.year}, account={self._account.name!r})"


class Statement:
    """Balance sheet or income statement for one fiscal year."""

    def __init__(
        self,
        ledger: Ledger,
        year: int,
        statement_type: StatementType,
        name: Optional[str] = None,
    ):
        if ledger is None:
            raise InvalidInputError(required("ledger"))
        if year is None:
            raise InvalidInputError(required("statement year"))
        if not isinstance(statement_type, StatementType):
            raise InvalidInputError(required("statement type"))
        fiscal_year = year if isinstance(year, FiscalYear) else ledger.require_fiscal_year(year)
        self._ledger = ledger
        self._fiscal_year = fiscal_year
        self._type = statement_type
        self._name = name or statement_type.value

    @classmethod
    def balance_sheet(cls, ledger: Ledger, year) -> "Statement":
        return cls(ledger, year, StatementType.BALANCE_SHEET)

    @classmethod
    def income_statement(cls, ledger: Ledger, year) -> "Statement":
        return cls(ledger, year, StatementType.INCOME_STATEMENT)

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    @property
    def fiscal_year(self) -> FiscalYear:
        return self._fiscal_year

    @property
    def year(self) -> int:
        return self._fiscal_year.year

    @property
    def statement_type(self) -> StatementType:
        return self._type

    @property
    def name(self) -> str:
        return self._name

    def rollups(self) -> list[Rollup]:
        """Rollups of the accounts this statement covers, in link order."""
        rollups = []
        for link in self._fiscal_year.accounts:
            if self._type.includes(link.account_type):
                account = self._ledger.require_account(link.account_name)
                rollups.append(Rollup(self, account))
        return rollups

    def get_balance(self) -> Decimal:
        """Sum of the rollup totals, credits positive."""
        balance = ZERO
        for rollup in self.rollups():
            total = rollup.total()
            balance += total
            logger.debug(
                "%s account %s: %s, balance = %s",
                self._name,
                rollup.account.name,
                total,
                balance,
            )
        return balance

    def get_account_balance(self, account: Account) -> Decimal:
        """Rollup total of one account; 0.00 when it is not active in the year."""
        if account is None:
            raise InvalidInputError(required("account"))
        if not self._fiscal_year.has_account(account.name):
            return ZERO
        return Rollup(self, account).total()

    def to_data(self) -> str:
        return LINE_DELIMITER.join(rollup.to_data() for rollup in self.rollups())

    def to_detail_data(self) -> str:
        """Detail lines of every rollup; accounts without postings add no lines."""
        blocks = [rollup.to_detail_data() for rollup in self.rollups()]
        return LINE_DELIMITER.join(block for block in blocks if block)

    def __repr__(self) -> str:
        return f"Statement(year={self.year}, name={self._name!r}, type={self._type.name})"
