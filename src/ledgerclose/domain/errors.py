"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for callers that only catch ValueError.
    """


class InvalidInputError(DomainError):
    """A required argument is missing or malformed."""


class InvalidStateError(DomainError):
    """An operation was invoked while its precondition does not hold."""


class InvalidAmountError(DomainError):
    """A monetary amount breaks a domain rule (e.g. over-reimbursement)."""


class InvalidOperationError(DomainError):
    """The operation is not allowed for this object (e.g. reimbursing a non-receivable)."""


class InvariantError(DomainError):
    """A constructed object violates a ledger invariant; signals a logic defect."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def required(what: str) -> str:
    """Return message for a missing required argument."""
    return f"{what} is required but is null"


def account_not_found(name: str) -> str:
    """Return message for a missing account."""
    return f"Account '{name}' not found"


def account_not_added(name: str) -> str:
    """Return message for an account unknown to a distributor."""
    return f"account not added: {name}"


def duplicate_account(name: str) -> str:
    """Return message for a duplicate account name."""
    return f"Account with name '{name}' already exists"


def duplicate_transaction(transaction_id: int, year: int) -> str:
    """Return message for a duplicate transaction id within a fiscal year."""
    return f"Transaction {transaction_id} already exists in fiscal year {year}"


def no_fiscal_year_for_date(date) -> str:
    """Return message when no fiscal year contains a transaction date."""
    return f"No fiscal year contains date {date}"


INVALID_COLLECTION = (
    "invalid balances, check whether balances were added to distributor and that "
    "balance amounts are equal or at most one penny different"
)
NO_BALANCES = "no balances"
OWNERSHIP_NOT_WHOLE = "ownership across entities does not sum to 100%"
NO_ENTITIES = "no entities in capital structure"
