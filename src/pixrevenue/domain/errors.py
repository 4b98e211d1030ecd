"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as an invalid status transition."""


class SettingsWriteError(DomainError):
    """A settings value could not be persisted."""


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def transaction_already_paid(transaction_id: int) -> str:
    """Return message when a paid transaction is paid again."""
    return f"Transaction {transaction_id} is already paid"


def unknown_timezone(name: str) -> str:
    """Return message for a timezone name that cannot be resolved."""
    return f"Unknown timezone '{name}'"


def negative_goal(goal) -> str:
    """Return message for a negative monthly goal."""
    return f"Monthly goal must not be negative (got {goal})"


def invalid_date_range(start, end) -> str:
    """Return message when a range starts after it ends."""
    return f"Start date {start} is after end date {end}"


def settings_write_failed(key: str, reason: object) -> str:
    """Return message for a failed settings write."""
    return f"Could not save setting '{key}': {reason}"
