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
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


def category_not_found(name: str) -> str:
    """Return message for missing category by name."""
    return f"Category '{name}' not found"


def category_exists(name: str) -> str:
    """Return message for a case-insensitive category name clash."""
    return f"Category '{name}' already exists"


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def rule_not_found(rule_id: int) -> str:
    """Return message for missing rule."""
    return f"Rule {rule_id} not found"


def profile_not_found(profile: int | str) -> str:
    """Return message for missing profile by ID or name."""
    if isinstance(profile, int):
        return f"Profile ID {profile} not found"
    return f"Profile '{profile}' not found"


def adjustment_not_found(adjustment_id: int) -> str:
    """Return message for missing balance sheet adjustment."""
    return f"Adjustment {adjustment_id} not found"


def negative_amount(amount: object) -> str:
    """Return message for a signed amount where a magnitude is required."""
    return (
        f"Amount must be non-negative (got {amount}); "
        "use the transaction type to record direction"
    )


def duplicate_rule(keyword: str) -> str:
    """Return message for a rule keyword defined twice."""
    return f"A rule for keyword '{keyword}' already exists"
