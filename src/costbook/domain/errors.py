"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class AuthorizationError(DomainError):
    """Target entity (or selected category) lies outside the actor's visible accounts.

    Deliberately not a ValidationError so callers can report it separately.
    """


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def entity_not_found(kind: str, entity_id: int) -> str:
    """Return message for a missing entity of the given kind."""
    return f"{kind.capitalize()} {entity_id} not found"


def not_visible(kind: str, entity_id: int) -> str:
    """Return message for an entity owned outside the actor's account group."""
    return f"{kind.capitalize()} {entity_id} is not accessible to this account"


def category_not_allowed(category_id: int, kind: str) -> str:
    """Return message for a category outside the actor's allowed set."""
    return f"Category {category_id} is not a valid {kind} category for this account"


def account_delete_blocked(account_id: int, child_count: int, record_count: int) -> str:
    """Return message when account still has children or owned records."""
    parts = []
    if child_count > 0:
        parts.append(f"{child_count} child account{'s' if child_count != 1 else ''}")
    if record_count > 0:
        parts.append(f"{record_count} record{'s' if record_count != 1 else ''}")
    return (
        f"Cannot delete account {account_id}: it has {', '.join(parts)}. "
        "Please reassign or delete them first."
    )
