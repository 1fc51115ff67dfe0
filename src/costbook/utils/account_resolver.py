"""Utility for resolving account names to accounts."""

from costbook.domain.account import AccountService
from costbook.domain.entities import Account


def resolve_account(account_service: AccountService, account: str | int) -> Account:
    """Resolve an account name or ID to the account.

    Args:
        account_service: AccountService instance
        account: Account name (str) or ID (int or string representation of int)

    Returns:
        Account entity

    Raises:
        ValueError: If account is not found
    """
    if isinstance(account, int):
        found = account_service.get_account(account)
        if found is None:
            raise ValueError(f"Account ID {account} not found")
        return found

    # A numeric string is an ID unless an account is literally named that way
    by_name = account_service.get_account_by_name(account)
    if by_name is not None:
        return by_name

    try:
        account_id = int(account)
    except (ValueError, TypeError):
        raise ValueError(f"Account '{account}' not found")

    found = account_service.get_account(account_id)
    if found is None:
        raise ValueError(f"Account ID {account_id} not found")
    return found
