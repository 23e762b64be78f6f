"""
Data Access Layer (DAL) for the registration service.

This module defines the structural interfaces of the two managed services the
handlers talk to: the keyed record store and the identity provider.
"""

from typing import Any, Dict, List, Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class RecordStore(Protocol):
    """Protocol defining the keyed record store interface."""

    def put(self, item: Mapping[str, Any]) -> None:
        """Write or overwrite an item keyed by its email."""
        ...

    def get_by_key(self, email: str) -> Optional[Dict[str, Any]]:
        """Fetch one item by email, None when absent."""
        ...

    def get_all(self) -> List[Dict[str, Any]]:
        """Return every item in the store."""
        ...


@runtime_checkable
class IdentityProvider(Protocol):
    """Protocol defining the identity provider interface."""

    def create_user(
        self,
        user_pool_id: str,
        username: str,
        attributes: Mapping[str, str],
        suppress_notification: bool = True,
    ) -> Optional[Dict[str, Any]]:
        """Create an account and return the created user descriptor."""
        ...

    def set_permanent_password(self, user_pool_id: str, username: str, password: str) -> None:
        """Assign a permanent password to an existing account."""
        ...


__all__ = [
    'RecordStore',
    'IdentityProvider',
]
