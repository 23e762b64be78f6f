"""
Record domain model shared by the orders and users collections.

A record is the ``{name, email, date}`` tuple persisted for every confirmed
user and every created order. ``email`` is the collection key.
"""

from datetime import datetime, timezone
from typing import Annotated, Any, Mapping, Optional

from pydantic import BaseModel, Field


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """Return an ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class Record(BaseModel):
    """Core Record domain model."""

    name: Annotated[str, Field(
        description='Display name of the user',
        examples=['John Doe']
    )]

    email: Annotated[str, Field(
        min_length=1,
        description='Email address, used as the collection key',
        examples=['john.doe@example.com']
    )]

    date: Annotated[str, Field(
        description='ISO timestamp when the record was created',
        examples=['2024-01-15T10:30:00.000Z']
    )]

    @classmethod
    def from_attributes(cls, attributes: Mapping[str, Any]) -> 'Record':
        """
        Build a new record from identity attributes, stamped with the current time.

        Args:
            attributes: Mapping carrying at least ``name`` and ``email``

        Returns:
            New Record instance

        Raises:
            pydantic.ValidationError: If ``name`` or ``email`` is missing
        """
        return cls(
            name=attributes.get('name'),
            email=attributes.get('email'),
            date=utc_timestamp(),
        )
