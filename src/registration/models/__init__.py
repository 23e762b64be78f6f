"""
Service Models Package

This package contains the Pydantic models used throughout the service:
the Record domain model, request input models and response output models.
"""

from .input import SignUpRequest
from .output import MessageOutput
from .record import Record, utc_timestamp

__all__ = [
    # Input models
    "SignUpRequest",

    # Output models
    "MessageOutput",

    # Domain models
    "Record",
    "utc_timestamp",
]
