"""
Output models for API responses.
"""

from typing import Annotated

from pydantic import BaseModel, Field


class MessageOutput(BaseModel):
    """Plain message body returned by sign-up and by every error response."""

    message: Annotated[str, Field(
        description='Human readable outcome of the request',
        examples=['User registration successful']
    )]
