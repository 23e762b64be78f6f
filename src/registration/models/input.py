"""
Input models for request validation using Pydantic.
"""

from typing import Annotated

from pydantic import BaseModel, Field


class SignUpRequest(BaseModel):
    """Request body for user sign-up."""

    email: Annotated[str, Field(
        min_length=1,
        description='Email address, also used as the Cognito username',
        examples=['john.doe@example.com']
    )]

    password: Annotated[str, Field(
        min_length=1,
        description='Permanent password for the new account'
    )]

    name: Annotated[str, Field(
        min_length=1,
        description='Display name of the user',
        examples=['John Doe']
    )]
