"""
Environment variable models for type-safe configuration.

Each handler family loads only the settings it uses: the orders handlers need
the orders table, the users handlers the users table, and sign-up the Cognito
user pool. The post-confirmation trigger therefore never depends on the pool
that invokes it.
"""

from typing import Annotated, Optional

from aws_lambda_env_modeler import BaseModel as BaseEnvModel, get_environment_variables
from pydantic import Field


class HandlerEnvVars(BaseEnvModel):
    """Settings shared by every registration handler."""

    DYNAMODB_ENDPOINT: Annotated[Optional[str], Field(
        default=None,
        description='DynamoDB endpoint URL override (for local testing)'
    )] = None

    POWERTOOLS_SERVICE_NAME: Annotated[str, Field(
        default='user-registration',
        description='Service name for AWS Powertools'
    )] = 'user-registration'

    LOG_LEVEL: Annotated[str, Field(
        default='INFO',
        description='Log level for application logging',
        pattern=r'^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$'
    )] = 'INFO'

    POWERTOOLS_TRACE_DISABLED: Annotated[str, Field(
        default='false',
        description='Disable X-Ray tracing (true/false)',
        pattern=r'^(true|false)$'
    )] = 'false'

    @property
    def tracing_enabled(self) -> bool:
        """Check if X-Ray tracing is enabled."""
        return self.POWERTOOLS_TRACE_DISABLED.lower() == 'false'


class OrdersEnvVars(HandlerEnvVars):
    """Environment for createOrder, getOrder and getOrders."""

    # DynamoDB table holding order records, keyed by email
    ORDERS_TABLE_NAME: Annotated[str, Field(
        description='DynamoDB table name for order records',
        min_length=1
    )]


class UsersEnvVars(HandlerEnvVars):
    """Environment for getUsers and postConfirmation."""

    # DynamoDB table holding user records, keyed by email
    USERS_TABLE_NAME: Annotated[str, Field(
        description='DynamoDB table name for user records',
        min_length=1
    )]


class SignUpEnvVars(HandlerEnvVars):
    """Environment for signUp."""

    # Deployment-scoped Cognito user pool; the lower-case name is the deployed contract
    user_pool_id: Annotated[str, Field(
        description='Cognito user pool identifier used for sign-up',
        min_length=1
    )]


def get_orders_env_vars() -> OrdersEnvVars:
    return get_environment_variables(model=OrdersEnvVars)


def get_users_env_vars() -> UsersEnvVars:
    return get_environment_variables(model=UsersEnvVars)


def get_sign_up_env_vars() -> SignUpEnvVars:
    """
    Get typed environment variables for the sign-up handler.

    Returns:
        Validated environment variables model instance

    Raises:
        ValueError: If ``user_pool_id`` is not set
    """
    return get_environment_variables(model=SignUpEnvVars)
