"""
Lazily built services for the registration handlers.

Each getter builds its service on first use and keeps it for the lifetime of
the Lambda execution environment. A handler only resolves the service it
needs, so it only requires that service's settings. Operations take the
service as an optional argument; tests pass their own instances, built with
the ``build_*`` functions.
"""

from functools import lru_cache
from typing import Optional

from registration.dal.cognito_handler import CognitoIdentityHandler
from registration.dal.dynamodb_handler import DynamoDbRecordStore
from registration.handlers.models.env_vars import (
    OrdersEnvVars,
    SignUpEnvVars,
    UsersEnvVars,
    get_orders_env_vars,
    get_sign_up_env_vars,
    get_users_env_vars,
)
from registration.handlers.utils.observability import logger
from registration.logic.record_service import RecordService
from registration.logic.registration_service import RegistrationService


def build_orders_service(env: Optional[OrdersEnvVars] = None) -> RecordService:
    """Construct the record service over the orders table."""
    env = env or get_orders_env_vars()
    store = DynamoDbRecordStore(env.ORDERS_TABLE_NAME, endpoint_url=env.DYNAMODB_ENDPOINT)

    logger.info("Orders service initialized", extra={"table_name": env.ORDERS_TABLE_NAME})
    return RecordService(store, collection='orders')


def build_users_service(env: Optional[UsersEnvVars] = None) -> RecordService:
    """Construct the record service over the users table."""
    env = env or get_users_env_vars()
    store = DynamoDbRecordStore(env.USERS_TABLE_NAME, endpoint_url=env.DYNAMODB_ENDPOINT)

    logger.info("Users service initialized", extra={"table_name": env.USERS_TABLE_NAME})
    return RecordService(store, collection='users')


def build_registration_service(env: Optional[SignUpEnvVars] = None) -> RegistrationService:
    """
    Construct the sign-up service over the Cognito user pool.

    Args:
        env: Environment model, read from the process environment when omitted

    Returns:
        A new RegistrationService instance
    """
    env = env or get_sign_up_env_vars()

    logger.info("Registration service initialized", extra={"user_pool_id": env.user_pool_id})
    return RegistrationService(CognitoIdentityHandler(), user_pool_id=env.user_pool_id)


@lru_cache(maxsize=1)
def get_orders_service() -> RecordService:
    return build_orders_service()


@lru_cache(maxsize=1)
def get_users_service() -> RecordService:
    return build_users_service()


@lru_cache(maxsize=1)
def get_registration_service() -> RegistrationService:
    return build_registration_service()
