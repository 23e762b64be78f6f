"""
Amazon Cognito implementation of the identity provider.

Only the two admin operations used by sign-up are wrapped: account creation
and permanent password assignment.
"""

from typing import Any, Dict, List, Mapping, Optional

import boto3
from aws_lambda_powertools.metrics import MetricUnit
from botocore.exceptions import BotoCoreError, ClientError

from registration.handlers.utils.errors import GENERIC_ERROR_MESSAGE, ExternalServiceError
from registration.handlers.utils.observability import logger, metrics, tracer


class IdentityError(ExternalServiceError):
    """Raised when a Cognito call fails; the service's message is surfaced to the caller."""

    def __init__(self, message: str, operation: str, error_code: str = "IDENTITY_ERROR", service_code: Optional[str] = None):
        message = message or GENERIC_ERROR_MESSAGE
        super().__init__(
            message=message,
            service_name="Cognito",
            error_code=error_code,
            user_message=message,
        )
        self.operation = operation
        self.service_code = service_code


def _to_identity_error(error: Exception, operation: str) -> IdentityError:
    if isinstance(error, ClientError):
        details = error.response.get('Error', {})
        return IdentityError(
            message=details.get('Message', ''),
            operation=operation,
            service_code=details.get('Code'),
        )
    return IdentityError(message=str(error), operation=operation)


class CognitoIdentityHandler:
    """Identity provider backed by a Cognito user pool."""

    def __init__(self, region_name: Optional[str] = None, client: Any = None) -> None:
        """
        Initialize the identity handler.

        Args:
            region_name: AWS region name
            client: Pre-built ``cognito-idp`` client, created when omitted
        """
        if client is None:
            client_config = {'region_name': region_name} if region_name else {}
            client = boto3.client('cognito-idp', **client_config)
        self.client = client

    @staticmethod
    def _user_attributes(attributes: Mapping[str, str]) -> List[Dict[str, str]]:
        return [{'Name': name, 'Value': value} for name, value in attributes.items()]

    @tracer.capture_method
    def create_user(
        self,
        user_pool_id: str,
        username: str,
        attributes: Mapping[str, str],
        suppress_notification: bool = True,
    ) -> Optional[Dict[str, Any]]:
        """
        Create an account in the user pool.

        Args:
            user_pool_id: Cognito user pool identifier
            username: Username of the new account
            attributes: User attributes such as ``email`` and ``name``
            suppress_notification: Skip the welcome message when True

        Returns:
            The created user descriptor, or None if the response carried none

        Raises:
            IdentityError: If the user exists, attributes are invalid or the call fails
        """
        params: Dict[str, Any] = {
            'UserPoolId': user_pool_id,
            'Username': username,
            'UserAttributes': self._user_attributes(attributes),
        }
        if suppress_notification:
            params['MessageAction'] = 'SUPPRESS'

        try:
            response = self.client.admin_create_user(**params)
        except (ClientError, BotoCoreError) as e:
            metrics.add_metric(name="IdentityCreateUserError", unit=MetricUnit.Count, value=1)
            error = _to_identity_error(e, 'AdminCreateUser')
            logger.error("Cognito AdminCreateUser failed", extra={
                "username": username,
                "service_code": error.service_code,
                "error_message": error.message,
            })
            raise error from e

        logger.info("Cognito user created", extra={"username": username})
        return response.get('User')

    @tracer.capture_method
    def set_permanent_password(self, user_pool_id: str, username: str, password: str) -> None:
        """
        Set a permanent password for an existing account.

        Raises:
            IdentityError: If the password is rejected or the call fails
        """
        try:
            self.client.admin_set_user_password(
                UserPoolId=user_pool_id,
                Username=username,
                Password=password,
                Permanent=True,
            )
        except (ClientError, BotoCoreError) as e:
            metrics.add_metric(name="IdentitySetPasswordError", unit=MetricUnit.Count, value=1)
            error = _to_identity_error(e, 'AdminSetUserPassword')
            logger.error("Cognito AdminSetUserPassword failed", extra={
                "username": username,
                "service_code": error.service_code,
                "error_message": error.message,
            })
            raise error from e

        logger.info("Cognito permanent password set", extra={"username": username})
