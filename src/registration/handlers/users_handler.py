"""
Users Handlers - Lambda entry points for sign-up and the users collection.

- sign_up_handler: API Gateway ``POST /signup``, registers the user in Cognito
- get_users_handler: API Gateway ``GET /users``
- post_confirmation_handler: Cognito post-confirmation trigger that stores a user record
"""

import json
from typing import Any, Dict, Optional

from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.utilities.data_classes import APIGatewayProxyEvent, event_source
from aws_lambda_powertools.utilities.data_classes.cognito_user_pool_event import PostConfirmationTriggerEvent
from aws_lambda_powertools.utilities.typing import LambdaContext

from registration.dal.cognito_handler import IdentityError
from registration.handlers.utils.dependencies import get_registration_service, get_users_service
from registration.handlers.utils.errors import (
    BaseServiceError,
    ValidationError,
    create_api_response,
    create_error_context,
    handle_service_errors,
)
from registration.handlers.utils.observability import logger, metrics, tracer
from registration.logic.record_service import RecordService
from registration.logic.registration_service import RegistrationService
from registration.models.input import SignUpRequest
from registration.models.output import MessageOutput

SIGN_UP_SUCCESS_MESSAGE = 'User registration successful'


@handle_service_errors
def sign_up(event: APIGatewayProxyEvent, registration: Optional[RegistrationService] = None) -> Dict[str, Any]:
    """
    Register a user from a ``{email, password, name}`` JSON body.

    Any fault raised by either identity step comes back as 500 carrying the
    fault's own message, or the generic message when it has none.
    """
    context = create_error_context(
        request_id=(event.get("requestContext") or {}).get("requestId", "unknown"),
        operation="sign_up",
    )

    try:
        body = json.loads(event.body or "")
    except json.JSONDecodeError:
        raise ValidationError(message="Invalid JSON in request body", context=context)

    request = SignUpRequest.model_validate(body)
    registration = registration or get_registration_service()
    logger.info("Sign-up request received", extra={"username": request.email})

    try:
        registration.register_user(request)
    except BaseServiceError:
        raise
    except Exception as e:
        logger.exception("Unexpected sign-up fault")
        raise IdentityError(str(e), operation="SignUp") from e

    return create_api_response(
        status_code=200,
        body=MessageOutput(message=SIGN_UP_SUCCESS_MESSAGE).model_dump_json(),
    )


@handle_service_errors
def get_users(event: APIGatewayProxyEvent, users: Optional[RecordService] = None) -> Dict[str, Any]:
    """Return every user record."""
    users = users or get_users_service()
    logger.info("List users request received")

    return create_api_response(status_code=200, body=users.list_records())


@handle_service_errors
def post_confirmation(event: PostConfirmationTriggerEvent, users: Optional[RecordService] = None) -> Dict[str, Any]:
    """Store a user record built from the confirmed user's attributes."""
    users = users or get_users_service()
    logger.info("Post confirmation trigger received", extra={
        "trigger_source": event.get("triggerSource"),
        "user_name": event.get("userName"),
    })

    record = users.create_from_attributes(event.request.user_attributes)

    return create_api_response(status_code=200, body=record.model_dump_json())


@metrics.log_metrics(capture_cold_start_metric=True)
@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@event_source(data_class=APIGatewayProxyEvent)
def sign_up_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> Dict[str, Any]:
    return sign_up(event)


@metrics.log_metrics(capture_cold_start_metric=True)
@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@event_source(data_class=APIGatewayProxyEvent)
def get_users_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> Dict[str, Any]:
    return get_users(event)


@metrics.log_metrics(capture_cold_start_metric=True)
@tracer.capture_lambda_handler
@logger.inject_lambda_context
@event_source(data_class=PostConfirmationTriggerEvent)
def post_confirmation_handler(event: PostConfirmationTriggerEvent, context: LambdaContext) -> Dict[str, Any]:
    return post_confirmation(event)
