"""
Orders Handlers - Lambda entry points for the orders collection.

- create_order_handler: Cognito user-pool trigger that stores an order record
- get_order_handler: API Gateway ``GET /orders/{email}``
- get_orders_handler: API Gateway ``GET /orders``

Each entry point delegates to a plain operation taking the parsed event and,
optionally, the orders service. The service is resolved inside the operation
so configuration faults come back as structured errors.
"""

from typing import Any, Dict, Optional

from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.utilities.data_classes import APIGatewayProxyEvent, event_source
from aws_lambda_powertools.utilities.data_classes.cognito_user_pool_event import PostConfirmationTriggerEvent
from aws_lambda_powertools.utilities.typing import LambdaContext

from registration.handlers.utils.dependencies import get_orders_service
from registration.handlers.utils.errors import (
    ValidationError,
    create_api_response,
    create_error_context,
    handle_service_errors,
)
from registration.handlers.utils.observability import logger, metrics, tracer
from registration.logic.record_service import RecordService


@handle_service_errors
def create_order(event: PostConfirmationTriggerEvent, orders: Optional[RecordService] = None) -> Dict[str, Any]:
    """Store an order record built from the trigger's user attributes."""
    orders = orders or get_orders_service()
    logger.info("Create order request received", extra={"trigger_source": event.get("triggerSource")})

    record = orders.create_from_attributes(event.request.user_attributes)

    return create_api_response(status_code=200, body=record.model_dump_json())


@handle_service_errors
def get_order(event: APIGatewayProxyEvent, orders: Optional[RecordService] = None) -> Dict[str, Any]:
    """Return the order record stored under the ``email`` path parameter."""
    email = (event.path_parameters or {}).get('email')
    context = create_error_context(
        request_id=(event.get("requestContext") or {}).get("requestId", "unknown"),
        operation="get_order",
        resource_id=email,
    )
    if not email:
        raise ValidationError(message="Missing path parameter: email", context=context)

    orders = orders or get_orders_service()
    logger.info("Get order request received", extra={"email": email})
    tracer.put_metadata("email", email)

    record = orders.get_record(email, context=context)

    return create_api_response(status_code=200, body=record)


@handle_service_errors
def get_orders(event: APIGatewayProxyEvent, orders: Optional[RecordService] = None) -> Dict[str, Any]:
    """Return every order record."""
    orders = orders or get_orders_service()
    logger.info("List orders request received")

    return create_api_response(status_code=200, body=orders.list_records())


@metrics.log_metrics(capture_cold_start_metric=True)
@tracer.capture_lambda_handler
@logger.inject_lambda_context
@event_source(data_class=PostConfirmationTriggerEvent)
def create_order_handler(event: PostConfirmationTriggerEvent, context: LambdaContext) -> Dict[str, Any]:
    return create_order(event)


@metrics.log_metrics(capture_cold_start_metric=True)
@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@event_source(data_class=APIGatewayProxyEvent)
def get_order_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> Dict[str, Any]:
    return get_order(event)


@metrics.log_metrics(capture_cold_start_metric=True)
@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@event_source(data_class=APIGatewayProxyEvent)
def get_orders_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> Dict[str, Any]:
    return get_orders(event)
