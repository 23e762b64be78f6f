"""
Error taxonomy and response shaping for the registration handlers.

Every handler operation is wrapped by ``handle_service_errors`` so that store,
identity and validation faults surface as structured JSON responses of the
form ``{"message": ...}`` instead of escaping to the Lambda runtime.
"""

import functools
import json
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Optional

from aws_lambda_powertools.metrics import MetricUnit
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from registration.handlers.utils.observability import logger, metrics, tracer
from registration.handlers.utils.serialization import json_default

GENERIC_ERROR_MESSAGE = 'Internal server error'


class ErrorSeverity(str, Enum):
    """Error severity levels for classification."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class ErrorCategory(str, Enum):
    """Error categories for classification."""
    VALIDATION = "VALIDATION"
    BUSINESS_LOGIC = "BUSINESS_LOGIC"
    EXTERNAL_SERVICE = "EXTERNAL_SERVICE"


class ErrorContext(BaseModel):
    """Context information for errors."""

    request_id: str = Field(description="Unique request identifier")
    operation: str = Field(description="Operation being performed")
    resource_id: Optional[str] = Field(default=None, description="Resource identifier")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class BaseServiceError(Exception):
    """Base exception class for service errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        category: ErrorCategory = ErrorCategory.BUSINESS_LOGIC,
        context: Optional[ErrorContext] = None,
        retry_after: Optional[int] = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.severity = severity
        self.category = category
        self.context = context
        self.retry_after = retry_after
        self.user_message = user_message or GENERIC_ERROR_MESSAGE
        self.error_id = str(uuid.uuid4())

    def log_fields(self) -> Dict[str, Any]:
        """Structured fields shared by the error log entry and trace metadata."""
        return {
            "error_id": self.error_id,
            "error_code": self.error_code,
            "error_severity": self.severity.value,
            "error_category": self.category.value,
            "error_message": self.message,
            "retry_after": self.retry_after,
            "context": self.context.model_dump(mode='json') if self.context else None,
        }


class ValidationError(BaseServiceError):
    """Raised when request input is malformed."""

    def __init__(self, message: str, context: Optional[ErrorContext] = None):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.VALIDATION,
            context=context,
            user_message=message,
        )


class ExternalServiceError(BaseServiceError):
    """Raised when a managed service call fails."""

    def __init__(
        self,
        message: str,
        service_name: str,
        error_code: str = "EXTERNAL_SERVICE_ERROR",
        retry_after: Optional[int] = None,
        context: Optional[ErrorContext] = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            severity=ErrorSeverity.HIGH,
            category=ErrorCategory.EXTERNAL_SERVICE,
            context=context,
            retry_after=retry_after,
            user_message=user_message,
        )
        self.service_name = service_name


class ResourceNotFoundError(BaseServiceError):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        id_field: str = 'ID',
        context: Optional[ErrorContext] = None,
    ):
        message = f"{resource_type} with {id_field} '{resource_id}' not found"
        super().__init__(
            message=message,
            error_code="RESOURCE_NOT_FOUND",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.BUSINESS_LOGIC,
            context=context,
            user_message=message,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


def create_error_context(
    request_id: str,
    operation: str,
    resource_id: Optional[str] = None,
) -> ErrorContext:
    """Create error context for tracing."""
    return ErrorContext(
        request_id=request_id,
        operation=operation,
        resource_id=resource_id,
    )


@tracer.capture_method
def log_error_metrics(error: BaseServiceError) -> None:
    """Count, trace and log a service error."""

    metrics.add_metric(name="ErrorCount", unit=MetricUnit.Count, value=1)
    metrics.add_metric(name=f"Error{error.category.value}Count", unit=MetricUnit.Count, value=1)

    fields = error.log_fields()
    tracer.put_annotation("error_code", error.error_code)
    tracer.put_metadata("error_details", fields)

    logger.error("Service error occurred", extra=fields)


def format_error_response(error: BaseServiceError) -> Dict[str, Any]:
    """Format error for API response."""
    return {"message": error.user_message or GENERIC_ERROR_MESSAGE}


def get_http_status_code(error: BaseServiceError) -> int:
    """Get appropriate HTTP status code for error."""

    status_mapping = {
        "VALIDATION_ERROR": 400,
        "RESOURCE_NOT_FOUND": 404,
        "STORE_THROTTLED": 503,
    }

    return status_mapping.get(error.error_code, 500)


def create_api_response(
    status_code: int,
    body: Any,
    headers: Optional[Dict[str, str]] = None,
    cors_enabled: bool = True,
) -> Dict[str, Any]:
    """Create standardized API Gateway response."""

    default_headers = {
        "Content-Type": "application/json",
    }

    if cors_enabled:
        default_headers.update({
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Headers": "Content-Type,X-Amz-Date,Authorization,X-Api-Key,X-Amz-Security-Token",
            "Access-Control-Allow-Methods": "OPTIONS,POST,GET",
        })

    if headers:
        default_headers.update(headers)

    return {
        "statusCode": status_code,
        "headers": default_headers,
        "body": body if isinstance(body, str) else json.dumps(body, default=json_default),
    }


def handle_service_errors(func: Callable[..., Dict[str, Any]]) -> Callable[..., Dict[str, Any]]:
    """Decorator to handle service errors and convert to HTTP responses."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except BaseServiceError as e:
            log_error_metrics(e)

            return create_api_response(
                status_code=get_http_status_code(e),
                body=format_error_response(e),
                headers={"Retry-After": str(e.retry_after)} if e.retry_after else None,
            )

        except PydanticValidationError as e:
            logger.error("Request validation failed", extra={
                "validation_errors": str(e),
                "error_count": e.error_count(),
            })

            metrics.add_metric(name="ValidationError", unit=MetricUnit.Count, value=1)

            fields = ", ".join(str(error["loc"][-1]) for error in e.errors() if error["loc"])
            return create_api_response(
                status_code=400,
                body={"message": f"Invalid or missing fields: {fields}" if fields else "Invalid request"},
            )

        except Exception as e:
            logger.exception("Unexpected error in handler", extra={
                "error": str(e),
                "function_name": func.__name__,
            })

            metrics.add_metric(name="UnexpectedError", unit=MetricUnit.Count, value=1)

            return create_api_response(
                status_code=500,
                body={"message": GENERIC_ERROR_MESSAGE},
            )

    return wrapper
