"""
User/Order Registration Service.

Serverless handlers for a user/order registration workflow, organised in the
three-layer pattern:

- handlers: Lambda entry points for API Gateway requests and Cognito triggers
- logic: record and registration business operations
- dal: DynamoDB record store and Cognito identity adapters
- models: Pydantic data models
"""

__version__ = "1.0.0"

from registration.models import MessageOutput, Record, SignUpRequest
from registration.handlers.utils.observability import logger, tracer, metrics

__all__ = [
    "Record",
    "SignUpRequest",
    "MessageOutput",
    "logger",
    "tracer",
    "metrics",
]
