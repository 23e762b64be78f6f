"""
AWS Lambda Handlers Module.

Entry points live in ``orders_handler`` (createOrder, getOrder, getOrders) and
``users_handler`` (signUp, getUsers, postConfirmation). Each entry point is
decorated with the Powertools logger, tracer and metrics and delegates to an
operation that resolves the service it needs on first use.
"""

from registration.handlers.utils.observability import logger, tracer, metrics

__all__ = [
    "logger",
    "tracer",
    "metrics",
]
