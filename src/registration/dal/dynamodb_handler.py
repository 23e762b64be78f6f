"""
DynamoDB implementation of the record store.

Each store instance wraps a single table whose partition key is ``email``.
Items are written as-is; no shape validation happens at this layer.
"""

import functools
from typing import Any, Dict, List, Mapping, Optional

import boto3
from aws_lambda_powertools.metrics import MetricUnit
from botocore.exceptions import BotoCoreError, ClientError

from registration.handlers.utils.errors import ExternalServiceError
from registration.handlers.utils.observability import logger, metrics, tracer

KEY_ATTRIBUTE = 'email'

THROTTLING_ERROR_CODES = frozenset({
    'ProvisionedThroughputExceededException',
    'ThrottlingException',
    'RequestLimitExceeded',
})


class StoreError(ExternalServiceError):
    """Raised when a DynamoDB call fails."""

    def __init__(
        self,
        message: str,
        operation: str,
        table_name: str,
        error_code: str = "STORE_ERROR",
        retry_after: Optional[int] = None,
    ):
        super().__init__(
            message=message,
            service_name="DynamoDB",
            error_code=error_code,
            retry_after=retry_after,
            user_message="A database error occurred. Please try again later.",
        )
        self.operation = operation
        self.table_name = table_name


def _handle_dynamodb_errors(operation: str):
    """Decorator converting botocore failures into StoreError."""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            metrics.add_metric(name=f"DynamoDB{operation}Count", unit=MetricUnit.Count, value=1)
            try:
                return func(self, *args, **kwargs)
            except ClientError as e:
                error_code = e.response['Error']['Code']
                error_message = e.response['Error'].get('Message', '')

                metrics.add_metric(name=f"DynamoDB{operation}Error", unit=MetricUnit.Count, value=1)
                logger.error(f"DynamoDB {operation} error", extra={
                    "error_code": error_code,
                    "error_message": error_message,
                    "table_name": self.table_name,
                })

                if error_code in THROTTLING_ERROR_CODES:
                    raise StoreError(
                        message=f"DynamoDB throttling detected: {error_message}",
                        operation=operation,
                        table_name=self.table_name,
                        error_code="STORE_THROTTLED",
                        retry_after=30,
                    ) from e
                raise StoreError(
                    message=f"DynamoDB error ({error_code}): {error_message}",
                    operation=operation,
                    table_name=self.table_name,
                ) from e
            except BotoCoreError as e:
                metrics.add_metric(name=f"DynamoDB{operation}Error", unit=MetricUnit.Count, value=1)
                logger.error(f"DynamoDB connection error during {operation}", extra={
                    "error": str(e),
                    "table_name": self.table_name,
                })
                raise StoreError(
                    message=f"Database connection error: {e}",
                    operation=operation,
                    table_name=self.table_name,
                ) from e

        return wrapper
    return decorator


class DynamoDbRecordStore:
    """Record store backed by one DynamoDB table keyed by email."""

    def __init__(
        self,
        table_name: str,
        region_name: Optional[str] = None,
        endpoint_url: Optional[str] = None,
    ) -> None:
        """
        Initialize the record store.

        Args:
            table_name: Name of the DynamoDB table
            region_name: AWS region name
            endpoint_url: DynamoDB endpoint URL (for local testing)
        """
        self.table_name = table_name

        resource_config = {}
        if region_name:
            resource_config['region_name'] = region_name
        if endpoint_url:
            resource_config['endpoint_url'] = endpoint_url

        self.dynamodb = boto3.resource('dynamodb', **resource_config)
        self.table = self.dynamodb.Table(table_name)

        logger.debug("DynamoDB record store initialized", extra={
            "table_name": table_name,
            "endpoint_url": endpoint_url,
        })

    @tracer.capture_method
    @_handle_dynamodb_errors("PutItem")
    def put(self, item: Mapping[str, Any]) -> None:
        """
        Write an item, overwriting any existing item with the same email.

        Raises:
            StoreError: If the DynamoDB operation fails
        """
        self.table.put_item(Item=dict(item))
        logger.info("Item written", extra={"table_name": self.table_name, "email": item.get(KEY_ATTRIBUTE)})

    @tracer.capture_method
    @_handle_dynamodb_errors("GetItem")
    def get_by_key(self, email: str) -> Optional[Dict[str, Any]]:
        """
        Fetch one item by email.

        Returns:
            The stored item, or None when no item has that key

        Raises:
            StoreError: If the DynamoDB operation fails
        """
        response = self.table.get_item(Key={KEY_ATTRIBUTE: email})
        item = response.get('Item')
        if item is None:
            logger.info("Item not found", extra={"table_name": self.table_name, "email": email})
        return item

    @tracer.capture_method
    @_handle_dynamodb_errors("Scan")
    def get_all(self) -> List[Dict[str, Any]]:
        """
        Scan the whole table, following pagination until it is exhausted.

        Raises:
            StoreError: If the DynamoDB operation fails
        """
        items: List[Dict[str, Any]] = []
        scan_kwargs: Dict[str, Any] = {'Select': 'ALL_ATTRIBUTES'}
        pages = 0

        while True:
            response = self.table.scan(**scan_kwargs)
            items.extend(response.get('Items', []))
            pages += 1

            last_evaluated_key = response.get('LastEvaluatedKey')
            if not last_evaluated_key:
                break
            scan_kwargs['ExclusiveStartKey'] = last_evaluated_key

        logger.info("Scan completed successfully", extra={
            "table_name": self.table_name,
            "items_count": len(items),
            "pages": pages,
        })
        tracer.put_annotation("scan_items_count", len(items))

        return items
