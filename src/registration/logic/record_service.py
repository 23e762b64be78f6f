"""
Business logic for order and user records.

The same service backs both the orders and the users collections; each
instance is bound to one record store.
"""

from typing import Any, Dict, List, Mapping, Optional

from aws_lambda_powertools.metrics import MetricUnit

from registration.dal import RecordStore
from registration.handlers.utils.errors import ErrorContext, ResourceNotFoundError
from registration.handlers.utils.observability import logger, metrics, tracer
from registration.models.record import Record


class RecordNotFoundError(ResourceNotFoundError):
    """Raised when no record exists for an email."""

    def __init__(self, email: str, context: Optional[ErrorContext] = None):
        super().__init__(
            resource_type="Record",
            resource_id=email,
            id_field="email",
            context=context,
        )


class RecordService:
    """Business logic service for one record collection."""

    def __init__(self, store: RecordStore, collection: str):
        """
        Initialize record service.

        Args:
            store: Record store holding the collection
            collection: Collection label used in logs and metrics (``orders`` or ``users``)
        """
        self.store = store
        self.collection = collection

    @tracer.capture_method
    def create_from_attributes(self, attributes: Mapping[str, Any]) -> Record:
        """
        Build a record from identity attributes and persist it.

        Args:
            attributes: Mapping carrying ``name`` and ``email``

        Returns:
            The stored record

        Raises:
            pydantic.ValidationError: If ``name`` or ``email`` is missing
            StoreError: If the write fails
        """
        record = Record.from_attributes(attributes)
        self.store.put(record.model_dump())

        metrics.add_metric(name="RecordCreated", unit=MetricUnit.Count, value=1)
        logger.info("Record created", extra={
            "collection": self.collection,
            "email": record.email,
        })

        return record

    @tracer.capture_method
    def get_record(self, email: str, context: Optional[ErrorContext] = None) -> Dict[str, Any]:
        """
        Get a record by email, as stored.

        Raises:
            RecordNotFoundError: If no record has that email
            StoreError: If the read fails
        """
        item = self.store.get_by_key(email)
        if item is None:
            metrics.add_metric(name="RecordNotFound", unit=MetricUnit.Count, value=1)
            raise RecordNotFoundError(email=email, context=context)

        return item

    @tracer.capture_method
    def list_records(self) -> List[Dict[str, Any]]:
        """
        List every record of the collection, as stored.

        Raises:
            StoreError: If the scan fails
        """
        records = self.store.get_all()

        metrics.add_metric(name="RecordsListed", unit=MetricUnit.Count, value=len(records))
        logger.info("Records listed", extra={
            "collection": self.collection,
            "count": len(records),
        })

        return records
