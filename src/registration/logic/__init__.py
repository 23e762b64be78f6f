"""
Business Logic Layer Module.

Sits between the Lambda handlers and the data access layer:

- RecordService: shared "attributes -> record -> put" operation plus reads
  for one record collection
- RegistrationService: two-step user sign-up against the identity provider
"""

from registration.logic.record_service import RecordNotFoundError, RecordService
from registration.logic.registration_service import RegistrationService

__all__ = [
    "RecordNotFoundError",
    "RecordService",
    "RegistrationService",
]
