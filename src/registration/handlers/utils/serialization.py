"""JSON encoding for items read back from DynamoDB."""

from decimal import Decimal
from typing import Any


def json_default(value: Any) -> Any:
    """
    ``json.dumps`` fallback for values the standard encoder rejects.

    DynamoDB returns every number as ``Decimal``; whole numbers are written
    as JSON integers and the rest as floats. Anything else is stringified.
    """
    if isinstance(value, Decimal):
        if value.is_finite() and value == value.to_integral_value():
            return int(value)
        return float(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    return str(value)
