"""JSON-compatible payload helpers for report rows and result envelopes."""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from decimal import Decimal

from .interfaces import ReportResult


def analytics_serialize_value(value: object) -> object:
    """Convert one report value to a JSON-compatible value.

    Decimals become strings to keep exact monetary values.

    Args:
        value: Report cell or parameter value.

    Returns:
        object: JSON-compatible value.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def analytics_serialize_row(row: object) -> dict[str, object]:
    """Serialize one typed report row.

    Args:
        row: Report row dataclass instance.

    Returns:
        dict[str, object]: JSON-compatible row payload.

    Raises:
        TypeError: Raised when the row is not a dataclass instance.
    """

    if not is_dataclass(row) or isinstance(row, type):
        raise TypeError(f"unsupported report row type: {type(row).__name__}")
    return {field_name: analytics_serialize_value(value) for field_name, value in asdict(row).items()}


def analytics_serialize_result(result: ReportResult) -> dict[str, object]:
    """Serialize one report result envelope.

    Args:
        result: Report result.

    Returns:
        dict[str, object]: JSON-compatible envelope payload.

    Raises:
        TypeError: Raised when a row is not a dataclass instance.
    """

    return {
        "report_name": result.report_name,
        "parameters": {name: analytics_serialize_value(value) for name, value in result.parameters.items()},
        "generated_at_utc": result.generated_at_utc.isoformat(),
        "returned": len(result.rows),
        "items": [analytics_serialize_row(row) for row in result.rows],
    }


__all__ = ["analytics_serialize_result", "analytics_serialize_row", "analytics_serialize_value"]
