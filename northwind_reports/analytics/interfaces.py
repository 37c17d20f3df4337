"""Typed interfaces for analytics-layer report execution."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Protocol


@dataclass(frozen=True)
class ReportDefinition:
    """Catalog entry describing one runnable report.

    Attributes:
        report_name: Stable report identifier.
        description: Human-readable summary of the report output.
        parameter_names: Caller-supplied parameter names accepted by the report.
    """

    report_name: str
    description: str
    parameter_names: tuple[str, ...] = ()


@dataclass(frozen=True)
class ReportResult:
    """Output envelope for one report execution.

    Attributes:
        report_name: Executed report identifier.
        parameters: Effective parameters, including configured defaults.
        rows: Typed result rows in report order.
        generated_at_utc: Completion timestamp in UTC.
    """

    report_name: str
    parameters: dict[str, Any]
    rows: tuple[Any, ...]
    generated_at_utc: datetime


@dataclass(frozen=True)
class ReportCatalogConfig:
    """Static report configuration resolved from runtime settings.

    Attributes:
        default_year: Year used by the yearly revenue report when none is given.
        integrity_check_enabled: Whether the integrity audit guards each report.
        segment_group_count: Number of customer segments.
        marketing_min_group: Lowest segment number included in marketing targets.
        top_products_limit: Default row limit for top products.
        top_products_max_limit: Maximum accepted row limit for top products.
        uk_country_code: Country matched case-insensitively by the UK report.
        uk_payment_threshold: Exclusive lower bound on total paid for the UK report.
    """

    default_year: int = 1997
    integrity_check_enabled: bool = True
    segment_group_count: int = 5
    marketing_min_group: int = 3
    top_products_limit: int = 10
    top_products_max_limit: int = 100
    uk_country_code: str = "uk"
    uk_payment_threshold: Decimal = Decimal("1000")


class ReportCatalogPort(Protocol):
    """Port definition for listing and running named reports."""

    def analytics_report_definitions(self) -> tuple[ReportDefinition, ...]:
        """Return catalog entries in stable display order.

        Returns:
            tuple[ReportDefinition, ...]: Registered report definitions.

        Raises:
            RuntimeError: Raised when catalog metadata is unavailable.
        """

    def analytics_report_run(
        self,
        report_name: str,
        year: int | None = None,
        limit: int | None = None,
    ) -> ReportResult:
        """Run one named report.

        Args:
            report_name: Report identifier.
            year: Optional year for reports that accept it.
            limit: Optional row limit for reports that accept it.

        Returns:
            ReportResult: Report output envelope.

        Raises:
            ReportingError: Raised when the report cannot be produced.
        """

    def analytics_dataset_refresh(self) -> dict[str, int] | None:
        """Reload cached base relations for snapshot-backed report backends.

        Returns:
            dict[str, int] | None: Loaded row counts per relation, or None for live backends.

        Raises:
            DataSourceUnavailableError: Raised when the snapshot cannot be reloaded.
        """
