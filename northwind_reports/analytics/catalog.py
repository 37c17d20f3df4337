"""Named report catalog with parameter validation, integrity guard and logging."""
# pylint: disable=too-few-public-methods

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable

from northwind_reports.db import ReportRepositoryPort
from northwind_reports.domain import (
    MalformedInputDataError,
    ReportingError,
    ReportParameterError,
    UnknownReportError,
)

from .interfaces import ReportCatalogConfig, ReportCatalogPort, ReportDefinition, ReportResult
from .memory_service import InMemoryReportService

logger = logging.getLogger(__name__)

REPORT_DEFINITIONS: tuple[ReportDefinition, ...] = (
    ReportDefinition(
        report_name="total_revenue_for_year",
        description="Total line revenue for orders dated within one calendar year.",
        parameter_names=("year",),
    ),
    ReportDefinition(
        report_name="monthly_growth",
        description="Monthly revenue with month-over-month change and year-to-date total.",
    ),
    ReportDefinition(
        report_name="customer_payments",
        description="Total amount paid per customer, highest first.",
    ),
    ReportDefinition(
        report_name="customer_segments",
        description="Customers ranked by total paid and split into equal-sized spending groups.",
    ),
    ReportDefinition(
        report_name="marketing_targets",
        description="Segmented customers outside the top spending groups.",
    ),
    ReportDefinition(
        report_name="top_products",
        description="Products with the highest revenue.",
        parameter_names=("limit",),
    ),
    ReportDefinition(
        report_name="uk_customers_over_threshold",
        description="UK contacts whose total paid strictly exceeds the payment threshold.",
    ),
    ReportDefinition(
        report_name="data_integrity",
        description="Referential and numeric invariant violation counts in the base relations.",
    ),
)


class ReportCatalogService(ReportCatalogPort):
    """Run catalog reports against one report repository backend."""

    def __init__(self, repository: ReportRepositoryPort, config: ReportCatalogConfig):
        """Initialize catalog dependencies.

        Args:
            repository: Report backend (SQL or in-memory).
            config: Static report configuration.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when dependencies are invalid.
        """

        if repository is None:
            raise ValueError("repository must not be None")
        if config is None:
            raise ValueError("config must not be None")
        self._repository = repository
        self._config = config
        self._definitions_by_name = {definition.report_name: definition for definition in REPORT_DEFINITIONS}
        self._report_handlers: dict[str, Callable[[dict[str, Any]], list[Any]]] = {
            "total_revenue_for_year": lambda parameters: [
                self._repository.db_report_total_revenue_for_year(year=parameters["year"])
            ],
            "monthly_growth": lambda parameters: self._repository.db_report_monthly_growth(),
            "customer_payments": lambda parameters: self._repository.db_report_customer_payments(),
            "customer_segments": lambda parameters: self._repository.db_report_customer_segments(
                group_count=parameters["group_count"],
            ),
            "marketing_targets": lambda parameters: self._repository.db_report_marketing_targets(
                group_count=parameters["group_count"],
                min_group=parameters["min_group"],
            ),
            "top_products": lambda parameters: self._repository.db_report_top_products(limit=parameters["limit"]),
            "uk_customers_over_threshold": lambda parameters: self._repository.db_report_contacts_over_threshold(
                country_code=parameters["country_code"],
                threshold=parameters["threshold"],
            ),
            "data_integrity": lambda parameters: self._repository.db_report_data_integrity(),
        }

    def analytics_report_definitions(self) -> tuple[ReportDefinition, ...]:
        """Return catalog entries in stable display order.

        Returns:
            tuple[ReportDefinition, ...]: Registered report definitions.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        return REPORT_DEFINITIONS

    def analytics_report_run(
        self,
        report_name: str,
        year: int | None = None,
        limit: int | None = None,
    ) -> ReportResult:
        """Run one named report and wrap its rows in a result envelope.

        Args:
            report_name: Report identifier; dashes and case are normalized.
            year: Optional year for `total_revenue_for_year`.
            limit: Optional row limit for `top_products`.

        Returns:
            ReportResult: Report output envelope.

        Raises:
            UnknownReportError: Raised when the report name is not registered.
            ReportParameterError: Raised when a parameter is invalid or not accepted.
            MalformedInputDataError: Raised when the integrity guard finds violations.
            DataSourceUnavailableError: Raised when the backend cannot read the base relations.
        """

        normalized_report_name = report_name.strip().lower().replace("-", "_")
        definition = self._definitions_by_name.get(normalized_report_name)
        if definition is None:
            raise UnknownReportError(
                f"unknown report_name={report_name}",
                report_name=report_name,
                parameters={"year": year, "limit": limit},
            )

        parameters = self._analytics_resolve_parameters(definition, year=year, limit=limit)
        started_at = time.perf_counter()
        logger.debug("Running report %s with parameters %s", normalized_report_name, parameters)
        try:
            if self._config.integrity_check_enabled and normalized_report_name != "data_integrity":
                self._analytics_raise_for_integrity_violations()
            rows = self._report_handlers[normalized_report_name](parameters)
        except ReportingError as error:
            error.with_context(normalized_report_name, parameters)
            logger.warning("Report %s failed with parameters %s: %s", normalized_report_name, parameters, error)
            raise

        duration_ms = int((time.perf_counter() - started_at) * 1000)
        logger.info("Report %s completed: rows=%d duration_ms=%d", normalized_report_name, len(rows), duration_ms)
        return ReportResult(
            report_name=normalized_report_name,
            parameters=parameters,
            rows=tuple(rows),
            generated_at_utc=datetime.now(timezone.utc),
        )

    def analytics_dataset_refresh(self) -> dict[str, int] | None:
        """Reload the cached base relations when the backend keeps a snapshot.

        Returns:
            dict[str, int] | None: Loaded row counts per relation, or None when
            the backend reads live data on every report.

        Raises:
            DataSourceUnavailableError: Raised when the snapshot cannot be reloaded.
        """

        if not isinstance(self._repository, InMemoryReportService):
            return None
        dataset = self._repository.analytics_dataset_refresh()
        relation_counts = {
            "orders": len(dataset.orders),
            "order_lines": len(dataset.order_lines),
            "customers": len(dataset.customers),
            "products": len(dataset.products),
        }
        logger.info("Report dataset refreshed: %s", relation_counts)
        return relation_counts

    def _analytics_resolve_parameters(
        self,
        definition: ReportDefinition,
        year: int | None,
        limit: int | None,
    ) -> dict[str, Any]:
        """Validate caller parameters and merge configured report settings.

        Args:
            definition: Target report definition.
            year: Optional caller year.
            limit: Optional caller row limit.

        Returns:
            dict[str, Any]: Effective report parameters.

        Raises:
            ReportParameterError: Raised when a parameter is invalid or not accepted.
        """

        supplied_parameters = {"year": year, "limit": limit}
        for parameter_name, parameter_value in supplied_parameters.items():
            if parameter_value is not None and parameter_name not in definition.parameter_names:
                raise ReportParameterError(
                    f"{parameter_name} is not accepted by report {definition.report_name}",
                    report_name=definition.report_name,
                    parameters=supplied_parameters,
                )

        report_name = definition.report_name
        if report_name == "total_revenue_for_year":
            resolved_year = self._config.default_year if year is None else year
            if resolved_year < 1 or resolved_year > 9999:
                raise ReportParameterError(
                    f"year must be between 1 and 9999, got {resolved_year}",
                    report_name=report_name,
                    parameters={"year": resolved_year},
                )
            return {"year": resolved_year}
        if report_name == "customer_segments":
            return {"group_count": self._config.segment_group_count}
        if report_name == "marketing_targets":
            return {
                "group_count": self._config.segment_group_count,
                "min_group": self._config.marketing_min_group,
            }
        if report_name == "top_products":
            resolved_limit = self._config.top_products_limit if limit is None else limit
            if resolved_limit < 1 or resolved_limit > self._config.top_products_max_limit:
                raise ReportParameterError(
                    f"limit must be between 1 and {self._config.top_products_max_limit}, got {resolved_limit}",
                    report_name=report_name,
                    parameters={"limit": resolved_limit},
                )
            return {"limit": resolved_limit}
        if report_name == "uk_customers_over_threshold":
            return {
                "country_code": self._config.uk_country_code,
                "threshold": self._config.uk_payment_threshold,
            }
        return {}

    def _analytics_raise_for_integrity_violations(self) -> None:
        """Abort the report when the base relations violate invariants.

        Returns:
            None: Returns when every integrity counter is zero.

        Raises:
            MalformedInputDataError: Raised with the non-zero violation counters.
        """

        violation_counts = {
            record.check_name: record.violation_count
            for record in self._repository.db_report_data_integrity()
            if record.violation_count > 0
        }
        if violation_counts:
            details = ", ".join(f"{name}={count}" for name, count in violation_counts.items())
            raise MalformedInputDataError(
                f"base relations violate integrity checks: {details}",
                violation_counts=violation_counts,
            )


__all__ = ["REPORT_DEFINITIONS", "ReportCatalogService"]
