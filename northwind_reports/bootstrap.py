"""Application bootstrap wiring for startup validation and dependency assembly."""

from fastapi import FastAPI
from sqlalchemy import Engine

from northwind_reports.analytics import InMemoryReportService, ReportCatalogConfig, ReportCatalogService
from northwind_reports.api import create_api_application
from northwind_reports.config import AppSettings, config_load_settings
from northwind_reports.db import (
    ReportRepositoryPort,
    SQLAlchemyDatabaseHealthService,
    SQLAlchemyReportService,
    SQLAlchemySalesDatasetService,
    db_create_engine,
)


def bootstrap_create_application() -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    settings = config_load_settings()
    engine = db_create_engine(database_url=settings.database_url)
    return create_api_application(
        settings=settings,
        db_health_service=SQLAlchemyDatabaseHealthService(engine=engine),
        report_catalog=bootstrap_create_report_catalog(settings=settings, engine=engine),
    )


def bootstrap_create_report_catalog(
    settings: AppSettings,
    engine: Engine | None = None,
    report_backend: str | None = None,
) -> ReportCatalogService:
    """Build report catalog for HTTP and CLI surfaces.

    Args:
        settings: Validated runtime settings.
        engine: Optional engine to reuse; created from settings when absent.
        report_backend: Optional backend override (`sql` or `memory`).

    Returns:
        ReportCatalogService: Fully wired report catalog.

    Raises:
        ValueError: Raised when the backend override is unsupported.
    """

    resolved_engine = engine or db_create_engine(database_url=settings.database_url)
    repository = bootstrap_create_report_repository(
        engine=resolved_engine,
        report_backend=report_backend or settings.report_backend,
    )
    return ReportCatalogService(repository=repository, config=bootstrap_build_catalog_config(settings))


def bootstrap_create_report_repository(engine: Engine, report_backend: str) -> ReportRepositoryPort:
    """Select the report backend implementation.

    Args:
        engine: SQLAlchemy engine for Northwind access.
        report_backend: `sql` for pushed-down queries, `memory` for in-process aggregation.

    Returns:
        ReportRepositoryPort: Report backend.

    Raises:
        ValueError: Raised when the backend name is unsupported.
    """

    normalized_backend = report_backend.strip().lower()
    if normalized_backend == "sql":
        return SQLAlchemyReportService(engine=engine)
    if normalized_backend == "memory":
        return InMemoryReportService(dataset_repository=SQLAlchemySalesDatasetService(engine=engine))
    raise ValueError(f"unsupported report_backend={report_backend}")


def bootstrap_build_catalog_config(settings: AppSettings) -> ReportCatalogConfig:
    """Map runtime settings to report catalog configuration.

    Args:
        settings: Validated runtime settings.

    Returns:
        ReportCatalogConfig: Static report configuration.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return ReportCatalogConfig(
        default_year=settings.report_default_year,
        integrity_check_enabled=settings.report_integrity_check_enabled,
        segment_group_count=settings.segment_group_count,
        marketing_min_group=settings.marketing_min_group,
        top_products_limit=settings.top_products_limit,
        top_products_max_limit=settings.top_products_max_limit,
        uk_country_code=settings.uk_country_code,
        uk_payment_threshold=settings.uk_payment_threshold,
    )
