"""FastAPI application factory for the reporting service."""

from fastapi import FastAPI

from northwind_reports.analytics import ReportCatalogPort
from northwind_reports.config import AppSettings
from northwind_reports.db import DatabaseHealthPort
from northwind_reports.domain import AppMetadata

from .routers import api_create_health_router, api_create_reports_router


def create_api_application(
    settings: AppSettings,
    db_health_service: DatabaseHealthPort,
    report_catalog: ReportCatalogPort,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata.
        db_health_service: Database health service used by health endpoints.
        report_catalog: Report catalog used by report endpoints.

    Returns:
        FastAPI: Framework application instance with health and report routes.

    Raises:
        RuntimeError: Raised if application initialization fails.
    """
    metadata = AppMetadata(
        application_name="northwind-reports",
        environment_name=settings.environment_name,
        report_backend=settings.report_backend,
    )
    application = FastAPI(title="Northwind Reports")

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return service metadata for bootstrap verification.

        Returns:
            dict[str, str]: Service name, environment and report backend.

        Raises:
            RuntimeError: Raised if route handler cannot produce a response.
        """

        return {
            "service": metadata.application_name,
            "status": "ready",
            "environment": metadata.environment_name,
            "report_backend": metadata.report_backend,
        }

    application.include_router(api_create_health_router(db_health_service=db_health_service))
    application.include_router(api_create_reports_router(report_catalog=report_catalog))

    return application
