"""Report API router composition for catalog listing and report execution."""

from __future__ import annotations

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from northwind_reports.analytics import ReportCatalogPort, ReportDefinition, analytics_serialize_result
from northwind_reports.domain import (
    DataSourceUnavailableError,
    MalformedInputDataError,
    ReportingError,
    ReportParameterError,
    UnknownReportError,
)

_API_HTTP_UNPROCESSABLE_CONTENT = 422


def api_create_reports_router(report_catalog: ReportCatalogPort) -> APIRouter:
    """Create report router exposing catalog and execution endpoints.

    Args:
        report_catalog: Analytics-layer report catalog.

    Returns:
        APIRouter: Router exposing `/reports` endpoints.

    Raises:
        ValueError: Raised when report_catalog is invalid.
    """

    if report_catalog is None:
        raise ValueError("report_catalog must not be None")

    router = APIRouter(prefix="/reports", tags=["reports"])

    @router.get("")
    def api_report_list() -> JSONResponse:
        """Return registered report definitions.

        Returns:
            JSONResponse: Catalog listing payload.

        Raises:
            RuntimeError: Raised when catalog metadata is unavailable.
        """

        definitions = report_catalog.analytics_report_definitions()
        payload = {
            "items": [api_serialize_report_definition(definition) for definition in definitions],
            "returned": len(definitions),
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.post("/refresh")
    def api_report_dataset_refresh() -> JSONResponse:
        """Reload the cached report dataset for snapshot-backed backends.

        Returns:
            JSONResponse: Loaded relation counts, a skipped status for live
            backends, or a typed error payload.

        Raises:
            RuntimeError: Raised when refresh fails unexpectedly.
        """

        try:
            relation_counts = report_catalog.analytics_dataset_refresh()
        except DataSourceUnavailableError as error:
            return api_report_error_response(error, "DATA_SOURCE_UNAVAILABLE", status.HTTP_503_SERVICE_UNAVAILABLE)

        if relation_counts is None:
            payload = {"status": "skipped", "detail": "report backend reads live data"}
        else:
            payload = {"status": "refreshed", "counts": relation_counts}
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.get("/{report_name}")
    def api_report_run(
        report_name: str,
        year: int | None = Query(default=None),
        limit: int | None = Query(default=None),
    ) -> JSONResponse:
        """Run one report and return its rows.

        Args:
            report_name: Report identifier.
            year: Optional year for the yearly revenue report.
            limit: Optional row limit for the top products report.

        Returns:
            JSONResponse: Report envelope or typed error payload.

        Raises:
            RuntimeError: Raised when execution fails unexpectedly.
        """

        try:
            result = report_catalog.analytics_report_run(report_name=report_name, year=year, limit=limit)
        except UnknownReportError as error:
            return api_report_error_response(error, "UNKNOWN_REPORT", status.HTTP_404_NOT_FOUND)
        except ReportParameterError as error:
            return api_report_error_response(error, "INVALID_REPORT_PARAMETER", status.HTTP_400_BAD_REQUEST)
        except MalformedInputDataError as error:
            return api_report_error_response(
                error,
                "MALFORMED_INPUT_DATA",
                _API_HTTP_UNPROCESSABLE_CONTENT,
                extra={"violation_counts": error.violation_counts},
            )
        except DataSourceUnavailableError as error:
            return api_report_error_response(error, "DATA_SOURCE_UNAVAILABLE", status.HTTP_503_SERVICE_UNAVAILABLE)

        return JSONResponse(content=analytics_serialize_result(result), status_code=status.HTTP_200_OK)

    return router


def api_serialize_report_definition(definition: ReportDefinition) -> dict[str, object]:
    """Serialize one report definition to JSON payload.

    Args:
        definition: Catalog entry.

    Returns:
        dict[str, object]: JSON-serializable definition payload.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return {
        "report_name": definition.report_name,
        "description": definition.description,
        "parameters": list(definition.parameter_names),
        "path": f"/reports/{definition.report_name}",
    }


def api_report_error_response(
    error: ReportingError,
    code: str,
    status_code: int,
    extra: dict[str, object] | None = None,
) -> JSONResponse:
    """Build a typed error response carrying report context.

    Args:
        error: Reporting failure.
        code: Deterministic error code.
        status_code: HTTP status code.
        extra: Optional additional payload fields.

    Returns:
        JSONResponse: Error payload response.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    payload: dict[str, object] = {
        "status": "error",
        "code": code,
        "message": str(error),
        "report_name": error.report_name,
        "parameters": {name: None if value is None else str(value) for name, value in error.parameters.items()},
    }
    if error.source_name is not None:
        payload["source"] = error.source_name
    if extra:
        payload.update(extra)
    return JSONResponse(content=payload, status_code=status_code)


__all__ = ["api_create_reports_router", "api_report_error_response", "api_serialize_report_definition"]
