"""Health endpoint router composition for app and Northwind database checks."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from northwind_reports.db import DatabaseHealthPort


def api_create_health_router(db_health_service: DatabaseHealthPort) -> APIRouter:
    """Create health-check router reporting app state and base-relation readability.

    Args:
        db_health_service: DB-layer health service interface.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when db_health_service is invalid.
    """

    if db_health_service is None:
        raise ValueError("db_health_service must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        """Return application and database health state.

        Returns:
            JSONResponse: 200 when base relations are readable, 503 otherwise.

        Raises:
            RuntimeError: Raised when the connection label cannot be rendered.
        """

        target = db_health_service.db_connection_label()
        try:
            db_health = db_health_service.db_check_health()
        except ConnectionError as error:
            payload = {
                "status": "degraded",
                "app": "up",
                "database": {"status": "down", "detail": str(error), "target": target},
            }
            return JSONResponse(content=payload, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

        payload = {
            "status": "ok",
            "app": "up",
            "database": {"status": db_health.status, "detail": db_health.detail, "target": target},
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router
