"""Database health service implementations for connectivity checks."""

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from northwind_reports.domain import HealthStatus

from .interfaces import DatabaseHealthPort


class SQLAlchemyDatabaseHealthService(DatabaseHealthPort):
    """Database health service backed by SQLAlchemy engine connectivity checks."""

    _BASE_RELATION_COUNT_QUERY = (
        "SELECT "
        "(SELECT COUNT(*) FROM orders) AS order_count, "
        "(SELECT COUNT(*) FROM order_details) AS order_line_count"
    )

    def __init__(self, engine: Engine):
        """Initialize database health service.

        Args:
            engine: SQLAlchemy engine used for connectivity checks.

        Raises:
            ValueError: Raised when engine is None.
        """

        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

    def db_connection_label(self) -> str:
        """Return the target database URL for diagnostics.

        Returns:
            str: Rendered engine URL string with the password hidden.

        Raises:
            RuntimeError: Raised if URL rendering fails.
        """

        return self._engine.url.render_as_string(hide_password=True)

    def db_check_health(self) -> HealthStatus:
        """Verify connectivity and that the base sales relations are readable.

        Returns:
            HealthStatus: Health payload with status and diagnostic detail.

        Raises:
            ConnectionError: Raised when connectivity check fails.
        """

        try:
            with self._engine.connect() as connection:
                row = connection.execute(text(self._BASE_RELATION_COUNT_QUERY)).mappings().one()
        except SQLAlchemyError as error:
            raise ConnectionError("database connectivity check failed") from error
        return HealthStatus(
            status="ok",
            detail=f"orders={row['order_count']} order_details={row['order_line_count']}",
        )
