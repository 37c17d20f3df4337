"""Domain models and pure value logic used across application layer boundaries."""

from .errors import (
    DataSourceUnavailableError,
    MalformedInputDataError,
    ReportingError,
    ReportParameterError,
    UnknownReportError,
)
from .models import AppMetadata, HealthStatus
from .ntile import domain_ntile_assign
from .revenue import (
    DOMAIN_INTEGRITY_CHECK_NAMES,
    domain_line_invariant_violation,
    domain_line_revenue,
    domain_percent_change,
)

__all__ = [
    "DOMAIN_INTEGRITY_CHECK_NAMES",
    "AppMetadata",
    "DataSourceUnavailableError",
    "HealthStatus",
    "MalformedInputDataError",
    "ReportParameterError",
    "ReportingError",
    "UnknownReportError",
    "domain_line_invariant_violation",
    "domain_line_revenue",
    "domain_ntile_assign",
    "domain_percent_change",
]
