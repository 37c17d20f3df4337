"""Project-native typed exceptions for reporting failures."""

from __future__ import annotations

from typing import Any


class ReportingError(Exception):
    """Base exception for report execution failures.

    Attributes:
        report_name: Report that failed, when known.
        parameters: Report parameters in effect when the failure occurred.
        source_name: Query or step label set by the raising layer, when it differs from the report.
        source_parameters: Bound parameters of that query or step.
    """

    def __init__(
        self,
        message: str,
        report_name: str | None = None,
        parameters: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.report_name = report_name
        self.parameters = dict(parameters or {})
        self.source_name: str | None = None
        self.source_parameters: dict[str, Any] = {}

    def with_context(self, report_name: str, parameters: dict[str, Any]) -> ReportingError:
        """Stamp the caller-facing report context onto this error.

        Context set by the raising layer (for example the query that failed
        while the integrity audit guarded another report) is kept as source
        detail instead of being reported as the failing report.

        Args:
            report_name: Requested report name.
            parameters: Effective caller-facing report parameters.

        Returns:
            ReportingError: This exception instance.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        if self.report_name is not None and (self.report_name, self.parameters) != (report_name, parameters):
            self.source_name = self.report_name
            self.source_parameters = self.parameters
        self.report_name = report_name
        self.parameters = dict(parameters)
        return self


class DataSourceUnavailableError(ReportingError, ConnectionError):
    """Database connection or query failure while reading base relations."""


class MalformedInputDataError(ReportingError, ValueError):
    """Base relations violate referential or numeric invariants.

    Attributes:
        violation_counts: Non-zero violation counters keyed by check name.
    """

    def __init__(
        self,
        message: str,
        violation_counts: dict[str, int],
        report_name: str | None = None,
        parameters: dict[str, Any] | None = None,
    ):
        super().__init__(message=message, report_name=report_name, parameters=parameters)
        self.violation_counts = dict(violation_counts)


class ReportParameterError(ReportingError, ValueError):
    """Report parameter is missing, malformed or out of range."""


class UnknownReportError(ReportingError, LookupError):
    """Requested report name is not registered in the catalog."""
