"""Main module entrypoint for local runtime execution.

This module validates startup configuration and either launches the FastAPI
service or runs one report from the command line.
"""

import argparse
import json
import logging

import uvicorn
from tabulate import tabulate

from northwind_reports.analytics import REPORT_DEFINITIONS, ReportResult, analytics_serialize_result
from northwind_reports.bootstrap import bootstrap_create_application, bootstrap_create_report_catalog
from northwind_reports.config import config_load_settings
from northwind_reports.domain import MalformedInputDataError, ReportingError


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        SystemExit: Raised with code 1 when a report fails.
    """

    argument_parser = argparse.ArgumentParser(description="Northwind reports runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "reports", "report"),
        help="Runtime command: `api` starts server, `reports` lists the catalog, `report` runs one report",
        type=str,
    )
    argument_parser.add_argument(
        "report_name",
        nargs="?",
        help="Report name for the `report` command",
        type=str,
    )
    argument_parser.add_argument("--year", dest="year", type=int, help="Year for `total_revenue_for_year`")
    argument_parser.add_argument("--limit", dest="limit", type=int, help="Row limit for `top_products`")
    argument_parser.add_argument(
        "--format",
        dest="output_format",
        default="table",
        choices=("table", "json"),
        help="Output format for the `report` command",
    )
    argument_parser.add_argument(
        "--backend",
        dest="report_backend",
        choices=("sql", "memory"),
        help="Report backend override; defaults to REPORT_BACKEND",
    )
    parsed_arguments = argument_parser.parse_args()

    if parsed_arguments.command == "reports":
        rows = [
            (definition.report_name, ", ".join(definition.parameter_names) or "-", definition.description)
            for definition in REPORT_DEFINITIONS
        ]
        print(tabulate(rows, headers=("report", "parameters", "description")))
        return

    settings = config_load_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if parsed_arguments.command == "report":
        if not parsed_arguments.report_name:
            argument_parser.error("the `report` command requires a report name")
        report_catalog = bootstrap_create_report_catalog(
            settings=settings,
            report_backend=parsed_arguments.report_backend,
        )
        try:
            result = report_catalog.analytics_report_run(
                report_name=parsed_arguments.report_name,
                year=parsed_arguments.year,
                limit=parsed_arguments.limit,
            )
        except ReportingError as error:
            main_print_reporting_error(error)
            raise SystemExit(1) from error
        print(main_render_report(result, output_format=parsed_arguments.output_format))
        return

    application = bootstrap_create_application()
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
    )


def main_render_report(result: ReportResult, output_format: str) -> str:
    """Render one report result for terminal output.

    Args:
        result: Report result envelope.
        output_format: `table` or `json`.

    Returns:
        str: Rendered report text.

    Raises:
        ValueError: Raised when the output format is unsupported.
    """

    payload = analytics_serialize_result(result)
    if output_format == "json":
        return json.dumps(payload, indent=2)
    if output_format != "table":
        raise ValueError(f"unsupported output_format={output_format}")

    parameters_text = ", ".join(f"{name}={value}" for name, value in payload["parameters"].items())
    header_line = f"{result.report_name} ({parameters_text or 'no parameters'}): {len(result.rows)} rows"
    if not payload["items"]:
        return header_line
    return header_line + "\n" + tabulate(payload["items"], headers="keys", missingval="-", disable_numparse=True)


def main_print_reporting_error(error: ReportingError) -> None:
    """Print report failure details to stdout.

    Args:
        error: Reporting failure.

    Returns:
        None: Prints diagnostics to stdout as side effect.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    print(f"REPORT_FAILED: {error.report_name or '-'}: {error}")
    if isinstance(error, MalformedInputDataError):
        for check_name, violation_count in error.violation_counts.items():
            print(f"  {check_name}: {violation_count}")


if __name__ == "__main__":
    main()
