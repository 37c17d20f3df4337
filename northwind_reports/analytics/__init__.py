"""Analytics layer package for report aggregation boundaries."""

from .catalog import REPORT_DEFINITIONS, ReportCatalogService
from .engine import (
	analytics_audit_integrity,
	analytics_contacts_over_threshold,
	analytics_customer_payments,
	analytics_customer_segments,
	analytics_marketing_targets,
	analytics_monthly_growth,
	analytics_top_products,
	analytics_total_revenue_for_year,
)
from .interfaces import ReportCatalogConfig, ReportCatalogPort, ReportDefinition, ReportResult
from .memory_service import InMemoryReportService
from .serialization import analytics_serialize_result, analytics_serialize_row, analytics_serialize_value

__all__ = [
	"REPORT_DEFINITIONS",
	"InMemoryReportService",
	"ReportCatalogConfig",
	"ReportCatalogPort",
	"ReportCatalogService",
	"ReportDefinition",
	"ReportResult",
	"analytics_audit_integrity",
	"analytics_contacts_over_threshold",
	"analytics_customer_payments",
	"analytics_customer_segments",
	"analytics_marketing_targets",
	"analytics_monthly_growth",
	"analytics_serialize_result",
	"analytics_serialize_row",
	"analytics_serialize_value",
	"analytics_top_products",
	"analytics_total_revenue_for_year",
]
