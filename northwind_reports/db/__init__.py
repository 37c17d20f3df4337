"""Database layer package for all SQL boundaries."""

from .health import SQLAlchemyDatabaseHealthService
from .interfaces import (
	ContactPaymentRecord,
	CustomerPaymentRecord,
	CustomerRecord,
	CustomerSegmentRecord,
	DatabaseHealthPort,
	IntegrityViolationRecord,
	MonthlyGrowthRecord,
	OrderLineRecord,
	OrderRecord,
	ProductRecord,
	ProductRevenueRecord,
	ReportRepositoryPort,
	SalesDataset,
	SalesDatasetRepositoryPort,
	YearRevenueRecord,
)
from .report_queries import SQLAlchemyReportService
from .sales_dataset import SQLAlchemySalesDatasetService
from .session import db_create_engine

__all__ = [
	"ContactPaymentRecord",
	"CustomerPaymentRecord",
	"CustomerRecord",
	"CustomerSegmentRecord",
	"DatabaseHealthPort",
	"IntegrityViolationRecord",
	"MonthlyGrowthRecord",
	"OrderLineRecord",
	"OrderRecord",
	"ProductRecord",
	"ProductRevenueRecord",
	"ReportRepositoryPort",
	"SalesDataset",
	"SalesDatasetRepositoryPort",
	"SQLAlchemyDatabaseHealthService",
	"SQLAlchemyReportService",
	"SQLAlchemySalesDatasetService",
	"YearRevenueRecord",
	"db_create_engine",
]
