"""Database service loading the base sales relations into memory."""

from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from northwind_reports.db.interfaces import (
    CustomerRecord,
    OrderLineRecord,
    OrderRecord,
    ProductRecord,
    SalesDataset,
    SalesDatasetRepositoryPort,
)
from northwind_reports.domain import DataSourceUnavailableError

logger = logging.getLogger(__name__)


class SQLAlchemySalesDatasetService(SalesDatasetRepositoryPort):
    """SQLAlchemy implementation reading all base relations in one snapshot."""

    _ORDERS_QUERY = "SELECT order_id, customer_id, order_date FROM orders ORDER BY order_id asc"
    _ORDER_LINES_QUERY = (
        "SELECT order_id, product_id, CAST(unit_price AS numeric) AS unit_price, quantity, "
        "CAST(discount AS numeric) AS discount "
        "FROM order_details ORDER BY order_id asc, product_id asc"
    )
    _CUSTOMERS_QUERY = (
        "SELECT customer_id, company_name, contact_name, country FROM customers ORDER BY customer_id asc"
    )
    _PRODUCTS_QUERY = "SELECT product_id, product_name FROM products ORDER BY product_id asc"

    def __init__(self, engine: Engine):
        """Initialize dataset loader dependencies.

        Args:
            engine: SQLAlchemy engine used for base-relation reads.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when engine is invalid.
        """

        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

    def db_sales_dataset_load(self) -> SalesDataset:
        """Load all base relations inside one repeatable-read transaction.

        Returns:
            SalesDataset: Snapshot of orders, order lines, customers and products.

        Raises:
            DataSourceUnavailableError: Raised when the database read fails.
        """

        try:
            with self._engine.connect() as connection:
                connection = connection.execution_options(isolation_level="REPEATABLE READ")
                with connection.begin():
                    order_rows = connection.execute(text(self._ORDERS_QUERY)).mappings().all()
                    order_line_rows = connection.execute(text(self._ORDER_LINES_QUERY)).mappings().all()
                    customer_rows = connection.execute(text(self._CUSTOMERS_QUERY)).mappings().all()
                    product_rows = connection.execute(text(self._PRODUCTS_QUERY)).mappings().all()
        except SQLAlchemyError as error:
            raise DataSourceUnavailableError("sales dataset read failed") from error

        dataset = SalesDataset(
            orders=tuple(
                OrderRecord(
                    order_id=int(row["order_id"]),
                    customer_id=row["customer_id"],
                    order_date=row["order_date"],
                )
                for row in order_rows
            ),
            order_lines=tuple(
                OrderLineRecord(
                    order_id=int(row["order_id"]),
                    product_id=int(row["product_id"]),
                    unit_price=Decimal(row["unit_price"]),
                    quantity=int(row["quantity"]),
                    discount=Decimal(row["discount"]),
                )
                for row in order_line_rows
            ),
            customers=tuple(
                CustomerRecord(
                    customer_id=row["customer_id"],
                    company_name=row["company_name"],
                    contact_name=row["contact_name"],
                    country=row["country"],
                )
                for row in customer_rows
            ),
            products=tuple(
                ProductRecord(product_id=int(row["product_id"]), product_name=row["product_name"])
                for row in product_rows
            ),
        )
        logger.info(
            "Loaded sales dataset: orders=%d order_lines=%d customers=%d products=%d",
            len(dataset.orders),
            len(dataset.order_lines),
            len(dataset.customers),
            len(dataset.products),
        )
        return dataset


__all__ = ["SQLAlchemySalesDatasetService"]
