"""SQLite database engine and schema via SQLAlchemy Core."""

from orderctl.infrastructure.database.engine import create_db_engine, init_database
from orderctl.infrastructure.database.schema import (
    customers,
    metadata,
    order_items,
    order_status_history,
    orders,
    products,
)

__all__ = [
    "create_db_engine",
    "customers",
    "init_database",
    "metadata",
    "order_items",
    "order_status_history",
    "orders",
    "products",
]
