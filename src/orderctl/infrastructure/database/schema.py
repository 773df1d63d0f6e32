"""SQLAlchemy Core table definitions for the orderctl database.

Money columns are stored as TEXT holding the exact ``Decimal`` string so
values round-trip without binary floating point. Timestamps are ISO-8601
TEXT in UTC.
"""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Index, Integer, MetaData, Table, Text

metadata = MetaData()

customers = Table(
    "customers",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
    Column("email", Text, nullable=False, server_default=""),
    Column("segment", Text, nullable=False, server_default="standard"),
    Column("created_at", Text, nullable=False),
    Column("updated_at", Text),
)

products = Table(
    "products",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
    Column("description", Text, nullable=False, server_default=""),
    Column("price", Text, nullable=False),
    Column("stock_quantity", Integer, nullable=False, server_default="0"),
)

orders = Table(
    "orders",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("order_number", Text, nullable=False, unique=True),
    Column("order_date", Text, nullable=False),
    Column("status", Text, nullable=False),
    Column("total_amount", Text, nullable=False),
    Column("discount_amount", Text, nullable=False, server_default="0"),
    Column("final_amount", Text, nullable=False),
    Column("customer_id", Integer, ForeignKey("customers.id"), nullable=False),
)

order_items = Table(
    "order_items",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("order_id", Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False),
    Column("product_id", Integer, ForeignKey("products.id"), nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("unit_price", Text, nullable=False),
    Column("discount", Text, nullable=False, server_default="0"),
)

order_status_history = Table(
    "order_status_history",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("order_id", Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False),
    Column("old_status", Text, nullable=False),
    Column("new_status", Text, nullable=False),
    Column("changed_at", Text, nullable=False),
    Column("changed_by", Text),
    Column("notes", Text),
)

Index("ix_orders_customer", orders.c.customer_id)
Index("ix_orders_status", orders.c.status)
Index("ix_orders_date", orders.c.order_date)
Index("ix_order_items_order", order_items.c.order_id)
Index("ix_history_order", order_status_history.c.order_id)
