"""Catalog repository — customers and products."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import func, insert, select
from sqlalchemy.engine import Engine

from orderctl.domain.models import Customer, Product
from orderctl.domain.types import CustomerSegment
from orderctl.infrastructure.database.schema import customers, products
from orderctl.infrastructure.repositories.orders import to_db_time


def _customer(row: Any) -> Customer:
    return Customer(id=row["id"], name=row["name"], email=row["email"], segment=row["segment"])


def _product(row: Any) -> Product:
    return Product(
        id=row["id"],
        name=row["name"],
        description=row["description"],
        price=Decimal(row["price"]),
        stock_quantity=row["stock_quantity"],
    )


class CatalogRepository:
    """Encapsulates SQL for customer and product lookups."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def count_customers(self) -> int:
        with self._engine.connect() as conn:
            return int(conn.execute(select(func.count(customers.c.id))).scalar_one() or 0)

    def get_customer(self, customer_id: int) -> Customer | None:
        with self._engine.connect() as conn:
            row = (
                conn.execute(select(customers).where(customers.c.id == customer_id))
                .mappings()
                .first()
            )
        return _customer(row) if row is not None else None

    def list_customers(self, *, segment: CustomerSegment | None = None) -> list[Customer]:
        stmt = select(customers).order_by(customers.c.id)
        if segment is not None:
            stmt = stmt.where(customers.c.segment == str(segment))
        with self._engine.connect() as conn:
            return [_customer(r) for r in conn.execute(stmt).mappings()]

    def add_customer(
        self,
        name: str,
        *,
        email: str = "",
        segment: CustomerSegment = CustomerSegment.STANDARD,
    ) -> Customer:
        with self._engine.begin() as conn:
            new_id = conn.execute(
                insert(customers).values(
                    name=name,
                    email=email,
                    segment=str(segment),
                    created_at=to_db_time(datetime.now(UTC)),
                )
            ).inserted_primary_key[0]
        return Customer(id=int(new_id), name=name, email=email, segment=segment)

    def get_products(self, product_ids: list[int]) -> dict[int, Product]:
        """Products keyed by id; unknown ids are absent from the result."""
        if not product_ids:
            return {}
        stmt = select(products).where(products.c.id.in_(product_ids))
        with self._engine.connect() as conn:
            return {r["id"]: _product(r) for r in conn.execute(stmt).mappings()}

    def list_products(self) -> list[Product]:
        with self._engine.connect() as conn:
            rows = conn.execute(select(products).order_by(products.c.id)).mappings()
            return [_product(r) for r in rows]

    def add_product(
        self,
        name: str,
        price: Decimal,
        *,
        description: str = "",
        stock_quantity: int = 0,
    ) -> Product:
        with self._engine.begin() as conn:
            new_id = conn.execute(
                insert(products).values(
                    name=name,
                    description=description,
                    price=str(price),
                    stock_quantity=stock_quantity,
                )
            ).inserted_primary_key[0]
        return Product(
            id=int(new_id),
            name=name,
            description=description,
            price=price,
            stock_quantity=stock_quantity,
        )
