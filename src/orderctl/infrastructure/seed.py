"""Demo data for a fresh store.

Four customers (one per segment), five products, four orders in different
fulfilment states, and their status history. Seeding is skipped when the
store already has customers.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from decimal import Decimal

from sqlalchemy import func, insert, select
from sqlalchemy.engine import Engine

from orderctl.infrastructure.database.schema import (
    customers,
    order_items,
    order_status_history,
    orders,
    products,
)
from orderctl.infrastructure.repositories.orders import to_db_time

logger = logging.getLogger(__name__)

_CUSTOMERS = [
    ("John Doe", "john.doe@example.com", "standard"),
    ("Jane Smith", "jane.smith@example.com", "premium"),
    ("Bob Johnson", "bob.johnson@example.com", "gold"),
    ("Alice Brown", "alice.brown@example.com", "platinum"),
]

_PRODUCTS = [
    ("Laptop", "High performance laptop", "999.99", 50),
    ("Smartphone", "Latest smartphone model", "699.99", 100),
    ("Headphones", "Noise cancelling headphones", "199.99", 75),
    ("Smartwatch", "Fitness and health tracker", "249.99", 60),
    ("Tablet", "10-inch tablet with stylus", "349.99", 40),
]

# (customer index, days ago, status, total, discount, final)
_ORDERS = [
    (0, 10, "delivered", "1299.98", "0", "1299.98"),
    (1, 5, "processing", "899.98", "45.00", "854.98"),
    (2, 2, "shipped", "549.98", "55.00", "494.98"),
    (3, 1, "pending", "1749.97", "262.50", "1487.47"),
]

# (order index, product index, quantity, unit price, line discount)
_ITEMS = [
    (0, 0, 1, "999.99", "0"),
    (0, 2, 1, "199.99", "0"),
    (1, 1, 1, "699.99", "35.00"),
    (1, 2, 1, "199.99", "10.00"),
    (2, 3, 1, "249.99", "25.00"),
    (2, 2, 1, "199.99", "20.00"),
    (2, 4, 1, "99.99", "10.00"),
    (3, 0, 1, "999.99", "150.00"),
    (3, 1, 1, "699.99", "105.00"),
    (3, 3, 2, "249.99", "75.00"),
]

# (order index, days ago, old status, new status)
_HISTORY = [
    (0, 9, "pending", "processing"),
    (0, 8, "processing", "shipped"),
    (0, 6, "shipped", "delivered"),
    (1, 4, "pending", "processing"),
    (2, 1, "pending", "processing"),
    (2, 0, "processing", "shipped"),
]


def seed_database(engine: Engine, *, now: datetime | None = None) -> dict[str, int]:
    """Insert the demo data set in one transaction.

    Returns counts of inserted rows per table; all zero when the store
    already contains customers.
    """
    now = now or datetime.now(UTC)
    counts = {"customers": 0, "products": 0, "orders": 0, "order_items": 0, "history": 0}

    with engine.begin() as conn:
        if conn.execute(select(func.count(customers.c.id))).scalar_one():
            logger.debug("Store already seeded; skipping")
            return counts

        customer_ids = [
            conn.execute(
                insert(customers).values(
                    name=name, email=email, segment=segment, created_at=to_db_time(now)
                )
            ).inserted_primary_key[0]
            for name, email, segment in _CUSTOMERS
        ]
        product_ids = [
            conn.execute(
                insert(products).values(
                    name=name, description=desc, price=price, stock_quantity=stock
                )
            ).inserted_primary_key[0]
            for name, desc, price, stock in _PRODUCTS
        ]

        order_ids = []
        for n, (cust, days_ago, status, total, discount, final) in enumerate(_ORDERS):
            placed = now - timedelta(days=days_ago)
            order_ids.append(
                conn.execute(
                    insert(orders).values(
                        order_number=f"ORD{placed:%Y%m%d}{n + 1:04d}",
                        order_date=to_db_time(placed),
                        status=status,
                        total_amount=str(Decimal(total)),
                        discount_amount=str(Decimal(discount)),
                        final_amount=str(Decimal(final)),
                        customer_id=customer_ids[cust],
                    )
                ).inserted_primary_key[0]
            )

        conn.execute(
            insert(order_items),
            [
                {
                    "order_id": order_ids[o],
                    "product_id": product_ids[p],
                    "quantity": qty,
                    "unit_price": price,
                    "discount": disc,
                }
                for o, p, qty, price, disc in _ITEMS
            ],
        )
        conn.execute(
            insert(order_status_history),
            [
                {
                    "order_id": order_ids[o],
                    "old_status": old,
                    "new_status": new,
                    "changed_at": to_db_time(now - timedelta(days=days_ago)),
                    "changed_by": "System",
                    "notes": None,
                }
                for o, days_ago, old, new in _HISTORY
            ],
        )

    counts.update(
        customers=len(_CUSTOMERS),
        products=len(_PRODUCTS),
        orders=len(_ORDERS),
        order_items=len(_ITEMS),
        history=len(_HISTORY),
    )
    logger.info("Seeded store: %s", counts)
    return counts
