"""BaseService — foundation for orderctl services.

Every service receives a :class:`Store` at construction time and reaches
the database only through the store's repositories.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from orderctl.config.settings import OrderSettings
    from orderctl.infrastructure.store import Store


class BaseService:
    """Base for service-layer classes.

    Usage::

        class OrderService(BaseService):
            def get_order(self, order_id: int) -> ServiceResult:
                order = self._store.orders.get_by_id(order_id)
                ...
    """

    def __init__(self, store: Store) -> None:
        self._store = store

    @property
    def settings(self) -> OrderSettings:
        return self._store.settings
