"""Store — the single persistence dependency injected into services.

Owns the SQLAlchemy engine for ``{root}/.orderctl/{db_file}`` and hands
out repositories bound to it. Constructed once per CLI invocation from
:class:`OrderSettings`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from orderctl.infrastructure.database.engine import init_database
from orderctl.infrastructure.repositories.catalog import CatalogRepository
from orderctl.infrastructure.repositories.orders import OrderRepository

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from orderctl.config.settings import OrderSettings

logger = logging.getLogger(__name__)


class Store:
    """Database access for services.

    Repositories are created once and share the engine; they hold no
    per-request state.
    """

    def __init__(self, settings: OrderSettings) -> None:
        self._settings = settings
        self._engine: Engine = init_database(settings.db_path, echo=settings.store.echo)
        self._orders = OrderRepository(self._engine)
        self._catalog = CatalogRepository(self._engine)
        logger.debug("Opened store at %s", settings.db_path)

    @property
    def settings(self) -> OrderSettings:
        return self._settings

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def orders(self) -> OrderRepository:
        return self._orders

    @property
    def catalog(self) -> CatalogRepository:
        return self._catalog

    def close(self) -> None:
        """Dispose of pooled connections."""
        self._engine.dispose()
