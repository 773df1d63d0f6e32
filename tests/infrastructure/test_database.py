"""Tests for SQLite engine setup and schema creation."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import inspect, text

from orderctl.infrastructure.database import init_database


class TestInitDatabase:
    def test_creates_tables(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path / ".orderctl" / "orders.db")
        try:
            tables = set(inspect(engine).get_table_names())
        finally:
            engine.dispose()
        assert tables == {
            "customers",
            "products",
            "orders",
            "order_items",
            "order_status_history",
        }

    def test_creates_parent_directory(self, tmp_path: Path) -> None:
        db = tmp_path / "nested" / "dir" / "orders.db"
        engine = init_database(db)
        engine.dispose()
        assert db.is_file()

    def test_idempotent(self, tmp_path: Path) -> None:
        db = tmp_path / "orders.db"
        init_database(db).dispose()
        engine = init_database(db)
        try:
            assert "orders" in inspect(engine).get_table_names()
        finally:
            engine.dispose()

    def test_pragmas(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path / "orders.db")
        try:
            with engine.connect() as conn:
                assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
                assert conn.execute(text("PRAGMA journal_mode")).scalar() == "wal"
        finally:
            engine.dispose()
