"""Tests for OrderSettings — unified settings with TOML source."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import click
import pytest

from orderctl.config.settings import OrderSettings
from orderctl.domain.discounts import DiscountBase


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = OrderSettings.from_cli(root=tmp_path)
        assert settings.root == tmp_path
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.discount.base is DiscountBase.ORIGINAL
        assert settings.db_path == tmp_path / ".orderctl" / "orders.db"

    def test_frozen(self, tmp_path: Path) -> None:
        settings = OrderSettings.from_cli(root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]

    def test_cli_flags(self, tmp_path: Path) -> None:
        settings = OrderSettings.from_cli(root=tmp_path, json_output=True, verbose=True)
        assert settings.json_output is True
        assert settings.verbose is True


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "orderctl.toml").write_text(
            '[discount]\nbase = "remaining"\nhigh_value_amount = "25"\n'
            '[store]\ndb_file = "shop.db"\n'
        )
        settings = OrderSettings.from_cli(root=tmp_path)
        assert settings.discount.base is DiscountBase.REMAINING
        assert settings.discount.high_value_amount == Decimal("25")
        assert settings.discount.bulk_min_quantity == 10
        assert settings.db_path.name == "shop.db"

    def test_root_from_config_parent(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "orderctl.toml").write_text("")
        nested = tmp_path / "sub"
        nested.mkdir()
        monkeypatch.chdir(nested)
        settings = OrderSettings.from_cli()
        assert settings.root == tmp_path.resolve()

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir()
        custom.write_text('[orders]\nnumber_prefix = "WEB"\n')
        settings = OrderSettings.from_cli(config_path=str(custom), root=tmp_path)
        assert settings.orders.number_prefix == "WEB"
        assert settings.config_path == custom

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "orderctl.toml").write_text("[discount\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            OrderSettings.from_cli(root=tmp_path)


class TestEnvOverrides:
    def test_env_beats_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "orderctl.toml").write_text('[orders]\nnumber_prefix = "TOML"\n')
        monkeypatch.setenv("ORDERCTL_ORDERS__NUMBER_PREFIX", "ENV")
        settings = OrderSettings.from_cli(root=tmp_path)
        assert settings.orders.number_prefix == "ENV"

    def test_cli_beats_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ORDERCTL_QUIET", "true")
        settings = OrderSettings.from_cli(root=tmp_path, quiet=False)
        assert settings.quiet is False
