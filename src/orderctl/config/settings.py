"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``ORDERCTL_*`` prefix, ``__`` for nested sections
  3. TOML file    — ``orderctl.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from orderctl.config.discovery import find_config
from orderctl.config.models import AnalyticsConfig, DiscountConfig, OrdersConfig, StoreConfig

# Config file in effect while OrderSettings is being constructed.
_active_toml: ContextVar[Path | None] = ContextVar("_active_toml", default=None)


class OrderSettings(BaseSettings):
    """Unified settings for the orderctl CLI and services.

    Attributes:
        root: Data directory; the store lives at ``{root}/.orderctl/``.
            Parent of ``orderctl.toml``, or CWD if no config was found.
        config_path: The TOML file in effect, if any.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="ORDERCTL_",
        env_nested_delimiter="__",
    )

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    store: StoreConfig = Field(default_factory=StoreConfig)
    discount: DiscountConfig = Field(default_factory=DiscountConfig)
    orders: OrdersConfig = Field(default_factory=OrdersConfig)
    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [init_settings, env_settings]
        toml_path = _active_toml.get()
        if toml_path is not None:
            sources.append(TomlConfigSettingsSource(settings_cls, toml_file=toml_path))
        return tuple(sources)

    @property
    def db_path(self) -> Path:
        return self.root / ".orderctl" / self.store.db_file

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        **cli_flags: Any,
    ) -> OrderSettings:
        """Build settings for one CLI invocation.

        An explicit *config_path* wins over walk-up discovery from *root*
        (or CWD). Without an explicit *root*, the config file's directory
        becomes the data root.

        Raises:
            click.ClickException: If the config file is not valid TOML.
        """
        toml_path = _resolve_toml(config_path, root)
        if root is None:
            root = toml_path.parent if toml_path else Path.cwd()

        token = _active_toml.set(toml_path)
        try:
            return cls(root=root, config_path=toml_path, **cli_flags)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {toml_path}: {exc}"
            raise click.ClickException(msg) from exc
        finally:
            _active_toml.reset(token)


def _resolve_toml(config_path: str | None, root: Path | None) -> Path | None:
    if config_path:
        path = Path(config_path)
        return path if path.is_file() else None
    return find_config(root)
