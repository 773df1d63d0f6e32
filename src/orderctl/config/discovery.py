"""Locate and load ``orderctl.toml``.

Lookup order: the ``ORDERCTL_CONFIG`` environment variable, then the
nearest ``orderctl.toml`` in the start directory or any of its parents.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

from orderctl.config.models import OrderctlConfig

CONFIG_FILENAME = "orderctl.toml"
CONFIG_ENV_VAR = "ORDERCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file in effect for *start* (default: CWD), or None.

    A set ``ORDERCTL_CONFIG`` disables the walk-up search even when it
    points at a missing file.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    return next(
        (d / CONFIG_FILENAME for d in (here, *here.parents) if (d / CONFIG_FILENAME).is_file()),
        None,
    )


def load_config(path: Path | None = None, cwd: Path | None = None) -> OrderctlConfig:
    """Parse and validate the config file; defaults when there is none."""
    path = path or find_config(cwd)
    if path is None:
        return OrderctlConfig()
    with path.open("rb") as fh:
        return OrderctlConfig.model_validate(tomllib.load(fh))
