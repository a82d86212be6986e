"""Locate ``pflow.toml``.

``PFLOW_CONFIG`` names the file outright. Otherwise the search starts in
the given directory (default: cwd) and climbs to the filesystem root,
taking the nearest file.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "pflow.toml"
CONFIG_ENV_VAR = "PFLOW_CONFIG"


def candidate_paths(start: Path | None = None) -> Iterator[Path]:
    """Yield every place a ``pflow.toml`` could live, nearest first."""
    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        yield directory / CONFIG_FILENAME


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file to use, or None when there is none."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None
    return next((path for path in candidate_paths(start) if path.is_file()), None)
