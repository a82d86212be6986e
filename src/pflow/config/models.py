"""Sections of ``pflow.toml``.

Every field has a default, so a config file only lists what it changes.
"""

from __future__ import annotations

from pydantic import BaseModel


class ModelConfig(BaseModel):
    """[model] section."""

    model_config = {"frozen": True}

    declaration: str | None = None
    schema_name: str = "pflow"


class SimulateConfig(BaseModel):
    """[simulate] section."""

    model_config = {"frozen": True}

    multiplier: int = 1
    stop_on_error: bool = True
