"""Resolve model declarations from ``module:function`` references.

Two reference forms are accepted:

- ``package.module:function`` — imported with :func:`importlib.import_module`.
- ``path/to/file.py:function`` — loaded from the file, relative paths
  resolved against *base_dir*.
"""

from __future__ import annotations

import importlib
import importlib.util
import logging
import sys
from pathlib import Path

from pflow.domain.model import Model, ModelDeclaration

logger = logging.getLogger(__name__)


class DeclarationLoadError(Exception):
    """Raised when a declaration reference cannot be resolved."""

    def __init__(self, ref: str, reason: str) -> None:
        self.ref = ref
        self.reason = reason
        super().__init__(f"Cannot load declaration {ref!r}: {reason}")


def _split_ref(ref: str) -> tuple[str, str]:
    target, sep, attr = ref.rpartition(":")
    if not sep or not target or not attr:
        raise DeclarationLoadError(ref, "expected 'module:function' or 'file.py:function'")
    return target, attr


def _load_file(ref: str, path: Path) -> object:
    if not path.is_file():
        raise DeclarationLoadError(ref, f"no such file {path}")
    module_name = f"pflow_declaration_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise DeclarationLoadError(ref, f"could not create module spec for {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        raise DeclarationLoadError(ref, f"{type(exc).__name__}: {exc}") from exc
    return module


def load_declaration(ref: str, *, base_dir: Path | None = None) -> ModelDeclaration:
    """Return the declaration function named by *ref*."""
    target, attr = _split_ref(ref)

    if target.endswith(".py"):
        path = Path(target)
        if not path.is_absolute() and base_dir is not None:
            path = base_dir / path
        module = _load_file(ref, path)
    else:
        try:
            module = importlib.import_module(target)
        except ImportError as exc:
            raise DeclarationLoadError(ref, str(exc)) from exc

    declaration = getattr(module, attr, None)
    if declaration is None:
        raise DeclarationLoadError(ref, f"no attribute {attr!r}")
    if not callable(declaration):
        raise DeclarationLoadError(ref, f"{attr!r} is not callable")
    logger.debug("Loaded declaration %s", ref)
    return declaration  # type: ignore[return-value]


def load_model(ref: str, schema: str, *, base_dir: Path | None = None) -> Model:
    """Load the declaration named by *ref* and compile it into a Model."""
    return Model(schema, load_declaration(ref, base_dir=base_dir))
