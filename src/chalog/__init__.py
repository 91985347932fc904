"""Core package exports for chalog."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as metadata_version
from typing import TYPE_CHECKING, Any

__all__ = ["__version__", "Generator", "generate_changelog"]

try:
    __version__ = metadata_version("chalog")
except PackageNotFoundError:  # pragma: no cover - fallback for editable installs
    __version__ = "0.0.0"

if TYPE_CHECKING:  # pragma: no cover
    from .generator import Generator, generate_changelog


def __getattr__(name: str) -> Any:  # pragma: no cover - simple delegation
    if name == "Generator":
        from .generator import Generator as _Generator

        return _Generator
    if name == "generate_changelog":
        from .generator import generate_changelog as _generate_changelog

        return _generate_changelog
    raise AttributeError(f"module 'chalog' has no attribute {name!r}")
