"""Registry of built-in strategies.

Every module in this package is scanned for ``Strategy`` subclasses;
each is registered under its ``name`` class attribute.
"""

from __future__ import annotations

import importlib
import pkgutil
from pathlib import Path

from strategy import SolverConfig, Strategy

_PKG_DIR = Path(__file__).resolve().parent


def _subclasses_in_module(mod) -> list[type[Strategy]]:
    found: list[type[Strategy]] = []
    for attr_name in dir(mod):
        obj = getattr(mod, attr_name)
        if (
            isinstance(obj, type)
            and issubclass(obj, Strategy)
            and obj is not Strategy
            and obj.__module__ == mod.__name__
        ):
            found.append(obj)
    return found


def discover_strategies() -> dict[str, type[Strategy]]:
    """Return ``{name: class}`` for every strategy in this package."""
    found: dict[str, type[Strategy]] = {}
    for info in sorted(pkgutil.iter_modules([str(_PKG_DIR)]), key=lambda i: i.name):
        mod = importlib.import_module(f"strategies.{info.name}")
        for cls in _subclasses_in_module(mod):
            if cls.name:
                found[cls.name] = cls
    return found


def available_strategies() -> list[str]:
    return sorted(discover_strategies())


def create_strategy(config: SolverConfig | None = None) -> Strategy:
    """Instantiate the strategy named by ``config.strategy``."""
    config = config or SolverConfig()
    registry = discover_strategies()
    try:
        cls = registry[config.strategy.lower()]
    except KeyError:
        raise ValueError(
            f"unknown strategy {config.strategy!r}; available: {sorted(registry)}"
        ) from None
    return cls(config)
