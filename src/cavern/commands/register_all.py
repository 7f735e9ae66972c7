from __future__ import annotations

import importlib
import pkgutil
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cavern.engine.context import SimulationContext
    from cavern.repl.dispatch import Dispatch


def register_all(dispatch: "Dispatch", ctx: "SimulationContext") -> None:
    """
    Auto-discover and register all command modules under cavern.commands.
    A module is considered a command module if it exposes register(dispatch, ctx).
    """
    pkg_name = "cavern.commands"
    pkg = importlib.import_module(pkg_name)

    modules = []
    for m in pkgutil.iter_modules(pkg.__path__):  # type: ignore[attr-defined]
        name = m.name
        if name in {"__init__", "register_all"} or name.startswith("_"):
            continue
        modules.append(name)

    for name in sorted(modules):
        mod = importlib.import_module(f"{pkg_name}.{name}")
        reg = getattr(mod, "register", None)
        if callable(reg):
            reg(dispatch, ctx)
