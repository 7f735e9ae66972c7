from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import TYPE_CHECKING, Any, Dict, Iterable, Mapping, Optional

from cavern import env

if TYPE_CHECKING:
    from cavern.engine.context import SimulationContext

LOG = logging.getLogger(__name__)
LOG_TURN = logging.getLogger("cavern.turndbg")


def _format_meta(meta: Mapping[str, Any]) -> str:
    parts: list[str] = []
    for key in sorted(meta.keys()):
        value = meta[key]
        if value is None:
            continue
        if isinstance(value, (list, tuple, set, frozenset)):
            token = ",".join(str(item) for item in value)
        elif isinstance(value, bool):
            token = "true" if value else "false"
        else:
            token = str(value)
        if token:
            parts.append(f"{key}={token}")
    return " ".join(parts)


def emit(ctx: "SimulationContext", kind: str, *, message: str | None = None, **meta: Any) -> None:
    """Emit a structured turn log event.

    The event goes to the ``cavern.turndbg`` logger at debug level and is
    recorded by the context's :class:`TurnObserver`, if one is attached.
    """

    text = message if message is not None else _format_meta(meta)
    LOG_TURN.debug("%s %s", kind, text)

    observer = get_observer(ctx)
    if observer:
        observer.record(kind, meta, text)


def get_observer(ctx: Any) -> "TurnObserver | None":
    observer = getattr(ctx, "turn_observer", None)
    return observer if isinstance(observer, TurnObserver) else None


def _summarize_events(events: Iterable[tuple[str, Mapping[str, Any]]]) -> list[str]:
    summary: list[str] = []
    for kind, meta in events:
        if kind == "CMD/DISPATCH":
            piece = f"cmd={meta.get('key', '?')!r}"
            if meta.get("count"):
                piece += f" x{meta.get('count')}"
            if meta.get("free"):
                piece += " free"
            summary.append(piece)
        elif kind == "CMD/INVALID_COUNT":
            summary.append(f"bad-count {meta.get('key', '?')!r}")
        elif kind == "INPUT/EOF":
            summary.append(f"eof#{meta.get('count', '?')}")
        elif kind == "INPUT/INTERRUPT":
            summary.append("key-interrupt")
        elif kind == "INPUT/DISTURB":
            summary.append(f"disturb={meta.get('severity', '?')}@{meta.get('point', '?')}")
        elif kind == "WORLD/SPAWN":
            summary.append("spawn")
        elif kind == "WORLD/COMPACT":
            summary.append(f"compact used={meta.get('used', '?')}")
        elif kind == "WORLD/TELEPORT":
            summary.append(f"teleport d={meta.get('distance', '?')}")
        elif kind == "LEVEL/START":
            summary.append(f"level depth={meta.get('depth', '?')}")
    return summary


@dataclass
class TurnObserver:
    """Collect structured events and log a one-line summary per turn."""

    enabled: bool = field(default_factory=env.debug_enabled)
    turns: int = 0
    last_summary: str = ""
    _active: bool = False
    _turn: int = 0
    _hp_before: Optional[tuple[int, int]] = None
    _events: list[tuple[str, Dict[str, Any]]] = field(default_factory=list)

    def begin_turn(self, ctx: "SimulationContext") -> None:
        if not self.enabled:
            self.reset()
            return
        self._active = True
        self._turn = ctx.level.turn
        vitals = ctx.player.vitals
        self._hp_before = (vitals.chp, vitals.mhp)
        self._events.clear()

    def record(self, kind: str, meta: Mapping[str, Any], text: str | None = None) -> None:
        if not self._active:
            return
        payload: Dict[str, Any] = {str(key): value for key, value in meta.items()}
        if text and "text" not in payload:
            payload["text"] = text
        self._events.append((kind, payload))

    def events(self) -> list[tuple[str, Dict[str, Any]]]:
        return list(self._events)

    def finish_turn(self, ctx: "SimulationContext") -> None:
        if not self._active:
            self.reset()
            return
        vitals = ctx.player.vitals
        header = [f"turn={self._turn}"]
        if self._hp_before is not None:
            delta = vitals.chp - self._hp_before[0]
            header.append(f"HPΔ={delta:+d} ({vitals.chp}/{vitals.mhp})")
        parts = header + _summarize_events(self._events)
        self.last_summary = " | ".join(parts)
        self.turns += 1
        LOG_TURN.info("[turndbg] TURN %s", self.last_summary)
        self.reset()

    def reset(self) -> None:
        self._active = False
        self._hp_before = None
        self._events.clear()


__all__ = ["TurnObserver", "emit", "get_observer"]
