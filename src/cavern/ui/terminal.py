"""Terminal implementations backed by the feedback bus.

:class:`ScriptedTerminal` replays a fixed key sequence and is what tests and
scenario tools drive the engine with. :class:`StdinTerminal` feeds typed
lines to the engine one key at a time for the headless REPL.
"""

from __future__ import annotations

from collections import deque
import logging
import select
import sys
from typing import Deque, Iterable, List, Optional, TextIO

from cavern.ui.feedback import FeedbackBus
from cavern.util.keys import DELETE, ESCAPE, ctrl_key

LOG = logging.getLogger(__name__)

_LINE_ENDS = {"\r", "\n"}
_BACKSPACES = {DELETE, ctrl_key("h")}


class BaseTerminal:
    """Prompt helpers shared by the concrete terminals."""

    def __init__(self, bus: Optional[FeedbackBus] = None) -> None:
        self.bus = bus if bus is not None else FeedbackBus()

    # Subclasses provide raw key access.
    def read_key(self) -> Optional[str]:
        raise NotImplementedError

    def poll_key(self, timeout_micros: int) -> bool:
        raise NotImplementedError

    def render(self) -> None:
        """Flush queued feedback to the display; nothing by default."""

    def _push(self, kind: str, text: str) -> None:
        self.bus.push(kind, text)
        self.render()

    def show_message(self, text: str) -> None:
        self._push("MSG/INFO", text)

    def show_prompt(self, text: str) -> None:
        self._push("PROMPT", text)

    def redraw(self, field: str) -> None:
        self._push("REDRAW", field)

    def bell(self) -> None:
        self._push("BELL", "")

    def message_history(self) -> List[str]:
        return self.bus.history()

    def confirm(self, prompt: str) -> bool:
        self.show_prompt(f"{prompt} [y/n]")
        key = self.read_key()
        return key is not None and key in {"y", "Y"}

    def get_string(self, prompt: str) -> Optional[str]:
        self.show_prompt(prompt)
        chars: List[str] = []
        while True:
            key = self.read_key()
            if key is None or key == ESCAPE:
                return None
            if key in _LINE_ENDS:
                return "".join(chars)
            if key in _BACKSPACES:
                if chars:
                    chars.pop()
                continue
            chars.append(key)


class ScriptedTerminal(BaseTerminal):
    """Replay *keys*; end of input is reported once they run out."""

    def __init__(self, keys: Iterable[str] = (), bus: Optional[FeedbackBus] = None) -> None:
        super().__init__(bus)
        self._keys: Deque[str] = deque(keys)
        self.polls: List[int] = []
        self.redraws: List[str] = []
        self.bells = 0

    def feed(self, keys: Iterable[str]) -> None:
        self._keys.extend(keys)

    @property
    def pending(self) -> int:
        return len(self._keys)

    def read_key(self) -> Optional[str]:
        if not self._keys:
            return None
        return self._keys.popleft()

    def poll_key(self, timeout_micros: int) -> bool:
        self.polls.append(timeout_micros)
        return bool(self._keys)

    def redraw(self, field: str) -> None:
        self.redraws.append(field)
        super().redraw(field)

    def bell(self) -> None:
        self.bells += 1
        super().bell()

    def messages(self) -> List[str]:
        return self.bus.history()


class StdinTerminal(BaseTerminal):
    """Line-buffered terminal; each typed line is queued as keys."""

    def __init__(
        self,
        stream: TextIO | None = None,
        out: TextIO | None = None,
        bus: Optional[FeedbackBus] = None,
    ) -> None:
        super().__init__(bus)
        self._stream = stream if stream is not None else sys.stdin
        self._out = out if out is not None else sys.stdout
        self._buffer: Deque[str] = deque()

    def render(self) -> None:
        for event in self.bus.drain():
            kind = event.get("kind", "")
            if kind.startswith("MSG/"):
                print(event.get("text", ""), file=self._out)
            elif kind == "PROMPT":
                print(event.get("text", ""), end=" ", file=self._out, flush=True)
            elif kind == "BELL":
                print("\a", end="", file=self._out, flush=True)

    def _fill(self) -> bool:
        line = self._stream.readline()
        if line == "":
            return False
        self._buffer.extend(line.rstrip("\r\n"))
        return True

    def read_key(self) -> Optional[str]:
        while not self._buffer:
            if not self._fill():
                return None
        return self._buffer.popleft()

    def poll_key(self, timeout_micros: int) -> bool:
        if self._buffer:
            return True
        try:
            ready, _, _ = select.select([self._stream], [], [], timeout_micros / 1_000_000)
        except (OSError, ValueError):
            LOG.debug("stdin is not pollable; treating as idle", exc_info=True)
            return False
        return bool(ready)

    def get_string(self, prompt: str) -> Optional[str]:
        self.show_prompt(prompt)
        if self._buffer:
            text = "".join(self._buffer)
            self._buffer.clear()
            return text
        line = self._stream.readline()
        if line == "":
            return None
        return line.rstrip("\r\n")
