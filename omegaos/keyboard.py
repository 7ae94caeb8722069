"""The line buffer that collects keystrokes until Enter is pressed."""

from __future__ import annotations

import threading
from typing import Callable, Optional

KEYBOARD_PORT = 0x60
INPUT_CAPACITY = 256

_ENTER = "\n"
_BACKSPACE = "\x08"


def _discard(_text: str) -> None:
    return None


class InputBuffer:
    """Accumulates decoded keys into a fixed-size line.

    ``handle_key`` is fed from the keyboard side; ``read_input`` waits for a
    finished line. Typed characters are echoed through ``echo``.
    """

    def __init__(
        self,
        echo: Optional[Callable[[str], object]] = None,
        capacity: int = INPUT_CAPACITY,
    ) -> None:
        if capacity < 1:
            raise ValueError("input capacity must be positive")
        self._buffer = bytearray(capacity)
        self._index = 0
        self._ready = False
        self._echo = _discard if echo is None else echo
        self._condition = threading.Condition()

    @property
    def pending(self) -> bytes:
        """The bytes typed since the last line was read."""
        with self._condition:
            return bytes(self._buffer[: self._index])

    def handle_key(self, key: object) -> None:
        """Process one decoded key; anything but a single character is ignored."""
        if not isinstance(key, str) or len(key) != 1:
            return
        echoed = ""
        with self._condition:
            if key == _ENTER:
                self._ready = True
                self._condition.notify_all()
                echoed = "\n"
            elif key == _BACKSPACE:
                if self._index > 0:
                    self._index -= 1
                    echoed = "\x08 \x08"
            elif self._index < len(self._buffer) - 1:
                # keys are stored as single bytes, keeping the low eight bits
                self._buffer[self._index] = ord(key) & 0xFF
                self._index += 1
                echoed = key
        if echoed:
            self._echo(echoed)

    def read_input(self) -> Optional[str]:
        """Wait for Enter, then return the line, or None if it is not UTF-8."""
        with self._condition:
            self._condition.wait_for(lambda: self._ready)
            data = bytes(self._buffer[: self._index])
            self._index = 0
            self._ready = False
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            return None