"""A text-mode screen buffer of coloured characters that scrolls upwards."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

BUFFER_HEIGHT = 25
BUFFER_WIDTH = 80

_NEWLINE = ord("\n")
_TAB = ord("\t")
_BACKSPACE = 0x08
_SPACE = ord(" ")
# Shown in place of bytes outside printable ASCII.
REPLACEMENT_BYTE = 0xFE
TAB_WIDTH = 4


class Color(enum.IntEnum):
    """The sixteen text-mode colours."""

    BLACK = 0
    BLUE = 1
    GREEN = 2
    CYAN = 3
    RED = 4
    MAGENTA = 5
    BROWN = 6
    LIGHT_GRAY = 7
    DARK_GRAY = 8
    LIGHT_BLUE = 9
    LIGHT_GREEN = 10
    LIGHT_CYAN = 11
    LIGHT_RED = 12
    PINK = 13
    YELLOW = 14
    WHITE = 15


@dataclass(frozen=True)
class ColorCode:
    """A foreground and background colour pair."""

    foreground: Color
    background: Color

    @property
    def value(self) -> int:
        """The attribute byte: background in the high nibble, foreground low."""
        return (int(self.background) << 4) | int(self.foreground)


DEFAULT_COLOR = ColorCode(Color.YELLOW, Color.BLACK)


@dataclass(frozen=True)
class ScreenChar:
    """One cell of the screen: a character byte and its colours."""

    ascii_character: int
    color_code: ColorCode


class Writer:
    """Writes text to the bottom row of the buffer, scrolling on new lines."""

    def __init__(self, color_code: Optional[ColorCode] = None) -> None:
        self.color_code = DEFAULT_COLOR if color_code is None else color_code
        self.column_position = 0
        self.buffer: list[list[ScreenChar]] = [
            self._blank_row() for _ in range(BUFFER_HEIGHT)
        ]

    def _blank(self) -> ScreenChar:
        return ScreenChar(_SPACE, self.color_code)

    def _blank_row(self) -> list[ScreenChar]:
        return [self._blank()] * BUFFER_WIDTH

    def _new_line(self) -> None:
        del self.buffer[0]
        self.buffer.append(self._blank_row())
        self.column_position = 0

    def write_byte(self, byte: int) -> None:
        """Write one byte, handling newline, tab and backspace."""
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"{byte} is not a byte value")
        if byte == _NEWLINE:
            self._new_line()
        elif byte == _TAB:
            self.write_string(" " * TAB_WIDTH)
        elif byte == _BACKSPACE:
            if self.column_position > 0:
                self.column_position -= 1
                self.buffer[-1][self.column_position] = self._blank()
        else:
            if self.column_position >= BUFFER_WIDTH:
                self._new_line()
            self.buffer[-1][self.column_position] = ScreenChar(byte, self.color_code)
            self.column_position += 1

    def write_string(self, s: str) -> None:
        """Write the UTF-8 bytes of ``s``; non-printable bytes become 0xFE."""
        for byte in s.encode("utf-8"):
            if 0x20 <= byte <= 0x7E or byte in (_NEWLINE, _TAB, _BACKSPACE):
                self.write_byte(byte)
            else:
                self.write_byte(REPLACEMENT_BYTE)

    def write(self, s: str) -> int:
        """Write ``s`` and return the number of characters taken."""
        self.write_string(s)
        return len(s)

    def row_text(self, row: int) -> str:
        """The characters of one screen row, decoded with the text-mode code page."""
        if not 0 <= row < BUFFER_HEIGHT:
            raise IndexError(f"row {row} lies outside the screen")
        return bytes(cell.ascii_character for cell in self.buffer[row]).decode("cp437")