"""The in-memory table of files and the pool of free blocks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

NAME_LENGTH = 16


class FileSystemError(Exception):
    """Base class for filesystem errors."""


class NoFreeBlocksError(FileSystemError):
    """Every data block is already in use."""


@dataclass
class FileEntry:
    """A file: its name, the blocks it occupies and its size in bytes."""

    name: str
    blocks: list[int] = field(default_factory=list)
    size: int = 0
    flags: int = 0

    def __post_init__(self) -> None:
        encoded = self.name.encode("utf-8")
        if len(encoded) > NAME_LENGTH:
            raise ValueError(
                f"file name {self.name!r} is longer than {NAME_LENGTH} bytes"
            )

    @property
    def filename(self) -> str:
        """The name with trailing NUL padding removed."""
        return self.name.rstrip("\0")

    @property
    def raw_name(self) -> bytes:
        """The name as its fixed-width, NUL-padded byte field."""
        return self.name.encode("utf-8").ljust(NAME_LENGTH, b"\0")


class FileTable:
    """Tracks file entries and hands out free blocks, lowest first."""

    def __init__(self, blocks_amount: int) -> None:
        if blocks_amount < 1:
            raise ValueError("a file table needs at least one block")
        self.entries: list[FileEntry] = []
        # Block 0 holds the superblock; popping from the end yields block 1 first.
        self.available_blocks: list[int] = list(range(blocks_amount - 1, 0, -1))

    def _index_of(self, file_name: str) -> Optional[int]:
        return next(
            (
                index
                for index, entry in enumerate(self.entries)
                if entry.filename == file_name
            ),
            None,
        )

    def find_and_remove_file(self, file_name: str) -> Optional[list[int]]:
        """Remove the named file, free its blocks and return them."""
        index = self._index_of(file_name)
        if index is None:
            return None
        entry = self.entries.pop(index)
        blocks = list(entry.blocks)
        self.available_blocks.extend(blocks)
        return blocks

    def add_file(self, filename: str) -> FileEntry:
        """Create an empty file on the next free block."""
        if not self.available_blocks:
            raise NoFreeBlocksError("no available blocks for new file")
        entry = FileEntry(filename)
        start_block = self.available_blocks.pop()
        entry.blocks.append(start_block)
        self.entries.append(entry)
        return entry

    def find_file(self, filename: str) -> Optional[FileEntry]:
        """The first entry with this name, or None."""
        index = self._index_of(filename)
        return None if index is None else self.entries[index]

    def get_file_size(self, filename: str) -> int:
        """Size of the named file, or 0 if there is none."""
        entry = self.find_file(filename)
        return 0 if entry is None else entry.size

    def delete_file_by_name(self, device, file_name: str) -> None:
        """Zero the file's blocks on ``device``, then drop its entry."""
        index = self._index_of(file_name)
        if index is None:
            return
        blocks = list(self.entries[index].blocks)
        empty_block = bytes(device.BLOCK_SIZE)
        for block in blocks:
            device.write_block(block, empty_block)
        del self.entries[index]
        self.available_blocks.extend(blocks)

    def list_files(self) -> list[str]:
        """Names of all files in creation order."""
        return [entry.filename for entry in self.entries]