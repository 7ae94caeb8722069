"""Block devices: the abstract interface and an in-memory implementation."""

from __future__ import annotations

import abc
from typing import Optional

from omegaos.allocator import Locked
from omegaos.file_table import FileTable

BLOCK_SIZE = 512
BLOCKS_AMOUNT = 1024
DEFAULT_STORAGE_SIZE = 512 * 1024


class BlockDevice(abc.ABC):
    """Storage addressed in fixed-size blocks, with its file table."""

    BLOCK_SIZE = BLOCK_SIZE

    @abc.abstractmethod
    def read_block(self, block_id: int, data_size: int) -> bytes:
        """Read ``data_size`` bytes starting at block ``block_id``."""

    @abc.abstractmethod
    def write_block(self, block_id: int, data: bytes) -> None:
        """Write ``data`` starting at block ``block_id``."""

    @property
    @abc.abstractmethod
    def file_table(self) -> Locked[FileTable]:
        """The device's file table behind a lock."""


class MemoryBlockDevice(BlockDevice):
    """A block device backed by a bytearray."""

    def __init__(
        self,
        storage: Optional[bytearray] = None,
        blocks_amount: int = BLOCKS_AMOUNT,
    ) -> None:
        self.storage = bytearray(DEFAULT_STORAGE_SIZE) if storage is None else storage
        self._file_table = Locked(FileTable(blocks_amount))

    @property
    def file_table(self) -> Locked[FileTable]:
        return self._file_table

    def _span(self, block_id: int, length: int) -> slice:
        if block_id < 0:
            raise ValueError(f"block id {block_id} is negative")
        if length < 0:
            raise ValueError(f"length {length} is negative")
        start = block_id * self.BLOCK_SIZE
        end = start + length
        if end > len(self.storage):
            raise IndexError(
                f"bytes {start}..{end} lie outside storage of {len(self.storage)} bytes"
            )
        return slice(start, end)

    def read_block(self, block_id: int, data_size: int) -> bytes:
        return bytes(self.storage[self._span(block_id, data_size)])

    def write_block(self, block_id: int, data: bytes) -> None:
        self.storage[self._span(block_id, len(data))] = data