"""The superblock stored in block 0 of a formatted device."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Optional

MAGIC = 0x6969
# Blocks kept back for filesystem metadata.
RESERVED_BLOCKS = 2

_LAYOUT = struct.Struct("<III")
_U32_MAX = 0xFFFF_FFFF


def _check_u32(name: str, value: int) -> None:
    if not 0 <= value <= _U32_MAX:
        raise ValueError(f"{name} {value} does not fit in an unsigned 32-bit field")


@dataclass(frozen=True)
class Superblock:
    """Filesystem header: magic number, total blocks and free blocks."""

    block_count: int
    magic: int = MAGIC
    free_blocks: Optional[int] = None

    def __post_init__(self) -> None:
        _check_u32("block count", self.block_count)
        _check_u32("magic", self.magic)
        if self.free_blocks is None:
            if self.block_count < RESERVED_BLOCKS:
                raise ValueError(
                    f"a device needs at least {RESERVED_BLOCKS} blocks, "
                    f"got {self.block_count}"
                )
            object.__setattr__(self, "free_blocks", self.block_count - RESERVED_BLOCKS)
        _check_u32("free block count", self.free_blocks)

    def to_bytes(self) -> bytes:
        """Serialise as three little-endian 32-bit fields."""
        return _LAYOUT.pack(self.magic, self.block_count, self.free_blocks)

    @classmethod
    def from_bytes(cls, data: bytes) -> Superblock:
        """Read a superblock from the start of ``data``."""
        if len(data) < _LAYOUT.size:
            raise ValueError(
                f"superblock needs {_LAYOUT.size} bytes, got {len(data)}"
            )
        magic, block_count, free_blocks = _LAYOUT.unpack_from(data)
        return cls(block_count=block_count, magic=magic, free_blocks=free_blocks)