"""Physical frame allocation from a boot-time memory map."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from itertools import islice
from typing import Iterable, Iterator, Optional

PAGE_SIZE = 4096


class MemoryRegionType(enum.Enum):
    """Kind of a region reported in the boot memory map."""

    USABLE = enum.auto()
    IN_USE = enum.auto()
    RESERVED = enum.auto()
    ACPI_RECLAIMABLE = enum.auto()
    ACPI_NVS = enum.auto()
    BAD_MEMORY = enum.auto()
    KERNEL = enum.auto()
    KERNEL_STACK = enum.auto()
    PAGE_TABLE = enum.auto()
    BOOTLOADER = enum.auto()
    FRAME_ZERO = enum.auto()
    EMPTY = enum.auto()
    BOOT_INFO = enum.auto()
    PACKAGE = enum.auto()


@dataclass(frozen=True)
class MemoryRegion:
    """A half-open physical address range ``[start_addr, end_addr)``."""

    start_addr: int
    end_addr: int
    region_type: MemoryRegionType

    def __post_init__(self) -> None:
        if self.start_addr < 0:
            raise ValueError("region start must not be negative")
        if self.end_addr < self.start_addr:
            raise ValueError("region end lies before its start")


def _frame_containing(addr: int) -> int:
    return addr - addr % PAGE_SIZE


class BootInfoFrameAllocator:
    """Hands out the usable 4 KiB frames of a memory map, one after another."""

    def __init__(self, memory_map: Iterable[MemoryRegion]) -> None:
        self.memory_map = tuple(memory_map)
        self.next = 0

    def usable_frames(self) -> Iterator[int]:
        """Yield the start address of every frame in a usable region."""
        for region in self.memory_map:
            if region.region_type is MemoryRegionType.USABLE:
                for addr in range(region.start_addr, region.end_addr, PAGE_SIZE):
                    yield _frame_containing(addr)

    def allocate_frame(self) -> Optional[int]:
        """Return the next unused frame, or None once all are handed out."""
        frame = next(islice(self.usable_frames(), self.next, None), None)
        self.next += 1
        return frame