"""Heap constants, memory layouts and helpers shared by the allocators."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Generic, Iterator, TypeVar

from omegaos.memory import PAGE_SIZE

HEAP_START = 0x_4444_4444_0000
HEAP_SIZE = 100 * 1024  # 100 KiB


class AllocationError(MemoryError):
    """An allocator could not satisfy a request."""


class FrameAllocationError(RuntimeError):
    """No physical frame was left to back a heap page."""


def _is_power_of_two(value: int) -> bool:
    return value > 0 and value & (value - 1) == 0


def align_up(addr: int, align: int) -> int:
    """Round ``addr`` up to the next multiple of ``align`` (a power of two)."""
    if not _is_power_of_two(align):
        raise ValueError(f"alignment {align} is not a power of two")
    return (addr + align - 1) & ~(align - 1)


@dataclass(frozen=True)
class Layout:
    """Size and alignment of a memory request."""

    size: int
    align: int = 1

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError("layout size must not be negative")
        if not _is_power_of_two(self.align):
            raise ValueError(f"alignment {self.align} is not a power of two")

    def align_to(self, align: int) -> Layout:
        """Return a layout with at least the given alignment."""
        return Layout(self.size, max(self.align, align))

    def pad_to_align(self) -> Layout:
        """Return a layout whose size is rounded up to its alignment."""
        return Layout(align_up(self.size, self.align), self.align)


A = TypeVar("A")


class Locked(Generic[A]):
    """Wraps a value behind a mutex."""

    def __init__(self, inner: A) -> None:
        self._inner = inner
        self._mutex = threading.Lock()

    @contextmanager
    def lock(self) -> Iterator[A]:
        """Hold the mutex and yield the wrapped value."""
        with self._mutex:
            yield self._inner


def heap_page_range(heap_start: int, heap_size: int) -> range:
    """Start addresses of all pages touched by the heap, inclusive."""
    if heap_size <= 0:
        raise ValueError("heap size must be positive")
    first = heap_start - heap_start % PAGE_SIZE
    last_addr = heap_start + heap_size - 1
    last = last_addr - last_addr % PAGE_SIZE
    return range(first, last + PAGE_SIZE, PAGE_SIZE)


def init_heap(frame_allocator, allocator, heap_start=HEAP_START, heap_size=HEAP_SIZE):
    """Back every heap page with a frame, then initialise the allocator.

    ``allocator`` is a :class:`Locked` wrapper around an allocator with an
    ``init(heap_start, heap_size)`` method. Returns the page-to-frame mapping.
    """
    mapping: dict[int, int] = {}
    for page in heap_page_range(heap_start, heap_size):
        frame = frame_allocator.allocate_frame()
        if frame is None:
            raise FrameAllocationError(f"no frame left for page {page:#x}")
        mapping[page] = frame
    with allocator.lock() as inner:
        inner.init(heap_start, heap_size)
    return mapping