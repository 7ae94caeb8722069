"""A bump allocator that frees everything once all allocations are gone."""

from __future__ import annotations

from omegaos.allocator import AllocationError, Layout, align_up


class BumpAllocator:
    """Hands out memory linearly; resets when the allocation count hits zero."""

    def __init__(self) -> None:
        self.heap_start = 0
        self.heap_end = 0
        self.next = 0
        self.allocations = 0

    def init(self, heap_start: int, heap_size: int) -> None:
        """Use ``[heap_start, heap_start + heap_size)`` as the heap."""
        self.heap_start = heap_start
        self.heap_end = heap_start + heap_size
        self.next = heap_start

    def alloc(self, layout: Layout) -> int:
        """Return the address of a new block for ``layout``."""
        alloc_start = align_up(self.next, layout.align)
        alloc_end = alloc_start + layout.size
        if alloc_end > self.heap_end:
            raise AllocationError(f"out of memory allocating {layout.size} bytes")
        self.next = alloc_end
        self.allocations += 1
        return alloc_start

    def dealloc(self, ptr: int, layout: Layout) -> None:
        """Release one allocation; the whole heap is reused once none remain."""
        if self.allocations == 0:
            raise ValueError("dealloc without a matching alloc")
        self.allocations -= 1
        if self.allocations == 0:
            self.next = self.heap_start