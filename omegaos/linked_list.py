"""A first-fit allocator that keeps free regions in a list."""

from __future__ import annotations

from typing import Optional

from omegaos.allocator import AllocationError, Layout, align_up

# A free-list node holds a size and a next pointer.
_NODE_SIZE = 16
_NODE_ALIGN = 8


class LinkedListAllocator:
    """Keeps free regions front-first and splits them on allocation."""

    def __init__(self) -> None:
        self._regions: list[tuple[int, int]] = []

    def init(self, heap_start: int, heap_size: int) -> None:
        """Add the whole heap as one free region."""
        self._add_free_region(heap_start, heap_size)

    def _add_free_region(self, addr: int, size: int) -> None:
        if align_up(addr, _NODE_ALIGN) != addr:
            raise ValueError(f"free region at {addr:#x} is not aligned for a node")
        if size < _NODE_SIZE:
            raise ValueError(f"free region of {size} bytes cannot hold a node")
        self._regions.insert(0, (addr, size))

    @staticmethod
    def _alloc_from_region(start: int, region_size: int, size: int, align: int) -> Optional[int]:
        alloc_start = align_up(start, align)
        alloc_end = alloc_start + size
        region_end = start + region_size
        if alloc_end > region_end:
            return None
        excess = region_end - alloc_end
        if 0 < excess < _NODE_SIZE:
            # the leftover could not hold a free-list node
            return None
        return alloc_start

    def _find_region(self, size: int, align: int) -> Optional[tuple[int, int]]:
        for position, (start, region_size) in enumerate(self._regions):
            alloc_start = self._alloc_from_region(start, region_size, size, align)
            if alloc_start is not None:
                del self._regions[position]
                return start + region_size, alloc_start
        return None

    def alloc(self, layout: Layout) -> int:
        """Return the address of a block fitting ``layout``."""
        size, align = self.size_align(layout)
        found = self._find_region(size, align)
        if found is None:
            raise AllocationError(f"no free region for {layout.size} bytes")
        region_end, alloc_start = found
        alloc_end = alloc_start + size
        excess = region_end - alloc_end
        if excess > 0:
            self._add_free_region(alloc_end, excess)
        return alloc_start

    def dealloc(self, ptr: int, layout: Layout) -> None:
        """Return a block to the front of the free list."""
        size, _ = self.size_align(layout)
        self._add_free_region(ptr, size)

    @staticmethod
    def size_align(layout: Layout) -> tuple[int, int]:
        """Adjust ``layout`` so the block can later hold a free-list node."""
        adjusted = layout.align_to(_NODE_ALIGN).pad_to_align()
        return max(adjusted.size, _NODE_SIZE), adjusted.align

    def free_regions(self) -> list[tuple[int, int]]:
        """The free regions as ``(start, size)`` pairs, front of the list first."""
        return list(self._regions)