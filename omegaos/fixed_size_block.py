"""An allocator with per-size free lists and a first-fit fallback."""

from __future__ import annotations

from typing import Optional

from omegaos.allocator import Layout
from omegaos.linked_list import LinkedListAllocator

# Powers of two, since each size doubles as the block alignment.
BLOCK_SIZES = (8, 16, 32, 64, 128, 256, 512, 1024, 2048)


def list_index(layout: Layout) -> Optional[int]:
    """Index of the smallest block size that fits ``layout``, or None."""
    required = max(layout.size, layout.align)
    return next(
        (index for index, size in enumerate(BLOCK_SIZES) if size >= required),
        None,
    )


class FixedSizeBlockAllocator:
    """Serves small requests from free lists, large ones from the fallback."""

    def __init__(self) -> None:
        self._list_heads: list[list[int]] = [[] for _ in BLOCK_SIZES]
        self._fallback = LinkedListAllocator()

    def init(self, heap_start: int, heap_size: int) -> None:
        """Hand the heap to the fallback allocator."""
        self._fallback.init(heap_start, heap_size)

    def alloc(self, layout: Layout) -> int:
        """Return the address of a block fitting ``layout``."""
        index = list_index(layout)
        if index is None:
            return self._fallback.alloc(layout)
        free_blocks = self._list_heads[index]
        if free_blocks:
            return free_blocks.pop()
        block_size = BLOCK_SIZES[index]
        return self._fallback.alloc(Layout(block_size, block_size))

    def dealloc(self, ptr: int, layout: Layout) -> None:
        """Return a block to its free list, or to the fallback if too large."""
        index = list_index(layout)
        if index is None:
            self._fallback.dealloc(ptr, layout)
        else:
            self._list_heads[index].append(ptr)