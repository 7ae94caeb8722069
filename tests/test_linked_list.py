import pytest

from omegaos.allocator import AllocationError, Layout
from omegaos.linked_list import LinkedListAllocator

START = 0x20000
SIZE = 4096


@pytest.fixture
def heap():
    allocator = LinkedListAllocator()
    allocator.init(START, SIZE)
    return allocator


def test_size_align_minimum_is_node_size():
    assert LinkedListAllocator.size_align(Layout(1, 1)) == (16, 8)


def test_size_align_keeps_aligned_size():
    assert LinkedListAllocator.size_align(Layout(24, 8)) == (24, 8)


@pytest.mark.parametrize("size,align", [(1, 1), (17, 1), (4, 32), (100, 16), (9, 2)])
def test_size_align_invariants(size, align):
    new_size, new_align = LinkedListAllocator.size_align(Layout(size, align))
    assert new_align == max(align, 8)
    assert new_size >= max(size, 16)
    assert new_size % new_align == 0


def test_init_makes_single_region(heap):
    assert heap.free_regions() == [(START, SIZE)]


def test_alloc_splits_region(heap):
    ptr = heap.alloc(Layout(16, 8))
    assert ptr == START
    assert heap.free_regions() == [(START + 16, SIZE - 16)]


def test_dealloc_puts_region_in_front(heap):
    ptr = heap.alloc(Layout(32, 8))
    heap.dealloc(ptr, Layout(32, 8))
    assert heap.free_regions()[0] == (ptr, 32)


def test_freed_block_is_reused(heap):
    ptr = heap.alloc(Layout(64, 8))
    heap.alloc(Layout(64, 8))
    heap.dealloc(ptr, Layout(64, 8))
    assert heap.alloc(Layout(64, 8)) == ptr


def test_alignment_is_respected(heap):
    heap.alloc(Layout(8, 8))
    ptr = heap.alloc(Layout(64, 256))
    assert ptr % 256 == 0
    assert START <= ptr and ptr + 64 <= START + SIZE


def test_leftover_too_small_for_node_is_refused():
    allocator = LinkedListAllocator()
    allocator.init(START, 40)
    with pytest.raises(AllocationError):
        allocator.alloc(Layout(32, 8))
    assert allocator.alloc(Layout(24, 8)) == START
    assert allocator.free_regions() == [(START + 24, 16)]


def test_exhausted_heap_raises(heap):
    heap.alloc(Layout(SIZE, 8))
    assert heap.free_regions() == []
    with pytest.raises(AllocationError):
        heap.alloc(Layout(8, 8))


def test_init_rejects_unaligned_start():
    with pytest.raises(ValueError):
        LinkedListAllocator().init(START + 3, SIZE)


def test_init_rejects_region_too_small_for_node():
    with pytest.raises(ValueError):
        LinkedListAllocator().init(START, 8)