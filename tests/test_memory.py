import pytest

from omegaos.memory import (
    PAGE_SIZE,
    BootInfoFrameAllocator,
    MemoryRegion,
    MemoryRegionType,
)


def _sample_map():
    return [
        MemoryRegion(0x1000, 0x4000, MemoryRegionType.USABLE),
        MemoryRegion(0x4000, 0x8000, MemoryRegionType.RESERVED),
        MemoryRegion(0x10000, 0x12000, MemoryRegionType.USABLE),
        MemoryRegion(0x12000, 0x13000, MemoryRegionType.KERNEL),
    ]


def test_usable_frames_lists_only_usable_regions():
    allocator = BootInfoFrameAllocator(_sample_map())
    assert list(allocator.usable_frames()) == [0x1000, 0x2000, 0x3000, 0x10000, 0x11000]


def test_frames_are_aligned_and_inside_usable_regions():
    regions = _sample_map()
    allocator = BootInfoFrameAllocator(regions)
    usable = [r for r in regions if r.region_type is MemoryRegionType.USABLE]
    for frame in allocator.usable_frames():
        assert frame % PAGE_SIZE == 0
        assert any(r.start_addr <= frame < r.end_addr for r in usable)


def test_allocate_frame_follows_usable_frames_then_runs_out():
    allocator = BootInfoFrameAllocator(_sample_map())
    expected = list(allocator.usable_frames())
    handed_out = [allocator.allocate_frame() for _ in expected]
    assert handed_out == expected
    assert allocator.allocate_frame() is None
    assert allocator.allocate_frame() is None


def test_allocated_frames_are_distinct():
    allocator = BootInfoFrameAllocator(_sample_map())
    frames = [allocator.allocate_frame() for _ in range(5)]
    assert len(set(frames)) == len(frames)


def test_empty_map_has_no_frames():
    allocator = BootInfoFrameAllocator([])
    assert allocator.allocate_frame() is None


def test_reserved_only_map_has_no_usable_frames():
    allocator = BootInfoFrameAllocator(
        [MemoryRegion(0, 0x10000, MemoryRegionType.RESERVED)]
    )
    assert list(allocator.usable_frames()) == []


def test_region_with_end_before_start_is_rejected():
    with pytest.raises(ValueError):
        MemoryRegion(0x2000, 0x1000, MemoryRegionType.USABLE)