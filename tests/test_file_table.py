import pytest

from omegaos.block_device import MemoryBlockDevice
from omegaos.file_table import (
    FileEntry,
    FileSystemError,
    FileTable,
    NoFreeBlocksError,
)


def test_first_file_gets_block_one():
    table = FileTable(1024)
    entry = table.add_file("a")
    assert entry.blocks == [1]
    assert entry.size == 0


def test_files_get_distinct_blocks():
    table = FileTable(8)
    entries = [table.add_file(name) for name in ("a", "b", "c")]
    blocks = [entry.blocks[0] for entry in entries]
    assert len(set(blocks)) == len(blocks)
    assert all(0 < block < 8 for block in blocks)


def test_table_runs_out_of_blocks():
    table = FileTable(4)
    for name in ("a", "b", "c"):
        table.add_file(name)
    with pytest.raises(NoFreeBlocksError):
        table.add_file("d")
    assert table.list_files() == ["a", "b", "c"]


def test_no_free_blocks_is_filesystem_error():
    table = FileTable(1)
    with pytest.raises(FileSystemError):
        table.add_file("a")


def test_zero_blocks_rejected():
    with pytest.raises(ValueError):
        FileTable(0)


def test_find_file():
    table = FileTable(16)
    table.add_file("notes")
    found = table.find_file("notes")
    assert found is not None and found.filename == "notes"
    assert table.find_file("missing") is None


def test_get_file_size():
    table = FileTable(16)
    table.add_file("notes").size = 42
    assert table.get_file_size("notes") == 42
    assert table.get_file_size("missing") == 0


def test_find_and_remove_returns_blocks_to_pool():
    table = FileTable(16)
    entry = table.add_file("a")
    table.add_file("b")
    blocks = table.find_and_remove_file("a")
    assert blocks == entry.blocks
    assert table.list_files() == ["b"]
    assert table.add_file("c").blocks == blocks


def test_find_and_remove_missing():
    table = FileTable(16)
    table.add_file("a")
    assert table.find_and_remove_file("b") is None
    assert table.list_files() == ["a"]


def test_delete_file_by_name_zeroes_blocks():
    device = MemoryBlockDevice()
    table = FileTable(16)
    block = table.add_file("a").blocks[0]
    device.write_block(block, b"x" * device.BLOCK_SIZE)
    table.delete_file_by_name(device, "a")
    assert device.read_block(block, device.BLOCK_SIZE) == bytes(device.BLOCK_SIZE)
    assert table.list_files() == []
    assert block in table.available_blocks


def test_delete_missing_leaves_table_alone():
    device = MemoryBlockDevice()
    table = FileTable(16)
    table.add_file("a")
    before = list(table.available_blocks)
    table.delete_file_by_name(device, "zzz")
    assert table.list_files() == ["a"]
    assert table.available_blocks == before


def test_duplicate_names_are_kept():
    table = FileTable(16)
    table.add_file("a")
    table.add_file("a")
    assert table.list_files() == ["a", "a"]


def test_name_length_limit():
    table = FileTable(16)
    table.add_file("x" * 16)
    assert table.list_files() == ["x" * 16]
    with pytest.raises(ValueError):
        table.add_file("x" * 17)


def test_raw_name_is_padded():
    entry = FileEntry("ab")
    assert entry.raw_name == b"ab".ljust(16, b"\0")
    assert FileEntry("ab\0").filename == "ab"