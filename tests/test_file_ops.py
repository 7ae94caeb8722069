import pytest

from omegaos.block_device import MemoryBlockDevice
from omegaos.file_ops import (
    create_file,
    delete_file,
    format_fs,
    read_file,
    write_file,
)
from omegaos.file_table import NoFreeBlocksError
from omegaos.superblock import Superblock


@pytest.fixture
def device():
    dev = MemoryBlockDevice()
    format_fs(dev)
    return dev


def test_format_writes_superblock(device):
    stored = Superblock.from_bytes(device.read_block(0, device.BLOCK_SIZE))
    assert stored == Superblock(1024)
    assert stored.magic == 0x6969


def test_format_returns_written_superblock():
    dev = MemoryBlockDevice()
    superblock = format_fs(dev)
    assert dev.read_block(0, len(superblock.to_bytes())) == superblock.to_bytes()


def test_write_then_read(device):
    create_file(device, "notes")
    write_file(device, "notes", b"hello world")
    assert read_file(device, "notes") == b"hello world"


def test_new_file_reads_empty(device):
    create_file(device, "empty")
    assert read_file(device, "empty") == b""


def test_rewrite_shorter_data(device):
    create_file(device, "f")
    write_file(device, "f", b"a long first version")
    write_file(device, "f", b"short")
    assert read_file(device, "f") == b"short"
    with device.file_table.lock() as table:
        assert table.get_file_size("f") == len(b"short")


def test_full_block_write(device):
    create_file(device, "f")
    data = bytes(range(256)) * 2
    write_file(device, "f", data)
    assert read_file(device, "f") == data


def test_oversized_write_rejected(device):
    create_file(device, "f")
    with pytest.raises(ValueError):
        write_file(device, "f", b"x" * (device.BLOCK_SIZE + 1))


def test_write_missing_file(device):
    with pytest.raises(FileNotFoundError):
        write_file(device, "ghost", b"data")


def test_read_missing_file(device):
    assert read_file(device, "ghost") is None


def test_delete_file(device):
    create_file(device, "f")
    write_file(device, "f", b"data")
    with device.file_table.lock() as table:
        block = table.find_file("f").blocks[0]
    assert delete_file(device, "f") == [block]
    assert read_file(device, "f") is None
    assert device.read_block(block, device.BLOCK_SIZE) == bytes(device.BLOCK_SIZE)


def test_delete_missing_file(device):
    create_file(device, "keep")
    assert delete_file(device, "ghost") is None
    with device.file_table.lock() as table:
        assert table.list_files() == ["keep"]


def test_files_do_not_clobber_each_other(device):
    create_file(device, "a")
    create_file(device, "b")
    write_file(device, "a", b"first")
    write_file(device, "b", b"second")
    assert read_file(device, "a") == b"first"
    assert read_file(device, "b") == b"second"


def test_create_beyond_capacity():
    dev = MemoryBlockDevice(blocks_amount=2)
    create_file(dev, "a")
    with pytest.raises(NoFreeBlocksError):
        create_file(dev, "b")


def test_freed_block_is_reused():
    dev = MemoryBlockDevice(blocks_amount=2)
    create_file(dev, "a")
    freed = delete_file(dev, "a")
    create_file(dev, "b")
    with dev.file_table.lock() as table:
        assert table.find_file("b").blocks == freed