"""Formatting a device and creating, reading, writing and deleting files."""

from __future__ import annotations

from typing import Optional

from omegaos.superblock import Superblock

FS_BLOCK_COUNT = 1024


def format_fs(device) -> Superblock:
    """Write a fresh superblock to block 0 and return it."""
    superblock = Superblock(FS_BLOCK_COUNT)
    device.write_block(0, superblock.to_bytes().ljust(device.BLOCK_SIZE, b"\0"))
    return superblock


def create_file(device, filename: str) -> None:
    """Add an empty file to the device's file table."""
    with device.file_table.lock() as table:
        table.add_file(filename)


def write_file(device, file_name: str, data: bytes) -> None:
    """Replace the file's contents with ``data`` (one block at most)."""
    if len(data) > device.BLOCK_SIZE:
        raise ValueError(
            f"{len(data)} bytes do not fit in a {device.BLOCK_SIZE}-byte block"
        )
    with device.file_table.lock() as table:
        entry = table.find_file(file_name)
        if entry is None:
            raise FileNotFoundError(file_name)
        entry.size = len(data)
        block = entry.blocks[0]
    device.write_block(block, bytes(data).ljust(device.BLOCK_SIZE, b"\0"))


def read_file(device, file_name: str) -> Optional[bytes]:
    """The file's contents, or None if there is no such file."""
    with device.file_table.lock() as table:
        entry = table.find_file(file_name)
        if entry is None:
            return None
        return device.read_block(entry.blocks[0], entry.size)


def delete_file(device, file_name: str) -> Optional[list[int]]:
    """Remove the file and zero its blocks; return the freed blocks."""
    with device.file_table.lock() as table:
        blocks = table.find_and_remove_file(file_name)
    if blocks is None:
        return None
    empty_block = bytes(device.BLOCK_SIZE)
    for block in blocks:
        device.write_block(block, empty_block)
    return blocks