"""A simulated hobby kernel: heap allocators, an in-memory block file system, a text console, a shell and cooperative tasks."""

__version__ = "0.1.0"