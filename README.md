# omegaos

The parts of a small hobby operating-system kernel, modelled in plain Python
with no hardware underneath. It has no dependencies beyond the standard library.

## What is in it

- **`omegaos.memory`**: `BootInfoFrameAllocator` hands out the 4 KiB frames
  of the `USABLE` regions in a list of `MemoryRegion`s, one at a time.
  `allocate_frame()` returns `None` once they are all used.
- **`omegaos.allocator`**: `Layout` holds a size and a power-of-two alignment.
  The module also has `align_up`, the `Locked` mutex wrapper (`with
  locked.lock() as inner: ...`) and the heap constants `HEAP_START` and
  `HEAP_SIZE` (100 KiB). `init_heap(frame_allocator, allocator)` takes one
  frame for each heap page and returns the page-to-frame mapping. It raises
  `FrameAllocationError` when the frames run out. It then initialises the
  locked allocator.
- **Heap allocators**, each with `init`, `alloc(layout)` and
  `dealloc(ptr, layout)`. Addresses are plain integers. When a request cannot
  be met, `alloc` raises `AllocationError`.
  - `omegaos.bump.BumpAllocator` hands out memory in a line. It reuses the
    whole heap once every allocation has been freed.
  - `omegaos.linked_list.LinkedListAllocator` is a first-fit free list that
    splits regions. `free_regions()` shows the list.
  - `omegaos.fixed_size_block.FixedSizeBlockAllocator` keeps free lists for
    block sizes from 8 to 2048 bytes. Larger requests go to a linked-list
    fallback.
- **File system**:
  - `omegaos.block_device.MemoryBlockDevice` is backed by a `bytearray` of
    512 KiB by default. Its blocks are 512 bytes, and its `file_table` is a
    `Locked[FileTable]` covering 1024 blocks.
  - `omegaos.superblock.Superblock` packs to three little-endian 32-bit fields
    with `to_bytes` and reads back with `from_bytes`. The magic number is
    `0x6969`.
  - `omegaos.file_table.FileTable` holds `FileEntry` objects. It hands out
    free blocks lowest first, starting at block 1.
  - `omegaos.file_ops` has `format_fs`, `create_file`, `write_file`,
    `read_file` and `delete_file`.
- **Console**:
  - `omegaos.vga_buffer.Writer` is an 80×25 grid of coloured `ScreenChar`
    cells. It writes on the bottom row and scrolls up on a new line. A tab
    becomes four spaces and a backspace clears the previous cell. Bytes that
    are not printable ASCII show as `0xFE`. `row_text(row)` reads a row back.
  - `omegaos.keyboard.InputBuffer` collects decoded keys into a 256-byte line
    and echoes them. `read_input()` waits for Enter.
- **Shell**: `omegaos.cli.Shell` and the `omegaos` command.
- **Tasks**:
  - `omegaos.task.Task` wraps a coroutine with a unique `TaskId`.
    `suspend()` and `yield_now()` hand control back to the executor.
  - `omegaos.executor.Executor` polls only tasks whose waker has fired. Its
    queue holds 100 entries.
  - `omegaos.simple_executor.SimpleExecutor` polls every pending task in turn.
  - `omegaos.scancodes.ScancodeStream` is an async iterator of scancode bytes.
    Bytes are pushed in with `add_scancode`.

## Installing

```
pip install .
```

## The shell

```
omegaos
```

It prints `Welcome to OmegaOS!`, formats a fresh in-memory device and shows a
`> ` prompt. It reads commands from standard input. It stops on `exit` or at
the end of input.

| command        | effect                                      |
|----------------|---------------------------------------------|
| `touch <file>` | create an empty file                        |
| `wf <file>`    | write the next entered line into the file   |
| `cat <file>`   | print a file's contents                     |
| `rm <file>`    | remove a file and zero its block            |
| `ls`           | list files in creation order                |
| `echo <text>`  | print text                                  |
| `help`         | list commands                               |
| `exit`         | leave the shell                             |

A file holds one block, so at most 512 bytes. A file name is at most 16 bytes
of UTF-8.

## Using the library

```python
from omegaos.block_device import MemoryBlockDevice
from omegaos.file_ops import format_fs, create_file, write_file, read_file

device = MemoryBlockDevice()
format_fs(device)
create_file(device, "notes")
write_file(device, "notes", b"hello")
assert read_file(device, "notes") == b"hello"
```

The file operations report problems as exceptions:

- `write_file` raises `FileNotFoundError` when there is no such file, and
  `ValueError` when the data is longer than a block.
- `create_file` raises `NoFreeBlocksError` when no block is free.
- `read_file` and `delete_file` return `None` when there is no such file.

```python
from omegaos.allocator import Layout
from omegaos.bump import BumpAllocator

heap = BumpAllocator()
heap.init(0x4444_4444_0000, 100 * 1024)
ptr = heap.alloc(Layout(8, 8))
heap.dealloc(ptr, Layout(8, 8))
```

```python
from omegaos.executor import Executor
from omegaos.task import Task, yield_now

async def job(log):
    log.append("start")
    await yield_now()
    log.append("end")

log = []
executor = Executor()
executor.spawn(Task(job(log)))
executor.run()
assert log == ["start", "end"]
```

## What it does not do

- Nothing touches real hardware. There are no interrupts, page tables,
  serial port or screen memory. `init_heap` only records which frame backs
  each page.
- Storage lives in memory. Every run of the shell starts with an empty,
  freshly formatted device, and nothing is kept after it exits.
- There is no scancode-to-key decoding. `InputBuffer` takes keys that are
  already decoded, and `ScancodeStream` passes raw bytes through.
- Files never grow beyond their single block.

## Running the tests

```
pip install .[test]
pytest
```