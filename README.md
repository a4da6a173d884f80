# kernkit

Building blocks of a small operating-system kernel, written as plain Python
objects that you can exercise, test and reason about without booting
anything. It has no dependencies beyond the standard library.

## What is inside

| Module | Contents |
| --- | --- |
| `kernkit.sync` | `Queue` (locked FIFO, non-blocking `remove`), `Semaphore`, `BlockingLock` (also a context manager), `BoundedBuffer`, `BlockingQueue` |
| `kernkit.mwc` | `MultiplyWithCarry`, a seeded 32-bit multiply-with-carry generator; `next()` or iterate it |
| `kernkit.path` | `Path`, splits a slash-separated path into components (`"/"` first for absolute paths) and can put a symbolic link's components in front |
| `kernkit.rope` | `RopeString`, an immutable string whose `+`, `replace`, `slice`, `drop_while` and `keep_while` share structure; `to_c()` gives NUL-terminated bytes |
| `kernkit.buffer_cache` | `BlockDevice`, an abstract block device, and `BufferCache`, a hashed LRU cache in front of one |
| `kernkit.vme` | `VME`, page-aligned region bookkeeping with first-fit reuse of holes and merging of adjacent holes; `VMEEntry`, `FreeEntry`, `AddressSpaceFull` |
| `kernkit.printf` | `vsprintf`, `sprintf` and `printf` with 32-bit integer semantics |
| `kernkit.libc` | `puts` and `cp` over file-like streams |
| `kernkit.heap` | `FirstFitHeap`, a boundary-tag first-fit allocator with `malloc`, `free`, `realloc`, `read` and `write` |
| `kernkit.framebuffer` | `Framebuffer`, an in-memory 320x200 256-colour surface, and `write_regs`, which programs video registers through a port object you supply |

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

A bounded buffer shared between threads:

```python
import threading
from kernkit.sync import BoundedBuffer

bb = BoundedBuffer(4)
threading.Thread(target=lambda: [bb.put(i) for i in range(10)]).start()
print([bb.get() for _ in range(10)])
```

Formatting in the C style:

```python
from kernkit.printf import sprintf

sprintf("*** %5d|%-4s|%x", 42, "ab", 255)   # '***    42|ab  |ff'
```

The conversions are `d i o u x X f c s p n %`. `e E g G` consume their
argument but print nothing; `%n` takes a callable that receives the count of
characters produced so far. Output stops after 1000 characters.

A first-fit heap (pointers are byte offsets into the heap):

```python
from kernkit.heap import FirstFitHeap

heap = FirstFitHeap()
p = heap.malloc(16)
heap.write(p, b"hello")
p = heap.realloc(p, 64)
print(heap.read(p, 5))   # b'hello'
heap.free(p)
```

`malloc` raises `MemoryError` when no free block is large enough, and freeing
or reading through a pointer that is not an allocated block raises
`ValueError`.

Path components:

```python
from kernkit.path import Path

list(Path("/usr//bin/ls"))   # ['/', 'usr', 'bin', 'ls']
```

A cached block device:

```python
from kernkit.buffer_cache import BlockDevice, BufferCache

class Disk(BlockDevice):
    def read_block(self, block_number):
        return bytes([block_number % 256]) * self.block_size

    def size_in_bytes(self):
        return self.block_size * 1024

cache = BufferCache(Disk(512))
cache.read_block(7)
print(7 in cache, len(cache))   # True 1
```

The cache holds at most `capacity - 1` blocks (997 buckets by default) and
rejects blocks of the wrong size from the device with `ValueError`.

Virtual memory regions:

```python
from kernkit.vme import VME

vme = VME(0x80000000, 0xF0000000)
va = vme.add_entry(10000)        # three pages at 0x80000000
print(vme.get(va + 5000).num_pages)
vme.remove_entry(va)             # the pages become a reusable hole
```

`add_entry` raises `AddressSpaceFull` when neither a hole nor the remaining
range can hold the request.

## What it does not do

kernkit models the data structures of a kernel; it is not one. There is no
scheduler, no processes or system calls, no file system and no disk driver:
`BlockDevice` is an interface you implement over whatever storage you have.
`Framebuffer` draws into a `bytearray` rather than onto a screen, and
`write_regs` only issues `inb`/`outb` calls on an object you pass in. The
package installs no command-line program.