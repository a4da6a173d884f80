"""Kernel building blocks: synchronisation, a buffer cache, memory regions, a heap, printf and a framebuffer."""

__version__ = "0.1.0"
__all__ = [
    "sync",
    "mwc",
    "path",
    "rope",
    "buffer_cache",
    "vme",
    "printf",
    "libc",
    "heap",
    "framebuffer",
]