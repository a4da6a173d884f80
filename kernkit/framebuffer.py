"""A 320x200 256-colour linear framebuffer and the register setup for it."""

from __future__ import annotations

import sys
import time
from typing import List, Optional, Protocol, Sequence, TextIO

WIDTH = 320
HEIGHT = 200
WINDOW_SIZE = 0x10000

COLOR_BLACK = 0x0
COLOR_GREEN = 0x2
COLOR_PURPLE = 0xF
BLACK = 0x0
WHITE = 0x7

VGA_AC_INDEX = 0x3C0
VGA_AC_WRITE = 0x3C0
VGA_AC_READ = 0x3C1
VGA_INSTAT_READ = 0x3DA
VGA_MISC_WRITE = 0x3C2
VGA_MISC_READ = 0x3CC
VGA_CRTC_INDEX = 0x3D4
VGA_CRTC_DATA = 0x3D5
VGA_GC_INDEX = 0x3CE
VGA_GC_DATA = 0x3CF
VGA_SEQ_INDEX = 0x3C4
VGA_SEQ_DATA = 0x3C5

VGA_NUM_AC_REGS = 21
VGA_NUM_CRTC_REGS = 25
VGA_NUM_GC_REGS = 9
VGA_NUM_SEQ_REGS = 5

MODE_320X200X256 = (
    # MISC
    0x63,
    # SEQ
    0x03, 0x01, 0x0F, 0x00, 0x0E,
    # CRTC
    0x5F, 0x4F, 0x50, 0x82, 0x54, 0x80, 0xBF, 0x1F,
    0x00, 0x41, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00,
    0x9C, 0x0E, 0x8F, 0x28, 0x40, 0x96, 0xB9, 0xA3,
    0xFF,
    # GC
    0x00, 0x00, 0x00, 0x00, 0x00, 0x40, 0x05, 0x0F,
    0xFF,
    # AC
    0x00, 0x01, 0x02, 0x03, 0x04, 0x05, 0x06, 0x07,
    0x08, 0x09, 0x0A, 0x0B, 0x0C, 0x0D, 0x0E, 0x0F,
    0x41, 0x00, 0x0F, 0x00, 0x00,
)

_REG_COUNT = 1 + VGA_NUM_SEQ_REGS + VGA_NUM_CRTC_REGS + VGA_NUM_GC_REGS + VGA_NUM_AC_REGS

_SMILE = (
    (0, 0), (10, 0),
    (0, 8), (1, 9), (2, 10), (3, 10), (4, 10), (5, 10),
    (6, 10), (7, 10), (8, 10), (9, 9), (10, 8),
)


class PortIO(Protocol):
    """Byte-wide access to I/O ports."""

    def inb(self, port: int) -> int: ...

    def outb(self, port: int, value: int) -> None: ...


class Framebuffer:
    """A 64 KiB video window of which the first 320x200 bytes are visible.

    Pixel offsets are 16-bit, so coordinates outside the screen wrap
    within the window; colours are truncated to one byte.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.width = WIDTH
        self.height = HEIGHT
        self.memory = bytearray(WINDOW_SIZE)
        self._stream = stream

    def _log(self, message: str) -> None:
        (sys.stdout if self._stream is None else self._stream).write(message)

    @staticmethod
    def _offset(x: int, y: int) -> int:
        return (x + WIDTH * y) & 0xFFFF

    def plot_pixel(self, x: int, y: int, color: int) -> None:
        self.memory[self._offset(x, y)] = color & 0xFF

    def pixel(self, x: int, y: int) -> int:
        return self.memory[self._offset(x, y)]

    def clear(self) -> None:
        """Paint the visible screen black."""
        self.memory[: WIDTH * HEIGHT] = bytes(WIDTH * HEIGHT)

    def draw_rectangle(self, x: int, y: int, width: int, height: int, color: int) -> None:
        for i in range(width):
            for j in range(height):
                self.plot_pixel(x + i, y + j, color)

    def draw_happy_face(self, x: int, y: int) -> None:
        """Draw two eyes and a smile with its top-left eye at (x, y)."""
        for dx, dy in _SMILE:
            self.plot_pixel(x + dx, y + dy, COLOR_PURPLE)
        self._log("*** just drew a smiley face\n")

    def draw_image(self, image: Sequence[int], x: int, y: int,
                   width: int, height: int, scale: int) -> None:
        """Draw a row-major image, each cell as a ``scale`` square."""
        if len(image) < width * height:
            raise ValueError("image holds fewer than width * height cells")
        for row in range(height):
            for col in range(width):
                self.draw_rectangle(x + col * scale, y + row * scale,
                                    scale, scale, image[width * row + col])
        self._log("*** drew the image\n")

    def draw_animation(self, image: Sequence[int], x: int, y: int, width: int,
                       height: int, scale: int, num_frames: int,
                       delay: float = 0.0) -> None:
        """Show consecutive frames of ``image``, clearing the screen before each."""
        frame_cells = width * height
        if len(image) < frame_cells * num_frames:
            raise ValueError("image holds fewer cells than the frames need")
        for frame in range(num_frames):
            self.clear()
            start = frame * frame_cells
            self.draw_image(image[start:start + frame_cells], x, y, width, height, scale)
            if delay > 0:
                time.sleep(delay)


def write_regs(ports: PortIO, regs: Sequence[int] = MODE_320X200X256) -> None:
    """Program the video registers with a mode table.

    The table holds, in order, the miscellaneous register and the
    sequencer, CRT controller, graphics controller and attribute controller
    registers.  The CRT controller registers are unlocked first and the
    table's copies are adjusted so that they stay unlocked; ``regs`` itself
    is not modified.
    """
    if len(regs) != _REG_COUNT:
        raise ValueError(f"a mode table holds {_REG_COUNT} registers, got {len(regs)}")
    values: List[int] = list(regs)
    misc = values[0]
    seq = values[1:1 + VGA_NUM_SEQ_REGS]
    crtc_start = 1 + VGA_NUM_SEQ_REGS
    crtc = values[crtc_start:crtc_start + VGA_NUM_CRTC_REGS]
    gc_start = crtc_start + VGA_NUM_CRTC_REGS
    gc = values[gc_start:gc_start + VGA_NUM_GC_REGS]
    ac = values[gc_start + VGA_NUM_GC_REGS:]

    ports.outb(VGA_MISC_WRITE, misc)
    for index, value in enumerate(seq):
        ports.outb(VGA_SEQ_INDEX, index)
        ports.outb(VGA_SEQ_DATA, value)

    ports.outb(VGA_CRTC_INDEX, 0x03)
    ports.outb(VGA_CRTC_DATA, ports.inb(VGA_CRTC_DATA) | 0x80)
    ports.outb(VGA_CRTC_INDEX, 0x11)
    ports.outb(VGA_CRTC_DATA, ports.inb(VGA_CRTC_DATA) & ~0x80 & 0xFF)

    crtc[0x03] |= 0x80
    crtc[0x11] &= ~0x80 & 0xFF
    for index, value in enumerate(crtc):
        ports.outb(VGA_CRTC_INDEX, index)
        ports.outb(VGA_CRTC_DATA, value)

    for index, value in enumerate(gc):
        ports.outb(VGA_GC_INDEX, index)
        ports.outb(VGA_GC_DATA, value)

    for index, value in enumerate(ac):
        ports.inb(VGA_INSTAT_READ)
        ports.outb(VGA_AC_INDEX, index)
        ports.outb(VGA_AC_WRITE, value)

    ports.inb(VGA_INSTAT_READ)
    ports.outb(VGA_AC_INDEX, 0x20)