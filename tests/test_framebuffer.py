import io

import pytest

from kernkit.framebuffer import (
    COLOR_PURPLE,
    HEIGHT,
    MODE_320X200X256,
    VGA_AC_INDEX,
    VGA_CRTC_DATA,
    VGA_CRTC_INDEX,
    VGA_INSTAT_READ,
    VGA_MISC_WRITE,
    WIDTH,
    Framebuffer,
    write_regs,
)


class FakePorts:
    def __init__(self, read_value=0xFF):
        self.read_value = read_value
        self.log = []

    def inb(self, port):
        self.log.append(("in", port))
        return self.read_value

    def outb(self, port, value):
        self.log.append(("out", port, value))

    @property
    def writes(self):
        return [entry[1:] for entry in self.log if entry[0] == "out"]


@pytest.fixture
def screen():
    return Framebuffer(stream=io.StringIO())


def visible(fb):
    return [fb.pixel(x, y) for y in range(HEIGHT) for x in range(WIDTH)]


def test_plot_and_read_pixel(screen):
    screen.plot_pixel(10, 20, 5)
    assert screen.pixel(10, 20) == 5
    assert screen.pixel(11, 20) == 0


def test_color_truncated_to_byte(screen):
    screen.plot_pixel(1, 1, 0x1234)
    assert screen.pixel(1, 1) == 0x34


def test_offsets_are_row_major(screen):
    screen.plot_pixel(WIDTH, 0, 9)
    assert screen.pixel(0, 1) == 9


def test_clear_blanks_screen(screen):
    screen.draw_rectangle(0, 0, 50, 50, 3)
    screen.clear()
    assert set(visible(screen)) == {0}


def test_rectangle_covers_exact_area(screen):
    screen.draw_rectangle(5, 7, 12, 9, 4)
    pixels = visible(screen)
    assert pixels.count(4) == 12 * 9
    assert screen.pixel(5, 7) == 4
    assert screen.pixel(16, 15) == 4
    assert screen.pixel(17, 15) == 0
    assert screen.pixel(16, 16) == 0


def test_happy_face(screen):
    out = io.StringIO()
    fb = Framebuffer(stream=out)
    fb.draw_happy_face(30, 40)
    assert out.getvalue() == "*** just drew a smiley face\n"
    assert fb.pixel(30, 40) == COLOR_PURPLE
    assert fb.pixel(40, 40) == COLOR_PURPLE
    assert visible(fb).count(COLOR_PURPLE) == 13


def test_draw_image_scales_cells():
    out = io.StringIO()
    fb = Framebuffer(stream=out)
    image = [1, 2, 3, 4]
    fb.draw_image(image, 10, 10, 2, 2, 5)
    assert out.getvalue() == "*** drew the image\n"
    assert fb.pixel(10, 10) == 1
    assert fb.pixel(15, 10) == 2
    assert fb.pixel(10, 15) == 3
    assert fb.pixel(19, 19) == 4
    assert visible(fb).count(2) == 25


def test_draw_image_too_small_raises(screen):
    with pytest.raises(ValueError):
        screen.draw_image([1, 2, 3], 0, 0, 2, 2, 1)


def test_animation_leaves_last_frame():
    out = io.StringIO()
    fb = Framebuffer(stream=out)
    frames = [1, 1, 1, 1, 2, 0, 0, 2]
    fb.draw_animation(frames, 0, 0, 2, 2, 3, 2)
    assert out.getvalue() == "*** drew the image\n" * 2
    assert fb.pixel(0, 0) == 2
    assert fb.pixel(3, 0) == 0
    assert 1 not in visible(fb)


def test_animation_needs_enough_frames(screen):
    with pytest.raises(ValueError):
        screen.draw_animation([0] * 4, 0, 0, 2, 2, 1, 2)


def test_write_regs_sequence_ends():
    ports = FakePorts()
    write_regs(ports, MODE_320X200X256)
    assert ports.writes[0] == (VGA_MISC_WRITE, 0x63)
    assert ports.writes[-1] == (VGA_AC_INDEX, 0x20)
    assert ports.log[-2] == ("in", VGA_INSTAT_READ)


def test_write_regs_every_register_written():
    ports = FakePorts()
    write_regs(ports)
    assert len(ports.writes) == 1 + 4 + 2 * (len(MODE_320X200X256) - 1) + 1


def test_write_regs_unlocks_crtc():
    ports = FakePorts(read_value=0x55)
    write_regs(ports)
    writes = ports.writes
    assert writes[11] == (VGA_CRTC_INDEX, 0x03)
    assert writes[12] == (VGA_CRTC_DATA, 0x55 | 0x80)
    assert writes[13] == (VGA_CRTC_INDEX, 0x11)
    assert writes[14] == (VGA_CRTC_DATA, 0x55 & 0x7F)
    crtc_values = {}
    for (port, value), (next_port, next_value) in zip(writes[15:], writes[16:]):
        if port == VGA_CRTC_INDEX and next_port == VGA_CRTC_DATA:
            crtc_values[value] = next_value
    assert crtc_values[0x03] & 0x80
    assert not crtc_values[0x11] & 0x80


def test_write_regs_does_not_modify_table():
    table = list(MODE_320X200X256)
    table[1 + 5 + 0x11] |= 0x80
    before = list(table)
    write_regs(FakePorts(), table)
    assert table == before


def test_write_regs_rejects_wrong_length():
    with pytest.raises(ValueError):
        write_regs(FakePorts(), MODE_320X200X256[:-1])