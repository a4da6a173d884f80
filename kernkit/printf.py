"""A small printf-style formatter with 32-bit integer semantics.

Supported conversions are ``d i o u x X f c s p n %``; ``e E g G`` consume
their argument but print nothing, ``w`` skips the character after it and
unknown conversions are skipped without consuming an argument.  Flags
``- + space # 0``, a width, a precision (either may be ``*``) and the length
modifiers ``h l L`` are accepted.
"""

from __future__ import annotations

import enum
import operator
import sys
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Optional, TextIO, Tuple

DEFAULT_MAXLEN = 1000

_MASK32 = 0xFFFFFFFF
_MAX_DIGITS = 20
_DIGITS_LOWER = "0123456789abcdef"
_DIGITS_UPPER = "0123456789ABCDEF"
_DECIMAL = "0123456789"


class _Flag(enum.IntFlag):
    NONE = 0
    MINUS = 1 << 0
    PLUS = 1 << 1
    SPACE = 1 << 2
    NUM = 1 << 3
    ZERO = 1 << 4
    UP = 1 << 5
    UNSIGNED = 1 << 6


_FLAG_CHARS = {
    "-": _Flag.MINUS,
    "+": _Flag.PLUS,
    " ": _Flag.SPACE,
    "#": _Flag.NUM,
    "0": _Flag.ZERO,
}


@dataclass
class _Spec:
    flags: _Flag = _Flag.NONE
    width: int = 0
    precision: int = -1


def _next_arg(args: Iterator[Any]) -> Any:
    try:
        return next(args)
    except StopIteration:
        raise TypeError("not enough arguments for format string") from None


def _int_arg(args: Iterator[Any]) -> int:
    value = _next_arg(args)
    try:
        return operator.index(value)
    except TypeError:
        raise TypeError(f"expected an integer argument, got {value!r}") from None


def _signed32(value: int) -> int:
    value &= _MASK32
    return value - (1 << 32) if value & 0x80000000 else value


def _digits(value: int, base: int, upper: bool = False) -> str:
    """Digits of a non-negative value, keeping at most the lowest 19."""
    table = _DIGITS_UPPER if upper else _DIGITS_LOWER
    reversed_digits: List[str] = []
    while True:
        reversed_digits.append(table[value % base])
        value //= base
        if not value or len(reversed_digits) >= _MAX_DIGITS:
            break
    if len(reversed_digits) == _MAX_DIGITS:
        reversed_digits.pop()
    return "".join(reversed(reversed_digits))


def _parse_spec(fmt: str, pos: int, args: Iterator[Any]) -> Tuple[Optional[_Spec], int]:
    """Parse flags, width, precision and modifier after a ``%``.

    Returns the spec and the position of the conversion character, or
    ``None`` when the format ends before a conversion character.
    """
    end = len(fmt)
    spec = _Spec()
    while pos < end and fmt[pos] in _FLAG_CHARS:
        spec.flags |= _FLAG_CHARS[fmt[pos]]
        pos += 1
    while pos < end:
        ch = fmt[pos]
        if ch in _DECIMAL:
            spec.width = 10 * spec.width + int(ch)
            pos += 1
        elif ch == "*":
            spec.width = _int_arg(args)
            pos += 1
            break
        else:
            break
    if pos < end and fmt[pos] == ".":
        pos += 1
        while pos < end:
            ch = fmt[pos]
            if ch in _DECIMAL:
                spec.precision = 10 * max(spec.precision, 0) + int(ch)
                pos += 1
            elif ch == "*":
                spec.precision = _int_arg(args)
                pos += 1
                break
            else:
                break
    if pos < end and fmt[pos] in "hlL":
        pos += 1
    if pos >= end:
        return None, pos
    return spec, pos


def _format_int(value: int, base: int, spec: _Spec) -> str:
    flags = spec.flags
    precision = max(spec.precision, 0)
    sign = ""
    magnitude = value
    if not flags & _Flag.UNSIGNED:
        if value < 0:
            sign = "-"
            magnitude = -value
        elif flags & _Flag.PLUS:
            sign = "+"
        elif flags & _Flag.SPACE:
            sign = " "
    digits = _digits(magnitude, base, bool(flags & _Flag.UP))
    zero_pad = max(precision - len(digits), 0)
    space_pad = max(spec.width - max(precision, len(digits)) - len(sign), 0)
    if flags & _Flag.ZERO:
        zero_pad = max(zero_pad, space_pad)
        space_pad = 0
    body = sign + "0" * zero_pad + digits
    if flags & _Flag.MINUS:
        return body + " " * space_pad
    return " " * space_pad + body


def _format_str(value: Any, spec: _Spec, limit: int) -> str:
    if value is None:
        text = "<NULL>"
    elif isinstance(value, (bytes, bytearray)):
        text = bytes(value).decode("latin-1")
    else:
        text = str(value)
    text = text.split("\0", 1)[0]
    pad = " " * max(spec.width - len(text), 0)
    body = text + pad if spec.flags & _Flag.MINUS else pad + text
    return body[: max(limit, 0)]


def _xround(value: float) -> int:
    whole = int(value)
    if value - whole >= 0.5:
        whole += 1
    return whole


def _format_float(value: float, spec: _Spec) -> str:
    flags = spec.flags
    precision = 6 if spec.precision < 0 else spec.precision
    magnitude = abs(value)
    if value < 0:
        sign = "-"
    elif flags & _Flag.PLUS:
        sign = "+"
    elif flags & _Flag.SPACE:
        sign = " "
    else:
        sign = ""
    whole = int(magnitude)
    precision = min(precision, 9)
    scale = 10 ** precision
    fraction = _xround(scale * (magnitude - whole))
    if fraction >= scale:
        whole += 1
        fraction -= scale
    int_digits = _digits(whole, 10)
    frac_digits = _digits(fraction, 10)

    pad = max(spec.width - len(int_digits) - precision - 1 - len(sign), 0)
    zero_pad = max(precision - len(frac_digits), 0)
    if flags & _Flag.MINUS:
        pad = -pad

    parts: List[str] = []
    if flags & _Flag.ZERO and pad > 0:
        if sign:
            parts.append(sign)
            pad -= 1
            sign = ""
        parts.append("0" * pad)
        pad = 0
    if pad > 0:
        parts.append(" " * pad)
    parts.append(sign)
    parts.append(int_digits)
    if precision > 0:
        parts.append(".")
        parts.append(frac_digits)
    parts.append("0" * zero_pad)
    if pad < 0:
        parts.append(" " * -pad)
    return "".join(parts)


def _format_char(value: Any) -> str:
    if isinstance(value, str):
        if len(value) != 1:
            raise TypeError("%c requires a single character")
        return value
    try:
        return chr(operator.index(value) & 0xFF)
    except TypeError:
        raise TypeError(f"%c requires an integer or a character, got {value!r}") from None


def vsprintf(fmt: str, args: Iterable[Any] = (), maxlen: int = DEFAULT_MAXLEN) -> str:
    """Format ``args`` according to ``fmt``.

    Formatting stops once ``maxlen`` characters have been produced, though a
    conversion that is under way is completed.  The format ends at its first
    NUL character.
    """
    fmt = fmt.split("\0", 1)[0]
    arg_iter = iter(args)
    out: List[str] = []
    length = 0
    pos = 0
    end = len(fmt)

    while pos < end and length < maxlen:
        ch = fmt[pos]
        pos += 1
        if ch != "%":
            out.append(ch)
            length += 1
            continue
        spec, pos = _parse_spec(fmt, pos, arg_iter)
        if spec is None:
            break
        conv = fmt[pos]
        text = ""
        if conv in "di":
            text = _format_int(_signed32(_int_arg(arg_iter)), 10, spec)
        elif conv in "ouxX":
            spec.flags |= _Flag.UNSIGNED
            if conv == "X":
                spec.flags |= _Flag.UP
            base = {"o": 8, "u": 10}.get(conv, 16)
            text = _format_int(_int_arg(arg_iter) & _MASK32, base, spec)
        elif conv == "f":
            text = _format_float(float(_next_arg(arg_iter)), spec)
        elif conv in "eEgG":
            _next_arg(arg_iter)
        elif conv == "c":
            text = _format_char(_next_arg(arg_iter))
        elif conv == "s":
            limit = maxlen if spec.precision < 0 else spec.precision
            text = _format_str(_next_arg(arg_iter), spec, limit)
        elif conv == "p":
            pointer = _next_arg(arg_iter)
            value = 0 if pointer is None else operator.index(pointer)
            text = _format_int(_signed32(value), 16, spec)
        elif conv == "n":
            sink = _next_arg(arg_iter)
            if not callable(sink):
                raise TypeError("%n requires a callable that receives the count")
            sink(length)
        elif conv == "%":
            text = "%"
        elif conv == "w":
            pos += 1
        out.append(text)
        length += len(text)
        pos += 1

    return "".join(out)


def sprintf(fmt: str, *args: Any) -> str:
    """Format ``args`` according to ``fmt`` with the default length limit."""
    return vsprintf(fmt, args, DEFAULT_MAXLEN)


def printf(fmt: str, *args: Any, file: Optional[TextIO] = None) -> int:
    """Write the formatted text to ``file`` (standard output by default).

    Returns the number of characters written.
    """
    text = vsprintf(fmt, args, DEFAULT_MAXLEN)
    (sys.stdout if file is None else file).write(text)
    return len(text)