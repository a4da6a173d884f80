"""An immutable rope string whose concatenation, replacement and slicing
share structure instead of copying characters."""

from __future__ import annotations

from itertools import islice
from typing import Callable, Iterator, Optional, Union


class _Impl:
    __slots__ = ("length",)

    def __init__(self, length: int) -> None:
        self.length = length

    def at(self, index: int) -> str:
        raise NotImplementedError

    def chars(self) -> Iterator[str]:
        raise NotImplementedError

    def _check(self, index: int) -> None:
        if not 0 <= index < self.length:
            raise IndexError(f"index {index} out of range for length {self.length}")


class _Empty(_Impl):
    __slots__ = ()

    def __init__(self) -> None:
        super().__init__(0)

    def at(self, index: int) -> str:
        raise IndexError(f"index {index} out of range for an empty string")

    def chars(self) -> Iterator[str]:
        return iter(())


class _Simple(_Impl):
    __slots__ = ("text",)

    def __init__(self, text: str) -> None:
        super().__init__(len(text))
        self.text = text

    def at(self, index: int) -> str:
        self._check(index)
        return self.text[index]

    def chars(self) -> Iterator[str]:
        return iter(self.text)


class _Concat(_Impl):
    __slots__ = ("lhs", "rhs")

    def __init__(self, lhs: _Impl, rhs: _Impl) -> None:
        super().__init__(lhs.length + rhs.length)
        self.lhs = lhs
        self.rhs = rhs

    def at(self, index: int) -> str:
        self._check(index)
        if index < self.lhs.length:
            return self.lhs.at(index)
        return self.rhs.at(index - self.lhs.length)

    def chars(self) -> Iterator[str]:
        yield from self.lhs.chars()
        yield from self.rhs.chars()


class _Replace(_Impl):
    __slots__ = ("base", "old", "new")

    def __init__(self, base: _Impl, old: str, new: str) -> None:
        super().__init__(base.length)
        self.base = base
        self.old = old
        self.new = new

    def at(self, index: int) -> str:
        self._check(index)
        ch = self.base.at(index)
        return self.new if ch == self.old else ch

    def chars(self) -> Iterator[str]:
        return (self.new if ch == self.old else ch for ch in self.base.chars())


class _Slice(_Impl):
    __slots__ = ("base", "start")

    def __init__(self, base: _Impl, start: int, end: int) -> None:
        super().__init__(end - start + 1)
        self.base = base
        self.start = start

    def at(self, index: int) -> str:
        self._check(index)
        return self.base.at(index + self.start)

    def chars(self) -> Iterator[str]:
        return islice(self.base.chars(), self.start, self.start + self.length)


def _single_char(value: str, name: str) -> None:
    if not isinstance(value, str) or len(value) != 1:
        raise ValueError(f"{name} must be a single character")


class RopeString:
    """An immutable string built from shared pieces."""

    __slots__ = ("_impl",)

    def __init__(self, text: str = "", length: Optional[int] = None) -> None:
        if length is not None:
            if not 0 <= length <= len(text):
                raise ValueError("length must be within the given text")
            text = text[:length]
        self._impl: _Impl = _Simple(text) if text else _Empty()

    @classmethod
    def _wrap(cls, impl: _Impl) -> "RopeString":
        rope = cls.__new__(cls)
        rope._impl = impl
        return rope

    def __len__(self) -> int:
        return self._impl.length

    def __add__(self, other: Union["RopeString", str]) -> "RopeString":
        if isinstance(other, str):
            other = RopeString(other)
        elif not isinstance(other, RopeString):
            return NotImplemented
        if len(self) == 0:
            return other
        if len(other) == 0:
            return self
        return RopeString._wrap(_Concat(self._impl, other._impl))

    def __getitem__(self, index: Union[int, slice]) -> Union[str, "RopeString"]:
        if isinstance(index, slice):
            start, stop, step = index.indices(len(self))
            if step != 1:
                raise ValueError("rope slices do not support a step")
            if stop <= start:
                return RopeString()
            return self.slice(start, stop - 1)
        if index < 0:
            index += len(self)
        return self.at(index)

    def __str__(self) -> str:
        return "".join(self._impl.chars())

    def __repr__(self) -> str:
        return f"RopeString({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (RopeString, str)):
            return str(self) == str(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(str(self))

    def at(self, index: int) -> str:
        """The character at ``index``; raises IndexError outside the string."""
        return self._impl.at(index)

    def replace(self, old: str, new: str) -> "RopeString":
        """Every occurrence of the character ``old`` replaced by ``new``."""
        _single_char(old, "old")
        _single_char(new, "new")
        if old == new:
            return self
        return RopeString._wrap(_Replace(self._impl, old, new))

    def slice(self, start: int, end: int) -> "RopeString":
        """The characters from ``start`` to ``end``, both inclusive."""
        length = len(self)
        if start == 0 and end == length - 1:
            return self
        if start > end:
            return RopeString()
        if start < 0 or end > length or end - start + 1 > length:
            raise IndexError(f"slice {start}..{end} out of range for length {length}")
        return RopeString._wrap(_Slice(self._impl, start, end))

    def drop_while(self, predicate: Callable[[str], bool]) -> "RopeString":
        """The string without its longest prefix whose characters match."""
        for index, ch in enumerate(self._impl.chars()):
            if not predicate(ch):
                return self.slice(index, len(self) - 1)
        return RopeString()

    def keep_while(self, predicate: Callable[[str], bool]) -> "RopeString":
        """The longest prefix whose characters match."""
        for index, ch in enumerate(self._impl.chars()):
            if not predicate(ch):
                return RopeString() if index == 0 else self.slice(0, index - 1)
        return self

    def starts_with(self, ch: str) -> bool:
        return len(self) > 0 and self._impl.at(0) == ch

    def to_c(self) -> bytes:
        """The UTF-8 bytes of the string followed by a terminating NUL."""
        return str(self).encode("utf-8") + b"\0"