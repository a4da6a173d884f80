import pytest

from kernkit.rope import RopeString


def test_empty_string():
    s = RopeString()
    assert len(s) == 0
    assert str(s) == ""
    with pytest.raises(IndexError):
        s.at(0)


def test_length_argument_truncates():
    s = RopeString("hello world", 5)
    assert str(s) == "hello"
    with pytest.raises(ValueError):
        RopeString("abc", 10)


def test_concatenation():
    s = RopeString("foo") + RopeString("bar") + "baz"
    assert str(s) == "foobarbaz"
    assert len(s) == len("foobarbaz")
    assert [s.at(i) for i in range(len(s))] == list("foobarbaz")


def test_concat_with_empty_returns_operand():
    s = RopeString("abc")
    assert (s + RopeString()) is s
    assert (RopeString() + s) is s


def test_at_out_of_range():
    s = RopeString("ab") + "cd"
    with pytest.raises(IndexError):
        s.at(4)
    with pytest.raises(IndexError):
        s.at(-1)


def test_getitem_int_and_slice():
    s = RopeString("abcdef")
    assert s[0] == "a"
    assert s[-1] == "f"
    assert str(s[1:4]) == "abcdef"[1:4]
    assert str(s[4:2]) == ""


def test_replace():
    s = RopeString("a/b/c").replace("/", "_")
    assert str(s) == "a/b/c".replace("/", "_")
    same = RopeString("xyz")
    assert same.replace("x", "x") is same


def test_replace_requires_single_characters():
    with pytest.raises(ValueError):
        RopeString("abc").replace("ab", "c")


def test_slice_is_inclusive():
    s = RopeString("hello") + " world"
    assert str(s.slice(6, 10)) == "world"
    assert str(s.slice(0, 4)) == "hello"


def test_full_slice_returns_same():
    s = RopeString("abc")
    assert s.slice(0, 2) is s


def test_reversed_slice_is_empty():
    assert str(RopeString("abc").slice(2, 1)) == ""


def test_slice_out_of_range():
    with pytest.raises(IndexError):
        RopeString("abc").slice(1, 7)


def test_nested_operations_agree_with_str():
    text = "one two three"
    s = (RopeString("one ") + "two" + " three").replace(" ", "-").slice(2, 9)
    assert str(s) == text.replace(" ", "-")[2:10]
    assert [s.at(i) for i in range(len(s))] == list(str(s))


def test_drop_while():
    s = RopeString("///usr/bin")
    assert str(s.drop_while(lambda c: c == "/")) == "usr/bin"
    assert str(RopeString("////").drop_while(lambda c: c == "/")) == ""


def test_keep_while():
    s = RopeString("usr/bin")
    assert str(s.keep_while(lambda c: c != "/")) == "usr"
    assert str(s.keep_while(lambda c: c == "/")) == ""
    assert s.keep_while(lambda c: True) is s


def test_starts_with():
    assert RopeString("/root").starts_with("/")
    assert not RopeString("root").starts_with("/")
    assert not RopeString().starts_with("/")


def test_to_c_is_nul_terminated():
    s = RopeString("ab") + "c"
    assert s.to_c() == b"abc\0"
    assert RopeString().to_c() == b"\0"


def test_equality_with_str():
    assert RopeString("ab") + "cd" == "abcd"
    assert RopeString("ab") + "cd" == RopeString("abcd")
    assert hash(RopeString("x") + "y") == hash(RopeString("xy"))