import pytest

from kernkit.path import Path


def test_empty_path():
    path = Path("")
    assert path.is_empty()
    assert len(path) == 0
    assert path.remove() is None


def test_relative_path_components():
    assert list(Path("a/b/c")) == ["a", "b", "c"]


def test_absolute_path_has_root_component():
    assert list(Path("/usr/bin")) == ["/", "usr", "bin"]


def test_root_only():
    assert list(Path("/")) == ["/"]
    assert list(Path("///")) == ["/"]


@pytest.mark.parametrize(
    "text, expected",
    [
        ("//a///b//", ["/", "a", "b"]),
        ("a/", ["a"]),
        ("a//b", ["a", "b"]),
        ("./x/../y", [".", "x", "..", "y"]),
    ],
)
def test_redundant_slashes_are_dropped(text, expected):
    assert list(Path(text)) == expected


def test_remove_consumes_in_order():
    path = Path("/etc/init")
    removed = []
    while not path.is_empty():
        removed.append(path.remove())
    assert removed == ["/", "etc", "init"]
    assert path.remove() is None


def test_iteration_does_not_consume():
    path = Path("a/b")
    assert list(path) == ["a", "b"]
    assert len(path) == 2
    assert path.remove() == "a"


def test_clear():
    path = Path("/a/b")
    path.clear()
    assert path.is_empty()
    assert list(path) == []


def test_merge_symbolic_link_prepends():
    path = Path("/link/rest")
    assert path.remove() == "/"
    assert path.remove() == "link"
    path.merge_symbolic_link(Path("target/dir"))
    assert list(path) == ["target", "dir", "rest"]


def test_merge_absolute_link_and_other_unchanged():
    path = Path("x")
    link = Path("/abs")
    path.merge_symbolic_link(link)
    assert list(path) == ["/", "abs", "x"]
    assert list(link) == ["/", "abs"]


def test_merge_empty_link_is_noop():
    path = Path("a/b")
    path.merge_symbolic_link(Path(""))
    assert list(path) == ["a", "b"]


def test_merge_accepts_string():
    path = Path("c")
    path.merge_symbolic_link("a/b")
    assert list(path) == ["a", "b", "c"]