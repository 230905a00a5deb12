"""In-memory file tree values.

A ``FileTree`` is either a ``File`` holding UTF-8 text or a ``Directory``
mapping unique names to nested trees. Both are frozen: every transformation
in the engine builds a new tree instead of editing one in place.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Union

from scaffold_tree.errors import EncodingError, InvalidPath


@dataclass(frozen=True)
class File:
    """A leaf entry holding text content."""

    content: str

    def __post_init__(self) -> None:
        if not isinstance(self.content, str):
            raise EncodingError(
                "<file>", f"file content must be text, got {type(self.content).__name__}"
            )


@dataclass(frozen=True)
class Directory:
    """A directory entry with uniquely named children."""

    children: Mapping[str, "FileTree"] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name, child in self.children.items():
            _check_name(name)
            if not isinstance(child, (File, Directory)):
                raise TypeError(f"{name!r} is not a File or Directory: {child!r}")
        # Read-only view over a private copy so callers cannot mutate the tree.
        object.__setattr__(self, "children", MappingProxyType(dict(self.children)))

    def __getitem__(self, name: str) -> "FileTree":
        return self.children[name]

    def __contains__(self, name: object) -> bool:
        return name in self.children


FileTree = Union[File, Directory]

# Closing markers of the template path grammar; the only place a "/" may
# appear inside an entry name.
CLOSING_MARKERS = ("{{/each}}", "{{/if}}")


def _check_name(name: str) -> None:
    if not isinstance(name, str) or not name:
        raise InvalidPath(repr(name), "entry names must be non-empty strings")
    bare = name
    for marker in CLOSING_MARKERS:
        bare = bare.replace(marker, "")
    if "/" in bare or name in (".", ".."):
        raise InvalidPath(name, "entry names must be single path segments")


# ---------------------------------------------------------------------------
# Plain-data conversion
# ---------------------------------------------------------------------------


def tree_from_dict(data: Mapping[str, Any]) -> Directory:
    """Build a ``Directory`` from nested dicts whose leaves are strings.

    Example::

        tree_from_dict({"src": {"main.py": "print('hi')\\n"}, "docs": {}})
    """
    children: dict[str, FileTree] = {}
    for name, value in data.items():
        if isinstance(value, str):
            children[name] = File(value)
        elif isinstance(value, Mapping):
            children[name] = tree_from_dict(value)
        elif isinstance(value, (File, Directory)):
            children[name] = value
        else:
            raise EncodingError(name, f"unsupported entry type {type(value).__name__}")
    return Directory(children)


def tree_to_dict(tree: Directory) -> dict[str, Any]:
    """Inverse of :func:`tree_from_dict`."""
    result: dict[str, Any] = {}
    for name, child in tree.children.items():
        if isinstance(child, File):
            result[name] = child.content
        else:
            result[name] = tree_to_dict(child)
    return result
