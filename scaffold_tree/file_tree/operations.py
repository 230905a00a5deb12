"""Flatten/unflatten and lookup primitives over file trees.

A flattened tree is an ordered ``{PurePosixPath: content | None}`` mapping:
every file with its text, and every otherwise-empty directory as ``None``.
Entries are sorted by path segments, which is the traversal order the
renderer relies on for its "later entry wins" overrides.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import PurePosixPath
from typing import Optional, Union

from scaffold_tree.errors import InvalidPath, PathNotFound, TreeConflict
from scaffold_tree.file_tree.models import Directory, File, FileTree, tree_from_dict

FlatTree = dict[PurePosixPath, Optional[str]]
PathLike = Union[PurePosixPath, str]


def as_tree_path(path: PathLike) -> PurePosixPath:
    """Normalise *path* into a relative ``PurePosixPath`` inside a tree.

    Empty and ``.`` segments collapse; absolute paths and ``..`` segments
    are rejected because they would escape the tree root.
    """
    tree_path = path if isinstance(path, PurePosixPath) else PurePosixPath(path)
    if tree_path.is_absolute() or ".." in tree_path.parts:
        raise InvalidPath(str(path), "paths must be relative and stay inside the tree")
    return tree_path


# ---------------------------------------------------------------------------
# Flatten / unflatten
# ---------------------------------------------------------------------------


def flatten_file_tree(tree: Directory) -> FlatTree:
    """List every file and every empty directory of *tree*, sorted by path."""
    entries: list[tuple[tuple[str, ...], Optional[str]]] = []
    _flatten_into(tree, (), entries)
    # Sort on the entry names themselves: a template name holding a closing
    # marker such as "{{/each}}" is one segment here but several path parts.
    entries.sort(key=lambda item: item[0])
    return {PurePosixPath(*segments): content for segments, content in entries}


def _flatten_into(
    tree: Directory,
    prefix: tuple[str, ...],
    entries: list[tuple[tuple[str, ...], Optional[str]]],
) -> None:
    for name, child in tree.children.items():
        segments = prefix + (name,)
        if isinstance(child, File):
            entries.append((segments, child.content))
        elif child.children:
            _flatten_into(child, segments, entries)
        else:
            entries.append((segments, None))


def unflatten_file_tree(entries: Mapping[PathLike, Optional[str]]) -> Directory:
    """Rebuild a ``Directory`` from flattened entries.

    Raises:
        TreeConflict: If a path is a file while a longer path below it is
            also present.
    """
    root: dict = {}
    for raw_path, content in entries.items():
        path = as_tree_path(raw_path)
        if not path.parts:
            if content is not None:
                raise TreeConflict(path)
            continue

        node = root
        for depth, part in enumerate(path.parts[:-1]):
            child = node.setdefault(part, {})
            if isinstance(child, str):
                raise TreeConflict(PurePosixPath(*path.parts[: depth + 1]))
            node = child

        leaf = path.parts[-1]
        existing = node.get(leaf)
        if content is None:
            if isinstance(existing, str):
                raise TreeConflict(path)
            node.setdefault(leaf, {})
        else:
            if isinstance(existing, dict):
                raise TreeConflict(path)
            node[leaf] = content

    return tree_from_dict(root)


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def get_entry(tree: FileTree, path: PathLike) -> FileTree:
    """Return the subtree at *path*, or raise ``PathNotFound``."""
    tree_path = as_tree_path(path)
    node = tree
    for part in tree_path.parts:
        if not isinstance(node, Directory) or part not in node.children:
            raise PathNotFound(tree_path)
        node = node.children[part]
    return node


def file_content(tree: FileTree, path: PathLike) -> str:
    """Return the text of the file at *path*."""
    entry = get_entry(tree, path)
    if not isinstance(entry, File):
        raise PathNotFound(path)
    return entry.content


def dir_content(tree: FileTree, path: PathLike) -> Mapping[str, FileTree]:
    """Return the children of the directory at *path*."""
    entry = get_entry(tree, path)
    if not isinstance(entry, Directory):
        raise PathNotFound(path)
    return entry.children


def file_exists(tree: FileTree, path: PathLike) -> bool:
    try:
        file_content(tree, path)
    except PathNotFound:
        return False
    return True


def dir_exists(tree: FileTree, path: PathLike) -> bool:
    try:
        dir_content(tree, path)
    except PathNotFound:
        return False
    return True


def find_files(
    tree: Directory, predicate: Callable[[PurePosixPath, str], bool]
) -> dict[PurePosixPath, str]:
    """Return every ``{path: content}`` file entry accepted by *predicate*, in path order."""
    return {
        path: content
        for path, content in flatten_file_tree(tree).items()
        if content is not None and predicate(path, content)
    }


def diff_file_trees(before: Directory, after: Directory) -> FlatTree:
    """Return the flattened entries of *after* that are new or changed in *before*."""
    previous = flatten_file_tree(before)
    changed: FlatTree = {}
    for path, content in flatten_file_tree(after).items():
        if content is None:
            if not dir_exists(before, path):
                changed[path] = None
        elif previous.get(path) != content:
            changed[path] = content
    return changed
