"""Reading a project directory into memory and materializing trees.

These helpers sit at the boundary of the engine: the render-and-merge
pipeline itself never touches the disk. ``write_file_tree`` is meant to be
called once, after the whole in-memory tree has been computed.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping
from pathlib import Path, PurePosixPath
from typing import Optional

from scaffold_tree.config import DEFAULT_IGNORE_DIRS
from scaffold_tree.errors import EncodingError
from scaffold_tree.file_tree.models import Directory, File, FileTree
from scaffold_tree.file_tree.operations import flatten_file_tree


def load_directory(
    root: str | Path,
    ignore_dirs: Iterable[str] = DEFAULT_IGNORE_DIRS,
) -> Directory:
    """Load the directory at *root* into a ``Directory`` tree.

    Args:
        root: Directory to read.
        ignore_dirs: Directory names skipped at any depth (e.g. ``.git``).

    Returns:
        The in-memory tree. A missing *root* yields an empty tree.

    Raises:
        EncodingError: If a file is not valid UTF-8.
    """
    root_path = Path(root)
    if not root_path.is_dir():
        return Directory()
    return _load(root_path, root_path, frozenset(ignore_dirs))


def _load(directory: Path, root: Path, ignore: frozenset[str]) -> Directory:
    children: dict[str, FileTree] = {}
    for entry in sorted(directory.iterdir()):
        if entry.is_dir():
            if entry.name in ignore:
                continue
            children[entry.name] = _load(entry, root, ignore)
        elif entry.is_file():
            try:
                children[entry.name] = File(entry.read_text(encoding="utf-8"))
            except UnicodeDecodeError as exc:
                raise EncodingError(
                    entry.relative_to(root).as_posix(), f"not valid UTF-8 text ({exc.reason})"
                ) from exc
    return Directory(children)


async def write_file_tree(
    tree: Directory,
    root: str | Path,
    only: Optional[Mapping[PurePosixPath, Optional[str]]] = None,
) -> list[Path]:
    """Write *tree* (or just the flattened entries in *only*) below *root*.

    Parent directories are created automatically and empty-directory
    entries become empty directories. The writes run in a worker thread.

    Returns:
        The written file and directory paths, in path order.
    """
    entries = only if only is not None else flatten_file_tree(tree)
    return await asyncio.to_thread(_write_entries, Path(root), dict(entries))


def _write_entries(root: Path, entries: dict[PurePosixPath, Optional[str]]) -> list[Path]:
    written: list[Path] = []
    for rel_path, content in entries.items():
        target = root.joinpath(*PurePosixPath(rel_path).parts)
        if content is None:
            target.mkdir(parents=True, exist_ok=True)
        else:
            _write_file(target, content)
        written.append(target)
    return written


def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
