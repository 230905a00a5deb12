"""Merge engine: right-biased union of an existing tree and a rendered tree.

Paths present on both sides take the rendered content; paths present on
only one side pass through unchanged. Nothing the current render does not
touch is ever removed, so regenerating into a hand-edited project is safe.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from scaffold_tree.config import ScaffoldConfig
from scaffold_tree.errors import TreeConflict
from scaffold_tree.file_tree import Directory, flatten_file_tree, unflatten_file_tree
from scaffold_tree.templates.renderer import TreeRenderer


def merge_file_trees(existing: Directory, rendered: Directory) -> Directory:
    """Return the union of both trees, with *rendered* winning on shared paths.

    Raises:
        TreeConflict: If the union needs a path to be both a file and a
            directory, including a rendered empty directory where the
            existing tree holds a file.
    """
    merged = flatten_file_tree(existing)
    for path, content in flatten_file_tree(rendered).items():
        if content is None and merged.get(path) is not None:
            raise TreeConflict(path)
        merged[path] = content
    return unflatten_file_tree(merged)


def render_and_merge(
    existing: Directory,
    templates: Directory,
    data: Any,
    *,
    partials: Optional[Mapping[str, str]] = None,
    config: Optional[ScaffoldConfig] = None,
) -> Directory:
    """Render *templates* against *data* and merge the result into *existing*."""
    rendered = TreeRenderer(partials, config).render(existing, templates, data)
    return merge_file_trees(existing, rendered)
