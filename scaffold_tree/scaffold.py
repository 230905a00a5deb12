"""Scaffolding entry point for domain commands.

A domain command (add a module, add an entity, ...) supplies the project
tree, the template tree, the name of the template section it scaffolds and
its data. It receives the merged project tree plus an optional follow-up
message to show the user, and is responsible for writing the tree out.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from scaffold_tree.config import ScaffoldConfig
from scaffold_tree.file_tree import Directory, dir_content, dir_exists, file_content, file_exists
from scaffold_tree.templates.merge import merge_file_trees
from scaffold_tree.templates.partials import PartialRegistry
from scaffold_tree.templates.renderer import TreeRenderer


@dataclass(frozen=True)
class ScaffoldedTemplate:
    """Result of one scaffold operation."""

    file_tree: Directory
    next_instructions: Optional[str] = None


def scaffold(
    existing: Directory,
    template_tree: Directory,
    section: str,
    data: Any,
    *,
    config: Optional[ScaffoldConfig] = None,
) -> ScaffoldedTemplate:
    """Render the *section* subtree of *template_tree* into *existing*.

    Partials are collected from the whole template tree first. When the
    template has no such section the project is returned unchanged. The
    follow-up message is rendered from ``<section>.instructions.j2`` at the
    template root, when that file exists.
    """
    config = config or ScaffoldConfig()
    partials = PartialRegistry.from_template_tree(
        template_tree, config.partial_dirs, config.template_extension
    )
    renderer = TreeRenderer(partials, config)

    if not dir_exists(template_tree, section):
        return ScaffoldedTemplate(existing)

    section_tree = Directory(dir_content(template_tree, section))
    rendered = renderer.render(existing, section_tree, data)
    file_tree = merge_file_trees(existing, rendered)

    next_instructions = None
    instructions_file = config.instructions_file(section)
    if file_exists(template_tree, instructions_file):
        next_instructions = renderer.render_string(
            file_content(template_tree, instructions_file), data, name=instructions_file
        )

    return ScaffoldedTemplate(file_tree, next_instructions)
