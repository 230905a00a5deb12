"""Template-driven rendering of file trees.

Quick usage::

    from scaffold_tree.file_tree import tree_from_dict
    from scaffold_tree.templates import render_and_merge

    templates = tree_from_dict({
        "src": {"{{#each modules}}{{ this }}.py{{/each}}.j2": "# {{ this }}\\n"},
    })
    project = render_and_merge(tree_from_dict({}), templates, {"modules": ["a", "b"]})
"""

from scaffold_tree.templates.directives import (
    Directive,
    DirectiveKind,
    apply_path_escapes,
    is_template_path,
    parse_template_path,
)
from scaffold_tree.templates.environment import build_context, build_environment
from scaffold_tree.templates.merge import merge_file_trees, render_and_merge
from scaffold_tree.templates.partials import PartialRegistry
from scaffold_tree.templates.renderer import (
    PREVIOUS_FILE_CONTENT,
    TreeRenderer,
    render_template_file_tree,
)
from scaffold_tree.templates.selection import get_template_file_tree, list_templates

__all__ = [
    "Directive",
    "DirectiveKind",
    "PREVIOUS_FILE_CONTENT",
    "PartialRegistry",
    "TreeRenderer",
    "apply_path_escapes",
    "build_context",
    "build_environment",
    "get_template_file_tree",
    "is_template_path",
    "list_templates",
    "merge_file_trees",
    "parse_template_path",
    "render_and_merge",
    "render_template_file_tree",
]
