"""scaffold_tree -- template-driven file-tree rendering and merging.

Renders a tree of Jinja2 templates, whose paths may carry ``{{#if}}`` and
``{{#each}}`` directives, against structured data, and merges the result
into an existing project without touching files the templates do not
produce.

Quick usage::

    from scaffold_tree import load_directory, scaffold, write_file_tree

    project = load_directory("./my-app")
    templates = load_directory("./templates")
    result = scaffold(project, templates, "module", {"name": "billing"})
    await write_file_tree(result.file_tree, "./my-app")
"""

from scaffold_tree.config import RenderConfig, ScaffoldConfig
from scaffold_tree.errors import (
    AmbiguousTemplate,
    EncodingError,
    InvalidPath,
    NoTemplatesFound,
    ParseError,
    PathNotFound,
    RenderError,
    ScaffoldError,
    TemplateNotFound,
    TreeConflict,
)
from scaffold_tree.file_tree import (
    Directory,
    File,
    FileTree,
    load_directory,
    tree_from_dict,
    tree_to_dict,
    write_file_tree,
)
from scaffold_tree.scaffold import ScaffoldedTemplate, scaffold
from scaffold_tree.templates import (
    PartialRegistry,
    TreeRenderer,
    merge_file_trees,
    render_and_merge,
    render_template_file_tree,
)

__all__ = [
    "AmbiguousTemplate",
    "Directory",
    "EncodingError",
    "File",
    "FileTree",
    "InvalidPath",
    "NoTemplatesFound",
    "ParseError",
    "PartialRegistry",
    "PathNotFound",
    "RenderConfig",
    "RenderError",
    "ScaffoldConfig",
    "ScaffoldError",
    "ScaffoldedTemplate",
    "TemplateNotFound",
    "TreeConflict",
    "TreeRenderer",
    "load_directory",
    "merge_file_trees",
    "render_and_merge",
    "render_template_file_tree",
    "scaffold",
    "tree_from_dict",
    "tree_to_dict",
    "write_file_tree",
]
