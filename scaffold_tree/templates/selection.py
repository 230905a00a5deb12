"""Locating a named template inside a project's templates folder.

A project keeps its templates under ``.templates/<name>/``. Choosing among
several templates interactively is left to the caller; this module only
resolves a given name or the single available template.
"""

from __future__ import annotations

from typing import Optional

from scaffold_tree.errors import AmbiguousTemplate, NoTemplatesFound, TemplateNotFound
from scaffold_tree.file_tree import Directory, dir_content, dir_exists


def list_templates(project: Directory, templates_dir: str = ".templates") -> list[str]:
    """Return the sorted names of the template folders in *project*."""
    if not dir_exists(project, templates_dir):
        return []
    return sorted(
        name
        for name, entry in dir_content(project, templates_dir).items()
        if isinstance(entry, Directory)
    )


def get_template_file_tree(
    project: Directory,
    name: Optional[str] = None,
    templates_dir: str = ".templates",
) -> Directory:
    """Return the template tree called *name*, or the only one available.

    Raises:
        NoTemplatesFound: The project has no template folders.
        TemplateNotFound: *name* is not one of them.
        AmbiguousTemplate: *name* was omitted and several templates exist.
    """
    names = list_templates(project, templates_dir)
    if not names:
        raise NoTemplatesFound(templates_dir)

    if name is None:
        if len(names) > 1:
            raise AmbiguousTemplate(names)
        name = names[0]
    elif name not in names:
        raise TemplateNotFound(name, templates_dir)

    return Directory(dir_content(project, f"{templates_dir}/{name}"))
