"""Partial registry: named template fragments registered before rendering.

Every template file inside a partial area (``field-types/`` by default) is
registered under its path relative to that area, with the template
extension stripped, e.g. ``field-types/String/edit.j2`` -> ``String/edit``.
When two files normalise to the same name the one met later in traversal
order wins; this is how a template overrides a shared fragment.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from scaffold_tree.file_tree import Directory, dir_content, dir_exists, find_files


class PartialRegistry(Mapping[str, str]):
    """Frozen ``{partial name: trimmed source}`` mapping."""

    def __init__(self, partials: Mapping[str, str] | None = None) -> None:
        self._partials = MappingProxyType(dict(partials or {}))

    @classmethod
    def from_template_tree(
        cls,
        template_tree: Directory,
        partial_dirs: Iterable[str] = ("field-types",),
        extension: str = ".j2",
    ) -> "PartialRegistry":
        """Scan the *partial_dirs* areas of *template_tree*, in order.

        Missing areas are skipped, so a template without fragments simply
        yields an empty registry.
        """
        areas = [
            Directory(dir_content(template_tree, area))
            for area in partial_dirs
            if dir_exists(template_tree, area)
        ]
        return cls.from_directories(areas, extension=extension)

    @classmethod
    def from_directories(
        cls, areas: Iterable[Directory], extension: str = ".j2"
    ) -> "PartialRegistry":
        """Register every template file found in *areas*; later areas override earlier ones."""
        partials: dict[str, str] = {}
        for area in areas:
            found = find_files(
                area, lambda path, _content: _is_template_name(path.name, extension)
            )
            for path, content in found.items():
                name = path.parent / path.name[: -len(extension)]
                partials[name.as_posix()] = content.strip()
        return cls(partials)

    def __getitem__(self, name: str) -> str:
        return self._partials[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._partials)

    def __len__(self) -> int:
        return len(self._partials)

    def __repr__(self) -> str:
        return f"PartialRegistry({sorted(self._partials)!r})"


def _is_template_name(name: str, extension: str) -> bool:
    return name.endswith(extension) and name != extension
