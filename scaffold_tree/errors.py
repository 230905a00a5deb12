"""Error taxonomy for the scaffolding engine.

Every failure raised by the render-and-merge pipeline derives from
``ScaffoldError`` and carries the offending path, expression or template
name so that the message alone is enough to fix the template or data.
None of these errors are retried: they describe authoring mistakes, not
transient faults.
"""

from __future__ import annotations

from pathlib import PurePosixPath


class ScaffoldError(Exception):
    """Base class for every error raised by ``scaffold_tree``."""


# ---------------------------------------------------------------------------
# Template and rendering errors
# ---------------------------------------------------------------------------


class ParseError(ScaffoldError):
    """Raised when a template path carries malformed or unbalanced block markers."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"Malformed template path {path!r}: {message}")


class RenderError(ScaffoldError):
    """Raised when an expression, filter or partial fails to resolve."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"Failed to render {path!r}: {message}")


# ---------------------------------------------------------------------------
# File tree errors
# ---------------------------------------------------------------------------


class TreeConflict(ScaffoldError):
    """Raised when a path must be both a file and a directory."""

    def __init__(self, path: PurePosixPath | str) -> None:
        self.path = PurePosixPath(path)
        super().__init__(
            f"Path {str(self.path)!r} is a file but other entries are nested below it"
        )


class PathNotFound(ScaffoldError):
    """Raised when a lookup against a file tree misses."""

    def __init__(self, path: PurePosixPath | str) -> None:
        self.path = PurePosixPath(path)
        super().__init__(f"Path was not found: {self.path}")


class InvalidPath(ScaffoldError):
    """Raised for names or rendered paths that cannot live inside a file tree."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"Invalid path {path!r}: {message}")


class EncodingError(ScaffoldError):
    """Raised when non-text content is found where UTF-8 text is required."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")


# ---------------------------------------------------------------------------
# Template selection errors
# ---------------------------------------------------------------------------


class NoTemplatesFound(ScaffoldError):
    """Raised when a project carries no template folder at all."""

    def __init__(self, templates_dir: str) -> None:
        self.templates_dir = templates_dir
        super().__init__(
            f"No {templates_dir!r} folder with templates found for this project"
        )


class TemplateNotFound(ScaffoldError):
    """Raised when a named template is missing from the templates folder."""

    def __init__(self, name: str, templates_dir: str = ".templates") -> None:
        self.name = name
        super().__init__(
            f"Template {name!r} not found, it should be a folder named {name!r} "
            f"inside the {templates_dir!r} folder"
        )


class AmbiguousTemplate(ScaffoldError):
    """Raised when several templates exist and none was named."""

    def __init__(self, names: list[str]) -> None:
        self.names = names
        super().__init__(
            f"Several templates are available ({', '.join(names)}); pick one by name"
        )
