"""scaffold_tree configuration.

Typed settings for the render-and-merge engine. All settings use Pydantic v2
models so they are validated at construction time and can be serialised
to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


DEFAULT_IGNORE_DIRS: list[str] = [".git", "node_modules", "target", "__pycache__"]


class RenderConfig(BaseModel):
    """Settings that shape the Jinja2 environment and the path grammar."""

    template_extension: str = Field(
        default=".j2", description="Extension that marks a file as a template"
    )
    strict_undefined: bool = Field(
        default=True, description="Raise on undefined names instead of rendering ''"
    )
    trim_blocks: bool = Field(default=True)
    lstrip_blocks: bool = Field(default=True)
    keep_trailing_newline: bool = Field(default=True)
    slash_escape: Optional[str] = Field(
        default="¡", description="Character in template paths that stands for '/'"
    )
    quote_escape: Optional[str] = Field(
        default=None, description="Character in template paths that stands for '\"'"
    )

    @field_validator("template_extension")
    @classmethod
    def _extension_has_dot(cls, value: str) -> str:
        if not value.startswith(".") or len(value) < 2:
            raise ValueError("template_extension must look like '.j2'")
        return value

    @field_validator("slash_escape", "quote_escape")
    @classmethod
    def _single_character(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and len(value) != 1:
            raise ValueError("escape characters must be a single character")
        return value


class ScaffoldConfig(BaseModel):
    """Global scaffolding configuration.

    Instances are created once by the calling command (or the CLI entry
    point) and passed through the engine; nothing in the engine mutates them.
    """

    render: RenderConfig = Field(default_factory=RenderConfig)
    templates_dir: str = Field(
        default=".templates", description="Project folder holding named templates"
    )
    partial_dirs: list[str] = Field(
        default_factory=lambda: ["field-types"],
        description="Template subtrees scanned for partials, in override order",
    )
    instructions_suffix: str = Field(
        default=".instructions",
        description="Suffix of the follow-up message template of a section",
    )
    ignore_dirs: list[str] = Field(default_factory=lambda: list(DEFAULT_IGNORE_DIRS))
    verbose: bool = Field(default=False, description="Trace every template expansion")

    @field_validator("partial_dirs")
    @classmethod
    def _no_empty_partial_dirs(cls, value: list[str]) -> list[str]:
        cleaned = [d.strip().strip("/") for d in value]
        if not all(cleaned):
            raise ValueError("partial_dirs entries must not be empty")
        return cleaned

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def template_extension(self) -> str:
        """Shortcut for ``render.template_extension``."""
        return self.render.template_extension

    def instructions_file(self, section: str) -> str:
        """Name of the follow-up message template for *section*."""
        return f"{section}{self.instructions_suffix}{self.template_extension}"

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "ScaffoldConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            SCAFFOLD_TEMPLATE_EXTENSION, SCAFFOLD_STRICT_UNDEFINED,
            SCAFFOLD_TEMPLATES_DIR, SCAFFOLD_PARTIAL_DIRS, SCAFFOLD_VERBOSE.
        """
        render_kwargs: dict[str, Any] = {}
        if os.environ.get("SCAFFOLD_TEMPLATE_EXTENSION"):
            render_kwargs["template_extension"] = os.environ["SCAFFOLD_TEMPLATE_EXTENSION"]
        if os.environ.get("SCAFFOLD_STRICT_UNDEFINED"):
            render_kwargs["strict_undefined"] = _env_flag("SCAFFOLD_STRICT_UNDEFINED")

        kwargs: dict[str, Any] = {}
        if os.environ.get("SCAFFOLD_TEMPLATES_DIR"):
            kwargs["templates_dir"] = os.environ["SCAFFOLD_TEMPLATES_DIR"]
        if os.environ.get("SCAFFOLD_PARTIAL_DIRS"):
            kwargs["partial_dirs"] = [
                d.strip() for d in os.environ["SCAFFOLD_PARTIAL_DIRS"].split(",") if d.strip()
            ]
        if os.environ.get("SCAFFOLD_VERBOSE"):
            kwargs["verbose"] = _env_flag("SCAFFOLD_VERBOSE")

        return cls(render=RenderConfig(**render_kwargs), **kwargs)


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")
