"""Jinja2 environment construction and data-context conversion.

A fresh ``Environment`` is built for every render call from a frozen partial
registry and a ``RenderConfig``; it is never shared or mutated across
scaffold operations. Escaping is disabled because the output is source
code, not markup.
"""

from __future__ import annotations

import copy
import re
from collections.abc import Mapping
from typing import Any

from jinja2 import DictLoader, Environment, StrictUndefined, Undefined, select_autoescape
from pydantic import BaseModel

from scaffold_tree.config import RenderConfig


def build_environment(
    partials: Mapping[str, str] | None = None,
    config: RenderConfig | None = None,
) -> Environment:
    """Create the Jinja2 environment used for one render pass.

    Args:
        partials: Registry of ``{name: source}`` fragments, reachable from
            templates through ``{% include "name" %}``.
        config: Rendering options; defaults to ``RenderConfig()``.
    """
    config = config or RenderConfig()
    env = Environment(
        loader=DictLoader(dict(partials or {})),
        autoescape=select_autoescape([], default_for_string=False),
        undefined=StrictUndefined if config.strict_undefined else Undefined,
        keep_trailing_newline=config.keep_trailing_newline,
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
    )
    env.filters["slugify"] = _slugify_filter
    env.filters["pascal_case"] = _pascal_case_filter
    env.filters["snake_case"] = _snake_case_filter
    env.filters["camel_case"] = _camel_case_filter
    env.filters["kebab_case"] = _kebab_case_filter
    return env


def build_context(data: Any) -> dict[str, Any]:
    """Turn caller data into a private, top-level mapping for rendering.

    Pydantic models are dumped in JSON mode; mappings are deep-copied so the
    caller's object is never touched by a render pass.
    """
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, Mapping):
        return copy.deepcopy(dict(data))
    raise TypeError(
        f"template data must be a mapping or a pydantic model, got {type(data).__name__}"
    )


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------


def _slugify_filter(value: str) -> str:
    """Convert a string to a URL/filename-safe slug."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower().strip())
    return slug.strip("-")


def _pascal_case_filter(value: str) -> str:
    """Convert ``some-thing``, ``some_thing`` or ``someThing`` to ``SomeThing``."""
    parts = re.split(r"[-_\s]+", _split_camel(value))
    return "".join(word.capitalize() for word in parts if word)


def _snake_case_filter(value: str) -> str:
    """Convert ``SomeThing`` or ``some-thing`` to ``some_thing``."""
    return re.sub(r"[-_\s]+", "_", _split_camel(value)).lower()


def _camel_case_filter(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``someThing``."""
    pascal = _pascal_case_filter(value)
    if pascal:
        return pascal[0].lower() + pascal[1:]
    return ""


def _kebab_case_filter(value: str) -> str:
    """Convert ``SomeThing`` or ``some_thing`` to ``some-thing``."""
    return _snake_case_filter(value).replace("_", "-")


def _split_camel(value: str) -> str:
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", value)
    return re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
