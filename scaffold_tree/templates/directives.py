"""Directive parser for template paths.

The trailing segment of a template path may wrap the file name in block
markers that control how many files it produces::

    src/{{#if with_tests}}tests.py{{/if}}.j2
    src/{{#each modules}}{{ this.name }}.py{{/each}}.j2
    src/{{#each modules}}{{#if this.public}}{{ this.name }}.py{{/if}}{{/each}}.j2

Everything before the marked segment (the *prefix*) and the file name inside
the markers (the *suffix*) may still hold ordinary ``{{ expression }}``
substitutions. The expressions in ``{{#each EXPR}}`` and ``{{#if EXPR}}``
are kept verbatim and evaluated later by the renderer.

A file name on disk cannot contain ``/``, so templates stored in a directory
spell the closing markers ``{{¡each}}`` and ``{{¡if}}``;
``apply_path_escapes`` turns them back into the form shown above.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from scaffold_tree.config import RenderConfig
from scaffold_tree.errors import ParseError

EACH_OPEN = "{{#each "
EACH_CLOSE = "{{/each}}"
IF_OPEN = "{{#if "
IF_CLOSE = "{{/if}}"

_BLOCK_MARKERS = ("{{#", "{{/")


class DirectiveKind(str, Enum):
    """Shape of a template path."""
    NONE = "none"
    IF = "if"
    EACH = "each"
    EACH_IF = "each_if"


@dataclass(frozen=True)
class Directive:
    """A classified template path.

    For ``NONE`` the prefix is the whole path without its extension and the
    suffix is empty. For the other kinds the prefix is the parent path of
    the marked segment (empty at the template root) and the suffix is the
    file-name template found inside the markers.
    """

    kind: DirectiveKind
    prefix: str
    suffix: str = ""
    collection: Optional[str] = None
    condition: Optional[str] = None


def apply_path_escapes(path: str, config: RenderConfig) -> str:
    """Replace the configured escape characters in a raw template path."""
    if config.slash_escape:
        path = path.replace(config.slash_escape, "/")
    if config.quote_escape:
        path = path.replace(config.quote_escape, '"')
    return path


def is_template_path(path: str, extension: str = ".j2") -> bool:
    name = path.rsplit("/", 1)[-1]
    return name.endswith(extension) and name != extension


def parse_template_path(path: str, extension: str = ".j2") -> Directive:
    """Classify *path*, which must end with the template *extension*.

    Shapes are tested in priority order: each+if, each, if, plain.

    Raises:
        ParseError: If block markers appear anywhere else, are unbalanced,
            or carry an empty expression.
    """
    if not is_template_path(path, extension):
        raise ParseError(path, f"template paths must end with {extension!r}")
    body = path[: -len(extension)]

    each = _match_block(path, body, EACH_OPEN, EACH_CLOSE)
    if each is not None:
        prefix, collection, inner = each
        nested = _match_block(path, inner, IF_OPEN, IF_CLOSE, anchored=True)
        if nested is not None:
            _, condition, suffix = nested
            directive = Directive(DirectiveKind.EACH_IF, prefix, suffix, collection, condition)
        else:
            directive = Directive(DirectiveKind.EACH, prefix, inner, collection)
    else:
        cond = _match_block(path, body, IF_OPEN, IF_CLOSE)
        if cond is not None:
            prefix, condition, suffix = cond
            directive = Directive(DirectiveKind.IF, prefix, suffix, condition=condition)
        else:
            directive = Directive(DirectiveKind.NONE, body)

    ensure_no_block_markers(path, directive.prefix)
    ensure_no_block_markers(path, directive.suffix)
    return directive


def _match_block(
    path: str,
    text: str,
    opener: str,
    closer: str,
    anchored: bool = False,
) -> Optional[tuple[str, str, str]]:
    """Match ``<prefix>/<opener>EXPR}}<inner><closer>`` at the end of *text*.

    With *anchored* the opener must start *text* and there is no prefix.
    Returns ``(prefix, expression, inner)`` or ``None`` when *text* has a
    different shape.
    """
    if not text.endswith(closer):
        return None

    start = -1 if anchored else text.rfind("/" + opener)
    if start >= 0:
        prefix, rest = text[:start], text[start + 1 :]
    elif text.startswith(opener):
        prefix, rest = "", text
    else:
        return None

    expr_end = rest.find("}}", len(opener))
    inner_end = len(rest) - len(closer)
    if expr_end < 0 or expr_end + 2 > inner_end:
        raise ParseError(path, f"unterminated {opener.strip()!r} marker")

    expression = rest[len(opener) : expr_end]
    if "{" in expression or "}" in expression:
        raise ParseError(path, f"braces are not allowed in {opener.strip()!r} expressions")
    if not expression.strip():
        raise ParseError(path, f"empty expression in {opener.strip()!r} marker")

    return prefix, expression.strip(), rest[expr_end + 2 : inner_end]


def ensure_no_block_markers(path: str, fragment: str) -> None:
    if any(marker in fragment for marker in _BLOCK_MARKERS):
        raise ParseError(
            path,
            "block markers are only allowed around the file name, "
            "as {{#each}}, {{#if}} or {{#each}}{{#if}}",
        )
