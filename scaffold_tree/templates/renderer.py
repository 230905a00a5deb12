"""Tree renderer: turns a template tree plus data into a concrete file tree.

Each flattened template entry is handled according to its path shape:

* plain files are copied with their path rendered;
* empty directories are reproduced with their path rendered;
* ``.j2`` templates are classified by the directive parser and expanded
  into zero, one or many output files.

When an output file already exists in the project being extended, its text
is exposed to that single render call as ``previous_file_content`` so a
template can add to a file instead of replacing it. Every produced entry
goes into one working map where a later template silently overrides an
earlier one that resolved to the same path.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Any, Optional

from jinja2 import TemplateError

from scaffold_tree.config import ScaffoldConfig
from scaffold_tree.errors import InvalidPath, PathNotFound, RenderError
from scaffold_tree.file_tree import (
    Directory,
    FlatTree,
    as_tree_path,
    file_content,
    flatten_file_tree,
    unflatten_file_tree,
)
from scaffold_tree.templates.directives import (
    Directive,
    DirectiveKind,
    apply_path_escapes,
    ensure_no_block_markers,
    is_template_path,
    parse_template_path,
)
from scaffold_tree.templates.environment import build_context, build_environment
from scaffold_tree.templates.partials import PartialRegistry
from scaffold_tree.utils import console

PREVIOUS_FILE_CONTENT = "previous_file_content"

_RENDER_FAILURES = (TemplateError, TypeError, ValueError)


@dataclass(frozen=True)
class ElementLoop:
    """Position of the current element inside an each-expansion."""

    index: int
    index0: int
    first: bool
    last: bool
    length: int
    key: Optional[Any] = None


class TreeRenderer:
    """Renders template trees against data contexts.

    The Jinja2 environment is built once per renderer from a frozen partial
    registry. A renderer holds no per-render state, so one instance may
    render any number of trees.
    """

    def __init__(
        self,
        partials: Optional[Mapping[str, str]] = None,
        config: Optional[ScaffoldConfig] = None,
    ) -> None:
        self.config = config or ScaffoldConfig()
        self.partials = (
            partials if isinstance(partials, PartialRegistry) else PartialRegistry(partials)
        )
        self.env = build_environment(self.partials, self.config.render)

    # -- Public API --------------------------------------------------------

    def render(self, existing: Directory, templates: Directory, data: Any) -> Directory:
        """Render every entry of *templates* and return the resulting tree.

        Args:
            existing: Project tree being extended; only read to expose
                ``previous_file_content``.
            templates: Template tree to expand.
            data: Mapping or pydantic model substituted into the templates.

        Raises:
            ParseError: A template path has malformed block markers.
            RenderError: An expression, filter or include failed.
            TreeConflict: Two outputs require a path to be a file and a
                directory at once.
        """
        context = build_context(data)
        context.pop(PREVIOUS_FILE_CONTENT, None)
        extension = self.config.template_extension

        output: FlatTree = {}
        for raw_path, contents in flatten_file_tree(templates).items():
            path = apply_path_escapes(raw_path.as_posix(), self.config.render)

            if contents is None:
                ensure_no_block_markers(path, path)
                output[self._render_target(path, path, context)] = None
            elif not is_template_path(path, extension):
                ensure_no_block_markers(path, path)
                output[self._render_file_target(path, path, context)] = contents
            else:
                directive = parse_template_path(path, extension)
                for target, content in self._expand(path, directive, contents, existing, context):
                    output[target] = content

        return unflatten_file_tree(output)

    def render_string(self, source: str, data: Any, name: str = "<string>") -> str:
        """Render a standalone template string, e.g. a follow-up message."""
        return self._render_text(name, source, build_context(data))

    # -- Directive expansion -----------------------------------------------

    def _expand(
        self,
        path: str,
        directive: Directive,
        contents: str,
        existing: Directory,
        context: dict[str, Any],
    ) -> Iterator[tuple[PurePosixPath, str]]:
        if directive.kind is DirectiveKind.NONE:
            target = self._render_file_target(path, directive.prefix, context)
            yield target, self._render_content(path, target, contents, existing, context)
            return

        prefix = self._render_text(path, directive.prefix, context)

        if directive.kind is DirectiveKind.IF:
            if self._test(path, directive.condition, context):
                target = self._join_target(path, prefix, directive.suffix, context)
                yield target, self._render_content(path, target, contents, existing, context)
            return

        for scope in self._element_scopes(path, directive.collection, context):
            if directive.kind is DirectiveKind.EACH_IF and not self._test(
                path, directive.condition, scope
            ):
                continue
            target = self._join_target(path, prefix, directive.suffix, scope)
            yield target, self._render_content(path, target, contents, existing, scope)

    def _element_scopes(
        self, path: str, expression: str, context: dict[str, Any]
    ) -> Iterator[dict[str, Any]]:
        """Yield one data scope per element of the collection, in iteration order.

        Mapping elements also expose their keys at the top level; ``this``
        and ``loop`` always refer to the current element.
        """
        collection = self._evaluate(path, expression, context)
        if isinstance(collection, (str, bytes)):
            raise RenderError(path, f"{expression!r} must evaluate to a list, got a string")
        try:
            if isinstance(collection, Mapping):
                pairs = list(collection.items())
            else:
                pairs = [(None, item) for item in collection]
        except TypeError as exc:
            raise RenderError(path, f"{expression!r} is not iterable") from exc
        except TemplateError as exc:
            raise RenderError(path, str(exc)) from exc

        length = len(pairs)
        for index, (key, item) in enumerate(pairs):
            scope = dict(context)
            if isinstance(item, Mapping):
                scope.update(item)
                scope.pop(PREVIOUS_FILE_CONTENT, None)
            scope["this"] = item
            scope["loop"] = ElementLoop(
                index=index + 1,
                index0=index,
                first=index == 0,
                last=index == length - 1,
                length=length,
                key=key,
            )
            yield scope

    # -- Rendering primitives ----------------------------------------------

    def _evaluate(self, path: str, expression: str, context: dict[str, Any]) -> Any:
        try:
            compiled = self.env.compile_expression(expression, undefined_to_none=False)
            return compiled(context)
        except _RENDER_FAILURES as exc:
            raise RenderError(path, f"{expression!r}: {exc}") from exc

    def _test(self, path: str, expression: str, context: dict[str, Any]) -> bool:
        value = self._evaluate(path, expression, context)
        try:
            return bool(value)
        except TemplateError as exc:
            raise RenderError(path, f"{expression!r}: {exc}") from exc

    def _render_text(self, path: str, source: str, context: Mapping[str, Any]) -> str:
        try:
            return self.env.from_string(source).render(context)
        except _RENDER_FAILURES as exc:
            raise RenderError(path, str(exc)) from exc

    def _render_content(
        self,
        path: str,
        target: PurePosixPath,
        contents: str,
        existing: Directory,
        context: dict[str, Any],
    ) -> str:
        try:
            previous = file_content(existing, target)
        except PathNotFound:
            scope = context
        else:
            scope = {**context, PREVIOUS_FILE_CONTENT: previous}
        if self.config.verbose:
            extended = " (extending existing file)" if scope is not context else ""
            console.log(f"[dim]{path}[/dim] -> {target}{extended}")
        return self._render_text(path, contents, scope)

    def _render_target(self, path: str, source: str, context: dict[str, Any]) -> PurePosixPath:
        return self._to_target(path, self._render_text(path, source, context))

    def _render_file_target(
        self, path: str, source: str, context: dict[str, Any]
    ) -> PurePosixPath:
        rendered = self._render_text(path, source, context)
        if not rendered.rsplit("/", 1)[-1]:
            raise RenderError(path, "the file name rendered to an empty string")
        return self._to_target(path, rendered)

    def _join_target(
        self, path: str, prefix: str, suffix: str, context: dict[str, Any]
    ) -> PurePosixPath:
        name = self._render_text(path, suffix, context)
        if not name.strip("/"):
            raise RenderError(path, "the file name rendered to an empty string")
        return self._to_target(path, f"{prefix}/{name}" if prefix else name)

    @staticmethod
    def _to_target(path: str, rendered: str) -> PurePosixPath:
        try:
            target = as_tree_path(rendered)
        except InvalidPath as exc:
            raise InvalidPath(path, f"rendered to {rendered!r}, outside the tree root") from exc
        if not target.parts:
            raise RenderError(path, "the output path rendered to an empty string")
        return target


def render_template_file_tree(
    existing: Directory,
    templates: Directory,
    data: Any,
    *,
    partials: Optional[Mapping[str, str]] = None,
    config: Optional[ScaffoldConfig] = None,
) -> Directory:
    """Render *templates* against *data* in one call. See :meth:`TreeRenderer.render`."""
    return TreeRenderer(partials, config).render(existing, templates, data)
