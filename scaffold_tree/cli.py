"""Command-line front end for scaffold_tree.

Renders one section of a template into a project directory and writes only
the files that changed. Nothing is written unless the whole render and
merge succeeds.

Usage::

    python -m scaffold_tree.cli entry-type --data entry.json
    python -m scaffold_tree.cli module --set name=billing --templates-path ./tpl
    python -m scaffold_tree.cli module --set name=billing --dry-run
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Optional

from rich.markup import escape

from scaffold_tree.config import ScaffoldConfig
from scaffold_tree.errors import ScaffoldError
from scaffold_tree.file_tree import diff_file_trees, load_directory, write_file_tree
from scaffold_tree.scaffold import scaffold
from scaffold_tree.templates.selection import get_template_file_tree
from scaffold_tree.utils import (
    console,
    print_error,
    print_file_tree,
    print_success,
    print_summary_table,
    print_warning,
)


def parse_assignments(pairs: list[str]) -> dict[str, Any]:
    """Turn ``key=value`` pairs into a dict; values are parsed as JSON when possible.

    Dotted keys create nested mappings: ``app.name=demo`` -> ``{"app": {"name": "demo"}}``.
    """
    result: dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected key=value, got: {pair!r}")
        try:
            value = json.loads(raw)
        except json.JSONDecodeError:
            value = raw
        node = result
        *parents, leaf = key.split(".")
        for part in parents:
            node = node.setdefault(part, {})
            if not isinstance(node, dict):
                raise ValueError(f"{key!r} conflicts with an earlier value")
        node[leaf] = value
    return result


def load_data(data_file: Optional[str], assignments: list[str]) -> dict[str, Any]:
    """Combine a JSON data file with ``--set`` overrides."""
    data: dict[str, Any] = {}
    if data_file:
        loaded = json.loads(Path(data_file).read_text(encoding="utf-8"))
        if not isinstance(loaded, dict):
            raise ValueError(f"{data_file} must contain a JSON object")
        data.update(loaded)
    data.update(parse_assignments(assignments))
    return data


async def run(
    section: str,
    project_dir: Path,
    data: dict[str, Any],
    *,
    templates_path: Optional[Path] = None,
    template: Optional[str] = None,
    dry_run: bool = False,
    config: Optional[ScaffoldConfig] = None,
) -> int:
    """Scaffold *section* into *project_dir*. Returns a process exit code."""
    config = config or ScaffoldConfig()
    try:
        project = load_directory(project_dir, config.ignore_dirs)
        if templates_path is not None:
            template_tree = load_directory(templates_path, config.ignore_dirs)
        else:
            template_tree = get_template_file_tree(project, template, config.templates_dir)

        result = scaffold(project, template_tree, section, data, config=config)
    except ScaffoldError as exc:
        print_error(f"Error: {escape(str(exc))}")
        return 1

    changes = diff_file_trees(project, result.file_tree)
    if not changes:
        print_warning(f"Nothing to do: section {section!r} produced no changes")
        return 0

    print_summary_table(
        {
            "Section": section,
            "Project": str(project_dir),
            "Changed entries": str(len(changes)),
        },
        title="Scaffold",
    )
    print_file_tree(changes.keys(), label=str(project_dir))

    if dry_run:
        print_warning("Dry run: no files were written")
    else:
        await write_file_tree(result.file_tree, project_dir, only=changes)
        print_success(f"Section {section!r} scaffolded!")

    if result.next_instructions:
        console.print(escape(result.next_instructions))
    return 0


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """CLI entry point for ``python -m scaffold_tree.cli``."""
    import argparse

    parser = argparse.ArgumentParser(
        description="scaffold_tree -- render template sections into a project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m scaffold_tree.cli entry-type --data entry.json\n"
            "  python -m scaffold_tree.cli module --set name=billing -p ./tpl\n"
        ),
    )
    parser.add_argument("section", help="Template section (folder) to render")
    parser.add_argument(
        "--project", default=".", help="Project directory to extend (default: .)"
    )
    parser.add_argument("--data", default=None, help="JSON file with the template data")
    parser.add_argument(
        "--set",
        dest="assignments",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Template data value; repeatable, dotted keys nest",
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--templates-path", "-p",
        default=None,
        help="Directory holding the template, instead of the project's templates folder",
    )
    group.add_argument(
        "--template", "-t",
        default=None,
        help="Name of the template inside the project's templates folder",
    )
    parser.add_argument("--dry-run", action="store_true", help="Show changes without writing")
    parser.add_argument("--verbose", "-v", action="store_true", help="Trace every template")

    args = parser.parse_args()

    try:
        data = load_data(args.data, args.assignments)
    except (OSError, ValueError) as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        sys.exit(1)

    config = ScaffoldConfig.from_env()
    if args.verbose:
        config.verbose = True

    code = asyncio.run(
        run(
            args.section,
            Path(args.project),
            data,
            templates_path=Path(args.templates_path) if args.templates_path else None,
            template=args.template,
            dry_run=args.dry_run,
            config=config,
        )
    )
    sys.exit(code)


if __name__ == "__main__":
    main()
