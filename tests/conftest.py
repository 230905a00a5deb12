"""Shared pytest fixtures for the scaffold_tree test suite.

Provides reusable fixtures for:
- Empty and pre-populated project trees
- A template tree exercising every directive shape
- Sample template data
- Template and project directories written to disk
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from scaffold_tree.file_tree import Directory, tree_from_dict


# ---------------------------------------------------------------------------
# In-memory trees
# ---------------------------------------------------------------------------

@pytest.fixture
def empty_tree() -> Directory:
    """A project with no files at all."""
    return Directory()


@pytest.fixture
def existing_project() -> Directory:
    """A small hand-edited project that templates extend."""
    return tree_from_dict(
        {
            "README.md": "# demo\n",
            "src": {
                "lib.py": "import os\n",
                "notes.txt": "hand written\n",
            },
        }
    )


@pytest.fixture
def sample_templates() -> Directory:
    """A template tree using plain, if, each and each+if paths."""
    return tree_from_dict(
        {
            "README.md.j2": "# {{ app_name }}\n",
            "LICENSE": "MIT\n",
            "docs": {},
            "src": {
                "lib.py.j2": (
                    "{% if previous_file_content is defined %}"
                    "{{ previous_file_content }}"
                    "{% endif %}"
                    "{% for module in modules %}import {{ module.name }}\n{% endfor %}"
                ),
                "{{#each modules}}{{ name }}.py{{/each}}.j2": "# module {{ name }}\n",
                "{{#if with_tests}}test_app.py{{/if}}.j2": "def test_app():\n    pass\n",
            },
            "public": {
                "{{#each modules}}{{#if public}}{{ name | kebab_case }}.md{{/if}}{{/each}}.j2": (
                    "{{ name | pascal_case }} ({{ loop.index }}/{{ loop.length }})\n"
                ),
            },
        }
    )


@pytest.fixture
def sample_data() -> dict[str, Any]:
    """Template data matching ``sample_templates``."""
    return {
        "app_name": "demo",
        "with_tests": True,
        "modules": [
            {"name": "billing_core", "public": True},
            {"name": "auth", "public": False},
        ],
    }


# ---------------------------------------------------------------------------
# On-disk directories
# ---------------------------------------------------------------------------

@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A project directory with a templates folder holding one template."""
    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    (root / "src" / "lib.py").write_text("import os\n", encoding="utf-8")

    template = root / ".templates" / "basic"
    (template / "module").mkdir(parents=True)
    (template / "field-types").mkdir()
    (template / "module" / "src").mkdir()
    (template / "module" / "src" / "{{ name }}.py.j2").write_text(
        '"""{{ name | pascal_case }} module."""\n{% include "header" %}\n',
        encoding="utf-8",
    )
    (template / "field-types" / "header.j2").write_text(
        "# generated for {{ name }}\n", encoding="utf-8"
    )
    (template / "module.instructions.j2").write_text(
        "Import the new module with: import {{ name }}\n", encoding="utf-8"
    )
    yield root
