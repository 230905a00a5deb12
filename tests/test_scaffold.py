"""Unit tests for the collaborator contract (scaffold_tree.scaffold)."""

from __future__ import annotations

import pytest
from pydantic import BaseModel

from scaffold_tree import ScaffoldConfig, ScaffoldedTemplate, scaffold
from scaffold_tree.errors import RenderError
from scaffold_tree.file_tree import Directory, tree_from_dict, tree_to_dict

pytestmark = pytest.mark.unit


@pytest.fixture
def template_tree() -> Directory:
    return tree_from_dict(
        {
            "field-types": {
                "String": {"column.j2": "str"},
                "Int": {"column.j2": "int"},
            },
            "entry-type": {
                "models": {
                    "{{ name | snake_case }}.py.j2": (
                        "class {{ name }}:\n"
                        "{% for f in fields %}\n"
                        "    {{ f.name }}: {% include f.type ~ '/column' %}\n"
                        "\n"
                        "{% endfor %}"
                    ),
                },
                "models.py.j2": (
                    "{% if previous_file_content is defined %}{{ previous_file_content }}{% endif %}"
                    "from .{{ name | snake_case }} import {{ name }}\n"
                ),
            },
            "entry-type.instructions.j2": "Run the migration for {{ name }}.\n",
            "other": {"x.txt": "x"},
        }
    )


class _EntryType(BaseModel):
    name: str
    fields: list[dict[str, str]]


@pytest.fixture
def entry_type() -> dict:
    return {
        "name": "BlogPost",
        "fields": [{"name": "title", "type": "String"}, {"name": "views", "type": "Int"}],
    }


class TestScaffold:
    def test_renders_section_and_merges(self, template_tree, entry_type):
        existing = tree_from_dict({"models.py": "from .tag import Tag\n", "README.md": "hi\n"})
        result = scaffold(existing, template_tree, "entry-type", entry_type)

        assert isinstance(result, ScaffoldedTemplate)
        tree = tree_to_dict(result.file_tree)
        assert tree["README.md"] == "hi\n"
        assert tree["models.py"] == "from .tag import Tag\nfrom .blog_post import BlogPost\n"
        assert tree["models"]["blog_post.py"] == (
            "class BlogPost:\n    title: str\n    views: int\n"
        )

    def test_only_the_section_is_rendered(self, template_tree, entry_type):
        result = scaffold(Directory(), template_tree, "entry-type", entry_type)
        tree = tree_to_dict(result.file_tree)
        assert "x.txt" not in tree
        assert "field-types" not in tree
        assert "String" not in tree

    def test_next_instructions_rendered(self, template_tree, entry_type):
        result = scaffold(Directory(), template_tree, "entry-type", entry_type)
        assert result.next_instructions == "Run the migration for BlogPost.\n"

    def test_no_instructions_file(self, template_tree):
        result = scaffold(Directory(), template_tree, "other", {})
        assert result.next_instructions is None
        assert tree_to_dict(result.file_tree) == {"x.txt": "x"}

    def test_missing_section_returns_existing(self, template_tree, existing_project):
        result = scaffold(existing_project, template_tree, "nope", {})
        assert result.file_tree is existing_project
        assert result.next_instructions is None

    def test_pydantic_model_data(self, template_tree, entry_type):
        result = scaffold(Directory(), template_tree, "entry-type", _EntryType(**entry_type))
        assert result.next_instructions == "Run the migration for BlogPost.\n"

    def test_data_not_mutated(self, template_tree, entry_type):
        snapshot = {
            "name": "BlogPost",
            "fields": [{"name": "title", "type": "String"}, {"name": "views", "type": "Int"}],
        }
        scaffold(Directory(), template_tree, "entry-type", entry_type)
        assert entry_type == snapshot

    def test_custom_partial_dirs(self, entry_type):
        templates = tree_from_dict(
            {
                "shared": {"greeting.j2": "hello {{ name }}"},
                "entry-type": {"a.txt.j2": '{% include "greeting" %}'},
            }
        )
        config = ScaffoldConfig(partial_dirs=["shared"])
        result = scaffold(Directory(), templates, "entry-type", entry_type, config=config)
        assert tree_to_dict(result.file_tree) == {"a.txt": "hello BlogPost"}

    def test_render_errors_propagate(self, template_tree):
        with pytest.raises(RenderError):
            scaffold(Directory(), template_tree, "entry-type", {"name": "X"})

    def test_verbose_tracing_does_not_change_output(self, template_tree, entry_type):
        quiet = scaffold(Directory(), template_tree, "entry-type", entry_type)
        loud = scaffold(
            Directory(), template_tree, "entry-type", entry_type,
            config=ScaffoldConfig(verbose=True),
        )
        assert quiet == loud
