"""Unit tests for the merge engine."""

from __future__ import annotations

import pytest

from scaffold_tree.errors import TreeConflict
from scaffold_tree.file_tree import Directory, diff_file_trees, tree_from_dict, tree_to_dict
from scaffold_tree.templates import merge_file_trees, render_and_merge

pytestmark = pytest.mark.unit


class TestMergeFileTrees:
    def test_rendered_content_wins_on_shared_paths(self):
        existing = tree_from_dict({"a.txt": "old", "src": {"b.txt": "old"}})
        rendered = tree_from_dict({"a.txt": "new", "src": {"b.txt": "new"}})
        assert tree_to_dict(merge_file_trees(existing, rendered)) == {
            "a.txt": "new",
            "src": {"b.txt": "new"},
        }

    def test_existing_only_paths_are_kept(self):
        existing = tree_from_dict({"keep.txt": "mine", "src": {"hand.py": "x"}})
        rendered = tree_from_dict({"src": {"gen.py": "y"}})
        assert tree_to_dict(merge_file_trees(existing, rendered)) == {
            "keep.txt": "mine",
            "src": {"hand.py": "x", "gen.py": "y"},
        }

    def test_empty_rendered_tree_is_identity(self, existing_project):
        assert merge_file_trees(existing_project, Directory()) == existing_project

    def test_merge_into_empty_tree(self):
        rendered = tree_from_dict({"a": {"b.txt": "b"}, "empty": {}})
        assert merge_file_trees(Directory(), rendered) == rendered

    def test_rendered_empty_dir_over_existing_dir_keeps_contents(self):
        existing = tree_from_dict({"docs": {"index.md": "hi"}})
        rendered = tree_from_dict({"docs": {}})
        assert tree_to_dict(merge_file_trees(existing, rendered)) == {"docs": {"index.md": "hi"}}

    def test_rendered_empty_dir_over_existing_file_conflicts(self):
        existing = tree_from_dict({"docs": "a file"})
        rendered = tree_from_dict({"docs": {}})
        with pytest.raises(TreeConflict):
            merge_file_trees(existing, rendered)

    def test_rendered_file_over_existing_directory_conflicts(self):
        existing = tree_from_dict({"src": {"main.py": "x"}})
        rendered = tree_from_dict({"src": "now a file"})
        with pytest.raises(TreeConflict):
            merge_file_trees(existing, rendered)

    def test_rendered_nested_file_below_existing_file_conflicts(self):
        existing = tree_from_dict({"src": "a file"})
        rendered = tree_from_dict({"src": {"main.py": "x"}})
        with pytest.raises(TreeConflict) as excinfo:
            merge_file_trees(existing, rendered)
        assert str(excinfo.value.path) == "src"

    def test_inputs_are_untouched(self):
        existing = tree_from_dict({"a.txt": "old"})
        rendered = tree_from_dict({"a.txt": "new"})
        merge_file_trees(existing, rendered)
        assert tree_to_dict(existing) == {"a.txt": "old"}
        assert tree_to_dict(rendered) == {"a.txt": "new"}


class TestRenderAndMerge:
    def test_extends_existing_project(self, existing_project, sample_templates, sample_data):
        merged = tree_to_dict(render_and_merge(existing_project, sample_templates, sample_data))
        assert merged["src"]["notes.txt"] == "hand written\n"
        assert merged["src"]["lib.py"] == "import os\nimport billing_core\nimport auth\n"
        assert merged["README.md"] == "# demo\n"
        assert merged["public"] == {"billing-core.md": "BillingCore (1/2)\n"}

    def test_second_run_changes_nothing_for_plain_templates(self, existing_project):
        templates = tree_from_dict({"src": {"{{ name }}.py.j2": "# {{ name }}\n"}})
        once = render_and_merge(existing_project, templates, {"name": "core"})
        twice = render_and_merge(once, templates, {"name": "core"})
        assert diff_file_trees(once, twice) == {}
        assert once == twice
