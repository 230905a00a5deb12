"""Unit tests for template selection inside a project's templates folder."""

from __future__ import annotations

import pytest

from scaffold_tree.errors import AmbiguousTemplate, NoTemplatesFound, TemplateNotFound
from scaffold_tree.file_tree import tree_from_dict, tree_to_dict
from scaffold_tree.templates import get_template_file_tree, list_templates

pytestmark = pytest.mark.unit


@pytest.fixture
def project():
    return tree_from_dict(
        {
            "src": {"main.rs": "fn main() {}\n"},
            ".templates": {
                "web": {"module": {"{{ name }}.ts.j2": "export {}\n"}},
                "cli": {"module": {"{{ name }}.rs.j2": "pub fn run() {}\n"}},
                "notes.md": "not a template",
            },
        }
    )


class TestListTemplates:
    def test_lists_folders_sorted(self, project):
        assert list_templates(project) == ["cli", "web"]

    def test_no_templates_folder(self):
        assert list_templates(tree_from_dict({"src": {}})) == []

    def test_custom_folder(self):
        tree = tree_from_dict({"scaffolds": {"only": {}}})
        assert list_templates(tree, templates_dir="scaffolds") == ["only"]


class TestGetTemplateFileTree:
    def test_by_name(self, project):
        tree = get_template_file_tree(project, "cli")
        assert tree_to_dict(tree) == {"module": {"{{ name }}.rs.j2": "pub fn run() {}\n"}}

    def test_single_template_needs_no_name(self):
        project = tree_from_dict({".templates": {"only": {"a.j2": "a"}}})
        assert tree_to_dict(get_template_file_tree(project)) == {"a.j2": "a"}

    def test_several_templates_need_a_name(self, project):
        with pytest.raises(AmbiguousTemplate) as excinfo:
            get_template_file_tree(project)
        assert excinfo.value.names == ["cli", "web"]

    def test_unknown_name(self, project):
        with pytest.raises(TemplateNotFound) as excinfo:
            get_template_file_tree(project, "mobile")
        assert excinfo.value.name == "mobile"

    def test_no_templates(self):
        with pytest.raises(NoTemplatesFound):
            get_template_file_tree(tree_from_dict({"src": {}}))

    def test_empty_templates_folder(self):
        with pytest.raises(NoTemplatesFound):
            get_template_file_tree(tree_from_dict({".templates": {}}))
