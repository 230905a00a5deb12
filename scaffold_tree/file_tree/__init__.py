"""In-memory file trees: the common currency of the scaffolding engine."""

from scaffold_tree.file_tree.io import load_directory, write_file_tree
from scaffold_tree.file_tree.models import (
    Directory,
    File,
    FileTree,
    tree_from_dict,
    tree_to_dict,
)
from scaffold_tree.file_tree.operations import (
    FlatTree,
    as_tree_path,
    diff_file_trees,
    dir_content,
    dir_exists,
    file_content,
    file_exists,
    find_files,
    flatten_file_tree,
    get_entry,
    unflatten_file_tree,
)

__all__ = [
    "Directory",
    "File",
    "FileTree",
    "FlatTree",
    "as_tree_path",
    "diff_file_trees",
    "dir_content",
    "dir_exists",
    "file_content",
    "file_exists",
    "find_files",
    "flatten_file_tree",
    "get_entry",
    "load_directory",
    "tree_from_dict",
    "tree_to_dict",
    "unflatten_file_tree",
    "write_file_tree",
]
