"""Directory trees over flat file lists, with whole-directory collapsing."""

from __future__ import annotations

import weakref
from collections.abc import Iterable
from dataclasses import dataclass, field

from dir_compare.scan.models import FileCatalog, FileRecord

PATH_SEPARATOR = "/"


@dataclass(slots=True, weakref_slot=True, eq=False)
class TreeNode:
    """One directory in a display tree.

    `parent` is a weak back-reference used only to rebuild the node path;
    children are owned through `children`. Callers must keep the root
    alive while using any node below it. A subtree held on its own loses
    its ancestors, `parent` becomes None and `path` is relative to the
    topmost surviving node.
    """

    name: str
    is_directory: bool = True
    files: list[FileRecord] = field(default_factory=list)
    children: dict[str, TreeNode] = field(default_factory=dict)
    is_entire_subtree: bool = False
    _parent: weakref.ReferenceType[TreeNode] | None = field(default=None, repr=False)

    @property
    def parent(self) -> TreeNode | None:
        return self._parent() if self._parent is not None else None

    @property
    def path(self) -> str:
        """Join segment names from the root down to this node."""
        parts: list[str] = []
        current: TreeNode | None = self
        while current is not None and current.name != "":
            parts.append(current.name)
            current = current.parent
        return PATH_SEPARATOR.join(reversed(parts))

    def child(self, name: str) -> TreeNode:
        """Return the named child directory, creating it when absent."""
        node = self.children.get(name)
        if node is None:
            node = TreeNode(name=name, _parent=weakref.ref(self))
            self.children[name] = node
        return node

    def sorted_children(self) -> list[TreeNode]:
        return [self.children[name] for name in sorted(self.children)]


@dataclass(slots=True, frozen=True)
class CollapsedTree:
    """A marked and pruned tree paired with the catalog it was drawn from."""

    root: TreeNode
    source: FileCatalog


def build_tree(records: Iterable[FileRecord]) -> TreeNode:
    """Build a plain directory hierarchy from relative paths."""
    root = TreeNode(name="")
    for record in records:
        parts = record.relative_path.split(PATH_SEPARATOR)
        current = root
        for part in parts[:-1]:
            current = current.child(part)
        current.files.append(record)
    return root


def build_collapsed_tree(
    records: Iterable[FileRecord], source: FileCatalog, other: FileCatalog
) -> TreeNode:
    """Build, mark and prune the tree for files unique to `source`."""
    root = build_tree(records)
    mark_entire_directories(root, source, other)
    prune_empty_directories(root)
    return root


def mark_entire_directories(
    node: TreeNode,
    source: FileCatalog,
    other: FileCatalog,
    matched_directories: frozenset[str] | None = None,
) -> None:
    """Mark directories whose whole source content is absent from `other`.

    Children are resolved before their parents. A directory qualifies only
    when it is a real directory of the source set, every source file
    directly inside it lacks a fingerprint match in `other`, every child
    directory qualifies too, and no source file at any depth below it has a
    match. The synthetic root never qualifies.
    """
    if not node.is_directory:
        return
    if matched_directories is None:
        matched_directories = directories_with_matches(source, other)
    for child in node.children.values():
        mark_entire_directories(child, source, other, matched_directories)

    if node.name == "":
        node.is_entire_subtree = False
        return

    directory = node.path
    if directory not in source.directory_paths or directory in matched_directories:
        node.is_entire_subtree = False
        return

    direct_files = source.records_in_directory(directory)
    unmatched = sum(1 for record in direct_files if not other.has_fingerprint(record.fingerprint))
    files_unmatched = unmatched == len(direct_files)

    child_dirs = [child for child in node.children.values() if child.is_directory]
    children_entire = all(child.is_entire_subtree for child in child_dirs)

    has_content = bool(direct_files) or bool(child_dirs)
    node.is_entire_subtree = has_content and files_unmatched and children_entire


def directories_with_matches(source: FileCatalog, other: FileCatalog) -> frozenset[str]:
    """Return source directories holding a file matched in `other` at any depth."""
    matched: set[str] = set()
    for record in source:
        if not other.has_fingerprint(record.fingerprint):
            continue
        directory = record.directory
        while directory and directory not in matched:
            matched.add(directory)
            directory = directory.rpartition(PATH_SEPARATOR)[0]
    return frozenset(matched)


def prune_empty_directories(node: TreeNode) -> bool:
    """Drop directories without files or children; return whether `node` stays."""
    if not node.is_directory:
        return True
    for name in list(node.children):
        if not prune_empty_directories(node.children[name]):
            del node.children[name]
    return bool(node.files) or bool(node.children)


def collect_files(node: TreeNode) -> list[FileRecord]:
    """Return every record at or below `node`."""
    files = list(node.files)
    for child in node.sorted_children():
        files.extend(collect_files(child))
    return files


def count_tree_items(node: TreeNode) -> tuple[int, int]:
    """Count files and directories below `node`."""
    files = len(node.files)
    dirs = 0
    for child in node.children.values():
        if child.is_directory:
            child_files, child_dirs = count_tree_items(child)
            files += child_files
            dirs += 1 + child_dirs
    return files, dirs


def entire_directories(node: TreeNode) -> list[str]:
    """Return paths of the topmost directories marked as entire subtrees."""
    if node.is_entire_subtree:
        return [node.path]
    paths: list[str] = []
    for child in node.sorted_children():
        paths.extend(entire_directories(child))
    return paths
