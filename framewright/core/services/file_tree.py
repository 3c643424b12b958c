"""
File tree — fold the flat generated-file list into a folder hierarchy.

Used by the ``tree`` command and by the check use case; the archive and
the on-disk export work from the flat list directly.
"""

from __future__ import annotations

from framewright.core.models.template import FileTreeNode, GeneratedFile

DEFAULT_ROOT_NAME = "project-framework"


def build_tree(files: list[GeneratedFile], root_name: str = DEFAULT_ROOT_NAME) -> FileTreeNode:
    """Build a folder tree from slash-separated paths.

    Folders are created on first use and reused by name within their
    parent. Children keep insertion order; see ``sort_tree`` for a
    display order.
    """
    root = FileTreeNode(name=root_name, type="folder", children=[])

    for f in files:
        *folders, leaf = f.path.split("/")
        current = root
        for name in folders:
            existing = current.child(name)
            if existing is None:
                existing = FileTreeNode(name=name, type="folder", children=[])
                current.children.append(existing)  # type: ignore[union-attr]
            current = existing
        current.children.append(  # type: ignore[union-attr]
            FileTreeNode(name=leaf, type="file", file_path=f.path)
        )

    return root


def sort_tree(node: FileTreeNode, folders_first: bool = True) -> FileTreeNode:
    """Return a sorted copy of the tree; the input is left untouched."""
    if not node.is_folder:
        return node.model_copy()

    def key(child: FileTreeNode) -> tuple:
        if folders_first:
            return (0 if child.is_folder else 1, child.name.lower())
        return (child.name.lower(),)

    children = [sort_tree(c, folders_first) for c in node.children or []]
    return node.model_copy(update={"children": sorted(children, key=key)})


def iter_file_paths(node: FileTreeNode) -> list[str]:
    """Depth-first list of the ``file_path`` of every leaf."""
    if not node.is_folder:
        return [node.file_path] if node.file_path else []
    paths: list[str] = []
    for child in node.children or []:
        paths.extend(iter_file_paths(child))
    return paths


def render_tree(node: FileTreeNode) -> str:
    """Text rendering with box-drawing connectors.

    >>> print(render_tree(build_tree([...])))   # doctest: +SKIP
    project-framework/
    ├── PRIME.md
    └── docs/
        └── CONVENTIONS.md
    """
    lines = [f"{node.name}/" if node.is_folder else node.name]
    _render_children(node, "", lines)
    return "\n".join(lines)


def _render_children(node: FileTreeNode, prefix: str, lines: list[str]) -> None:
    children = node.children or []
    for idx, child in enumerate(children):
        last = idx == len(children) - 1
        connector = "└── " if last else "├── "
        label = f"{child.name}/" if child.is_folder else child.name
        lines.append(f"{prefix}{connector}{label}")
        if child.is_folder:
            _render_children(child, prefix + ("    " if last else "│   "), lines)
