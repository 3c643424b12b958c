"""
Generated file model — the output of every generator.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

FileCategory = Literal["root", "docs", "features", "tasks", "ai-configs"]


class GeneratedFile(BaseModel):
    """One document of the project framework.

    Attributes:
        path:       Slash-separated path inside the framework. Identity key
                    and zip entry name.
        filename:   Basename of ``path``.
        content:    Final markdown (override applied).
        word_count: Derived from ``content``; never stored back into state.
        category:   Grouping tag for tree views.
    """

    path: str
    filename: str
    content: str
    word_count: int = 0
    category: FileCategory = "root"


class FileTreeNode(BaseModel):
    """A node of the display tree built from a flat file list.

    Folders carry ``children``; files carry ``file_path`` pointing back
    at the ``GeneratedFile.path`` they came from.
    """

    name: str
    type: Literal["file", "folder"] = "folder"
    children: list[FileTreeNode] | None = None
    file_path: str | None = None

    @property
    def is_folder(self) -> bool:
        return self.type == "folder"

    def child(self, name: str) -> FileTreeNode | None:
        """Look up a direct child folder by name."""
        for node in self.children or []:
            if node.name == name and node.is_folder:
                return node
        return None
