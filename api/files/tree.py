"""
Folder hierarchy operations (pure, no I/O).

Folders form a forest through `parent_id` (None = root). The store does not
enforce acyclicity, so every walk here carries a visited set and stops on a
revisit instead of looping forever.

Used by:
- the server (move validation, subtree delete, breadcrumbs)
- the client navigator (local breadcrumb + move checks)
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Iterable, Mapping


class FolderCycleError(ValueError):
    """Raised when a move would put a folder under itself or a descendant."""


@dataclass(frozen=True)
class FolderNode:
    id: int
    name: str
    parent_id: int | None = None

    def as_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "parent_id": self.parent_id}


def _parent_of(row: Mapping[str, Any]) -> int | None:
    # Legacy rows use camelCase keys.
    raw = row.get("parent_id", row.get("parentId"))
    return int(raw) if raw is not None else None


def index_folders(rows: Iterable[Mapping[str, Any] | FolderNode]) -> dict[int, FolderNode]:
    folders: dict[int, FolderNode] = {}
    for row in rows:
        if isinstance(row, FolderNode):
            folders[row.id] = row
            continue
        node = FolderNode(id=int(row["id"]), name=str(row.get("name") or ""), parent_id=_parent_of(row))
        folders[node.id] = node
    return folders


def ancestor_path(folders: Mapping[int, FolderNode], folder_id: int | None) -> list[FolderNode]:
    """
    Return the chain root -> ... -> folder_id.

    Stops at a null parent, a parent that is not in `folders`, or a node
    that was already visited. Unknown or None `folder_id` gives [].
    """
    path: deque[FolderNode] = deque()
    visited: set[int] = set()
    current = folder_id

    while current is not None and current not in visited:
        node = folders.get(current)
        if node is None:
            break
        visited.add(current)
        path.appendleft(node)
        current = node.parent_id

    return list(path)


def is_descendant(folders: Mapping[int, FolderNode], ancestor_id: int, candidate_id: int | None) -> bool:
    """
    True when `ancestor_id` is met walking upward from `candidate_id`
    (a folder counts as its own descendant).
    """
    visited: set[int] = set()
    current = candidate_id

    while current is not None and current not in visited:
        if current == ancestor_id:
            return True
        visited.add(current)
        node = folders.get(current)
        if node is None:
            return False
        current = node.parent_id

    return False


def validate_move(folders: Mapping[int, FolderNode], folder_id: int, new_parent_id: int | None) -> None:
    """
    Raise FolderCycleError if reparenting `folder_id` under `new_parent_id`
    would create a cycle. Moving to the root (None) is always allowed.
    """
    if new_parent_id is None:
        return None
    if is_descendant(folders, folder_id, new_parent_id):
        raise FolderCycleError("Cannot move a folder into itself or one of its sub-folders.")
    return None


def children(folders: Mapping[int, FolderNode], parent_id: int | None) -> list[FolderNode]:
    """
    Immediate sub-folders of `parent_id` (None = root), sorted by name.
    """
    kids = [node for node in folders.values() if node.parent_id == parent_id and node.id != parent_id]
    return sorted(kids, key=lambda node: (node.name.lower(), node.id))


def subtree_ids(folders: Mapping[int, FolderNode], root_id: int) -> list[int]:
    """
    `root_id` followed by every descendant folder id (breadth first).
    """
    by_parent: dict[int, list[int]] = {}
    for node in folders.values():
        if node.parent_id is not None:
            by_parent.setdefault(node.parent_id, []).append(node.id)

    ordered: list[int] = []
    visited: set[int] = set()
    queue: deque[int] = deque([root_id])
    while queue:
        current = queue.popleft()
        if current in visited:
            continue
        visited.add(current)
        ordered.append(current)
        queue.extend(sorted(by_parent.get(current, [])))

    return ordered


def truncate_path(path: list[FolderNode], index: int) -> list[FolderNode]:
    """
    Breadcrumb click: keep entries up to and including `index`.
    A negative index means "back to root".
    """
    if index < 0:
        return []
    return list(path[: index + 1])
