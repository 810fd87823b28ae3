"""
Folder navigation for the file browser.

The breadcrumb is the materialized path root -> current folder. Opening a
folder or clicking a breadcrumb entry re-lists that folder and replaces
`current_folder_id`, `path` and `items` in one store update.
"""

from __future__ import annotations

from typing import Any

from files import tree

from .http import PortalClient
from .state import AppState, Store


def select_breadcrumb(state: AppState, index: int) -> tuple[list[tree.FolderNode], int | None]:
    """
    Pure breadcrumb click: the truncated path and the folder it now points at.
    """
    path = tree.truncate_path(state.path, index)
    return path, (path[-1].id if path else None)


class FolderNavigator:
    def __init__(self, store: Store, client: PortalClient) -> None:
        self.store = store
        self.client = client

    def _folder_index(self) -> dict[int, tree.FolderNode]:
        return tree.index_folders(self.store.state.folders)

    def _apply_listing(self, folder_id: int | None, listing: dict[str, Any]) -> AppState:
        path = tree.index_folders(listing.get("path") or [])
        return self.store.update(
            current_folder_id=folder_id,
            path=list(path.values()),
            items=list(listing.get("items") or []),
        )

    async def open_folder(self, folder_id: int | None) -> AppState:
        listing = await self.client.list_directory(folder_id)
        return self._apply_listing(folder_id, listing)

    async def go_to_root(self) -> AppState:
        return await self.open_folder(None)

    async def go_to_path(self, index: int) -> AppState:
        _, folder_id = select_breadcrumb(self.store.state, index)
        return await self.open_folder(folder_id)

    async def refresh(self) -> AppState:
        return await self.open_folder(self.store.state.current_folder_id)

    async def load_folders(self) -> AppState:
        return self.store.update(folders=await self.client.list_folders())

    def local_path(self, folder_id: int | None) -> list[tree.FolderNode]:
        """
        Breadcrumb computed from the cached folder list (no request).
        """
        return tree.ancestor_path(self._folder_index(), folder_id)

    def can_move(self, folder_id: int, new_parent_id: int | None) -> bool:
        try:
            tree.validate_move(self._folder_index(), folder_id, new_parent_id)
        except tree.FolderCycleError:
            return False
        return True

    def move_targets(self, folder_id: int) -> list[tree.FolderNode]:
        """
        Folders offered in the move dialog: everything outside the subtree.
        """
        folders = self._folder_index()
        blocked = set(tree.subtree_ids(folders, folder_id))
        return sorted(
            (node for node in folders.values() if node.id not in blocked),
            key=lambda node: (node.name.lower(), node.id),
        )

    async def move_folder(self, folder_id: int, new_parent_id: int | None) -> AppState:
        tree.validate_move(self._folder_index(), folder_id, new_parent_id)
        async with self.store.mutation():
            await self.client.save_folder({"id": folder_id, "parent_id": new_parent_id})
            await self.load_folders()
            await self.refresh()
        return self.store.state

    async def move_item(self, item_id: int, folder_id: int | None) -> AppState:
        async with self.store.mutation():
            await self.client.save_file({"id": item_id, "folder_id": folder_id})
            await self.refresh()
        return self.store.state

    async def delete_folder(self, folder_id: int, *, confirm: bool = False) -> AppState:
        """
        Without `confirm`, a non-empty folder raises PortalAPIError(409) whose
        payload says how many folders/items would go.
        """
        async with self.store.mutation():
            await self.client.delete_folder(folder_id, confirm=confirm)
            await self.load_folders()
            state = self.store.state
            if state.current_folder_id is not None and state.current_folder_id not in self._folder_index():
                await self.go_to_root()
            else:
                await self.refresh()
        return self.store.state
