"""
Client application state.

One immutable `AppState` snapshot lives in a `Store`. Every change goes
through `Store.update()`, which swaps the snapshot and then calls the
subscribed render functions with the new state.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass, field, replace
from typing import Any, AsyncIterator, Callable

from files.tree import FolderNode


class OperationInProgress(RuntimeError):
    """Raised when a second save/delete starts while one is still running."""


@dataclass(frozen=True)
class AppState:
    user: dict[str, Any] | None = None
    token: str | None = None
    updates: list[dict[str, Any]] = field(default_factory=list)
    categories: list[dict[str, Any]] = field(default_factory=list)
    info_cards: list[dict[str, Any]] = field(default_factory=list)
    folders: list[dict[str, Any]] = field(default_factory=list)
    items: list[dict[str, Any]] = field(default_factory=list)
    current_folder_id: int | None = None
    path: list[FolderNode] = field(default_factory=list)
    busy: bool = False

    @property
    def is_admin(self) -> bool:
        return bool(self.user) and str(self.user.get("role") or "") == "admin"


Listener = Callable[[AppState], None]


class Store:
    def __init__(self, state: AppState | None = None) -> None:
        self._state = state or AppState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> AppState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._state)

    def update(self, **changes: Any) -> AppState:
        self._state = replace(self._state, **changes)
        self._notify()
        return self._state

    def reset(self, state: AppState) -> AppState:
        self._state = state
        self._notify()
        return self._state

    @asynccontextmanager
    async def mutation(self) -> AsyncIterator["Store"]:
        """
        Serialize mutating operations (double-submit guard).

        If the block fails, the state goes back to what it was before the
        attempt and the error propagates.
        """
        if self._state.busy:
            raise OperationInProgress("Another change is still being saved.")

        before = self._state
        self.update(busy=True)
        try:
            yield self
        except BaseException:
            # Also covers task cancellation.
            self.reset(before)
            raise
        self.update(busy=False)
