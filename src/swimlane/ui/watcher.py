"""Mixin that manages BoardStore watches with auto-cleanup."""

from __future__ import annotations

from typing import Callable

from swimlane.store import BoardStore, Callback


class StoreWatcherMixin:
    """Mixin for widgets that re-render when the board snapshot is swapped.

    Subclasses should:
    - Call ``_init_watcher()`` in ``__init__``
    - Use ``self.store_watch(store, callback)`` instead of ``store.watch(...)``
    - Skip writing ``on_unmount`` -- the mixin handles cleanup
    """

    def _init_watcher(self) -> None:
        self._watches: list[Callable[[], None]] = []

    def store_watch(self, store: BoardStore, callback: Callback) -> None:
        """Register a watch that is removed when the widget unmounts."""
        self._watches.append(store.watch(callback))

    def keep_watch(self, unwatch: Callable[[], None]) -> None:
        """Hold any other unsubscribe callable until the widget unmounts."""
        self._watches.append(unwatch)

    def on_unmount(self) -> None:
        for unwatch in self._watches:
            unwatch()
        self._watches.clear()
