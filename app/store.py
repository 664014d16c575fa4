import threading
from typing import Dict, Any, Tuple

Record = Dict[str, Any]
Collection = Tuple[Record, ...]

class Store:
    """
    A thread-safe application store holding one immutable snapshot per
    entity kind, plus readiness state.

    Snapshots are never mutated in place. Every update builds a new mapping
    and swaps the reference under the lock, so a reader that captured a
    collection keeps a consistent view for the whole request.
    """
    def __init__(self):
        self._collections: Dict[str, Collection] = {}
        self.lock = threading.Lock()
        self.is_ready: bool = False

    def swap_collections(self, new_collections: Dict[str, Collection]) -> None:
        """
        Atomically replaces every snapshot and sets the application state to ready.
        """
        frozen = {kind: tuple(records) for kind, records in new_collections.items()}
        with self.lock:
            self._collections = frozen
            self.is_ready = True

    def replace_collection(self, kind: str, records: Collection) -> Collection:
        """
        Atomically replaces the snapshot of a single kind and returns it.
        """
        snapshot = tuple(records)
        with self.lock:
            self._collections = {**self._collections, kind: snapshot}
        return snapshot

    def collection(self, kind: str) -> Collection:
        """
        Returns the current snapshot for a kind (empty if never loaded).
        """
        return self._collections.get(kind, ())

    def snapshot(self) -> Dict[str, Collection]:
        """
        Returns the current kind -> collection mapping. Safe to hold for a request.
        """
        return self._collections

    def mark_loading(self) -> None:
        """
        Sets the application state to not ready (loading).
        """
        with self.lock:
            self.is_ready = False

# Export a singleton instance for global use.
store = Store()
