from pathlib import Path
from typing import Dict, Any, Optional

import orjson

from app.config import COLLECTION_FILES, DATA_DIR, RELOAD_ON_READ
from app.exceptions import DatasetError
from app.logging_setup import logger
from app.store import store, Collection


def load_collection(kind: str, data_dir: Optional[Path] = None) -> Collection:
    """
    Reads one entity kind from its JSON file. The file must hold a JSON array
    of objects; records are trusted and kept as-is.
    """
    path = Path(data_dir or DATA_DIR) / COLLECTION_FILES[kind]
    try:
        raw = orjson.loads(path.read_bytes())
    except FileNotFoundError as e:
        raise DatasetError(f"Dataset file not found for '{kind}': {path}") from e
    except orjson.JSONDecodeError as e:
        raise DatasetError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(raw, list):
        raise DatasetError(f"Expected a JSON array in {path}, got {type(raw).__name__}")
    return tuple(raw)


def load_dataset(data_dir: Optional[Path] = None) -> Dict[str, int]:
    """
    Loads every entity kind and swaps all snapshots into the store at once.
    Returns the per-kind record counts.
    """
    data_dir = Path(data_dir or DATA_DIR)
    logger.info("--- Starting Dataset Loading ---", extra={"data_dir": str(data_dir)})
    store.mark_loading()

    new_collections: Dict[str, Collection] = {}
    for kind in COLLECTION_FILES:
        new_collections[kind] = load_collection(kind, data_dir)
        logger.info(f"Loaded {len(new_collections[kind])} {kind}")

    store.swap_collections(new_collections)
    counts = {kind: len(records) for kind, records in new_collections.items()}
    logger.info("--- Dataset Loading Finished ---", extra={"counts": counts})
    return counts


def current_collection(kind: str, data_dir: Optional[Path] = None) -> Collection:
    """
    Returns the snapshot a request should read for `kind`.

    Kinds listed in RELOAD_ON_READ are re-read from disk first and the fresh
    snapshot replaces the old one atomically. If the reload fails the last
    good snapshot is served instead.
    """
    if kind not in RELOAD_ON_READ:
        return store.collection(kind)

    try:
        fresh = load_collection(kind, data_dir)
    except DatasetError as e:
        logger.warning(f"Reload of '{kind}' failed, serving previous snapshot: {e}")
        return store.collection(kind)

    logger.debug(f"Reloaded {len(fresh)} {kind} from disk")
    return store.replace_collection(kind, fresh)


def dataset_summary() -> Dict[str, Any]:
    snapshot = store.snapshot()
    return {kind: len(snapshot.get(kind, ())) for kind in COLLECTION_FILES}
