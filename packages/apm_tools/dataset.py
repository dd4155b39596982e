"""Reading the JSON record sequence produced by the converters."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional


from .errors import LoadFailure
from .store import RecordStore

if TYPE_CHECKING:  # pragma: no cover
    from .mirror import RecordMirror

__all__ = ["read_records", "load_store"]

logger = logging.getLogger(__name__)


def read_records(path: Path | str) -> List[Dict[str, Any]]:
    """Return the list of row objects stored in the JSON file at *path*."""

    source = Path(path)
    try:
        data = json.loads(source.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise LoadFailure(f"Dataset not found: {source}") from exc
    except UnicodeDecodeError as exc:
        raise LoadFailure(f"Dataset is not valid UTF-8: {source} ({exc})") from exc
    except json.JSONDecodeError as exc:
        raise LoadFailure(f"Dataset is not valid JSON: {source} ({exc})") from exc
    except OSError as exc:
        raise LoadFailure(f"Dataset could not be read: {source} ({exc})") from exc

    if not isinstance(data, list):
        raise LoadFailure(f"Dataset must be a JSON array of objects: {source}")
    for index, row in enumerate(data):
        if not isinstance(row, dict):
            raise LoadFailure(f"Dataset entry {index} is not an object: {source}")
    logger.debug("Read %d rows from %s", len(data), source)
    return data


def load_store(path: Path | str, *, mirror: Optional["RecordMirror"] = None) -> RecordStore:
    """Build a :class:`RecordStore` populated from the dataset at *path*."""

    store = RecordStore(mirror=mirror)
    store.load(read_records(path))
    return store
