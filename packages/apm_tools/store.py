"""In-memory record store with an optional persistent mirror."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, NamedTuple, Optional, Sequence, Tuple, TypeVar, Union

from pydantic import ValidationError

from packages.apm_schemas import Record

from .errors import InvalidArgument, LoadFailure

if TYPE_CHECKING:  # pragma: no cover
    from .mirror import RecordMirror

__all__ = ["Page", "RecordStore", "paginate", "validate_page"]

logger = logging.getLogger(__name__)

T = TypeVar("T")
RecordInput = Union[Record, Mapping[str, Any]]


class Page(NamedTuple):
    """A page slice plus the total number of items it was cut from."""

    items: Tuple[Any, ...]
    total: int


def validate_page(page: int, page_size: int) -> None:
    """Raise :class:`InvalidArgument` unless both values are positive integers."""

    for label, value in (("page", page), ("page_size", page_size)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidArgument(f"{label} must be an integer, got {value!r}")
    if page < 1:
        raise InvalidArgument(f"page must be >= 1, got {page}")
    if page_size <= 0:
        raise InvalidArgument(f"page_size must be > 0, got {page_size}")


def paginate(items: Sequence[T], page: int, page_size: int) -> Page:
    """Return the 1-indexed *page* of *items*; past-the-end pages are empty."""

    validate_page(page, page_size)
    start = (page - 1) * page_size
    return Page(items=tuple(items[start : start + page_size]), total=len(items))


@dataclass(frozen=True)
class _Snapshot:
    records: Tuple[Record, ...] = ()
    by_code: Mapping[str, Record] = field(default_factory=dict)
    version: int = 0


def _build_snapshot(records: Iterable[RecordInput], version: int) -> _Snapshot:
    ordered: List[Record] = []
    by_code: Dict[str, Record] = {}
    for index, raw in enumerate(records):
        try:
            record = raw if isinstance(raw, Record) else Record.model_validate(raw)
        except ValidationError as exc:
            raise LoadFailure(f"Invalid record at position {index}: {exc}") from exc
        if record.code in by_code:
            raise LoadFailure(f"Duplicate application code {record.code!r} at position {index}")
        by_code[record.code] = record
        ordered.append(record)
    return _Snapshot(records=tuple(ordered), by_code=by_code, version=version)


class RecordStore:
    """Authoritative collection of application records.

    Reads run against the last fully loaded snapshot; :meth:`load` builds a new
    snapshot (and rewrites the mirror, if any) before publishing it, so readers
    never see a half-replaced collection.
    """

    def __init__(self, *, mirror: Optional["RecordMirror"] = None) -> None:
        self._mirror = mirror
        self._snapshot = _Snapshot()
        self._ready = False
        self._lock = threading.Lock()

    @property
    def mirror(self) -> Optional["RecordMirror"]:
        return self._mirror

    @property
    def is_ready(self) -> bool:
        return self._ready

    def __len__(self) -> int:
        return len(self._snapshot.records)

    def load(self, records: Iterable[RecordInput]) -> int:
        """Replace the collection with *records* and return the new count."""

        with self._lock:
            snapshot = _build_snapshot(records, self._snapshot.version + 1)
            if self._mirror is not None:
                self._mirror.replace_all(snapshot.records)
            self._snapshot = snapshot
            self._ready = True
        logger.debug("Loaded %d records (snapshot %d)", len(snapshot.records), snapshot.version)
        return len(snapshot.records)

    def restore(self) -> int:
        """Rebuild the in-memory snapshot from the attached mirror."""

        if self._mirror is None:
            raise LoadFailure("No mirror attached to restore from")
        with self._lock:
            rows = self._mirror.fetch_all()
            snapshot = _build_snapshot(rows, self._snapshot.version + 1)
            self._snapshot = snapshot
            self._ready = True
        logger.debug("Restored %d records from mirror (snapshot %d)", len(snapshot.records), snapshot.version)
        return len(snapshot.records)

    def get_by_key(self, code: str) -> Optional[Record]:
        return self._snapshot.by_code.get(code)

    def get_all(self) -> Tuple[Record, ...]:
        return self._snapshot.records

    def get_page(self, page: int, page_size: int) -> Page:
        return paginate(self._snapshot.records, page, page_size)
