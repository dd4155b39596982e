"""Substring and fuzzy search over the record store."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Sequence, Tuple

from rapidfuzz import fuzz

from packages.apm_schemas import Record

from .errors import InvalidArgument
from .normalize import is_blank, normalize_text, tokenize
from .store import Page, RecordStore, paginate, validate_page

__all__ = [
    "SEARCH_FIELDS",
    "SearchEngine",
    "SearchHit",
    "SearchMode",
    "SearchOptions",
]

logger = logging.getLogger(__name__)

# Contacts are left out on purpose: common surnames and mail domains would
# match almost every row.
SEARCH_FIELDS: Tuple[str, ...] = ("name", "code", "description")

# Fields scored by best-aligned window; code is always compared whole.
_PARTIAL_FIELDS = frozenset({"name", "description"})


def _similarity(field_name: str, needle: str, text: str) -> float:
    """Return the rapidfuzz similarity of *needle* against one field value.

    ``partial_ratio`` only applies when the query fits inside the field text;
    a query longer than the field is compared whole, so a short value such as
    "Ops" does not fully match every query that happens to contain it.
    """

    if field_name in _PARTIAL_FIELDS and len(needle) <= len(text):
        return fuzz.partial_ratio(needle, text)
    return fuzz.ratio(needle, text)


class SearchMode(str, Enum):
    FUZZY = "fuzzy"
    SUBSTRING = "substring"


@dataclass(frozen=True)
class SearchOptions:
    """Matching configuration.

    A field's distance is ``1 - weight * similarity / 100`` where similarity
    is the rapidfuzz score in ``[0, 100]``. A record's score is its best
    (lowest) field distance and it matches when that score is within
    ``threshold``.
    """

    threshold: float = 0.3
    mode: SearchMode = SearchMode.FUZZY
    name_weight: float = 1.0
    code_weight: float = 1.0
    description_weight: float = 0.9
    page_size: int = 20

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "mode", SearchMode(self.mode))
        except ValueError as exc:
            choices = ", ".join(m.value for m in SearchMode)
            raise InvalidArgument(f"Unknown search mode {self.mode!r} (choose from {choices})") from exc
        if not 0.0 <= self.threshold <= 1.0:
            raise InvalidArgument(f"threshold must be within [0, 1], got {self.threshold}")
        for field_name in SEARCH_FIELDS:
            weight = self.weight(field_name)
            if not 0.0 < weight <= 1.0:
                raise InvalidArgument(f"{field_name}_weight must be within (0, 1], got {weight}")
        validate_page(1, self.page_size)

    @classmethod
    def from_settings(cls, settings: Any, **overrides: Any) -> "SearchOptions":
        values = {
            "threshold": settings.SEARCH_THRESHOLD,
            "mode": settings.SEARCH_MODE,
            "name_weight": settings.NAME_WEIGHT,
            "code_weight": settings.CODE_WEIGHT,
            "description_weight": settings.DESCRIPTION_WEIGHT,
            "page_size": settings.DEFAULT_PAGE_SIZE,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def weight(self, field_name: str) -> float:
        return float(getattr(self, f"{field_name}_weight"))


@dataclass(frozen=True)
class SearchHit:
    record: Record
    score: float
    field: str
    position: int


class SearchEngine:
    """Rank records from a :class:`RecordStore` against free-text queries."""

    def __init__(self, store: RecordStore, options: Optional[SearchOptions] = None) -> None:
        self.store = store
        self.options = options or SearchOptions()
        # (records, options, query) of the last ranking and its hits
        self._memo: Optional[Tuple[Tuple[Record, ...], SearchOptions, str, List[SearchHit]]] = None

    def search(self, query: str, page: int = 1, page_size: Optional[int] = None) -> Page:
        """Return a page of matching records and the total match count.

        A blank query is the same as :meth:`RecordStore.get_page`.
        """

        size = self.options.page_size if page_size is None else page_size
        if is_blank(query):
            return self.store.get_page(page, size)
        hits = self.search_hits(query, page, size)
        return Page(items=tuple(hit.record for hit in hits.items), total=hits.total)

    def search_hits(self, query: str, page: int = 1, page_size: Optional[int] = None) -> Page:
        """Like :meth:`search` but the page holds :class:`SearchHit` objects."""

        size = self.options.page_size if page_size is None else page_size
        validate_page(page, size)
        return paginate(self.rank(query), page, size)

    def rank(self, query: str) -> List[SearchHit]:
        """Return every match best-first; ties keep collection order."""

        records = self.store.get_all()
        needle = normalize_text(query)
        if not needle:
            return [SearchHit(record=r, score=0.0, field="", position=i) for i, r in enumerate(records)]

        options = self.options
        mode = options.mode
        memo = self._memo
        if memo is not None and memo[0] is records and memo[1] == options and memo[2] == needle:
            return list(memo[3])

        if mode is SearchMode.SUBSTRING:
            hits = self._rank_substring(records, needle)
        else:
            hits = self._rank_fuzzy(records, needle)
        # sorted() is stable and positions are unique, so ties keep load order.
        hits = sorted(hits, key=lambda hit: (hit.score, hit.position))
        self._memo = (records, options, needle, hits)
        logger.debug("Ranked %r (%s): %d of %d records matched", needle, mode.value, len(hits), len(records))
        return list(hits)

    def _rank_fuzzy(self, records: Sequence[Record], needle: str) -> List[SearchHit]:
        threshold = self.options.threshold
        hits: List[SearchHit] = []
        for position, record in enumerate(records):
            best_score = None
            best_field = ""
            for field_name in SEARCH_FIELDS:
                text = normalize_text(getattr(record, field_name))
                if not text:
                    continue
                similarity = _similarity(field_name, needle, text)
                score = round(1.0 - self.options.weight(field_name) * similarity / 100.0, 6)
                if best_score is None or score < best_score:
                    best_score, best_field = score, field_name
            if best_score is not None and best_score <= threshold:
                hits.append(SearchHit(record=record, score=best_score, field=best_field, position=position))
        return hits

    def _rank_substring(self, records: Sequence[Record], needle: str) -> List[SearchHit]:
        tokens = tokenize(needle)
        hits: List[SearchHit] = []
        for position, record in enumerate(records):
            best_score = None
            best_field = ""
            for field_name in SEARCH_FIELDS:
                text = normalize_text(getattr(record, field_name))
                if not text:
                    continue
                if needle in text or (tokens and all(tok in text for tok in tokens)):
                    score = round(1.0 - self.options.weight(field_name), 6)
                    if best_score is None or score < best_score:
                        best_score, best_field = score, field_name
            if best_score is not None:
                hits.append(SearchHit(record=record, score=best_score, field=best_field, position=position))
        return hits
