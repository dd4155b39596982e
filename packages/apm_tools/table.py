"""Tabular browse view: per-column filters and sorting on top of search."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from packages.apm_schemas import Lifecycle, Record, UserInterface, YesNo

from .errors import InvalidArgument
from .normalize import normalize_text
from .search import SearchEngine
from .store import Page, paginate, validate_page

__all__ = [
    "ENUM_COLUMNS",
    "SORT_COLUMNS",
    "TEXT_COLUMNS",
    "TableQuery",
    "TableView",
    "apply_table_query",
]

TEXT_COLUMNS: Dict[str, Callable[[Record], str]] = {
    "code": lambda r: r.code,
    "name": lambda r: r.name,
    "description": lambda r: r.description,
    "owner": lambda r: r.owner.name,
}

# Known literals per enumerated column, used for CLI choices and stats.
ENUM_COLUMNS: Dict[str, Tuple[str, ...]] = {
    "lifecycle": Lifecycle.values(),
    "critical_information_asset": YesNo.values(),
    "security_assessment_required": YesNo.values(),
    "user_interface": UserInterface.values(),
}

SORT_COLUMNS: Tuple[str, ...] = ("code", "name")


@dataclass(frozen=True)
class TableQuery:
    """Column filters and ordering for the table view.

    ``contains`` maps a text column to a case-insensitive substring.
    ``equals`` maps an enumerated column to accepted values (OR within a
    column, AND across columns); comparison is exact.
    """

    contains: Mapping[str, str] = field(default_factory=dict)
    equals: Mapping[str, FrozenSet[str]] = field(default_factory=dict)
    sort_by: Optional[str] = None
    descending: bool = False

    def validate(self) -> None:
        for column in self.contains:
            if column not in TEXT_COLUMNS:
                raise InvalidArgument(
                    f"Unknown text column {column!r} (choose from {', '.join(TEXT_COLUMNS)})"
                )
        for column in self.equals:
            if column not in ENUM_COLUMNS:
                raise InvalidArgument(
                    f"Unknown filter column {column!r} (choose from {', '.join(ENUM_COLUMNS)})"
                )
        if self.sort_by is not None and self.sort_by not in SORT_COLUMNS:
            raise InvalidArgument(
                f"Cannot sort by {self.sort_by!r} (choose from {', '.join(SORT_COLUMNS)})"
            )


def apply_table_query(records: Iterable[Record], query: TableQuery) -> List[Record]:
    query.validate()
    needles = {column: normalize_text(text) for column, text in query.contains.items() if text}
    rows: List[Record] = []
    for record in records:
        if any(needle not in normalize_text(TEXT_COLUMNS[col](record)) for col, needle in needles.items()):
            continue
        if any(values and getattr(record, col) not in values for col, values in query.equals.items()):
            continue
        rows.append(record)
    if query.sort_by:
        getter = TEXT_COLUMNS[query.sort_by]
        rows.sort(key=lambda r: normalize_text(getter(r)), reverse=query.descending)
    return rows


class TableView:
    """Global search, then column filters, then pagination."""

    def __init__(self, engine: SearchEngine, *, page_size: int = 10) -> None:
        validate_page(1, page_size)
        self.engine = engine
        self.page_size = page_size

    def page(
        self,
        query: Optional[TableQuery] = None,
        *,
        search: str = "",
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> Page:
        size = self.page_size if page_size is None else page_size
        validate_page(page, size)
        ranked = [hit.record for hit in self.engine.rank(search)]
        rows = apply_table_query(ranked, query or TableQuery())
        return paginate(rows, page, size)
