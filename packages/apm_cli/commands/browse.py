"""Paged listing and table view commands."""

from __future__ import annotations

from argparse import ArgumentTypeError, _SubParsersAction, Namespace
from typing import Dict, FrozenSet, List, Tuple

from config import settings
from packages.apm_schemas import Lifecycle, UserInterface, YesNo
from packages.apm_tools.table import SORT_COLUMNS, TEXT_COLUMNS, TableQuery, TableView

from ..config import RuntimeConfig
from ..services import build_engine, format_row, open_store, page_count

__all__ = ["register", "run_list", "run_table", "parse_column_filter"]

# option dest -> record attribute
_ENUM_OPTIONS: Dict[str, str] = {
    "lifecycle": "lifecycle",
    "cia": "critical_information_asset",
    "appsec": "security_assessment_required",
    "ui": "user_interface",
}


def parse_column_filter(value: str) -> Tuple[str, str]:
    column, sep, text = value.partition("=")
    column = column.strip()
    if not sep or column not in TEXT_COLUMNS:
        raise ArgumentTypeError(
            f"expected COLUMN=TEXT with COLUMN one of: {', '.join(TEXT_COLUMNS)}"
        )
    return column, text


def register(subparsers: _SubParsersAction) -> None:
    listing = subparsers.add_parser("list", help="List applications in load order")
    listing.add_argument("--page", type=int, default=1)
    listing.add_argument("--page-size", dest="page_size", type=int)
    listing.set_defaults(handler=run_list)

    table = subparsers.add_parser(
        "table", help="Tabular view with column filters, sorting and global search"
    )
    table.add_argument("--search", default="", help="Global fuzzy search text")
    table.add_argument(
        "--filter",
        dest="filters",
        action="append",
        type=parse_column_filter,
        default=[],
        metavar="COLUMN=TEXT",
        help="Case-insensitive substring filter (repeatable)",
    )
    table.add_argument("--lifecycle", action="append", choices=Lifecycle.values())
    table.add_argument("--cia", action="append", choices=YesNo.values(), help="Critical information asset")
    table.add_argument("--appsec", action="append", choices=YesNo.values(), help="Security release assessment required")
    table.add_argument("--ui", action="append", choices=UserInterface.values(), help="User interface exposure")
    table.add_argument("--sort", choices=SORT_COLUMNS)
    table.add_argument("--desc", action="store_true", help="Sort descending")
    table.add_argument("--page", type=int, default=1)
    table.add_argument("--page-size", dest="page_size", type=int)
    table.set_defaults(handler=run_table)


def run_list(args: Namespace, config: RuntimeConfig) -> None:
    store = open_store(config)
    size = getattr(args, "page_size", None)
    if size is None:
        size = settings.DEFAULT_PAGE_SIZE
    page = int(getattr(args, "page", 1))
    result = store.get_page(page, size)
    print(f"Applications: {result.total} (page {page} of {page_count(result.total, size)})")
    for record in result.items:
        print(format_row(record))


def _build_query(args: Namespace) -> TableQuery:
    contains: Dict[str, str] = {}
    for column, text in getattr(args, "filters", None) or []:
        contains[column] = text
    equals: Dict[str, FrozenSet[str]] = {}
    for option, attribute in _ENUM_OPTIONS.items():
        values: List[str] = getattr(args, option, None) or []
        if values:
            equals[attribute] = frozenset(values)
    return TableQuery(
        contains=contains,
        equals=equals,
        sort_by=getattr(args, "sort", None),
        descending=bool(getattr(args, "desc", False)),
    )


def run_table(args: Namespace, config: RuntimeConfig) -> None:
    store = open_store(config)
    view = TableView(build_engine(store), page_size=settings.TABLE_PAGE_SIZE)
    size = getattr(args, "page_size", None)
    if size is None:
        size = view.page_size
    page = int(getattr(args, "page", 1))
    result = view.page(_build_query(args), search=getattr(args, "search", ""), page=page, page_size=size)
    if not result.total:
        print("No matches.")
        return
    print(f"Rows: {result.total} (page {page} of {page_count(result.total, size)})")
    print("APM Code | Name | Lifecycle | CIA | AppSec | Application Contact | UI Type")
    for record in result.items:
        contact = record.owner.name
        if record.owner.email:
            contact += f" <{record.owner.email}>"
        print(
            " | ".join(
                [
                    record.code,
                    record.name,
                    record.lifecycle,
                    record.critical_information_asset,
                    record.security_assessment_required,
                    contact,
                    record.user_interface,
                ]
            )
        )
