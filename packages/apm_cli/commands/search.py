"""Free-text search command."""

from __future__ import annotations

from argparse import _SubParsersAction, Namespace

from packages.apm_tools.normalize import is_blank
from packages.apm_tools.search import SearchMode

from ..config import RuntimeConfig
from ..services import build_engine, format_row, open_store, page_count

__all__ = ["register", "run"]


def register(subparsers: _SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "search", help="Search applications by name, code or description"
    )
    parser.add_argument("query", nargs="?", default="", help="Text to search for")
    parser.add_argument("--page", type=int, default=1, help="1-indexed result page")
    parser.add_argument(
        "--page-size", dest="page_size", type=int, help="Results per page (default: 20)"
    )
    parser.add_argument(
        "--mode",
        choices=[m.value for m in SearchMode],
        help="Matching strategy (default: fuzzy)",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        help="Maximum match distance between 0 and 1 (default: 0.3)",
    )
    parser.set_defaults(handler=run)


def run(args: Namespace, config: RuntimeConfig) -> None:
    store = open_store(config)
    engine = build_engine(
        store,
        mode=getattr(args, "mode", None),
        threshold=getattr(args, "threshold", None),
        page_size=getattr(args, "page_size", None),
    )
    query = getattr(args, "query", "") or ""
    page = int(getattr(args, "page", 1))
    size = engine.options.page_size

    if is_blank(query):
        result = engine.search(query, page, size)
        rows = [(record, None) for record in result.items]
    else:
        result = engine.search_hits(query, page, size)
        rows = [(hit.record, hit.score) for hit in result.items]

    if not result.total:
        print("No matches.")
        return
    print(f"Matches: {result.total} (page {page} of {page_count(result.total, size)})")
    offset = (page - 1) * size
    for index, (record, score) in enumerate(rows, start=offset + 1):
        print(f"[{index}] {format_row(record, score=score)}")
