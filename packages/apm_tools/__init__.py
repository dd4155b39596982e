"""Store, search and conversion tools for the application directory."""

from .errors import ConversionFailure, DirectoryError, InvalidArgument, LoadFailure
from .search import SearchEngine, SearchHit, SearchMode, SearchOptions
from .store import Page, RecordStore
from .table import TableQuery, TableView

__all__ = [
    "ConversionFailure",
    "DirectoryError",
    "InvalidArgument",
    "LoadFailure",
    "Page",
    "RecordStore",
    "SearchEngine",
    "SearchHit",
    "SearchMode",
    "SearchOptions",
    "TableQuery",
    "TableView",
]
