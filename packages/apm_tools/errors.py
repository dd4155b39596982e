"""Exception types raised by the directory store, search engine and converters."""

from __future__ import annotations

__all__ = [
    "DirectoryError",
    "InvalidArgument",
    "LoadFailure",
    "ConversionFailure",
]


class DirectoryError(Exception):
    """Base class for directory errors reported to callers."""


class InvalidArgument(DirectoryError, ValueError):
    """A caller supplied a page, page size, column or mode that is not valid."""


class LoadFailure(DirectoryError, RuntimeError):
    """The record collection could not be populated.

    The store keeps serving its previous snapshot (if any) after this error.
    """


class ConversionFailure(DirectoryError):
    """A tabular source could not be converted into a record sequence."""
