"""Command registrations for the apm CLI."""

from __future__ import annotations

from argparse import _SubParsersAction

from . import browse, convert, mirror, search, show, stats

__all__ = ["register"]


def register(subparsers: _SubParsersAction) -> None:
    """Register all CLI commands with *subparsers*."""

    search.register(subparsers)
    show.register(subparsers)
    browse.register(subparsers)
    stats.register(subparsers)
    mirror.register(subparsers)
    convert.register(subparsers)
