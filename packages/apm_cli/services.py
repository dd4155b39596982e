"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import Any, Optional

from config import settings
from packages.apm_schemas import Contact, Record
from packages.apm_tools.dataset import load_store
from packages.apm_tools.mirror import RecordMirror
from packages.apm_tools.search import SearchEngine, SearchOptions
from packages.apm_tools.store import RecordStore

from .config import RuntimeConfig


def open_store(config: RuntimeConfig) -> RecordStore:
    """Load the dataset, falling back to the mirror when the file is absent."""

    if config.mirror_path is None:
        return load_store(config.data_file)
    # Reads are served from the snapshot; the mirror reconnects if written again.
    with RecordMirror(config.mirror_path) as mirror:
        if config.data_file.exists():
            return load_store(config.data_file, mirror=mirror)
        store = RecordStore(mirror=mirror)
        store.restore()
        return store


def build_engine(store: RecordStore, **overrides: Any) -> SearchEngine:
    return SearchEngine(store, SearchOptions.from_settings(settings, **overrides))


def page_count(total: int, page_size: int) -> int:
    return (total + page_size - 1) // page_size if total else 0


def format_contact(contact: Contact) -> str:
    parts = [contact.name or "-"]
    if contact.title:
        parts.append(f"({contact.title})")
    if contact.email:
        parts.append(f"<{contact.email}>")
    return " ".join(parts)


def format_row(record: Record, *, score: Optional[float] = None) -> str:
    line = f"{record.code}  {record.name}"
    if record.lifecycle:
        line += f"  [{record.lifecycle}]"
    if score is not None:
        line += f"  score={score:.3f}"
    return line
