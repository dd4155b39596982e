"""Persistent mirror command."""

from __future__ import annotations

from argparse import _SubParsersAction, Namespace

from packages.apm_tools.dataset import load_store
from packages.apm_tools.errors import LoadFailure
from packages.apm_tools.mirror import RecordMirror

from ..config import RuntimeConfig

__all__ = ["register", "run"]


def register(subparsers: _SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "mirror-load", help="Rewrite the DuckDB mirror from the dataset file"
    )
    parser.set_defaults(handler=run)


def run(_: Namespace, config: RuntimeConfig) -> None:
    if config.mirror_path is None:
        raise LoadFailure("No mirror configured; pass --mirror or set APM_MIRROR_PATH")
    with RecordMirror(config.mirror_path) as mirror:
        store = load_store(config.data_file, mirror=mirror)
        print(f"Mirrored {len(store)} applications into {config.mirror_path}")
