"""Dataset statistics command."""

from __future__ import annotations

from argparse import _SubParsersAction, Namespace
from collections import Counter

from ..config import RuntimeConfig
from ..services import open_store

__all__ = ["register", "run"]


def register(subparsers: _SubParsersAction) -> None:
    parser = subparsers.add_parser("stats", help="Show simple dataset statistics")
    parser.set_defaults(handler=run)


def run(_: Namespace, config: RuntimeConfig) -> None:
    store = open_store(config)
    records = store.get_all()
    lifecycles = Counter(r.lifecycle or "(blank)" for r in records)
    interfaces = Counter(r.user_interface or "(blank)" for r in records)

    print(f"Records: {len(records)}")
    if lifecycles:
        print("Lifecycle:")
        for name, count in sorted(lifecycles.items(), key=lambda item: item[1], reverse=True):
            print(f"- {name}: {count}")
    if interfaces:
        print("User Interface:")
        for name, count in sorted(interfaces.items(), key=lambda item: item[1], reverse=True):
            print(f"- {name}: {count}")
    print(f"Critical information assets: {sum(r.is_critical_information_asset for r in records)}")
    print(f"Security assessment required: {sum(r.requires_security_assessment for r in records)}")
