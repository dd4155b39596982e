"""Single application lookup command."""

from __future__ import annotations

from argparse import _SubParsersAction, Namespace

from ..config import RuntimeConfig
from ..services import format_contact, open_store

__all__ = ["register", "run"]


def register(subparsers: _SubParsersAction) -> None:
    parser = subparsers.add_parser("show", help="Show one application by APM code")
    parser.add_argument("code", help="APM application code")
    parser.set_defaults(handler=run)


def run(args: Namespace, config: RuntimeConfig) -> None:
    store = open_store(config)
    record = store.get_by_key(args.code)
    if record is None:
        print(f"No application with code {args.code}")
        return

    print(f"Code: {record.code}")
    print(f"Name: {record.name}")
    print(f"Lifecycle: {record.lifecycle}")
    print(f"Critical information asset: {record.critical_information_asset}")
    print(f"Security release assessment: {record.security_assessment_required}")
    print(f"User interface: {record.user_interface}")
    print(f"Application contact: {format_contact(record.owner)}")
    print(f"IT manager: {format_contact(record.it_manager)}")
    print(f"IT VP: {format_contact(record.it_vp)}")
    if record.description:
        print("")
        print("Description:")
        print(record.description)
