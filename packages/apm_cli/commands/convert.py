"""Dataset conversion commands."""

from __future__ import annotations

from argparse import _SubParsersAction, Namespace

from packages.apm_tools.convert import convert_csv, convert_xlsx, report

from ..config import RuntimeConfig

__all__ = ["register"]


def register(subparsers: _SubParsersAction) -> None:
    csv_parser = subparsers.add_parser("csv-to-json", help="Convert a CSV export to JSON")
    csv_parser.add_argument("input", help="Path to the CSV file")
    csv_parser.add_argument("output", help="Path of the JSON file to write")
    csv_parser.set_defaults(handler=_cmd_csv_to_json)

    xlsx_parser = subparsers.add_parser("xlsx-to-json", help="Convert an Excel workbook to JSON")
    xlsx_parser.add_argument("input", help="Path to the .xlsx/.xlsm file")
    xlsx_parser.add_argument("output", help="Path of the JSON file to write")
    xlsx_parser.set_defaults(handler=_cmd_xlsx_to_json)


def _cmd_csv_to_json(args: Namespace, _: RuntimeConfig) -> None:
    report(convert_csv(args.input, args.output))


def _cmd_xlsx_to_json(args: Namespace, _: RuntimeConfig) -> None:
    report(convert_xlsx(args.input, args.output))
