"""CSV and spreadsheet to JSON record-sequence converters.

Both converters validate the input path before touching the destination, so a
rejected input never leaves a partial output file behind.
"""

from __future__ import annotations

import argparse
import csv
import datetime as dt
import json
import logging
import sys
import zipfile
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from .errors import ConversionFailure

__all__ = [
    "CSV_EXTENSIONS",
    "XLSX_EXTENSIONS",
    "ConversionResult",
    "check_input",
    "convert_csv",
    "convert_xlsx",
    "csv_main",
    "read_csv_rows",
    "read_xlsx_rows",
    "report",
    "write_json",
    "xlsx_main",
]

logger = logging.getLogger(__name__)

CSV_EXTENSIONS: Tuple[str, ...] = (".csv",)
XLSX_EXTENSIONS: Tuple[str, ...] = (".xlsx", ".xlsm")


@dataclass
class ConversionResult:
    source: Path
    destination: Path
    count: int
    sheet: Optional[str] = None


def check_input(path: Path | str, extensions: Sequence[str], kind: str) -> Path:
    """Return *path* as a :class:`Path` once it exists and has a known suffix."""

    source = Path(path)
    if not source.is_file():
        raise ConversionFailure(f'Input file "{source}" does not exist.')
    if source.suffix.lower() not in extensions:
        raise ConversionFailure(
            f'Input file "{source}" is not a {kind} file. '
            f"Valid extensions: {', '.join(extensions)}"
        )
    return source


def read_csv_rows(path: Path) -> List[Dict[str, str]]:
    """Read *path* into row objects keyed by the header row."""

    rows: List[Dict[str, str]] = []
    try:
        with path.open("r", encoding="utf-8-sig", newline="") as handle:
            reader = csv.DictReader(handle)
            for row in reader:
                rows.append({key: value or "" for key, value in row.items() if key is not None})
    except (csv.Error, UnicodeDecodeError) as exc:
        raise ConversionFailure(f"Error parsing CSV: {exc}") from exc
    except OSError as exc:
        raise ConversionFailure(f"Error reading CSV: {exc}") from exc
    return rows


def _header_keys(cells: Sequence[Any]) -> List[str]:
    keys: List[str] = []
    seen: Dict[str, int] = {}
    for cell in cells:
        base = str(cell).strip() if cell not in (None, "") else "__EMPTY"
        count = seen.get(base, 0)
        seen[base] = count + 1
        keys.append(base if count == 0 else f"{base}_{count}")
    return keys


def _json_value(value: Any) -> Any:
    if isinstance(value, (dt.datetime, dt.date, dt.time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    return value


def read_xlsx_rows(path: Path) -> Tuple[str, List[Dict[str, Any]]]:
    """Read the first worksheet of *path*; returns the sheet name and rows.

    Blank rows are skipped and blank cells are left out of the row object.
    """

    try:
        workbook = load_workbook(path, read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as exc:
        raise ConversionFailure(f"Error processing Excel file: {exc}") from exc

    try:
        sheet = workbook.worksheets[0]
        values = sheet.iter_rows(values_only=True)
        header = next(values, None)
        if header is None:
            return sheet.title, []
        keys = _header_keys(header)
        rows: List[Dict[str, Any]] = []
        for cells in values:
            row = {
                key: _json_value(cell)
                for key, cell in zip(keys, cells)
                if cell is not None and cell != ""
            }
            if row:
                rows.append(row)
        return sheet.title, rows
    finally:
        workbook.close()


def write_json(rows: List[Dict[str, Any]], destination: Path | str) -> Path:
    target = Path(destination)
    try:
        target.write_text(json.dumps(rows, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError) as exc:
        raise ConversionFailure(f"Error writing JSON file: {exc}") from exc
    return target


def convert_csv(source: Path | str, destination: Path | str) -> ConversionResult:
    src = check_input(source, CSV_EXTENSIONS, "CSV")
    rows = read_csv_rows(src)
    dst = write_json(rows, destination)
    logger.debug("Converted %s -> %s (%d rows)", src, dst, len(rows))
    return ConversionResult(source=src, destination=dst, count=len(rows))


def convert_xlsx(source: Path | str, destination: Path | str) -> ConversionResult:
    src = check_input(source, XLSX_EXTENSIONS, "Excel")
    sheet, rows = read_xlsx_rows(src)
    dst = write_json(rows, destination)
    logger.debug("Converted %s [%s] -> %s (%d rows)", src, sheet, dst, len(rows))
    return ConversionResult(source=src, destination=dst, count=len(rows), sheet=sheet)


def report(result: ConversionResult) -> None:
    print(f"Successfully converted {result.source} to {result.destination}")
    if result.sheet is not None:
        print(f"Sheet used: {result.sheet}")
    print(f"Total records: {result.count}")


def _build_parser(prog: str, kind: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog, description=f"Convert a {kind} file to a JSON record list.")
    parser.add_argument("input", help=f"Path to the {kind} file")
    parser.add_argument("output", help="Path of the JSON file to write")
    return parser


def _run(argv: Optional[Sequence[str]], prog: str, kind: str, convert) -> int:
    args = _build_parser(prog, kind).parse_args(argv)
    try:
        result = convert(args.input, args.output)
    except ConversionFailure as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    report(result)
    return 0


def csv_main(argv: Optional[Sequence[str]] = None) -> int:
    return _run(argv, "apm-csv-to-json", "CSV", convert_csv)


def xlsx_main(argv: Optional[Sequence[str]] = None) -> int:
    return _run(argv, "apm-xlsx-to-json", "Excel", convert_xlsx)
