"""Convert the first sheet of an Excel workbook into the JSON record list.

Usage: python scripts/xlsx_to_json.py <input-xlsx-file> <output-json-file>
"""

from __future__ import annotations

from packages.apm_tools.convert import xlsx_main

main = xlsx_main


if __name__ == "__main__":
    raise SystemExit(main())
