"""Convert a CSV export into the JSON record list read by the directory.

Usage: python scripts/csv_to_json.py <input-csv-file> <output-json-file>
"""

from __future__ import annotations

from packages.apm_tools.convert import csv_main

main = csv_main


if __name__ == "__main__":
    raise SystemExit(main())
