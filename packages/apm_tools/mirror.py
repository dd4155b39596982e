from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import duckdb

from packages.apm_schemas import Record

from .errors import LoadFailure

__all__ = ["RecordMirror"]

logger = logging.getLogger(__name__)

_TABLE = "applications"


class RecordMirror:
    """DuckDB-backed copy of the record collection keyed by application code.

    The mirror is always rewritten as a whole: :meth:`replace_all` drops and
    recreates the table inside one transaction, so a failed rewrite leaves the
    previous contents in place.
    """

    def __init__(self, db_path: Path | str = Path("data/applications.duckdb")) -> None:
        self.db_path = db_path if str(db_path) == ":memory:" else Path(db_path)
        self._con: Optional[duckdb.DuckDBPyConnection] = None

    def __enter__(self) -> "RecordMirror":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _get_con(self) -> duckdb.DuckDBPyConnection:
        if self._con is None:
            if isinstance(self.db_path, Path):
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            try:
                self._con = duckdb.connect(str(self.db_path))
            except duckdb.Error as exc:
                raise LoadFailure(f"Cannot open mirror {self.db_path}: {exc}") from exc
        return self._con

    @property
    def is_open(self) -> bool:
        return self._con is not None

    def close(self) -> None:
        if self._con is not None:
            self._con.close()
            self._con = None

    def _has_table(self, con: duckdb.DuckDBPyConnection) -> bool:
        row = con.execute(
            "SELECT count(*) FROM information_schema.tables WHERE table_name = ?",
            [_TABLE],
        ).fetchone()
        return bool(row and row[0])

    def replace_all(self, records: Iterable[Record]) -> int:
        """Clear the mirror and insert *records* in order."""

        con = self._get_con()
        rows = [
            (record.code, seq, json.dumps(record.to_source(), ensure_ascii=False))
            for seq, record in enumerate(records)
        ]
        con.begin()
        try:
            con.execute(f"DROP TABLE IF EXISTS {_TABLE}")
            con.execute(
                f"""
                CREATE TABLE {_TABLE} (
                    code    VARCHAR PRIMARY KEY,
                    seq     INTEGER NOT NULL,
                    payload VARCHAR NOT NULL
                )
                """
            )
            if rows:
                con.executemany(f"INSERT INTO {_TABLE} VALUES (?, ?, ?)", rows)
            con.commit()
        except duckdb.Error as exc:
            con.rollback()
            raise LoadFailure(f"Mirror rewrite failed: {exc}") from exc
        logger.debug("Mirrored %d records into %s", len(rows), self.db_path)
        return len(rows)

    def fetch_all(self) -> List[Dict[str, Any]]:
        """Return every mirrored row in insertion order."""

        con = self._get_con()
        try:
            if not self._has_table(con):
                raise LoadFailure(f"Mirror {self.db_path} has not been populated")
            rows = con.execute(f"SELECT payload FROM {_TABLE} ORDER BY seq").fetchall()
        except duckdb.Error as exc:
            raise LoadFailure(f"Mirror read failed: {exc}") from exc
        return [json.loads(payload) for (payload,) in rows]

    def get(self, code: str) -> Optional[Dict[str, Any]]:
        con = self._get_con()
        if not self._has_table(con):
            return None
        row = con.execute(f"SELECT payload FROM {_TABLE} WHERE code = ?", [code]).fetchone()
        return json.loads(row[0]) if row else None

    def count(self) -> int:
        con = self._get_con()
        if not self._has_table(con):
            return 0
        row = con.execute(f"SELECT count(*) FROM {_TABLE}").fetchone()
        return int(row[0]) if row else 0
