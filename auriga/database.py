"""The project database: connection ownership, metadata and table browsing."""

from __future__ import annotations

import math
import os
import sqlite3
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from auriga import schema
from auriga.traces import TraceOperations

_MAX_TEXT_CHARS = 60
_TRUNCATED_CHARS = 57


def quote_identifier(name: str) -> str:
    """Quote an SQLite identifier, doubling any embedded double quotes."""
    return '"' + name.replace('"', '""') + '"'


@dataclass
class TableInfo:
    name: str
    row_count: int


@dataclass
class DbMetadata:
    file_size_bytes: int
    tables: list[TableInfo] = field(default_factory=list)
    total_rows: int = 0


@dataclass
class QueryResult:
    """A page of a table, every value rendered as display text."""

    columns: list[str]
    rows: list[list[str]]
    total_rows: int


def _decode_text(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def _connect(target: str | os.PathLike[str]) -> sqlite3.Connection:
    # The connection may be handed to the storage thread after opening.
    conn = sqlite3.connect(target, check_same_thread=False)
    conn.text_factory = _decode_text
    return conn


class Database(TraceOperations):
    """The project database; opening it creates or migrates the schema."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        schema.init(conn)
        super().__init__(conn)

    @classmethod
    def open(cls, path: str | os.PathLike[str]) -> Database:
        """Open or create the database file at path."""
        return cls._from_connection(_connect(os.fspath(path)))

    @classmethod
    def open_in_memory(cls) -> Database:
        return cls._from_connection(_connect(":memory:"))

    @classmethod
    def _from_connection(cls, conn: sqlite3.Connection) -> Database:
        try:
            return cls(conn)
        except BaseException:
            conn.close()
            raise

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> Database:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def metadata(self, db_path: str | os.PathLike[str]) -> DbMetadata:
        """File size of db_path (0 if unreadable) and the row count of every table."""
        try:
            file_size = os.stat(db_path).st_size
        except OSError:
            file_size = 0

        names = [
            row[0]
            for row in self.conn.execute(
                "SELECT name FROM sqlite_master "
                "WHERE type='table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
            )
        ]
        tables = [TableInfo(name, self._count_rows(name)) for name in names]
        return DbMetadata(
            file_size_bytes=file_size,
            tables=tables,
            total_rows=sum(table.row_count for table in tables),
        )

    def query_table(self, table: str, limit: int, offset: int) -> QueryResult:
        """A page of rows from table; raises LookupError if the table does not exist."""
        if limit < 0 or offset < 0:
            raise ValueError(f"limit and offset must not be negative: {limit}, {offset}")
        (exists,) = self.conn.execute(
            "SELECT COUNT(*) > 0 FROM sqlite_master WHERE type='table' AND name = ?",
            (table,),
        ).fetchone()
        if not exists:
            raise LookupError(f"table '{table}' not found")

        total_rows = self._count_rows(table)
        cursor = self.conn.execute(
            f"SELECT * FROM {quote_identifier(table)} LIMIT ? OFFSET ?", (limit, offset)
        )
        columns = [description[0] for description in cursor.description]
        rows = [[_cell_text(value) for value in row] for row in cursor]
        return QueryResult(columns=columns, rows=rows, total_rows=total_rows)

    def _count_rows(self, table: str) -> int:
        (count,) = self.conn.execute(
            f"SELECT COUNT(*) FROM {quote_identifier(table)}"
        ).fetchone()
        return count


def _cell_text(value: Any) -> str:
    if value is None:
        return "NULL"
    if isinstance(value, bytes):
        return f"<blob {len(value)} bytes>"
    if isinstance(value, float):
        return _real_text(value)
    if isinstance(value, int):
        return str(value)
    text = str(value)
    if len(text) > _MAX_TEXT_CHARS:
        return text[:_TRUNCATED_CHARS] + "..."
    return text


def _real_text(value: float) -> str:
    """Shortest plain decimal form, without exponent or a trailing '.0'."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        if value == 0 and math.copysign(1.0, value) < 0:
            return "-0"
        return str(int(value))
    return format(Decimal(repr(value)), "f")