import sqlite3

import pytest

from auriga.agent import AgentId
from auriga.database import Database, quote_identifier
from auriga.trace import Trace, TraceId, TraceStatus
from auriga.turn import TokenUsage

INSERT_TRACES = """
INSERT INTO traces (id, agent_id, session_id, status, started_at, turn_count, input_tokens, output_tokens, provider)
VALUES ('t1', 'a1', 's1', 'Complete', '2026-01-01', 2, 100, 50, 'claude');
INSERT INTO traces (id, agent_id, session_id, status, started_at, turn_count, input_tokens, output_tokens, provider)
VALUES ('t2', 'a1', 's2', 'Active', '2026-01-02', 1, 200, 80, 'claude');
"""


@pytest.fixture
def empty_db():
    database = Database.open_in_memory()
    yield database
    database.close()


@pytest.fixture
def db(empty_db):
    empty_db.conn.executescript(INSERT_TRACES)
    return empty_db


def _sample_trace():
    return Trace(
        id=TraceId.from_u128(7),
        agent_id=AgentId.from_u128(1),
        session_id="sess-1",
        status=TraceStatus.COMPLETE,
        started_at="2026-03-01T10:00:00Z",
        completed_at=None,
        turn_count=3,
        token_usage=TokenUsage(
            input_tokens=10,
            output_tokens=5,
            cache_creation_input_tokens=None,
            cache_read_input_tokens=None,
        ),
        provider="claude",
        model=None,
    )


def test_open_in_memory_creates_tables(empty_db):
    (count,) = empty_db.conn.execute(
        "SELECT COUNT(*) FROM sqlite_master WHERE type='table'"
    ).fetchone()
    assert count >= 3


def test_quote_identifier_wraps_in_double_quotes():
    assert quote_identifier("traces") == '"traces"'


def test_quote_identifier_escapes_embedded_double_quotes():
    assert quote_identifier('has"quote') == '"has""quote"'


def test_metadata_lists_tables(db, tmp_path):
    meta = db.metadata(tmp_path / "nonexistent.db")
    assert meta.file_size_bytes == 0
    assert len(meta.tables) >= 3
    assert meta.total_rows >= 2


def test_metadata_counts_rows(db, tmp_path):
    meta = db.metadata(tmp_path / "nonexistent.db")
    traces = next(table for table in meta.tables if table.name == "traces")
    assert traces.row_count == 2


def test_metadata_includes_core_tables_sorted(empty_db, tmp_path):
    meta = empty_db.metadata(tmp_path / "dummy")
    names = [table.name for table in meta.tables]
    assert "traces" in names
    assert "turns" in names
    assert "schema_version" in names
    assert names == sorted(names)
    assert meta.total_rows == sum(table.row_count for table in meta.tables)


def test_metadata_reports_file_size(tmp_path):
    path = tmp_path / "project.db"
    with Database.open(path) as database:
        meta = database.metadata(path)
        assert meta.file_size_bytes == path.stat().st_size
        assert meta.file_size_bytes > 0


def test_query_table_returns_columns_and_rows(db):
    result = db.query_table("traces", 10, 0)
    assert "id" in result.columns
    assert "status" in result.columns
    assert len(result.rows) == 2
    assert result.total_rows == 2


def test_query_table_pagination(db):
    page1 = db.query_table("traces", 1, 0)
    assert len(page1.rows) == 1
    assert page1.total_rows == 2
    page2 = db.query_table("traces", 1, 1)
    assert len(page2.rows) == 1
    assert page1.rows[0] != page2.rows[0]


def test_query_table_offset_past_end(db):
    result = db.query_table("traces", 10, 100)
    assert result.rows == []
    assert result.total_rows == 2


def test_query_table_nonexistent_fails(db):
    with pytest.raises(LookupError, match="not found"):
        db.query_table("nonexistent", 10, 0)


def test_query_table_rejects_negative_limit(db):
    with pytest.raises(ValueError):
        db.query_table("traces", -1, 0)


def test_query_table_handles_null_values(db):
    result = db.query_table("traces", 10, 0)
    model_idx = result.columns.index("model")
    assert result.rows[0][model_idx] == "NULL"


def test_query_table_truncates_long_text(empty_db):
    empty_db.conn.executescript(
        f"CREATE TABLE test_long (data TEXT); INSERT INTO test_long VALUES ('{'x' * 100}');"
    )
    result = empty_db.query_table("test_long", 10, 0)
    value = result.rows[0][0]
    assert len(value) <= 60
    assert value.endswith("...")
    assert value == "x" * 57 + "..."


def test_query_table_keeps_text_of_sixty_chars(empty_db):
    empty_db.conn.executescript(
        f"CREATE TABLE t (data TEXT); INSERT INTO t VALUES ('{'y' * 60}');"
    )
    assert empty_db.query_table("t", 10, 0).rows[0][0] == "y" * 60


def test_query_table_truncates_by_characters(empty_db):
    empty_db.conn.execute("CREATE TABLE t (data TEXT)")
    empty_db.conn.execute("INSERT INTO t VALUES (?)", ("é" * 61,))
    empty_db.conn.commit()
    assert empty_db.query_table("t", 10, 0).rows[0][0] == "é" * 57 + "..."


def test_query_table_formats_numbers_and_blobs(empty_db):
    empty_db.conn.executescript(
        "CREATE TABLE nums (i INTEGER, r REAL, b BLOB);"
        "INSERT INTO nums VALUES (42, 1.0, x'010203');"
        "INSERT INTO nums VALUES (-7, 0.5, NULL);"
    )
    result = empty_db.query_table("nums", 10, 0)
    assert result.columns == ["i", "r", "b"]
    assert result.rows == [["42", "1", "<blob 3 bytes>"], ["-7", "0.5", "NULL"]]


def test_query_table_with_quote_in_name(empty_db):
    empty_db.conn.executescript(
        'CREATE TABLE "has""quote" (v TEXT); INSERT INTO "has""quote" VALUES (\'a\');'
    )
    result = empty_db.query_table('has"quote', 10, 0)
    assert result.rows == [["a"]]
    assert result.total_rows == 1


def test_query_empty_traces_table(empty_db):
    result = empty_db.query_table("traces", 10, 0)
    assert "id" in result.columns
    assert result.rows == []
    assert result.total_rows == 0


def test_query_empty_table_pagination(empty_db):
    assert empty_db.query_table("traces", 5, 0).total_rows == 0
    assert empty_db.query_table("traces", 5, 5).total_rows == 0


def test_schema_version_table_holds_one_row(empty_db, tmp_path):
    meta = empty_db.metadata(tmp_path / "dummy")
    version = next(table for table in meta.tables if table.name == "schema_version")
    assert version.row_count == 1


def test_database_saves_and_loads_traces(empty_db):
    trace = _sample_trace()
    empty_db.save_trace(trace, [])
    loaded = empty_db.load_trace(trace.id)
    assert loaded.id == trace.id
    assert loaded.turn_count == 3
    assert empty_db.query_table("traces", 10, 0).total_rows == 1


def test_reopening_file_keeps_data(tmp_path):
    path = tmp_path / "project.db"
    trace = _sample_trace()
    with Database.open(path) as database:
        database.save_trace(trace, [])
    with Database.open(path) as database:
        assert database.load_trace(trace.id).session_id == "sess-1"


def test_closed_database_rejects_queries(tmp_path):
    with Database.open(tmp_path / "project.db") as database:
        pass
    with pytest.raises(sqlite3.ProgrammingError):
        database.query_table("traces", 10, 0)