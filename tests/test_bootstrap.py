from timeclock.database.bootstrap import SCHEMA_SQL, _iter_sql_statements


def test_splitter_keeps_semicolons_inside_quotes():
    sql = "INSERT INTO t VALUES ('a;b');\nINSERT INTO t VALUES (\"c;d\");\nSELECT 1"

    assert list(_iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("c;d")',
        "SELECT 1",
    ]


def test_embedded_schema_creates_both_tables():
    statements = list(_iter_sql_statements(SCHEMA_SQL))

    assert len(statements) == 2
    assert "CREATE TABLE IF NOT EXISTS users" in statements[0]
    assert "CREATE TABLE IF NOT EXISTS attendance_events" in statements[1]
