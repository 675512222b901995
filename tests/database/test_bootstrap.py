from src.personnel_hub.personnel_hub.database.bootstrap import SCHEMA_PATH, split_statements


def test_split_ignores_semicolons_inside_quotes():
    sql = "CREATE TABLE a (x VARCHAR(5) DEFAULT 'a;b');\nINSERT INTO a VALUES ('c');\n"
    assert list(split_statements(sql)) == [
        "CREATE TABLE a (x VARCHAR(5) DEFAULT 'a;b')",
        "INSERT INTO a VALUES ('c')",
    ]


def test_schema_file_declares_every_table():
    statements = list(split_statements(SCHEMA_PATH.read_text(encoding="utf-8")))
    created = " ".join(s for s in statements if "CREATE TABLE" in s.upper())
    for table in ("accounts", "businesses", "employees", "leaves", "advances", "timesheets", "payrolls", "salary_payments"):
        assert f"CREATE TABLE IF NOT EXISTS {table} (" in created
