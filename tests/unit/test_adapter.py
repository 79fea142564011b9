from sqlalchemy import Uuid

from src.db.adapter import DatabaseAdapter


def test_query_returns_rows_as_dicts(db_session, gallery, photos):
    adapter = DatabaseAdapter(db_session)

    rows = adapter.query(
        "SELECT filename FROM photos WHERE gallery_id = :gallery_id ORDER BY filename",
        {"gallery_id": gallery.id},
        types={"gallery_id": Uuid()},
    )

    assert rows == [{"filename": p.filename} for p in photos]


def test_get_returns_none_without_rows(db_session):
    adapter = DatabaseAdapter(db_session)

    assert adapter.get("SELECT id FROM galleries WHERE name = :name", {"name": "missing"}) is None


def test_run_reports_rowcount(db_session, gallery, photos):
    adapter = DatabaseAdapter(db_session)

    result = adapter.run(
        "UPDATE photos SET tags = :tags WHERE gallery_id = :gallery_id",
        {"tags": "[]", "gallery_id": gallery.id},
        types={"gallery_id": Uuid()},
    )
    db_session.commit()

    assert result.rowcount == 3


def test_exec_runs_every_statement(db_session):
    adapter = DatabaseAdapter(db_session)

    adapter.exec("CREATE TABLE scratch (n INTEGER); INSERT INTO scratch VALUES (1); INSERT INTO scratch VALUES (2);")

    assert adapter.get("SELECT COUNT(*) AS total FROM scratch") == {"total": 2}
