"""
Tests de la construction de l'engine et de l'initialisation des tables.
"""

from sqlalchemy import inspect, text

from vitrine.infrastructure.persistence.database import build_engine, get_session, init_db


class TestDatabase:
    def test_init_db_creates_tables(self):
        engine = build_engine("sqlite://")
        init_db(engine)

        tables = set(inspect(engine).get_table_names())
        assert {"taxonomies", "videos", "video_taxonomies", "quote_requests"} <= tables

    def test_memory_database_shared_between_sessions(self):
        engine = build_engine("sqlite:///:memory:")
        init_db(engine)

        first = next(get_session(engine))
        first.execute(text("INSERT INTO taxonomies (kind, label) VALUES ('type', 'Corpo')"))
        first.commit()

        second = next(get_session(engine))
        assert second.execute(text("SELECT label FROM taxonomies")).all() == [("Corpo",)]

    def test_foreign_keys_enabled(self):
        engine = build_engine("sqlite://")
        with engine.connect() as connection:
            assert connection.execute(text("PRAGMA foreign_keys")).scalar() == 1

    def test_file_database_creates_parent_directory(self, tmp_path):
        db_path = tmp_path / "data" / "vitrine.db"
        engine = build_engine(f"sqlite:///{db_path}")
        init_db(engine)

        assert db_path.exists()
