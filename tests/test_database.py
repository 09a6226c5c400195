from sqlalchemy.orm import Session

from app.core.database import _connect_args, engine, get_db


def test_sqlite_urls_allow_cross_thread_use():
    assert _connect_args("sqlite://") == {"check_same_thread": False}
    assert _connect_args("postgresql://concursos@db:5432/concursos_ganaderos") == {}
    assert engine.url.get_backend_name() == "sqlite"


def test_get_db_closes_the_session():
    sessions = get_db()
    db = next(sessions)
    assert isinstance(db, Session)
    db.connection()
    assert db.in_transaction()

    sessions.close()
    assert not db.in_transaction()
