from __future__ import annotations

import threading
from contextlib import contextmanager, nullcontext
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .settings import settings


class Base(DeclarativeBase):
    pass


_engine = None
_SessionLocal = None
# Set for in-memory SQLite, where every session shares one connection
_session_guard: threading.Lock | None = None


def _is_memory_sqlite(url: str) -> bool:
    return url.startswith("sqlite") and (":memory:" in url or url.rstrip("/").endswith("sqlite:"))


def init_engine(database_url: str | None = None):
    global _engine, _SessionLocal, _session_guard
    url = database_url or settings.database_url
    if _is_memory_sqlite(url):
        # One shared connection, otherwise every session sees an empty database
        _engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        _session_guard = threading.Lock()
    elif url.startswith("sqlite"):
        _engine = create_engine(url, connect_args={"check_same_thread": False})
        _session_guard = None
    else:
        _engine = create_engine(url, pool_pre_ping=True)
        _session_guard = None
    _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)
    return _engine


def get_engine():
    global _engine
    if _engine is None:
        init_engine()
    return _engine


def SessionLocal():
    global _SessionLocal
    if _SessionLocal is None:
        init_engine()
    return _SessionLocal


def init_db() -> None:
    """Create all tables on the configured engine."""
    from . import models  # noqa: F401  (registers mappers)

    Base.metadata.create_all(bind=get_engine())


def get_db():
    factory = SessionLocal()
    # One request at a time on a shared connection, otherwise a rollback in
    # one request discards rows another request has flushed
    with _session_guard or nullcontext():
        db = factory()
        try:
            yield db
        finally:
            db.close()


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """Commit the session when the block succeeds, roll back on any error."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
