from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..config import Settings


def _is_memory_sqlite(url: str) -> bool:
    return url.startswith("sqlite") and (":memory:" in url or url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:"))


def make_engine(database_url: Optional[str] = None, echo: bool = False) -> Engine:
    url = database_url or Settings.from_env().database_url
    kwargs = {}
    if _is_memory_sqlite(url):
        # A single shared connection, otherwise each checkout gets an empty database.
        kwargs = {
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    engine = create_engine(url, echo=echo, future=True, **kwargs)
    if url.startswith("sqlite"):
        from sqlalchemy import event

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def get_sessionmaker(engine: Engine) -> sessionmaker:
    return sessionmaker(
        bind=engine,
        expire_on_commit=False,  # rows stay readable after commit
        future=True,
    )


def open_session(database_url: Optional[str] = None, echo: bool = False) -> Session:
    """Create the schema on a fresh engine and return a session bound to it.

    The caller owns the session; closing it does not dispose the engine, use
    ``session.get_bind().dispose()`` for that.
    """
    from ..models import Base

    engine = make_engine(database_url, echo=echo)
    Base.metadata.create_all(engine)
    return get_sessionmaker(engine)()
