import sqlite3
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker

from .. import config


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE clauses unless this is set per connection
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def engine_options(database_url: str, sslmode: Optional[str] = None, **kwargs) -> dict:
    """Keyword arguments for ``create_engine`` suited to the database backend."""
    if make_url(database_url).get_backend_name() == "sqlite":
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    else:
        kwargs.setdefault("pool_pre_ping", True)
        # an explicit ?sslmode= in the URL wins over the configured default
        if sslmode and "sslmode" not in make_url(database_url).query:
            kwargs.setdefault("connect_args", {"sslmode": sslmode})
    return kwargs


def make_engine(database_url: str, sslmode: Optional[str] = None, **kwargs) -> Engine:
    return create_engine(database_url, **engine_options(database_url, sslmode, **kwargs))


engine = make_engine(config.DATABASE_URL, sslmode=config.DATABASE_SSLMODE)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
