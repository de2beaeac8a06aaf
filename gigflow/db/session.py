from __future__ import annotations

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker

from gigflow.core.config import Settings


def _connect_args(settings: Settings) -> dict:
    url = make_url(settings.database_url)
    timeout = settings.store_timeout_seconds

    if url.get_backend_name() == "sqlite":
        return {"timeout": timeout, "check_same_thread": False}

    if url.get_backend_name() == "postgresql":
        ms = int(timeout * 1000)
        return {"options": f"-c lock_timeout={ms} -c statement_timeout={ms}"}

    return {}


def _install_sqlite_hooks(engine: Engine) -> None:
    """
    pysqlite defers BEGIN until the first write, so two hire attempts can
    both read an Open gig. Start every transaction with BEGIN IMMEDIATE
    so writers serialize on the database lock, and turn foreign keys on.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_conn, _record):
        dbapi_conn.isolation_level = None
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA foreign_keys=ON")
        cur.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(settings: Settings) -> Engine:
    engine = create_engine(
        settings.database_url,
        pool_pre_ping=True,
        future=True,
        connect_args=_connect_args(settings),
    )
    if engine.dialect.name == "sqlite":
        _install_sqlite_hooks(engine)
    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        future=True,
    )
