"""
Database handle: one SQLite file, one shared connection, one lock
"""
import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


def _make_engine(database_path: Path) -> Engine:
    engine = create_engine(
        f"sqlite:///{database_path}",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        # SQLAlchemy emits BEGIN itself (see do_begin) so SAVEPOINTs work
        dbapi_conn.isolation_level = None
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


class Database:
    """
    Owns the engine and the connection lock

    At most one database operation runs at a time: every session_scope()
    holds the lock from first statement to commit/rollback.
    """

    def __init__(self, database_path: Union[str, Path]):
        self.path = Path(database_path)
        self._lock = threading.RLock()
        self.engine = _make_engine(self.path)
        self._session_factory = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Run one unit of work under the connection lock"""
        with self._lock:
            db = self._session_factory()
            try:
                yield db
                db.commit()
            except Exception:
                db.rollback()
                raise
            finally:
                db.close()

    @contextmanager
    def begin(self) -> Iterator[Connection]:
        """Core-level connection in a transaction, under the connection lock"""
        with self._lock, self.engine.begin() as conn:
            yield conn

    @contextmanager
    def exclusive(self) -> Iterator[Path]:
        """
        Hold the connection lock across a file-level operation on the database file

        The engine is disposed before yielding so no connection has the file
        open during the copy; the next session_scope() reconnects, which picks
        up a replaced file.
        """
        with self._lock:
            self.engine.dispose()
            try:
                yield self.path
            finally:
                self.engine.dispose()

    def dispose(self) -> None:
        with self._lock:
            self.engine.dispose()
