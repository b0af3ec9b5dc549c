# Rev 0.1.0

"""SQLite connection & schema bootstrap (Rev 0.1.0)
- one connection per Database, guarded by a mutex
- WAL mode, foreign_keys=ON (cascades are enforced by SQLite)
- schema.sql is applied on every open; it only uses IF NOT EXISTS
"""
from __future__ import annotations
import sqlite3
import threading
import uuid
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterator, Optional

from todowbs.repositories.errors import StorageError
from todowbs.utils.logging_setup import get_logger

SCHEMA_SQL = Path(__file__).with_name("schema.sql")
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
MEMORY = ":memory:"


def _new_id() -> str:
    return str(uuid.uuid4())


class Database:
    def __init__(
        self,
        path: Path | str,
        *,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        self._log = get_logger("db")
        self._lock = threading.Lock()
        self._clock = clock or datetime.now
        self._id_factory = id_factory or _new_id
        self.path = path if str(path) == MEMORY else Path(path)
        try:
            if isinstance(self.path, Path):
                self.path.parent.mkdir(parents=True, exist_ok=True)
            self.conn = sqlite3.connect(str(self.path), isolation_level=None, check_same_thread=False)
        except (OSError, sqlite3.Error) as exc:
            raise StorageError(f"could not open database at {self.path}: {exc}") from exc
        try:
            self.conn.row_factory = sqlite3.Row
            self.conn.execute("PRAGMA journal_mode=WAL;")
            self.conn.execute("PRAGMA foreign_keys=ON;")
            self._log.info("SQLite open %s", self.path)
            self.init_schema()
        except sqlite3.Error as exc:
            self.conn.close()
            raise StorageError(f"could not open database at {self.path}: {exc}") from exc
        except StorageError:
            self.conn.close()
            raise

    def init_schema(self) -> None:
        sql = SCHEMA_SQL.read_text(encoding="utf-8")
        with self._lock:
            try:
                self.conn.executescript(sql)
            except sqlite3.Error as exc:
                raise StorageError(f"schema initialization failed: {exc}") from exc
        self._log.info("Schema ready on %s", self.path)

    def close(self) -> None:
        with self._lock:
            try:
                self.conn.close()
            except sqlite3.Error:
                self._log.warning("Error while closing %s", self.path, exc_info=True)
        self._log.info("SQLite closed %s", self.path)

    # Stamps and ids
    def now(self) -> str:
        return self._clock().strftime(TIMESTAMP_FORMAT)

    def new_id(self) -> str:
        return self._id_factory()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Hold the lock for one BEGIN..COMMIT unit.

        Any sqlite3.Error inside the block rolls back and surfaces as
        StorageError; other exceptions roll back and propagate unchanged.
        """
        with self._lock:
            con = self.conn
            try:
                con.execute("BEGIN")
            except sqlite3.Error as exc:
                raise StorageError(str(exc)) from exc
            try:
                yield con
            except sqlite3.Error as exc:
                self._rollback(con)
                raise StorageError(str(exc)) from exc
            except BaseException:
                self._rollback(con)
                raise
            try:
                con.execute("COMMIT")
            except sqlite3.Error as exc:
                self._rollback(con)
                raise StorageError(str(exc)) from exc

    def _rollback(self, con: sqlite3.Connection) -> None:
        # the error that triggered the rollback is the one reported
        try:
            if con.in_transaction:
                con.execute("ROLLBACK")
        except sqlite3.Error:
            self._log.warning("ROLLBACK failed on %s", self.path, exc_info=True)
