# Rev 0.1.0

"""Pytest fixtures for todowbs (Rev 0.1.0)"""
from __future__ import annotations
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from todowbs.repositories.db import Database
from todowbs.repositories.sqlite_daily_todo_repository import SQLiteDailyTodoRepository
from todowbs.repositories.sqlite_project_repository import SQLiteProjectRepository
from todowbs.repositories.sqlite_task_repository import SQLiteTaskRepository
from todowbs.services.report_service import ReportService


class FakeClock:
    """Deterministic clock: each call returns the current value, then moves by `step`."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 8, 0, 0), step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current += self.step
        return value

    def set(self, value: datetime) -> None:
        self.current = value


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "test.db"


@pytest.fixture()
def db(db_path: Path, clock: FakeClock):
    database = Database(db_path, clock=clock)
    try:
        yield database
    finally:
        database.close()


@pytest.fixture()
def projects(db: Database) -> SQLiteProjectRepository:
    return SQLiteProjectRepository(db)


@pytest.fixture()
def tasks(db: Database) -> SQLiteTaskRepository:
    return SQLiteTaskRepository(db)


@pytest.fixture()
def todos(db: Database) -> SQLiteDailyTodoRepository:
    return SQLiteDailyTodoRepository(db)


@pytest.fixture()
def reports(todos: SQLiteDailyTodoRepository) -> ReportService:
    return ReportService(todos)


def snapshot(db: Database) -> dict:
    """Full dump of the three tables, for before/after comparisons."""
    out = {}
    for table in ("projects", "tasks", "daily_todos"):
        rows = db.conn.execute(f"SELECT * FROM {table} ORDER BY id").fetchall()
        out[table] = [tuple(r) for r in rows]
    return out
