# Rev 0.1.0
from __future__ import annotations

import sqlite3
from typing import List, Optional

from todowbs.models.entities import DailyTodo, DailyTodoWithTask
from todowbs.repositories.db import Database
from todowbs.repositories.errors import StorageError
from todowbs.utils.logging_setup import get_logger


class SQLiteDailyTodoRepository:
    """
    Date-scoped todos. task_id is a weak link: when the task goes away
    SQLite sets it to NULL and the todo keeps its own title and memo.
    """

    def __init__(self, db: Database):
        self._db = db
        self._log = get_logger("daily_todos")

    # -------------------------
    # CRUD
    # -------------------------
    def create_daily_todo(
        self,
        task_id: Optional[str],
        title: str,
        date: str,
        memo: Optional[str] = None,
    ) -> DailyTodo:
        todo = DailyTodo(
            id=self._db.new_id(),
            task_id=task_id,
            title=title,
            date=date,
            completed=False,
            memo=memo,
            created_at=self._db.now(),
        )
        with self._db.transaction() as con:
            con.execute(
                """
                INSERT INTO daily_todos (id, task_id, title, date, completed, memo, created_at)
                VALUES (?, ?, ?, ?, 0, ?, ?)
                """,
                (todo.id, todo.task_id, todo.title, todo.date, todo.memo, todo.created_at),
            )
        self._log.debug("Created todo %s for %s", todo.id, date)
        return todo

    def list_todos_by_date(self, date: str) -> List[DailyTodoWithTask]:
        """
        Todos of one day joined with task title and project name.
        Incomplete first, then completed; oldest first within each.
        """
        with self._db.transaction() as con:
            rows = con.execute(
                """
                SELECT dt.id, dt.task_id, dt.title, dt.date, dt.completed, dt.memo,
                       dt.created_at, t.title AS task_title, p.name AS project_name
                FROM daily_todos dt
                LEFT JOIN tasks t ON dt.task_id = t.id
                LEFT JOIN projects p ON t.project_id = p.id
                WHERE dt.date = ?
                ORDER BY dt.completed, dt.created_at, dt.rowid
                """,
                (date,),
            ).fetchall()
        return [self._row_to_todo_with_task(r) for r in rows]

    def toggle_todo(self, todo_id: str) -> bool:
        with self._db.transaction() as con:
            row = con.execute(
                "SELECT completed FROM daily_todos WHERE id = ?", (todo_id,)
            ).fetchone()
            if row is None:
                raise StorageError(f"daily todo not found: {todo_id}")
            completed = not bool(row["completed"])
            con.execute(
                "UPDATE daily_todos SET completed = ? WHERE id = ?",
                (int(completed), todo_id),
            )
        return completed

    def update_todo_memo(self, todo_id: str, memo: Optional[str]) -> None:
        with self._db.transaction() as con:
            con.execute("UPDATE daily_todos SET memo = ? WHERE id = ?", (memo, todo_id))

    def delete_todo(self, todo_id: str) -> None:
        with self._db.transaction() as con:
            con.execute("DELETE FROM daily_todos WHERE id = ?", (todo_id,))

    def add_task_to_todo(self, task_id: str, date: str) -> DailyTodo:
        # Two lock acquisitions: the task may change or vanish in between.
        with self._db.transaction() as con:
            row = con.execute("SELECT title FROM tasks WHERE id = ?", (task_id,)).fetchone()
        if row is None:
            raise StorageError(f"task not found: {task_id}")
        return self.create_daily_todo(task_id, row["title"], date)

    @staticmethod
    def _row_to_todo_with_task(row: sqlite3.Row) -> DailyTodoWithTask:
        return DailyTodoWithTask(
            id=row["id"],
            task_id=row["task_id"],
            title=row["title"],
            date=row["date"],
            completed=bool(row["completed"]),
            memo=row["memo"],
            created_at=row["created_at"],
            task_title=row["task_title"],
            project_name=row["project_name"],
        )
