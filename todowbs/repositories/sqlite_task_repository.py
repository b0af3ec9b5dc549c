# Rev 0.1.0
from __future__ import annotations

import sqlite3
from typing import List, Optional

from todowbs.models.entities import Task
from todowbs.models.types import DEFAULT_PRIORITY, DEFAULT_TASK_STATUS
from todowbs.repositories.db import Database
from todowbs.utils.logging_setup import get_logger

_COLUMNS = (
    "id, project_id, parent_id, title, description, status, priority, "
    "start_date, end_date, progress, order_index, created_at"
)


class SQLiteTaskRepository:
    """
    Task CRUD + per-project flat listing.
    order_index is allocated per sibling group (project_id, parent_id);
    a NULL parent is its own group.
    """

    def __init__(self, db: Database):
        self._db = db
        self._log = get_logger("tasks")

    # -------------------------
    # CRUD
    # -------------------------
    def create_task(
        self,
        project_id: str,
        parent_id: Optional[str],
        title: str,
        description: Optional[str] = None,
        status: str = DEFAULT_TASK_STATUS,
        priority: int = DEFAULT_PRIORITY,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> Task:
        task_id = self._db.new_id()
        created_at = self._db.now()

        # next index and insert share one lock + transaction
        with self._db.transaction() as con:
            row = con.execute(
                """
                SELECT COALESCE(MAX(order_index), -1) + 1
                FROM tasks
                WHERE project_id = ? AND parent_id IS ?
                """,
                (project_id, parent_id),
            ).fetchone()
            order_index = int(row[0])
            con.execute(
                f"""
                INSERT INTO tasks ({_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, 0, ?, ?)
                """,
                (task_id, project_id, parent_id, title, description, status,
                 priority, start_date, end_date, order_index, created_at),
            )

        self._log.debug("Created task %s in %s at index %d", task_id, project_id, order_index)
        return Task(
            id=task_id,
            project_id=project_id,
            parent_id=parent_id,
            title=title,
            description=description,
            status=status,
            priority=priority,
            start_date=start_date,
            end_date=end_date,
            progress=0,
            order_index=order_index,
            created_at=created_at,
        )

    def get_task(self, task_id: str) -> Optional[Task]:
        with self._db.transaction() as con:
            row = con.execute(
                f"SELECT {_COLUMNS} FROM tasks WHERE id = ?", (task_id,)
            ).fetchone()
        return self._row_to_task(row) if row else None

    def update_task(
        self,
        task_id: str,
        title: str,
        description: Optional[str],
        status: str,
        priority: int,
        start_date: Optional[str],
        end_date: Optional[str],
        progress: int,
    ) -> None:
        with self._db.transaction() as con:
            cur = con.execute(
                """
                UPDATE tasks
                SET title = ?, description = ?, status = ?, priority = ?,
                    start_date = ?, end_date = ?, progress = ?
                WHERE id = ?
                """,
                (title, description, status, priority, start_date, end_date, progress, task_id),
            )
        self._log.debug("Updated task %s (%d row)", task_id, cur.rowcount)

    def update_task_dates(
        self,
        task_id: str,
        start_date: Optional[str],
        end_date: Optional[str],
    ) -> None:
        with self._db.transaction() as con:
            con.execute(
                "UPDATE tasks SET start_date = ?, end_date = ? WHERE id = ?",
                (start_date, end_date, task_id),
            )

    def delete_task(self, task_id: str) -> None:
        # Descendants go via parent_id CASCADE, todo links via SET NULL.
        # Surviving siblings keep their order_index (gaps allowed).
        with self._db.transaction() as con:
            cur = con.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
        self._log.debug("Deleted task %s (%d row)", task_id, cur.rowcount)

    # -------------------------
    # Listings
    # -------------------------
    def list_tasks_by_project(self, project_id: str) -> List[Task]:
        """
        All tasks of a project at every depth, flat, by order_index.
        Hierarchy is rebuilt by the caller (see services.task_tree).
        """
        with self._db.transaction() as con:
            rows = con.execute(
                f"""
                SELECT {_COLUMNS}
                FROM tasks
                WHERE project_id = ?
                ORDER BY order_index, rowid
                """,
                (project_id,),
            ).fetchall()
        return [self._row_to_task(r) for r in rows]

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=row["id"],
            project_id=row["project_id"],
            parent_id=row["parent_id"],
            title=row["title"],
            description=row["description"],
            status=row["status"],
            priority=row["priority"],
            start_date=row["start_date"],
            end_date=row["end_date"],
            progress=row["progress"],
            order_index=row["order_index"],
            created_at=row["created_at"],
        )
