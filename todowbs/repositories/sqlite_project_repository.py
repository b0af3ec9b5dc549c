# Rev 0.1.0
# todowbs – SQLiteProjectRepository (Rev 0.1.0, aligned with schema Rev 0.1.0)
from __future__ import annotations
import sqlite3
from typing import List, Optional

from todowbs.models.entities import Project
from todowbs.repositories.db import Database
from todowbs.utils.logging_setup import get_logger

_COLUMNS = "id, name, description, start_date, end_date, created_at"


class SQLiteProjectRepository:
    """
    Project repository.
    Deleting a project cascades to its tasks (and their todo links) in SQLite.
    """

    def __init__(self, db: Database):
        self._db = db
        self._log = get_logger("projects")

    # ---------- public API ----------

    def create_project(
        self,
        name: str,
        description: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> Project:
        project = Project(
            id=self._db.new_id(),
            name=name,
            description=description,
            start_date=start_date,
            end_date=end_date,
            created_at=self._db.now(),
        )
        with self._db.transaction() as con:
            con.execute(
                f"INSERT INTO projects ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
                (project.id, project.name, project.description,
                 project.start_date, project.end_date, project.created_at),
            )
        self._log.debug("Created project %s", project.id)
        return project

    def list_projects(self) -> List[Project]:
        """
        Returns all projects, newest first.
        """
        with self._db.transaction() as con:
            rows = con.execute(
                f"SELECT {_COLUMNS} FROM projects ORDER BY created_at DESC, rowid DESC"
            ).fetchall()
        return [self._row_to_project(r) for r in rows]

    def get_project(self, project_id: str) -> Optional[Project]:
        with self._db.transaction() as con:
            row = con.execute(
                f"SELECT {_COLUMNS} FROM projects WHERE id = ?", (project_id,)
            ).fetchone()
        return self._row_to_project(row) if row else None

    def update_project(
        self,
        project_id: str,
        name: str,
        description: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> None:
        # Unknown ids update zero rows; that is not an error.
        with self._db.transaction() as con:
            cur = con.execute(
                """
                UPDATE projects
                SET name = ?, description = ?, start_date = ?, end_date = ?
                WHERE id = ?
                """,
                (name, description, start_date, end_date, project_id),
            )
        self._log.debug("Updated project %s (%d row)", project_id, cur.rowcount)

    def delete_project(self, project_id: str) -> None:
        with self._db.transaction() as con:
            cur = con.execute("DELETE FROM projects WHERE id = ?", (project_id,))
        self._log.debug("Deleted project %s (%d row)", project_id, cur.rowcount)

    # ---------- internals ----------

    @staticmethod
    def _row_to_project(row: sqlite3.Row) -> Project:
        return Project(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            start_date=row["start_date"],
            end_date=row["end_date"],
            created_at=row["created_at"],
        )
