# todowbs application context
# Rev 0.1.0

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .repositories.db import Database
from .repositories.sqlite_daily_todo_repository import SQLiteDailyTodoRepository
from .repositories.sqlite_project_repository import SQLiteProjectRepository
from .repositories.sqlite_task_repository import SQLiteTaskRepository
from .services.report_service import ReportService
from .utils.config import load_settings, resolve_db_path
from .utils.logging_setup import get_logger
from .utils.paths import ensure_dirs


@dataclass
class AppContext:
    """Central container for the store handle and everything built on it."""
    db_path: Path
    db: Database
    projects: SQLiteProjectRepository
    tasks: SQLiteTaskRepository
    todos: SQLiteDailyTodoRepository
    reports: ReportService

    @classmethod
    def create(
        cls,
        db_path: Optional[Path] = None,
        settings: Optional[Dict[str, Any]] = None,
    ) -> "AppContext":
        """Open the DB (schema is created if missing) and wire repositories.

        settings defaults to settings.json; db_path overrides its database.path.
        """
        log = get_logger("AppContext")
        if settings is None:
            settings = load_settings()
        if db_path is None:
            ensure_dirs()
            db_path = resolve_db_path(settings)
        db = Database(db_path)
        todos = SQLiteDailyTodoRepository(db)
        ctx = cls(
            db_path=Path(db_path),
            db=db,
            projects=SQLiteProjectRepository(db),
            tasks=SQLiteTaskRepository(db),
            todos=todos,
            reports=ReportService(todos, export_dir=(settings.get("report") or {}).get("export_dir")),
        )
        log.info("AppContext initialized with DB=%s", db_path)
        return ctx

    def close(self) -> None:
        self.db.close()
