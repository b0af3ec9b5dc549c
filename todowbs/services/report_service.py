# Rev 0.1.0

"""Daily report service (Rev 0.1.0)
Render one day's todos plus a free-text memo as a Markdown document.
"""
from __future__ import annotations
from pathlib import Path
from typing import Iterable, List, Optional

from todowbs.models.entities import DailyTodoWithTask
from todowbs.repositories.sqlite_daily_todo_repository import SQLiteDailyTodoRepository
from todowbs.utils.logging_setup import get_logger

NONE_PLACEHOLDER = "None"
COMPLETED_HEADING = "## Completed"
INCOMPLETE_HEADING = "## Incomplete"
MEMO_HEADING = "## Memo"


def default_report_filename(date: str) -> str:
    return f"daily_report_{date}.md"


def _item_line(todo: DailyTodoWithTask, mark: str) -> str:
    prefix = f"{todo.project_name}: " if todo.project_name is not None else ""
    return f"- [{mark}] {prefix}{todo.title}"


def render_daily_report(date: str, todos: Iterable[DailyTodoWithTask], memo: str) -> str:
    todos = list(todos)
    completed = [t for t in todos if t.completed]
    incomplete = [t for t in todos if not t.completed]

    lines: List[str] = [f"# Daily Report - {date}", "", COMPLETED_HEADING]
    if not completed:
        lines.append(NONE_PLACEHOLDER)
    for todo in completed:
        lines.append(_item_line(todo, "x"))
        if todo.memo:
            lines.append(f"  - {todo.memo}")

    lines += ["", INCOMPLETE_HEADING]
    if not incomplete:
        lines.append(NONE_PLACEHOLDER)
    # memo lines are only shown for completed items
    lines.extend(_item_line(todo, " ") for todo in incomplete)

    if memo:
        lines += ["", MEMO_HEADING, memo]

    return "\n".join(lines) + "\n"


class ReportService:
    def __init__(self, todos: SQLiteDailyTodoRepository, export_dir: Optional[Path | str] = None):
        self._todos = todos
        self.export_dir = Path(export_dir).expanduser() if export_dir else None
        self._log = get_logger("report")

    def generate_daily_report(self, date: str, memo: str) -> str:
        # StorageError from the fetch propagates unchanged
        return render_daily_report(date, self._todos.list_todos_by_date(date), memo)

    def export_daily_report(self, date: str, memo: str, path: Optional[Path | str] = None) -> Path:
        """Render and write the report.

        A directory target gets the default filename; no path at all means
        <export_dir>/daily_report_<date>.md.
        """
        if path is None:
            if self.export_dir is None:
                raise ValueError("no export path given and report.export_dir is not configured")
            path = self.export_dir / default_report_filename(date)
        target = Path(path)
        if target.is_dir():
            target = target / default_report_filename(date)
        content = self.generate_daily_report(date, memo)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        self._log.info("Daily report for %s written to %s", date, target)
        return target
