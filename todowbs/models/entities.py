# Rev 0.1.0
"""Lightweight entities aligned with schema Rev 0.1.0 (text ids, local timestamps)"""
from __future__ import annotations
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Project:
    id: str
    name: str
    description: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    created_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Task:
    id: str
    project_id: str
    parent_id: Optional[str]
    title: str
    description: Optional[str] = None
    status: str = "pending"
    priority: int = 0
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    progress: int = 0
    order_index: int = 0
    created_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DailyTodo:
    id: str
    task_id: Optional[str]
    title: str
    date: str
    completed: bool = False
    memo: Optional[str] = None
    created_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DailyTodoWithTask:
    """A DailyTodo joined with its task title and project name (query-time only)."""
    id: str
    task_id: Optional[str]
    title: str
    date: str
    completed: bool
    memo: Optional[str]
    created_at: str
    task_title: Optional[str] = None
    project_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class TaskTreeNode:
    task: Task
    level: int = 0
    children: List["TaskTreeNode"] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.task.id

    def to_dict(self) -> Dict[str, Any]:
        d = self.task.to_dict()
        d["level"] = self.level
        d["children"] = [c.to_dict() for c in self.children]
        return d
