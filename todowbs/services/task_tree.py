# Rev 0.1.0
"""Rebuild the WBS hierarchy from the flat list_tasks_by_project() result."""
from __future__ import annotations
from typing import Dict, Iterable, Iterator, List

from todowbs.models.entities import Task, TaskTreeNode


def build_task_tree(tasks: Iterable[Task]) -> List[TaskTreeNode]:
    tasks = list(tasks)
    nodes: Dict[str, TaskTreeNode] = {t.id: TaskTreeNode(task=t) for t in tasks}
    roots: List[TaskTreeNode] = []

    for t in tasks:
        node = nodes[t.id]
        parent = nodes.get(t.parent_id) if t.parent_id else None
        if parent is None:
            # orphans (parent not in this list) are shown at top level
            roots.append(node)
        else:
            parent.children.append(node)

    _sort_and_level(roots, 0)
    return roots


def _sort_and_level(nodes: List[TaskTreeNode], level: int) -> None:
    nodes.sort(key=lambda n: n.task.order_index)
    for n in nodes:
        n.level = level
        _sort_and_level(n.children, level + 1)


def flatten_task_tree(roots: Iterable[TaskTreeNode]) -> Iterator[TaskTreeNode]:
    """Depth-first, parents before children."""
    for node in roots:
        yield node
        yield from flatten_task_tree(node.children)
