# Rev 0.1.0

from __future__ import annotations
import threading

import pytest

from todowbs.repositories.errors import StorageError
from todowbs.repositories.sqlite_project_repository import SQLiteProjectRepository
from todowbs.repositories.sqlite_task_repository import SQLiteTaskRepository

from tests.conftest import snapshot


@pytest.fixture()
def project_id(projects: SQLiteProjectRepository) -> str:
    return projects.create_project("Alpha").id


def seed_task(tasks: SQLiteTaskRepository, project_id: str, parent_id=None, title="T"):
    return tasks.create_task(project_id, parent_id, title)


# --- create / order_index ------------------------------------------------------

def test_create_defaults(tasks: SQLiteTaskRepository, project_id: str):
    t = tasks.create_task(project_id, None, "Design")
    assert t.status == "pending"
    assert t.priority == 0
    assert t.progress == 0
    assert t.order_index == 0
    assert t.parent_id is None
    assert tasks.get_task(t.id) == t


def test_create_with_all_fields(tasks: SQLiteTaskRepository, project_id: str):
    t = tasks.create_task(
        project_id, None, "Build", "desc", "in_progress", 3, "2024-01-02", "2024-01-09"
    )
    stored = tasks.get_task(t.id)
    assert stored.description == "desc"
    assert stored.status == "in_progress"
    assert stored.priority == 3
    assert (stored.start_date, stored.end_date) == ("2024-01-02", "2024-01-09")


def test_order_index_dense_per_sibling_group(tasks, projects, project_id):
    other_project = projects.create_project("Beta").id
    root_a = seed_task(tasks, project_id, title="A")
    got_children, got_roots = [], [root_a.order_index]

    for i in range(3):
        got_children.append(seed_task(tasks, project_id, root_a.id, f"A.{i}").order_index)
        got_roots.append(seed_task(tasks, project_id, title=f"R{i}").order_index)
        # noise in other groups
        seed_task(tasks, other_project, title=f"other{i}")

    assert got_roots == [0, 1, 2, 3]
    assert got_children == [0, 1, 2]
    assert [t.order_index for t in tasks.list_tasks_by_project(other_project)] == [0, 1, 2]


def test_null_parent_is_its_own_group(tasks, project_id):
    root = seed_task(tasks, project_id)
    child = seed_task(tasks, project_id, root.id)
    second_root = seed_task(tasks, project_id)
    assert (root.order_index, child.order_index, second_root.order_index) == (0, 0, 1)


def test_concurrent_creates_keep_indexes_unique(tasks, project_id):
    results: list[int] = []
    errors: list[BaseException] = []
    guard = threading.Lock()

    def worker(n: int) -> None:
        try:
            for i in range(10):
                idx = tasks.create_task(project_id, None, f"w{n}-{i}").order_index
                with guard:
                    results.append(idx)
        except Exception as exc:
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for th in threads:
        th.start()
    for th in threads:
        th.join()

    assert errors == []
    assert sorted(results) == list(range(40))


def test_create_with_unknown_project_fails_cleanly(db, tasks):
    before = snapshot(db)
    with pytest.raises(StorageError):
        tasks.create_task("no-such-project", None, "Orphan")
    assert snapshot(db) == before


# --- listing ---------------------------------------------------------------------

def test_list_is_flat_and_ordered_by_index(tasks, project_id):
    root0 = seed_task(tasks, project_id, title="root0")
    root1 = seed_task(tasks, project_id, title="root1")
    child0 = seed_task(tasks, project_id, root0.id, "child0")
    child1 = seed_task(tasks, project_id, root0.id, "child1")

    listed = tasks.list_tasks_by_project(project_id)
    # index 0: root0, child0; index 1: root1, child1 (insert order breaks ties)
    assert [t.id for t in listed] == [root0.id, child0.id, root1.id, child1.id]


def test_list_unknown_project_is_empty(tasks):
    assert tasks.list_tasks_by_project("missing") == []


# --- updates -----------------------------------------------------------------------

def test_update_task_overwrites_fields_but_not_ids_or_index(tasks, project_id):
    seed_task(tasks, project_id)
    t = seed_task(tasks, project_id, title="old")
    tasks.update_task(t.id, "new", "d", "completed", 5, "2024-02-01", "2024-02-02", 100)
    stored = tasks.get_task(t.id)
    assert stored.title == "new"
    assert stored.description == "d"
    assert stored.status == "completed"
    assert stored.priority == 5
    assert (stored.start_date, stored.end_date) == ("2024-02-01", "2024-02-02")
    assert stored.progress == 100
    assert (stored.id, stored.project_id, stored.parent_id) == (t.id, t.project_id, None)
    assert stored.order_index == 1
    assert stored.created_at == t.created_at


def test_update_task_dates_only(tasks, project_id):
    t = tasks.create_task(project_id, None, "T", "d", "in_progress", 2, "2024-01-01", "2024-01-05")
    tasks.update_task_dates(t.id, None, "2024-01-20")
    stored = tasks.get_task(t.id)
    assert (stored.start_date, stored.end_date) == (None, "2024-01-20")
    assert (stored.title, stored.status, stored.priority) == ("T", "in_progress", 2)


def test_updates_on_unknown_task_are_noops(db, tasks, project_id):
    seed_task(tasks, project_id)
    before = snapshot(db)
    tasks.update_task("missing", "x", None, "pending", 0, None, None, 0)
    tasks.update_task_dates("missing", "2024-01-01", "2024-01-02")
    assert snapshot(db) == before


# --- deletes / cascades --------------------------------------------------------------

def test_delete_task_cascades_to_descendants(tasks, project_id):
    root = seed_task(tasks, project_id)
    child = seed_task(tasks, project_id, root.id)
    grandchild = seed_task(tasks, project_id, child.id)
    keep = seed_task(tasks, project_id)

    tasks.delete_task(root.id)

    assert tasks.get_task(child.id) is None
    assert tasks.get_task(grandchild.id) is None
    assert [t.id for t in tasks.list_tasks_by_project(project_id)] == [keep.id]


def test_delete_task_leaves_gaps_in_sibling_indexes(tasks, project_id):
    a = seed_task(tasks, project_id)
    b = seed_task(tasks, project_id)
    c = seed_task(tasks, project_id)
    tasks.delete_task(b.id)
    assert [(t.id, t.order_index) for t in tasks.list_tasks_by_project(project_id)] == [
        (a.id, 0), (c.id, 2)
    ]
    # next sibling continues after the current max
    assert seed_task(tasks, project_id).order_index == 3


def test_delete_task_severs_todo_links(tasks, todos, project_id):
    root = seed_task(tasks, project_id, title="Root")
    child = seed_task(tasks, project_id, root.id, "Child")
    todo = todos.add_task_to_todo(child.id, "2024-01-01")
    todos.update_todo_memo(todo.id, "note")

    tasks.delete_task(root.id)

    [row] = todos.list_todos_by_date("2024-01-01")
    assert row.id == todo.id
    assert row.task_id is None
    assert row.title == "Child"
    assert row.memo == "note"
    assert row.task_title is None and row.project_name is None


def test_delete_project_cascades_everything_but_todos(projects, tasks, todos, project_id):
    root = seed_task(tasks, project_id, title="Root")
    child = seed_task(tasks, project_id, root.id, "Child")
    grandchild = seed_task(tasks, project_id, child.id, "Grandchild")
    linked = todos.add_task_to_todo(grandchild.id, "2024-01-01")
    todos.update_todo_memo(linked.id, "kept")
    free = todos.create_daily_todo(None, "Freestanding", "2024-01-01")

    projects.delete_project(project_id)

    assert tasks.list_tasks_by_project(project_id) == []
    for t in (root, child, grandchild):
        assert tasks.get_task(t.id) is None
    by_id = {t.id: t for t in todos.list_todos_by_date("2024-01-01")}
    assert set(by_id) == {linked.id, free.id}
    assert by_id[linked.id].task_id is None
    assert by_id[linked.id].title == "Grandchild"
    assert by_id[linked.id].memo == "kept"
