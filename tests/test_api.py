"""
Taskboard Test Suite — Request Handler Layer
=============================================
TaskAPI without HTTP: query semantics, id parsing and error mapping.

Usage:
    python -m pytest tests/test_api.py -v
"""
import sys
import os
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from taskboard.api import TaskAPI, parse_task_id
from taskboard.errors import InvalidPriorityError, NotFoundError, ValidationError
from taskboard.store import TaskStore


def _make_api():
    return TaskAPI(TaskStore([
        {"id": 1, "title": "Old", "description": "d", "completed": True,
         "priority": "high", "createdAt": "2024-01-01T00:00:00.000Z"},
        {"id": 2, "title": "New", "description": "d", "completed": False,
         "priority": "low", "createdAt": "2024-03-01T00:00:00.000Z"},
        {"id": 3, "title": "Mid", "description": "d", "completed": False,
         "createdAt": "2024-02-01T00:00:00.000Z"},
    ]))


class TestParseTaskId(unittest.TestCase):

    def test_plain_integer(self):
        self.assertEqual(parse_task_id("12"), 12)

    def test_leading_digits(self):
        self.assertEqual(parse_task_id("12abc"), 12)
        self.assertEqual(parse_task_id("3.9"), 3)

    def test_no_digits(self):
        self.assertIsNone(parse_task_id("abc"))
        self.assertIsNone(parse_task_id(""))

    def test_oversized_digit_run(self):
        self.assertIsNone(parse_task_id("9" * 5000))


class TestListTasks(unittest.TestCase):

    def test_no_query(self):
        self.assertEqual([t["id"] for t in _make_api().list_tasks()], [1, 2, 3])

    def test_completed_true(self):
        self.assertEqual([t["id"] for t in _make_api().list_tasks(completed="true")], [1])

    def test_any_other_value_filters_open_tasks(self):
        api = _make_api()
        for value in ("false", "1", "", "TRUE"):
            with self.subTest(value=value):
                self.assertEqual([t["id"] for t in api.list_tasks(completed=value)], [2, 3])

    def test_sort(self):
        api = _make_api()
        self.assertEqual([t["id"] for t in api.list_tasks(sort="createdAt")], [1, 3, 2])
        self.assertEqual([t["id"] for t in api.list_tasks(sort="-createdAt")], [2, 3, 1])

    def test_unknown_sort_ignored(self):
        self.assertEqual([t["id"] for t in _make_api().list_tasks(sort="title")], [1, 2, 3])

    def test_filter_then_sort(self):
        tasks = _make_api().list_tasks(completed="false", sort="-createdAt")
        self.assertEqual([t["id"] for t in tasks], [2, 3])


class TestListByPriority(unittest.TestCase):

    def test_level_is_case_insensitive(self):
        self.assertEqual([t["id"] for t in _make_api().list_by_priority("HIGH")], [1])

    def test_defaulted_priority_matches_medium(self):
        self.assertEqual([t["id"] for t in _make_api().list_by_priority("medium")], [3])

    def test_invalid_level(self):
        with self.assertRaises(InvalidPriorityError) as ctx:
            _make_api().list_by_priority("urgent")
        self.assertEqual(ctx.exception.status_code, 400)


class TestMutations(unittest.TestCase):

    def test_create(self):
        api = _make_api()
        task = api.create_task({"title": "A", "description": "B", "completed": False})
        self.assertEqual(task["id"], 4)
        self.assertEqual(task["priority"], "medium")
        self.assertEqual(api.get_task("4"), task)

    def test_rejected_create_leaves_store_unchanged(self):
        api = _make_api()
        with self.assertRaises(ValidationError):
            api.create_task({"title": "A"})
        self.assertEqual(api.store.count(), 3)
        self.assertEqual(api.store.next_id, 4)

    def test_update_unknown_id_beats_validation(self):
        with self.assertRaises(NotFoundError):
            _make_api().update_task("99", {})

    def test_update_invalid_payload(self):
        api = _make_api()
        with self.assertRaises(ValidationError):
            api.update_task("1", {"title": "x", "description": "y", "completed": "yes"})
        self.assertEqual(api.get_task("1")["title"], "Old")

    def test_update_keeps_priority_when_omitted(self):
        api = _make_api()
        task = api.update_task("1", {"title": "x", "description": "y", "completed": False})
        self.assertEqual(task["priority"], "high")
        self.assertEqual(task["createdAt"], "2024-01-01T00:00:00.000Z")

    def test_delete(self):
        api = _make_api()
        removed = api.delete_task("2")
        self.assertEqual(removed["title"], "New")
        with self.assertRaises(NotFoundError):
            api.get_task("2")
        with self.assertRaises(NotFoundError):
            api.delete_task("2")


if __name__ == "__main__":
    unittest.main()
