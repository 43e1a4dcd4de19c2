"""
Taskboard Test Suite — Seed Loader, Settings and CLI
=====================================================

Usage:
    python -m pytest tests/test_config.py -v
"""
import sys
import os
import json
import logging
import tempfile
import unittest
from contextlib import redirect_stdout
from io import StringIO

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from taskboard.cli import main
from taskboard.config import DEFAULT_PORT, Settings, load_settings
from taskboard.errors import SeedError
from taskboard.logging_setup import setup_logging
from taskboard.seed import DEFAULT_SEED_PATH, load_seed, parse_seed


# ─────────────────────────────────────────────
#  Seed Loader
# ─────────────────────────────────────────────

class TestSeed(unittest.TestCase):

    def test_packaged_seed(self):
        records = load_seed()
        self.assertGreater(len(records), 0)
        self.assertEqual(records[0]["id"], 1)

    def test_object_and_list_forms(self):
        record = {"id": 1, "title": "t", "description": "d", "completed": False}
        self.assertEqual(parse_seed({"tasks": [record]}), [record])
        self.assertEqual(parse_seed([record]), [record])

    def test_bad_shapes(self):
        for data in ({"items": []}, "tasks", [1], [{"title": "no id"}], [{"id": "1"}], [{"id": True}]):
            with self.subTest(data=data):
                with self.assertRaises(SeedError):
                    parse_seed(data)

    def test_missing_file(self):
        with self.assertRaises(SeedError):
            load_seed("/nonexistent/tasks.json")

    def test_invalid_json(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "tasks.json")
            with open(path, "w", encoding="utf-8") as f:
                f.write("{broken")
            with self.assertRaises(SeedError):
                load_seed(path)


# ─────────────────────────────────────────────
#  Settings
# ─────────────────────────────────────────────

class TestSettings(unittest.TestCase):

    def test_defaults(self):
        self.assertEqual(load_settings({}), Settings())
        self.assertEqual(load_settings({}).seed_path, DEFAULT_SEED_PATH)

    def test_prefixed_values(self):
        settings = load_settings({
            "TASKBOARD_HOST": "0.0.0.0",
            "TASKBOARD_PORT": "8080",
            "TASKBOARD_SEED_PATH": "/tmp/seed.json",
            "TASKBOARD_LOG_LEVEL": "debug",
        })
        self.assertEqual(settings.host, "0.0.0.0")
        self.assertEqual(settings.port, 8080)
        self.assertEqual(settings.seed_path, "/tmp/seed.json")
        self.assertEqual(settings.log_level, "DEBUG")

    def test_plain_port_fallback(self):
        self.assertEqual(load_settings({"PORT": "4000"}).port, 4000)
        self.assertEqual(load_settings({"PORT": "4000", "TASKBOARD_PORT": "5000"}).port, 5000)

    def test_bad_port_uses_default(self):
        self.assertEqual(load_settings({"TASKBOARD_PORT": "abc"}).port, DEFAULT_PORT)


class TestLoggingSetup(unittest.TestCase):

    def tearDown(self):
        logging.getLogger().handlers.clear()
        logging.captureWarnings(False)

    def test_single_handler(self):
        setup_logging("DEBUG")
        setup_logging("DEBUG")
        root = logging.getLogger()
        self.assertEqual(len(root.handlers), 1)
        self.assertEqual(root.level, logging.DEBUG)

    def test_unknown_level_falls_back_to_info(self):
        setup_logging("chatty")
        self.assertEqual(logging.getLogger().level, logging.INFO)


# ─────────────────────────────────────────────
#  CLI
# ─────────────────────────────────────────────

class TestCli(unittest.TestCase):

    def _run(self, argv):
        out = StringIO()
        with redirect_stdout(out):
            code = main(argv)
        return code, out.getvalue()

    def test_tasks_lists_seed(self):
        code, output = self._run(["tasks"])
        self.assertEqual(code, 0)
        self.assertIn("Set up environment", output)

    def test_tasks_filter(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "tasks.json")
            with open(path, "w", encoding="utf-8") as f:
                json.dump({"tasks": [
                    {"id": 1, "title": "Done one", "description": "d", "completed": True},
                    {"id": 2, "title": "Open one", "description": "d", "completed": False},
                ]}, f)
            code, output = self._run(["tasks", "--seed", path, "--completed", "true"])
        self.assertEqual(code, 0)
        self.assertIn("Tasks (1)", output)
        self.assertIn("Done one", output)
        self.assertNotIn("Open one", output)

    def test_tasks_missing_seed(self):
        code, _ = self._run(["tasks", "--seed", "/nonexistent/tasks.json"])
        self.assertEqual(code, 1)

    def test_no_command_prints_help(self):
        code, output = self._run([])
        self.assertEqual(code, 0)
        self.assertIn("taskboard", output)


if __name__ == "__main__":
    unittest.main()
