"""Tests for atomic artifact writers."""

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from core.artifacts import atomic_write_text, write_json_array, write_run_report


class TestAtomicWrite(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_creates_parent_directories(self) -> None:
        target = self.root / "nested" / "dir" / "out.sqf"
        path = atomic_write_text(str(target), "hello\n")
        self.assertEqual(Path(path), target.resolve())
        self.assertEqual(target.read_text(encoding="utf-8"), "hello\n")

    def test_overwrites_existing(self) -> None:
        target = self.root / "out.json"
        target.write_text("old", encoding="utf-8")
        atomic_write_text(str(target), "new")
        self.assertEqual(target.read_text(encoding="utf-8"), "new")

    def test_failed_write_leaves_target_untouched(self) -> None:
        target = self.root / "out.json"
        target.write_text("original", encoding="utf-8")

        with mock.patch("core.artifacts.os.replace", side_effect=OSError("disk full")):
            with self.assertRaises(OSError):
                atomic_write_text(str(target), "replacement")

        self.assertEqual(target.read_text(encoding="utf-8"), "original")
        self.assertEqual(sorted(os.listdir(self.root)), ["out.json"])

    def test_write_json_array(self) -> None:
        target = self.root / "items.json"
        write_json_array(["b", "a"], str(target))
        text = target.read_text(encoding="utf-8")
        self.assertTrue(text.endswith("\n"))
        self.assertEqual(json.loads(text), ["b", "a"])
        self.assertIn('  "b"', text)


class TestRunArtifacts(unittest.TestCase):
    def test_write_run_report(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_run_report(
                report={"status": "success", "value": 1},
                run_id="run-123",
                output_dir=tmpdir,
            )
            self.assertTrue(Path(path).is_file())
            payload = json.loads(Path(path).read_text(encoding="utf-8"))
            self.assertEqual(payload["run_id"], "run-123")
            self.assertEqual(payload["status"], "success")
            self.assertEqual(payload["value"], 1)
            self.assertIn("timestamp_utc", payload)


if __name__ == "__main__":
    unittest.main()
