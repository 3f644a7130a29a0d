"""Tests for the inspector module."""

import os
import shutil
import tempfile
import unittest

from src.inspector import ACTIVE, list_log_files, path_for_bucket, read_bucket


class TestInspector(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.log_path = os.path.join(self.tmpdir, "app.log")

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def _write(self, name, content=""):
        with open(os.path.join(self.tmpdir, name), "w", encoding="utf-8") as f:
            f.write(content)

    def test_lists_rotated_oldest_first_then_active(self):
        self._write("app.log")
        self._write("app.log.20240116")
        self._write("app.log.20240115")
        self._write("app.log.2024011523")
        self._write("app.log.bak")
        self._write("other.log.20240115")

        self.assertEqual(list_log_files(self.log_path), [
            ("app.log.20240115", "20240115"),
            ("app.log.2024011523", "2024011523"),
            ("app.log.20240116", "20240116"),
            ("app.log", ACTIVE),
        ])

    def test_empty_directory(self):
        self.assertEqual(list_log_files(self.log_path), [])

    def test_missing_directory(self):
        with self.assertRaises(FileNotFoundError):
            list_log_files(os.path.join(self.tmpdir, "nope", "app.log"))

    def test_path_for_bucket(self):
        self.assertEqual(path_for_bucket(self.log_path, ACTIVE), self.log_path)
        self.assertEqual(path_for_bucket(self.log_path, "20240115"),
                         self.log_path + ".20240115")

    def test_read_bucket(self):
        self._write("app.log.20240115", "old\n")
        self._write("app.log", "new\n")
        self.assertEqual(read_bucket(self.log_path, "20240115"), "old\n")
        self.assertEqual(read_bucket(self.log_path, ACTIVE), "new\n")

    def test_read_missing_bucket(self):
        with self.assertRaises(FileNotFoundError):
            read_bucket(self.log_path, "20240101")
