# Copyright Red Hat
#
# tests/test_differ.py - Top-level directory comparison tests.
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
import unittest
from unittest.mock import patch
import shutil
import errno

import dirdiff
from dirdiff import DirDiffArgumentError, DirDiffSystemError
from dirdiff.assertion import AssertionKind, DiffAssertionError
from dirdiff.differ import assert_same, find_differences, is_different, see_difference

from ._util import TreePairTestBase, make_tree


class TestIsDifferent(TreePairTestBase):
    def test_same_file(self):
        self.make_trees({"a.txt": "x"}, {"a.txt": "x"})
        self.assertFalse(is_different(self.left, self.right))

    def test_content_differs(self):
        self.make_trees({"a.txt": "x"}, {"a.txt": "y"})
        self.assertTrue(is_different(self.left, self.right))
        err = see_difference(self.left, self.right)
        self.assertEqual(err.kind, AssertionKind.CONTENT)

    def test_extra_file_on_right(self):
        self.make_trees({"dir": None}, {"dir": None, "dir/file.txt": "x"})
        self.assertTrue(is_different(self.left, self.right))
        err = see_difference(self.left, self.right)
        self.assertEqual(err.kind, AssertionKind.MISSING)
        self.assertEqual(str(err.entry.relative_path), "dir/file.txt")
        self.assertTrue(err.entry.left.is_missing)

    def test_dir_vs_file(self):
        self.make_trees({"a": None}, {"a": "file"})
        self.assertTrue(is_different(self.left, self.right))
        self.assertEqual(see_difference(self.left, self.right).kind, AssertionKind.FILE_TYPE)

    def test_empty_roots(self):
        self.assertFalse(is_different(self.left, self.right))
        self.assertIsNone(see_difference(self.left, self.right))

    def test_reflexive(self):
        layout = {
            "a.txt": "alpha\n",
            "bin.dat": b"\x00\x01\x02",
            "d": None,
            "d/e": None,
            "d/e/f.txt": "deep",
        }
        make_tree(self.left, layout)
        self.assertFalse(is_different(self.left, self.left))
        shutil.rmtree(self.right)
        shutil.copytree(self.left, self.right)
        self.assertFalse(is_different(self.left, self.right))
        self.assertFalse(is_different(str(self.right), str(self.left)))

    def test_left_only_detected(self):
        self.make_trees({"a.txt": "x", "b.txt": "y"}, {"a.txt": "x"})
        self.assertTrue(is_different(self.left, self.right))
        self.assertTrue(is_different(self.right, self.left))

    def test_short_circuit(self):
        self.make_trees({"a.txt": "x", "b.txt": "x"}, {"a.txt": "y", "b.txt": "x"})
        with patch("dirdiff.diffentry.files_equal", return_value=False) as mock_equal:
            self.assertTrue(is_different(self.left, self.right))
            self.assertEqual(mock_equal.call_count, 1)

    def test_missing_root_raises(self):
        with self.assertRaises(DirDiffSystemError):
            is_different(self.left / "nope", self.right)

    def test_walk_error_propagates(self):
        self.make_trees({"a.txt": "x"}, {"a.txt": "x"})
        with patch("os.scandir", side_effect=PermissionError(errno.EACCES, "denied")):
            with self.assertRaises(DirDiffSystemError):
                is_different(self.left, self.right)

    def test_content_read_error_propagates(self):
        self.make_trees({"a.txt": "x"}, {"a.txt": "x"})
        with patch(
            "dirdiff.content.open",
            create=True,
            side_effect=PermissionError(errno.EACCES, "denied"),
        ):
            with self.assertRaises(DirDiffSystemError) as cm:
                is_different(self.left, self.right)
        self.assertEqual(cm.exception.errno, errno.EACCES)

    def test_content_read_error_stops_walk(self):
        self.make_trees({"a.txt": "x", "b.txt": "y"}, {"a.txt": "x", "b.txt": "y"})
        with patch(
            "dirdiff.diffentry.files_equal",
            side_effect=DirDiffSystemError("a.txt", OSError(errno.EIO, "I/O error")),
        ) as mock_equal:
            with self.assertRaises(DirDiffSystemError):
                is_different(self.left, self.right)
        self.assertEqual(mock_equal.call_count, 1)

    def test_package_exports(self):
        self.assertIs(dirdiff.is_different, is_different)


class TestFindDifferences(TreePairTestBase):
    def test_all_differences(self):
        self.make_trees(
            {"a.txt": "one\ntwo\n", "b": None, "same.txt": "s", "left.txt": "l"},
            {"a.txt": "one\n2\n", "b": "file", "same.txt": "s", "right.txt": "r"},
        )
        found = {
            str(err.entry.relative_path): err
            for err in find_differences(self.left, self.right)
        }
        self.assertEqual(sorted(found), ["a.txt", "b", "left.txt", "right.txt"])
        self.assertEqual(found["a.txt"].kind, AssertionKind.CONTENT)
        self.assertEqual(found["a.txt"].msg, "line 2 differs: 'two\\n' != '2\\n'")
        self.assertEqual(found["b"].kind, AssertionKind.FILE_TYPE)
        self.assertEqual(found["left.txt"].kind, AssertionKind.MISSING)
        self.assertEqual(found["right.txt"].kind, AssertionKind.MISSING)

    def test_lazy(self):
        self.make_trees({"a.txt": "x"}, {"a.txt": "y"})
        gen = find_differences(self.left, self.right)
        self.assertIsInstance(next(gen), DiffAssertionError)
        with self.assertRaises(StopIteration):
            next(gen)

    def test_read_error_becomes_cause(self):
        self.make_trees({"a.txt": "x"}, {"a.txt": "y"})
        with patch(
            "dirdiff.differ.locate_mismatch",
            side_effect=DirDiffSystemError("a.txt", OSError(errno.EIO, "I/O error")),
        ):
            err = see_difference(self.left, self.right)
        self.assertEqual(err.kind, AssertionKind.CONTENT)
        self.assertIsInstance(err.cause, DirDiffSystemError)


class TestAssertSame(TreePairTestBase):
    def test_assert_same_passes(self):
        self.make_trees({"a.txt": "x"}, {"a.txt": "x"})
        assert_same(self.left, self.right)

    def test_assert_same_raises(self):
        self.make_trees({"a.txt": "x"}, {})
        with self.assertRaises(DiffAssertionError) as cm:
            assert_same(self.left, self.right)
        self.assertTrue(cm.exception.kind.is_missing)
        self.assertIn("One side is missing", str(cm.exception))

    def test_assert_same_not_dir(self):
        with self.assertRaises(DirDiffArgumentError):
            assert_same(self.left / "nope", self.right)
