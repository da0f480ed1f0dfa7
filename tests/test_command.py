# Copyright Red Hat
#
# tests/test_command.py - CLI layer tests
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
import unittest
from unittest.mock import patch
from argparse import Namespace
from io import StringIO
import logging
import errno
import json

log = logging.getLogger()

import dirdiff
import dirdiff.command as command
from dirdiff import DirDiffSystemError

from ._util import TreePairTestBase


class CommandTestsBase(TreePairTestBase):
    def setUp(self):
        super().setUp()
        log.debug("Preparing %s", self._testMethodName)

    def tearDown(self):
        log.debug("Tearing down %s", self._testMethodName)
        dirdiff.set_debug_mask(0)
        dirdiff_log = logging.getLogger("dirdiff")
        dirdiff_log.handlers.clear()
        dirdiff_log.setLevel(logging.NOTSET)
        super().tearDown()

    def get_main_args(self):
        """
        Return an argument array (in the form of sys.argv) reflecting the
        ``dirdiff`` command.

        :returns: A list of command arguments.
        """
        return ["/usr/bin/dirdiff"]

    def get_debug_main_args(self):
        """
        Return an argument array (in the form of sys.argv) reflecting the
        ``dirdiff`` command, with verbose logging and debug enabled.

        :returns: A list of command arguments.
        """
        return self.get_main_args() + ["-vv", "--debug=all"]

    def run_main(self, args):
        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            status = command.main(args)
        return status, mock_stdout.getvalue()


class CommandTestsSimple(unittest.TestCase):
    """
    Test command helpers
    """

    def tearDown(self):
        dirdiff.set_debug_mask(0)

    def test_set_debug_list(self):
        command.set_debug("walk,compare")
        self.assertEqual(
            dirdiff.get_debug_mask(),
            dirdiff.DIRDIFF_DEBUG_WALK | dirdiff.DIRDIFF_DEBUG_COMPARE,
        )

    def test_set_debug_all(self):
        command.set_debug("all")
        self.assertEqual(dirdiff.get_debug_mask(), dirdiff.DIRDIFF_DEBUG_ALL)

    def test_set_debug_none(self):
        command.set_debug(None)
        self.assertEqual(dirdiff.get_debug_mask(), 0)

    def test_set_debug_bad(self):
        with self.assertRaises(ValueError):
            command.set_debug("walk,quux")

    def test_setup_logging_verbose(self):
        command.setup_logging(Namespace(verbose=1))
        dirdiff_log = logging.getLogger("dirdiff")
        self.assertEqual(dirdiff_log.level, logging.INFO)
        self.assertEqual(len(dirdiff_log.handlers), 1)
        dirdiff_log.handlers.clear()
        dirdiff_log.setLevel(logging.NOTSET)


class CommandTests(CommandTestsBase):
    """
    Test the dirdiff command
    """

    def test_main_version(self):
        args = self.get_main_args() + ["--version"]
        with patch("sys.stdout", new_callable=StringIO):
            with self.assertRaises(SystemExit) as cm:
                command.main(args)
        self.assertEqual(cm.exception.code, 0)

    def test_main_too_few_args(self):
        args = self.get_main_args() + [str(self.left)]
        with patch("sys.stderr", new_callable=StringIO):
            with self.assertRaises(SystemExit) as cm:
                command.main(args)
        self.assertEqual(cm.exception.code, 2)

    def test_main_same(self):
        self.make_trees({"a.txt": "x", "d": None}, {"a.txt": "x", "d": None})
        status, output = self.run_main(
            self.get_main_args() + [str(self.left), str(self.right)]
        )
        self.assertEqual(status, command.STATUS_SAME)
        self.assertEqual(output, "")

    def test_main_different(self):
        self.make_trees({"a.txt": "x\n"}, {"a.txt": "y\n"})
        status, output = self.run_main(
            self.get_main_args() + [str(self.left), str(self.right)]
        )
        self.assertEqual(status, command.STATUS_DIFFERENT)
        self.assertEqual(output, "Content differs: a.txt: line 1 differs: 'x\\n' != 'y\\n'\n")

    def test_main_first_difference_only(self):
        self.make_trees({"a.txt": "x", "b.txt": "y"}, {})
        status, output = self.run_main(
            self.get_main_args() + [str(self.left), str(self.right)]
        )
        self.assertEqual(status, command.STATUS_DIFFERENT)
        self.assertEqual(output, "Only in left: a.txt\n")

    def test_main_all(self):
        self.make_trees(
            {"a.txt": "x", "b": None},
            {"b": "file", "c.txt": "z"},
        )
        status, output = self.run_main(
            self.get_main_args() + ["--all", str(self.left), str(self.right)]
        )
        self.assertEqual(status, command.STATUS_DIFFERENT)
        self.assertEqual(
            output.splitlines(),
            [
                "Only in left: a.txt",
                "File types differ: b (dir <> file)",
                "Only in right: c.txt",
            ],
        )

    def test_main_quiet(self):
        self.make_trees({"a.txt": "x"}, {})
        status, output = self.run_main(
            self.get_main_args() + ["-q", str(self.left), str(self.right)]
        )
        self.assertEqual(status, command.STATUS_DIFFERENT)
        self.assertEqual(output, "")

    def test_main_json(self):
        self.make_trees({"a": None}, {"a": "file"})
        status, output = self.run_main(
            self.get_main_args() + ["--json", str(self.left), str(self.right)]
        )
        self.assertEqual(status, command.STATUS_DIFFERENT)
        data = json.loads(output)
        self.assertEqual(len(data), 1)
        self.assertEqual(data[0]["kind"], "file_type")
        self.assertEqual(data[0]["path"], "a")
        self.assertEqual(data[0]["left_type"], "dir")
        self.assertEqual(data[0]["right_type"], "file")

    def test_main_json_same(self):
        status, output = self.run_main(
            self.get_main_args() + ["--json", str(self.left), str(self.right)]
        )
        self.assertEqual(status, command.STATUS_SAME)
        self.assertEqual(json.loads(output), [])

    def test_main_verbose_debug(self):
        self.make_trees({"a.txt": "x"}, {"a.txt": "x"})
        with patch("sys.stderr", new_callable=StringIO):
            status, _ = self.run_main(
                self.get_debug_main_args() + [str(self.left), str(self.right)]
            )
        self.assertEqual(status, command.STATUS_SAME)

    def test_main_bad_debug(self):
        args = self.get_main_args() + [
            "--debug=quux",
            str(self.left),
            str(self.right),
        ]
        status, output = self.run_main(args)
        self.assertEqual(status, command.STATUS_ERROR)
        self.assertIn("Unknown debug option: quux", output)

    def test_main_missing_root(self):
        args = self.get_main_args() + [str(self.left / "nope"), str(self.right)]
        with patch("sys.stderr", new_callable=StringIO):
            status, _ = self.run_main(args)
        self.assertEqual(status, command.STATUS_ERROR)

    def test_main_missing_root_debug(self):
        args = self.get_debug_main_args() + [str(self.left / "nope"), str(self.right)]
        with patch("sys.stderr", new_callable=StringIO):
            with self.assertRaises(DirDiffSystemError):
                self.run_main(args)

    def test_main_read_error(self):
        self.make_trees({"a.txt": "x"}, {"a.txt": "x"})
        args = self.get_main_args() + ["--all", str(self.left), str(self.right)]
        with patch(
            "dirdiff.content.open",
            create=True,
            side_effect=PermissionError(errno.EACCES, "denied"),
        ):
            with patch("sys.stderr", new_callable=StringIO) as mock_stderr:
                status, output = self.run_main(args)
        self.assertEqual(status, command.STATUS_ERROR)
        self.assertEqual(output, "")
        self.assertIn("Command failed", mock_stderr.getvalue())
