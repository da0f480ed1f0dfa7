# Copyright Red Hat
#
# tests/test_options.py - DiffOptions tests.
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
import unittest
from argparse import Namespace
from dataclasses import FrozenInstanceError

from dirdiff import DirDiffArgumentError
from dirdiff.options import DiffOptions


class TestDiffOptions(unittest.TestCase):
    def test_defaults(self):
        opts = DiffOptions()
        self.assertFalse(opts.follow_symlinks)
        self.assertTrue(opts.sort_by_name)
        self.assertFalse(opts.use_magic_file_type)
        self.assertEqual(opts.max_mismatch_context, 80)

    def test_DiffOptions__str__(self):
        opts = DiffOptions(follow_symlinks=True)
        s = str(opts)
        self.assertIn("follow_symlinks=True", s)
        self.assertIn("sort_by_name=True", s)

    def test_frozen(self):
        with self.assertRaises(FrozenInstanceError):
            DiffOptions().quiet = True

    def test_bad_context(self):
        with self.assertRaises(DirDiffArgumentError):
            DiffOptions(max_mismatch_context=-1)

    def test_from_cmd_args(self):
        """Test initialization from argparse Namespace."""
        args = Namespace(
            follow_symlinks=True,
            sort_by_name=False,
            quiet=None,
            unknown_arg="ignored",
        )
        opts = DiffOptions.from_cmd_args(args)

        self.assertTrue(opts.follow_symlinks)
        self.assertFalse(opts.sort_by_name)
        # Should use defaults for missing and unset args
        self.assertFalse(opts.quiet)
        self.assertFalse(opts.use_magic_file_type)
