# Copyright Red Hat
#
# dirdiff/__init__.py - Directory differ package initialisation
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Determine if two directories have different contents.

The main entry points are ``is_different()`` for a simple verdict and
``DirDiff`` for the lazy sequence of ``DiffEntry`` pairs.
"""
from ._dirdiff import *  # noqa: F401, F403
from ._dirdiff import __all__ as _global_all

from .assertion import AssertionKind, DiffAssertionError
from .diffentry import DiffEntry
from .differ import assert_same, find_differences, is_different, see_difference
from .entry import DirectoryEntry, FileKind, try_stat
from .options import DiffOptions
from .walk import DiffIterator, DirDiff, TreeWalk, WalkPhase, sort_entries

__version__ = "0.3.3"

__all__ = _global_all + [
    "AssertionKind",
    "DiffAssertionError",
    "DiffEntry",
    "DiffIterator",
    "DiffOptions",
    "DirDiff",
    "DirectoryEntry",
    "FileKind",
    "TreeWalk",
    "WalkPhase",
    "assert_same",
    "find_differences",
    "is_different",
    "see_difference",
    "sort_entries",
    "try_stat",
]
