# Copyright Red Hat
#
# dirdiff/walk.py - Directory differ paired tree walk
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Paired tree walking.

``DirDiff`` names two roots. Iterating it walks the left tree, pairing each
path with the same relative path under the right root, and then walks the
right tree to pick up the paths that exist only on the right. Every path
present in either tree is produced exactly once, as a ``DiffEntry``.
"""
from typing import Iterable, Iterator, List, Optional, Union
from pathlib import Path
from enum import Enum
import logging
import os

from dirdiff import DIRDIFF_SUBSYSTEM_WALK, DirDiffSystemError

from .diffentry import DiffEntry
from .entry import DirectoryEntry, try_stat
from .options import DiffOptions

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_walk(msg, *args, **kwargs):
    """A wrapper for walk subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": DIRDIFF_SUBSYSTEM_WALK}, **kwargs)


class TreeWalk:
    """
    Depth-first, pre-order iterator over the descendants of a root
    directory. The root itself is never produced.

    A directory that cannot be listed raises ``DirDiffSystemError`` from the
    ``__next__()`` call that tries to descend into it; iteration may then
    continue with the following entry.
    """

    def __init__(
        self,
        root: Union[str, Path],
        follow_symlinks: bool = False,
        sort_by_name: bool = True,
    ):
        """
        Initialise a new ``TreeWalk``.

        :param root: The directory to walk.
        :type root: ``Union[str, Path]``
        :param follow_symlinks: Descend into symbolic links to directories.
        :type follow_symlinks: ``bool``
        :param sort_by_name: Produce siblings in file name order.
        :type sort_by_name: ``bool``
        """
        self.root = os.fspath(root)
        self.follow_symlinks = follow_symlinks
        self.sort_by_name = sort_by_name
        self._stack: List[Iterator[os.DirEntry]] = []
        self._descend: Optional[str] = self.root

    def __iter__(self):
        return self

    def _list_dir(self, path: str) -> Iterator[os.DirEntry]:
        try:
            with os.scandir(path) as it:
                entries = list(it)
        except OSError as err:
            raise DirDiffSystemError(path, err) from err
        if self.sort_by_name:
            entries.sort(key=lambda entry: entry.name)
        return iter(entries)

    def __next__(self) -> str:
        if self._descend is not None:
            path, self._descend = self._descend, None
            self._stack.append(self._list_dir(path))

        while self._stack:
            dir_entry = next(self._stack[-1], None)
            if dir_entry is None:
                self._stack.pop()
                continue
            try:
                is_dir = dir_entry.is_dir(follow_symlinks=self.follow_symlinks)
            except OSError as err:
                raise DirDiffSystemError(dir_entry.path, err) from err
            if is_dir:
                self._descend = dir_entry.path
            return dir_entry.path

        raise StopIteration


class WalkPhase(Enum):
    """
    Enum for the phases of a paired walk.
    """

    DRAIN_LEFT = "drain_left"
    DRAIN_RIGHT = "drain_right"
    DONE = "done"


class DiffIterator:
    """
    Iterator producing one ``DiffEntry`` per relative path in the union of
    two trees.
    """

    def __init__(
        self,
        left_root: Path,
        right_root: Path,
        options: DiffOptions,
    ):
        """
        Initialise a new ``DiffIterator``.

        :param left_root: The left-hand root directory.
        :type left_root: ``Path``
        :param right_root: The right-hand root directory.
        :type right_root: ``Path``
        :param options: Options controlling the traversal.
        :type options: ``DiffOptions``
        """
        self.left_root = left_root
        self.right_root = right_root
        self.phase = WalkPhase.DRAIN_LEFT
        self._left_walk = TreeWalk(
            left_root, options.follow_symlinks, options.sort_by_name
        )
        self._right_walk = TreeWalk(
            right_root, options.follow_symlinks, options.sort_by_name
        )

    def __iter__(self):
        return self

    def _next_left(self) -> Optional[DiffEntry]:
        path = next(self._left_walk, None)
        if path is None:
            return None
        relative = Path(path).relative_to(self.left_root)
        right = DirectoryEntry.resolve(self.right_root / relative)
        left = DirectoryEntry.exists(path)
        return DiffEntry(left, right, relative)

    def _next_right(self) -> Optional[DiffEntry]:
        for path in self._right_walk:
            relative = Path(path).relative_to(self.right_root)
            left_path = self.left_root / relative
            if try_stat(left_path) is not None:
                continue
            left = DirectoryEntry.missing(left_path)
            right = DirectoryEntry.exists(path)
            return DiffEntry(left, right, relative)
        return None

    def __next__(self) -> DiffEntry:
        if self.phase == WalkPhase.DRAIN_LEFT:
            entry = self._next_left()
            if entry is not None:
                _log_debug_walk("Paired '%s'", entry.relative_path)
                return entry
            _log_debug_walk("Left walk of '%s' complete", self.left_root)
            self.phase = WalkPhase.DRAIN_RIGHT

        if self.phase == WalkPhase.DRAIN_RIGHT:
            entry = self._next_right()
            if entry is not None:
                _log_debug_walk("Right only '%s'", entry.relative_path)
                return entry
            _log_debug_walk("Right walk of '%s' complete", self.right_root)
            self.phase = WalkPhase.DONE

        raise StopIteration


class DirDiff:
    """
    A pair of directory trees to compare.
    """

    def __init__(
        self,
        left_root: Union[str, Path],
        right_root: Union[str, Path],
        options: Optional[DiffOptions] = None,
    ):
        """
        Initialise a new ``DirDiff``.

        :param left_root: The left-hand root directory.
        :type left_root: ``Union[str, Path]``
        :param right_root: The right-hand root directory.
        :type right_root: ``Union[str, Path]``
        :param options: Options controlling the traversal.
        :type options: ``Optional[DiffOptions]``
        """
        self.left_root = Path(left_root)
        self.right_root = Path(right_root)
        self.options = options or DiffOptions()

    def __eq__(self, other):
        if not isinstance(other, DirDiff):
            return NotImplemented
        return (self.left_root, self.right_root, self.options) == (
            other.left_root,
            other.right_root,
            other.options,
        )

    def __repr__(self):
        return f"DirDiff({str(self.left_root)!r}, {str(self.right_root)!r})"

    def __iter__(self) -> DiffIterator:
        _log_debug_walk(
            "Starting paired walk of '%s' and '%s'", self.left_root, self.right_root
        )
        return DiffIterator(self.left_root, self.right_root, self.options)


def sort_entries(entries: Iterable[DiffEntry]) -> List[DiffEntry]:
    """
    Return ``entries`` as a list sorted by relative path.

    :param entries: The entries to sort.
    :type entries: ``Iterable[DiffEntry]``
    :returns: A new sorted list.
    :rtype: ``List[DiffEntry]``
    """
    return sorted(entries, key=lambda entry: entry.relative_path.parts)
