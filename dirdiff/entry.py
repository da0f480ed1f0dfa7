# Copyright Red Hat
#
# dirdiff/entry.py - Directory differ entry resolution
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Directory entry resolution.

A ``DirectoryEntry`` records one side of a comparison: a path and the kind of
object found there when it was resolved, or ``None`` if nothing exists at
that path.
"""
from typing import Optional, Union
from pathlib import Path
from enum import Enum
import logging
import errno
import stat
import os

from dirdiff import DIRDIFF_SUBSYSTEM_WALK, DirDiffSystemError

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_walk(msg, *args, **kwargs):
    """A wrapper for walk subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": DIRDIFF_SUBSYSTEM_WALK}, **kwargs)


#: ``errno`` values meaning "nothing exists at this path".
_ABSENT_ERRNOS = (errno.ENOENT, errno.ENOTDIR)


class FileKind(Enum):
    """
    Enum for the kinds of file system object.
    """

    FILE = "file"
    DIRECTORY = "dir"
    SYMLINK = "symbolic link"
    BLOCK = "block device"
    CHAR = "char device"
    FIFO = "FIFO"
    SOCKET = "socket"
    OTHER = "other"

    @classmethod
    def from_mode(cls, mode: int) -> "FileKind":
        """
        Return the ``FileKind`` for an ``st_mode`` value.

        :param mode: The ``st_mode`` field of an ``os.stat_result``.
        :type mode: ``int``
        :returns: The matching file kind.
        :rtype: ``FileKind``
        """
        if stat.S_ISREG(mode):
            return cls.FILE
        if stat.S_ISDIR(mode):
            return cls.DIRECTORY
        if stat.S_ISLNK(mode):
            return cls.SYMLINK
        if stat.S_ISBLK(mode):
            return cls.BLOCK
        if stat.S_ISCHR(mode):
            return cls.CHAR
        if stat.S_ISFIFO(mode):
            return cls.FIFO
        if stat.S_ISSOCK(mode):
            return cls.SOCKET
        return cls.OTHER


def try_stat(path: Union[str, Path]) -> Optional[os.stat_result]:
    """
    Stat ``path`` without following a final symbolic link.

    :param path: The path to examine.
    :type path: ``Union[str, Path]``
    :returns: The ``os.stat_result`` for ``path`` or ``None`` if no object
              exists at ``path``.
    :rtype: ``Optional[os.stat_result]``
    :raises: ``DirDiffSystemError`` if the call fails for any other reason.
    """
    try:
        return os.lstat(path)
    except OSError as err:
        if err.errno in _ABSENT_ERRNOS:
            return None
        raise DirDiffSystemError(path, err) from err


class DirectoryEntry:
    """
    One side of a comparison at a single relative path.
    """

    __slots__ = ("_path", "_file_kind")

    def __init__(self, path: Union[str, Path], file_kind: Optional[FileKind]):
        """
        Initialise a new ``DirectoryEntry`` object.

        Use ``exists()``, ``missing()`` or ``resolve()`` rather than calling
        this directly.

        :param path: The full path this entry represents.
        :type path: ``Union[str, Path]``
        :param file_kind: The kind of object at ``path`` or ``None`` if the
                          path does not exist.
        :type file_kind: ``Optional[FileKind]``
        """
        object.__setattr__(self, "_path", Path(path))
        object.__setattr__(self, "_file_kind", file_kind)

    def __setattr__(self, name, value):
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    @classmethod
    def exists(cls, path: Union[str, Path]) -> "DirectoryEntry":
        """
        Resolve a path known to exist.

        :param path: The path to resolve.
        :type path: ``Union[str, Path]``
        :returns: A ``DirectoryEntry`` recording the kind found at ``path``.
        :rtype: ``DirectoryEntry``
        :raises: ``DirDiffSystemError`` if ``path`` cannot be examined.
        """
        try:
            path_stat = os.lstat(path)
        except OSError as err:
            raise DirDiffSystemError(path, err) from err
        return cls(path, FileKind.from_mode(path_stat.st_mode))

    @classmethod
    def missing(cls, path: Union[str, Path]) -> "DirectoryEntry":
        """
        Build an entry for a path already known not to exist.

        :param path: The absent path.
        :type path: ``Union[str, Path]``
        :returns: A ``DirectoryEntry`` with no file kind.
        :rtype: ``DirectoryEntry``
        """
        return cls(path, None)

    @classmethod
    def resolve(cls, path: Union[str, Path]) -> "DirectoryEntry":
        """
        Resolve ``path`` from a single ``lstat()`` call.

        :param path: The path to resolve.
        :type path: ``Union[str, Path]``
        :returns: An existing or missing ``DirectoryEntry``.
        :rtype: ``DirectoryEntry``
        :raises: ``DirDiffSystemError`` if ``path`` cannot be examined.
        """
        path_stat = try_stat(path)
        if path_stat is None:
            _log_debug_walk("Resolved missing path '%s'", path)
            return cls.missing(path)
        return cls(path, FileKind.from_mode(path_stat.st_mode))

    @property
    def path(self) -> Path:
        """The full path of this entry."""
        return self._path

    @property
    def file_kind(self) -> Optional[FileKind]:
        """The kind of this entry, or ``None`` if it does not exist."""
        return self._file_kind

    @property
    def file_name(self) -> str:
        """
        The final component of this entry's path, or the full path if it
        has none.
        """
        return self._path.name or str(self._path)

    @property
    def is_missing(self) -> bool:
        return self._file_kind is None

    @property
    def is_file(self) -> bool:
        return self._file_kind == FileKind.FILE

    @property
    def is_dir(self) -> bool:
        return self._file_kind == FileKind.DIRECTORY

    @property
    def kind_desc(self) -> str:
        """
        A short description of this entry's kind: "missing" for absent
        entries.
        """
        if self._file_kind is None:
            return "missing"
        return self._file_kind.value

    def metadata(self) -> os.stat_result:
        """
        Fetch current metadata for this entry.

        :returns: A fresh ``os.lstat()`` result for this path.
        :rtype: ``os.stat_result``
        :raises: ``DirDiffSystemError`` if the path cannot be examined.
        """
        try:
            return os.lstat(self._path)
        except OSError as err:
            raise DirDiffSystemError(self._path, err) from err

    def __eq__(self, other):
        if not isinstance(other, DirectoryEntry):
            return NotImplemented
        return (self._path, self._file_kind) == (other.path, other.file_kind)

    def __hash__(self):
        return hash((self._path, self._file_kind))

    def __repr__(self):
        return f"DirectoryEntry({str(self._path)!r}, {self._file_kind})"

    def __str__(self):
        return f"{self._path} ({self.kind_desc})"
