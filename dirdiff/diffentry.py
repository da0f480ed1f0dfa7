# Copyright Red Hat
#
# dirdiff/diffentry.py - Directory differ diff entries and policy
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Paired directory entries and the assertion policy applied to them.

The ``check*()`` methods return ``None`` when the entry passes and a
``DiffAssertionError`` value when it does not. The ``assert_*()`` methods
return the entry itself on success and raise the ``DiffAssertionError``
otherwise.
"""
from typing import Optional, Union
from pathlib import Path
import logging

from dirdiff import DIRDIFF_SUBSYSTEM_COMPARE, DirDiffError

from .assertion import AssertionKind, DiffAssertionError
from .content import files_equal
from .entry import DirectoryEntry

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_compare(msg, *args, **kwargs):
    """A wrapper for compare subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": DIRDIFF_SUBSYSTEM_COMPARE}, **kwargs)


class DiffEntry:
    """
    One relative path considered under both the left and right roots.
    """

    __slots__ = ("_left", "_right", "_relative_path")

    def __init__(
        self,
        left: DirectoryEntry,
        right: DirectoryEntry,
        relative_path: Union[str, Path],
    ):
        """
        Initialise a new ``DiffEntry`` object.

        :param left: The left-hand side of the comparison.
        :type left: ``DirectoryEntry``
        :param right: The right-hand side of the comparison.
        :type right: ``DirectoryEntry``
        :param relative_path: The path of this entry relative to both roots.
        :type relative_path: ``Union[str, Path]``
        :raises: ``ValueError`` if both sides are missing.
        """
        if left.is_missing and right.is_missing:
            raise ValueError(
                f"DiffEntry for '{relative_path}' cannot be missing on both sides"
            )
        object.__setattr__(self, "_left", left)
        object.__setattr__(self, "_right", right)
        object.__setattr__(self, "_relative_path", Path(relative_path))

    def __setattr__(self, name, value):
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    @property
    def left(self) -> DirectoryEntry:
        return self._left

    @property
    def right(self) -> DirectoryEntry:
        return self._right

    @property
    def relative_path(self) -> Path:
        return self._relative_path

    def __eq__(self, other):
        if not isinstance(other, DiffEntry):
            return NotImplemented
        return (self._left, self._right) == (other.left, other.right)

    def __hash__(self):
        return hash((self._left, self._right))

    def __repr__(self):
        return f"DiffEntry({self._left!r}, {self._right!r})"

    def __str__(self):
        return (
            f"{self._relative_path}: "
            f"{self._left.kind_desc} <> {self._right.kind_desc}"
        )

    #
    # Value returning policy checks
    #

    def check_exists(self) -> Optional[DiffAssertionError]:
        """
        Check that both sides of this entry exist.

        :returns: ``None`` if both sides exist, or a ``MISSING`` assertion.
        :rtype: ``Optional[DiffAssertionError]``
        """
        if self._left.is_missing or self._right.is_missing:
            return DiffAssertionError(AssertionKind.MISSING, self)
        return None

    def check_file_type(self) -> Optional[DiffAssertionError]:
        """
        Check that both sides of this entry have the same file kind.

        Only compares kinds: an entry with a missing side passes this check.

        :returns: ``None`` if the kinds agree or a side is missing, or a
                  ``FILE_TYPE`` assertion.
        :rtype: ``Optional[DiffAssertionError]``
        """
        left_kind = self._left.file_kind
        right_kind = self._right.file_kind
        if left_kind is None or right_kind is None:
            return None
        if left_kind != right_kind:
            return DiffAssertionError(AssertionKind.FILE_TYPE, self)
        return None

    def check_content(self) -> Optional[DiffAssertionError]:
        """
        Check that both sides of this entry have the same content.

        Passes without reading anything unless both sides are regular files.
        A failure to read either file is reported as a ``CONTENT`` assertion
        carrying the read error as its cause.

        :returns: ``None`` if the content is identical or either side is not
                  a regular file, or a ``CONTENT`` assertion.
        :rtype: ``Optional[DiffAssertionError]``
        """
        if not (self._left.is_file and self._right.is_file):
            return None
        try:
            if files_equal(self._left.path, self._right.path):
                return None
        except DirDiffError as err:
            _log_warn("Could not compare content of '%s': %s", self._relative_path, err)
            return DiffAssertionError(AssertionKind.CONTENT, self).with_cause(err)
        return DiffAssertionError(AssertionKind.CONTENT, self)

    def check(self) -> Optional[DiffAssertionError]:
        """
        Apply the default policy: existence, then file type, then content.

        Entries whose sides are both directories, or both the same kind of
        non-regular file, pass without further comparison.

        :returns: ``None`` if the two sides are equivalent, or the first
                  failing assertion.
        :rtype: ``Optional[DiffAssertionError]``
        """
        err = self.check_exists()
        if err is None:
            err = self.check_file_type()
        if err is None and self._left.is_file:
            err = self.check_content()
        if err is not None:
            _log_debug_compare(
                "Entry '%s' failed %s check", self._relative_path, err.kind.value
            )
        return err

    #
    # Raising policy checks
    #

    def _raise_if(self, err: Optional[DiffAssertionError]) -> "DiffEntry":
        if err is not None:
            raise err
        return self

    def assert_exists(self) -> "DiffEntry":
        """
        Assert that both sides of this entry exist.

        :returns: This ``DiffEntry``.
        :raises: ``DiffAssertionError`` of kind ``MISSING``.
        """
        return self._raise_if(self.check_exists())

    def assert_file_type(self) -> "DiffEntry":
        """
        Assert that both sides of this entry have the same file kind.

        :returns: This ``DiffEntry``.
        :raises: ``DiffAssertionError`` of kind ``FILE_TYPE``.
        """
        return self._raise_if(self.check_file_type())

    def assert_content(self) -> "DiffEntry":
        """
        Assert that both sides of this entry have the same content.

        :returns: This ``DiffEntry``.
        :raises: ``DiffAssertionError`` of kind ``CONTENT``.
        """
        return self._raise_if(self.check_content())

    def assert_same(self) -> "DiffEntry":
        """
        Assert that this entry passes the default policy.

        :returns: This ``DiffEntry``.
        :raises: ``DiffAssertionError``
        """
        return self._raise_if(self.check())
