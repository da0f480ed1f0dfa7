# Copyright Red Hat
#
# dirdiff/assertion.py - Directory differ assertion types
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Assertion kinds and the error value describing a detected difference.
"""
from typing import Optional, TYPE_CHECKING
from enum import Enum

from dirdiff import DirDiffError

if TYPE_CHECKING:
    from .diffentry import DiffEntry


class AssertionKind(Enum):
    """
    Enum for the reasons two sides of a ``DiffEntry`` differ.
    """

    #: One of the two sides is missing.
    MISSING = "missing"
    #: The two sides have different file types.
    FILE_TYPE = "file_type"
    #: The content of the two sides is different.
    CONTENT = "content"

    @property
    def is_missing(self) -> bool:
        return self is AssertionKind.MISSING

    @property
    def is_file_type(self) -> bool:
        return self is AssertionKind.FILE_TYPE

    @property
    def is_content(self) -> bool:
        return self is AssertionKind.CONTENT


class DiffAssertionError(DirDiffError):
    """
    A difference detected between the two sides of a ``DiffEntry``.

    Instances are returned as values by the ``DiffEntry.check*()`` methods
    and raised by the ``DiffEntry.assert_*()`` methods. They are not
    modified after construction: ``with_msg()`` and ``with_cause()`` return
    new instances.
    """

    def __init__(
        self,
        kind: AssertionKind,
        entry: "DiffEntry",
        msg: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        """
        Initialise a new ``DiffAssertionError``.

        :param kind: The type of difference detected.
        :type kind: ``AssertionKind``
        :param entry: The ``DiffEntry`` for which a difference was detected.
        :type entry: ``DiffEntry``
        :param msg: An optional message to display with the error.
        :type msg: ``Optional[str]``
        :param cause: An optional underlying error found when trying to find
                      a difference.
        :type cause: ``Optional[Exception]``
        """
        self._kind = kind
        self._entry = entry
        self._msg = msg
        self._cause = cause
        super().__init__(self._format())
        if cause is not None:
            self.__cause__ = cause

    @property
    def kind(self) -> AssertionKind:
        """The type of difference detected."""
        return self._kind

    @property
    def entry(self) -> "DiffEntry":
        """The ``DiffEntry`` for which a difference was detected."""
        return self._entry

    @property
    def msg(self) -> Optional[str]:
        return self._msg

    @property
    def cause(self) -> Optional[Exception]:
        """Underlying error found when trying to find a difference."""
        return self._cause

    def with_msg(self, msg: str) -> "DiffAssertionError":
        """
        Return a copy of this error with ``msg`` attached.

        :param msg: The message to display with the error.
        :type msg: ``str``
        :returns: A new ``DiffAssertionError``.
        :rtype: ``DiffAssertionError``
        """
        return DiffAssertionError(self._kind, self._entry, msg, self._cause)

    def with_cause(self, cause: Exception) -> "DiffAssertionError":
        """
        Return a copy of this error with an underlying cause attached.

        :param cause: The error found when trying to find a difference.
        :type cause: ``Exception``
        :returns: A new ``DiffAssertionError``.
        :rtype: ``DiffAssertionError``
        """
        return DiffAssertionError(self._kind, self._entry, self._msg, cause)

    def _format(self) -> str:
        left = self._entry.left
        right = self._entry.right
        msg = self._msg or ""
        if self._kind == AssertionKind.MISSING:
            text = (
                f"One side is missing: {msg}\n"
                f"  left: {str(left.path)!r}\n"
                f"  right: {str(right.path)!r}"
            )
        elif self._kind == AssertionKind.FILE_TYPE:
            text = (
                f"File types differ: {msg}\n"
                f"  left: {str(left.path)!r} is {left.kind_desc}\n"
                f"  right: {str(right.path)!r} is {right.kind_desc}"
            )
        else:
            text = (
                f"Content differs: {msg}\n"
                f"  left: {str(left.path)!r}\n"
                f"  right: {str(right.path)!r}"
            )
        if self._cause is not None:
            text += f"\ncause: {self._cause}"
        return text

    def __repr__(self):
        return (
            f"DiffAssertionError({self._kind}, "
            f"{str(self._entry.relative_path)!r})"
        )

    def to_dict(self):
        """
        Convert this error into a dictionary representation suitable for
        encoding as JSON.

        :returns: A dictionary describing the difference.
        :rtype: ``Dict[str, Any]``
        """
        return {
            "kind": self._kind.value,
            "path": str(self._entry.relative_path),
            "left": str(self._entry.left.path),
            "left_type": self._entry.left.kind_desc,
            "right": str(self._entry.right.path),
            "right_type": self._entry.right.kind_desc,
            "message": self._msg,
            "cause": str(self._cause) if self._cause is not None else None,
        }
