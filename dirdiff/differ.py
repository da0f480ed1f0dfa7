# Copyright Red Hat
#
# dirdiff/differ.py - Directory differ top-level interface
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Top-level directory comparison functions.
"""
from typing import Iterator, Optional, Union
from pathlib import Path
import logging

from dirdiff import DIRDIFF_SUBSYSTEM_COMPARE, DirDiffArgumentError, DirDiffError

from .assertion import DiffAssertionError
from .content import locate_mismatch
from .filetypes import FileTypeDetector
from .options import DiffOptions
from .walk import DirDiff

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_compare(msg, *args, **kwargs):
    """A wrapper for compare subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": DIRDIFF_SUBSYSTEM_COMPARE}, **kwargs)


def is_different(
    left_root: Union[str, Path],
    right_root: Union[str, Path],
    options: Optional[DiffOptions] = None,
) -> bool:
    """
    Are the contents of two directories different?

    Stops at the first difference found. A file that cannot be read while
    comparing content aborts the comparison with the read error.

    :param left_root: The left-hand root directory.
    :type left_root: ``Union[str, Path]``
    :param right_root: The right-hand root directory.
    :type right_root: ``Union[str, Path]``
    :param options: Options controlling the comparison.
    :type options: ``Optional[DiffOptions]``
    :returns: ``True`` if any path differs between the two trees.
    :rtype: ``bool``
    :raises: ``DirDiffSystemError`` if either tree cannot be walked or a
             file's content cannot be read.
    """
    for entry in DirDiff(left_root, right_root, options):
        err = entry.check()
        if err is not None:
            raise_for_cause(err)
            _log_debug_compare("First difference: %r", err)
            return True
    return False


def raise_for_cause(err: DiffAssertionError):
    """
    Re-raise the I/O error behind a difference that could not be decided.

    :param err: A difference returned by ``DiffEntry.check()``.
    :type err: ``DiffAssertionError``
    :raises: The ``cause`` of ``err``, if it has one.
    """
    if err.cause is not None:
        raise err.cause


def _annotate(
    err: DiffAssertionError, options: DiffOptions, detector: FileTypeDetector
) -> DiffAssertionError:
    """
    Attach the location of the first content mismatch to ``err``.
    """
    if not err.kind.is_content or err.cause is not None:
        return err
    entry = err.entry
    try:
        mismatch = locate_mismatch(
            entry.left.path, entry.right.path, options=options, detector=detector
        )
    except DirDiffError as cause:
        return err.with_cause(cause)
    if mismatch is None:
        return err
    return err.with_msg(str(mismatch))


def find_differences(
    left_root: Union[str, Path],
    right_root: Union[str, Path],
    options: Optional[DiffOptions] = None,
) -> Iterator[DiffAssertionError]:
    """
    Generate a ``DiffAssertionError`` for every path that differs between
    two directories, in walk order.

    Content differences carry a message describing the first mismatch.

    :param left_root: The left-hand root directory.
    :type left_root: ``Union[str, Path]``
    :param right_root: The right-hand root directory.
    :type right_root: ``Union[str, Path]``
    :param options: Options controlling the comparison.
    :type options: ``Optional[DiffOptions]``
    :returns: An iterator over the differences found.
    :rtype: ``Iterator[DiffAssertionError]``
    :raises: ``DirDiffSystemError`` if either tree cannot be walked.
    """
    options = options or DiffOptions()
    detector = FileTypeDetector()
    for entry in DirDiff(left_root, right_root, options):
        err = entry.check()
        if err is not None:
            yield _annotate(err, options, detector)


def see_difference(
    left_root: Union[str, Path],
    right_root: Union[str, Path],
    options: Optional[DiffOptions] = None,
) -> Optional[DiffAssertionError]:
    """
    Identify the first difference between two directories.

    :param left_root: The left-hand root directory.
    :type left_root: ``Union[str, Path]``
    :param right_root: The right-hand root directory.
    :type right_root: ``Union[str, Path]``
    :param options: Options controlling the comparison.
    :type options: ``Optional[DiffOptions]``
    :returns: The first difference found, or ``None`` if the trees match.
    :rtype: ``Optional[DiffAssertionError]``
    :raises: ``DirDiffSystemError`` if either tree cannot be walked.
    """
    return next(find_differences(left_root, right_root, options), None)


def assert_same(
    left_root: Union[str, Path],
    right_root: Union[str, Path],
    options: Optional[DiffOptions] = None,
):
    """
    Assert that two directories have the same structure and content.

    :param left_root: The left-hand root directory.
    :type left_root: ``Union[str, Path]``
    :param right_root: The right-hand root directory.
    :type right_root: ``Union[str, Path]``
    :param options: Options controlling the comparison.
    :type options: ``Optional[DiffOptions]``
    :raises: ``DiffAssertionError`` describing the first difference, or
             ``DirDiffArgumentError`` if either root is not a directory.
    """
    for root in (left_root, right_root):
        if not Path(root).is_dir():
            raise DirDiffArgumentError(f"Not a directory: {root}")
    err = see_difference(left_root, right_root, options)
    if err is not None:
        raise err
