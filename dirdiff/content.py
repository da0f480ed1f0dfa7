# Copyright Red Hat
#
# dirdiff/content.py - Directory differ content comparison
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Byte-exact content comparison for regular files, and location of the first
mismatch for reporting.
"""
from typing import Any, Dict, Optional, Union
from pathlib import Path
import logging

from dirdiff import DIRDIFF_SUBSYSTEM_COMPARE, DirDiffSystemError

from .filetypes import FileTypeCategory, FileTypeDetector
from .options import DiffOptions

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_compare(msg, *args, **kwargs):
    """A wrapper for compare subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": DIRDIFF_SUBSYSTEM_COMPARE}, **kwargs)


#: Block size used when scanning binary content for the first difference.
_SCAN_BLOCK = 4096


def read_bytes(path: Union[str, Path]) -> bytes:
    """
    Read the complete content of ``path``.

    :param path: The file to read.
    :type path: ``Union[str, Path]``
    :returns: The file content.
    :rtype: ``bytes``
    :raises: ``DirDiffSystemError`` if the file cannot be read.
    """
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as err:
        raise DirDiffSystemError(path, err) from err


def files_equal(left: Union[str, Path], right: Union[str, Path]) -> bool:
    """
    Return ``True`` if two regular files have identical content.

    Both files are read into memory in full. Timestamps, permissions and
    ownership are not considered.

    :param left: The left-hand file.
    :type left: ``Union[str, Path]``
    :param right: The right-hand file.
    :type right: ``Union[str, Path]``
    :returns: ``True`` if the content is byte-for-byte identical.
    :rtype: ``bool``
    :raises: ``DirDiffSystemError`` if either file cannot be read.
    """
    equal = read_bytes(left) == read_bytes(right)
    _log_debug_compare(
        "Compared content of '%s' and '%s': %s",
        left,
        right,
        "equal" if equal else "different",
    )
    return equal


class ContentMismatch:
    """
    Location of the first difference between two files.
    """

    #: A line differs in otherwise comparable text files.
    LINE = "line"
    #: The text files agree up to the end of the shorter one.
    LINE_COUNT = "line_count"
    #: A byte differs in binary files.
    BYTE = "byte"
    #: The binary files agree up to the end of the shorter one.
    LENGTH = "length"
    #: One file is text and the other is not.
    ENCODING = "encoding"

    def __init__(
        self,
        mismatch_type: str,
        line_number: Optional[int] = None,
        offset: Optional[int] = None,
        left_excerpt: Optional[str] = None,
        right_excerpt: Optional[str] = None,
        file_type: Optional[str] = None,
    ):
        """
        Initialise a new ``ContentMismatch``.

        :param mismatch_type: One of the ``ContentMismatch`` type constants.
        :type mismatch_type: ``str``
        :param line_number: The 1-based line number of a text mismatch.
        :type line_number: ``Optional[int]``
        :param offset: The 0-based byte offset of a binary mismatch.
        :type offset: ``Optional[int]``
        :param left_excerpt: The differing left-hand line, if any.
        :type left_excerpt: ``Optional[str]``
        :param right_excerpt: The differing right-hand line, if any.
        :type right_excerpt: ``Optional[str]``
        :param file_type: The description of a detected binary file type.
        :type file_type: ``Optional[str]``
        """
        self.mismatch_type = mismatch_type
        self.line_number = line_number
        self.offset = offset
        self.left_excerpt = left_excerpt
        self.right_excerpt = right_excerpt
        self.file_type = file_type

    def __str__(self):
        if self.mismatch_type == self.LINE:
            return (
                f"line {self.line_number} differs: "
                f"{self.left_excerpt!r} != {self.right_excerpt!r}"
            )
        if self.mismatch_type == self.LINE_COUNT:
            return f"line counts differ from line {self.line_number}"
        kind = f" ({self.file_type})" if self.file_type else ""
        if self.mismatch_type == self.BYTE:
            return f"binary content differs at byte {self.offset}{kind}"
        if self.mismatch_type == self.LENGTH:
            return f"binary lengths differ from byte {self.offset}{kind}"
        return "one file is text and the other is binary"

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert this ``ContentMismatch`` into a dictionary representation
        suitable for encoding as JSON.

        :returns: A dictionary mapping this instance's keys to values.
        :rtype: ``Dict[str, Any]``
        """
        return {
            "mismatch_type": self.mismatch_type,
            "line_number": self.line_number,
            "offset": self.offset,
            "left_excerpt": self.left_excerpt,
            "right_excerpt": self.right_excerpt,
            "file_type": self.file_type,
        }


def _decode_text(data: bytes) -> Optional[str]:
    """Return ``data`` decoded as UTF-8, or ``None`` if it looks binary."""
    if b"\x00" in data:
        return None
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None


def _truncate(line: str, width: int) -> str:
    if width and len(line) > width:
        return line[:width] + "..."
    return line


def _first_byte_mismatch(left: bytes, right: bytes) -> Optional[int]:
    """Return the offset of the first differing byte, or ``None``."""
    common = min(len(left), len(right))
    for start in range(0, common, _SCAN_BLOCK):
        end = min(start + _SCAN_BLOCK, common)
        if left[start:end] != right[start:end]:
            for offset in range(start, end):
                if left[offset] != right[offset]:
                    return offset
    return None


def _detect_binary(
    path: Path, detector: FileTypeDetector, use_magic: bool
) -> Optional[str]:
    """
    Return the file type description if file type detection positively
    identifies ``path`` as non-text content, or ``None`` otherwise.
    """
    fti = detector.detect_file_type(path, use_magic=use_magic)
    if fti.category == FileTypeCategory.UNKNOWN or fti.is_text_like:
        return None
    return fti.description


def locate_mismatch(
    left: Union[str, Path],
    right: Union[str, Path],
    options: Optional[DiffOptions] = None,
    detector: Optional[FileTypeDetector] = None,
) -> Optional[ContentMismatch]:
    """
    Locate the first difference between two regular files.

    Files that both decode as text and are not identified as binary by
    file type detection are compared line by line; anything else is
    compared byte by byte.

    :param left: The left-hand file.
    :type left: ``Union[str, Path]``
    :param right: The right-hand file.
    :type right: ``Union[str, Path]``
    :param options: Options controlling file type detection and excerpt
                    width.
    :type options: ``Optional[DiffOptions]``
    :param detector: An optional ``FileTypeDetector`` to reuse.
    :type detector: ``Optional[FileTypeDetector]``
    :returns: The first mismatch, or ``None`` if the files are identical.
    :rtype: ``Optional[ContentMismatch]``
    :raises: ``DirDiffSystemError`` if either file cannot be read.
    """
    options = options or DiffOptions()
    detector = detector or FileTypeDetector()

    left_data = read_bytes(left)
    right_data = read_bytes(right)
    if left_data == right_data:
        return None

    use_magic = options.use_magic_file_type
    file_type = _detect_binary(Path(left), detector, use_magic) or _detect_binary(
        Path(right), detector, use_magic
    )

    left_text = None if file_type else _decode_text(left_data)
    right_text = None if file_type else _decode_text(right_data)

    if left_text is not None and right_text is not None:
        width = options.max_mismatch_context
        left_lines = left_text.splitlines(keepends=True)
        right_lines = right_text.splitlines(keepends=True)
        for index, (left_line, right_line) in enumerate(zip(left_lines, right_lines)):
            if left_line != right_line:
                _log_debug_compare(
                    "First text mismatch at line %d of '%s'", index + 1, left
                )
                return ContentMismatch(
                    ContentMismatch.LINE,
                    line_number=index + 1,
                    left_excerpt=_truncate(left_line, width),
                    right_excerpt=_truncate(right_line, width),
                )
        return ContentMismatch(
            ContentMismatch.LINE_COUNT,
            line_number=min(len(left_lines), len(right_lines)) + 1,
        )

    if (left_text is None) != (right_text is None):
        return ContentMismatch(ContentMismatch.ENCODING)

    offset = _first_byte_mismatch(left_data, right_data)
    if offset is not None:
        _log_debug_compare("First binary mismatch at byte %d of '%s'", offset, left)
        return ContentMismatch(ContentMismatch.BYTE, offset=offset, file_type=file_type)
    return ContentMismatch(
        ContentMismatch.LENGTH,
        offset=min(len(left_data), len(right_data)),
        file_type=file_type,
    )
