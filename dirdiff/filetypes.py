# Copyright Red Hat
#
# dirdiff/filetypes.py - Directory differ file types
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
File type information support.

Used when locating a content mismatch to decide whether two files should be
compared line by line or byte by byte.
"""
from typing import ClassVar, Dict, Tuple
from pathlib import Path
from enum import Enum
import logging

from dirdiff import DIRDIFF_SUBSYSTEM_COMPARE

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_compare(msg, *args, **kwargs):
    """A wrapper for compare subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": DIRDIFF_SUBSYSTEM_COMPARE}, **kwargs)


# Format: ".ext": ("mime/type", "description starting with lowercase")
TEXT_EXTENSION_MAP = {
    ".txt": ("text/plain", "plain text document"),
    ".md": ("text/markdown", "markdown documentation"),
    ".rst": ("text/x-rst", "reStructuredText document"),
    ".json": ("application/json", "json data file"),
    ".xml": ("application/xml", "xml document"),
    ".yaml": ("application/yaml", "yaml configuration file"),
    ".yml": ("application/yaml", "yaml configuration file"),
    ".toml": ("application/toml", "toml configuration file"),
    ".ini": ("text/x-ini", "ini configuration file"),
    ".cfg": ("text/x-config", "configuration file"),
    ".conf": ("text/x-config", "configuration file"),
    ".csv": ("text/csv", "comma-separated values"),
    ".log": ("text/x-log", "log file"),
    ".html": ("text/html", "html document"),
    ".css": ("text/css", "cascading style sheet"),
    ".js": ("text/javascript", "javascript source code"),
    ".sh": ("application/x-sh", "shell script"),
    ".py": ("text/x-python", "python source code"),
    ".c": ("text/x-c", "c source code"),
    ".h": ("text/x-c", "c header file"),
    ".cpp": ("text/x-c++", "c++ source code"),
    ".rs": ("text/x-rust", "rust source code"),
    ".go": ("text/x-go", "go source code"),
    ".java": ("text/x-java-source", "java source code"),
    ".diff": ("text/x-diff", "unified diff"),
    ".patch": ("text/x-diff", "unified diff"),
}

TEXT_FILENAME_MAP = {
    "Makefile": ("text/x-makefile", "makefile"),
    "Dockerfile": ("text/x-dockerfile", "dockerfile"),
    "README": ("text/plain", "readme document"),
    "LICENSE": ("text/plain", "license document"),
}

BINARY_EXTENSION_MAP = {
    ".png": ("image/png", "png image"),
    ".jpg": ("image/jpeg", "jpeg image"),
    ".jpeg": ("image/jpeg", "jpeg image"),
    ".gif": ("image/gif", "gif image"),
    ".pdf": ("application/pdf", "pdf document"),
    ".zip": ("application/zip", "zip archive"),
    ".gz": ("application/gzip", "gzip compressed data"),
    ".xz": ("application/x-xz", "xz compressed data"),
    ".tar": ("application/x-tar", "tar archive"),
    ".so": ("application/x-sharedlib", "shared library"),
    ".o": ("application/x-object", "object file"),
    ".pyc": ("application/x-python-code", "python bytecode"),
    ".sqlite": ("application/vnd.sqlite3", "sqlite database"),
    ".mp3": ("audio/mpeg", "mp3 audio"),
    ".mp4": ("video/mp4", "mp4 video"),
}


def _guess_file(file_path: Path) -> Tuple[str, str]:
    """
    Attempt to guess a file's MIME type and description based on the file name
    and extension.

    :param file_path: A ``Path`` instance containing the file path to check.
    :type file_path: ``Path``
    :returns: A 2-tuple containing (mime_type, description).
    :rtype: ``Tuple[str, str]``
    """
    suffix = file_path.suffix.lower()
    if suffix in BINARY_EXTENSION_MAP:
        return BINARY_EXTENSION_MAP[suffix]
    if suffix in TEXT_EXTENSION_MAP:
        return TEXT_EXTENSION_MAP[suffix]
    if file_path.name in TEXT_FILENAME_MAP:
        return TEXT_FILENAME_MAP[file_path.name]
    return ("application/octet-stream", "unknown file type")


class FileTypeCategory(Enum):
    """
    Enum for file type categories.
    """

    TEXT = "text"
    BINARY = "binary"
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    ARCHIVE = "archive"
    EXECUTABLE = "executable"
    CONFIG = "config"
    LOG = "log"
    DATABASE = "database"
    DOCUMENT = "document"
    SOURCE_CODE = "source_code"
    UNKNOWN = "unknown"


class FileTypeInfo:
    """
    Class representing file type information.
    """

    def __init__(
        self,
        mime_type: str,
        description: str,
        category: FileTypeCategory,
    ):
        """
        Initialise a new ``FileTypeInfo`` object.

        :param mime_type: The detected MIME type.
        :type mime_type: ``str``
        :param description: Type description, used in mismatch messages.
        :type description: ``str``
        :param category: File type category.
        :type category: ``FileTypeCategory``
        """
        self.mime_type = mime_type
        self.description = description
        self.category = category
        self.is_text_like = category in (
            FileTypeCategory.TEXT,
            FileTypeCategory.CONFIG,
            FileTypeCategory.LOG,
            FileTypeCategory.SOURCE_CODE,
        ) or (category == FileTypeCategory.DOCUMENT and mime_type.startswith("text/"))


class FileTypeDetector:
    """
    Detect file types from names, or using ``magic`` from file-magic.
    """

    # fmt: off
    category_rules: ClassVar[Dict[str, FileTypeCategory]] = {
        "application/octet-stream": FileTypeCategory.UNKNOWN,
        "application/zip": FileTypeCategory.ARCHIVE,
        "application/gzip": FileTypeCategory.ARCHIVE,
        "application/x-xz": FileTypeCategory.ARCHIVE,
        "application/x-tar": FileTypeCategory.ARCHIVE,
        "application/x-sharedlib": FileTypeCategory.EXECUTABLE,
        "application/x-executable": FileTypeCategory.EXECUTABLE,
        "application/x-object": FileTypeCategory.EXECUTABLE,
        "application/x-python-code": FileTypeCategory.EXECUTABLE,
        "application/pdf": FileTypeCategory.DOCUMENT,
        "text/markdown": FileTypeCategory.DOCUMENT,
        "text/x-rst": FileTypeCategory.DOCUMENT,
        "application/json": FileTypeCategory.CONFIG,
        "application/xml": FileTypeCategory.CONFIG,
        "text/xml": FileTypeCategory.CONFIG,
        "application/yaml": FileTypeCategory.CONFIG,
        "application/toml": FileTypeCategory.CONFIG,
        "text/x-ini": FileTypeCategory.CONFIG,
        "text/x-config": FileTypeCategory.CONFIG,
        "text/x-log": FileTypeCategory.LOG,
        "application/vnd.sqlite3": FileTypeCategory.DATABASE,
        "application/x-sqlite3": FileTypeCategory.DATABASE,
        "application/x-sh": FileTypeCategory.SOURCE_CODE,
        "text/x-python": FileTypeCategory.SOURCE_CODE,
        "text/x-c": FileTypeCategory.SOURCE_CODE,
        "text/javascript": FileTypeCategory.SOURCE_CODE,
        "text/html": FileTypeCategory.SOURCE_CODE,
        "text/css": FileTypeCategory.SOURCE_CODE,
        "text/": FileTypeCategory.TEXT,
        "image/": FileTypeCategory.IMAGE,
        "audio/": FileTypeCategory.AUDIO,
        "video/": FileTypeCategory.VIDEO,
        "inode/x-empty": FileTypeCategory.TEXT,
    }
    # fmt: on

    def detect_file_type(self, file_path: Path, use_magic=False) -> FileTypeInfo:
        """
        Detect file type information, optionally using file-magic for
        MIME type detection.

        :param file_path: The path to the file to inspect.
        :type file_path: ``Path``.
        :returns: File type information for ``file_path``.
        :rtype: ``FileTypeInfo``
        """
        if use_magic:
            # libmagic is only loaded when requested.
            import magic  # pylint: disable=import-outside-toplevel

            # c9s magic does not have magic.error
            if hasattr(magic, "error"):
                magic_errors = (magic.error, OSError, ValueError)
            else:
                magic_errors = (OSError, ValueError)

            try:
                fm = magic.detect_from_filename(str(file_path))
            except magic_errors as err:
                _log_warn("Error detecting file type for %s: %s", str(file_path), err)
                return FileTypeInfo(
                    "application/octet-stream", "unknown", FileTypeCategory.UNKNOWN
                )
            category = self._categorize_file(fm.mime_type)
            _log_debug_compare(
                "Detected %s as %s (%s)", file_path, fm.mime_type, category.value
            )
            return FileTypeInfo(fm.mime_type, fm.name, category)

        mime_type, description = _guess_file(file_path)
        category = self._categorize_file(mime_type)
        return FileTypeInfo(mime_type, description, category)

    def _categorize_file(self, mime_type: str) -> FileTypeCategory:
        """
        Categorize file based on MIME type.

        :param mime_type: Detected file MIME type.
        :type mime_type: ``str``
        :returns: File type categorization.
        :rtype: ``FileTypeCategory``
        """
        mime_type = mime_type.lower()
        for pattern, category in self.category_rules.items():
            if mime_type.startswith(pattern):
                return category
        return FileTypeCategory.BINARY
