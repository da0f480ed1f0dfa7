# Copyright Red Hat
#
# dirdiff/_dirdiff.py - Directory differ global definitions
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Global definitions for the top-level dirdiff package.
"""
import logging

_log = logging.getLogger("dirdiff")

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error

# Dirdiff debugging subsystem mask
DIRDIFF_DEBUG_WALK = 1
DIRDIFF_DEBUG_COMPARE = 2
DIRDIFF_DEBUG_COMMAND = 4
DIRDIFF_DEBUG_ALL = DIRDIFF_DEBUG_WALK | DIRDIFF_DEBUG_COMPARE | DIRDIFF_DEBUG_COMMAND

# Dirdiff debugging subsystem names
DIRDIFF_SUBSYSTEM_WALK = "dirdiff.walk"
DIRDIFF_SUBSYSTEM_COMPARE = "dirdiff.compare"
DIRDIFF_SUBSYSTEM_COMMAND = "dirdiff.command"

_DEBUG_MASK_TO_SUBSYSTEM = {
    DIRDIFF_DEBUG_WALK: DIRDIFF_SUBSYSTEM_WALK,
    DIRDIFF_DEBUG_COMPARE: DIRDIFF_SUBSYSTEM_COMPARE,
    DIRDIFF_DEBUG_COMMAND: DIRDIFF_SUBSYSTEM_COMMAND,
}

_debug_subsystems = set()


class SubsystemFilter(logging.Filter):
    """
    Filters DEBUG records based on a set of enabled subsystem names.
    Non-DEBUG records or DEBUG records without a 'subsystem' attribute
    are always passed through.
    """

    def __init__(self, name=""):
        super().__init__(name)
        self.enabled_subsystems = set(_debug_subsystems)

    def filter(self, record):
        if record.levelno != logging.DEBUG:
            return True

        if not hasattr(record, "subsystem"):
            return True

        return record.subsystem in self.enabled_subsystems

    def set_debug_subsystems(self, subsystems):
        """Sets the collection of subsystems to allow."""
        self.enabled_subsystems = set(subsystems)


def get_debug_mask():
    """
    Return the current debug mask for the ``dirdiff`` package.

    :returns: The current debug mask value
    :rtype: int
    """
    enabled_subsystems = set(_debug_subsystems)
    dirdiff_log = logging.getLogger("dirdiff")

    for handler in dirdiff_log.handlers:
        for f in handler.filters:
            if isinstance(f, SubsystemFilter):
                enabled_subsystems.update(f.enabled_subsystems)

    mask_map = {v: k for k, v in _DEBUG_MASK_TO_SUBSYSTEM.items()}
    mask = 0
    for subsystem_name in enabled_subsystems:
        mask |= mask_map.get(subsystem_name, 0)
    return mask


def set_debug_mask(mask):
    """
    Set the debug mask for the ``dirdiff`` package.

    :param mask: the logical OR of the ``DIRDIFF_DEBUG_*``
                 values to log.
    :rtype: None
    """
    # pylint: disable=global-statement
    global _debug_subsystems

    if mask < 0 or mask > DIRDIFF_DEBUG_ALL:
        raise ValueError(f"Invalid dirdiff debug mask: {mask}")

    enabled_subsystems = [
        subsystem_name
        for flag, subsystem_name in _DEBUG_MASK_TO_SUBSYSTEM.items()
        if mask & flag
    ]

    dirdiff_log = logging.getLogger("dirdiff")
    for handler in dirdiff_log.handlers:
        for f in handler.filters:
            if isinstance(f, SubsystemFilter):
                f.set_debug_subsystems(enabled_subsystems)

    _debug_subsystems = set(enabled_subsystems)


#
# Dirdiff exception types
#


class DirDiffError(Exception):
    """
    Base class for directory differ errors.
    """


class DirDiffSystemError(DirDiffError):
    """
    An error when calling the operating system: the walk cannot proceed.
    """

    def __init__(self, path, err: OSError):
        """
        Initialise a new ``DirDiffSystemError`` exception.

        :param path: The path that was being accessed.
        :param err: The underlying ``OSError``.
        """
        self.path, self.errno, self.strerror = path, err.errno, err.strerror
        super().__init__(f"Error accessing {path}: {err.strerror or err}")


class DirDiffArgumentError(DirDiffError):
    """
    An invalid argument was passed to a directory differ API call.
    """


__all__ = [
    "DIRDIFF_DEBUG_WALK",
    "DIRDIFF_DEBUG_COMPARE",
    "DIRDIFF_DEBUG_COMMAND",
    "DIRDIFF_DEBUG_ALL",
    "DIRDIFF_SUBSYSTEM_WALK",
    "DIRDIFF_SUBSYSTEM_COMPARE",
    "DIRDIFF_SUBSYSTEM_COMMAND",
    "SubsystemFilter",
    "get_debug_mask",
    "set_debug_mask",
    "DirDiffError",
    "DirDiffSystemError",
    "DirDiffArgumentError",
]
