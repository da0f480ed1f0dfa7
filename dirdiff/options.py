# Copyright Red Hat
#
# dirdiff/options.py - Directory differ options
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Directory comparison options.
"""
from dataclasses import dataclass, fields
from argparse import Namespace
import logging

from dirdiff import DirDiffArgumentError

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


@dataclass(frozen=True)
class DiffOptions:
    """
    Directory comparison options.
    """

    #: Descend into symbolic links to directories when walking trees
    follow_symlinks: bool = False
    #: Visit directory members in file name order
    sort_by_name: bool = True
    #: Generate file type information using libmagic
    use_magic_file_type: bool = False
    #: Maximum width of line excerpts in mismatch messages (0 = unlimited)
    max_mismatch_context: int = 80
    #: Do not output progress or status updates
    quiet: bool = False

    def __post_init__(self):
        if self.max_mismatch_context < 0:
            raise DirDiffArgumentError(
                f"Invalid max_mismatch_context: {self.max_mismatch_context}"
            )

    def __str__(self):
        """
        Return a human readable string representation of this
        ``DiffOptions`` instance.

        :returns: A human readable string.
        :rtype: ``str``
        """
        return "\n".join(f"{key}={val}" for key, val in self.__dict__.items())

    @classmethod
    def from_cmd_args(cls, cmd_args: Namespace) -> "DiffOptions":
        """
        Initialise DiffOptions from command line arguments.

        Construct a new ``DiffOptions`` object from the command line
        arguments in ``cmd_args``. Arguments that do not correspond to an
        option field are ignored; ``None`` values select the default.

        :param cmd_args: The command line arguments.
        :type cmd_args: ``Namespace``
        :returns: A new ``DiffOptions`` instance
        :rtype: ``DiffOptions``
        """
        field_names = {f.name for f in fields(cls)}
        kwargs = {
            name: getattr(cmd_args, name)
            for name in field_names
            if getattr(cmd_args, name, None) is not None
        }
        options = cls(**kwargs)
        _log_debug("Initialised DiffOptions from arguments: %s", repr(options))
        return options
