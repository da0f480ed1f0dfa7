# Copyright Red Hat
#
# dirdiff/command.py - Directory differ command interface
#
# This file is part of the dirdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""The ``dirdiff.command`` module provides the dirdiff command line
interface.

Exit status follows diff(1): 0 if the trees are the same, 1 if they differ
and 2 if the comparison could not be completed.
"""
from argparse import ArgumentParser
from os.path import basename
from json import dumps
import logging
import sys

from dirdiff import (
    DIRDIFF_DEBUG_WALK,
    DIRDIFF_DEBUG_COMPARE,
    DIRDIFF_DEBUG_COMMAND,
    DIRDIFF_DEBUG_ALL,
    DIRDIFF_SUBSYSTEM_COMMAND,
    DirDiffError,
    SubsystemFilter,
    set_debug_mask,
    __version__,
)
from .differ import find_differences, raise_for_cause
from .options import DiffOptions

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_command(msg, *args, **kwargs):
    """A wrapper for command subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": DIRDIFF_SUBSYSTEM_COMMAND}, **kwargs)


_DEFAULT_LOG_LEVEL = logging.WARNING
_CONSOLE_HANDLER = None

#: Exit status: no differences found.
STATUS_SAME = 0
#: Exit status: differences found.
STATUS_DIFFERENT = 1
#: Exit status: the comparison failed.
STATUS_ERROR = 2


def _summary_line(err) -> str:
    """
    Return a one line description of a difference.
    """
    entry = err.entry
    path = entry.relative_path
    if err.kind.is_missing:
        side = "right" if entry.left.is_missing else "left"
        return f"Only in {side}: {path}"
    if err.kind.is_file_type:
        return (
            f"File types differ: {path} "
            f"({entry.left.kind_desc} <> {entry.right.kind_desc})"
        )
    detail = f": {err.msg}" if err.msg else ""
    return f"Content differs: {path}{detail}"


def diff_dirs(cmd_args) -> int:
    """
    Directory diff command handler.

    :param cmd_args: Command line arguments for the command
    :returns: integer status code returned from ``main()``
    """
    options = DiffOptions.from_cmd_args(cmd_args)
    left = cmd_args.left
    right = cmd_args.right

    found = []
    for err in find_differences(left, right, options):
        raise_for_cause(err)
        found.append(err)
        if not cmd_args.all:
            break

    _log_debug_command("Found %d differences", len(found))

    if cmd_args.json:
        print(dumps([err.to_dict() for err in found], indent=4))
    elif not options.quiet:
        for err in found:
            print(_summary_line(err))

    return STATUS_DIFFERENT if found else STATUS_SAME


def setup_logging(cmd_args):
    """
    Set up dirdiff logging.
    """
    # pylint: disable=global-statement
    global _CONSOLE_HANDLER
    level = _DEFAULT_LOG_LEVEL
    if cmd_args.verbose and cmd_args.verbose > 1:
        level = logging.DEBUG
    elif cmd_args.verbose and cmd_args.verbose > 0:
        level = logging.INFO

    dirdiff_log = logging.getLogger("dirdiff")
    formatter = logging.Formatter("%(levelname)s - %(message)s")
    dirdiff_log.setLevel(level)
    if dirdiff_log.hasHandlers():
        dirdiff_log.handlers.clear()

    _CONSOLE_HANDLER = logging.StreamHandler(sys.stderr)
    _CONSOLE_HANDLER.setLevel(level)
    _CONSOLE_HANDLER.setFormatter(formatter)
    _CONSOLE_HANDLER.addFilter(SubsystemFilter("dirdiff"))

    dirdiff_log.addHandler(_CONSOLE_HANDLER)


def shutdown_logging():
    """
    Shut down dirdiff logging.
    """
    logging.shutdown()


def set_debug(debug_arg):
    """
    Set debugging mask from command line argument.
    """
    if not debug_arg:
        return

    mask_map = {
        "walk": DIRDIFF_DEBUG_WALK,
        "compare": DIRDIFF_DEBUG_COMPARE,
        "command": DIRDIFF_DEBUG_COMMAND,
        "all": DIRDIFF_DEBUG_ALL,
    }

    mask = 0
    for name in debug_arg.split(","):
        if name not in mask_map:
            raise ValueError(f"Unknown debug option: {name}")
        mask |= mask_map[name]
    set_debug_mask(mask)


def _add_diff_args(parser):
    parser.add_argument(
        "-a",
        "--all",
        action="store_true",
        help="Report every difference instead of stopping at the first",
    )
    parser.add_argument(
        "-f",
        "--file-types",
        dest="use_magic_file_type",
        action="store_true",
        help="Detect file types using libmagic when locating mismatches",
    )
    parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Report differences as JSON",
    )
    parser.add_argument(
        "-L",
        "--follow-symlinks",
        action="store_true",
        help="Descend into symbolic links to directories",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Report only the exit status",
    )
    parser.add_argument(
        "-u",
        "--unsorted",
        dest="sort_by_name",
        action="store_false",
        help="Walk directories in file system order instead of by name",
    )
    parser.add_argument(
        "left",
        metavar="LEFT",
        type=str,
        help="The left-hand directory to compare",
    )
    parser.add_argument(
        "right",
        metavar="RIGHT",
        type=str,
        help="The right-hand directory to compare",
    )


def main(args):
    """
    Main entry point for dirdiff.
    """
    parser = ArgumentParser(
        description="Compare two directory trees", prog=basename(args[0])
    )

    parser.add_argument(
        "-d",
        "--debug",
        metavar="DEBUGOPTS",
        type=str,
        help="A list of debug options to enable (walk,compare,command,all)",
    )
    parser.add_argument("-v", "--verbose", help="Enable verbose output", action="count")
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        help="Report the version number of dirdiff",
        version=__version__,
    )
    _add_diff_args(parser)

    cmd_args = parser.parse_args(args[1:])

    status = STATUS_ERROR

    try:
        set_debug(cmd_args.debug)
    except ValueError as err:
        print(err)
        parser.print_help()
        return status

    setup_logging(cmd_args)

    _log_debug_command("Parsed %s", " ".join(args[1:]))

    if cmd_args.debug:
        status = diff_dirs(cmd_args)
    else:
        try:
            status = diff_dirs(cmd_args)
        except KeyboardInterrupt:  # pragma: no cover
            _log_info("Exiting on user cancel")
        except DirDiffError as err:
            _log_error("Command failed: %s", err)

    shutdown_logging()
    return status


def run():
    """
    Console script entry point.
    """
    sys.exit(main(sys.argv))
