#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""
Options shared by every stackctl subcommand
"""

import argparse

from stackctl.stack_constants import STACKCTL_WORKDIR_ENV
from stackctl.stack_utils import str2bool
from stackctl.installer.utils.digit_utils import parse_int


def positive_int(value):
    """argparse type accepting whole numbers > 0 in ASCII or Arabic digits"""
    result = parse_int(value)
    if result is None or result < 1:
        raise argparse.ArgumentTypeError(f"'{value}' is not a positive whole number")
    return result


def add_basic_args(parser):
    """
    Add the shared installer options to a parser

    Args:
        parser: ArgumentParser (or subparser) to add arguments to
    """
    basicArgGroup = parser.add_argument_group("Installer Options")

    basicArgGroup.add_argument(
        "--debug",
        "--verbose",
        dest="debug",
        type=str2bool,
        nargs="?",
        metavar="true|false",
        const=True,
        default=False,
        help="Enable debug output, including every external command run and its result",
    )
    basicArgGroup.add_argument(
        "--quiet",
        "--silent",
        action="store_true",
        dest="quiet",
        default=False,
        help="Suppress console logging output",
    )
    basicArgGroup.add_argument(
        "--log-to-file",
        dest="logToFile",
        metavar="filename",
        nargs="?",
        const="",
        default=None,
        help="Log output to file. If no filename provided, creates timestamped log file.",
    )
    basicArgGroup.add_argument(
        "--non-interactive",
        dest="non_interactive",
        action="store_true",
        default=False,
        help="Accept current or default values without prompting",
    )
    # --configure-only and --dry-run are mutually exclusive
    mutex = basicArgGroup.add_mutually_exclusive_group()
    mutex.add_argument(
        "--configure-only",
        "-c",
        dest="configOnly",
        type=str2bool,
        metavar="true|false",
        nargs="?",
        const=True,
        default=False,
        help="Only render and write configuration files; run no docker commands",
    )
    mutex.add_argument(
        "--dry-run",
        dest="dryRun",
        action="store_true",
        help="Render and log planned actions without writing files or running docker commands",
    )
    basicArgGroup.add_argument(
        "--workdir",
        "-w",
        dest="workdir",
        metavar="path",
        default=None,
        help=f"Directory holding the stack configuration (default: ${STACKCTL_WORKDIR_ENV}, then prompt)",
    )
    basicArgGroup.add_argument(
        "--set",
        dest="overrides",
        metavar="KEY=VALUE",
        action="append",
        default=[],
        help="Override a setting by its environment variable name (repeatable)",
    )
