#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""
Subcommands of the stackctl command line
"""

import argparse

from stackctl.stack_constants import STACKCTL_VERSION
from stackctl.installer.args.basic_args import add_basic_args, positive_int
from stackctl.installer.configs.constants.constants import (
    APP_SERVICES,
    DATA_SERVICES,
    EDGE_SERVICES,
)

SUBCOMMAND_INSTALL = "install"
SUBCOMMAND_UPDATE = "update"
SUBCOMMAND_SCALE = "scale"
SUBCOMMAND_BACKUP_CONFIGURE = "backup-configure"
SUBCOMMAND_REGISTRY_LOGIN = "registry-login"
SUBCOMMAND_BACKUP = "backup"
SUBCOMMAND_RESTART = "restart"
SUBCOMMAND_STATUS = "status"

ALL_SERVICES = DATA_SERVICES + EDGE_SERVICES + APP_SERVICES


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stackctl",
        description="Plan, render, deploy and maintain the application stack with Docker Compose",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {STACKCTL_VERSION}")
    subparsers = parser.add_subparsers(dest="command", metavar="command")
    subparsers.required = True

    def _subparser(name, help_text):
        subparser = subparsers.add_parser(name, help=help_text, description=help_text)
        add_basic_args(subparser)
        return subparser

    _subparser(SUBCOMMAND_INSTALL, "Configure this node, render its configuration and deploy it")

    update = _subparser(SUBCOMMAND_UPDATE, "Re-render the configuration, pull new images and converge")
    update.add_argument(
        "--image-tag",
        dest="imageTag",
        metavar="tag",
        default=None,
        help="Switch the api and client images to this tag",
    )
    update.add_argument(
        "--gentle-restart",
        dest="gentleRestart",
        metavar="service",
        choices=ALL_SERVICES,
        action="append",
        default=[],
        help="After converging, restart this service one container at a time (repeatable)",
    )

    scale = _subparser(SUBCOMMAND_SCALE, "Re-estimate replica counts for a new load and converge")
    scale.add_argument(
        "--peak-users",
        dest="peakUsers",
        metavar="N",
        type=positive_int,
        default=None,
        help="Expected peak concurrent users (default: last value used)",
    )
    scale.add_argument(
        "--requests-per-minute",
        dest="requestsPerMinute",
        metavar="N",
        type=positive_int,
        default=None,
        help="Average requests per minute per user (default: last value used)",
    )

    _subparser(SUBCOMMAND_BACKUP_CONFIGURE, "Set the backup schedule and retention and install the cron entry")
    _subparser(SUBCOMMAND_REGISTRY_LOGIN, "Log in to the image registry")
    _subparser(SUBCOMMAND_BACKUP, "Snapshot the configuration and dump the database (data nodes)")

    restart = _subparser(SUBCOMMAND_RESTART, "Restart a service one container at a time")
    restart.add_argument("service", choices=ALL_SERVICES, help="Service to restart")

    _subparser(SUBCOMMAND_STATUS, "Show per-service container health and the public URLs")

    return parser
