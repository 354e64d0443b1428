#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Container registry authentication."""

from typing import Callable

from stackctl.stack_utils import run_process
from stackctl.installer.configs.constants.constants import DOCKER_BIN
from stackctl.installer.configs.constants.enums import InstallerResult
from stackctl.installer.core.renderer import ImageRefs
from stackctl.installer.utils.exceptions import DeploymentError
from stackctl.installer.utils.logger_utils import InstallerLogger, SkipReasons


def registry_host(registry: str) -> str:
    """ghcr.io/org -> ghcr.io"""
    return (registry or "").strip().strip("/").split("/")[0]


def registry_login(
    images: ImageRefs,
    ui,
    interactive: bool = True,
    runner: Callable = run_process,
    docker_bin: str = DOCKER_BIN,
) -> InstallerResult:
    """Log in to the image registry with the configured credentials.

    The password is passed on stdin. An interactive failure offers retry or
    skip; a non-interactive failure is fatal.

    Raises:
        DeploymentError: non-interactive login failed or no password was available
    """
    InstallerLogger.start("Registry Login")
    if not images.registry_username:
        InstallerLogger.end("Registry Login", InstallerResult.SKIPPED, SkipReasons.NO_REGISTRY_USER)
        return InstallerResult.SKIPPED

    host = registry_host(images.registry)
    password = images.registry_password
    while True:
        if not password and interactive:
            password = ui.ask_password(f"Password for {images.registry_username}@{host}")
        if not password:
            InstallerLogger.end("Registry Login", InstallerResult.FAILURE, "No registry password available")
            raise DeploymentError(f"No password available for registry {host}")

        err, out = runner(
            [docker_bin, "login", host, "-u", images.registry_username, "--password-stdin"],
            stdin=password,
        )
        if err == 0:
            InstallerLogger.end("Registry Login", InstallerResult.SUCCESS, f"Logged in to {host}")
            return InstallerResult.SUCCESS

        InstallerLogger.error(f"Login to {host} failed: {' '.join(out[-2:])}")
        if not interactive:
            InstallerLogger.end("Registry Login", InstallerResult.FAILURE)
            raise DeploymentError(f"Login to registry {host} failed")
        if not ui.ask_yes_no(f"Login to {host} failed. Retry?", default=True):
            InstallerLogger.end("Registry Login", InstallerResult.SKIPPED, "Skipped by operator")
            return InstallerResult.SKIPPED
        # a retry asks for the password again
        password = ""
