#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.


from enum import Enum, auto


# Used primarily for getting status from discrete steps during the installer and subsequently logging
class InstallerResult(Enum):
    """Return status for an installation step."""

    SUCCESS = auto()
    FAILURE = auto()
    SKIPPED = auto()


# top-level control flow for the installer
class ControlFlow(Enum):
    """High-level control over what the installer should do.

    - DRYRUN: render and log intended actions; make no changes (no file writes, no docker commands)
    - INSTALL: write configuration and roll the stack out
    - CONFIG: write configuration files only; no docker commands
    """

    DRYRUN = auto()
    INSTALL = auto()
    CONFIG = auto()

    def is_dry_run(self) -> bool:
        return self is ControlFlow.DRYRUN

    def is_config_only(self) -> bool:
        return self is ControlFlow.CONFIG

    def should_write_files(self) -> bool:
        """returns True only when file writes are allowed"""
        return self is not ControlFlow.DRYRUN

    def should_run_install_steps(self) -> bool:
        """returns True only when docker (system-changing) steps should run"""
        return self is ControlFlow.INSTALL

    def would(self, action: str) -> str:
        """formats an action string appropriately for the current mode"""
        return ("Dry run: would " + action) if self is ControlFlow.DRYRUN else action


#####################################################
# Topology Enums
#####################################################


# how many hosts the stack is spread over
class TopologyPattern(Enum):
    SINGLE_NODE = "single-node"
    TWO_NODE = "two-node"
    THREE_NODE = "three-node"


# the role the operator picks for this host, scoped by pattern
class RoleChoice(Enum):
    ALL = "all"
    EDGE_APP = "edge-app"
    EDGE = "edge"
    APP = "app"
    DATA = "data"


# the resolved deployment state of this host
class DeploymentRole(Enum):
    ALL = "all"
    EDGE = "edge"
    APP = "app"
    DATA = "data"
    EDGE_APP = "edge-app"


# whether the edge proxy runs on a role, and whether the operator may change it
class EdgePolicy(Enum):
    FORCED_ON = "forced-on"
    FORCED_OFF = "forced-off"
    DEFAULT_ON = "default-on"


#####################################################
# ConfigItem Enums
#####################################################


# Docker restart policy constants
class DockerRestartPolicy(Enum):
    UNLESS_STOPPED = "unless-stopped"
    ALWAYS = "always"
    NO = "no"
    ON_FAILURE = "on-failure"
