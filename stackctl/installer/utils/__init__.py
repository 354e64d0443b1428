#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""
Utility helpers shared by the installer actions, the config store and the UIs.
"""

from .logger_utils import InstallerLogger

from .exceptions import (
    ComposeValidationError,
    ConfigItemNotFoundError,
    ConfigValueValidationError,
    DeploymentError,
    FileOperationError,
    RequiredFieldError,
    StackConfigError,
)

__all__ = [
    "InstallerLogger",
    "ComposeValidationError",
    "ConfigItemNotFoundError",
    "ConfigValueValidationError",
    "DeploymentError",
    "FileOperationError",
    "RequiredFieldError",
    "StackConfigError",
]
