#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Custom exceptions for the stackctl installer."""


class StackConfigError(Exception):
    """Base class for configuration-related errors."""

    pass


class ConfigItemNotFoundError(StackConfigError):
    """Raised when a configuration item is not found."""

    def __init__(self, key: str):
        super().__init__(f"Configuration item '{key}' not found.")
        self.key = key


class ConfigValueValidationError(StackConfigError):
    """Raised when a configuration value fails validation."""

    def __init__(self, key: str, value, message: str):
        super().__init__(f"Invalid value for '{key}': {message} (value was '{value}').")
        self.key = key
        self.value = value
        self.message = message


class RequiredFieldError(StackConfigError):
    """Raised when required inputs are missing; nothing is rendered or written."""

    def __init__(self, issues):
        self.issues = list(issues)
        fields = ", ".join(issue.key for issue in self.issues)
        super().__init__(f"Required fields missing: {fields}")


class FileOperationError(StackConfigError):
    """Raised for errors during file operations (load/save)."""

    pass


class DeploymentError(StackConfigError):
    """Raised when the container runtime or registry fails a required step."""

    pass


class ComposeValidationError(DeploymentError):
    """Raised when the compose runtime rejects the rendered configuration."""

    pass
