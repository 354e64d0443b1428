#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.


"""Base configuration item class for the stackctl installer.

This module provides the ConfigItem class that serves as the foundation
for every operator-tunable stackctl setting.
"""

from dataclasses import dataclass, field, InitVar
from typing import Any, Callable, Optional, Tuple, Union

from stackctl.stack_constants import WidgetType


@dataclass
class ConfigItem:
    """
    Base class for all configuration items.

    This class represents a single configurable value with all its associated data/metadata.

    Attributes:
        key: Unique conceptual identifier for the config item (should always be a KEY_CONFIG_ITEM_... constant)
        label: Human-readable display name for the item
        default_value: Initial/fallback value for the item
        value: Current configuration value
        is_modified: Whether the item has been modified via set_value
        validator: Callback to check if incoming value is valid
        choices: List of choices for the item (used for select prompts)
        is_password: Whether the field should be prompted for without echo
        accept_blank: Whether the field should accept a blank/empty value
        _question: Question attached to this ConfigItem to present to the user (either a str or "Callable")
        widget_type: prompt style associated with this ConfigItem
        metadata: dict = free-form information (e.g., numeric bounds for NUMBER items)
    """

    key: str
    label: str
    default_value: Any = None
    value: Any = field(init=False)
    validator: Optional[Callable[[Any], Tuple[bool, str]]] = None
    choices: list = field(default_factory=list)
    is_modified: bool = False
    is_password: bool = False
    accept_blank: bool = False
    widget_type: WidgetType = None
    metadata: dict = field(default_factory=dict)

    question: InitVar[Union[str, Callable[[], Any]]] = ""
    _question: Union[str, Callable[[], Any]] = field(init=False)

    def __post_init__(self, question):
        self.value = self.default_value
        self.is_modified = False
        self._question = question

        if not self.is_password and self.widget_type == WidgetType.PASSWORD:
            self.is_password = True

    def set_value(self, value: Any) -> Tuple[bool, str]:
        """Set and validate a new value.

        Args:
            value: The new value to set

        Returns:
            Tuple of (success, error_message)
        """
        if self.validator:
            result = self.validator(value)
            if isinstance(result, tuple):
                valid, error = result
            else:
                valid = result
                error = "Invalid value" if not valid else ""

            if not valid:
                return False, error

        # set even if equal to the default; an explicit choice should stick
        self.is_modified = True
        self.value = value
        return True, ""

    def get_value(self) -> Any:
        """Get the current value. Default is returned if value is None."""
        if self.value is None:
            return self.default_value
        return self.value

    @property
    def question(self) -> str:  # noqa: F811
        result = self._question() if callable(self._question) else self._question
        return "" if result is None else str(result)

    @question.setter
    def question(self, value: Union[str, Callable[[], Any]]):
        self._question = value


def int_range_validator(min_value: int, max_value: Optional[int] = None) -> Callable[[Any], Tuple[bool, str]]:
    """Build a validator accepting integers within an inclusive range."""

    def _validate(value: Any) -> Tuple[bool, str]:
        if isinstance(value, bool) or not isinstance(value, int):
            return False, "Value must be an integer"
        if value < min_value:
            return False, f"Value must be at least {min_value}"
        if (max_value is not None) and (value > max_value):
            return False, f"Value must be at most {max_value}"
        return True, ""

    return _validate
