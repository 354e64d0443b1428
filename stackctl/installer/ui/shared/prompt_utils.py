#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Prompt a ConfigItem value consistently for every UI."""

from typing import Any, List, Optional, Tuple

from stackctl.stack_constants import WidgetType
from stackctl.installer.core.config_item import ConfigItem
from stackctl.installer.utils.exceptions import ConfigValueValidationError
from stackctl.installer.utils.logger_utils import InstallerLogger


def _question_for(config_item: ConfigItem) -> str:
    return config_item.question or config_item.label


def prompt_config_item_value(ui, config_item: ConfigItem, choices: Optional[List[Tuple[str, str]]] = None) -> Any:
    """Prompt the user for a new value for the given ConfigItem.

    The caller is responsible for applying/validating the returned value.

    Args:
        ui: InstallerUI implementation
        config_item: The ConfigItem to prompt
        choices: (value, description) pairs overriding the item's own choices

    Returns:
        The new value, typed for the item (bool, int or str)
    """
    question = _question_for(config_item)
    current_value = config_item.get_value()

    # 1) Choices (single-select)
    if choices is None and config_item.choices:
        choices = [(str(ch), "") for ch in config_item.choices]
    if choices:
        display_choices = [(str(value), text, str(value) == str(current_value)) for value, text in choices]
        if not any(selected for _, _, selected in display_choices):
            display_choices[0] = (display_choices[0][0], display_choices[0][1], True)
        return ui.choose_one(question, display_choices)

    # 2) Boolean
    if config_item.widget_type == WidgetType.CHECKBOX or isinstance(config_item.default_value, bool):
        return ui.ask_yes_no(question, default=bool(current_value))

    # 3) Password
    if config_item.is_password:
        return ui.ask_password(question, default=str(current_value or ""))

    # 4) Numbers, bounded by the item's metadata
    if config_item.widget_type == WidgetType.NUMBER:
        return ui.ask_int(
            question,
            default=current_value,
            min_value=config_item.metadata.get("min"),
            max_value=config_item.metadata.get("max"),
        )

    return ui.ask_string(question, default=str(current_value or ""))


def prompt_and_set(
    ui,
    stack_config,
    key: str,
    choices: Optional[List[Tuple[str, str]]] = None,
    required: bool = False,
) -> Any:
    """Prompt for an item and store the answer, asking again while it's invalid.

    In non-interactive mode the current value is kept, and an invalid value
    raises; a blank required value is left for render-time validation to report.

    Raises:
        ConfigValueValidationError: non-interactive and the value is invalid
    """
    config_item = stack_config.get_item(key)
    while True:
        value = prompt_config_item_value(ui, config_item, choices=choices)
        if required and ui.interactive and (value is None or str(value).strip() == ""):
            InstallerLogger.error(f"{config_item.label} is required")
            continue
        try:
            stack_config.set_value(key, value)
            return stack_config.get_value(key)
        except ConfigValueValidationError as e:
            if not ui.interactive:
                raise
            InstallerLogger.error(f"{config_item.label}: {e.message}")
