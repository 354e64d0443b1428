#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Topology configuration items for the stackctl installer.

This module contains the configuration items deciding which role this host
plays and where its remote peers live.
"""

from stackctl.stack_constants import DEFAULT_PROJECT_NAME, WidgetType
from stackctl.stack_utils import is_valid_hostname

from stackctl.installer.configs.constants.enums import RoleChoice, TopologyPattern
from stackctl.installer.core.config_item import ConfigItem
from stackctl.installer.configs.constants.configuration_item_keys import (
    KEY_CONFIG_ITEM_APP_NODE_HOST,
    KEY_CONFIG_ITEM_DATA_NODE_HOST,
    KEY_CONFIG_ITEM_EDGE_ENABLED,
    KEY_CONFIG_ITEM_PROJECT_NAME,
    KEY_CONFIG_ITEM_ROLE_CHOICE,
    KEY_CONFIG_ITEM_TOPOLOGY_PATTERN,
)

CONFIG_ITEM_PROJECT_NAME = ConfigItem(
    key=KEY_CONFIG_ITEM_PROJECT_NAME,
    label="Compose Project Name",
    default_value=DEFAULT_PROJECT_NAME,
    validator=lambda x: isinstance(x, str) and x.replace("-", "").replace("_", "").isalnum() and x == x.lower(),
    question="Docker Compose project name (lowercase letters, digits, '-' and '_')",
    widget_type=WidgetType.TEXT,
)

CONFIG_ITEM_TOPOLOGY_PATTERN = ConfigItem(
    key=KEY_CONFIG_ITEM_TOPOLOGY_PATTERN,
    label="Deployment Pattern",
    default_value=TopologyPattern.SINGLE_NODE.value,
    choices=[x.value for x in TopologyPattern],
    validator=lambda x: isinstance(x, str) and x in [v.value for v in TopologyPattern],
    question="Select the deployment pattern",
    widget_type=WidgetType.SELECT,
)

CONFIG_ITEM_ROLE_CHOICE = ConfigItem(
    key=KEY_CONFIG_ITEM_ROLE_CHOICE,
    label="Node Role",
    default_value=RoleChoice.ALL.value,
    choices=[x.value for x in RoleChoice],
    validator=lambda x: isinstance(x, str) and x in [v.value for v in RoleChoice],
    question="Select the role of this host within the deployment pattern",
    widget_type=WidgetType.SELECT,
)

CONFIG_ITEM_EDGE_ENABLED = ConfigItem(
    key=KEY_CONFIG_ITEM_EDGE_ENABLED,
    label="Run Edge Proxy",
    default_value=True,
    validator=lambda x: isinstance(x, bool),
    question="Run the Caddy edge proxy (HTTPS termination) on this host?",
    widget_type=WidgetType.CHECKBOX,
)

CONFIG_ITEM_DATA_NODE_HOST = ConfigItem(
    key=KEY_CONFIG_ITEM_DATA_NODE_HOST,
    label="Data Node Host",
    default_value="",
    accept_blank=True,
    validator=lambda x: isinstance(x, str) and ((not x) or is_valid_hostname(x)),
    question="Hostname or IP address of the host running the data services",
    widget_type=WidgetType.TEXT,
)

CONFIG_ITEM_APP_NODE_HOST = ConfigItem(
    key=KEY_CONFIG_ITEM_APP_NODE_HOST,
    label="Application Node Host",
    default_value="",
    accept_blank=True,
    validator=lambda x: isinstance(x, str) and ((not x) or is_valid_hostname(x)),
    question="Hostname or IP address of the host running the application services",
    widget_type=WidgetType.TEXT,
)


def get_topology_config_item_dict():
    """Get all ConfigItem objects from this module.

    Returns:
        Dict mapping configuration key strings to their ConfigItem objects
    """
    config_items = {}
    for key_name, key_value in globals().items():
        if isinstance(key_value, ConfigItem):
            config_items[key_value.key] = key_value
    return config_items


ALL_TOPOLOGY_CONFIG_ITEMS_DICT = get_topology_config_item_dict()
