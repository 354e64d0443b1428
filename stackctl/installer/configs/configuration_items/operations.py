#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Operational configuration items for the stackctl installer.

These cover restart behavior, health polling, and backup scheduling/retention.
"""

from stackctl.stack_constants import WidgetType
from stackctl.stack_utils import is_valid_cron_expression

from stackctl.installer.configs.constants.constants import (
    DEFAULT_BACKUP_RETENTION,
    DEFAULT_BACKUP_SCHEDULE,
    DEFAULT_HEALTH_ATTEMPTS,
    DEFAULT_HEALTH_INTERVAL_SEC,
    DEFAULT_RESTART_DELAY_SEC,
    DEFAULT_SNAPSHOT_RETENTION,
)
from stackctl.installer.configs.constants.enums import DockerRestartPolicy
from stackctl.installer.core.config_item import ConfigItem, int_range_validator
from stackctl.installer.configs.constants.configuration_item_keys import (
    KEY_CONFIG_ITEM_BACKUP_RETENTION,
    KEY_CONFIG_ITEM_BACKUP_SCHEDULE,
    KEY_CONFIG_ITEM_HEALTH_ATTEMPTS,
    KEY_CONFIG_ITEM_HEALTH_INTERVAL,
    KEY_CONFIG_ITEM_RESTART_DELAY,
    KEY_CONFIG_ITEM_RESTART_POLICY,
    KEY_CONFIG_ITEM_SNAPSHOT_RETENTION,
)

CONFIG_ITEM_RESTART_POLICY = ConfigItem(
    key=KEY_CONFIG_ITEM_RESTART_POLICY,
    label="Restart Policy",
    default_value=DockerRestartPolicy.UNLESS_STOPPED.value,
    choices=[x.value for x in DockerRestartPolicy],
    validator=lambda x: isinstance(x, str) and x in [v.value for v in DockerRestartPolicy],
    question="Restart policy for the stack's containers",
    widget_type=WidgetType.SELECT,
)

CONFIG_ITEM_BACKUP_SCHEDULE = ConfigItem(
    key=KEY_CONFIG_ITEM_BACKUP_SCHEDULE,
    label="Backup Schedule",
    default_value=DEFAULT_BACKUP_SCHEDULE,
    validator=lambda x: (is_valid_cron_expression(x), "Expected five cron fields (e.g., '0 3 * * *')"),
    question="Cron schedule for scheduled backups",
    widget_type=WidgetType.TEXT,
)

CONFIG_ITEM_BACKUP_RETENTION = ConfigItem(
    key=KEY_CONFIG_ITEM_BACKUP_RETENTION,
    label="Database Dumps to Keep",
    default_value=DEFAULT_BACKUP_RETENTION,
    validator=int_range_validator(1, 365),
    question="Number of database dumps to keep",
    widget_type=WidgetType.NUMBER,
    metadata={"min": 1, "max": 365},
)

CONFIG_ITEM_SNAPSHOT_RETENTION = ConfigItem(
    key=KEY_CONFIG_ITEM_SNAPSHOT_RETENTION,
    label="Configuration Snapshots to Keep",
    default_value=DEFAULT_SNAPSHOT_RETENTION,
    validator=int_range_validator(1, 100),
    question="Number of configuration snapshots to keep",
    widget_type=WidgetType.NUMBER,
    metadata={"min": 1, "max": 100},
)

CONFIG_ITEM_RESTART_DELAY = ConfigItem(
    key=KEY_CONFIG_ITEM_RESTART_DELAY,
    label="Gentle Restart Delay (seconds)",
    default_value=DEFAULT_RESTART_DELAY_SEC,
    validator=int_range_validator(0, 600),
    question="Seconds to wait between restarting instances of a service",
    widget_type=WidgetType.NUMBER,
    metadata={"min": 0, "max": 600},
)

CONFIG_ITEM_HEALTH_INTERVAL = ConfigItem(
    key=KEY_CONFIG_ITEM_HEALTH_INTERVAL,
    label="Health Check Interval (seconds)",
    default_value=DEFAULT_HEALTH_INTERVAL_SEC,
    validator=int_range_validator(1, 600),
    question="Seconds between health polls after a rollout",
    widget_type=WidgetType.NUMBER,
    metadata={"min": 1, "max": 600},
)

CONFIG_ITEM_HEALTH_ATTEMPTS = ConfigItem(
    key=KEY_CONFIG_ITEM_HEALTH_ATTEMPTS,
    label="Health Check Attempts",
    default_value=DEFAULT_HEALTH_ATTEMPTS,
    validator=int_range_validator(1, 1000),
    question="Health polls before giving up on a service",
    widget_type=WidgetType.NUMBER,
    metadata={"min": 1, "max": 1000},
)


def get_operations_config_item_dict():
    """Get all ConfigItem objects from this module."""
    return {v.key: v for v in globals().values() if isinstance(v, ConfigItem)}


ALL_OPERATIONS_CONFIG_ITEMS_DICT = get_operations_config_item_dict()
