#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Capacity configuration items for the stackctl installer.

The load figures are persisted so later scale operations can offer them as
defaults; the replica counts are computed from them unless overridden.
"""

from stackctl.stack_constants import (
    PEAK_USERS_MAX,
    PEAK_USERS_MIN,
    REPLICAS_MAX,
    REQUESTS_PER_MINUTE_MAX,
    REQUESTS_PER_MINUTE_MIN,
    WidgetType,
)

from stackctl.installer.core.capacity import (
    DEFAULT_REQUESTS_PER_MINUTE_PER_USER,
    MIN_PROCESSOR_REPLICAS,
    MIN_WEB_REPLICAS,
    MIN_WORKER_REPLICAS,
)
from stackctl.installer.core.config_item import ConfigItem, int_range_validator
from stackctl.installer.configs.constants.configuration_item_keys import (
    KEY_CONFIG_ITEM_PEAK_USERS,
    KEY_CONFIG_ITEM_PROCESSOR_REPLICAS,
    KEY_CONFIG_ITEM_REQUESTS_PER_MINUTE,
    KEY_CONFIG_ITEM_WEB_REPLICAS,
    KEY_CONFIG_ITEM_WORKER_REPLICAS,
)

CONFIG_ITEM_PEAK_USERS = ConfigItem(
    key=KEY_CONFIG_ITEM_PEAK_USERS,
    label="Peak Concurrent Users",
    default_value=100,
    validator=int_range_validator(PEAK_USERS_MIN, PEAK_USERS_MAX),
    question="Expected peak number of concurrently active users",
    widget_type=WidgetType.NUMBER,
    metadata={"min": PEAK_USERS_MIN, "max": PEAK_USERS_MAX},
)

CONFIG_ITEM_REQUESTS_PER_MINUTE = ConfigItem(
    key=KEY_CONFIG_ITEM_REQUESTS_PER_MINUTE,
    label="Requests per Minute per User",
    default_value=DEFAULT_REQUESTS_PER_MINUTE_PER_USER,
    validator=int_range_validator(REQUESTS_PER_MINUTE_MIN, REQUESTS_PER_MINUTE_MAX),
    question="Average requests per minute sent by one active user",
    widget_type=WidgetType.NUMBER,
    metadata={"min": REQUESTS_PER_MINUTE_MIN, "max": REQUESTS_PER_MINUTE_MAX},
)

CONFIG_ITEM_WEB_REPLICAS = ConfigItem(
    key=KEY_CONFIG_ITEM_WEB_REPLICAS,
    label="Web Replicas",
    default_value=MIN_WEB_REPLICAS,
    validator=int_range_validator(MIN_WEB_REPLICAS, REPLICAS_MAX),
    question="Number of web (API) replicas",
    widget_type=WidgetType.NUMBER,
    metadata={"min": MIN_WEB_REPLICAS, "max": REPLICAS_MAX},
)

CONFIG_ITEM_PROCESSOR_REPLICAS = ConfigItem(
    key=KEY_CONFIG_ITEM_PROCESSOR_REPLICAS,
    label="Processor Replicas",
    default_value=MIN_PROCESSOR_REPLICAS,
    validator=int_range_validator(MIN_PROCESSOR_REPLICAS, REPLICAS_MAX),
    question="Number of background processor replicas",
    widget_type=WidgetType.NUMBER,
    metadata={"min": MIN_PROCESSOR_REPLICAS, "max": REPLICAS_MAX},
)

CONFIG_ITEM_WORKER_REPLICAS = ConfigItem(
    key=KEY_CONFIG_ITEM_WORKER_REPLICAS,
    label="Worker Replicas",
    default_value=MIN_WORKER_REPLICAS,
    validator=int_range_validator(MIN_WORKER_REPLICAS, REPLICAS_MAX),
    question="Number of worker replicas",
    widget_type=WidgetType.NUMBER,
    metadata={"min": MIN_WORKER_REPLICAS, "max": REPLICAS_MAX},
)


def get_capacity_config_item_dict():
    """Get all ConfigItem objects from this module."""
    return {v.key: v for v in globals().values() if isinstance(v, ConfigItem)}


ALL_CAPACITY_CONFIG_ITEMS_DICT = get_capacity_config_item_dict()
