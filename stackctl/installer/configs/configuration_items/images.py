#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Container image configuration items for the stackctl installer."""

import re

from stackctl.stack_constants import DEFAULT_IMAGE_REGISTRY, DEFAULT_IMAGE_TAG, WidgetType
from stackctl.stack_utils import contains_whitespace

from stackctl.installer.core.config_item import ConfigItem
from stackctl.installer.configs.constants.configuration_item_keys import (
    KEY_CONFIG_ITEM_IMAGE_REGISTRY,
    KEY_CONFIG_ITEM_IMAGE_TAG,
    KEY_CONFIG_ITEM_REGISTRY_PASSWORD,
    KEY_CONFIG_ITEM_REGISTRY_USERNAME,
)

_TAG_RE = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.-]{0,127}$")

CONFIG_ITEM_IMAGE_REGISTRY = ConfigItem(
    key=KEY_CONFIG_ITEM_IMAGE_REGISTRY,
    label="Image Registry",
    default_value=DEFAULT_IMAGE_REGISTRY,
    validator=lambda x: isinstance(x, str) and (not contains_whitespace(x)) and (not x.endswith("/")),
    question="Registry and namespace of the api and client images (e.g., ghcr.io/acme)",
    widget_type=WidgetType.TEXT,
)

CONFIG_ITEM_IMAGE_TAG = ConfigItem(
    key=KEY_CONFIG_ITEM_IMAGE_TAG,
    label="Image Tag",
    default_value=DEFAULT_IMAGE_TAG,
    validator=lambda x: isinstance(x, str) and (_TAG_RE.match(x) is not None),
    question="Tag of the api and client images",
    widget_type=WidgetType.TEXT,
)

CONFIG_ITEM_REGISTRY_USERNAME = ConfigItem(
    key=KEY_CONFIG_ITEM_REGISTRY_USERNAME,
    label="Registry Username",
    default_value="",
    accept_blank=True,
    validator=lambda x: isinstance(x, str) and not contains_whitespace(x),
    question="Username for the image registry (blank if the images are public)",
    widget_type=WidgetType.TEXT,
)

CONFIG_ITEM_REGISTRY_PASSWORD = ConfigItem(
    key=KEY_CONFIG_ITEM_REGISTRY_PASSWORD,
    label="Registry Password",
    default_value="",
    accept_blank=True,
    validator=lambda x: isinstance(x, str),
    question="Password or access token for the image registry",
    widget_type=WidgetType.PASSWORD,
)


def get_images_config_item_dict():
    """Get all ConfigItem objects from this module."""
    return {v.key: v for v in globals().values() if isinstance(v, ConfigItem)}


ALL_IMAGES_CONFIG_ITEMS_DICT = get_images_config_item_dict()
