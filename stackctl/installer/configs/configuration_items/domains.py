#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Public hostname configuration items for the stackctl installer.

The admin UI hostnames are optional: a blank value means the UI is not
published through the edge proxy.
"""

from stackctl.stack_constants import WidgetType
from stackctl.stack_utils import is_valid_email, is_valid_hostname

from stackctl.installer.core.config_item import ConfigItem
from stackctl.installer.configs.constants.configuration_item_keys import (
    KEY_CONFIG_ITEM_ACME_EMAIL,
    KEY_CONFIG_ITEM_CLIENT_DOMAIN,
    KEY_CONFIG_ITEM_DOMAIN,
    KEY_CONFIG_ITEM_MINIO_DOMAIN,
    KEY_CONFIG_ITEM_RABBITMQ_DOMAIN,
)


def _blank_or_hostname(value):
    if not isinstance(value, str):
        return False, "Value must be a string"
    if value and not is_valid_hostname(value):
        return False, f"'{value}' is not a valid hostname"
    return True, ""


CONFIG_ITEM_DOMAIN = ConfigItem(
    key=KEY_CONFIG_ITEM_DOMAIN,
    label="Primary Domain",
    default_value="",
    validator=_blank_or_hostname,
    question="Public hostname of the application (e.g., app.example.com)",
    widget_type=WidgetType.TEXT,
)

CONFIG_ITEM_CLIENT_DOMAIN = ConfigItem(
    key=KEY_CONFIG_ITEM_CLIENT_DOMAIN,
    label="Client App Domain",
    default_value="",
    accept_blank=True,
    validator=_blank_or_hostname,
    question="Public hostname of the client app (blank to skip)",
    widget_type=WidgetType.TEXT,
)

CONFIG_ITEM_RABBITMQ_DOMAIN = ConfigItem(
    key=KEY_CONFIG_ITEM_RABBITMQ_DOMAIN,
    label="RabbitMQ Admin Domain",
    default_value="",
    accept_blank=True,
    validator=_blank_or_hostname,
    question="Public hostname of the RabbitMQ management UI (blank to keep it private)",
    widget_type=WidgetType.TEXT,
)

CONFIG_ITEM_MINIO_DOMAIN = ConfigItem(
    key=KEY_CONFIG_ITEM_MINIO_DOMAIN,
    label="MinIO Console Domain",
    default_value="",
    accept_blank=True,
    validator=_blank_or_hostname,
    question="Public hostname of the MinIO console (blank to keep it private)",
    widget_type=WidgetType.TEXT,
)

CONFIG_ITEM_ACME_EMAIL = ConfigItem(
    key=KEY_CONFIG_ITEM_ACME_EMAIL,
    label="Certificate Contact Email",
    default_value="",
    validator=lambda x: isinstance(x, str) and ((not x) or is_valid_email(x)),
    question="Contact email address for Let's Encrypt certificate issuance",
    widget_type=WidgetType.TEXT,
)


def get_domains_config_item_dict():
    """Get all ConfigItem objects from this module."""
    return {v.key: v for v in globals().values() if isinstance(v, ConfigItem)}


ALL_DOMAINS_CONFIG_ITEMS_DICT = get_domains_config_item_dict()
