#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Service credential configuration items for the stackctl installer.

Passwords default to blank; StackConfig generates any blank secret exactly
once and reuses it from the persisted environment file afterwards.
"""

from stackctl.stack_constants import WidgetType
from stackctl.stack_utils import contains_whitespace

from stackctl.installer.core.config_item import ConfigItem
from stackctl.installer.configs.constants.configuration_item_keys import (
    KEY_CONFIG_ITEM_MINIO_PASSWORD,
    KEY_CONFIG_ITEM_MINIO_USER,
    KEY_CONFIG_ITEM_POSTGRES_DB,
    KEY_CONFIG_ITEM_POSTGRES_PASSWORD,
    KEY_CONFIG_ITEM_POSTGRES_USER,
    KEY_CONFIG_ITEM_RABBITMQ_PASSWORD,
    KEY_CONFIG_ITEM_RABBITMQ_USER,
    KEY_CONFIG_ITEM_REDIS_PASSWORD,
    KEY_CONFIG_ITEM_SECRET_KEY,
)

# MinIO refuses to start with a shorter root password
MINIO_PASSWORD_MIN_LENGTH = 8


def _username(value):
    if not isinstance(value, str) or not value:
        return False, "Username cannot be blank"
    if contains_whitespace(value) or (":" in value) or ("@" in value):
        return False, "Username cannot contain whitespace, ':' or '@'"
    return True, ""


# characters that would need percent-encoding in the userinfo of a connection URL
URL_RESERVED_CHARACTERS = ":/?#[]@%"


def _secret(min_length=0, url_safe=False):
    def _validate(value):
        if not isinstance(value, str):
            return False, "Value must be a string"
        if value and contains_whitespace(value):
            return False, "Value cannot contain whitespace"
        if "'" in value:
            return False, "Value cannot contain single quotes"
        if url_safe and any(c in URL_RESERVED_CHARACTERS for c in value):
            return False, f"Value is used in a connection URL and cannot contain any of {URL_RESERVED_CHARACTERS}"
        if value and len(value) < min_length:
            return False, f"Value must be at least {min_length} characters"
        return True, ""

    return _validate


CONFIG_ITEM_POSTGRES_DB = ConfigItem(
    key=KEY_CONFIG_ITEM_POSTGRES_DB,
    label="Postgres Database",
    default_value="app",
    validator=_username,
    question="Name of the application database",
    widget_type=WidgetType.TEXT,
)

CONFIG_ITEM_POSTGRES_USER = ConfigItem(
    key=KEY_CONFIG_ITEM_POSTGRES_USER,
    label="Postgres Username",
    default_value="app",
    validator=_username,
    question="Postgres username",
    widget_type=WidgetType.TEXT,
)

CONFIG_ITEM_POSTGRES_PASSWORD = ConfigItem(
    key=KEY_CONFIG_ITEM_POSTGRES_PASSWORD,
    label="Postgres Password",
    default_value="",
    validator=_secret(url_safe=True),
    question="Postgres password (blank to generate one)",
    widget_type=WidgetType.PASSWORD,
    metadata={"generated": True},
)

CONFIG_ITEM_RABBITMQ_USER = ConfigItem(
    key=KEY_CONFIG_ITEM_RABBITMQ_USER,
    label="RabbitMQ Username",
    default_value="app",
    validator=_username,
    question="RabbitMQ username",
    widget_type=WidgetType.TEXT,
)

CONFIG_ITEM_RABBITMQ_PASSWORD = ConfigItem(
    key=KEY_CONFIG_ITEM_RABBITMQ_PASSWORD,
    label="RabbitMQ Password",
    default_value="",
    validator=_secret(url_safe=True),
    question="RabbitMQ password (blank to generate one)",
    widget_type=WidgetType.PASSWORD,
    metadata={"generated": True},
)

CONFIG_ITEM_REDIS_PASSWORD = ConfigItem(
    key=KEY_CONFIG_ITEM_REDIS_PASSWORD,
    label="Redis Password",
    default_value="",
    validator=_secret(url_safe=True),
    question="Redis password (blank to generate one)",
    widget_type=WidgetType.PASSWORD,
    metadata={"generated": True},
)

CONFIG_ITEM_MINIO_USER = ConfigItem(
    key=KEY_CONFIG_ITEM_MINIO_USER,
    label="MinIO Root User",
    default_value="minioadmin",
    validator=_username,
    question="MinIO root username",
    widget_type=WidgetType.TEXT,
)

CONFIG_ITEM_MINIO_PASSWORD = ConfigItem(
    key=KEY_CONFIG_ITEM_MINIO_PASSWORD,
    label="MinIO Root Password",
    default_value="",
    validator=_secret(MINIO_PASSWORD_MIN_LENGTH),
    question=f"MinIO root password, at least {MINIO_PASSWORD_MIN_LENGTH} characters (blank to generate one)",
    widget_type=WidgetType.PASSWORD,
    metadata={"generated": True},
)

CONFIG_ITEM_SECRET_KEY = ConfigItem(
    key=KEY_CONFIG_ITEM_SECRET_KEY,
    label="Application Secret Key",
    default_value="",
    validator=_secret(),
    question="Application secret key (blank to generate one)",
    widget_type=WidgetType.PASSWORD,
    metadata={"generated": True, "length": 48},
)


def get_credentials_config_item_dict():
    """Get all ConfigItem objects from this module."""
    return {v.key: v for v in globals().values() if isinstance(v, ConfigItem)}


ALL_CREDENTIALS_CONFIG_ITEMS_DICT = get_credentials_config_item_dict()
