#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.


"""Map configuration items to .env variables.

Every config item is persisted as exactly one KEY=value line; this module owns
the item <-> variable naming and the value <-> string conversions.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional

from stackctl.stack_utils import bool_to_str, str2bool
from stackctl.installer.configs.constants.configuration_item_keys import *
from stackctl.installer.configs.constants.config_env_var_keys import *
from stackctl.installer.utils.digit_utils import parse_int
from stackctl.installer.utils.logger_utils import InstallerLogger


def _default_string_transform(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _default_string_reverse_transform(value: str) -> str:
    return "" if value is None else str(value)


def _int_transform(value: Any) -> str:
    return "" if value is None else str(int(value))


def _int_reverse_transform(value: str) -> Optional[int]:
    result = parse_int(value)
    if result is None:
        raise ValueError(f"'{value}' is not an integer")
    return result


# 1. Boolean transform logic
_BOOLEAN_VARS = [
    (KEY_CONFIG_ITEM_EDGE_ENABLED, KEY_ENV_EDGE_ENABLED),
]

# 2. Integer transform logic
_INTEGER_VARS = [
    (KEY_CONFIG_ITEM_PEAK_USERS, KEY_ENV_PEAK_USERS),
    (KEY_CONFIG_ITEM_REQUESTS_PER_MINUTE, KEY_ENV_REQUESTS_PER_MINUTE),
    (KEY_CONFIG_ITEM_WEB_REPLICAS, KEY_ENV_WEB_REPLICAS),
    (KEY_CONFIG_ITEM_PROCESSOR_REPLICAS, KEY_ENV_PROCESSOR_REPLICAS),
    (KEY_CONFIG_ITEM_WORKER_REPLICAS, KEY_ENV_WORKER_REPLICAS),
    (KEY_CONFIG_ITEM_BACKUP_RETENTION, KEY_ENV_BACKUP_RETENTION),
    (KEY_CONFIG_ITEM_SNAPSHOT_RETENTION, KEY_ENV_SNAPSHOT_RETENTION),
    (KEY_CONFIG_ITEM_RESTART_DELAY, KEY_ENV_RESTART_DELAY),
    (KEY_CONFIG_ITEM_HEALTH_INTERVAL, KEY_ENV_HEALTH_INTERVAL),
    (KEY_CONFIG_ITEM_HEALTH_ATTEMPTS, KEY_ENV_HEALTH_ATTEMPTS),
]

# 3. String transform logic
_STRING_VARS = [
    (KEY_CONFIG_ITEM_PROJECT_NAME, KEY_ENV_COMPOSE_PROJECT_NAME),
    (KEY_CONFIG_ITEM_TOPOLOGY_PATTERN, KEY_ENV_TOPOLOGY_PATTERN),
    (KEY_CONFIG_ITEM_ROLE_CHOICE, KEY_ENV_ROLE_CHOICE),
    (KEY_CONFIG_ITEM_DATA_NODE_HOST, KEY_ENV_DATA_NODE_HOST),
    (KEY_CONFIG_ITEM_APP_NODE_HOST, KEY_ENV_APP_NODE_HOST),
    (KEY_CONFIG_ITEM_DOMAIN, KEY_ENV_DOMAIN),
    (KEY_CONFIG_ITEM_CLIENT_DOMAIN, KEY_ENV_CLIENT_DOMAIN),
    (KEY_CONFIG_ITEM_RABBITMQ_DOMAIN, KEY_ENV_RABBITMQ_DOMAIN),
    (KEY_CONFIG_ITEM_MINIO_DOMAIN, KEY_ENV_MINIO_DOMAIN),
    (KEY_CONFIG_ITEM_ACME_EMAIL, KEY_ENV_ACME_EMAIL),
    (KEY_CONFIG_ITEM_POSTGRES_DB, KEY_ENV_POSTGRES_DB),
    (KEY_CONFIG_ITEM_POSTGRES_USER, KEY_ENV_POSTGRES_USER),
    (KEY_CONFIG_ITEM_POSTGRES_PASSWORD, KEY_ENV_POSTGRES_PASSWORD),
    (KEY_CONFIG_ITEM_RABBITMQ_USER, KEY_ENV_RABBITMQ_USER),
    (KEY_CONFIG_ITEM_RABBITMQ_PASSWORD, KEY_ENV_RABBITMQ_PASSWORD),
    (KEY_CONFIG_ITEM_REDIS_PASSWORD, KEY_ENV_REDIS_PASSWORD),
    (KEY_CONFIG_ITEM_MINIO_USER, KEY_ENV_MINIO_USER),
    (KEY_CONFIG_ITEM_MINIO_PASSWORD, KEY_ENV_MINIO_PASSWORD),
    (KEY_CONFIG_ITEM_SECRET_KEY, KEY_ENV_SECRET_KEY),
    (KEY_CONFIG_ITEM_IMAGE_REGISTRY, KEY_ENV_IMAGE_REGISTRY),
    (KEY_CONFIG_ITEM_IMAGE_TAG, KEY_ENV_IMAGE_TAG),
    (KEY_CONFIG_ITEM_REGISTRY_USERNAME, KEY_ENV_REGISTRY_USERNAME),
    (KEY_CONFIG_ITEM_REGISTRY_PASSWORD, KEY_ENV_REGISTRY_PASSWORD),
    (KEY_CONFIG_ITEM_RESTART_POLICY, KEY_ENV_RESTART_POLICY),
    (KEY_CONFIG_ITEM_BACKUP_SCHEDULE, KEY_ENV_BACKUP_SCHEDULE),
]


@dataclass()
class EnvVariable:
    """
    Defines a specific environment variable name within the .env file along with its
    transformation functions. transform converts an item value to the .env string,
    reverse_transform converts the .env string back to an item value.
    """

    item_key: str
    variable_name: str
    transform: Callable = field(default=_default_string_transform)
    reverse_transform: Callable = field(default=_default_string_reverse_transform)


class EnvMapper:
    """
    Maps configuration items to their .env variables and provides
    lookups in both directions.
    """

    def __init__(self):
        self.env_var_by_item_key: Dict[str, EnvVariable] = {}
        self.env_var_by_name: Dict[str, EnvVariable] = {}

        for mappings, transform, reverse_transform in (
            (_BOOLEAN_VARS, bool_to_str, str2bool),
            (_INTEGER_VARS, _int_transform, _int_reverse_transform),
            (_STRING_VARS, _default_string_transform, _default_string_reverse_transform),
        ):
            for item_key, variable_name in mappings:
                env_var = EnvVariable(
                    item_key=item_key,
                    variable_name=variable_name,
                    transform=transform,
                    reverse_transform=reverse_transform,
                )
                self.env_var_by_item_key[item_key] = env_var
                self.env_var_by_name[variable_name] = env_var

    def get_env_var(self, item_key: str) -> Optional[EnvVariable]:
        return self.env_var_by_item_key.get(item_key)

    def get_item_key(self, variable_name: str) -> Optional[str]:
        env_var = self.env_var_by_name.get(variable_name)
        return env_var.item_key if env_var else None

    def items_from_env(self, env_values: Mapping[str, Optional[str]]) -> Dict[str, Any]:
        """Convert raw .env values into config item values.

        Variables that don't map to a config item (derived values such as
        COMPOSE_PROFILES) are ignored; values that can't be converted are
        logged and skipped.
        """
        result = {}
        for variable_name, raw_value in env_values.items():
            if (env_var := self.env_var_by_name.get(variable_name)) is None:
                continue
            try:
                result[env_var.item_key] = env_var.reverse_transform(raw_value if raw_value is not None else "")
            except ValueError as e:
                InstallerLogger.warning(f'Ignoring {variable_name}="{raw_value}": {e}')
        return result
