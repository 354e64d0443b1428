#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Configuration store for stackctl settings.

StackConfig holds the operator's choices as ConfigItems. The persisted .env
file is read into it only at the CLI boundary (load_from_env_file), and the
rest of the pipeline works from the immutable DeploymentPlan built by
build_plan().
"""

import copy
import secrets

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional

from stackctl.stack_common import LoadEnvFile
from stackctl.installer.configs.configuration_items import ALL_CONFIG_ITEMS_DICT
from stackctl.installer.configs.constants.configuration_item_keys import *
from stackctl.installer.configs.constants.enums import RoleChoice, TopologyPattern
from stackctl.installer.core.capacity import ReplicaPlan, estimate
from stackctl.installer.core.config_env_mapper import EnvMapper
from stackctl.installer.core.config_item import ConfigItem
from stackctl.installer.core.renderer import (
    Credentials,
    DomainSet,
    ImageRefs,
    RenderOptions,
    RenderedConfigSet,
    render,
)
from stackctl.installer.core.topology import RoleProfile, resolve_profile, resolve_role
from stackctl.installer.utils.exceptions import ConfigItemNotFoundError, ConfigValueValidationError
from stackctl.installer.utils.logger_utils import InstallerLogger

# secrets that originate on the node running the data services
DATA_SECRET_KEYS = [
    KEY_CONFIG_ITEM_POSTGRES_PASSWORD,
    KEY_CONFIG_ITEM_RABBITMQ_PASSWORD,
    KEY_CONFIG_ITEM_REDIS_PASSWORD,
    KEY_CONFIG_ITEM_MINIO_PASSWORD,
]

# secrets that originate on the node running the application services
APP_SECRET_KEYS = [
    KEY_CONFIG_ITEM_SECRET_KEY,
]

DEFAULT_SECRET_LENGTH = 24


@dataclass(frozen=True)
class DeploymentPlan:
    """Everything needed to render and roll out one node, resolved and immutable."""

    pattern: TopologyPattern
    role_choice: RoleChoice
    profile: RoleProfile
    replica_plan: ReplicaPlan
    credentials: Credentials
    domains: DomainSet
    images: ImageRefs
    options: RenderOptions

    def render(self) -> RenderedConfigSet:
        return render(self.profile, self.replica_plan, self.credentials, self.domains, self.images, self.options)


class StackConfig:
    """Configuration store managing items and their env mapping."""

    def __init__(self):
        self.env_file_loaded: Optional[str] = None
        self._items: Dict[str, ConfigItem] = copy.deepcopy(ALL_CONFIG_ITEMS_DICT)
        self._env_mapper = EnvMapper()
        self._modified_keys: List[str] = []

    def get_item(self, key: str) -> Optional[ConfigItem]:
        """Get a ConfigItem instance by its key (None if not found)."""
        return self._items.get(key)

    def get_value(self, key: str) -> Optional[Any]:
        """Get the current value of a configuration item (None if not found)."""
        item = self.get_item(key)
        return item.get_value() if item else None

    def all_keys(self) -> List[str]:
        return list(self._items.keys())

    def modified_keys(self) -> List[str]:
        return list(self._modified_keys)

    def set_value(self, key: str, value: Any, ignore_errors: Optional[bool] = False) -> None:
        """Set the value of a configuration item.

        Args:
            key: Configuration item key
            value: New value to set
            ignore_errors: log errors rather than raising (meaning the value may *not* have been set)

        Raises:
            ConfigItemNotFoundError: If the key does not exist.
            ConfigValueValidationError: If the value is invalid for the item.
        """
        try:
            item = self.get_item(key)
            if not item:
                raise ConfigItemNotFoundError(key)

            success, error_message = item.set_value(value)
            if not success:
                raise ConfigValueValidationError(key, value, error_message)

            if key not in self._modified_keys:
                self._modified_keys.append(key)
        except (ConfigItemNotFoundError, ConfigValueValidationError) as e:
            if ignore_errors:
                InstallerLogger.error(f'Ignored exception setting "{key}": "{e}"')
            else:
                raise

    def apply_default(self, key: str, value: Any) -> None:
        """Apply a default value without marking the item as modified.

        Items the operator already set explicitly keep their value.
        """
        item = self.get_item(key)
        if not item:
            InstallerLogger.warning(f'Cannot apply default for unknown item: "{key}"')
            return
        if item.is_modified:
            return
        if item.validator:
            result = item.validator(value)
            valid, error = result if isinstance(result, tuple) else (bool(result), "")
            if not valid:
                InstallerLogger.warning(f'Failed to set default "{value}" for "{key}": "{error}"')
                return
        item.value = value

    def load_from_env_file(self, env_file: str) -> int:
        """Load item values from a previously rendered .env file.

        Returns:
            The number of items loaded; invalid persisted values are logged and skipped
        """
        loaded = 0
        env_values = LoadEnvFile(env_file)
        for key, value in self._env_mapper.items_from_env(env_values).items():
            try:
                self.set_value(key, value)
                loaded += 1
            except ConfigValueValidationError as e:
                InstallerLogger.warning(f"Ignoring persisted value from {env_file}: {e}")
        if env_values:
            self.env_file_loaded = env_file
        InstallerLogger.debug(f"Loaded {loaded} settings from {env_file}")
        return loaded

    def apply_overrides(self, overrides: Iterable[str]) -> None:
        """Apply KEY=value overrides, where KEY is an env variable name or an item key.

        Raises:
            ConfigItemNotFoundError: If KEY names neither.
            ConfigValueValidationError: If the override is malformed or the value is invalid.
        """
        for override in overrides or []:
            name, sep, raw_value = str(override).partition("=")
            name = name.strip()
            if not sep or not name:
                raise ConfigValueValidationError(str(override), raw_value, "expected KEY=value")
            if (item_key := self._env_mapper.get_item_key(name)) is None:
                if name not in self._items:
                    raise ConfigItemNotFoundError(name)
                item_key = name
            env_var = self._env_mapper.get_env_var(item_key)
            try:
                value = env_var.reverse_transform(raw_value.strip()) if env_var else raw_value.strip()
            except ValueError as e:
                raise ConfigValueValidationError(name, raw_value, str(e)) from e
            self.set_value(item_key, value)

    def ensure_generated_secrets(
        self,
        profile: RoleProfile,
        generator: Callable[[int], str] = secrets.token_urlsafe,
    ) -> List[str]:
        """Generate any blank secret that originates on this node.

        Service passwords originate where the data services run and the
        application secret key where the application runs; other nodes must be
        given the same values. Secrets loaded from an existing .env are reused.

        Returns:
            The keys that were generated
        """
        candidates = []
        if profile.runs_data:
            candidates.extend(DATA_SECRET_KEYS)
        if profile.runs_compute:
            candidates.extend(APP_SECRET_KEYS)

        generated = []
        for key in candidates:
            item = self.get_item(key)
            if item and not item.get_value():
                self.set_value(key, generator(item.metadata.get("length", DEFAULT_SECRET_LENGTH)))
                generated.append(key)
        if generated:
            InstallerLogger.info(f"Generated {len(generated)} new secret(s): {', '.join(generated)}")
        return generated

    def apply_estimate(self, peak_users: int, requests_per_minute: int) -> ReplicaPlan:
        """Record the load figures and replace the replica counts with the estimate for them."""
        plan = estimate(peak_users, requests_per_minute)
        self.set_value(KEY_CONFIG_ITEM_PEAK_USERS, peak_users)
        self.set_value(KEY_CONFIG_ITEM_REQUESTS_PER_MINUTE, requests_per_minute)
        self.set_value(KEY_CONFIG_ITEM_WEB_REPLICAS, plan.web_replicas)
        self.set_value(KEY_CONFIG_ITEM_PROCESSOR_REPLICAS, plan.processor_replicas)
        self.set_value(KEY_CONFIG_ITEM_WORKER_REPLICAS, plan.worker_replicas)
        return plan

    def resolve_profile(self) -> RoleProfile:
        pattern = self.get_value(KEY_CONFIG_ITEM_TOPOLOGY_PATTERN)
        choice = self.get_value(KEY_CONFIG_ITEM_ROLE_CHOICE)
        try:
            role = resolve_role(TopologyPattern(pattern), RoleChoice(choice))
        except ValueError as e:
            raise ConfigValueValidationError(KEY_CONFIG_ITEM_ROLE_CHOICE, choice, str(e)) from e
        edge_item = self.get_item(KEY_CONFIG_ITEM_EDGE_ENABLED)
        return resolve_profile(role, edge_item.get_value() if edge_item.is_modified else None)

    def build_plan(self) -> DeploymentPlan:
        """Resolve the current values into an immutable DeploymentPlan.

        Raises:
            ConfigValueValidationError: if the role choice doesn't belong to the pattern
        """
        v = self.get_value
        profile = self.resolve_profile()
        return DeploymentPlan(
            pattern=TopologyPattern(v(KEY_CONFIG_ITEM_TOPOLOGY_PATTERN)),
            role_choice=RoleChoice(v(KEY_CONFIG_ITEM_ROLE_CHOICE)),
            profile=profile,
            replica_plan=ReplicaPlan(
                web_replicas=v(KEY_CONFIG_ITEM_WEB_REPLICAS),
                processor_replicas=v(KEY_CONFIG_ITEM_PROCESSOR_REPLICAS),
                worker_replicas=v(KEY_CONFIG_ITEM_WORKER_REPLICAS),
            ),
            credentials=Credentials(
                postgres_db=v(KEY_CONFIG_ITEM_POSTGRES_DB),
                postgres_user=v(KEY_CONFIG_ITEM_POSTGRES_USER),
                postgres_password=v(KEY_CONFIG_ITEM_POSTGRES_PASSWORD),
                rabbitmq_user=v(KEY_CONFIG_ITEM_RABBITMQ_USER),
                rabbitmq_password=v(KEY_CONFIG_ITEM_RABBITMQ_PASSWORD),
                redis_password=v(KEY_CONFIG_ITEM_REDIS_PASSWORD),
                minio_user=v(KEY_CONFIG_ITEM_MINIO_USER),
                minio_password=v(KEY_CONFIG_ITEM_MINIO_PASSWORD),
                secret_key=v(KEY_CONFIG_ITEM_SECRET_KEY),
            ),
            domains=DomainSet(
                domain=v(KEY_CONFIG_ITEM_DOMAIN),
                client_domain=v(KEY_CONFIG_ITEM_CLIENT_DOMAIN),
                rabbitmq_domain=v(KEY_CONFIG_ITEM_RABBITMQ_DOMAIN),
                minio_domain=v(KEY_CONFIG_ITEM_MINIO_DOMAIN),
                acme_email=v(KEY_CONFIG_ITEM_ACME_EMAIL),
            ),
            images=ImageRefs(
                registry=v(KEY_CONFIG_ITEM_IMAGE_REGISTRY),
                tag=v(KEY_CONFIG_ITEM_IMAGE_TAG),
                registry_username=v(KEY_CONFIG_ITEM_REGISTRY_USERNAME),
                registry_password=v(KEY_CONFIG_ITEM_REGISTRY_PASSWORD),
            ),
            options=RenderOptions(
                project_name=v(KEY_CONFIG_ITEM_PROJECT_NAME),
                topology_pattern=v(KEY_CONFIG_ITEM_TOPOLOGY_PATTERN),
                role_choice=v(KEY_CONFIG_ITEM_ROLE_CHOICE),
                data_node_host=v(KEY_CONFIG_ITEM_DATA_NODE_HOST),
                app_node_host=v(KEY_CONFIG_ITEM_APP_NODE_HOST),
                peak_users=v(KEY_CONFIG_ITEM_PEAK_USERS),
                requests_per_minute=v(KEY_CONFIG_ITEM_REQUESTS_PER_MINUTE),
                restart_policy=v(KEY_CONFIG_ITEM_RESTART_POLICY),
                backup_schedule=v(KEY_CONFIG_ITEM_BACKUP_SCHEDULE),
                backup_retention=v(KEY_CONFIG_ITEM_BACKUP_RETENTION),
                snapshot_retention=v(KEY_CONFIG_ITEM_SNAPSHOT_RETENTION),
                restart_delay=v(KEY_CONFIG_ITEM_RESTART_DELAY),
                health_interval=v(KEY_CONFIG_ITEM_HEALTH_INTERVAL),
                health_attempts=v(KEY_CONFIG_ITEM_HEALTH_ATTEMPTS),
            ),
        )
