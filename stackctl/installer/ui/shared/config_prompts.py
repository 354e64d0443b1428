#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Question sequences used by the install, update, scale and backup-configure flows."""

from stackctl.installer.configs.constants.configuration_item_keys import *
from stackctl.installer.configs.constants.enums import TopologyPattern
from stackctl.installer.core.capacity import ReplicaPlan
from stackctl.installer.core.topology import (
    PATTERN_DESCRIPTIONS,
    ROLE_DESCRIPTIONS,
    RoleProfile,
    role_choices,
)
from stackctl.installer.ui.shared.prompt_utils import prompt_and_set
from stackctl.installer.utils.logger_utils import InstallerLogger

REPLICA_KEYS = [
    KEY_CONFIG_ITEM_WEB_REPLICAS,
    KEY_CONFIG_ITEM_PROCESSOR_REPLICAS,
    KEY_CONFIG_ITEM_WORKER_REPLICAS,
]


def prompt_topology(ui, stack_config) -> RoleProfile:
    """Pattern, then a role valid for it, then (where the role allows it) the edge proxy."""
    pattern = prompt_and_set(
        ui,
        stack_config,
        KEY_CONFIG_ITEM_TOPOLOGY_PATTERN,
        choices=[(p.value, PATTERN_DESCRIPTIONS[p]) for p in TopologyPattern],
    )
    prompt_and_set(
        ui,
        stack_config,
        KEY_CONFIG_ITEM_ROLE_CHOICE,
        choices=[(c.value, ROLE_DESCRIPTIONS[c]) for c in role_choices(TopologyPattern(pattern))],
    )

    profile = stack_config.resolve_profile()
    if profile.edge_is_overridable:
        prompt_and_set(ui, stack_config, KEY_CONFIG_ITEM_EDGE_ENABLED)
        profile = stack_config.resolve_profile()
    else:
        InstallerLogger.info(
            f"Edge proxy is {'always' if profile.runs_edge else 'never'} run by the {profile.role.value} role"
        )
    return profile


def prompt_capacity(ui, stack_config, profile: RoleProfile) -> ReplicaPlan:
    """Load figures, the estimate they produce, and optional replica overrides."""
    if not profile.needs_capacity:
        return ReplicaPlan()

    peak_users = prompt_and_set(ui, stack_config, KEY_CONFIG_ITEM_PEAK_USERS)
    requests_per_minute = prompt_and_set(ui, stack_config, KEY_CONFIG_ITEM_REQUESTS_PER_MINUTE)
    estimated = stack_config.apply_estimate(peak_users, requests_per_minute)
    InstallerLogger.info(
        f"Estimated replicas for {peak_users} users at {requests_per_minute} requests/minute: "
        f"web={estimated.web_replicas}, processor={estimated.processor_replicas}, worker={estimated.worker_replicas}"
    )

    if not ui.ask_yes_no("Override the estimated replica counts?", default=False):
        return estimated

    for key in REPLICA_KEYS:
        prompt_and_set(ui, stack_config, key)
    return estimated.with_overrides(
        web=stack_config.get_value(KEY_CONFIG_ITEM_WEB_REPLICAS),
        processor=stack_config.get_value(KEY_CONFIG_ITEM_PROCESSOR_REPLICAS),
        worker=stack_config.get_value(KEY_CONFIG_ITEM_WORKER_REPLICAS),
    )


def prompt_hosts(ui, stack_config, profile: RoleProfile) -> None:
    if not profile.runs_data:
        # an edge-only node needs the data host only to route admin UIs
        prompt_and_set(ui, stack_config, KEY_CONFIG_ITEM_DATA_NODE_HOST, required=profile.runs_compute)
    if profile.runs_edge and not profile.runs_compute:
        prompt_and_set(ui, stack_config, KEY_CONFIG_ITEM_APP_NODE_HOST, required=True)


def prompt_domains(ui, stack_config, profile: RoleProfile) -> None:
    if not profile.runs_edge:
        return
    prompt_and_set(ui, stack_config, KEY_CONFIG_ITEM_DOMAIN, required=True)
    prompt_and_set(ui, stack_config, KEY_CONFIG_ITEM_CLIENT_DOMAIN)
    prompt_and_set(ui, stack_config, KEY_CONFIG_ITEM_RABBITMQ_DOMAIN)
    prompt_and_set(ui, stack_config, KEY_CONFIG_ITEM_MINIO_DOMAIN)
    prompt_and_set(ui, stack_config, KEY_CONFIG_ITEM_ACME_EMAIL, required=True)


def prompt_credentials(ui, stack_config, profile: RoleProfile) -> None:
    """Service usernames; passwords are generated where they originate and asked for elsewhere."""
    if not (profile.runs_compute or profile.runs_data):
        return
    for key in (
        KEY_CONFIG_ITEM_POSTGRES_DB,
        KEY_CONFIG_ITEM_POSTGRES_USER,
        KEY_CONFIG_ITEM_RABBITMQ_USER,
        KEY_CONFIG_ITEM_MINIO_USER,
    ):
        prompt_and_set(ui, stack_config, key)

    stack_config.ensure_generated_secrets(profile)

    if not profile.runs_data:
        for key in (
            KEY_CONFIG_ITEM_POSTGRES_PASSWORD,
            KEY_CONFIG_ITEM_RABBITMQ_PASSWORD,
            KEY_CONFIG_ITEM_REDIS_PASSWORD,
            KEY_CONFIG_ITEM_MINIO_PASSWORD,
        ):
            if not stack_config.get_value(key):
                InstallerLogger.info(f"Copy {stack_config.get_item(key).label} from the data node's environment file")
                prompt_and_set(ui, stack_config, key, required=True)


def prompt_images(ui, stack_config, profile: RoleProfile) -> None:
    if not profile.runs_compute:
        return
    prompt_and_set(ui, stack_config, KEY_CONFIG_ITEM_IMAGE_REGISTRY, required=True)
    prompt_and_set(ui, stack_config, KEY_CONFIG_ITEM_IMAGE_TAG, required=True)
    if prompt_and_set(ui, stack_config, KEY_CONFIG_ITEM_REGISTRY_USERNAME):
        prompt_and_set(ui, stack_config, KEY_CONFIG_ITEM_REGISTRY_PASSWORD)


def prompt_backup_settings(ui, stack_config) -> None:
    prompt_and_set(ui, stack_config, KEY_CONFIG_ITEM_BACKUP_SCHEDULE, required=True)
    prompt_and_set(ui, stack_config, KEY_CONFIG_ITEM_BACKUP_RETENTION)
    prompt_and_set(ui, stack_config, KEY_CONFIG_ITEM_SNAPSHOT_RETENTION)


def prompt_all(ui, stack_config) -> RoleProfile:
    """The full install questionnaire, in order."""
    profile = prompt_topology(ui, stack_config)
    prompt_capacity(ui, stack_config, profile)
    prompt_hosts(ui, stack_config, profile)
    prompt_domains(ui, stack_config, profile)
    prompt_credentials(ui, stack_config, profile)
    prompt_images(ui, stack_config, profile)
    return profile
