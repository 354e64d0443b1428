#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""
Required-field validation for stackctl rendering.

Which fields are required depends on the services this node runs:
- edge proxy: primary domain and certificate contact email
- compute or data services: every service credential
- compute services: application secret key and image registry
- compute without local data services: the data node host
- edge without local compute services: the application node host
- edge with admin UI domains but no local data services: the data node host

The rules operate on the renderer's inputs so the renderer and the
interactive flow enforce exactly the same thing.
"""

from dataclasses import dataclass
from typing import List

from stackctl.installer.configs.configuration_items import ALL_CONFIG_ITEMS_DICT
from stackctl.installer.configs.constants.config_env_var_keys import (
    KEY_ENV_ACME_EMAIL,
    KEY_ENV_APP_NODE_HOST,
    KEY_ENV_DATA_NODE_HOST,
    KEY_ENV_DOMAIN,
    KEY_ENV_IMAGE_REGISTRY,
    KEY_ENV_IMAGE_TAG,
    KEY_ENV_MINIO_PASSWORD,
    KEY_ENV_MINIO_USER,
    KEY_ENV_POSTGRES_DB,
    KEY_ENV_POSTGRES_PASSWORD,
    KEY_ENV_POSTGRES_USER,
    KEY_ENV_RABBITMQ_PASSWORD,
    KEY_ENV_RABBITMQ_USER,
    KEY_ENV_REDIS_PASSWORD,
    KEY_ENV_SECRET_KEY,
)
from stackctl.installer.core.config_env_mapper import EnvMapper


@dataclass
class ValidationIssue:
    key: str
    label: str
    message: str


_ENV_MAPPER = EnvMapper()


def _label_for(env_key: str) -> str:
    item_key = _ENV_MAPPER.get_item_key(env_key)
    item = ALL_CONFIG_ITEMS_DICT.get(item_key) if item_key else None
    return item.label if item else env_key


def _is_non_empty_str(value) -> bool:
    return isinstance(value, str) and len(value.strip()) > 0


def validate_render_inputs(profile, credentials, domains, images, options) -> List[ValidationIssue]:
    """Collect every missing required field for rendering this node's artifacts.

    Returns:
        A list of ValidationIssue objects. Empty if all checks pass.
    """
    issues: List[ValidationIssue] = []

    def require(env_key: str, value, reason: str):
        if not _is_non_empty_str(value):
            issues.append(ValidationIssue(key=env_key, label=_label_for(env_key), message=reason))

    if profile.runs_edge:
        require(KEY_ENV_DOMAIN, domains.domain, "required when the edge proxy runs on this host")
        require(KEY_ENV_ACME_EMAIL, domains.acme_email, "required for certificate issuance")

    if profile.runs_compute or profile.runs_data:
        reason = "required by the application and data services"
        require(KEY_ENV_POSTGRES_DB, credentials.postgres_db, reason)
        require(KEY_ENV_POSTGRES_USER, credentials.postgres_user, reason)
        require(KEY_ENV_POSTGRES_PASSWORD, credentials.postgres_password, reason)
        require(KEY_ENV_RABBITMQ_USER, credentials.rabbitmq_user, reason)
        require(KEY_ENV_RABBITMQ_PASSWORD, credentials.rabbitmq_password, reason)
        require(KEY_ENV_REDIS_PASSWORD, credentials.redis_password, reason)
        require(KEY_ENV_MINIO_USER, credentials.minio_user, reason)
        require(KEY_ENV_MINIO_PASSWORD, credentials.minio_password, reason)

    if profile.runs_compute:
        require(KEY_ENV_SECRET_KEY, credentials.secret_key, "required by the application services")
        require(KEY_ENV_IMAGE_REGISTRY, images.registry, "required to pull the application images")
        require(KEY_ENV_IMAGE_TAG, images.tag, "required to pull the application images")
        if not profile.runs_data:
            require(KEY_ENV_DATA_NODE_HOST, options.data_node_host, "required when the data services run on another host")

    if profile.runs_edge and not profile.runs_compute:
        require(KEY_ENV_APP_NODE_HOST, options.app_node_host, "required when the application runs on another host")

    if (
        profile.runs_edge
        and (not profile.runs_data)
        and (not profile.runs_compute)
        and (_is_non_empty_str(domains.rabbitmq_domain) or _is_non_empty_str(domains.minio_domain))
    ):
        require(
            KEY_ENV_DATA_NODE_HOST,
            options.data_node_host,
            "required to publish admin UIs of data services running on another host",
        )

    return issues


def validate_required(stack_config) -> List[ValidationIssue]:
    """Validate the required fields of a StackConfig's current deployment plan."""
    plan = stack_config.build_plan()
    return validate_render_inputs(plan.profile, plan.credentials, plan.domains, plan.images, plan.options)


def format_validation_summary(issues: List[ValidationIssue]) -> str:
    """Create a human-readable summary of validation issues."""
    if not issues:
        return ""
    lines = [
        "Some required settings are missing:",
    ]
    for issue in issues:
        lines.append(f"- {issue.label} ({issue.key}): {issue.message}")
    return "\n".join(lines)
