#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.


"""Build and format configuration and status summaries for display."""

from typing import List, Tuple

from stackctl.installer.configs.constants.constants import (
    APP_SERVICES,
    DATA_SERVICES,
    EDGE_SERVICES,
    STATE_RUNNING,
)


def _normalize_display_string(value: str) -> str:
    """Normalize yes/no style strings to Title case for consistent display."""
    if value is None:
        return "Not set"
    mapping = {
        "yes": "Yes",
        "no": "No",
        "true": "Yes",
        "false": "No",
        "always": "Always",
        "unless-stopped": "Unless-stopped",
    }
    return mapping.get(str(value).strip().lower(), value)


def format_summary_value(label: str, value) -> str:
    """Format a configuration value for display, masking passwords and secrets."""
    lower_label = label.lower()
    if ("password" in lower_label or "secret" in lower_label) and value:
        return "********"
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if value is None or value == "":
        return "Not set"
    return _normalize_display_string(str(value))


def build_configuration_summary_items(plan, workdir: str) -> List[Tuple[str, str]]:
    """(label, value) pairs describing a DeploymentPlan."""
    profile = plan.profile
    items = [
        ("Working Directory", workdir),
        ("Project Name", plan.options.project_name),
        ("Topology Pattern", plan.pattern.value),
        ("Deployment Role", profile.role.value),
        ("Compose Profiles", ", ".join(profile.compose_profiles)),
        ("Edge Proxy", profile.runs_edge),
    ]
    if not profile.runs_data:
        items.append(("Data Node Host", plan.options.data_node_host))
    if profile.runs_edge and not profile.runs_compute:
        items.append(("App Node Host", plan.options.app_node_host))
    if profile.needs_capacity:
        items.extend(
            [
                ("Peak Concurrent Users", plan.options.peak_users),
                ("Requests per Minute per User", plan.options.requests_per_minute),
                ("Web Replicas", plan.replica_plan.web_replicas),
                ("Processor Replicas", plan.replica_plan.processor_replicas),
                ("Worker Replicas", plan.replica_plan.worker_replicas),
            ]
        )
    if profile.runs_edge:
        items.extend(
            [
                ("Domain", plan.domains.domain),
                ("ACME Email", plan.domains.acme_email),
            ]
        )
    if profile.runs_compute:
        items.extend(
            [
                ("API Image", plan.images.api_image),
                ("Client Image", plan.images.client_image),
            ]
        )
    items.append(("Restart Policy", plan.options.restart_policy))
    return [(label, format_summary_value(label, value)) for label, value in items]


def public_urls(plan) -> List[Tuple[str, str]]:
    """(description, URL) for each hostname the edge proxy serves on this node."""
    if not plan.profile.runs_edge:
        return []
    domains = plan.domains
    urls = [("Application", f"https://{domains.domain}")]
    if domains.client_domain:
        urls.append(("Client", f"https://{domains.client_domain}"))
    if domains.rabbitmq_domain:
        urls.append(("RabbitMQ Management", f"https://{domains.rabbitmq_domain}"))
    if domains.minio_domain:
        urls.append(("MinIO Console", f"https://{domains.minio_domain}"))
    return urls


def local_services(profile) -> List[str]:
    """Services expected to run on a node, in start order."""
    services = []
    if profile.runs_data:
        services.extend(DATA_SERVICES)
    if profile.runs_edge:
        services.extend(EDGE_SERVICES)
    if profile.runs_compute:
        services.extend(APP_SERVICES)
    return services


def build_status_rows(runtime, profile) -> List[List[str]]:
    """Table rows (header first) of running and healthy instance counts per service."""
    rows = [["Service", "Running", "Healthy"]]
    for service in local_services(profile):
        states = runtime.service_states(service)
        running = sum(1 for s in states if s.state.lower() == STATE_RUNNING)
        healthy = sum(1 for s in states if s.is_healthy)
        rows.append([service, f"{running}/{len(states)}", f"{healthy}/{len(states)}"])
    return rows
