#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Unit tests for summary_utils formatting helpers."""

import unittest

from stackctl.installer.actions.rollout import ContainerState
from stackctl.installer.configs.constants.configuration_item_keys import (
    KEY_CONFIG_ITEM_CLIENT_DOMAIN,
    KEY_CONFIG_ITEM_DOMAIN,
    KEY_CONFIG_ITEM_MINIO_DOMAIN,
    KEY_CONFIG_ITEM_ROLE_CHOICE,
    KEY_CONFIG_ITEM_TOPOLOGY_PATTERN,
)
from stackctl.installer.configs.constants.enums import DeploymentRole
from stackctl.installer.core.stack_config import StackConfig
from stackctl.installer.core.topology import resolve_profile
from stackctl.installer.utils.summary_utils import (
    _normalize_display_string,
    build_configuration_summary_items,
    build_status_rows,
    format_summary_value,
    local_services,
    public_urls,
)


class StatesRuntime:
    def __init__(self, states_by_service):
        self.states_by_service = states_by_service

    def service_states(self, service):
        return self.states_by_service.get(service, [])


class TestSummaryUtils(unittest.TestCase):
    def test_normalize_display_string(self):
        self.assertEqual(_normalize_display_string("yes"), "Yes")
        self.assertEqual(_normalize_display_string("false"), "No")
        self.assertEqual(_normalize_display_string("unless-stopped"), "Unless-stopped")
        self.assertEqual(_normalize_display_string("Always"), "Always")
        self.assertEqual(_normalize_display_string(None), "Not set")

    def test_format_summary_value_password_mask(self):
        self.assertEqual(format_summary_value("Postgres Password", "secret"), "********")
        self.assertEqual(format_summary_value("Application Secret Key", "abc"), "********")
        self.assertEqual(format_summary_value("Registry Password", ""), "Not set")

    def test_format_summary_value_types(self):
        self.assertEqual(format_summary_value("Edge Proxy", True), "Yes")
        self.assertEqual(format_summary_value("Edge Proxy", False), "No")
        self.assertEqual(format_summary_value("Web Replicas", 4), "4")
        self.assertEqual(format_summary_value("Domain", "example.com"), "example.com")
        self.assertEqual(format_summary_value("Something", None), "Not set")


class TestConfigurationSummary(unittest.TestCase):
    def test_single_node_items(self):
        config = StackConfig()
        config.set_value(KEY_CONFIG_ITEM_DOMAIN, "example.com")
        items = dict(build_configuration_summary_items(config.build_plan(), "/srv/stack"))
        self.assertEqual(items["Working Directory"], "/srv/stack")
        self.assertEqual(items["Deployment Role"], "all")
        self.assertEqual(items["Compose Profiles"], "app, data, edge")
        self.assertEqual(items["Edge Proxy"], "Yes")
        self.assertEqual(items["Domain"], "example.com")
        self.assertEqual(items["ACME Email"], "Not set")
        self.assertEqual(items["Web Replicas"], "2")
        self.assertNotIn("Data Node Host", items)

    def test_data_node_items(self):
        config = StackConfig()
        config.set_value(KEY_CONFIG_ITEM_TOPOLOGY_PATTERN, "two-node")
        config.set_value(KEY_CONFIG_ITEM_ROLE_CHOICE, "data")
        items = dict(build_configuration_summary_items(config.build_plan(), "/srv/stack"))
        self.assertEqual(items["Compose Profiles"], "data")
        self.assertEqual(items["Edge Proxy"], "No")
        self.assertNotIn("Web Replicas", items)
        self.assertNotIn("Domain", items)
        self.assertNotIn("API Image", items)


class TestPublicUrls(unittest.TestCase):
    def test_urls_for_configured_domains(self):
        config = StackConfig()
        config.set_value(KEY_CONFIG_ITEM_DOMAIN, "example.com")
        config.set_value(KEY_CONFIG_ITEM_CLIENT_DOMAIN, "app.example.com")
        config.set_value(KEY_CONFIG_ITEM_MINIO_DOMAIN, "s3.example.com")
        self.assertEqual(
            public_urls(config.build_plan()),
            [
                ("Application", "https://example.com"),
                ("Client", "https://app.example.com"),
                ("MinIO Console", "https://s3.example.com"),
            ],
        )

    def test_no_urls_without_edge(self):
        config = StackConfig()
        config.set_value(KEY_CONFIG_ITEM_TOPOLOGY_PATTERN, "three-node")
        config.set_value(KEY_CONFIG_ITEM_ROLE_CHOICE, "app")
        config.set_value(KEY_CONFIG_ITEM_DOMAIN, "example.com")
        self.assertEqual(public_urls(config.build_plan()), [])


class TestStatusRows(unittest.TestCase):
    def test_local_services_order(self):
        self.assertEqual(
            local_services(resolve_profile(DeploymentRole.ALL)),
            ["postgres", "rabbitmq", "redis", "minio", "caddy", "web", "client", "processor", "worker", "jobs"],
        )
        self.assertEqual(local_services(resolve_profile(DeploymentRole.EDGE)), ["caddy"])

    def test_counts(self):
        runtime = StatesRuntime(
            {
                "caddy": [ContainerState("c1", "caddy", "running")],
            }
        )
        rows = build_status_rows(runtime, resolve_profile(DeploymentRole.EDGE))
        self.assertEqual(rows, [["Service", "Running", "Healthy"], ["caddy", "1/1", "1/1"]])

    def test_counts_with_health(self):
        runtime = StatesRuntime(
            {
                "postgres": [ContainerState("p1", "postgres", "running", "healthy")],
                "rabbitmq": [ContainerState("r1", "rabbitmq", "running", "starting")],
                "redis": [ContainerState("d1", "redis", "exited", "unhealthy")],
            }
        )
        rows = build_status_rows(runtime, resolve_profile(DeploymentRole.DATA))
        self.assertEqual(rows[1], ["postgres", "1/1", "1/1"])
        self.assertEqual(rows[2], ["rabbitmq", "1/1", "0/1"])
        self.assertEqual(rows[3], ["redis", "0/1", "0/1"])
        self.assertEqual(rows[4], ["minio", "0/0", "0/0"])


if __name__ == "__main__":
    unittest.main()
