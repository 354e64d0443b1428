#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Unit tests for rendering the environment file, compose document and Caddyfile."""

import unittest

from dataclasses import replace

from stackctl.stack_common import LoadYamlStr
from stackctl.installer.configs.constants.constants import (
    APP_SERVICES,
    DATA_SERVICES,
    SERVICE_CADDY,
    SERVICE_IP_EXPOSED,
    SERVICE_IP_LOCAL,
)
from stackctl.installer.configs.constants.enums import DeploymentRole
from stackctl.installer.core.capacity import ReplicaPlan
from stackctl.installer.core.renderer import (
    GENERATED_HEADER,
    Credentials,
    DomainSet,
    ImageRefs,
    RenderOptions,
    edge_routes,
    render,
)
from stackctl.installer.core.topology import resolve_profile
from stackctl.installer.utils.exceptions import RequiredFieldError

CREDENTIALS = Credentials(
    postgres_db="app",
    postgres_user="app",
    postgres_password="pg-pass-123",
    rabbitmq_user="app",
    rabbitmq_password="rabbit-pass",
    redis_password="redis-pass",
    minio_user="minioadmin",
    minio_password="minio-pass-123",
    secret_key="signing-key",
)

DOMAINS = DomainSet(
    domain="example.com",
    client_domain="app.example.com",
    rabbitmq_domain="mq.example.com",
    minio_domain="",
    acme_email="ops@example.com",
)


def _env_dict(text):
    result = {}
    for line in text.splitlines():
        if line and not line.startswith("#") and "=" in line:
            key, _, value = line.partition("=")
            result[key] = value
    return result


def _render(role, edge_override=None, replicas=None, domains=DOMAINS, credentials=CREDENTIALS, **options):
    return render(
        resolve_profile(role, edge_override),
        replicas or ReplicaPlan(),
        credentials,
        domains,
        ImageRefs(),
        RenderOptions(**options),
    )


class TestComposeDocument(unittest.TestCase):
    def setUp(self):
        self.rendered = _render(
            DeploymentRole.ALL,
            replicas=ReplicaPlan(web_replicas=10, processor_replicas=6, worker_replicas=4),
        )
        self.compose = LoadYamlStr(self.rendered.compose_document)

    def test_header(self):
        self.assertTrue(self.rendered.compose_document.startswith(GENERATED_HEADER))

    def test_all_services_present_with_profiles(self):
        services = self.compose["services"]
        for name in APP_SERVICES:
            self.assertEqual(list(services[name]["profiles"]), ["app"])
        for name in DATA_SERVICES:
            self.assertEqual(list(services[name]["profiles"]), ["data"])
        self.assertEqual(list(services[SERVICE_CADDY]["profiles"]), ["edge"])

    def test_replicas_and_cpu_limit(self):
        services = self.compose["services"]
        self.assertEqual(services["web"]["deploy"]["replicas"], 10)
        self.assertEqual(str(services["web"]["deploy"]["resources"]["limits"]["cpus"]), "0.8")
        self.assertEqual(services["processor"]["deploy"]["replicas"], 6)
        self.assertEqual(services["worker"]["deploy"]["replicas"], 4)
        self.assertEqual(list(services["web"]["ports"]), ["${APP_BIND_ADDRESS}:8000-8009:8000"])

    def test_default_web_port_range(self):
        # two replicas is the floor, so the range always spans at least two ports
        compose = LoadYamlStr(_render(DeploymentRole.ALL).compose_document)
        self.assertEqual(list(compose["services"]["web"]["ports"]), ["${APP_BIND_ADDRESS}:8000-8001:8000"])

    def test_healthchecks_restart_and_logging(self):
        for name, service in self.compose["services"].items():
            self.assertEqual(service["restart"], "unless-stopped")
            self.assertEqual(service["logging"]["driver"], "local")
            if name == SERVICE_CADDY:
                self.assertNotIn("healthcheck", service)
            else:
                self.assertIn("healthcheck", service, f"{name} has no healthcheck")

    def test_credentials_are_interpolated_not_inlined(self):
        document = self.rendered.compose_document
        for secret in ("pg-pass-123", "rabbit-pass", "redis-pass", "minio-pass-123", "signing-key"):
            self.assertNotIn(secret, document)
        self.assertIn("${POSTGRES_PASSWORD}", document)

    def test_compose_identical_across_roles(self):
        replicas = ReplicaPlan(web_replicas=3)
        data = _render(DeploymentRole.DATA, replicas=replicas).compose_document
        full = _render(DeploymentRole.ALL, replicas=replicas).compose_document
        self.assertEqual(data, full)

    def test_restart_policy_option(self):
        compose = LoadYamlStr(_render(DeploymentRole.ALL, restart_policy="always").compose_document)
        self.assertEqual(compose["services"]["postgres"]["restart"], "always")


class TestEnvironmentFile(unittest.TestCase):
    def test_all_role(self):
        rendered = _render(DeploymentRole.ALL, topology_pattern="single-node", role_choice="all")
        env = _env_dict(rendered.environment_file)
        self.assertTrue(rendered.environment_file.startswith(GENERATED_HEADER))
        self.assertEqual(env["COMPOSE_PROFILES"], "app,data,edge")
        self.assertEqual(env["DEPLOYMENT_ROLE"], "all")
        self.assertEqual(env["EDGE_ENABLED"], "true")
        self.assertEqual(env["DATA_BIND_ADDRESS"], SERVICE_IP_LOCAL)
        self.assertEqual(env["APP_BIND_ADDRESS"], SERVICE_IP_LOCAL)
        self.assertEqual(env["POSTGRES_HOST"], "postgres")
        self.assertEqual(env["POSTGRES_PASSWORD"], "pg-pass-123")
        self.assertEqual(env["WEB_REPLICAS"], "2")
        for group in ("# Topology", "# Capacity", "# Domains", "# Credentials", "# Images", "# Operations"):
            self.assertIn(group, rendered.environment_file)

    def test_data_role_exposes_data_ports(self):
        env = _env_dict(_render(DeploymentRole.DATA, edge_override=True).environment_file)
        self.assertEqual(env["COMPOSE_PROFILES"], "data")
        self.assertEqual(env["EDGE_ENABLED"], "false")
        self.assertEqual(env["DATA_BIND_ADDRESS"], SERVICE_IP_EXPOSED)
        self.assertEqual(env["APP_BIND_ADDRESS"], SERVICE_IP_LOCAL)

    def test_app_role_points_at_data_node(self):
        env = _env_dict(_render(DeploymentRole.APP, data_node_host="10.0.0.5").environment_file)
        self.assertEqual(env["COMPOSE_PROFILES"], "app")
        self.assertEqual(env["APP_BIND_ADDRESS"], SERVICE_IP_EXPOSED)
        for key in ("POSTGRES_HOST", "RABBITMQ_HOST", "REDIS_HOST", "MINIO_HOST"):
            self.assertEqual(env[key], "10.0.0.5")

    def test_special_characters_are_single_quoted(self):
        credentials = replace(CREDENTIALS, postgres_password="pa$$word#1")
        env = _env_dict(_render(DeploymentRole.ALL, credentials=credentials).environment_file)
        self.assertEqual(env["POSTGRES_PASSWORD"], "'pa$$word#1'")


class TestCaddyfile(unittest.TestCase):
    def test_local_routes(self):
        caddyfile = _render(DeploymentRole.ALL).edge_routing_document
        self.assertIn("\temail ops@example.com", caddyfile)
        self.assertIn("example.com {\n\treverse_proxy web:8000\n}", caddyfile)
        self.assertIn("app.example.com {\n\treverse_proxy client:3000\n}", caddyfile)
        self.assertIn("mq.example.com {\n\treverse_proxy rabbitmq:15672\n}", caddyfile)
        self.assertNotIn("lb_policy", caddyfile)

    def test_remote_upstreams_are_load_balanced(self):
        caddyfile = _render(
            DeploymentRole.EDGE,
            replicas=ReplicaPlan(web_replicas=3),
            app_node_host="app.internal",
            data_node_host="data.internal",
        ).edge_routing_document
        self.assertIn("\treverse_proxy app.internal:8000 app.internal:8001 app.internal:8002 {", caddyfile)
        self.assertIn("\t\tlb_policy round_robin", caddyfile)
        self.assertIn("\t\thealth_uri /health", caddyfile)
        self.assertIn("\treverse_proxy app.internal:3000", caddyfile)
        self.assertIn("\treverse_proxy data.internal:15672", caddyfile)

    def test_route_order_and_optional_domains(self):
        routes = edge_routes(
            resolve_profile(DeploymentRole.ALL),
            ReplicaPlan(),
            DomainSet(domain="example.com", minio_domain="s3.example.com", acme_email="ops@example.com"),
            RenderOptions(),
        )
        self.assertEqual([host for host, _ in routes], ["example.com", "s3.example.com"])
        self.assertEqual(routes[1][1], ["minio:9001"])

    def test_no_edge_placeholder(self):
        caddyfile = _render(DeploymentRole.DATA).edge_routing_document
        self.assertEqual(
            caddyfile,
            f"{GENERATED_HEADER}\n# The edge proxy does not run on this host (role: data).\n",
        )

    def test_edge_disabled_on_all_role(self):
        caddyfile = _render(DeploymentRole.ALL, edge_override=False).edge_routing_document
        self.assertNotIn("reverse_proxy", caddyfile)


class TestRenderValidation(unittest.TestCase):
    def test_deterministic(self):
        first = _render(DeploymentRole.ALL, replicas=ReplicaPlan(web_replicas=4))
        second = _render(DeploymentRole.ALL, replicas=ReplicaPlan(web_replicas=4))
        self.assertEqual(first, second)
        self.assertEqual(sorted(first.by_filename()), [".env", "Caddyfile", "docker-compose.yml"])

    def test_edge_role_missing_inputs(self):
        with self.assertRaises(RequiredFieldError) as ctx:
            _render(DeploymentRole.EDGE, domains=DomainSet(), credentials=Credentials())
        keys = {issue.key for issue in ctx.exception.issues}
        self.assertEqual(keys, {"DOMAIN", "ACME_EMAIL", "APP_NODE_HOST"})

    def test_edge_role_admin_domains_need_data_host(self):
        with self.assertRaises(RequiredFieldError) as ctx:
            _render(DeploymentRole.EDGE, app_node_host="app.internal")
        self.assertEqual([issue.key for issue in ctx.exception.issues], ["DATA_NODE_HOST"])

    def test_app_role_requires_data_host_and_secrets(self):
        with self.assertRaises(RequiredFieldError) as ctx:
            _render(DeploymentRole.APP, credentials=Credentials(postgres_db="app", postgres_user="app"))
        keys = {issue.key for issue in ctx.exception.issues}
        self.assertIn("DATA_NODE_HOST", keys)
        self.assertIn("POSTGRES_PASSWORD", keys)
        self.assertIn("SECRET_KEY", keys)
        self.assertNotIn("DOMAIN", keys)

    def test_data_role_needs_no_domain(self):
        rendered = _render(DeploymentRole.DATA, domains=DomainSet())
        self.assertIn("COMPOSE_PROFILES=data", rendered.environment_file)


if __name__ == "__main__":
    unittest.main()
