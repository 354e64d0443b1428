#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Rendering of the generated artifacts.

render() turns a resolved role, a replica plan, credentials, domains, image
references and operational options into the three text artifacts written to
the working directory: the environment file, the compose document and the
Caddyfile. It is pure and deterministic; secrets are never generated here.

The compose document is the same for every role apart from the replica
counts. Services are grouped with compose profiles and the environment file
enables the node's profiles through COMPOSE_PROFILES. Credentials only ever
appear in the environment file; the compose document references them as
${VAR} interpolations.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ruamel.yaml.comments import CommentedMap, CommentedSeq

from stackctl.stack_common import DumpYamlStr
from stackctl.stack_constants import (
    API_IMAGE_NAME,
    CADDY_IMAGE,
    CLIENT_IMAGE_NAME,
    DEFAULT_IMAGE_REGISTRY,
    DEFAULT_IMAGE_TAG,
    DEFAULT_PROJECT_NAME,
    MINIO_IMAGE,
    POSTGRES_IMAGE,
    PROFILE_APP,
    PROFILE_DATA,
    PROFILE_EDGE,
    RABBITMQ_IMAGE,
    REDIS_IMAGE,
)
from stackctl.installer.configs.constants.config_env_var_keys import *
from stackctl.installer.configs.constants.constants import (
    ARTIFACT_COMPOSE,
    ARTIFACT_EDGE,
    ARTIFACT_ENV,
    ARTIFACT_FILENAMES,
    CADDYFILE_FILENAME,
    DEFAULT_BACKUP_RETENTION,
    DEFAULT_BACKUP_SCHEDULE,
    DEFAULT_HEALTH_ATTEMPTS,
    DEFAULT_HEALTH_INTERVAL_SEC,
    DEFAULT_RESTART_DELAY_SEC,
    DEFAULT_RESTART_POLICY,
    DEFAULT_SNAPSHOT_RETENTION,
    DOCKER_LOG_DRIVER,
    SERVICE_CADDY,
    SERVICE_CLIENT,
    SERVICE_IP_EXPOSED,
    SERVICE_IP_LOCAL,
    SERVICE_JOBS,
    SERVICE_MINIO,
    SERVICE_PORT_CLIENT,
    SERVICE_PORT_HTTP,
    SERVICE_PORT_HTTPS,
    SERVICE_PORT_MINIO,
    SERVICE_PORT_MINIO_CONSOLE,
    SERVICE_PORT_POSTGRES,
    SERVICE_PORT_RABBITMQ,
    SERVICE_PORT_RABBITMQ_ADMIN,
    SERVICE_PORT_REDIS,
    SERVICE_PORT_WEB,
    SERVICE_POSTGRES,
    SERVICE_PROCESSOR,
    SERVICE_RABBITMQ,
    SERVICE_REDIS,
    SERVICE_WEB,
    SERVICE_WORKER,
    WEB_CPU_LIMIT_MILLICORES,
)
from stackctl.installer.core.capacity import ReplicaPlan
from stackctl.installer.core.topology import RoleProfile
from stackctl.installer.core.validation import validate_render_inputs
from stackctl.installer.utils.exceptions import RequiredFieldError
from stackctl.stack_utils import bool_to_str

GENERATED_HEADER = "# Generated by stackctl. Changes are overwritten by the next install, update or scale."


@dataclass(frozen=True)
class Credentials:
    postgres_db: str = ""
    postgres_user: str = ""
    postgres_password: str = ""
    rabbitmq_user: str = ""
    rabbitmq_password: str = ""
    redis_password: str = ""
    minio_user: str = ""
    minio_password: str = ""
    secret_key: str = ""


@dataclass(frozen=True)
class DomainSet:
    domain: str = ""
    client_domain: str = ""
    rabbitmq_domain: str = ""
    minio_domain: str = ""
    acme_email: str = ""


@dataclass(frozen=True)
class ImageRefs:
    registry: str = DEFAULT_IMAGE_REGISTRY
    tag: str = DEFAULT_IMAGE_TAG
    registry_username: str = ""
    registry_password: str = ""

    @property
    def api_image(self) -> str:
        return f"{self.registry}/{API_IMAGE_NAME}:{self.tag}"

    @property
    def client_image(self) -> str:
        return f"{self.registry}/{CLIENT_IMAGE_NAME}:{self.tag}"


@dataclass(frozen=True)
class RenderOptions:
    project_name: str = DEFAULT_PROJECT_NAME
    topology_pattern: str = ""
    role_choice: str = ""
    data_node_host: str = ""
    app_node_host: str = ""
    peak_users: Optional[int] = None
    requests_per_minute: Optional[int] = None
    restart_policy: str = DEFAULT_RESTART_POLICY
    backup_schedule: str = DEFAULT_BACKUP_SCHEDULE
    backup_retention: int = DEFAULT_BACKUP_RETENTION
    snapshot_retention: int = DEFAULT_SNAPSHOT_RETENTION
    restart_delay: int = DEFAULT_RESTART_DELAY_SEC
    health_interval: int = DEFAULT_HEALTH_INTERVAL_SEC
    health_attempts: int = DEFAULT_HEALTH_ATTEMPTS


@dataclass(frozen=True)
class RenderedConfigSet:
    environment_file: str
    compose_document: str
    edge_routing_document: str

    def by_kind(self) -> Dict[str, str]:
        return {
            ARTIFACT_ENV: self.environment_file,
            ARTIFACT_COMPOSE: self.compose_document,
            ARTIFACT_EDGE: self.edge_routing_document,
        }

    def by_filename(self) -> Dict[str, str]:
        return {ARTIFACT_FILENAMES[kind]: text for kind, text in self.by_kind().items()}


###################################################################################################
# helpers shared by the three documents


def web_host_ports(replica_plan: ReplicaPlan) -> List[int]:
    """Host ports published for the web replicas, one per replica."""
    return [SERVICE_PORT_WEB + i for i in range(replica_plan.web_replicas)]


def bind_addresses(profile: RoleProfile) -> Tuple[str, str]:
    """(data bind address, app bind address) for a role.

    Ports are exposed on all interfaces only where a remote peer consumes them.
    """
    data_bind = SERVICE_IP_EXPOSED if (profile.runs_data and not profile.runs_compute) else SERVICE_IP_LOCAL
    app_bind = SERVICE_IP_EXPOSED if (profile.runs_compute and not profile.runs_edge) else SERVICE_IP_LOCAL
    return data_bind, app_bind


def _data_host(profile: RoleProfile, options: RenderOptions, service_name: str) -> str:
    if profile.runs_data or not options.data_node_host:
        return service_name
    return options.data_node_host


def _seq(*items, flow=False) -> CommentedSeq:
    seq = CommentedSeq(items)
    if flow:
        seq.fa.set_flow_style()
    return seq


def _map(*pairs) -> CommentedMap:
    return CommentedMap(pairs)


###################################################################################################
# compose document


def _healthcheck(test, interval="10s", timeout="5s", retries=5, start_period="30s") -> CommentedMap:
    return _map(
        ("test", test),
        ("interval", interval),
        ("timeout", timeout),
        ("retries", retries),
        ("start_period", start_period),
    )


def _app_environment() -> CommentedMap:
    return _map(
        ("SECRET_KEY", f"${{{KEY_ENV_SECRET_KEY}}}"),
        ("DOMAIN", f"${{{KEY_ENV_DOMAIN}}}"),
        (
            "DATABASE_URL",
            f"postgresql://${{{KEY_ENV_POSTGRES_USER}}}:${{{KEY_ENV_POSTGRES_PASSWORD}}}"
            f"@${{{KEY_ENV_POSTGRES_HOST}}}:{SERVICE_PORT_POSTGRES}/${{{KEY_ENV_POSTGRES_DB}}}",
        ),
        (
            "RABBITMQ_URL",
            f"amqp://${{{KEY_ENV_RABBITMQ_USER}}}:${{{KEY_ENV_RABBITMQ_PASSWORD}}}"
            f"@${{{KEY_ENV_RABBITMQ_HOST}}}:{SERVICE_PORT_RABBITMQ}/",
        ),
        ("REDIS_URL", f"redis://:${{{KEY_ENV_REDIS_PASSWORD}}}@${{{KEY_ENV_REDIS_HOST}}}:{SERVICE_PORT_REDIS}/0"),
        ("MINIO_ENDPOINT", f"${{{KEY_ENV_MINIO_HOST}}}:{SERVICE_PORT_MINIO}"),
        ("MINIO_ACCESS_KEY", f"${{{KEY_ENV_MINIO_USER}}}"),
        ("MINIO_SECRET_KEY", f"${{{KEY_ENV_MINIO_PASSWORD}}}"),
    )


def _service(
    image: str,
    profile_tag: str,
    restart_policy: str,
    command=None,
    environment=None,
    ports=None,
    volumes=None,
    healthcheck=None,
    deploy=None,
) -> CommentedMap:
    service = _map(("image", image), ("profiles", _seq(profile_tag, flow=True)))
    if command is not None:
        service["command"] = command
    if environment is not None:
        service["environment"] = environment
    if ports is not None:
        service["ports"] = ports
    if volumes is not None:
        service["volumes"] = volumes
    if healthcheck is not None:
        service["healthcheck"] = healthcheck
    if deploy is not None:
        service["deploy"] = deploy
    service["restart"] = restart_policy
    service["logging"] = _map(("driver", DOCKER_LOG_DRIVER))
    return service


def _compose_services(replica_plan: ReplicaPlan, options: RenderOptions) -> CommentedMap:
    restart = options.restart_policy
    api_image = f"${{{KEY_ENV_IMAGE_REGISTRY}}}/{API_IMAGE_NAME}:${{{KEY_ENV_IMAGE_TAG}}}"
    client_image = f"${{{KEY_ENV_IMAGE_REGISTRY}}}/{CLIENT_IMAGE_NAME}:${{{KEY_ENV_IMAGE_TAG}}}"
    data_bind = f"${{{KEY_ENV_DATA_BIND_ADDRESS}}}"
    app_bind = f"${{{KEY_ENV_APP_BIND_ADDRESS}}}"
    web_ports = web_host_ports(replica_plan)
    web_port_range = f"{web_ports[0]}-{web_ports[-1]}" if len(web_ports) > 1 else str(web_ports[0])
    web_cpus = f"{WEB_CPU_LIMIT_MILLICORES / 1000:g}"

    def _process_check(name):
        return _healthcheck(_seq("CMD-SHELL", f"pgrep -f {name} > /dev/null || exit 1", flow=True))

    services = _map(
        (
            SERVICE_WEB,
            _service(
                api_image,
                PROFILE_APP,
                restart,
                environment=_app_environment(),
                ports=_seq(f"{app_bind}:{web_port_range}:{SERVICE_PORT_WEB}"),
                healthcheck=_healthcheck(
                    _seq("CMD-SHELL", f"curl -fsS http://localhost:{SERVICE_PORT_WEB}/health || exit 1", flow=True)
                ),
                deploy=_map(
                    ("replicas", replica_plan.web_replicas),
                    ("resources", _map(("limits", _map(("cpus", web_cpus))))),
                ),
            ),
        ),
        (
            SERVICE_CLIENT,
            _service(
                client_image,
                PROFILE_APP,
                restart,
                environment=_map(("API_URL", f"https://${{{KEY_ENV_DOMAIN}}}")),
                ports=_seq(f"{app_bind}:{SERVICE_PORT_CLIENT}:{SERVICE_PORT_CLIENT}"),
                healthcheck=_healthcheck(
                    _seq("CMD-SHELL", f"wget -q --spider http://localhost:{SERVICE_PORT_CLIENT}/ || exit 1", flow=True)
                ),
            ),
        ),
        (
            SERVICE_PROCESSOR,
            _service(
                api_image,
                PROFILE_APP,
                restart,
                command=_seq(SERVICE_PROCESSOR, flow=True),
                environment=_app_environment(),
                healthcheck=_process_check(SERVICE_PROCESSOR),
                deploy=_map(("replicas", replica_plan.processor_replicas)),
            ),
        ),
        (
            SERVICE_WORKER,
            _service(
                api_image,
                PROFILE_APP,
                restart,
                command=_seq(SERVICE_WORKER, flow=True),
                environment=_app_environment(),
                healthcheck=_process_check(SERVICE_WORKER),
                deploy=_map(("replicas", replica_plan.worker_replicas)),
            ),
        ),
        (
            SERVICE_JOBS,
            _service(
                api_image,
                PROFILE_APP,
                restart,
                command=_seq(SERVICE_JOBS, flow=True),
                environment=_app_environment(),
                healthcheck=_process_check(SERVICE_JOBS),
            ),
        ),
        (
            SERVICE_POSTGRES,
            _service(
                POSTGRES_IMAGE,
                PROFILE_DATA,
                restart,
                environment=_map(
                    ("POSTGRES_DB", f"${{{KEY_ENV_POSTGRES_DB}}}"),
                    ("POSTGRES_USER", f"${{{KEY_ENV_POSTGRES_USER}}}"),
                    ("POSTGRES_PASSWORD", f"${{{KEY_ENV_POSTGRES_PASSWORD}}}"),
                ),
                ports=_seq(f"{data_bind}:{SERVICE_PORT_POSTGRES}:{SERVICE_PORT_POSTGRES}"),
                volumes=_seq("postgres_data:/var/lib/postgresql/data"),
                healthcheck=_healthcheck(
                    _seq("CMD-SHELL", "pg_isready -U $${POSTGRES_USER} -d $${POSTGRES_DB}", flow=True)
                ),
            ),
        ),
        (
            SERVICE_RABBITMQ,
            _service(
                RABBITMQ_IMAGE,
                PROFILE_DATA,
                restart,
                environment=_map(
                    ("RABBITMQ_DEFAULT_USER", f"${{{KEY_ENV_RABBITMQ_USER}}}"),
                    ("RABBITMQ_DEFAULT_PASS", f"${{{KEY_ENV_RABBITMQ_PASSWORD}}}"),
                ),
                ports=_seq(
                    f"{data_bind}:{SERVICE_PORT_RABBITMQ}:{SERVICE_PORT_RABBITMQ}",
                    f"{data_bind}:{SERVICE_PORT_RABBITMQ_ADMIN}:{SERVICE_PORT_RABBITMQ_ADMIN}",
                ),
                volumes=_seq("rabbitmq_data:/var/lib/rabbitmq"),
                healthcheck=_healthcheck(_seq("CMD", "rabbitmq-diagnostics", "-q", "ping", flow=True)),
            ),
        ),
        (
            SERVICE_REDIS,
            _service(
                REDIS_IMAGE,
                PROFILE_DATA,
                restart,
                command=_seq(
                    "redis-server", "--requirepass", f"${{{KEY_ENV_REDIS_PASSWORD}}}", "--appendonly", "yes", flow=True
                ),
                environment=_map(("REDIS_PASSWORD", f"${{{KEY_ENV_REDIS_PASSWORD}}}")),
                ports=_seq(f"{data_bind}:{SERVICE_PORT_REDIS}:{SERVICE_PORT_REDIS}"),
                volumes=_seq("redis_data:/data"),
                healthcheck=_healthcheck(
                    _seq(
                        "CMD-SHELL", 'redis-cli -a "$${REDIS_PASSWORD}" --no-auth-warning ping | grep -q PONG', flow=True
                    )
                ),
            ),
        ),
        (
            SERVICE_MINIO,
            _service(
                MINIO_IMAGE,
                PROFILE_DATA,
                restart,
                command=_seq("server", "/data", "--console-address", f":{SERVICE_PORT_MINIO_CONSOLE}", flow=True),
                environment=_map(
                    ("MINIO_ROOT_USER", f"${{{KEY_ENV_MINIO_USER}}}"),
                    ("MINIO_ROOT_PASSWORD", f"${{{KEY_ENV_MINIO_PASSWORD}}}"),
                ),
                ports=_seq(
                    f"{data_bind}:{SERVICE_PORT_MINIO}:{SERVICE_PORT_MINIO}",
                    f"{data_bind}:{SERVICE_PORT_MINIO_CONSOLE}:{SERVICE_PORT_MINIO_CONSOLE}",
                ),
                volumes=_seq("minio_data:/data"),
                healthcheck=_healthcheck(_seq("CMD", "mc", "ready", "local", flow=True)),
            ),
        ),
        (
            SERVICE_CADDY,
            _service(
                CADDY_IMAGE,
                PROFILE_EDGE,
                restart,
                ports=_seq(
                    f"{SERVICE_PORT_HTTP}:{SERVICE_PORT_HTTP}",
                    f"{SERVICE_PORT_HTTPS}:{SERVICE_PORT_HTTPS}",
                    f"{SERVICE_PORT_HTTPS}:{SERVICE_PORT_HTTPS}/udp",
                ),
                volumes=_seq(
                    f"./{CADDYFILE_FILENAME}:/etc/caddy/{CADDYFILE_FILENAME}:ro",
                    "caddy_data:/data",
                    "caddy_config:/config",
                ),
            ),
        ),
    )
    return services


def render_compose(replica_plan: ReplicaPlan, options: RenderOptions) -> str:
    document = _map(
        ("services", _compose_services(replica_plan, options)),
        (
            "volumes",
            _map(
                ("postgres_data", None),
                ("rabbitmq_data", None),
                ("redis_data", None),
                ("minio_data", None),
                ("caddy_data", None),
                ("caddy_config", None),
            ),
        ),
    )
    return f"{GENERATED_HEADER}\n{DumpYamlStr(document)}"


###################################################################################################
# Caddyfile


def edge_routes(profile: RoleProfile, replica_plan: ReplicaPlan, domains: DomainSet, options: RenderOptions):
    """Ordered (hostname, [upstreams]) pairs routed by the edge proxy."""
    if profile.runs_compute:
        web_upstreams = [f"{SERVICE_WEB}:{SERVICE_PORT_WEB}"]
        client_upstreams = [f"{SERVICE_CLIENT}:{SERVICE_PORT_CLIENT}"]
    else:
        web_upstreams = [f"{options.app_node_host}:{port}" for port in web_host_ports(replica_plan)]
        client_upstreams = [f"{options.app_node_host}:{SERVICE_PORT_CLIENT}"]

    if profile.runs_data:
        rabbitmq_upstreams = [f"{SERVICE_RABBITMQ}:{SERVICE_PORT_RABBITMQ_ADMIN}"]
        minio_upstreams = [f"{SERVICE_MINIO}:{SERVICE_PORT_MINIO_CONSOLE}"]
    else:
        rabbitmq_upstreams = [f"{options.data_node_host}:{SERVICE_PORT_RABBITMQ_ADMIN}"]
        minio_upstreams = [f"{options.data_node_host}:{SERVICE_PORT_MINIO_CONSOLE}"]

    routes = [(domains.domain, web_upstreams)]
    if domains.client_domain:
        routes.append((domains.client_domain, client_upstreams))
    if domains.rabbitmq_domain:
        routes.append((domains.rabbitmq_domain, rabbitmq_upstreams))
    if domains.minio_domain:
        routes.append((domains.minio_domain, minio_upstreams))
    return routes


def render_caddyfile(profile: RoleProfile, replica_plan: ReplicaPlan, domains: DomainSet, options: RenderOptions) -> str:
    lines = [GENERATED_HEADER]
    if not profile.runs_edge:
        lines.append(f"# The edge proxy does not run on this host (role: {profile.role.value}).")
        return "\n".join(lines) + "\n"

    lines.extend(["", "{", f"\temail {domains.acme_email}", "}"])
    for hostname, upstreams in edge_routes(profile, replica_plan, domains, options):
        lines.append("")
        lines.append(f"{hostname} {{")
        if len(upstreams) > 1:
            lines.append(f"\treverse_proxy {' '.join(upstreams)} {{")
            lines.append("\t\tlb_policy round_robin")
            lines.append("\t\thealth_uri /health")
            lines.append("\t}")
        else:
            lines.append(f"\treverse_proxy {upstreams[0]}")
        lines.append("}")
    return "\n".join(lines) + "\n"


###################################################################################################
# environment file


def _env_value(value) -> str:
    text = bool_to_str(value) if value is not None else ""
    # single quotes keep compose from interpolating '$' and keep spaces/'#' literal
    if any(c in text for c in (" ", "\t", "#", "$", '"', "\\")):
        return f"'{text}'"
    return text


def render_env(
    profile: RoleProfile,
    replica_plan: ReplicaPlan,
    credentials: Credentials,
    domains: DomainSet,
    images: ImageRefs,
    options: RenderOptions,
) -> str:
    data_bind, app_bind = bind_addresses(profile)
    groups = [
        (
            "Topology",
            [
                (KEY_ENV_COMPOSE_PROJECT_NAME, options.project_name),
                (KEY_ENV_TOPOLOGY_PATTERN, options.topology_pattern),
                (KEY_ENV_ROLE_CHOICE, options.role_choice),
                (KEY_ENV_DEPLOYMENT_ROLE, profile.role.value),
                (KEY_ENV_EDGE_ENABLED, profile.runs_edge),
                (KEY_ENV_COMPOSE_PROFILES, ",".join(profile.compose_profiles)),
                (KEY_ENV_DATA_NODE_HOST, options.data_node_host),
                (KEY_ENV_APP_NODE_HOST, options.app_node_host),
                (KEY_ENV_DATA_BIND_ADDRESS, data_bind),
                (KEY_ENV_APP_BIND_ADDRESS, app_bind),
                (KEY_ENV_POSTGRES_HOST, _data_host(profile, options, SERVICE_POSTGRES)),
                (KEY_ENV_RABBITMQ_HOST, _data_host(profile, options, SERVICE_RABBITMQ)),
                (KEY_ENV_REDIS_HOST, _data_host(profile, options, SERVICE_REDIS)),
                (KEY_ENV_MINIO_HOST, _data_host(profile, options, SERVICE_MINIO)),
            ],
        ),
        (
            "Capacity",
            [
                (KEY_ENV_PEAK_USERS, options.peak_users),
                (KEY_ENV_REQUESTS_PER_MINUTE, options.requests_per_minute),
                (KEY_ENV_WEB_REPLICAS, replica_plan.web_replicas),
                (KEY_ENV_PROCESSOR_REPLICAS, replica_plan.processor_replicas),
                (KEY_ENV_WORKER_REPLICAS, replica_plan.worker_replicas),
            ],
        ),
        (
            "Domains",
            [
                (KEY_ENV_DOMAIN, domains.domain),
                (KEY_ENV_CLIENT_DOMAIN, domains.client_domain),
                (KEY_ENV_RABBITMQ_DOMAIN, domains.rabbitmq_domain),
                (KEY_ENV_MINIO_DOMAIN, domains.minio_domain),
                (KEY_ENV_ACME_EMAIL, domains.acme_email),
            ],
        ),
        (
            "Credentials",
            [
                (KEY_ENV_POSTGRES_DB, credentials.postgres_db),
                (KEY_ENV_POSTGRES_USER, credentials.postgres_user),
                (KEY_ENV_POSTGRES_PASSWORD, credentials.postgres_password),
                (KEY_ENV_RABBITMQ_USER, credentials.rabbitmq_user),
                (KEY_ENV_RABBITMQ_PASSWORD, credentials.rabbitmq_password),
                (KEY_ENV_REDIS_PASSWORD, credentials.redis_password),
                (KEY_ENV_MINIO_USER, credentials.minio_user),
                (KEY_ENV_MINIO_PASSWORD, credentials.minio_password),
                (KEY_ENV_SECRET_KEY, credentials.secret_key),
            ],
        ),
        (
            "Images",
            [
                (KEY_ENV_IMAGE_REGISTRY, images.registry),
                (KEY_ENV_IMAGE_TAG, images.tag),
                (KEY_ENV_REGISTRY_USERNAME, images.registry_username),
                (KEY_ENV_REGISTRY_PASSWORD, images.registry_password),
            ],
        ),
        (
            "Operations",
            [
                (KEY_ENV_RESTART_POLICY, options.restart_policy),
                (KEY_ENV_BACKUP_SCHEDULE, options.backup_schedule),
                (KEY_ENV_BACKUP_RETENTION, options.backup_retention),
                (KEY_ENV_SNAPSHOT_RETENTION, options.snapshot_retention),
                (KEY_ENV_RESTART_DELAY, options.restart_delay),
                (KEY_ENV_HEALTH_INTERVAL, options.health_interval),
                (KEY_ENV_HEALTH_ATTEMPTS, options.health_attempts),
            ],
        ),
    ]

    lines = [GENERATED_HEADER]
    for title, entries in groups:
        lines.append("")
        lines.append(f"# {title}")
        lines.extend(f"{key}={_env_value(value)}" for key, value in entries)
    return "\n".join(lines) + "\n"


###################################################################################################
def render(
    profile: RoleProfile,
    replica_plan: ReplicaPlan,
    credentials: Credentials,
    domains: DomainSet,
    images: ImageRefs,
    options: Optional[RenderOptions] = None,
) -> RenderedConfigSet:
    """Render the environment file, compose document and Caddyfile for a node.

    Raises:
        RequiredFieldError: listing every required input that is missing; nothing is rendered
    """
    options = options if options is not None else RenderOptions()
    if issues := validate_render_inputs(profile, credentials, domains, images, options):
        raise RequiredFieldError(issues)

    return RenderedConfigSet(
        environment_file=render_env(profile, replica_plan, credentials, domains, images, options),
        compose_document=render_compose(replica_plan, options),
        edge_routing_document=render_caddyfile(profile, replica_plan, domains, options),
    )
