#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Centralized constants for the renderer, rollout and shared actions.

These constants replace magic strings/numbers embedded in helper code to
keep behavior consistent across modules.
"""

# Generated artifact file names (relative to the working directory)
ENV_FILENAME = ".env"
COMPOSE_FILENAME = "docker-compose.yml"
CADDYFILE_FILENAME = "Caddyfile"
SNAPSHOT_MANIFEST_FILENAME = "manifest.json"

# artifact kinds, in the order they are written and snapshotted
ARTIFACT_ENV = "environment"
ARTIFACT_COMPOSE = "compose"
ARTIFACT_EDGE = "edge-routing"
ARTIFACT_FILENAMES = {
    ARTIFACT_ENV: ENV_FILENAME,
    ARTIFACT_COMPOSE: COMPOSE_FILENAME,
    ARTIFACT_EDGE: CADDYFILE_FILENAME,
}

# Compose command
DOCKER_BIN = "docker"
COMPOSE_SUBCOMMAND = "compose"
COMPOSE_UP_SUBCOMMAND = "up"
COMPOSE_DETACH_FLAG = "-d"
DOCKER_LOG_DRIVER = "local"

# Service names
SERVICE_WEB = "web"
SERVICE_CLIENT = "client"
SERVICE_PROCESSOR = "processor"
SERVICE_WORKER = "worker"
SERVICE_JOBS = "jobs"
SERVICE_POSTGRES = "postgres"
SERVICE_RABBITMQ = "rabbitmq"
SERVICE_REDIS = "redis"
SERVICE_MINIO = "minio"
SERVICE_CADDY = "caddy"

APP_SERVICES = [SERVICE_WEB, SERVICE_CLIENT, SERVICE_PROCESSOR, SERVICE_WORKER, SERVICE_JOBS]
DATA_SERVICES = [SERVICE_POSTGRES, SERVICE_RABBITMQ, SERVICE_REDIS, SERVICE_MINIO]
EDGE_SERVICES = [SERVICE_CADDY]

# Service ports (container side)
SERVICE_PORT_WEB = 8000
SERVICE_PORT_CLIENT = 3000
SERVICE_PORT_POSTGRES = 5432
SERVICE_PORT_RABBITMQ = 5672
SERVICE_PORT_RABBITMQ_ADMIN = 15672
SERVICE_PORT_REDIS = 6379
SERVICE_PORT_MINIO = 9000
SERVICE_PORT_MINIO_CONSOLE = 9001
SERVICE_PORT_HTTP = 80
SERVICE_PORT_HTTPS = 443

SERVICE_IP_EXPOSED = "0.0.0.0"
SERVICE_IP_LOCAL = "127.0.0.1"

# the per-replica web CPU budget, in millicores, emitted as the web CPU limit
WEB_CPU_LIMIT_MILLICORES = 800

# Default restart policy string
DEFAULT_RESTART_POLICY = "unless-stopped"

# Operational defaults
DEFAULT_BACKUP_SCHEDULE = "0 3 * * *"
DEFAULT_BACKUP_RETENTION = 7
DEFAULT_SNAPSHOT_RETENTION = 3
DEFAULT_RESTART_DELAY_SEC = 2
DEFAULT_HEALTH_INTERVAL_SEC = 5
DEFAULT_HEALTH_ATTEMPTS = 30

# crontab entries installed by backup-configure carry this trailing marker
CRON_MARKER = "# stackctl-backup"

# health status strings reported by compose ps
HEALTH_HEALTHY = "healthy"
HEALTH_NONE = ""
STATE_RUNNING = "running"
