#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""
Environment variable keys
"""

KEY_ENV_COMPOSE_PROJECT_NAME = "COMPOSE_PROJECT_NAME"  # docker compose project name
KEY_ENV_COMPOSE_PROFILES = "COMPOSE_PROFILES"  # comma-separated compose profiles enabled on this node
KEY_ENV_TOPOLOGY_PATTERN = "TOPOLOGY_PATTERN"  # single-node, two-node or three-node
KEY_ENV_ROLE_CHOICE = "ROLE_CHOICE"  # role picked for this node within the pattern
KEY_ENV_DEPLOYMENT_ROLE = "DEPLOYMENT_ROLE"  # resolved role (all, edge, app, data, edge-app)
KEY_ENV_EDGE_ENABLED = "EDGE_ENABLED"  # whether caddy runs on this node
KEY_ENV_DATA_NODE_HOST = "DATA_NODE_HOST"  # host running postgres/rabbitmq/redis/minio when not local
KEY_ENV_APP_NODE_HOST = "APP_NODE_HOST"  # host running web/client when not local
KEY_ENV_DATA_BIND_ADDRESS = "DATA_BIND_ADDRESS"  # address data service ports are published on
KEY_ENV_APP_BIND_ADDRESS = "APP_BIND_ADDRESS"  # address app service ports are published on
KEY_ENV_POSTGRES_HOST = "POSTGRES_HOST"  # derived: postgres service name or the data node host
KEY_ENV_RABBITMQ_HOST = "RABBITMQ_HOST"  # derived
KEY_ENV_REDIS_HOST = "REDIS_HOST"  # derived
KEY_ENV_MINIO_HOST = "MINIO_HOST"  # derived

KEY_ENV_PEAK_USERS = "PEAK_CONCURRENT_USERS"  # last peak concurrent user figure used for sizing
KEY_ENV_REQUESTS_PER_MINUTE = "REQUESTS_PER_MINUTE_PER_USER"  # last requests/minute/user figure used for sizing
KEY_ENV_WEB_REPLICAS = "WEB_REPLICAS"
KEY_ENV_PROCESSOR_REPLICAS = "PROCESSOR_REPLICAS"
KEY_ENV_WORKER_REPLICAS = "WORKER_REPLICAS"

KEY_ENV_DOMAIN = "DOMAIN"  # primary public hostname
KEY_ENV_CLIENT_DOMAIN = "CLIENT_APP_DOMAIN"  # public hostname of the client app
KEY_ENV_RABBITMQ_DOMAIN = "RABBITMQ_DOMAIN"  # public hostname of the RabbitMQ management UI (optional)
KEY_ENV_MINIO_DOMAIN = "MINIO_DOMAIN"  # public hostname of the MinIO console (optional)
KEY_ENV_ACME_EMAIL = "ACME_EMAIL"  # contact address for certificate issuance

KEY_ENV_POSTGRES_DB = "POSTGRES_DB"
KEY_ENV_POSTGRES_USER = "POSTGRES_USER"
KEY_ENV_POSTGRES_PASSWORD = "POSTGRES_PASSWORD"
KEY_ENV_RABBITMQ_USER = "RABBITMQ_DEFAULT_USER"
KEY_ENV_RABBITMQ_PASSWORD = "RABBITMQ_DEFAULT_PASS"
KEY_ENV_REDIS_PASSWORD = "REDIS_PASSWORD"
KEY_ENV_MINIO_USER = "MINIO_ROOT_USER"
KEY_ENV_MINIO_PASSWORD = "MINIO_ROOT_PASSWORD"
KEY_ENV_SECRET_KEY = "SECRET_KEY"  # application signing key

KEY_ENV_IMAGE_REGISTRY = "IMAGE_REGISTRY"  # registry/namespace holding the api and client images
KEY_ENV_IMAGE_TAG = "IMAGE_TAG"
KEY_ENV_REGISTRY_USERNAME = "REGISTRY_USERNAME"
KEY_ENV_REGISTRY_PASSWORD = "REGISTRY_PASSWORD"

KEY_ENV_RESTART_POLICY = "RESTART_POLICY"
KEY_ENV_BACKUP_SCHEDULE = "BACKUP_SCHEDULE"  # cron expression for scheduled backups
KEY_ENV_BACKUP_RETENTION = "BACKUP_RETENTION"  # number of database dumps to keep
KEY_ENV_SNAPSHOT_RETENTION = "CONFIG_SNAPSHOT_RETENTION"  # number of configuration snapshots to keep
KEY_ENV_RESTART_DELAY = "GENTLE_RESTART_DELAY"  # seconds between instance restarts
KEY_ENV_HEALTH_INTERVAL = "HEALTH_CHECK_INTERVAL"  # seconds between health polls
KEY_ENV_HEALTH_ATTEMPTS = "HEALTH_CHECK_ATTEMPTS"  # health polls before giving up
