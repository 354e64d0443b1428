#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""
Configuration key constants for stackctl
"""

# Topology options
KEY_CONFIG_ITEM_PROJECT_NAME = "projectName"
KEY_CONFIG_ITEM_TOPOLOGY_PATTERN = "topologyPattern"
KEY_CONFIG_ITEM_ROLE_CHOICE = "roleChoice"
KEY_CONFIG_ITEM_EDGE_ENABLED = "edgeEnabled"
KEY_CONFIG_ITEM_DATA_NODE_HOST = "dataNodeHost"
KEY_CONFIG_ITEM_APP_NODE_HOST = "appNodeHost"

# Capacity options
KEY_CONFIG_ITEM_PEAK_USERS = "peakUsers"
KEY_CONFIG_ITEM_REQUESTS_PER_MINUTE = "requestsPerMinute"
KEY_CONFIG_ITEM_WEB_REPLICAS = "webReplicas"
KEY_CONFIG_ITEM_PROCESSOR_REPLICAS = "processorReplicas"
KEY_CONFIG_ITEM_WORKER_REPLICAS = "workerReplicas"

# Domain options
KEY_CONFIG_ITEM_DOMAIN = "domain"
KEY_CONFIG_ITEM_CLIENT_DOMAIN = "clientDomain"
KEY_CONFIG_ITEM_RABBITMQ_DOMAIN = "rabbitmqDomain"
KEY_CONFIG_ITEM_MINIO_DOMAIN = "minioDomain"
KEY_CONFIG_ITEM_ACME_EMAIL = "acmeEmail"

# Credential options
KEY_CONFIG_ITEM_POSTGRES_DB = "postgresDb"
KEY_CONFIG_ITEM_POSTGRES_USER = "postgresUser"
KEY_CONFIG_ITEM_POSTGRES_PASSWORD = "postgresPassword"
KEY_CONFIG_ITEM_RABBITMQ_USER = "rabbitmqUser"
KEY_CONFIG_ITEM_RABBITMQ_PASSWORD = "rabbitmqPassword"
KEY_CONFIG_ITEM_REDIS_PASSWORD = "redisPassword"
KEY_CONFIG_ITEM_MINIO_USER = "minioUser"
KEY_CONFIG_ITEM_MINIO_PASSWORD = "minioPassword"
KEY_CONFIG_ITEM_SECRET_KEY = "secretKey"

# Image options
KEY_CONFIG_ITEM_IMAGE_REGISTRY = "imageRegistry"
KEY_CONFIG_ITEM_IMAGE_TAG = "imageTag"
KEY_CONFIG_ITEM_REGISTRY_USERNAME = "registryUsername"
KEY_CONFIG_ITEM_REGISTRY_PASSWORD = "registryPassword"

# Operational options
KEY_CONFIG_ITEM_RESTART_POLICY = "restartPolicy"
KEY_CONFIG_ITEM_BACKUP_SCHEDULE = "backupSchedule"
KEY_CONFIG_ITEM_BACKUP_RETENTION = "backupRetention"
KEY_CONFIG_ITEM_SNAPSHOT_RETENTION = "snapshotRetention"
KEY_CONFIG_ITEM_RESTART_DELAY = "restartDelay"
KEY_CONFIG_ITEM_HEALTH_INTERVAL = "healthInterval"
KEY_CONFIG_ITEM_HEALTH_ATTEMPTS = "healthAttempts"
