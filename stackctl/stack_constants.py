#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

from enum import Enum, auto


###################################################################################################
STACKCTL_VERSION = "1.0.0"
STACKCTL_WORKDIR_ENV = "STACKCTL_WORKDIR"
DEFAULT_PROJECT_NAME = "digi"

###################################################################################################
# compose profile tags; every service in the compose document belongs to exactly one
PROFILE_APP = "app"
PROFILE_DATA = "data"
PROFILE_EDGE = "edge"

###################################################################################################
# Default values for the stack's third-party images
POSTGRES_IMAGE = "postgres:16-alpine"
RABBITMQ_IMAGE = "rabbitmq:3-management-alpine"
REDIS_IMAGE = "redis:7-alpine"
MINIO_IMAGE = "minio/minio:latest"
CADDY_IMAGE = "caddy:2-alpine"

DEFAULT_IMAGE_REGISTRY = "ghcr.io/digi"
DEFAULT_IMAGE_TAG = "latest"
API_IMAGE_NAME = "api"
CLIENT_IMAGE_NAME = "client"

###################################################################################################
# Directory path constants (relative to the working directory)
SNAPSHOT_DIR = "config-backups"
DATA_BACKUP_DIR = "backups"
LOGS_DIR = "logs"

###################################################################################################
# Bounds for operator-supplied capacity figures
PEAK_USERS_MIN = 1
PEAK_USERS_MAX = 10_000_000
REQUESTS_PER_MINUTE_MIN = 1
REQUESTS_PER_MINUTE_MAX = 600
REPLICAS_MAX = 1000


###################################################################################################
class WidgetType(Enum):
    TEXT = auto()
    PASSWORD = auto()
    CHECKBOX = auto()
    SELECT = auto()
    NUMBER = auto()
