#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Replica sizing for the stateless services.

The heuristic is intentionally simple and monotonic: a peak concurrent user
figure and a per-user request rate give a request-per-second estimate, each
request is assumed to cost a fixed CPU budget, and each web replica is given
a fixed CPU budget. Background processors and workers scale linearly with
users. All arithmetic is integer, with floor division.
"""

from dataclasses import dataclass, replace
from typing import Optional

MILLICORES_PER_REQUEST = 8
MILLICORES_PER_WEB_REPLICA = 800
USERS_PER_PROCESSOR = 2000
USERS_PER_WORKER = 3000
DEFAULT_REQUESTS_PER_MINUTE_PER_USER = 6

MIN_WEB_REPLICAS = 2
MIN_PROCESSOR_REPLICAS = 1
MIN_WORKER_REPLICAS = 1


def _require_positive_int(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer (got {value!r})")
    if value <= 0:
        raise ValueError(f"{name} must be positive (got {value})")
    return value


@dataclass(frozen=True)
class ReplicaPlan:
    web_replicas: int = MIN_WEB_REPLICAS
    processor_replicas: int = MIN_PROCESSOR_REPLICAS
    worker_replicas: int = MIN_WORKER_REPLICAS

    def __post_init__(self):
        for name, value, floor in (
            ("web_replicas", self.web_replicas, MIN_WEB_REPLICAS),
            ("processor_replicas", self.processor_replicas, MIN_PROCESSOR_REPLICAS),
            ("worker_replicas", self.worker_replicas, MIN_WORKER_REPLICAS),
        ):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer (got {value!r})")
            if value < floor:
                raise ValueError(f"{name} must be at least {floor} (got {value})")

    def with_overrides(
        self,
        web: Optional[int] = None,
        processor: Optional[int] = None,
        worker: Optional[int] = None,
    ) -> "ReplicaPlan":
        """Return a copy where each explicitly given count replaces the computed one."""
        changes = {}
        if web is not None:
            changes["web_replicas"] = web
        if processor is not None:
            changes["processor_replicas"] = processor
        if worker is not None:
            changes["worker_replicas"] = worker
        return replace(self, **changes) if changes else self


def requests_per_second(peak_concurrent_users: int, requests_per_minute_per_user: int) -> int:
    return (peak_concurrent_users * requests_per_minute_per_user) // 60


def estimate(
    peak_concurrent_users: int,
    requests_per_minute_per_user: int = DEFAULT_REQUESTS_PER_MINUTE_PER_USER,
) -> ReplicaPlan:
    """Compute replica counts for the scalable services.

    Args:
        peak_concurrent_users: expected peak of simultaneously active users (> 0)
        requests_per_minute_per_user: average request rate of one active user (> 0)

    Returns:
        A ReplicaPlan; every count is at or above its floor. There is no upper clamp.

    Raises:
        ValueError: when either input is not a positive integer
    """
    users = _require_positive_int("peak_concurrent_users", peak_concurrent_users)
    rpm = _require_positive_int("requests_per_minute_per_user", requests_per_minute_per_user)

    millicores = requests_per_second(users, rpm) * MILLICORES_PER_REQUEST
    # ceiling division without floats
    web = -(-millicores // MILLICORES_PER_WEB_REPLICA)

    return ReplicaPlan(
        web_replicas=max(web, MIN_WEB_REPLICAS),
        processor_replicas=users // USERS_PER_PROCESSOR + 1,
        worker_replicas=users // USERS_PER_WORKER + 1,
    )
