#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Resolution of a node's deployment role.

The operator picks a topology pattern and then a role within it. The pair is
looked up in a fixed table that yields one of the five terminal deployment
roles, and the role in turn decides which service groups run locally and
whether the edge proxy runs.
"""

from dataclasses import dataclass
from typing import Dict, List, NamedTuple, Optional, Tuple

from stackctl.installer.configs.constants.enums import (
    DeploymentRole,
    EdgePolicy,
    RoleChoice,
    TopologyPattern,
)
from stackctl.stack_constants import PROFILE_APP, PROFILE_DATA, PROFILE_EDGE


class RoleTraits(NamedTuple):
    runs_data: bool
    runs_compute: bool
    edge_policy: EdgePolicy


# (pattern, role choice) -> terminal role; insertion order is the prompt order
ROLE_TABLE: Dict[Tuple[TopologyPattern, RoleChoice], DeploymentRole] = {
    (TopologyPattern.SINGLE_NODE, RoleChoice.ALL): DeploymentRole.ALL,
    (TopologyPattern.TWO_NODE, RoleChoice.EDGE_APP): DeploymentRole.EDGE_APP,
    (TopologyPattern.TWO_NODE, RoleChoice.DATA): DeploymentRole.DATA,
    (TopologyPattern.THREE_NODE, RoleChoice.EDGE): DeploymentRole.EDGE,
    (TopologyPattern.THREE_NODE, RoleChoice.APP): DeploymentRole.APP,
    (TopologyPattern.THREE_NODE, RoleChoice.DATA): DeploymentRole.DATA,
}

ROLE_TRAITS: Dict[DeploymentRole, RoleTraits] = {
    DeploymentRole.ALL: RoleTraits(runs_data=True, runs_compute=True, edge_policy=EdgePolicy.DEFAULT_ON),
    DeploymentRole.EDGE_APP: RoleTraits(runs_data=False, runs_compute=True, edge_policy=EdgePolicy.DEFAULT_ON),
    DeploymentRole.EDGE: RoleTraits(runs_data=False, runs_compute=False, edge_policy=EdgePolicy.FORCED_ON),
    DeploymentRole.APP: RoleTraits(runs_data=False, runs_compute=True, edge_policy=EdgePolicy.FORCED_OFF),
    DeploymentRole.DATA: RoleTraits(runs_data=True, runs_compute=False, edge_policy=EdgePolicy.FORCED_OFF),
}

assert set(ROLE_TRAITS) == set(DeploymentRole), "every deployment role needs traits"
assert set(ROLE_TABLE.values()) == set(DeploymentRole), "every deployment role must be reachable"

PATTERN_DESCRIPTIONS = {
    TopologyPattern.SINGLE_NODE: "Everything on this host",
    TopologyPattern.TWO_NODE: "Edge proxy and application on one host, data services on another",
    TopologyPattern.THREE_NODE: "Edge proxy, application and data services each on their own host",
}

ROLE_DESCRIPTIONS = {
    RoleChoice.ALL: "Edge proxy, application and data services",
    RoleChoice.EDGE_APP: "Edge proxy and application services",
    RoleChoice.EDGE: "Edge proxy only",
    RoleChoice.APP: "Application services only",
    RoleChoice.DATA: "Data services (Postgres, RabbitMQ, Redis, MinIO) only",
}


@dataclass(frozen=True)
class RoleProfile:
    role: DeploymentRole
    runs_compute: bool
    runs_data: bool
    runs_edge: bool

    @property
    def compose_profiles(self) -> List[str]:
        profiles = []
        if self.runs_compute:
            profiles.append(PROFILE_APP)
        if self.runs_data:
            profiles.append(PROFILE_DATA)
        if self.runs_edge:
            profiles.append(PROFILE_EDGE)
        return profiles

    @property
    def needs_capacity(self) -> bool:
        # edge-only nodes enumerate one upstream per remote web replica
        return self.runs_compute or self.runs_edge

    @property
    def edge_is_overridable(self) -> bool:
        return ROLE_TRAITS[self.role].edge_policy is EdgePolicy.DEFAULT_ON


def role_choices(pattern: TopologyPattern) -> List[RoleChoice]:
    """Role choices valid for a pattern, in prompt order."""
    return [choice for (p, choice) in ROLE_TABLE if p is pattern]


def resolve_role(pattern: TopologyPattern, choice: RoleChoice) -> DeploymentRole:
    try:
        return ROLE_TABLE[(TopologyPattern(pattern), RoleChoice(choice))]
    except (KeyError, ValueError):
        pattern_name = getattr(pattern, "value", pattern)
        choice_name = getattr(choice, "value", choice)
        raise ValueError(f"Role '{choice_name}' is not valid for the {pattern_name} pattern") from None


def edge_policy(role: DeploymentRole) -> EdgePolicy:
    return ROLE_TRAITS[role].edge_policy


def resolve_profile(role: DeploymentRole, edge_override: Optional[bool] = None) -> RoleProfile:
    """Derive the service groups for a role.

    Edge is forced on for the edge role and forced off for the app and data
    roles regardless of edge_override; otherwise it defaults on and an explicit
    edge_override wins.
    """
    traits = ROLE_TRAITS[DeploymentRole(role)]
    if traits.edge_policy is EdgePolicy.FORCED_ON:
        runs_edge = True
    elif traits.edge_policy is EdgePolicy.FORCED_OFF:
        runs_edge = False
    else:
        runs_edge = True if edge_override is None else bool(edge_override)

    return RoleProfile(
        role=DeploymentRole(role),
        runs_compute=traits.runs_compute,
        runs_data=traits.runs_data,
        runs_edge=runs_edge,
    )
