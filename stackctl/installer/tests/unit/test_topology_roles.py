#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Unit tests for deployment role resolution and edge policies."""

import unittest

from stackctl.stack_constants import PROFILE_APP, PROFILE_DATA, PROFILE_EDGE
from stackctl.installer.configs.constants.enums import (
    DeploymentRole,
    EdgePolicy,
    RoleChoice,
    TopologyPattern,
)
from stackctl.installer.core.topology import (
    ROLE_TABLE,
    edge_policy,
    resolve_profile,
    resolve_role,
    role_choices,
)


class TestRoleResolution(unittest.TestCase):
    def test_table_entries(self):
        self.assertEqual(resolve_role(TopologyPattern.SINGLE_NODE, RoleChoice.ALL), DeploymentRole.ALL)
        self.assertEqual(resolve_role(TopologyPattern.TWO_NODE, RoleChoice.EDGE_APP), DeploymentRole.EDGE_APP)
        self.assertEqual(resolve_role(TopologyPattern.TWO_NODE, RoleChoice.DATA), DeploymentRole.DATA)
        self.assertEqual(resolve_role(TopologyPattern.THREE_NODE, RoleChoice.EDGE), DeploymentRole.EDGE)
        self.assertEqual(resolve_role(TopologyPattern.THREE_NODE, RoleChoice.APP), DeploymentRole.APP)
        self.assertEqual(resolve_role(TopologyPattern.THREE_NODE, RoleChoice.DATA), DeploymentRole.DATA)

    def test_string_values_accepted(self):
        self.assertEqual(resolve_role("two-node", "edge-app"), DeploymentRole.EDGE_APP)

    def test_every_valid_pair_resolves(self):
        for pattern in TopologyPattern:
            choices = role_choices(pattern)
            self.assertTrue(choices, f"{pattern} offers no roles")
            for choice in choices:
                self.assertIsInstance(resolve_role(pattern, choice), DeploymentRole)

    def test_invalid_pairs_raise(self):
        for pattern in TopologyPattern:
            for choice in RoleChoice:
                if (pattern, choice) in ROLE_TABLE:
                    continue
                with self.assertRaises(ValueError):
                    resolve_role(pattern, choice)
        with self.assertRaises(ValueError):
            resolve_role("four-node", "all")

    def test_role_choices_order(self):
        self.assertEqual(role_choices(TopologyPattern.SINGLE_NODE), [RoleChoice.ALL])
        self.assertEqual(role_choices(TopologyPattern.TWO_NODE), [RoleChoice.EDGE_APP, RoleChoice.DATA])
        self.assertEqual(
            role_choices(TopologyPattern.THREE_NODE),
            [RoleChoice.EDGE, RoleChoice.APP, RoleChoice.DATA],
        )


class TestRoleProfiles(unittest.TestCase):
    def test_edge_policies(self):
        self.assertEqual(edge_policy(DeploymentRole.EDGE), EdgePolicy.FORCED_ON)
        self.assertEqual(edge_policy(DeploymentRole.APP), EdgePolicy.FORCED_OFF)
        self.assertEqual(edge_policy(DeploymentRole.DATA), EdgePolicy.FORCED_OFF)
        self.assertEqual(edge_policy(DeploymentRole.ALL), EdgePolicy.DEFAULT_ON)
        self.assertEqual(edge_policy(DeploymentRole.EDGE_APP), EdgePolicy.DEFAULT_ON)

    def test_all_role(self):
        profile = resolve_profile(DeploymentRole.ALL)
        self.assertTrue(profile.runs_compute)
        self.assertTrue(profile.runs_data)
        self.assertTrue(profile.runs_edge)
        self.assertEqual(profile.compose_profiles, [PROFILE_APP, PROFILE_DATA, PROFILE_EDGE])
        self.assertTrue(profile.edge_is_overridable)

    def test_default_on_roles_honor_override(self):
        for role in (DeploymentRole.ALL, DeploymentRole.EDGE_APP):
            self.assertFalse(resolve_profile(role, edge_override=False).runs_edge)
            self.assertTrue(resolve_profile(role, edge_override=True).runs_edge)
            self.assertTrue(resolve_profile(role, edge_override=None).runs_edge)

    def test_data_role_ignores_edge_override(self):
        for override in (None, True, False):
            profile = resolve_profile(DeploymentRole.DATA, edge_override=override)
            self.assertTrue(profile.runs_data)
            self.assertFalse(profile.runs_compute)
            self.assertFalse(profile.runs_edge)
            self.assertEqual(profile.compose_profiles, [PROFILE_DATA])
            self.assertFalse(profile.needs_capacity)

    def test_app_role_never_runs_edge(self):
        profile = resolve_profile(DeploymentRole.APP, edge_override=True)
        self.assertFalse(profile.runs_edge)
        self.assertEqual(profile.compose_profiles, [PROFILE_APP])
        self.assertFalse(profile.edge_is_overridable)

    def test_edge_role_always_runs_edge(self):
        profile = resolve_profile(DeploymentRole.EDGE, edge_override=False)
        self.assertTrue(profile.runs_edge)
        self.assertFalse(profile.runs_compute)
        self.assertFalse(profile.runs_data)
        self.assertEqual(profile.compose_profiles, [PROFILE_EDGE])
        # an edge-only node still sizes its upstream list
        self.assertTrue(profile.needs_capacity)


if __name__ == "__main__":
    unittest.main()
