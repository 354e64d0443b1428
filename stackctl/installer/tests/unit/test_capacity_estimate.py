#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Unit tests for replica estimation."""

import unittest

from stackctl.installer.core.capacity import (
    MIN_PROCESSOR_REPLICAS,
    MIN_WEB_REPLICAS,
    MIN_WORKER_REPLICAS,
    ReplicaPlan,
    estimate,
    requests_per_second,
)


class TestCapacityEstimate(unittest.TestCase):
    def test_ten_thousand_users(self):
        self.assertEqual(requests_per_second(10000, 6), 1000)
        plan = estimate(10000, 6)
        self.assertEqual(plan.web_replicas, 10)
        self.assertEqual(plan.processor_replicas, 6)
        self.assertEqual(plan.worker_replicas, 4)

    def test_single_user_hits_floors(self):
        self.assertEqual(requests_per_second(1, 6), 0)
        plan = estimate(1, 6)
        self.assertEqual(plan, ReplicaPlan(web_replicas=2, processor_replicas=1, worker_replicas=1))

    def test_default_request_rate(self):
        self.assertEqual(estimate(10000), estimate(10000, 6))

    def test_web_rounds_up(self):
        # 1608 millicores need three replicas; 8808 need twelve
        self.assertEqual(estimate(12060, 1).web_replicas, 3)
        self.assertEqual(estimate(66075, 1).web_replicas, 12)

    def test_floors_always_hold(self):
        for users in (1, 2, 59, 60, 1999, 2000, 2999, 3000):
            for rpm in (1, 6, 60, 600):
                plan = estimate(users, rpm)
                self.assertGreaterEqual(plan.web_replicas, MIN_WEB_REPLICAS)
                self.assertGreaterEqual(plan.processor_replicas, MIN_PROCESSOR_REPLICAS)
                self.assertGreaterEqual(plan.worker_replicas, MIN_WORKER_REPLICAS)

    def test_monotonic_in_users(self):
        previous = estimate(1, 6)
        for users in range(250, 50001, 250):
            current = estimate(users, 6)
            self.assertGreaterEqual(current.web_replicas, previous.web_replicas)
            self.assertGreaterEqual(current.processor_replicas, previous.processor_replicas)
            self.assertGreaterEqual(current.worker_replicas, previous.worker_replicas)
            previous = current

    def test_monotonic_in_request_rate(self):
        previous = estimate(5000, 1)
        for rpm in range(2, 121):
            current = estimate(5000, rpm)
            self.assertGreaterEqual(current.web_replicas, previous.web_replicas)
            previous = current

    def test_no_upper_clamp(self):
        self.assertEqual(estimate(10_000_000, 6).web_replicas, 10000)

    def test_rejects_invalid_inputs(self):
        for users, rpm in ((0, 6), (-5, 6), (10, 0), (10, -1), (True, 6), ("100", 6), (100, 1.5)):
            with self.assertRaises(ValueError, msg=f"estimate({users!r}, {rpm!r})"):
                estimate(users, rpm)


class TestReplicaPlan(unittest.TestCase):
    def test_defaults_are_floors(self):
        self.assertEqual(ReplicaPlan(), ReplicaPlan(MIN_WEB_REPLICAS, MIN_PROCESSOR_REPLICAS, MIN_WORKER_REPLICAS))

    def test_rejects_counts_below_floor(self):
        with self.assertRaises(ValueError):
            ReplicaPlan(web_replicas=1)
        with self.assertRaises(ValueError):
            ReplicaPlan(processor_replicas=0)
        with self.assertRaises(ValueError):
            ReplicaPlan(worker_replicas="3")

    def test_with_overrides_replaces_only_given_counts(self):
        plan = estimate(10000, 6)
        overridden = plan.with_overrides(web=4)
        self.assertEqual(overridden.web_replicas, 4)
        self.assertEqual(overridden.processor_replicas, plan.processor_replicas)
        self.assertEqual(overridden.worker_replicas, plan.worker_replicas)
        self.assertIs(plan.with_overrides(), plan)

    def test_with_overrides_still_validates(self):
        with self.assertRaises(ValueError):
            estimate(100, 6).with_overrides(web=1)


if __name__ == "__main__":
    unittest.main()
