#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""
Configuration Items for the stackctl installer
==============================================

This package contains all of the definitions for individual configuration items (ConfigItem).

All configuration item management is handled by the StackConfig class.
Individual configuration items are exposed here for initialization purposes,
but their state should be managed through a StackConfig instance.
"""

from .capacity import ALL_CAPACITY_CONFIG_ITEMS_DICT
from .credentials import ALL_CREDENTIALS_CONFIG_ITEMS_DICT
from .domains import ALL_DOMAINS_CONFIG_ITEMS_DICT
from .images import ALL_IMAGES_CONFIG_ITEMS_DICT
from .operations import ALL_OPERATIONS_CONFIG_ITEMS_DICT
from .topology import ALL_TOPOLOGY_CONFIG_ITEMS_DICT

# Combine all config item dictionaries into a single dictionary, in prompt order
ALL_CONFIG_ITEMS_DICT = {
    **ALL_TOPOLOGY_CONFIG_ITEMS_DICT,
    **ALL_CAPACITY_CONFIG_ITEMS_DICT,
    **ALL_DOMAINS_CONFIG_ITEMS_DICT,
    **ALL_CREDENTIALS_CONFIG_ITEMS_DICT,
    **ALL_IMAGES_CONFIG_ITEMS_DICT,
    **ALL_OPERATIONS_CONFIG_ITEMS_DICT,
}

__all__ = [
    "ALL_CONFIG_ITEMS_DICT",
]
