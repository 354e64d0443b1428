#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""stackctl: topology planner and installer for the application stack."""

from stackctl.stack_constants import STACKCTL_VERSION

__version__ = STACKCTL_VERSION
