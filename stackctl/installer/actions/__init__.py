#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Installer actions that touch the host: writing artifacts, compose rollout, registry login and backups."""
