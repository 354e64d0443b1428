#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

import sys

from stackctl.install import main

if __name__ == "__main__":
    sys.exit(main())
