# -*- coding: utf-8 -*-
"""
COLORCHOOSER: Qt color picking widgets
Copyright (c) 2025 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later
"""
import sys

from .qt_colorcalculator import main

sys.exit(main())
