#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Test package for the lifelong planning project.

Makes the repo root importable so `pytest tests/` works from anywhere
without installing the package first.
"""

import os
import sys

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)
