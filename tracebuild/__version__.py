#!/usr/bin/env python3
"""Version information for tracebuild."""

# PEP 440 compliant version for pip/wheel
__version__ = "1.0.0"

# Version metadata
__version_info__ = {
    "major": 1,
    "minor": 0,
    "patch": 0,
    "release": "",
}
