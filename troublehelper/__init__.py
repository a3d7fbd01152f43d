#!/usr/bin/env python3
"""
Troubleshooting Helper

Gathers system, hardware and symptom-specific logs on a Linux workstation and
packages them into a single archive for support staff.
"""

__version__ = "1.0.0"
