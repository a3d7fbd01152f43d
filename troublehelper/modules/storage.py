#!/usr/bin/env python3
"""
Storage related diagnostic module.
"""

from typing import List

from .base import DiagnosticModule, Section


class StorageModule(DiagnosticModule):
    """Module for filesystem table, partition layout and disk usage."""

    def __init__(self, runner=None):
        super().__init__("storage", "DRIVE INFO", runner)

    def sections(self) -> List[Section]:
        return [
            ("FSTAB", ["cat", "/etc/fstab"], None),
            ("PARTED", ["parted", "--list", "--script"], None),
            ("DF", ["df", "-ha"], None),
        ]
