#!/usr/bin/env python3
"""
Battery related diagnostic module.
"""

import re
from typing import List, Optional

from .base import DiagnosticModule, Section

BATTERY_PATTERN = re.compile(r"BAT[01]")


def find_battery_device(upower_output: str) -> Optional[str]:
    """Return the first BAT0/BAT1 object path listed by ``upower -e``."""
    for line in upower_output.splitlines():
        if BATTERY_PATTERN.search(line):
            return line.strip()
    return None


class BatteryModule(DiagnosticModule):
    """Battery state plus TLP power management status."""

    def __init__(self, runner=None):
        super().__init__("battery", "BATTERY INFO", runner)
        self.battery_device = None

    def prepare(self):
        result = self.runner.run(["upower", "-e"])
        self.battery_device = find_battery_device(result.output) if result.ok else None

    def sections(self) -> List[Section]:
        if self.battery_device:
            upower = ["upower", "-i", self.battery_device]
        else:
            upower = "no battery device found"
        return [
            ("UPOWER", upower, None),
            ("TLP DPKG STATUS", ["dpkg", "-l", "tlp"], None),
            ("TLP SYSTEMCTL STATUS", ["systemctl", "status", "tlp.service"], None),
        ]
