#!/usr/bin/env python3
"""
Temperature related diagnostic module.
"""

from typing import List, Optional

from .base import DiagnosticModule, Section
from .capability import SENSORS, CapabilityManager

TOP_PROCESSES = 10


def top_cpu_processes(ps_output: str, limit: int = TOP_PROCESSES) -> str:
    """Keep the ``ps`` header and the ``limit`` processes using the most CPU."""
    lines = ps_output.splitlines()
    if not lines:
        return ps_output
    header, rows = lines[0], lines[1:]

    def cpu(line):
        try:
            return float(line.split(None, 1)[0])
        except (IndexError, ValueError):
            return 0.0

    rows = sorted(rows, key=cpu, reverse=True)[:limit]
    return "\n".join([header] + rows)


class TemperatureModule(DiagnosticModule):
    """CPU hogs that may be heating the machine, plus sensor readings."""

    def __init__(self, runner=None, capabilities: Optional[CapabilityManager] = None):
        super().__init__("temperature", "TEMPERATURE INFO", runner)
        self.capabilities = capabilities

    def prepare(self):
        if self.capabilities:
            self.capabilities.ensure(SENSORS)

    def sections(self) -> List[Section]:
        return [
            ("CPU HOGS", ["ps", "-eo", "pcpu,pid,user,args"], top_cpu_processes),
            ("SENSORS", ["sensors"], None),
        ]
