#!/usr/bin/env python3
"""
Baseline system and hardware modules, collected for every session.
"""

from typing import List

from .base import DiagnosticModule, Section


def sort_lines(output: str) -> str:
    """Sort output lines, the way ``lsmod | sort`` prints them."""
    return "\n".join(sorted(output.splitlines()))


class SystemInfoModule(DiagnosticModule):
    """Kernel and distribution release."""

    def __init__(self, runner=None):
        super().__init__("system_info", "SYSTEM INFO", runner)

    def sections(self) -> List[Section]:
        return [
            ("KERNEL", ["uname", "-a"], None),
            ("DISTRO", ["lsb_release", "-a"], None, False),
        ]


class HardwareInfoModule(DiagnosticModule):
    """CPU, PCI/USB devices, block devices and memory."""

    def __init__(self, runner=None):
        super().__init__("hardware_info", "HARDWARE INFO", runner)

    def sections(self) -> List[Section]:
        return [
            ("LSCPU", ["lscpu"], None),
            ("LSHW", ["lshw"], None),
            ("LSPCI", ["lspci", "-v", "-k", "-nn"], None),
            ("LSUSB", ["lsusb"], None),
            ("PARTITIONS", ["lsblk", "-a", "-f"], None),
            ("MEMORY", ["free", "-hwl", "--si"], None),
        ]


class LoadedModulesModule(DiagnosticModule):
    """Loaded kernel modules, sorted by name."""

    def __init__(self, runner=None):
        super().__init__("loaded_modules", "LOADED MODULES", runner)

    def sections(self) -> List[Section]:
        return [("LSMOD", ["lsmod"], sort_lines)]


class BiosInfoModule(DiagnosticModule):
    """DMI/BIOS table dump, written to the hardware file."""

    def __init__(self, runner=None):
        super().__init__("bios_info", "BIOS INFO", runner)

    def sections(self) -> List[Section]:
        return [(None, ["dmidecode"], None)]


class KernelMessagesModule(DiagnosticModule):
    """Full kernel ring buffer, written to the dmesg file."""

    def __init__(self, runner=None):
        super().__init__("kernel_messages", "DMESG", runner)

    def sections(self) -> List[Section]:
        return [(None, ["dmesg"], None)]


def get_baseline_modules(runner=None) -> List[DiagnosticModule]:
    """Modules written to the main report before the category menu."""
    return [
        SystemInfoModule(runner),
        HardwareInfoModule(runner),
        LoadedModulesModule(runner),
    ]
