#!/usr/bin/env python3
"""
Module initialization - imports all diagnostic modules and provides the category registry.
"""

from .base import CommandRunner, CommandResult, DiagnosticModule

# Import all modules
from .system import (
    SystemInfoModule, HardwareInfoModule, LoadedModulesModule, BiosInfoModule,
    KernelMessagesModule, get_baseline_modules
)
from .battery import BatteryModule
from .storage import StorageModule
from .network import NetworkModule, get_interface_strategy
from .temperature import TemperatureModule
from .capability import Capability, CapabilityManager

SKIP = "skip"

# Symptom categories, in menu order
CATEGORIES = ["battery", "storage", "networking", "temperature"]


def get_category_modules(runner=None, capabilities=None, strategy=None):
    """Return the category bundles keyed by category name."""
    return {
        "battery": BatteryModule(runner),
        "storage": StorageModule(runner),
        "networking": NetworkModule(runner, strategy=strategy, capabilities=capabilities),
        "temperature": TemperatureModule(runner, capabilities=capabilities),
    }
