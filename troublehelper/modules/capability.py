#!/usr/bin/env python3
"""
Optional tools the helper can install on demand.

A capability is probed on PATH; when it is missing and installing is
allowed, the configured package install command runs once and the
capability is probed again.
"""

import shlex
import shutil
import logging
from typing import Callable, Dict, List, Optional

from .base import CommandRunner

logger = logging.getLogger("troublehelper.capability")

DEFAULT_INSTALL_COMMAND = "apt -y install"


class Capability:
    """An executable and the package that provides it."""

    def __init__(self, executable: str, package: str):
        self.executable = executable
        self.package = package

    def __repr__(self):
        return f"Capability({self.executable!r}, {self.package!r})"


LSHW = Capability("lshw", "lshw")
NETSTAT = Capability("netstat", "net-tools")
SENSORS = Capability("sensors", "lm-sensors")


class CapabilityManager:
    """Probe, optionally install, and re-probe capabilities."""

    def __init__(self, runner: Optional[CommandRunner] = None, install_missing: bool = True,
                 install_command: str = DEFAULT_INSTALL_COMMAND,
                 which: Callable[[str], Optional[str]] = shutil.which,
                 install_runner: Optional[CommandRunner] = None):
        self.runner = runner or CommandRunner()
        # No timeout: an install is never killed partway through
        self.install_runner = install_runner or CommandRunner(timeout=None)
        self.install_missing = install_missing
        self.install_command = shlex.split(install_command)
        self.which = which
        self.attempted: Dict[str, bool] = {}

    def probe(self, capability: Capability) -> bool:
        return self.which(capability.executable) is not None

    def install(self, capability: Capability) -> bool:
        command: List[str] = self.install_command + [capability.package]
        logger.info(f"Installing {capability.package} for {capability.executable}")
        result = self.install_runner.run(command)
        if not result.ok:
            logger.error(f"Failed to install {capability.package}: {result.as_text(self.install_runner.timeout)}")
        return result.ok

    def ensure(self, capability: Capability) -> bool:
        """Return True when the capability is available after this call."""
        if self.probe(capability):
            return True
        if not self.install_missing:
            logger.info(f"{capability.executable} not found, installing is disabled")
            return False
        # Install once per session, even if the tool is requested again
        if capability.package not in self.attempted:
            self.attempted[capability.package] = self.install(capability)
        available = self.probe(capability)
        if not available:
            logger.warning(f"{capability.executable} is still unavailable")
        return available
