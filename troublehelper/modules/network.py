#!/usr/bin/env python3
"""
Network related diagnostic module and interface detection strategies.
"""

import re
import logging
from typing import Dict, List, Optional, Tuple

from .base import CommandRunner, DiagnosticModule, Section
from .capability import NETSTAT, CapabilityManager

logger = logging.getLogger("troublehelper.network")

# "2: enp3s0: <BROADCAST,MULTICAST,UP,LOWER_UP> mtu 1500 qdisc ... state UP ..."
INTERFACE_HEADER = re.compile(r'^(\d+):\s+([^:@\s]+)')
IW_INTERFACE = re.compile(r'^\s*Interface\s+(\S+)')


def parse_interfaces(ip_addr: str) -> List[Tuple[int, str, bool]]:
    """Return (index, name, reports_state) for every header line of ``ip addr show``."""
    interfaces = []
    for line in ip_addr.splitlines():
        match = INTERFACE_HEADER.match(line)
        if match:
            interfaces.append((int(match.group(1)), match.group(2), " state " in line))
    return interfaces


class InterfaceStrategy:
    """Picks the interface whose wireless link quality is queried."""

    name = ""

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    def detect(self) -> Optional[str]:
        raise NotImplementedError("Subclasses must implement this method")


class SequentialIndexStrategy(InterfaceStrategy):
    """
    Index 2 is taken as the first interface after loopback, index 3 (among
    interfaces reporting a link state) as the second one.  The second wins
    when present.  This relies on the kernel handing out stable, sequential
    indices, which holds on a freshly booted laptop but not in general.
    """

    name = "sequential"

    def detect(self) -> Optional[str]:
        result = self.runner.run(["ip", "addr", "show"])
        if not result.ok:
            return None
        interfaces = parse_interfaces(result.output)
        first = next((name for index, name, _ in interfaces if index == 2), None)
        second = next((name for index, name, has_state in interfaces
                       if index == 3 and has_state), None)
        return second or first


class WirelessStrategy(InterfaceStrategy):
    """First interface reported by ``iw dev``, else the sequential guess."""

    name = "wireless"

    def detect(self) -> Optional[str]:
        result = self.runner.run(["iw", "dev"])
        if result.ok:
            for line in result.output.splitlines():
                match = IW_INTERFACE.match(line)
                if match:
                    return match.group(1)
        logger.debug("No wireless interface reported by iw, using sequential detection")
        return SequentialIndexStrategy(self.runner).detect()


class NamedStrategy(InterfaceStrategy):
    """Interface given explicitly in the configuration."""

    name = "named"

    def __init__(self, runner: CommandRunner, interface: Optional[str] = None):
        super().__init__(runner)
        self.interface = interface

    def detect(self) -> Optional[str]:
        return self.interface or None


STRATEGIES: Dict[str, type] = {
    SequentialIndexStrategy.name: SequentialIndexStrategy,
    WirelessStrategy.name: WirelessStrategy,
    NamedStrategy.name: NamedStrategy,
}


def get_interface_strategy(name: str, runner: CommandRunner,
                           interface: Optional[str] = None) -> InterfaceStrategy:
    if name not in STRATEGIES:
        raise ValueError(f"Unknown interface strategy: {name}")
    if name == NamedStrategy.name:
        return NamedStrategy(runner, interface)
    return STRATEGIES[name](runner)


class NetworkModule(DiagnosticModule):
    """Module for interfaces, listening sockets, firewall rules and wifi signal."""

    def __init__(self, runner=None, strategy: Optional[InterfaceStrategy] = None,
                 capabilities: Optional[CapabilityManager] = None):
        super().__init__("networking", "NETWORKING INFO", runner)
        self.strategy = strategy or SequentialIndexStrategy(self.runner)
        self.capabilities = capabilities
        self.interface = None

    def prepare(self):
        if self.capabilities:
            self.capabilities.ensure(NETSTAT)
        self.interface = self.strategy.detect()
        logger.info(f"Wireless link query interface: {self.interface or 'none'}")

    def sections(self) -> List[Section]:
        if self.interface:
            signal = ["iw", "dev", self.interface, "link"]
        else:
            signal = "no network interface detected"
        return [
            ("INTERFACE INFO", ["ip", "addr", "show"], None),
            ("NETSTAT", ["netstat", "-tulpn"], None),
            ("IPTABLES", ["iptables", "-L", "-v", "-n", "--line-numbers"], None),
            ("WIFI SIGNAL STRENGTH", signal, None),
        ]
