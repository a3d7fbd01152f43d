"""
Tests for network interface detection.

Run with: pytest tests/test_network.py -v
"""

import pytest

from troublehelper.modules.network import (
    NamedStrategy, NetworkModule, SequentialIndexStrategy, WirelessStrategy,
    get_interface_strategy, parse_interfaces
)
from troublehelper.ui.report import ReportFile

ETHERNET_AND_WIFI = """\
1: lo: <LOOPBACK,UP,LOWER_UP> mtu 65536 qdisc noqueue state UNKNOWN group default qlen 1000
    link/loopback 00:00:00:00:00:00 brd 00:00:00:00:00:00
    inet 127.0.0.1/8 scope host lo
2: enp3s0: <NO-CARRIER,BROADCAST,MULTICAST,UP> mtu 1500 qdisc fq_codel state DOWN group default qlen 1000
    link/ether 80:fa:5b:00:00:01 brd ff:ff:ff:ff:ff:ff
3: wlp2s0: <BROADCAST,MULTICAST,UP,LOWER_UP> mtu 1500 qdisc noqueue state UP group default qlen 1000
    link/ether 9c:b6:d0:00:00:02 brd ff:ff:ff:ff:ff:ff
    inet6 fe80::2:3:4/64 scope link
"""

WIFI_ONLY = """\
1: lo: <LOOPBACK,UP,LOWER_UP> mtu 65536 qdisc noqueue state UNKNOWN group default qlen 1000
    link/loopback 00:00:00:00:00:00 brd 00:00:00:00:00:00
2: wlan0: <BROADCAST,MULTICAST,UP,LOWER_UP> mtu 1500 qdisc noqueue state UP group default qlen 1000
    link/ether 9c:b6:d0:00:00:02 brd ff:ff:ff:ff:ff:ff
"""

IW_DEV = """\
phy#0
\tInterface wlp2s0
\t\tifindex 3
\t\ttype managed
"""


class TestParseInterfaces:
    """Test parsing ``ip addr show`` headers."""

    def test_headers_only(self):
        assert parse_interfaces(ETHERNET_AND_WIFI) == [
            (1, "lo", True), (2, "enp3s0", True), (3, "wlp2s0", True)
        ]

    def test_vlan_suffix_is_dropped(self):
        line = "4: eth0.10@eth0: <BROADCAST,MULTICAST> mtu 1500 qdisc noop state DOWN"
        assert parse_interfaces(line) == [(4, "eth0.10", True)]


class TestSequentialIndexStrategy:
    """Test the index based heuristic."""

    def test_second_interface_wins(self, make_runner):
        runner = make_runner({("ip", "addr", "show"): ETHERNET_AND_WIFI})
        assert SequentialIndexStrategy(runner).detect() == "wlp2s0"

    def test_falls_back_to_first(self, make_runner):
        runner = make_runner({("ip", "addr", "show"): WIFI_ONLY})
        assert SequentialIndexStrategy(runner).detect() == "wlan0"

    def test_second_needs_link_state(self, make_runner):
        output = WIFI_ONLY + "3: tun0: <POINTOPOINT,NOARP> mtu 1500 qdisc noop\n"
        runner = make_runner({("ip", "addr", "show"): output})
        assert SequentialIndexStrategy(runner).detect() == "wlan0"

    def test_ip_unavailable(self, runner):
        assert SequentialIndexStrategy(runner).detect() is None


class TestOtherStrategies:
    """Test the configurable alternatives."""

    def test_wireless_uses_iw(self, make_runner):
        runner = make_runner({("iw", "dev"): IW_DEV, ("ip", "addr", "show"): WIFI_ONLY})
        assert WirelessStrategy(runner).detect() == "wlp2s0"

    def test_wireless_falls_back_to_sequential(self, make_runner):
        runner = make_runner({("iw", "dev"): "", ("ip", "addr", "show"): WIFI_ONLY})
        assert WirelessStrategy(runner).detect() == "wlan0"

    def test_named(self, runner):
        assert NamedStrategy(runner, "wlx00c0ca").detect() == "wlx00c0ca"

    def test_factory(self, runner):
        assert isinstance(get_interface_strategy("sequential", runner), SequentialIndexStrategy)
        assert isinstance(get_interface_strategy("wireless", runner), WirelessStrategy)
        assert get_interface_strategy("named", runner, "eth1").detect() == "eth1"
        with pytest.raises(ValueError):
            get_interface_strategy("random", runner)


class TestNetworkModule:
    """Test the networking bundle with a detected interface."""

    def test_queries_detected_interface(self, tmp_path, make_runner):
        runner = make_runner({
            ("ip", "addr", "show"): ETHERNET_AND_WIFI,
            ("iw", "dev", "wlp2s0", "link"): "Connected to 00:11:22:33:44:55\n\tsignal: -48 dBm\n",
        })
        report = ReportFile(str(tmp_path / "report.info"), runner).start()
        NetworkModule(runner).collect(report)
        content = report.read()
        assert "# WIFI SIGNAL STRENGTH #\nConnected to 00:11:22:33:44:55" in content
        assert "netstat was not installed" in content

    def test_no_interface(self, tmp_path, runner):
        report = ReportFile(str(tmp_path / "report.info"), runner).start()
        NetworkModule(runner).collect(report)
        assert "# WIFI SIGNAL STRENGTH #\nno network interface detected" in report.read()
