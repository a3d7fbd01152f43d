"""
Tests for capability probing and on-demand installs.

Run with: pytest tests/test_capability.py -v
"""

from troublehelper.modules.base import CommandResult, CommandRunner
from troublehelper.modules.capability import SENSORS, CapabilityManager


class FakePath:
    """Simulates PATH lookups; installing a package adds its executable."""

    def __init__(self, present=()):
        self.present = set(present)

    def which(self, name):
        return f"/usr/bin/{name}" if name in self.present else None


class InstallingRunner:
    def __init__(self, path, succeed=True):
        self.path = path
        self.succeed = succeed
        self.timeout = 30
        self.calls = []

    def run(self, command):
        self.calls.append(list(command))
        if self.succeed:
            self.path.present.add("sensors")
            return CommandResult(command, 0, "Setting up lm-sensors\n")
        return CommandResult(command, 100, "E: Unable to locate package lm-sensors\n")


class TestCapabilityManager:
    """Test probe -> install -> re-probe."""

    def test_present_tool_is_not_installed(self):
        path = FakePath({"sensors"})
        runner = InstallingRunner(path)
        manager = CapabilityManager(runner, which=path.which, install_runner=runner)
        assert manager.ensure(SENSORS)
        assert runner.calls == []

    def test_missing_tool_is_installed(self):
        path = FakePath()
        runner = InstallingRunner(path)
        manager = CapabilityManager(runner, which=path.which, install_runner=runner)
        assert manager.ensure(SENSORS)
        assert runner.calls == [["apt", "-y", "install", "lm-sensors"]]

    def test_install_disabled(self):
        path = FakePath()
        runner = InstallingRunner(path)
        manager = CapabilityManager(runner, install_missing=False, which=path.which, install_runner=runner)
        assert not manager.ensure(SENSORS)
        assert runner.calls == []

    def test_failed_install_is_tried_once(self):
        path = FakePath()
        runner = InstallingRunner(path, succeed=False)
        manager = CapabilityManager(runner, which=path.which, install_runner=runner)
        assert not manager.ensure(SENSORS)
        assert not manager.ensure(SENSORS)
        assert len(runner.calls) == 1

    def test_custom_install_command(self):
        path = FakePath()
        runner = InstallingRunner(path)
        manager = CapabilityManager(runner, install_command="dnf install -y", which=path.which,
                                    install_runner=runner)
        manager.ensure(SENSORS)
        assert runner.calls == [["dnf", "install", "-y", "lm-sensors"]]

    def test_install_is_not_subject_to_command_timeout(self):
        path = FakePath()
        manager = CapabilityManager(CommandRunner(timeout=1), install_command="sh -c 'sleep 2' install",
                                    which=path.which)
        assert manager.install_runner.timeout is None
        assert manager.install(SENSORS)


class TestTimeoutText:
    """Timeout messages with and without a limit."""

    def test_without_limit(self):
        result = CommandResult(["apt", "-y", "install", "lshw"], None, "", timed_out=True)
        assert result.as_text(None) == "apt timed out"
        assert result.as_text(5) == "apt timed out after 5 seconds"
