import os
import pwd
import datetime

import pytest

from troublehelper.config import Config
from troublehelper.modules.base import CommandResult
from troublehelper.session import Session


class FakeRunner:
    """Stands in for CommandRunner: canned output per command, missing otherwise."""

    def __init__(self, responses=None, timeout=30):
        self.responses = dict(responses or {})
        self.timeout = timeout
        self.calls = []
        self.dropped_stderr = []

    def run(self, command, stderr=True):
        command = list(command)
        self.calls.append(command)
        if not stderr:
            self.dropped_stderr.append(command)
        response = self.responses.get(tuple(command))
        if response is None:
            return CommandResult(command, None, "", missing=True)
        if isinstance(response, CommandResult):
            return response
        return CommandResult(command, 0, response)


class ScriptedMenu:
    """Answers menu prompts from a list, the way PromptMenu would after parsing."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.prompts = []

    def choose(self, title, options, invalid_message):
        self.prompts.append((title, list(options)))
        answer = self.answers.pop(0)
        if isinstance(answer, BaseException) or (isinstance(answer, type) and issubclass(answer, BaseException)):
            raise answer
        assert answer in options
        return answer


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def make_runner():
    return FakeRunner


@pytest.fixture
def make_menu():
    return ScriptedMenu


@pytest.fixture
def log_dir(tmp_path):
    logs = tmp_path / "var" / "log"
    logs.mkdir(parents=True)
    (logs / "syslog").write_text("syslog line\n")
    (logs / "syslog.1").write_text("older syslog line\n")
    return logs


@pytest.fixture
def config(tmp_path, log_dir):
    config = Config()
    config.output_dir = str(tmp_path / "home")
    config.display_manager_log = str(log_dir / "lightdm")
    config.xorg_log = str(log_dir / "Xorg.0.log")
    config.system_logs = [str(log_dir / "syslog"), str(log_dir / "syslog.1")]
    config.install_missing = False
    return config


@pytest.fixture
def session(config):
    os.makedirs(config.output_dir, exist_ok=True)
    user = pwd.getpwuid(os.getuid()).pw_name
    session = Session(user, os.getuid(), os.getgid(), config.output_dir, config,
                      today=datetime.date(2026, 10, 19))
    session.detect_optional_logs()
    return session


@pytest.fixture
def populated_session(session):
    for path in session.intermediate_files:
        with open(path, "w") as f:
            f.write(f"contents of {os.path.basename(path)}\n")
    return session
