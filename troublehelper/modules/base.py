#!/usr/bin/env python3
"""
Base classes for command execution and diagnostic bundles.
"""

import os
import subprocess
import logging
from typing import Any, List, Optional, Sequence, Tuple

logger = logging.getLogger("troublehelper")

DEFAULT_TIMEOUT = 30


class CommandResult:
    """Outcome of a single external command."""

    def __init__(self, command: Sequence[str], returncode: Optional[int], output: str,
                 missing: bool = False, timed_out: bool = False):
        self.command = list(command)
        self.returncode = returncode
        self.output = output
        self.missing = missing
        self.timed_out = timed_out

    @property
    def tool(self) -> str:
        return os.path.basename(self.command[0]) if self.command else "command"

    @property
    def ok(self) -> bool:
        return not self.missing and not self.timed_out and self.returncode == 0

    def as_text(self, timeout: Optional[int] = DEFAULT_TIMEOUT) -> str:
        """Render the result the way it is written to a report."""
        if self.missing:
            return f"{self.tool} was not installed"
        if self.timed_out:
            if timeout is None:
                return f"{self.tool} timed out"
            return f"{self.tool} timed out after {timeout} seconds"
        if self.returncode != 0:
            if not self.output.strip():
                return f"{self.tool} was not installed"
            return f"{self.output.rstrip()}\n[exit status {self.returncode}]"
        return self.output.rstrip()


class CommandRunner:
    """Runs external commands without ever raising on their failure."""

    def __init__(self, timeout: Optional[int] = DEFAULT_TIMEOUT):
        self.timeout = timeout

    def run(self, command: Sequence[str], stderr: bool = True) -> CommandResult:
        """Run ``command``; with ``stderr=False`` its error stream is dropped."""
        logger.debug(f"Running: {' '.join(command)}")
        try:
            result = subprocess.run(
                list(command),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT if stderr else subprocess.DEVNULL,
                text=True,
                check=False,
                timeout=self.timeout
            )
        except FileNotFoundError:
            logger.warning(f"{command[0]} is not installed")
            return CommandResult(command, None, "", missing=True)
        except subprocess.TimeoutExpired:
            logger.warning(f"{' '.join(command)} timed out after {self.timeout} seconds")
            return CommandResult(command, None, "", timed_out=True)
        except OSError as e:
            logger.warning(f"Failed to run {' '.join(command)}: {e}")
            return CommandResult(command, 126, str(e))

        return CommandResult(command, result.returncode, result.stdout or "")


# (label, command, transform[, keep_stderr]); a plain string in place of the
# command is written verbatim
Section = Tuple[Any, ...]


class DiagnosticModule:
    """Base class for a bundle of diagnostic commands written under one heading."""

    def __init__(self, name: str, heading: str, runner: Optional[CommandRunner] = None):
        self.name = name
        self.heading = heading
        self.runner = runner or CommandRunner()

    def prepare(self):
        """Hook run right before the sections are collected."""

    def sections(self) -> List[Section]:
        raise NotImplementedError("Subclasses must implement this method")

    def collect(self, report):
        """Append this module's heading and sections to ``report``."""
        self.prepare()
        report.append_heading(self.heading)
        for label, command, transform, *options in self.sections():
            if isinstance(command, str):
                report.append_text(label, command)
            else:
                keep_stderr = options[0] if options else True
                report.append_section(label, command, transform=transform, stderr=keep_stderr)
        return report
