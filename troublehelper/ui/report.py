#!/usr/bin/env python3
"""
Report assembler for the troubleshooting helper.

A report is a plain text file made of labelled sections.  Every section is
the output of one external command, written under a ``# LABEL #`` line;
groups of sections sit under a ``### HEADING ###`` line.  Command failures
end up in the report as text, they are never raised.
"""

import os
import logging
from typing import Callable, Optional, Sequence

from ..modules.base import CommandRunner

logger = logging.getLogger("troublehelper.report")


class ReportFile:
    """Append-only text report backed by a file on disk."""

    def __init__(self, path: str, runner: Optional[CommandRunner] = None):
        self.path = path
        self.runner = runner or CommandRunner()
        self.sections = []  # labels, in the order they were written

    def start(self, title: Optional[str] = None) -> "ReportFile":
        """Create (or truncate) the file, optionally with a title heading."""
        os.makedirs(os.path.dirname(os.path.abspath(self.path)), exist_ok=True)
        with open(self.path, "w") as f:
            if title:
                f.write(f"### {title} ###\n")
        self.sections = []
        logger.debug(f"Started report {self.path}")
        return self

    def _write(self, text: str):
        with open(self.path, "a") as f:
            f.write(text)

    def append_heading(self, title: str) -> "ReportFile":
        self._write(f"### {title} ###\n")
        return self

    def append_text(self, label: Optional[str], text: str) -> "ReportFile":
        """Append an already rendered section."""
        block = []
        if label:
            block.append(f"# {label} #")
            self.sections.append(label)
        block.append(text.rstrip())
        self._write("\n".join(block) + "\n\n\n")
        return self

    def append_section(self, label: Optional[str], command: Sequence[str],
                       transform: Optional[Callable[[str], str]] = None,
                       stderr: bool = True) -> "ReportFile":
        """
        Run ``command`` and append its output under ``label``.

        Args:
            label: Section label, or None for unlabelled output
            command: Command to run as a list of strings
            transform: Optional post-processing of successful output
            stderr: Whether the command's error stream goes into the report

        Returns:
            The report itself, so calls can be chained
        """
        result = self.runner.run(command, stderr=stderr)
        text = result.as_text(self.runner.timeout)
        if transform and result.ok:
            text = transform(text)
        if not result.ok:
            logger.info(f"{label or result.tool}: {text.splitlines()[-1] if text else 'no output'}")
        return self.append_text(label, text)

    def append_raw(self, command: Sequence[str]) -> "ReportFile":
        return self.append_section(None, command)

    def read(self) -> str:
        with open(self.path, "r") as f:
            return f.read()
