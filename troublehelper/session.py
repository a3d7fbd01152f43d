#!/usr/bin/env python3
"""
Session state: who runs the helper, where its files go, and which optional
log sources exist on this machine.
"""

import os
import pwd
import datetime
import logging
import subprocess
from typing import List, Optional

from .config import Config

logger = logging.getLogger("troublehelper.session")


def resolve_invoking_user() -> str:
    """Return the (non-root) user the helper runs on behalf of."""
    sudo_user = os.environ.get("SUDO_USER")
    if sudo_user and sudo_user != "root":
        return sudo_user

    try:
        who = subprocess.run(["who"], capture_output=True, text=True, check=False).stdout
    except OSError:
        who = ""
    for line in who.splitlines():
        if line.split():
            return line.split()[0]

    return pwd.getpwuid(os.getuid()).pw_name


def date_prefix(user: str, today: Optional[datetime.date] = None) -> str:
    """``<user>-<weekday>-<YYYY-MM-DD>``, e.g. ``alice-Mon-2026-10-19``."""
    today = today or datetime.date.today()
    return f"{user}-{today.strftime('%a')}-{today.isoformat()}"


class Session:
    """One run of the helper."""

    def __init__(self, user: str, uid: int, gid: int, output_dir: str, config: Config,
                 today: Optional[datetime.date] = None):
        self.user = user
        self.uid = uid
        self.gid = gid
        self.output_dir = output_dir
        self.config = config
        self.prefix = date_prefix(user, today)

        self.report_file = os.path.join(output_dir, f"{self.prefix}_troubleshooting.info")
        self.hardware_file = os.path.join(output_dir, f"{self.prefix}_bios.info")
        self.dmesg_file = os.path.join(output_dir, f"{self.prefix}_dmesg.txt")
        self.archive_file = os.path.join(output_dir, f"{self.prefix}_troubleshooting.tar.gz")

        self.has_display_manager_log = False
        self.has_xorg_log = False
        self.headless = False
        self.skipped = False
        self.archive_started = False
        self.archived = False

    @classmethod
    def create(cls, config: Config, user: Optional[str] = None) -> "Session":
        """Build a session for ``user`` (or the invoking user) and detect optional logs."""
        user = user or resolve_invoking_user()
        entry = pwd.getpwnam(user)
        session = cls(user, entry.pw_uid, entry.pw_gid, config.output_dir or entry.pw_dir, config)
        session.detect_optional_logs()
        return session

    @property
    def intermediate_files(self) -> List[str]:
        return [self.report_file, self.hardware_file, self.dmesg_file]

    def detect_optional_logs(self):
        self.has_display_manager_log = os.path.isdir(self.config.display_manager_log)
        self.has_xorg_log = os.path.isfile(self.config.xorg_log)
        logger.debug(f"Display manager log present: {self.has_display_manager_log}, "
                     f"X server log present: {self.has_xorg_log}")

    def remove_intermediates(self):
        for path in self.intermediate_files:
            try:
                os.remove(path)
                logger.debug(f"Removed {path}")
            except FileNotFoundError:
                pass

    def discard(self):
        """Remove everything an unfinished session may have written."""
        self.remove_intermediates()
        if self.archive_started and not self.archived:
            try:
                os.remove(self.archive_file)
                logger.debug(f"Removed partial archive {self.archive_file}")
            except FileNotFoundError:
                pass
