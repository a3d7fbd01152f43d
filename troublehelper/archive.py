#!/usr/bin/env python3
"""
Packaging of the collected files into the final tar.gz archive.
"""

import os
import logging
import tarfile
from typing import List, Optional

from .session import Session

logger = logging.getLogger("troublehelper.archive")


def archive_members(session: Session) -> List[str]:
    """Paths to archive, decided by the session's presence flags."""
    members = list(session.intermediate_files) + list(session.config.system_logs)
    if session.has_display_manager_log:
        members.append(session.config.display_manager_log)
    if session.has_xorg_log:
        members.append(session.config.xorg_log)
    return members


def _exclude_rotated(info: tarfile.TarInfo) -> Optional[tarfile.TarInfo]:
    """Drop compressed rotated logs (``*.gz``) from a log directory."""
    if info.name.endswith(".gz"):
        return None
    logger.info(f"adding {info.name}")
    return info


def _log_member(info: tarfile.TarInfo) -> tarfile.TarInfo:
    logger.info(f"adding {info.name}")
    return info


def build_archive(session: Session) -> str:
    """Write the archive and hand it to the invoking user."""
    members = archive_members(session)
    session.archive_started = True
    with tarfile.open(session.archive_file, "w:gz") as tar:
        for path in members:
            if not os.path.exists(path):
                logger.warning(f"{path} does not exist, leaving it out of the archive")
                continue
            arcname = path.lstrip(os.sep)
            if path == session.config.display_manager_log:
                tar.add(path, arcname=arcname, filter=_exclude_rotated)
            else:
                tar.add(path, arcname=arcname, filter=_log_member)

    os.chown(session.archive_file, session.uid, session.gid)
    session.archived = True
    logger.info(f"Archive written to {session.archive_file}")
    return session.archive_file


def finalize(session: Session) -> str:
    """Archive the session files, then remove the intermediate ones."""
    archive = build_archive(session)
    session.remove_intermediates()
    return archive
