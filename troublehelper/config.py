#!/usr/bin/env python3
"""
Configuration for the troubleshooting helper.

Settings come from an INI file (``/etc/troublehelper/troublehelper.conf`` by
default); a missing default file means defaults.  Example::

    [output]
    # Empty means the invoking user's home directory
    directory =

    [logs]
    display_manager_log = /var/log/lightdm
    xorg_log = /var/log/Xorg.0.log
    system_logs = /var/log/syslog /var/log/syslog.1

    [network]
    # sequential, wireless or named
    interface_strategy = sequential
    interface =

    [capabilities]
    install_missing = true
    install_command = apt -y install

    [commands]
    timeout = 30
"""

import os
import re
import logging
import configparser
from typing import List, Optional

from .modules.base import DEFAULT_TIMEOUT
from .modules.capability import DEFAULT_INSTALL_COMMAND
from .modules.network import STRATEGIES

logger = logging.getLogger("troublehelper.config")

CONFIG_DIR = "/etc/troublehelper"
DEFAULT_CONFIG_FILE = os.path.join(CONFIG_DIR, "troublehelper.conf")

DISPLAY_MANAGER_LOG = "/var/log/lightdm"
XORG_LOG = "/var/log/Xorg.0.log"
SYSTEM_LOGS = ["/var/log/syslog", "/var/log/syslog.1"]


class ConfigError(Exception):
    """Raised for configuration values that cannot be used."""


class Config:
    """Effective settings for one run."""

    def __init__(self):
        self.output_dir: Optional[str] = None
        self.display_manager_log = DISPLAY_MANAGER_LOG
        self.xorg_log = XORG_LOG
        self.system_logs: List[str] = list(SYSTEM_LOGS)
        self.interface_strategy = "sequential"
        self.interface: Optional[str] = None
        self.install_missing = True
        self.install_command = DEFAULT_INSTALL_COMMAND
        self.timeout = DEFAULT_TIMEOUT

    def validate(self):
        if self.interface_strategy not in STRATEGIES:
            raise ConfigError(
                f"Unknown interface strategy '{self.interface_strategy}' "
                f"(expected one of: {', '.join(STRATEGIES)})"
            )
        if self.interface_strategy == "named" and not self.interface:
            raise ConfigError("The 'named' interface strategy needs an interface name")
        if self.timeout <= 0:
            raise ConfigError("Command timeout must be a positive number of seconds")
        return self


def _split_paths(value: str) -> List[str]:
    return [p for p in re.split(r"[\s,]+", value) if p]


def load_config(path: Optional[str] = None) -> Config:
    """
    Load settings from ``path`` (or the default location) over the defaults.

    A missing default file means defaults; a missing explicit ``path`` is an error.
    """
    config = Config()
    if path and not os.path.isfile(path):
        raise ConfigError(f"Configuration file not found: {path}")
    path = path or DEFAULT_CONFIG_FILE

    parser = configparser.ConfigParser()
    try:
        read = parser.read(path)
    except configparser.Error as e:
        raise ConfigError(f"Failed to parse {path}: {e}")
    if not read:
        logger.debug(f"No configuration file at {path}, using defaults")
        return config.validate()

    logger.debug(f"Loaded configuration from {path}")
    try:
        config.output_dir = parser.get("output", "directory", fallback="") or None
        config.display_manager_log = parser.get("logs", "display_manager_log",
                                                fallback=config.display_manager_log)
        config.xorg_log = parser.get("logs", "xorg_log", fallback=config.xorg_log)
        if parser.has_option("logs", "system_logs"):
            config.system_logs = _split_paths(parser.get("logs", "system_logs"))
        config.interface_strategy = parser.get("network", "interface_strategy",
                                               fallback=config.interface_strategy)
        config.interface = parser.get("network", "interface", fallback="") or None
        config.install_missing = parser.getboolean("capabilities", "install_missing",
                                                   fallback=config.install_missing)
        config.install_command = parser.get("capabilities", "install_command",
                                            fallback=config.install_command)
        config.timeout = parser.getint("commands", "timeout", fallback=config.timeout)
    except ValueError as e:
        raise ConfigError(f"Invalid value in {path}: {e}")

    return config.validate()
