#!/usr/bin/env python3
"""
Main entry point for the troubleshooting helper.
"""

import os
import sys
import signal
import argparse
import logging
from typing import Callable, Optional, TextIO

from .config import ConfigError, load_config
from .controller import SessionController
from .modules import get_baseline_modules, get_category_modules, get_interface_strategy
from .modules.base import CommandRunner
from .modules.capability import LSHW, CapabilityManager
from .modules.system import BiosInfoModule, KernelMessagesModule
from .session import Session
from .ui.menu import PromptMenu
from .ui.report import ReportFile
from .ui.tui import EnhancedTUI

logger = logging.getLogger("troublehelper")

WELCOME = """
Welcome to the troubleshooting helper, and thank you for running this script.

Please select the number that matches your issue, and all relevant info / logs
will be packaged into a tar archive at the end.
"""

TTY_QUESTION = "Are you running this troubleshooter in a TTY?"
TTY_INVALID = "That selection is invalid.  Please select yes or no."


class SessionInterrupted(Exception):
    """Raised when the helper receives SIGTERM."""


def handle_termination(signum, frame):
    raise SessionInterrupted(f"Received signal {signum}")


def setup_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Gather system logs for troubleshooting into a single archive"
    )
    parser.add_argument("-c", "--config", help="Configuration file (default: /etc/troublehelper/troublehelper.conf)")
    parser.add_argument("-u", "--user", help="User the archive is written for (default: the invoking user)")
    parser.add_argument("-o", "--output-dir", help="Directory for the archive (default: the user's home)")
    parser.add_argument("--interface-strategy", choices=["sequential", "wireless", "named"],
                        help="How to pick the interface for the wifi signal query")
    parser.add_argument("--interface", help="Interface name for the 'named' strategy")
    parser.add_argument("--no-install", action="store_true", help="Never install missing tools")
    parser.add_argument("--tui", action="store_true", help="Use the curses menu instead of numbered prompts")
    tty = parser.add_mutually_exclusive_group()
    tty.add_argument("--headless", dest="headless", action="store_const", const=True,
                     help="Running in a TTY without a desktop session")
    tty.add_argument("--gui", dest="headless", action="store_const", const=False,
                     help="Running inside a desktop session")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="store_true", help="Show version information")
    return parser.parse_args(argv)


def check_root_privileges():
    """Check if running with root privileges."""
    return os.geteuid() == 0


def ensure_root():
    """Exit with status 1 unless running as root."""
    if not check_root_privileges():
        logger.error("This script requires root privileges.")
        logger.error("Please re-run this script with sudo.")
        sys.exit(1)


def build_config(args):
    """Load the configuration file and apply command line overrides."""
    config = load_config(args.config)
    if args.output_dir:
        config.output_dir = args.output_dir
    if args.interface_strategy:
        config.interface_strategy = args.interface_strategy
    if args.interface:
        config.interface = args.interface
    if args.no_install:
        config.install_missing = False
    return config.validate()


def ask_headless(menu, output: TextIO) -> bool:
    answer = menu.choose(TTY_QUESTION, ["Yes", "No"], TTY_INVALID)
    if answer == "Yes":
        output.write("\nOK, the archive will stay in place for you to copy to a USB drive.\n")
        return True
    output.write("\nOK, moving on to info collection.\n")
    return False


def collect_baseline(session: Session, runner: CommandRunner) -> ReportFile:
    """Write the system report, the BIOS file and the kernel message dump."""
    report = ReportFile(session.report_file, runner).start()
    for module in get_baseline_modules(runner):
        logger.info(f"Collecting {module.name}")
        module.collect(report)

    bios = ReportFile(session.hardware_file, runner).start()
    BiosInfoModule(runner).collect(bios)
    dmesg = ReportFile(session.dmesg_file, runner).start()
    KernelMessagesModule(runner).collect(dmesg)
    return report


def run_session(session: Session, menu, runner: CommandRunner,
                headless: Optional[bool] = None, output: Optional[TextIO] = None) -> str:
    """Collect everything for one session and return the archive path."""
    config = session.config
    output = output or sys.stdout
    capabilities = CapabilityManager(runner, config.install_missing, config.install_command)
    capabilities.ensure(LSHW)

    session.headless = ask_headless(menu, output) if headless is None else headless

    report = collect_baseline(session, runner)

    output.write(WELCOME + "\n")
    strategy = get_interface_strategy(config.interface_strategy, runner, config.interface)
    modules = get_category_modules(runner, capabilities=capabilities, strategy=strategy)
    controller = SessionController(session, report, modules, menu, output=output)
    archive = controller.run()

    if session.headless:
        output.write(f"\nCopy {archive} to a USB drive before shutting down.\n")
        output.write("Execute this command to shut this TTY session down:  sudo shutdown -h now\n")
    return archive


def run_guarded(session: Session, func: Callable[[], object]) -> int:
    """Run ``func``; on interrupt or failure remove the session's files and return 1."""
    try:
        func()
    except (KeyboardInterrupt, SessionInterrupted, EOFError):
        print("\nScript exited unexpectedly. Removing all temporary files")
        session.discard()
        return 1
    except Exception as e:
        logger.error(f"Session failed: {e}")
        print("\nScript failed. Removing all temporary files")
        session.discard()
        return 1
    return 0


def show_version():
    """Show version information."""
    from . import __version__
    print(f"Troubleshooting helper version {__version__}")


def main(argv=None):
    """Main function."""
    args = parse_arguments(argv)

    if args.version:
        show_version()
        sys.exit(0)

    setup_logging(args.verbose)
    ensure_root()

    try:
        config = build_config(args)
    except ConfigError as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        session = Session.create(config, args.user)
    except KeyError as e:
        logger.error(f"Unknown user: {e}")
        sys.exit(1)

    runner = CommandRunner(config.timeout)
    menu = EnhancedTUI() if args.tui else PromptMenu()

    signal.signal(signal.SIGTERM, handle_termination)
    sys.exit(run_guarded(session, lambda: run_session(session, menu, runner, args.headless)))


if __name__ == "__main__":
    main()
