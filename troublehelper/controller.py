#!/usr/bin/env python3
"""
Interactive session controller.

The session moves through a small set of states::

    SELECTING_CATEGORY -> GATHERING -> ASKING_CONTINUE -> SELECTING_CATEGORY
                                                       -> FINALIZING -> DONE

Choosing "skip" goes from GATHERING straight to FINALIZING.
"""

import sys
import enum
import logging
from typing import Callable, Dict, List, Optional, TextIO

from .archive import finalize
from .modules import CATEGORIES, SKIP, DiagnosticModule
from .session import Session
from .ui.report import ReportFile

logger = logging.getLogger("troublehelper.controller")

CATEGORY_TITLE = "Please select the number matching your issue:"
CATEGORY_INVALID = "That selection is invalid.  Please choose a number that matches your issue"
CONTINUE_TITLE = "Would you like to select another issue to troubleshoot, or quit and package results?"
CONTINUE_INVALID = "That selection is invalid.  Please choose to continue or quit"
CHOOSE_ANOTHER = "choose another category"
QUIT = "quit"

GATHERING_MESSAGES = {
    "battery": "Gathering battery info",
    "storage": "Gathering drive info",
    "networking": "Gathering wifi / ethernet info",
    "temperature": "Gathering temperature info",
}


class State(enum.Enum):
    SELECTING_CATEGORY = "selecting_category"
    GATHERING = "gathering"
    ASKING_CONTINUE = "asking_continue"
    FINALIZING = "finalizing"
    DONE = "done"


class SessionController:
    """Drives the category menu and the final packaging of one session."""

    def __init__(self, session: Session, report: ReportFile, modules: Dict[str, DiagnosticModule],
                 menu, finalizer: Callable[[Session], str] = finalize,
                 output: Optional[TextIO] = None):
        self.session = session
        self.report = report
        self.modules = modules
        self.menu = menu
        self.finalizer = finalizer
        self.output = output or sys.stdout

        self.state = State.SELECTING_CATEGORY
        self.category: Optional[str] = None
        self.gathered: List[str] = []
        self.archive: Optional[str] = None

    def say(self, message: str):
        self.output.write(f"\n{message}\n")
        self.output.flush()

    def step(self) -> State:
        """Run the current state and move to the next one."""
        if self.state is State.SELECTING_CATEGORY:
            self.category = self.menu.choose(CATEGORY_TITLE, CATEGORIES + [SKIP], CATEGORY_INVALID)
            self.state = State.GATHERING

        elif self.state is State.GATHERING:
            if self.category == SKIP:
                self.session.skipped = True
                self.say("Skipping to the end")
                self.state = State.FINALIZING
            else:
                self.say(GATHERING_MESSAGES[self.category])
                logger.info(f"Collecting {self.category} bundle")
                self.modules[self.category].collect(self.report)
                self.gathered.append(self.category)
                self.state = State.ASKING_CONTINUE

        elif self.state is State.ASKING_CONTINUE:
            answer = self.menu.choose(CONTINUE_TITLE, [CHOOSE_ANOTHER, QUIT], CONTINUE_INVALID)
            if answer == CHOOSE_ANOTHER:
                self.say("Returning to issue selector.")
                self.state = State.SELECTING_CATEGORY
            else:
                self.state = State.FINALIZING

        elif self.state is State.FINALIZING:
            if self.session.skipped:
                self.say("Writing only the system info and packaging results")
            else:
                self.say("Writing info and packaging results")
            logger.info(f"Report sections: {', '.join(self.report.sections)}")
            self.output.write(f"{len(self.report.sections)} report sections collected.\n")
            self.archive = self.finalizer(self.session)
            self.output.write(f"Please attach the {self.archive} archive in your next response.\n")
            self.state = State.DONE

        return self.state

    def run(self) -> Optional[str]:
        """Step until DONE and return the archive path."""
        while self.state is not State.DONE:
            self.step()
        return self.archive
