#!/usr/bin/env python3
"""
Curses menu for the troubleshooting helper, used instead of the numbered
prompt when ``--tui`` is given.
"""

import curses
import locale
import logging
from typing import Optional, Sequence

logger = logging.getLogger("troublehelper.tui")


class EnhancedTUI:
    """Single-choice curses menu with the same ``choose`` contract as PromptMenu."""

    def __init__(self):
        self.current_pos = 0
        self.status_message = ""
        self.use_unicode = self.check_unicode_support()

    def check_unicode_support(self):
        """Check if the terminal supports unicode characters."""
        try:
            return locale.getpreferredencoding().lower() in ('utf-8', 'utf8')
        except locale.Error:
            return False

    def draw_menu(self, stdscr, title: str, options: Sequence[str]):
        stdscr.clear()
        h, w = stdscr.getmaxyx()

        curses.start_color()
        curses.init_pair(1, curses.COLOR_WHITE, curses.COLOR_BLUE)  # Header
        curses.init_pair(5, curses.COLOR_CYAN, curses.COLOR_BLACK)  # Options

        header = " Troubleshooting Helper "
        if self.use_unicode:
            header = " 🔧 Troubleshooting Helper 🔧 "
        stdscr.attron(curses.color_pair(1) | curses.A_BOLD)
        try:
            stdscr.addstr(1, max(0, (w - len(header)) // 2), header[:w - 1])
        except curses.error:
            pass
        stdscr.attroff(curses.color_pair(1) | curses.A_BOLD)

        try:
            stdscr.addstr(3, 2, title[:w - 4])
        except curses.error:
            pass

        marker = "▶" if self.use_unicode else ">"
        for i, option in enumerate(options):
            line = f"{marker if i == self.current_pos else ' '} {i + 1}) {option}"
            if i == self.current_pos:
                stdscr.attron(curses.A_REVERSE)
            stdscr.attron(curses.color_pair(5))
            try:
                stdscr.addstr(5 + i, 4, line[:w - 6])
            except curses.error:
                pass
            stdscr.attroff(curses.color_pair(5))
            if i == self.current_pos:
                stdscr.attroff(curses.A_REVERSE)

        if self.status_message:
            stdscr.attron(curses.A_BOLD)
            try:
                stdscr.addstr(h - 3, 2, self.status_message[:w - 4])
            except curses.error:
                pass
            stdscr.attroff(curses.A_BOLD)

        help_text = "↑/↓/j/k: Navigate | Enter: Select | 1-9: Select by number"
        if not self.use_unicode:
            help_text = "Up/Down/j/k: Navigate | Enter: Select | 1-9: Select by number"
        try:
            stdscr.addstr(h - 1, 2, help_text[:w - 4])
        except curses.error:
            pass
        stdscr.refresh()

    def process_input(self, key, options: Sequence[str], invalid_message: str) -> Optional[str]:
        """Handle one key press, returning the chosen option if any."""
        if key == curses.KEY_UP or key == ord('k') or key == ord('K'):
            self.current_pos = max(0, self.current_pos - 1)
        elif key == curses.KEY_DOWN or key == ord('j') or key == ord('J'):
            self.current_pos = min(len(options) - 1, self.current_pos + 1)
        elif key == 10 or key == 13 or key == curses.KEY_ENTER:
            return options[self.current_pos]
        elif ord('1') <= key <= ord('9') and key - ord('1') < len(options):
            return options[key - ord('1')]
        else:
            self.status_message = invalid_message
        return None

    def _run_menu(self, stdscr, title: str, options: Sequence[str], invalid_message: str) -> str:
        curses.curs_set(0)
        stdscr.timeout(-1)
        while True:
            self.draw_menu(stdscr, title, options)
            choice = self.process_input(stdscr.getch(), options, invalid_message)
            if choice is not None:
                return choice

    def choose(self, title: str, options: Sequence[str], invalid_message: str) -> str:
        self.current_pos = 0
        self.status_message = ""
        choice = curses.wrapper(self._run_menu, title, options, invalid_message)
        logger.debug(f"Selected '{choice}' for: {title}")
        return choice
