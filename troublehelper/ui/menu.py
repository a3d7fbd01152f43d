#!/usr/bin/env python3
"""
Numbered prompt menu, in the style of the shell's ``select`` builtin.
"""

import sys
from typing import Callable, Optional, Sequence, TextIO


class PromptMenu:
    """Shows numbered options and reads a choice until a valid one is given."""

    prompt = "#? "

    def __init__(self, input_func: Callable[[str], str] = input, output: Optional[TextIO] = None):
        self.input_func = input_func
        self.output = output or sys.stdout

    def show(self, options: Sequence[str]):
        for number, option in enumerate(options, start=1):
            self.output.write(f"{number}) {option}\n")
        self.output.flush()

    def parse(self, answer: str, options: Sequence[str]) -> Optional[str]:
        """Accept either the option number or its name."""
        answer = answer.strip()
        if answer.isdigit() and 1 <= int(answer) <= len(options):
            return options[int(answer) - 1]
        for option in options:
            if answer.lower() == option.lower():
                return option
        return None

    def choose(self, title: str, options: Sequence[str], invalid_message: str) -> str:
        """
        Return the chosen option.

        Invalid answers print ``invalid_message`` and show the options again.
        EOF on input propagates as ``EOFError``.
        """
        self.output.write(f"\n{title}\n")
        while True:
            self.show(options)
            choice = self.parse(self.input_func(self.prompt), options)
            if choice is not None:
                return choice
            self.output.write(f"\n{invalid_message}\n\n")
