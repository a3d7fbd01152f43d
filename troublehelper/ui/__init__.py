#!/usr/bin/env python3
"""
UI module initialization for the troubleshooting helper.
"""

from .menu import PromptMenu
from .report import ReportFile
from .tui import EnhancedTUI
