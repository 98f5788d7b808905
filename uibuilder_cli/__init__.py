"""
UI Builder CLI

Command-line tools for checking and previewing UI configuration files.
"""

from .main import main

__all__ = ["main"]
