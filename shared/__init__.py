"""
elfscope Shared Module
======================

Configuration, logging and console utilities used by the elfscope
inspector and its command-line interface.
"""

from shared.config import ScopeConfig
from shared.console import ScopeConsole
from shared.logger import ScopeLogger

__all__ = ["ScopeConfig", "ScopeConsole", "ScopeLogger"]
