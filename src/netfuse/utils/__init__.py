"""Shared utilities"""

from .log import setup_logger
from .timers import Timer

__all__ = ['Timer', 'setup_logger']
