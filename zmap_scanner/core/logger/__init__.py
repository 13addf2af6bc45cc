"""Logging framework for zmap_scanner."""

from .logger_manager import LoggerManager
from .structured_formatter import StructuredFormatter

__all__ = ['LoggerManager', 'StructuredFormatter']
