"""zmap_scanner - Python driver for the ZMap network scanner

Builds validated zmap command lines from option objects, runs zmap as a
subprocess bounded by a cancellable deadline, and parses its log and result
streams into structured records.

This package provides:
- Option factories validating every flag before it reaches zmap
- Capability introspection (probe modules, output modules, output fields)
- Blocking and background scan execution
- Configuration loading and logging setup

IMPORTANT: Only scan networks you are authorized to scan.
"""

__version__ = "1.0.0"
__author__ = "zmap_scanner Development Team"
__description__ = "Python driver for the ZMap network scanner"
__license__ = "MIT"

from .core.exceptions import ZMapScannerException, ZMapScannerError
from .core.scanning import (
    ArgumentList, ScanContext, ScanRun, LogEntry, LogLevel, OutputField,
    BandwidthUnit, VerbosityLevel
)
from .core.scanning.scanner import BaseScanner, BlockingScanner, AsyncScanner
from .core.config import ConfigManager
from .core.logger import LoggerManager
from .tools import ZMapTool
from . import options

__all__ = [
    'BaseScanner', 'BlockingScanner', 'AsyncScanner',
    'ArgumentList', 'ScanContext', 'ScanRun', 'LogEntry', 'LogLevel',
    'OutputField', 'BandwidthUnit', 'VerbosityLevel',
    'ConfigManager', 'LoggerManager', 'ZMapTool', 'options',
    'ZMapScannerException', 'ZMapScannerError',
    '__version__'
]
