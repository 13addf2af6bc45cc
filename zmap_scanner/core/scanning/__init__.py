"""Core scanning modules for zmap_scanner.

The scanners, orchestrator and interpreter depend on the option catalogue and
are exported from the top-level package.
"""

from .data_structures import (
    ResultRecord, BandwidthUnit, VerbosityLevel, LogLevel,
    LogEntry, OutputField, ExecutionPlan, ProcessOutput, ScanRun
)
from .arguments import ArgumentList
from .context import ScanContext

__all__ = [
    'ResultRecord', 'BandwidthUnit', 'VerbosityLevel', 'LogLevel',
    'LogEntry', 'OutputField', 'ExecutionPlan', 'ProcessOutput', 'ScanRun',
    'ArgumentList', 'ScanContext'
]
