"""Core data structures for zmap scans."""

from datetime import datetime
from typing import Dict, List, Any, Optional, Tuple
from dataclasses import dataclass, field
from enum import Enum


# One scan output row: output field name -> raw value.
ResultRecord = Dict[str, str]


class BandwidthUnit(Enum):
    """Bandwidth suffixes accepted by zmap."""
    BPS = "B"    # bits per second, default, no suffix emitted
    KBPS = "K"
    MBPS = "M"
    GBPS = "G"


class VerbosityLevel(Enum):
    """zmap log verbosity levels."""
    LEVEL_1 = "1"
    LEVEL_2 = "2"
    LEVEL_3 = "3"
    LEVEL_4 = "4"
    LEVEL_5 = "5"


class LogLevel(Enum):
    """Severity of a zmap log line, in ascending order."""
    TRACE = "TRACE"
    DEBUG = "DEBUG"
    WARN = "WARN"
    INFO = "INFO"
    FATAL = "FATAL"

    @property
    def marker(self) -> str:
        """Bracketed token zmap writes into the log line."""
        return f"[{self.value}]"


@dataclass(frozen=True)
class LogEntry:
    """One timestamped zmap log line."""
    timestamp: datetime
    level: LogLevel
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'timestamp': self.timestamp.isoformat(),
            'level': self.level.value,
            'message': self.message,
        }


@dataclass(frozen=True)
class OutputField:
    """Output field as reported by ``zmap --list-output-fields``."""
    name: str
    type: str
    explanation: str = ""


@dataclass(frozen=True)
class ExecutionPlan:
    """Final command line of one run and the output handling it implies."""
    arguments: Tuple[str, ...]
    output_fields: Tuple[str, ...]
    dry_run: bool = False
    log_file: Optional[str] = None
    log_directory: Optional[str] = None
    output_file: Optional[str] = None

    @property
    def log_source(self) -> str:
        if self.log_file is not None:
            return self.log_file
        if self.log_directory is not None:
            return self.log_directory
        return "stderr"

    @property
    def result_source(self) -> str:
        return self.output_file if self.output_file is not None else "stdout"


@dataclass(frozen=True)
class ProcessOutput:
    """Raw output of one finished zmap process."""
    returncode: int
    stdout: str
    stderr: str


@dataclass(frozen=True)
class ScanRun:
    """Fully interpreted result of one zmap invocation.

    Built once after the process finished and its output was parsed; never
    mutated afterwards.
    """
    arguments: Tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str
    results: Tuple[ResultRecord, ...] = ()
    traces: Tuple[LogEntry, ...] = ()
    debugs: Tuple[LogEntry, ...] = ()
    warnings: Tuple[LogEntry, ...] = ()
    infos: Tuple[LogEntry, ...] = ()
    fatals: Tuple[LogEntry, ...] = ()
    finished_at: datetime = field(default_factory=datetime.now)

    @property
    def success(self) -> bool:
        """True when zmap exited cleanly and reported no fatal errors."""
        return self.returncode == 0 and not self.fatals

    def logs(self, level: LogLevel) -> List[LogEntry]:
        """Return the log entries of one severity."""
        return list({
            LogLevel.TRACE: self.traces,
            LogLevel.DEBUG: self.debugs,
            LogLevel.WARN: self.warnings,
            LogLevel.INFO: self.infos,
            LogLevel.FATAL: self.fatals,
        }[level])

    def as_tuple(self) -> Tuple[List[ResultRecord], List[LogEntry], List[LogEntry],
                                List[LogEntry], List[LogEntry], List[LogEntry]]:
        """Return (results, traces, debugs, warnings, infos, fatals) as lists."""
        return (
            [dict(record) for record in self.results],
            list(self.traces),
            list(self.debugs),
            list(self.warnings),
            list(self.infos),
            list(self.fatals),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert scan run to dictionary format."""
        return {
            'arguments': list(self.arguments),
            'returncode': self.returncode,
            'success': self.success,
            'finished_at': self.finished_at.isoformat(),
            'results': [dict(record) for record in self.results],
            'logs': {
                level.value: [entry.to_dict() for entry in self.logs(level)]
                for level in LogLevel
            },
        }
