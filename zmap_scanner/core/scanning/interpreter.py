"""Interpretation of zmap log and result streams."""

import csv
import io
import logging
import os
import re
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from .data_structures import (
    ExecutionPlan, LogEntry, LogLevel, ProcessOutput, ResultRecord, ScanRun
)
from ..exceptions import (
    LogParseError, ResultParseError, OutputReadError
)

# zmap log lines look like "Jan 02 15:04:05.000 [INFO] zmap: started".
LOG_LINE_PATTERN = re.compile(
    r'^(?P<timestamp>[A-Z][a-z]{2} +\d{1,2} \d{2}:\d{2}:\d{2}\.\d{3}) '
    r'\[(?P<level>[A-Z]+)\] ?(?P<message>.*)$'
)
LOG_TIME_FORMAT = "%Y %b %d %H:%M:%S.%f"

# Files zmap creates inside --log-directory.
LOG_FILE_NAME_FORMAT = "zmap-%Y-%m-%dT%H%M%S%z.log"


def parse_log_line(line: str, year: Optional[int] = None) -> LogEntry:
    """Parse one zmap log line.

    Args:
        line: Log line without trailing newline
        year: Year to assume, zmap timestamps carry none; defaults to now

    Raises:
        LogParseError: If the line does not have the zmap log shape
    """
    match = LOG_LINE_PATTERN.match(line)
    if not match:
        raise LogParseError("malformed zmap log line", line=line)

    try:
        level = LogLevel(match.group('level'))
    except ValueError:
        raise LogParseError(f"unknown log level {match.group('level')}", line=line) from None

    if year is None:
        year = datetime.now().year
    timestamp_text = " ".join(match.group('timestamp').split())
    try:
        timestamp = datetime.strptime(f"{year} {timestamp_text}", LOG_TIME_FORMAT)
    except ValueError as e:
        raise LogParseError(f"malformed log timestamp: {e}", line=line) from e

    return LogEntry(timestamp=timestamp, level=level, message=match.group('message'))


def parse_logs(lines: Iterable[str], year: Optional[int] = None) -> Dict[LogLevel, List[LogEntry]]:
    """Group zmap log lines by severity, preserving emission order.

    Lines carrying none of the five severity markers are not log lines
    (status updates, packet dumps) and are skipped.
    """
    entries: Dict[LogLevel, List[LogEntry]] = {level: [] for level in LogLevel}
    for line in lines:
        line = line.rstrip("\r\n")
        if not any(level.marker in line for level in LogLevel):
            continue
        entry = parse_log_line(line, year)
        entries[entry.level].append(entry)
    return entries


def find_latest_log_file(directory: Union[str, Path]) -> Path:
    """Return the newest zmap log file inside ``directory``.

    Only file names matching ``zmap-YYYY-MM-DDTHHMMSS+ZZZZ.log`` take part in
    the selection; everything else is ignored.

    Raises:
        LogParseError: If no file name matches
        OutputReadError: If the directory cannot be listed
    """
    directory = Path(directory)
    try:
        with os.scandir(directory) as entries:
            candidates = list(entries)
    except OSError as e:
        raise OutputReadError(str(directory), str(e)) from e

    latest: Optional[Path] = None
    latest_time: Optional[datetime] = None
    for entry in candidates:
        if entry.is_dir():
            continue
        try:
            created = datetime.strptime(entry.name, LOG_FILE_NAME_FORMAT)
        except ValueError:
            continue
        if latest_time is None or created > latest_time:
            latest, latest_time = Path(entry.path), created

    if latest is None:
        raise LogParseError(f"no zmap log file found in {directory}", source=str(directory))
    return latest


def parse_single_field(lines: Iterable[str], field: str) -> List[ResultRecord]:
    """Wrap headerless single-column output lines into records."""
    return [{field: line} for line in lines]


def parse_csv(text: str) -> List[ResultRecord]:
    """Parse header-bearing CSV output into records keyed by header.

    Raises:
        ResultParseError: If a row is malformed or its width differs from the header
    """
    reader = csv.reader(io.StringIO(text, newline=''), strict=True)
    header: Optional[List[str]] = None
    records = []
    try:
        for row in reader:
            if not row:
                continue
            if header is None:
                header = row
                continue
            if len(row) != len(header):
                raise ResultParseError(
                    f"wrong number of fields: expected {len(header)}, got {len(row)}",
                    row_number=reader.line_num
                )
            records.append(dict(zip(header, row)))
    except csv.Error as e:
        raise ResultParseError(f"malformed csv row: {e}", row_number=reader.line_num) from e
    return records


def read_text(path: Union[str, Path]) -> str:
    """Read a zmap output or log file.

    Raises:
        OutputReadError: If the file cannot be read
    """
    try:
        with open(path, 'r', encoding='utf-8', errors='ignore', newline='') as f:
            return f.read()
    except OSError as e:
        raise OutputReadError(str(path), str(e)) from e


class OutputInterpreter:
    """Turns the raw output of a finished zmap process into a ScanRun."""

    def __init__(self, year: Optional[int] = None):
        """Initialize output interpreter.

        Args:
            year: Year assumed for log timestamps, defaults to the current year
        """
        self.year = year
        self.logger = logging.getLogger('zmap_scanner.interpreter')

    def interpret(self, plan: ExecutionPlan, output: ProcessOutput) -> ScanRun:
        logs = self.interpret_logs(plan, output)
        results = [] if plan.dry_run else self.interpret_results(plan, output)

        self.logger.debug(
            f"Interpreted {len(results)} results and "
            f"{sum(len(entries) for entries in logs.values())} log entries"
        )
        return ScanRun(
            arguments=plan.arguments,
            returncode=output.returncode,
            stdout=output.stdout,
            stderr=output.stderr,
            results=tuple(results),
            traces=tuple(logs[LogLevel.TRACE]),
            debugs=tuple(logs[LogLevel.DEBUG]),
            warnings=tuple(logs[LogLevel.WARN]),
            infos=tuple(logs[LogLevel.INFO]),
            fatals=tuple(logs[LogLevel.FATAL]),
        )

    def interpret_logs(self, plan: ExecutionPlan,
                       output: ProcessOutput) -> Dict[LogLevel, List[LogEntry]]:
        if plan.log_file is not None:
            text = read_text(plan.log_file)
        elif plan.log_directory is not None:
            latest = find_latest_log_file(plan.log_directory)
            self.logger.debug(f"Reading latest log file {latest}")
            text = read_text(latest)
        else:
            text = output.stderr
        return parse_logs(text.splitlines(), self.year)

    def interpret_results(self, plan: ExecutionPlan, output: ProcessOutput) -> List[ResultRecord]:
        if plan.output_file is not None:
            text = read_text(plan.output_file)
        else:
            text = output.stdout

        # zmap omits the header row when a single field is requested
        if len(plan.output_fields) == 1:
            return parse_single_field(text.splitlines(), plan.output_fields[0])
        return parse_csv(text)
