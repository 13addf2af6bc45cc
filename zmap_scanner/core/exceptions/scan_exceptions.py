"""Scan-related exception classes."""

from typing import Optional, List
from .base_exceptions import ZMapScannerError


class ScanError(ZMapScannerError):
    """Base class for scan-related errors."""

    def __init__(self, message: str, command: Optional[List[str]] = None, **kwargs):
        """Initialize scan error.

        Args:
            message: Error message
            command: Command line that was being executed
            **kwargs: Additional arguments for base class
        """
        details = dict(kwargs.get('details') or {})
        if command:
            details['command'] = ' '.join(command)

        kwargs['details'] = details
        kwargs['error_code'] = kwargs.get('error_code', 'SCAN_ERROR')

        super().__init__(message, **kwargs)

        self.command = command


class BinaryNotFoundError(ScanError):
    """Exception raised when the zmap binary cannot be located."""

    def __init__(self, binary_path: Optional[str] = None, **kwargs):
        """Initialize binary not found error.

        Args:
            binary_path: Explicitly supplied path, None when searched on PATH
            **kwargs: Additional arguments for base class
        """
        if binary_path:
            message = f"given binary path does not exist: {binary_path}"
        else:
            message = "zmap binary was not found"

        details = dict(kwargs.get('details') or {})
        if binary_path:
            details['binary_path'] = binary_path

        kwargs['details'] = details
        kwargs['error_code'] = 'BINARY_NOT_FOUND'
        kwargs['suggestion'] = 'Install zmap or pass an explicit binary path'

        super().__init__(message, **kwargs)

        self.binary_path = binary_path


class InvalidBinaryError(ScanError):
    """Exception raised when a binary does not identify itself as zmap."""

    def __init__(self, binary_path: str, version_output: str = "", **kwargs):
        message = f"given binary is not a real zmap binary: {binary_path}"

        details = dict(kwargs.get('details') or {})
        details.update({
            'binary_path': binary_path,
            'version_output': version_output,
        })

        kwargs['details'] = details
        kwargs['error_code'] = 'INVALID_BINARY'
        kwargs['suggestion'] = 'Check that the path points to the zmap executable'

        super().__init__(message, **kwargs)

        self.binary_path = binary_path
        self.version_output = version_output


class ScanTimeoutError(ScanError):
    """Exception raised when the scan context finishes before zmap exits.

    No partial results accompany this error.
    """

    def __init__(self, timeout_seconds: Optional[float] = None, **kwargs):
        """Initialize scan timeout error.

        Args:
            timeout_seconds: Configured timeout, None for an explicit cancel
            **kwargs: Additional arguments for base class
        """
        if timeout_seconds is not None:
            message = f"zmap scan timed out after {timeout_seconds} seconds"
        else:
            message = "zmap scan timed out"

        details = dict(kwargs.get('details') or {})
        details['timeout_seconds'] = timeout_seconds

        kwargs['details'] = details
        kwargs['error_code'] = 'SCAN_TIMEOUT'
        kwargs['suggestion'] = 'Increase the scan timeout or reduce the scan scope'

        super().__init__(message, **kwargs)

        self.timeout_seconds = timeout_seconds


class ScanExecutionError(ScanError):
    """Exception raised when the zmap process cannot be started or awaited."""

    def __init__(self, reason: str, **kwargs):
        message = f"zmap execution failed: {reason}"

        kwargs['error_code'] = 'SCAN_EXECUTION_ERROR'
        kwargs['suggestion'] = kwargs.get(
            'suggestion', 'Check zmap installation and process permissions')

        super().__init__(message, **kwargs)

        self.reason = reason


class ScanInProgressError(ScanError):
    """Exception raised when an async run is started while one is pending."""

    def __init__(self, **kwargs):
        kwargs['error_code'] = 'SCAN_IN_PROGRESS'
        kwargs['suggestion'] = 'Call wait() before starting another run'

        super().__init__("an asynchronous scan is already running", **kwargs)


class CapabilityQueryError(ScanError):
    """Exception raised when a zmap metadata query fails or is unparseable."""

    def __init__(self, query: str, reason: str, exit_code: Optional[int] = None,
                 stderr: Optional[str] = None, **kwargs):
        """Initialize capability query error.

        Args:
            query: Metadata flag that was queried
            reason: Failure description
            exit_code: Exit code returned by zmap, if it ran
            stderr: Standard error from zmap, verbatim
            **kwargs: Additional arguments for base class
        """
        message = f"zmap {query} query failed: {reason}"

        details = dict(kwargs.get('details') or {})
        details.update({
            'query': query,
            'exit_code': exit_code,
            'stderr': stderr,
        })

        kwargs['details'] = details
        kwargs['error_code'] = 'CAPABILITY_QUERY_ERROR'

        super().__init__(message, **kwargs)

        self.query = query
        self.exit_code = exit_code
        self.stderr = stderr


class OutputInterpretationError(ScanError):
    """Base class for errors raised while interpreting zmap output."""

    def __init__(self, message: str, source: Optional[str] = None, **kwargs):
        details = dict(kwargs.get('details') or {})
        if source:
            details['source'] = source

        kwargs['details'] = details
        kwargs['error_code'] = kwargs.get('error_code', 'OUTPUT_INTERPRETATION_ERROR')

        super().__init__(message, **kwargs)

        self.source = source


class LogParseError(OutputInterpretationError):
    """Exception raised for a malformed zmap log line or log directory."""

    def __init__(self, message: str, line: Optional[str] = None, **kwargs):
        details = dict(kwargs.get('details') or {})
        if line is not None:
            details['line'] = line

        kwargs['details'] = details
        kwargs['error_code'] = 'LOG_PARSE_ERROR'

        super().__init__(message, **kwargs)

        self.line = line


class ResultParseError(OutputInterpretationError):
    """Exception raised for malformed delimited result rows."""

    def __init__(self, message: str, row_number: Optional[int] = None, **kwargs):
        details = dict(kwargs.get('details') or {})
        if row_number is not None:
            details['row_number'] = row_number

        kwargs['details'] = details
        kwargs['error_code'] = 'RESULT_PARSE_ERROR'

        super().__init__(message, **kwargs)

        self.row_number = row_number


class OutputReadError(OutputInterpretationError):
    """Exception raised when an output or log file cannot be read."""

    def __init__(self, file_path: str, system_error: str, **kwargs):
        message = f"cannot read {file_path}: {system_error}"

        kwargs['error_code'] = 'OUTPUT_READ_ERROR'
        kwargs['suggestion'] = 'Check that the file exists and is readable'

        super().__init__(message, source=file_path, **kwargs)

        self.file_path = file_path
        self.system_error = system_error
