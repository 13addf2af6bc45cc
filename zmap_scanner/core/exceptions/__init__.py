"""Exception classes for zmap_scanner."""

from .base_exceptions import ZMapScannerException, ZMapScannerError
from .config_exceptions import (
    ConfigurationError, ConfigValidationError, ConfigFileNotFoundError,
    ConfigFileFormatError
)
from .option_exceptions import (
    OptionValidationError, DuplicateOptionError, ConflictingOptionError
)
from .scan_exceptions import (
    ScanError, BinaryNotFoundError, InvalidBinaryError, ScanTimeoutError,
    ScanExecutionError, ScanInProgressError, CapabilityQueryError,
    OutputInterpretationError, LogParseError, ResultParseError, OutputReadError
)

__all__ = [
    'ZMapScannerException', 'ZMapScannerError',
    'ConfigurationError', 'ConfigValidationError', 'ConfigFileNotFoundError',
    'ConfigFileFormatError',
    'OptionValidationError', 'DuplicateOptionError', 'ConflictingOptionError',
    'ScanError', 'BinaryNotFoundError', 'InvalidBinaryError', 'ScanTimeoutError',
    'ScanExecutionError', 'ScanInProgressError', 'CapabilityQueryError',
    'OutputInterpretationError', 'LogParseError', 'ResultParseError',
    'OutputReadError'
]
