"""Logging and metadata options."""

import os
from typing import List, Union

from .base import Option, ToggleOption, TextOption, PathLike, check_writable_path
from ..core.exceptions import OptionValidationError, ConflictingOptionError
from ..core.scanning.configuration import ScanConfiguration
from ..core.scanning.data_structures import VerbosityLevel


VERBOSITY_FLAG = "--verbosity"
LOG_FILE_FLAG = "--log-file"
LOG_DIRECTORY_FLAG = "--log-directory"


class VerbosityOption(Option):
    flag = VERBOSITY_FLAG

    def __init__(self, level: Union[VerbosityLevel, str, int]):
        self.level = level

    def build(self, configuration: ScanConfiguration) -> List[str]:
        level = self.level
        if isinstance(level, int) and not isinstance(level, bool):
            level = str(level)
        try:
            level = VerbosityLevel(level)
        except ValueError:
            raise OptionValidationError(
                "given verbosity level is not in available verbosity levels",
                flag=self.flag, value=self.level
            ) from None
        return [self.flag, level.value]


class LogFileOption(Option):
    """Log destination file; excludes ``--log-directory``."""

    flag = LOG_FILE_FLAG

    def __init__(self, path: PathLike):
        self.path = path

    def build(self, configuration: ScanConfiguration) -> List[str]:
        if configuration.arguments.has(LOG_DIRECTORY_FLAG):
            raise ConflictingOptionError(self.flag, LOG_DIRECTORY_FLAG)
        return [self.flag, check_writable_path(self.path, self.flag, "log file")]


class LogDirectoryOption(Option):
    """Directory receiving a timestamped log file; excludes ``--log-file``."""

    flag = LOG_DIRECTORY_FLAG

    def __init__(self, path: PathLike):
        self.path = path

    def build(self, configuration: ScanConfiguration) -> List[str]:
        if configuration.arguments.has(LOG_FILE_FLAG):
            raise ConflictingOptionError(self.flag, LOG_FILE_FLAG)

        path = os.fspath(self.path)
        if not os.path.exists(path):
            raise OptionValidationError("given log-directory path does not exist",
                                        flag=self.flag, value=path)
        if not os.path.isdir(path):
            raise OptionValidationError("given log-directory path is not a directory",
                                        flag=self.flag, value=path)
        return [self.flag, path]


class WritableFileOption(Option):
    """Flag whose value is a file zmap creates or overwrites."""

    def __init__(self, flag: str, path: PathLike, label: str):
        self.flag = flag
        self.path = path
        self.label = label

    def build(self, configuration: ScanConfiguration) -> List[str]:
        return [self.flag, check_writable_path(self.path, self.flag, self.label)]


def with_verbosity(level: Union[VerbosityLevel, str, int]) -> VerbosityOption:
    """Level of log detail (1-5)."""
    return VerbosityOption(level)


def with_log_file(path: PathLike) -> LogFileOption:
    """Write log entries to ``path``."""
    return LogFileOption(path)


def with_log_directory(path: PathLike) -> LogDirectoryOption:
    """Write log entries to a timestamped file inside ``path``."""
    return LogDirectoryOption(path)


def with_metadata_file(path: PathLike) -> WritableFileOption:
    """Output file for scan metadata (JSON)."""
    return WritableFileOption("--metadata-file", path, "metadata file")


def with_status_updates_file(path: PathLike) -> WritableFileOption:
    """Write scan progress updates to a CSV file."""
    return WritableFileOption("--status-updates-file", path, "status updates file")


def with_quiet() -> ToggleOption:
    """Do not print status updates."""
    return ToggleOption("--quiet")


def with_disable_syslog() -> ToggleOption:
    return ToggleOption("--disable-syslog")


def with_notes(notes: str) -> TextOption:
    """Inject user-specified notes into scan metadata."""
    return TextOption("--notes", notes)


def with_user_metadata(user_metadata: str) -> TextOption:
    """Inject user-specified JSON metadata into scan metadata."""
    return TextOption("--user-metadata", user_metadata)
