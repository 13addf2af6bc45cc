"""Base classes and shared validation helpers for zmap options."""

import os
import re
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Union

from ..core.exceptions import OptionValidationError
from ..core.scanning.configuration import ScanConfiguration


PathLike = Union[str, 'os.PathLike[str]']

MIN_PORT = 0
MAX_PORT = 65535

_INTEGER_PATTERN = re.compile(r'^[+-]?[0-9]+\Z')


def parse_integer(value: Any, flag: str, label: str) -> int:
    """Parse an integer the way zmap reads numeric flags.

    Accepts ints and strings made of an optional sign and ASCII digits.

    Raises:
        OptionValidationError: If the value is not an integer
    """
    if isinstance(value, bool):
        raise OptionValidationError(f"given {label} value is not a numeric value",
                                    flag=flag, value=value)
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER_PATTERN.match(value):
        return int(value)
    raise OptionValidationError(f"given {label} value is not a numeric value",
                                flag=flag, value=value)


def parse_port(value: Any, flag: str, label: str) -> int:
    """Parse a port number in [0, 65535]."""
    port = parse_integer(value, flag, label)
    if not MIN_PORT <= port <= MAX_PORT:
        raise OptionValidationError(
            f"{label} must be between {MIN_PORT} and {MAX_PORT}",
            flag=flag, value=value
        )
    return port


def check_writable_path(path: PathLike, flag: str, label: str) -> str:
    """Check that ``path`` can be created or overwritten as a file.

    The path must not be a directory and, when missing, its parent directory
    must exist. Best effort only: the filesystem may change before zmap runs.
    """
    path = os.fspath(path)
    if os.path.isdir(path):
        raise OptionValidationError(f"given {label} path is a directory",
                                    flag=flag, value=path)
    if not os.path.exists(path):
        parent = os.path.dirname(path) or os.curdir
        if not os.path.isdir(parent):
            raise OptionValidationError(
                f"given {label}'s parent directory does not exist",
                flag=flag, value=path
            )
    return path


def check_existing_file(path: PathLike, flag: str, label: str) -> str:
    """Check that ``path`` exists and is not a directory."""
    path = os.fspath(path)
    if not os.path.exists(path):
        raise OptionValidationError(f"{label} does not exist", flag=flag, value=path)
    if os.path.isdir(path):
        raise OptionValidationError(f"{label} path is a directory", flag=flag, value=path)
    return path


class Option(ABC):
    """One validate-and-apply unit for a zmap command line flag.

    ``apply`` runs the shared duplicate guard, then ``build`` validates the
    value and returns the tokens to append. Tokens are appended only after
    validation succeeded, so a rejected option never changes the arguments.
    """

    flag: Optional[str] = None

    def apply(self, configuration: ScanConfiguration) -> None:
        if self.flag is not None:
            configuration.arguments.ensure_absent(self.flag)
        tokens = self.build(configuration)
        if self.flag is not None:
            configuration.arguments.append_flag(*tokens)
        else:
            configuration.arguments.append(*tokens)

    @abstractmethod
    def build(self, configuration: ScanConfiguration) -> List[str]:
        """Validate the option and return the tokens to append.

        Raises:
            OptionValidationError: If the value is rejected
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(flag={self.flag!r})"


class ToggleOption(Option):
    """Flag without a value."""

    def __init__(self, flag: str):
        self.flag = flag

    def build(self, configuration: ScanConfiguration) -> List[str]:
        return [self.flag]


class TextOption(Option):
    """Flag with a free-text value that zmap interprets itself."""

    def __init__(self, flag: str, value: str):
        self.flag = flag
        self.value = value

    def build(self, configuration: ScanConfiguration) -> List[str]:
        return [self.flag, str(self.value)]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(flag={self.flag!r}, value={self.value!r})"


class IntegerOption(Option):
    """Flag with an integer value."""

    def __init__(self, flag: str, value: Union[int, str], label: str):
        self.flag = flag
        self.value = value
        self.label = label

    def build(self, configuration: ScanConfiguration) -> List[str]:
        parse_integer(self.value, self.flag, self.label)
        return [self.flag, str(self.value)]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(flag={self.flag!r}, value={self.value!r})"
