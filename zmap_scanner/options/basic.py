"""Basic arguments: targets, target port, output and host list files."""

import ipaddress
from typing import List, Union

from .base import (
    Option, PathLike, parse_port, check_writable_path, check_existing_file
)
from ..core.exceptions import OptionValidationError
from ..core.scanning.configuration import ScanConfiguration


STDOUT = "-"


class CustomArgumentsOption(Option):
    """Raw tokens appended verbatim, without any check.

    Escape hatch for zmap flags this package does not model yet.
    """

    def __init__(self, *args: str):
        self.args = [str(arg) for arg in args]

    def apply(self, configuration: ScanConfiguration) -> None:
        configuration.arguments.append(*self.args)

    def build(self, configuration: ScanConfiguration) -> List[str]:
        return list(self.args)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(args={self.args!r})"


class TargetsOption(Option):
    """Positional IPv4 addresses and IPv4 CIDR blocks."""

    def __init__(self, *targets: str):
        self.targets = list(targets)

    def build(self, configuration: ScanConfiguration) -> List[str]:
        if not self.targets:
            raise OptionValidationError("at least one target is required")
        return [self._normalize(target) for target in self.targets]

    @staticmethod
    def _normalize(target: str) -> str:
        target = str(target)
        try:
            if "/" in target:
                return str(ipaddress.IPv4Network(target, strict=False))
            return str(ipaddress.IPv4Address(target))
        except ValueError:
            raise OptionValidationError(
                f"given value of {target} is not a valid ipv4 address "
                f"or ipv4 cidr notation",
                value=target
            ) from None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(targets={self.targets!r})"


class TargetPortOption(Option):
    flag = "--target-port"

    def __init__(self, port: Union[int, str]):
        self.port = port

    def build(self, configuration: ScanConfiguration) -> List[str]:
        port = parse_port(self.port, self.flag, "target port")
        return [self.flag, str(port)]


class OutputFileOption(Option):
    """Result destination; ``-`` keeps results on standard output."""

    flag = "--output-file"

    def __init__(self, path: PathLike):
        self.path = path

    def build(self, configuration: ScanConfiguration) -> List[str]:
        if self.path == STDOUT:
            return [self.flag, STDOUT]
        return [self.flag, check_writable_path(self.path, self.flag, "output file")]


class ExistingFileOption(Option):
    """Flag whose value must name an existing regular file."""

    def __init__(self, flag: str, path: PathLike, label: str):
        self.flag = flag
        self.path = path
        self.label = label

    def build(self, configuration: ScanConfiguration) -> List[str]:
        return [self.flag, check_existing_file(self.path, self.flag, self.label)]


def with_custom_arguments(*args: str) -> CustomArgumentsOption:
    """Append raw arguments; use only for flags not covered by other options."""
    return CustomArgumentsOption(*args)


def with_targets(*targets: str) -> TargetsOption:
    """Scan the given IPv4 addresses or IPv4 CIDR blocks."""
    return TargetsOption(*targets)


def with_target_port(port: Union[int, str]) -> TargetPortOption:
    """TCP/UDP port to scan; zmap scans a single port per run."""
    return TargetPortOption(port)


def with_output_file(path: PathLike) -> OutputFileOption:
    """Write results to ``path`` instead of standard output."""
    return OutputFileOption(path)


def with_blacklist_file(path: PathLike) -> ExistingFileOption:
    """Exclude the subnets listed in ``path``."""
    return ExistingFileOption("--blacklist-file", path, "blacklist file")


def with_whitelist_file(path: PathLike) -> ExistingFileOption:
    """Limit the scan to the subnets listed in ``path``."""
    return ExistingFileOption("--whitelist-file", path, "whitelist file")
