"""Additional options: config file, abort thresholds and sender threads."""

import re
from decimal import Decimal, InvalidOperation
from typing import List, Sequence, Union

import psutil

from .base import (
    Option, IntegerOption, ToggleOption, PathLike, check_existing_file
)
from ..core.exceptions import OptionValidationError
from ..core.scanning.configuration import ScanConfiguration


_DECIMAL_PATTERN = re.compile(r'^[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?\Z')


class ConfigFileOption(Option):
    """zmap's own configuration file (not this package's YAML config)."""

    flag = "--config"

    def __init__(self, path: PathLike):
        self.path = path

    def build(self, configuration: ScanConfiguration) -> List[str]:
        return [self.flag, check_existing_file(self.path, self.flag, "config file")]


class MinHitrateOption(Option):
    flag = "--min-hitrate"

    def __init__(self, min_hitrate: Union[str, int, float, Decimal]):
        self.min_hitrate = min_hitrate

    def build(self, configuration: ScanConfiguration) -> List[str]:
        value = str(self.min_hitrate)
        parsed = None
        if _DECIMAL_PATTERN.match(value):
            try:
                parsed = Decimal(value)
            except InvalidOperation:
                parsed = None
        if parsed is None or not parsed.is_finite():
            raise OptionValidationError("min hitrate is not a valid decimal number",
                                        flag=self.flag, value=self.min_hitrate)
        return [self.flag, value]


class CoresOption(Option):
    """CPU core indices to pin to, each below the logical CPU count."""

    flag = "--cores"

    def __init__(self, cores: Sequence[Union[int, str]]):
        if isinstance(cores, str):
            cores = cores.split(",")
        self.cores = [str(core) for core in cores]

    def build(self, configuration: ScanConfiguration) -> List[str]:
        cpu_count = psutil.cpu_count(logical=True) or 1
        available = {str(index) for index in range(cpu_count)}
        if not self.cores:
            raise OptionValidationError("at least one core index is required",
                                        flag=self.flag)
        for core in self.cores:
            if core not in available:
                raise OptionValidationError(
                    f"core index \"{core}\" is not available on system",
                    flag=self.flag, value=core
                )
        return [self.flag, ",".join(self.cores)]


def with_config_file(path: PathLike) -> ConfigFileOption:
    """Read zmap options from a zmap configuration file."""
    return ConfigFileOption(path)


def with_max_sendto_failures(max_failures: Union[int, str]) -> IntegerOption:
    """Maximum NIC sendto failures before the scan is aborted."""
    return IntegerOption("--max-sendto-failures", max_failures, "max sendto failures")


def with_min_hitrate(min_hitrate: Union[str, int, float, Decimal]) -> MinHitrateOption:
    """Minimum hitrate the scan can hit before it is aborted."""
    return MinHitrateOption(min_hitrate)


def with_sender_threads(sender_threads: Union[int, str]) -> IntegerOption:
    """Threads used to send packets."""
    return IntegerOption("--sender-threads", sender_threads, "sender threads")


def with_cores(cores: Sequence[Union[int, str]]) -> CoresOption:
    """Comma-separated list of cores to pin to."""
    return CoresOption(cores)


def with_ignore_invalid_hosts() -> ToggleOption:
    """Ignore invalid hosts in whitelist/blacklist files."""
    return ToggleOption("--ignore-invalid-hosts")
