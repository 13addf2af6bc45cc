"""Scan options: rate limits, scan bounds, sharding and dry runs."""

from typing import List, Union

from .base import Option, IntegerOption, ToggleOption, parse_integer
from ..core.exceptions import OptionValidationError
from ..core.scanning.configuration import ScanConfiguration
from ..core.scanning.data_structures import BandwidthUnit


DRY_RUN_FLAG = "--dryrun"

Number = Union[int, str]


class BandwidthOption(Option):
    """Send rate in bits per second with an optional K/M/G suffix."""

    flag = "--bandwidth"

    def __init__(self, bandwidth: Number, unit: Union[BandwidthUnit, str] = BandwidthUnit.BPS):
        self.bandwidth = bandwidth
        self.unit = unit

    def build(self, configuration: ScanConfiguration) -> List[str]:
        parse_integer(self.bandwidth, self.flag, "bandwidth")
        try:
            unit = BandwidthUnit(self.unit)
        except ValueError:
            raise OptionValidationError(
                "given unit is unsupported. Supported units: (B,K,M,G)",
                flag=self.flag, value=self.unit
            ) from None

        value = str(self.bandwidth)
        if unit is not BandwidthUnit.BPS:
            value += unit.value
        return [self.flag, value]


class MaxTargetsOption(Option):
    """Cap on probed targets, either absolute or a percentage of the space."""

    flag = "--max-targets"

    def __init__(self, max_targets: Number, is_percentage: bool = False):
        self.max_targets = max_targets
        self.is_percentage = is_percentage

    def build(self, configuration: ScanConfiguration) -> List[str]:
        parse_integer(self.max_targets, self.flag, "max targets")
        value = str(self.max_targets)
        if self.is_percentage:
            value += "%"
        return [self.flag, value]


def with_rate(rate: Number) -> IntegerOption:
    """Send rate in packets per second."""
    return IntegerOption("--rate", rate, "rate")


def with_bandwidth(bandwidth: Number,
                   unit: Union[BandwidthUnit, str] = BandwidthUnit.BPS) -> BandwidthOption:
    """Send rate in bits per second; overrides ``--rate``."""
    return BandwidthOption(bandwidth, unit)


def with_max_targets(max_targets: Number, is_percentage: bool = False) -> MaxTargetsOption:
    return MaxTargetsOption(max_targets, is_percentage)


def with_max_runtime(max_runtime: Number) -> IntegerOption:
    """Stop sending after this many seconds."""
    return IntegerOption("--max-runtime", max_runtime, "max runtime")


def with_max_results(max_results: Number) -> IntegerOption:
    """Stop after this many results."""
    return IntegerOption("--max-results", max_results, "max results")


def with_probes(probes: Number) -> IntegerOption:
    """Number of probes sent to each target."""
    return IntegerOption("--probes", probes, "number of probes")


def with_cooldown_time(cooldown: Number) -> IntegerOption:
    """Seconds to keep receiving after the last probe was sent."""
    return IntegerOption("--cooldown-time", cooldown, "cooldown")


def with_seed(seed: Number) -> IntegerOption:
    """Seed used to select the address permutation."""
    return IntegerOption("--seed", seed, "seed")


def with_retries(retries: Number) -> IntegerOption:
    """Max number of times to try to send a packet if send fails."""
    return IntegerOption("--retries", retries, "max retries")


def with_dry_run() -> ToggleOption:
    """Print packets instead of sending them."""
    return ToggleOption(DRY_RUN_FLAG)


def with_shards(shards: Number) -> IntegerOption:
    """Total number of shards."""
    return IntegerOption("--shards", shards, "shards")


def with_shard(shard_id: Number) -> IntegerOption:
    """Zero-based index of the shard this scan covers."""
    return IntegerOption("--shard", shard_id, "shard id")
