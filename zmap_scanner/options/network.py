"""Network options: source addressing, MAC addresses and interface."""

import ipaddress
import string
from typing import List, Union

import psutil

from .base import Option, ToggleOption, parse_port
from ..core.exceptions import OptionValidationError
from ..core.scanning.configuration import ScanConfiguration


# Octet counts of EUI-48, EUI-64 and 20-octet IP over InfiniBand addresses.
_MAC_OCTET_COUNTS = (6, 8, 20)


def is_valid_mac(value: str) -> bool:
    """Check a hardware address in colon, hyphen or dotted notation.

    Accepts ``00:00:5e:00:53:01``, ``00-00-5e-00-53-01`` and
    ``0000.5e00.5301`` forms of 6, 8 or 20 octets.
    """
    if len(value) < 14:
        return False

    if value[2] in ":-":
        groups = value.split(value[2])
        group_size = 2
        octets_per_group = 1
    elif value[4] == ".":
        groups = value.split(".")
        group_size = 4
        octets_per_group = 2
    else:
        return False

    if len(groups) * octets_per_group not in _MAC_OCTET_COUNTS:
        return False
    return all(
        len(group) == group_size and all(c in string.hexdigits for c in group)
        for group in groups
    )


class SourcePortOption(Option):
    """Single source port or an ascending ``low-high`` range."""

    flag = "--source-port"

    def __init__(self, source_port: Union[int, str]):
        self.source_port = source_port

    def build(self, configuration: ScanConfiguration) -> List[str]:
        value = str(self.source_port)
        if "-" not in value:
            port = parse_port(self.source_port, self.flag, "given port number")
            return [self.flag, str(port)]

        parts = value.split("-")
        if len(parts) != 2:
            raise OptionValidationError("wrong port range definition",
                                        flag=self.flag, value=value)
        lower = parse_port(parts[0], self.flag,
                           "port number of lower part in range definition")
        upper = parse_port(parts[1], self.flag,
                           "port number of greater part in range definition")
        if lower == upper:
            raise OptionValidationError(
                "port number of lower and greater part in range definition cannot be equal",
                flag=self.flag, value=value
            )
        if lower > upper:
            raise OptionValidationError(
                "port number of lower part in range definition cannot be greater "
                "than greater part",
                flag=self.flag, value=value
            )
        return [self.flag, f"{lower}-{upper}"]


class SourceIPOption(Option):
    """Single IPv4 source address or an ascending ``low-high`` range."""

    flag = "--source-ip"

    def __init__(self, source_ip: str):
        self.source_ip = source_ip

    def _parse(self, value: str, label: str) -> ipaddress.IPv4Address:
        try:
            return ipaddress.IPv4Address(value)
        except ValueError:
            raise OptionValidationError(f"{label} is not a valid ipv4 address",
                                        flag=self.flag, value=self.source_ip) from None

    def build(self, configuration: ScanConfiguration) -> List[str]:
        value = str(self.source_ip)
        if "-" not in value:
            return [self.flag, str(self._parse(value, "given value"))]

        parts = value.split("-")
        if len(parts) != 2:
            raise OptionValidationError("wrong ip range definition",
                                        flag=self.flag, value=value)
        lower = self._parse(parts[0], "lower part of ip in range definition")
        upper = self._parse(parts[1], "greater part of ip in range definition")
        if lower == upper:
            raise OptionValidationError(
                "lower part and greater part cannot be equal in range definition",
                flag=self.flag, value=value
            )
        if lower > upper:
            raise OptionValidationError(
                "lower part cannot be greater than greater part in range definition",
                flag=self.flag, value=value
            )
        return [self.flag, f"{lower}-{upper}"]


class MACAddressOption(Option):
    def __init__(self, flag: str, mac: str):
        self.flag = flag
        self.mac = mac

    def build(self, configuration: ScanConfiguration) -> List[str]:
        if not is_valid_mac(str(self.mac)):
            raise OptionValidationError("given value is not a valid mac address",
                                        flag=self.flag, value=self.mac)
        return [self.flag, str(self.mac)]


class InterfaceOption(Option):
    """Network interface, checked against the interfaces of this host."""

    flag = "--interface"

    def __init__(self, interface: str):
        self.interface = interface

    def build(self, configuration: ScanConfiguration) -> List[str]:
        try:
            available = psutil.net_if_addrs()
        except OSError as e:
            raise OptionValidationError(f"cannot get available interfaces: {e}",
                                        flag=self.flag, value=self.interface) from e

        if self.interface not in available:
            raise OptionValidationError(
                "given interface name is not available on the system",
                flag=self.flag, value=self.interface,
                suggestion=f"Available interfaces: {', '.join(sorted(available))}"
            )
        return [self.flag, self.interface]


def with_source_port(source_port: Union[int, str]) -> SourcePortOption:
    """Source port (``50000``) or port range (``50000-50010``) for probes."""
    return SourcePortOption(source_port)


def with_source_ip(source_ip: str) -> SourceIPOption:
    """Source address (``10.0.0.1``) or range (``10.0.0.1-10.0.0.5``) for probes."""
    return SourceIPOption(source_ip)


def with_gateway_mac(mac: str) -> MACAddressOption:
    return MACAddressOption("--gateway-mac", mac)


def with_source_mac(mac: str) -> MACAddressOption:
    return MACAddressOption("--source-mac", mac)


def with_interface(interface: str) -> InterfaceOption:
    return InterfaceOption(interface)


def with_vpn() -> ToggleOption:
    """Send IP packets instead of Ethernet frames (for VPNs)."""
    return ToggleOption("--vpn")
