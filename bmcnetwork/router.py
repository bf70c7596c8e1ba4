"""IPv6 router advertisement information from the kernel's route prefix table."""

from __future__ import annotations

import ipaddress
import os
import re
from dataclasses import dataclass, field
from typing import Iterable

ROUTE_PREFIX_INFO = "/proc/net/ipv6_route_prefix_info"
MAC_LEN = 6

_HEX_PREFIX = re.compile(r"\s*([+-]?)(?:0[xX])?([0-9a-fA-F]+)")
_DEC_PREFIX = re.compile(r"\s*(\+?)([0-9]+)")


@dataclass
class RouterInfo:
    """One dynamic IPv6 router: gateway, prefix, prefix length and gateway MAC."""

    gateway6: ipaddress.IPv6Address = field(default_factory=lambda: ipaddress.IPv6Address(0))
    prefix: ipaddress.IPv6Address = field(default_factory=lambda: ipaddress.IPv6Address(0))
    prefix_len: int = 0
    gateway6_mac: bytes = bytes(MAC_LEN)


def _leading_number(text: str, pattern: re.Pattern[str], base: int) -> int:
    match = pattern.match(text)
    if match is None:
        raise ValueError(f"Invalid number: {text!r}")
    number = int(match.group(2), base)
    return -number if match.group(1) == "-" else number


def parse_mac(text: str) -> bytes:
    """Parse colon separated hex octets; missing trailing octets are zero."""
    parts = text.split(":")
    if len(parts) > MAC_LEN:
        raise ValueError(f"Too many octets in MAC address: {text!r}")
    octets = [_leading_number(part, _HEX_PREFIX, 16) & 0xFF for part in parts]
    return bytes(octets) + bytes(MAC_LEN - len(octets))


def _parse_ipv6(text: str) -> ipaddress.IPv6Address:
    if "%" in text:
        return ipaddress.IPv6Address(0)
    try:
        return ipaddress.IPv6Address(text)
    except ValueError:
        return ipaddress.IPv6Address(0)


def parse_route_prefix_info(lines: Iterable[str], iface: str) -> list[RouterInfo]:
    """Collect the entries of ``iface`` from lines of the route prefix table."""
    result = []
    for raw in lines:
        line = raw.rstrip("\n")
        if not line:
            continue
        *data, name = line.split(" ")
        if name != iface:
            continue
        if len(data) < 4:
            raise ValueError(f"Malformed route prefix line: {line!r}")
        gateway, prefix, prefix_len, mac = data[:4]
        result.append(
            RouterInfo(
                gateway6=_parse_ipv6(gateway),
                prefix=_parse_ipv6(prefix),
                prefix_len=_leading_number(prefix_len, _DEC_PREFIX, 10) & 0xFF,
                gateway6_mac=parse_mac(mac),
            )
        )
    return result


def read_dynamic_router_info(
    iface: str, path: str | os.PathLike = ROUTE_PREFIX_INFO
) -> list[RouterInfo]:
    """Read the router entries for ``iface``; an unreadable file yields none."""
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            return parse_route_prefix_info(handle, iface)
    except OSError:
        return []