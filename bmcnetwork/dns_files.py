"""Nameserver files, reverse DNS names and hostname rules for dynamic DNS."""

from __future__ import annotations

import ipaddress
import os

RESOLV_CONF = "/etc/resolv.conf"
GENERATED_HEADER = "### Generated by bmcnetwork ###\n"
DEFAULT_HOSTNAME_PREFIX = "AMIOT-"
MAX_HOSTNAME_LEN = 63
INVALID_HOSTNAME_CHARS = "{}()<>&*`|=?;[]$#~!\"%/\\:+,'."

_DNS_KEY = "DNS="


class InternalFailureError(RuntimeError):
    """A file needed for the update could not be opened."""


def update_dns_entries(
    in_file: str | os.PathLike, out_file: str | os.PathLike
) -> None:
    """Write a ``nameserver`` line to ``out_file`` for every ``DNS=`` entry of ``in_file``."""
    try:
        out = open(out_file, "w", encoding="utf-8")
    except OSError as e:
        raise InternalFailureError(f"Unable to open output file {out_file}") from e
    with out:
        try:
            source = open(in_file, encoding="utf-8", errors="surrogateescape")
        except OSError as e:
            raise InternalFailureError(
                f"Unable to open the input file {in_file}"
            ) from e
        with source:
            out.write(GENERATED_HEADER)
            for raw in source:
                line = raw[:-1] if raw.endswith("\n") else raw
                index = line.find(_DNS_KEY)
                if index >= 0:
                    dns = line[index + len(_DNS_KEY):]
                    out.write(f"nameserver {dns}\n")


def process_dns_entries(
    in_file: str | os.PathLike, out_file: str | os.PathLike = RESOLV_CONF
) -> None:
    """Update the resolver file from the DNS entries supplied by DHCP."""
    update_dns_entries(in_file, out_file)


def reverse_ipv4(address: str) -> str:
    """The ``in-addr.arpa`` name of an IPv4 address; raise ValueError if invalid."""
    octets = ipaddress.IPv4Address(address).packed
    return ".".join(str(octet) for octet in reversed(octets)) + ".in-addr.arpa"


def reverse_ipv6(address: str) -> str:
    """The ``ip6.arpa`` name of an IPv6 address; raise ValueError if invalid."""
    octets = ipaddress.IPv6Address(address).packed
    nibbles = "".join(
        f"{octet & 0xF:x}.{(octet >> 4) & 0xF:x}." for octet in reversed(octets)
    )
    return nibbles + "ip6.arpa"


def validate_hostname(name: str) -> str:
    """Return ``name`` if it may be set as hostname, else raise ValueError."""
    if len(name.encode("utf-8")) > MAX_HOSTNAME_LEN:
        raise ValueError(
            "Unable to set hostname since hostname size isn't in range ( 0 - 64 )"
        )
    # Double hyphens are accepted.
    if any(c in INVALID_HOSTNAME_CHARS for c in name):
        raise ValueError(
            "Unable to set hostname since hostname contains invalid character"
        )
    return name


def default_hostname(mac: str) -> str:
    """The automatic hostname built from the first line of a MAC address text."""
    first_line = mac.partition("\n")[0]
    return DEFAULT_HOSTNAME_PREFIX + first_line.replace(":", "")