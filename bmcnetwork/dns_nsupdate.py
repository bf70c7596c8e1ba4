"""nsupdate scripts that register and remove a host's DNS records."""

from __future__ import annotations

import ipaddress
import os
from pathlib import Path
from typing import Iterable, Sequence

from bmcnetwork.dns_files import reverse_ipv4, reverse_ipv6

NSUPDATE_TMP_FILE = "/etc/dns.d/nsupdate_tmp"
TTL = "86400"
ADD = "add"
DELETE = "del"


def _plain(address: str) -> str:
    return address.split("/", 1)[0]


def _is_ipv6(address: str) -> bool:
    return ":" in address


def _record_type(address: str) -> str:
    return "AAAA" if _is_ipv6(address) else "A"


def _reverse(address: str) -> str:
    return reverse_ipv6(address) if _is_ipv6(address) else reverse_ipv4(address)


def is_link_local(address: str) -> bool:
    """True for an IPv6 link-local address; a prefix length is ignored."""
    ip = _plain(address)
    if not _is_ipv6(ip):
        return False
    return ipaddress.IPv6Address(ip).is_link_local


def register_script(server: str, hostname: str, domain: str, ip: str) -> str:
    """The nsupdate input that adds the forward and reverse records of ``ip``."""
    fqdn = f"{hostname}.{domain}"
    return (
        f"server {server}\n"
        f"update add {fqdn} {TTL} {_record_type(ip)} {ip}\n"
        "\n"
        f"update add {_reverse(ip)} {TTL} PTR {fqdn}\n"
        "\n"
        "send\n"
    )


def deregister_script(server: str, hostname: str, domain: str, ip: str) -> str:
    """The nsupdate input that deletes the forward and reverse records of ``ip``."""
    fqdn = f"{hostname}.{domain}"
    return (
        f"server {server}\n"
        f"update delete {fqdn} {_record_type(ip)}\n"
        "\n"
        f"update delete {_reverse(ip)} {TTL} PTR {fqdn}\n"
        "\n"
        "send\n"
    )


def _tmp_path(prefix: str | os.PathLike, action: str, iface: str, index: int) -> Path:
    return Path(f"{os.fspath(prefix)}-{action}-{iface}-{index}")


def clear_tmp_files(prefix: str | os.PathLike, action: str, iface: str) -> int:
    """Remove the numbered script files from 1 up to the first missing one."""
    removed = 0
    index = 1
    while True:
        path = _tmp_path(prefix, action, iface, index)
        if not path.exists():
            return removed
        try:
            path.unlink()
            removed += 1
        except FileNotFoundError:
            pass
        index += 1


def _write_files(
    prefix: str | os.PathLike,
    action: str,
    iface: str,
    hostname: str,
    domains: Iterable[str],
    servers: Sequence[str],
    ips: Sequence[str],
    build,
) -> list[Path]:
    written = []
    index = 1
    for domain in domains:
        for server in servers:
            for ip in ips:
                path = _tmp_path(prefix, action, iface, index)
                path.write_text(build(server, hostname, domain, ip), encoding="utf-8")
                written.append(path)
                index += 1
    return written


def write_register_files(
    prefix: str | os.PathLike,
    iface: str,
    hostname: str,
    domains: Iterable[str],
    servers: Sequence[str],
    ips: Iterable[str],
) -> list[Path]:
    """Write one add script per domain, server and address; link-local IPv6 is skipped."""
    plain_ips = [_plain(ip) for ip in ips if not is_link_local(ip)]
    return _write_files(
        prefix, ADD, iface, hostname, domains, list(servers), plain_ips, register_script
    )


def write_deregister_files(
    prefix: str | os.PathLike,
    iface: str,
    hostname: str,
    domains: Iterable[str],
    servers: Sequence[str],
    ips: Iterable[str],
) -> list[Path]:
    """Write one delete script per domain, server and address."""
    return _write_files(
        prefix,
        DELETE,
        iface,
        hostname,
        domains,
        list(servers),
        list(ips),
        deregister_script,
    )