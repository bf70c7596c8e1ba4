"""Dynamic DNS settings and their configuration file form."""

from __future__ import annotations

import enum
import ipaddress
from dataclasses import dataclass, field
from typing import Mapping

from bmcnetwork.config_parser import Parser

HOST_SECTION = "HostConf"
MDNS_SECTION = "mDNS"
INTERFACES_SECTION = "Interfaces"
DDNS_SECTION = "DDNS"

_TRUE = "true"
_FALSE = "false"


class Method(enum.Enum):
    """Whether an interface's records are to be registered or removed."""

    Register = "Register"
    Deregister = "De-Register"


@dataclass
class InterfaceConf:
    """Dynamic DNS settings of one interface."""

    name: str
    do_nsupdate: bool = True
    use_tsig: bool = False
    method: Method = Method.Register


@dataclass
class InterfaceDetails:
    """Domain names, DNS servers and IP addresses known for one interface."""

    domain_names: list[str] = field(default_factory=list)
    dns_servers: list[str] = field(default_factory=list)
    ips: list[str] = field(default_factory=list)


def _flag(value: bool) -> str:
    return _TRUE if value else _FALSE


def _plain_ip(text: str) -> str | None:
    """The address without prefix length; None for IPv6 link-local addresses."""
    ip = text.split("/", 1)[0]
    if ":" in ip and ipaddress.IPv6Address(ip).is_link_local:
        return None
    return ip


@dataclass
class DDNSSettings:
    """Hostname, mDNS, nsupdate and per-interface dynamic DNS settings."""

    automatic_host: bool = True
    hostname: str = ""
    use_mdns: bool = True
    send_nsupdate: bool = False
    interfaces: list[InterfaceConf] = field(default_factory=list)
    tsig_supported: bool = False
    details: dict[str, InterfaceDetails] = field(default_factory=dict)

    def add_interface(self, name: str) -> None:
        """Add a registering interface entry unless one for ``name`` exists."""
        if any(conf.name == name for conf in self.interfaces):
            return
        self.interfaces.append(InterfaceConf(name, True, False, Method.Register))

    def to_parser(self, details: Mapping[str, InterfaceDetails]) -> Parser:
        """Build the configuration; raise KeyError for an interface without details."""
        parser = Parser()
        sections = parser.map

        host = sections.add_section(HOST_SECTION)
        host.add("Automatic", _flag(self.automatic_host))
        host.add("Hostname", self.hostname)

        sections.add_section(MDNS_SECTION).add("UseMDNS", _flag(self.use_mdns))

        linked = sections.add_section(INTERFACES_SECTION)
        for conf in self.interfaces:
            if conf.name not in details:
                raise KeyError(f"No interface ({conf.name}) found")
            info = details[conf.name]
            iface = sections.add_section(conf.name)
            iface.add("Do", conf.method.value)
            iface.add("DoNsupdate", _flag(conf.do_nsupdate))
            iface.add("UseTSIG", _flag(conf.use_tsig and self.tsig_supported))
            for name in info.domain_names:
                iface.add("DomainName", name)
            for server in info.dns_servers:
                iface.add("DNS", server)
            for text in info.ips:
                ip = _plain_ip(text)
                if ip is not None:
                    iface.add("IP", ip)
            linked.add("Linked", conf.name)

        sections.add_section(DDNS_SECTION).add(
            "SendNsupdate", _flag(self.send_nsupdate)
        )
        return parser

    @classmethod
    def from_parser(cls, parser: Parser) -> DDNSSettings:
        """Read settings back; raise ValueError when a required value is missing."""
        sections = parser.map

        def required(section: str, key: str) -> str:
            value = sections.get_last_value_string(section, key)
            if value is None:
                raise ValueError(
                    f"Skipping host update due to missing values: [{section}] {key}"
                )
            return value

        automatic = required(HOST_SECTION, "Automatic") == _TRUE
        hostname = required(HOST_SECTION, "Hostname")
        use_mdns = required(MDNS_SECTION, "UseMDNS") == _TRUE
        send_nsupdate = required(DDNS_SECTION, "SendNsupdate") == _TRUE

        interfaces = []
        details = {}
        for name in sections.get_value_strings(INTERFACES_SECTION, "Linked"):
            do_nsupdate = required(name, "DoNsupdate") == _TRUE
            use_tsig = required(name, "UseTSIG") == _TRUE
            method = (
                Method.Register
                if required(name, "Do") == Method.Register.value
                else Method.Deregister
            )
            interfaces.append(InterfaceConf(name, do_nsupdate, use_tsig, method))
            details[name] = InterfaceDetails(
                domain_names=sections.get_value_strings(name, "DomainName"),
                dns_servers=sections.get_value_strings(name, "DNS"),
                ips=sections.get_value_strings(name, "IP"),
            )

        return cls(
            automatic_host=automatic,
            hostname=hostname,
            use_mdns=use_mdns,
            send_nsupdate=send_nsupdate,
            interfaces=interfaces,
            details=details,
        )