"""DHCP client settings of one network interface."""

from __future__ import annotations

import enum
from typing import Protocol


class DHCPType(enum.Enum):
    """Address family a DHCP configuration applies to."""

    v4 = "v4"
    v6 = "v6"


class NotAllowedError(Exception):
    """The requested change is not allowed."""


class DHCPParent(Protocol):
    """What a DHCP configuration needs from its interface."""

    def write_configuration_file(self) -> None: ...

    def reload_configs(self) -> None: ...

    def set_static_name_servers(self, servers: list[str]) -> object: ...

    def set_domain_name(self, names: list[str]) -> object: ...


class DHCPConfiguration:
    """DHCP settings; every real change is written out and reloaded by the parent."""

    def __init__(
        self,
        parent: DHCPParent,
        dhcp_type: DHCPType,
        dns_enabled: bool = False,
        domain_enabled: bool = False,
        ntp_enabled: bool = False,
        host_name_enabled: bool = False,
        send_host_name_enabled: bool = False,
        vendor_class_identifier: str = "",
        vendor_options: dict[int, str] | None = None,
    ) -> None:
        self.parent = parent
        self.type = dhcp_type
        self.dns_enabled = dns_enabled
        self.domain_enabled = domain_enabled
        self.ntp_enabled = ntp_enabled
        self.host_name_enabled = host_name_enabled
        self.send_host_name_enabled = send_host_name_enabled
        self.vendor_class_identifier = vendor_class_identifier
        self.vendor_options: dict[int, str] = dict(vendor_options or {})

    def _commit(self) -> None:
        self.parent.write_configuration_file()
        self.parent.reload_configs()

    def _set_flag(self, attr: str, value: bool) -> bool:
        if getattr(self, attr) == value:
            return value
        setattr(self, attr, value)
        self._commit()
        return value

    def set_dns_enabled(self, value: bool) -> bool:
        """Use DNS servers from DHCP; disabling also disables DHCP domains."""
        if value == self.dns_enabled:
            return value
        self.dns_enabled = value
        if not value:
            self.domain_enabled = False
        else:
            self.parent.set_static_name_servers([])
        self._commit()
        return value

    def set_domain_enabled(self, value: bool) -> bool:
        """Use domain names from DHCP; enabling clears the static domain names."""
        if value == self.domain_enabled:
            return value
        self.domain_enabled = value
        if value:
            self.parent.set_domain_name([])
        self._commit()
        return value

    def set_ntp_enabled(self, value: bool) -> bool:
        """Use NTP servers from DHCP."""
        return self._set_flag("ntp_enabled", value)

    def set_host_name_enabled(self, value: bool) -> bool:
        """Take the system hostname from DHCP."""
        return self._set_flag("host_name_enabled", value)

    def set_send_host_name_enabled(self, value: bool) -> bool:
        """Send the hostname (option 12) in DHCP requests."""
        return self._set_flag("send_host_name_enabled", value)

    def set_vendor_class_identifier(self, value: str) -> str:
        """Set the vendor class identifier; only DHCPv4 supports it."""
        if self.type is not DHCPType.v4:
            raise NotAllowedError("Vendor Class Identifier only supports in DHCPv4.")
        if value == self.vendor_class_identifier:
            return value
        self.vendor_class_identifier = value
        self._commit()
        return value

    def set_vendor_option(self, option: int, value: str) -> None:
        """Set a vendor option value."""
        if self.vendor_options.get(option) == value:
            return
        self.vendor_options[option] = value
        self._commit()

    def get_vendor_option(self, option: int) -> str:
        """The value of a vendor option, or the empty string."""
        return self.vendor_options.get(option, "")

    def del_vendor_option(self, option: int) -> None:
        """Remove a vendor option; raise KeyError if it is not set."""
        if option not in self.vendor_options:
            raise KeyError(option)
        del self.vendor_options[option]
        self._commit()