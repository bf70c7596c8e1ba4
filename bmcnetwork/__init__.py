"""Helpers for BMC network configuration: networkd-style files, DHCP and
dynamic DNS settings, nsupdate scripts, NC-SI options and IPv6 router info."""

__version__ = "0.1.0"