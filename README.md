# bmcnetwork

Helpers for the network configuration of a baseboard management controller.
The package works with the files that systemd-networkd and the surrounding
services use, and keeps the rules for them in one place:

- `bmcnetwork.config_parser` reads and writes networkd-style INI files
  (`[Section]` headers, repeated sections, repeated keys, `#` and `;`
  comments) and parses systemd boolean strings.
- `bmcnetwork.dhcp` holds the DHCP settings of one interface (use DNS,
  domains, NTP, hostname, send hostname, vendor class identifier and vendor
  options).
- `bmcnetwork.router` reads dynamic IPv6 router information from
  `/proc/net/ipv6_route_prefix_info`.
- `bmcnetwork.ncsi_args` parses the options of an NC-SI command-line tool.
- `bmcnetwork.dns_files` writes resolver files from `DNS=` entries, builds
  reverse DNS names and checks hostnames.
- `bmcnetwork.dns_settings` holds the dynamic DNS settings and converts them
  to and from a configuration file.
- `bmcnetwork.dns_nsupdate` writes the nsupdate scripts that register and
  remove a host's DNS records.

The package has no dependencies outside the standard library and needs
Python 3.10 or later.

## Configuration files

```python
from pathlib import Path

from bmcnetwork.config_parser import Parser, parse_bool, path_for_intf_conf

conf_dir = Path("/etc/systemd/network")
parser = Parser(path_for_intf_conf(conf_dir, "eth0"))   # .../00-bmc-eth0.network

dhcp = parser.map.get_last_value_string("Network", "DHCP")
dns_servers = parser.map.get_value_strings("Network", "DNS")

parse_bool("yes")    # True
parse_bool("off")    # False
parse_bool("maybe")  # None
```

A file that cannot be opened does not raise: `Parser.set_file` records a
warning in `parser.warnings`, sets `parser.file_exists` to `False` and leaves
the map empty. Lines that cannot be understood (a section without `]`, a key
without `=` or outside any section) are also reported as warnings.

To build a file, add sections and values and write it; the file is replaced
atomically with mode 0644:

```python
parser = Parser()
netdev = parser.map.add_section("NetDev")
netdev.add("Name", "bond0")
netdev.add("Kind", "bond")
parser.write_file("/tmp/bond0.netdev")
```

`check_key`, `check_section` and `check_value` (also applied by
`KeyValues.add` and `SectionMap.add_section`) raise `ValueError` for text that
would break the format: a newline anywhere, `=` in a key, `]` in a section
name.

## DHCP settings

`DHCPConfiguration` takes a parent object with `write_configuration_file()`,
`reload_configs()`, `set_static_name_servers(servers)` and
`set_domain_name(names)`. Each setter that changes a value calls the parent to
write and reload the configuration. Disabling DNS also disables DHCP domains;
enabling DNS clears the static name servers; enabling domains clears the
static domain names. `set_vendor_class_identifier` raises `NotAllowedError`
for a `DHCPType.v6` configuration, and `del_vendor_option` raises `KeyError`
for an option that is not set.

## Dynamic DNS

```python
from bmcnetwork.dns_files import reverse_ipv4, reverse_ipv6, update_dns_entries

reverse_ipv4("192.0.2.10")   # "10.2.0.192.in-addr.arpa"
reverse_ipv6("2001:db8::1")  # nibble form ending in "ip6.arpa"

# Turn the DNS= lines of a file into nameserver lines of a resolver file
update_dns_entries("/run/systemd/netif/state", "/tmp/resolv.conf")
```

`validate_hostname` rejects names longer than 63 bytes or containing
punctuation such as `.`, `:` or `/`. `default_hostname` builds the automatic
hostname `AMIOT-` followed by the MAC address without colons.

`DDNSSettings.to_parser(details)` builds the `[HostConf]`, `[mDNS]`,
`[Interfaces]`, per-interface and `[DDNS]` sections, skipping IPv6 link-local
addresses; `DDNSSettings.from_parser(parser)` reads them back and raises
`ValueError` when a required value is missing.

`write_register_files` and `write_deregister_files` in
`bmcnetwork.dns_nsupdate` write one numbered script per domain, server and
address (`server`, `update add` / `update delete` for the A/AAAA and PTR
records, `send`); `clear_tmp_files` removes earlier ones.

## NC-SI options

`parse_arguments(argv)` returns an `NcsiArguments`, where an option given
without a value reads as `"true"` and a missing one as `""`. On `--help` or an
unknown option it prints the usage text to standard error and exits with
status 255.

## IPv6 router information

```python
from bmcnetwork.router import read_dynamic_router_info

for info in read_dynamic_router_info("eth0"):
    print(info.gateway6, info.prefix, info.prefix_len, info.gateway6_mac.hex(":"))
```

An unreadable file yields an empty list.

## What the package does not do

It is a library of helpers, not a running service. It provides no command,
no D-Bus objects and no network management daemon. It does not talk to the
kernel over netlink, does not send NC-SI commands, does not run nsupdate or
restart services, and does not provide DHCPv6 or SLAAC timing parameter
defaults; it prepares and reads the files and settings those steps use.

## Running the tests

Install the package with its `test` extra and run `pytest` from the project
directory.