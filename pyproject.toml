[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "bmcnetwork"
version = "0.1.0"
description = "Network configuration helpers for BMC systems: networkd-style config files, DHCP and dynamic DNS settings, nsupdate scripts, NC-SI options and IPv6 router information"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "bmc",
    "networkd",
    "dhcp",
    "dns",
    "ddns",
    "nsupdate",
    "ncsi",
    "ipv6",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["bmcnetwork*"]

[tool.pytest.ini_options]
addopts = "-ra"
