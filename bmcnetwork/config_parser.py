"""Reading and writing of systemd-networkd style configuration files."""

from __future__ import annotations

import os
import re
import string
import tempfile
from pathlib import Path
from typing import Callable, TypeVar

T = TypeVar("T")

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_TRUE_WORDS = ("yes", "y", "true", "t", "on")
_FALSE_WORDS = ("no", "n", "false", "f", "off")
_INT_PREFIX = re.compile(r"-?[0-9]+")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def icaseeq(value: str, expected: str) -> bool:
    """Compare ``value`` case-insensitively against the lower-case ``expected``."""
    return value.translate(_ASCII_LOWER) == expected


def parse_bool(value: str) -> bool | None:
    """Turn a systemd boolean string into a bool, or None if it is not one."""
    if value == "1" or any(icaseeq(value, word) for word in _TRUE_WORDS):
        return True
    if value == "0" or any(icaseeq(value, word) for word in _FALSE_WORDS):
        return False
    return None


def parse_int(value: str) -> int | None:
    """Parse a leading 32-bit signed decimal integer, or return None."""
    match = _INT_PREFIX.match(value)
    if match is None:
        return None
    number = int(match.group())
    if not _INT_MIN <= number <= _INT_MAX:
        return None
    return number


def path_for_intf_conf(directory: str | os.PathLike, intf: str) -> Path:
    """Path of the ``.network`` file for an interface."""
    return Path(directory) / f"00-bmc-{intf}.network"


def path_for_intf_dev(directory: str | os.PathLike, intf: str) -> Path:
    """Path of the ``.netdev`` file for an interface."""
    return Path(directory) / f"{intf}.netdev"


def path_for_intf_info(directory: str | os.PathLike, intf: str) -> Path:
    """Path of the per-interface information file."""
    return Path(directory) / intf


def _reject(value: str, forbidden: str, what: str) -> str:
    if any(c in forbidden for c in value):
        raise ValueError(f"Invalid Config {what}: {value}")
    return value


def check_key(value: str) -> str:
    """Validate a key name; raise ValueError if it holds a newline or ``=``."""
    return _reject(value, "\n=", "Key")


def check_section(value: str) -> str:
    """Validate a section name; raise ValueError if it holds a newline or ``]``."""
    return _reject(value, "\n]", "Section")


def check_value(value: str) -> str:
    """Validate a value; raise ValueError if it holds a newline."""
    return _reject(value, "\n", "Value")


class KeyValues(dict):
    """One occurrence of a section: each key maps to its list of values."""

    def add(self, key: str, value: str) -> None:
        """Append a validated value under a validated key."""
        check_key(key)
        check_value(value)
        self.setdefault(key, []).append(value)


class SectionMap(dict):
    """Section name to the list of its occurrences, in file order."""

    def add_section(self, name: str) -> KeyValues:
        """Start a new occurrence of ``name`` and return it."""
        check_section(name)
        return self._new_section(name)

    def _new_section(self, name: str) -> KeyValues:
        values = KeyValues()
        self.setdefault(name, []).append(values)
        return values

    def get_last_value_string(self, section: str, key: str) -> str | None:
        """The last value of ``key`` in the last occurrence of ``section`` holding it."""
        for values in reversed(self.get(section, [])):
            found = values.get(key)
            if found:
                return found[-1]
        return None

    def get_values(
        self, section: str, key: str, conv: Callable[[str], T]
    ) -> list[T]:
        """All values of ``key`` across every occurrence of ``section``, converted."""
        return [
            conv(value)
            for values in self.get(section, [])
            for value in values.get(key, [])
        ]

    def get_value_strings(self, section: str, key: str) -> list[str]:
        """All values of ``key`` across every occurrence of ``section``."""
        return self.get_values(section, key, str)


def _strip_padding(text: str) -> str:
    return text.strip(" \t")


class _Parse:
    def __init__(self, filename: Path) -> None:
        self.filename = filename
        self.map = SectionMap()
        self.section: KeyValues | None = None
        self.warnings: list[str] = []
        self.lineno = 0

    def _where(self) -> str:
        return f"{self.filename}:{self.lineno}"

    def pump(self, line: str) -> None:
        self.lineno += 1
        for i, c in enumerate(line):
            if c in "#;":
                return
            if c == "[":
                self._pump_section(line[i + 1:])
                return
            if c not in " \t":
                self._pump_kv(line[i:])
                return

    def _pump_section(self, line: str) -> None:
        cpos = line.find("]")
        if cpos < 0:
            self.warnings.append(f"{self._where()}: Section missing ]")
            name = line
        else:
            if _strip_padding(line[cpos + 1:]):
                self.warnings.append(
                    f"{self._where()}: Characters outside section name"
                )
            name = line[:cpos]
        self.section = self.map._new_section(name)

    def _pump_kv(self, line: str) -> None:
        epos = line.find("=")
        new_warnings = []
        if epos < 0:
            new_warnings.append(f"{self._where()}: KV missing `=`")
            key = _strip_padding(line)
        else:
            key = _strip_padding(line[:epos])
        if self.section is None:
            new_warnings.append(f"{self._where()}: Key `{key}` missing section")
        if new_warnings:
            self.warnings.extend(new_warnings)
            return
        value = _strip_padding(line[epos + 1:])
        self.section.setdefault(key, []).append(value)


def _write_map(section_map: SectionMap, filename: Path) -> None:
    lines = []
    for section, occurrences in section_map.items():
        for values in occurrences:
            lines.append(f"[{section}]\n")
            for key, vals in values.items():
                lines.extend(f"{key}={val}\n" for val in vals)
    data = "".join(lines).encode(_ENCODING, _ERRORS)

    directory = filename.parent
    fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f".{filename.name}.")
    try:
        with os.fdopen(fd, "wb") as out:
            out.write(data)
            out.flush()
            os.fsync(out.fileno())
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, filename)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


class Parser:
    """A parsed configuration file, with its warnings."""

    def __init__(self, filename: str | os.PathLike | None = None) -> None:
        self.map = SectionMap()
        self.file_exists = False
        self.filename: Path | None = None
        self.warnings: list[str] = []
        if filename is not None:
            self.set_file(filename)

    def set_file(self, filename: str | os.PathLike) -> None:
        """Parse ``filename``, replacing the current contents."""
        path = Path(filename)
        parse = _Parse(path)
        file_exists = True
        try:
            with open(path, "rb") as handle:
                text = handle.read().decode(_ENCODING, _ERRORS)
        except OSError as e:
            file_exists = False
            parse.warnings.append(f"{path}: Open error: {e.strerror or e}")
        else:
            lines = text.split("\n")
            if text.endswith("\n"):
                lines.pop()
            for line in lines:
                parse.pump(line)

        self.map = parse.map
        self.file_exists = file_exists
        self.filename = path
        self.warnings = parse.warnings

    def write_file(self, filename: str | os.PathLike | None = None) -> None:
        """Write the contents atomically; a given filename becomes the current one."""
        if filename is None:
            if self.filename is None:
                raise ValueError("No filename to write the configuration to")
            _write_map(self.map, self.filename)
            return
        path = Path(filename)
        _write_map(self.map, path)
        self.filename = path