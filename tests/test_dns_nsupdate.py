import pytest

from bmcnetwork.dns_files import reverse_ipv4, reverse_ipv6
from bmcnetwork.dns_nsupdate import (
    clear_tmp_files,
    deregister_script,
    is_link_local,
    register_script,
    write_deregister_files,
    write_register_files,
)


def test_is_link_local():
    assert is_link_local("fe80::1") is True
    assert is_link_local("fe80::1/64") is True
    assert is_link_local("2001:db8::1/64") is False
    assert is_link_local("192.0.2.1/24") is False


def test_is_link_local_invalid():
    with pytest.raises(ValueError):
        is_link_local("zz::zz::1")


def test_register_script_ipv4():
    script = register_script("192.0.2.53", "host", "example.com", "192.0.2.10")
    lines = script.split("\n")
    assert lines[0] == "server 192.0.2.53"
    assert lines[1] == "update add host.example.com 86400 A 192.0.2.10"
    assert lines[2] == ""
    assert lines[3] == f"update add {reverse_ipv4('192.0.2.10')} 86400 PTR host.example.com"
    assert lines[4] == ""
    assert lines[5] == "send"
    assert script.endswith("send\n")


def test_register_script_ipv6():
    script = register_script("2001:db8::53", "host", "example.com", "2001:db8::10")
    assert "update add host.example.com 86400 AAAA 2001:db8::10\n" in script
    assert f"update add {reverse_ipv6('2001:db8::10')} 86400 PTR host.example.com\n" in script


def test_deregister_script():
    script = deregister_script("192.0.2.53", "host", "example.com", "192.0.2.10")
    lines = script.split("\n")
    assert lines[0] == "server 192.0.2.53"
    assert lines[1] == "update delete host.example.com A"
    assert lines[3] == f"update delete {reverse_ipv4('192.0.2.10')} 86400 PTR host.example.com"
    assert lines[5] == "send"


def test_deregister_script_ipv6_type():
    script = deregister_script("192.0.2.53", "h", "example.com", "2001:db8::1")
    assert "update delete h.example.com AAAA\n" in script


def test_write_register_files(tmp_path):
    prefix = tmp_path / "nsupdate_tmp"
    paths = write_register_files(
        prefix,
        "eth0",
        "host",
        ["example.com", "example.org"],
        ["192.0.2.53"],
        ["192.0.2.10/24", "fe80::1/64", "2001:db8::10/64"],
    )
    names = [p.name for p in paths]
    assert names == [f"nsupdate_tmp-add-eth0-{i}" for i in range(1, 5)]
    assert paths[0].read_text() == register_script(
        "192.0.2.53", "host", "example.com", "192.0.2.10"
    )
    assert paths[3].read_text() == register_script(
        "192.0.2.53", "host", "example.org", "2001:db8::10"
    )
    assert all("fe80" not in p.read_text() for p in paths)


def test_write_register_files_no_domains(tmp_path):
    paths = write_register_files(tmp_path / "p", "eth0", "h", [], ["192.0.2.53"], ["192.0.2.1/24"])
    assert paths == []
    assert list(tmp_path.iterdir()) == []


def test_write_deregister_files(tmp_path):
    prefix = tmp_path / "nsupdate_tmp"
    paths = write_deregister_files(
        prefix, "eth1", "host", ["example.com"], ["192.0.2.53", "192.0.2.54"], ["192.0.2.10"]
    )
    assert [p.name for p in paths] == ["nsupdate_tmp-del-eth1-1", "nsupdate_tmp-del-eth1-2"]
    assert paths[1].read_text() == deregister_script(
        "192.0.2.54", "host", "example.com", "192.0.2.10"
    )


def test_clear_tmp_files_stops_at_gap(tmp_path):
    prefix = tmp_path / "nsupdate_tmp"
    paths = write_register_files(
        prefix, "eth0", "h", ["example.com"], ["192.0.2.53"], ["192.0.2.1/24", "192.0.2.2/24"]
    )
    later = tmp_path / "nsupdate_tmp-add-eth0-4"
    later.write_text("x")
    assert clear_tmp_files(prefix, "add", "eth0") == len(paths)
    assert not any(p.exists() for p in paths)
    assert later.exists()


def test_clear_tmp_files_other_action_untouched(tmp_path):
    prefix = tmp_path / "nsupdate_tmp"
    written = write_deregister_files(prefix, "eth0", "h", ["example.com"], ["192.0.2.53"], ["192.0.2.1"])
    assert clear_tmp_files(prefix, "add", "eth0") == 0
    assert written[0].exists()
    assert clear_tmp_files(prefix, "del", "eth0") == 1
    assert not written[0].exists()