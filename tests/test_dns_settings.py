import pytest

from bmcnetwork.config_parser import Parser
from bmcnetwork.dns_settings import (
    DDNSSettings,
    InterfaceConf,
    InterfaceDetails,
    Method,
)


def _settings():
    return DDNSSettings(
        automatic_host=False,
        hostname="bmc-host",
        use_mdns=False,
        send_nsupdate=True,
        interfaces=[
            InterfaceConf("eth0", True, False, Method.Register),
            InterfaceConf("eth1", False, False, Method.Deregister),
        ],
    )


def _details():
    return {
        "eth0": InterfaceDetails(
            domain_names=["example.com"],
            dns_servers=["192.0.2.53"],
            ips=["192.0.2.10/24", "fe80::1/64", "2001:db8::5/64"],
        ),
        "eth1": InterfaceDetails(),
    }


def test_to_parser_pins_format_values():
    parser = _settings().to_parser(_details())
    sections = parser.map
    assert sections.get_last_value_string("HostConf", "Automatic") == "false"
    assert sections.get_last_value_string("HostConf", "Hostname") == "bmc-host"
    assert sections.get_last_value_string("eth0", "Do") == "Register"
    assert sections.get_last_value_string("eth1", "Do") == "De-Register"
    assert sections.get_last_value_string("DDNS", "SendNsupdate") == "true"
    assert sections.get_value_strings("Interfaces", "Linked") == ["eth0", "eth1"]


def test_ips_strip_prefix_and_skip_link_local():
    parser = _settings().to_parser(_details())
    assert parser.map.get_value_strings("eth0", "IP") == [
        "192.0.2.10",
        "2001:db8::5",
    ]


def test_tsig_written_false_without_support():
    settings = DDNSSettings(interfaces=[InterfaceConf("eth0", True, True)])
    parser = settings.to_parser(_details())
    assert parser.map.get_last_value_string("eth0", "UseTSIG") == "false"
    settings.tsig_supported = True
    parser = settings.to_parser(_details())
    assert parser.map.get_last_value_string("eth0", "UseTSIG") == "true"


def test_missing_interface_details_raises():
    settings = DDNSSettings(interfaces=[InterfaceConf("eth9")])
    with pytest.raises(KeyError):
        settings.to_parser(_details())


def test_round_trip_through_file(tmp_path):
    original = _settings()
    path = tmp_path / "dns.conf"
    original.to_parser(_details()).write_file(path)

    restored = DDNSSettings.from_parser(Parser(path))
    assert restored.automatic_host == original.automatic_host
    assert restored.hostname == original.hostname
    assert restored.use_mdns == original.use_mdns
    assert restored.send_nsupdate == original.send_nsupdate
    assert restored.interfaces == original.interfaces
    assert restored.details["eth0"].domain_names == ["example.com"]
    assert restored.details["eth0"].dns_servers == ["192.0.2.53"]
    assert restored.details["eth0"].ips == ["192.0.2.10", "2001:db8::5"]
    assert restored.details["eth1"] == InterfaceDetails()


def test_from_parser_missing_values_raise(tmp_path):
    path = tmp_path / "dns.conf"
    path.write_text("[HostConf]\nAutomatic=true\n")
    with pytest.raises(ValueError):
        DDNSSettings.from_parser(Parser(path))


def test_from_parser_missing_interface_key_raises(tmp_path):
    path = tmp_path / "dns.conf"
    path.write_text(
        "[HostConf]\nAutomatic=true\nHostname=h\n"
        "[mDNS]\nUseMDNS=true\n"
        "[Interfaces]\nLinked=eth0\n"
        "[eth0]\nDo=Register\n"
        "[DDNS]\nSendNsupdate=false\n"
    )
    with pytest.raises(ValueError):
        DDNSSettings.from_parser(Parser(path))


def test_add_interface_is_idempotent():
    settings = DDNSSettings()
    settings.add_interface("eth0")
    settings.add_interface("eth0")
    assert settings.interfaces == [
        InterfaceConf("eth0", True, False, Method.Register)
    ]


def test_add_interface_keeps_existing_entry():
    settings = DDNSSettings(
        interfaces=[InterfaceConf("eth0", False, False, Method.Deregister)]
    )
    settings.add_interface("eth0")
    settings.add_interface("eth1")
    assert [conf.name for conf in settings.interfaces] == ["eth0", "eth1"]
    assert settings.interfaces[0].method is Method.Deregister
    assert settings.interfaces[1].method is Method.Register