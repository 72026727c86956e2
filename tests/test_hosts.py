import ipaddress

import pytest

from zandoli.hosts import Host, HostRegistry, classify_host, is_private_ip, new_host
from zandoli.oui import OUIDatabase


@pytest.mark.parametrize(
    "protocols, expected",
    [
        ({"SMB"}, "server"),
        ({"NetBIOS"}, "server"),
        ({"mDNS"}, "workstation"),
        ({"LLDP"}, "network"),
        (set(), "unknown"),
    ],
    ids=["SMBHost", "NetBIOSHost", "WorkstationHost", "NetworkDevice", "Fallback"],
)
def test_classify_host(protocols, expected):
    host = Host(
        ip=ipaddress.ip_address("192.168.1.1"),
        mac="de:ad:be:ef:00:01",
        protocols_seen=set(protocols),
        vendor="UnknownVendor",
    )
    assert classify_host(host) == expected
    assert host.category == expected


@pytest.mark.parametrize(
    "ip, expected",
    [
        ("192.168.1.1", True),
        ("10.0.0.1", True),
        ("172.16.5.5", True),
        ("8.8.8.8", False),
    ],
)
def test_is_private_ip(ip, expected):
    assert is_private_ip(ip) is expected


def test_update_host_dns():
    ip = ipaddress.ip_address("192.168.1.42")
    registry = HostRegistry(hosts=[Host(ip=ip)])
    domain = "host.example.local"
    registry.update_dns(ip.packed, domain)

    host = registry.find_by_ip(ip)
    assert host is not None
    assert host.hostname == "host"
    assert host.domain_name == domain
    assert "dns" in host.protocols_seen


def test_update_dns_keeps_existing_names():
    registry = HostRegistry(hosts=[Host(ip=ipaddress.ip_address("10.1.1.1"), hostname="keep",
                                        domain_name="keep.lan")])
    host = registry.update_dns("10.1.1.1", "other.example.local")
    assert (host.hostname, host.domain_name) == ("keep", "keep.lan")


def test_update_dns_unknown_ip_changes_nothing():
    registry = HostRegistry()
    assert registry.update_dns("10.1.1.1", "a.example.local") is None
    assert len(registry) == 0
    assert registry.networks == set()


def test_register_ip_only_private_ipv4():
    registry = HostRegistry()
    assert registry.register_ip("192.168.1.42") is True
    assert registry.register_ip("192.168.1.7") is False
    assert registry.register_ip("8.8.8.8") is False
    assert registry.register_ip("fe80::1") is False
    assert registry.networks == {"192.168.1.0/24"}


def test_new_host_uses_vendor_database():
    db = OUIDatabase(vendors={"020000": "Dell Inc."})
    host = new_host("10.0.0.3", "02:00:00:AA:BB:CC", "passive", db)
    assert host.ip == ipaddress.ip_address("10.0.0.3")
    assert host.mac == "02:00:00:aa:bb:cc"
    assert host.vendor == "Dell Inc."
    assert host.category == "workstation"
    assert host.detection_method == "passive"


def test_new_host_without_vendor_is_unknown():
    host = new_host("10.0.0.3", "02:00:00:aa:bb:cc", "active")
    assert (host.vendor, host.category) == ("Unknown", "unknown")


def test_known_lookups():
    registry = HostRegistry()
    registry.add(new_host("10.0.0.3", "02:00:00:aa:bb:cc", "active"))
    assert registry.is_known_ip("10.0.0.3") is True
    assert registry.is_known_ip("10.0.0.4") is False
    assert registry.is_known_mac("02:00:00:AA:BB:CC") is True
    assert registry.is_known_mac("02:00:00:aa:bb:cd") is False


def test_get_or_create_by_mac_reuses_host():
    registry = HostRegistry()
    first = registry.get_or_create_by_mac("02:00:00:00:00:09")
    second = registry.get_or_create_by_mac("02:00:00:00:00:09")
    assert first is second
    assert len(registry) == 1
    assert first.ip is None


def test_get_or_create_by_ip_reuses_host():
    registry = HostRegistry()
    first = registry.get_or_create_by_ip("10.9.9.9")
    second = registry.get_or_create_by_ip(ipaddress.ip_address("10.9.9.9"))
    assert first is second
    assert len(registry) == 1
    assert first.mac == ""


def test_to_dict_reflects_host():
    host = Host(ip=ipaddress.ip_address("10.0.0.1"), mac="02:00:00:00:00:01",
                protocols_seen={"dns"}, metadata={"k": "v"})
    data = host.to_dict()
    assert data["ip"] == "10.0.0.1"
    assert data["mac"] == host.mac
    assert data["protocols_seen"] == {"dns": True}
    assert data["metadata"] == {"k": "v"}