import ipaddress
import struct

import pytest

from zandoli.packet import (
    ARP_REQUEST,
    BROADCAST_MAC,
    ETHERTYPE_ARP,
    ETHERTYPE_IPV4,
    PacketError,
    build_arp_request,
    decode,
    format_mac,
    parse_dns,
    parse_mac,
)

SRC_MAC = "02:00:00:00:00:01"


def test_mac_round_trip():
    assert format_mac(parse_mac(SRC_MAC)) == SRC_MAC


def test_parse_mac_invalid():
    with pytest.raises(PacketError):
        parse_mac("02:00:zz")


def test_arp_request_round_trip():
    frame = build_arp_request(SRC_MAC, "192.168.1.10", "192.168.1.20")
    assert len(frame) == 42
    pkt = decode(frame)
    assert pkt.ethernet.dst == BROADCAST_MAC
    assert pkt.ethernet.src == SRC_MAC
    assert pkt.ethernet.ethertype == ETHERTYPE_ARP
    assert pkt.arp.operation == ARP_REQUEST
    assert pkt.arp.sender_ip == ipaddress.ip_address("192.168.1.10")
    assert pkt.arp.target_ip == ipaddress.ip_address("192.168.1.20")
    assert pkt.arp.target_mac == format_mac(bytes(6))


def test_build_arp_rejects_ipv6():
    with pytest.raises(PacketError):
        build_arp_request(SRC_MAC, "::1", "192.168.1.1")


def _dns_query(name, qr=False):
    header = struct.pack("!HHHHHH", 7, 0x8000 if qr else 0, 1, 0, 0, 0)
    qname = b"".join(bytes([len(p)]) + p.encode() for p in name.split(".")) + b"\x00"
    return header + qname + struct.pack("!HH", 1, 1)


def test_parse_dns():
    msg = parse_dns(_dns_query("host.example.com"))
    assert msg.questions == ["host.example.com"]
    assert msg.qr is False
    assert msg.id == 7


def test_parse_dns_truncated():
    with pytest.raises(PacketError):
        parse_dns(b"\x00\x01")


def _udp_frame(payload, sport, dport):
    udp = struct.pack("!HHHH", sport, dport, 8 + len(payload), 0) + payload
    ip = struct.pack("!BBHHHBBH4s4s", 0x45, 0, 20 + len(udp), 0, 0, 64, 17, 0,
                     ipaddress.IPv4Address("10.0.0.5").packed,
                     ipaddress.IPv4Address("10.0.0.1").packed)
    eth = parse_mac("02:00:00:00:00:02") + parse_mac(SRC_MAC) + struct.pack("!H", ETHERTYPE_IPV4)
    return eth + ip + udp


def test_decode_udp_dns():
    pkt = decode(_udp_frame(_dns_query("a.example.com", qr=True), 5353, 5353))
    assert pkt.src_ip == ipaddress.ip_address("10.0.0.5")
    assert pkt.transport.protocol == "udp"
    assert pkt.transport.dst_port == 5353
    assert pkt.dns.qr is True
    assert pkt.dns.questions == ["a.example.com"]


def test_decode_non_dns_port_has_no_dns():
    pkt = decode(_udp_frame(b"hello", 1234, 4321))
    assert pkt.dns is None
    assert pkt.transport.payload == b"hello"


def test_decode_short_frame():
    pkt = decode(b"\xde\xad\xbe\xef")
    assert pkt.ethernet is None
    assert pkt.arp is None


def test_decode_llc_frame():
    frame = parse_mac("01:80:c2:00:00:00") + parse_mac(SRC_MAC) + struct.pack("!H", 38) + b"\x42\x42\x03" + bytes(35)
    pkt = decode(frame)
    assert pkt.llc is True
    assert pkt.ethernet.dst == "01:80:c2:00:00:00"