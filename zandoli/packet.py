"""Minimal Ethernet/ARP/IP/UDP/TCP/DNS frame decoding and ARP frame building."""

from __future__ import annotations

import ipaddress
import struct
from dataclasses import dataclass, field
from typing import Optional, Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

ETHERTYPE_IPV4 = 0x0800
ETHERTYPE_ARP = 0x0806
ETHERTYPE_VLAN = 0x8100
ETHERTYPE_IPV6 = 0x86DD
ETHERTYPE_EAPOL = 0x888E
ETHERTYPE_LLDP = 0x88CC
ARP_REQUEST = 1
ARP_REPLY = 2
BROADCAST_MAC = "ff:ff:ff:ff:ff:ff"
DNS_PORTS = (53, 5353)


class PacketError(ValueError):
    """Raised for malformed addresses or payloads."""


def format_mac(raw: bytes) -> str:
    return ":".join(f"{b:02x}" for b in raw)


def parse_mac(text: str) -> bytes:
    parts = text.replace("-", ":").split(":")
    if len(parts) != 6 or any(len(p) != 2 for p in parts):
        raise PacketError(f"invalid MAC address: {text}")
    try:
        return bytes(int(p, 16) for p in parts)
    except ValueError:
        raise PacketError(f"invalid MAC address: {text}") from None


@dataclass(frozen=True)
class Ethernet:
    src: str
    dst: str
    ethertype: int


@dataclass(frozen=True)
class ARP:
    operation: int
    sender_mac: str
    sender_ip: Optional[IPAddress]
    target_mac: str
    target_ip: Optional[IPAddress]


@dataclass(frozen=True)
class Transport:
    protocol: str
    src_port: int
    dst_port: int
    payload: bytes


@dataclass(frozen=True)
class DNSMessage:
    id: int
    qr: bool
    questions: list[str] = field(default_factory=list)


@dataclass
class Packet:
    """A decoded frame; layers that could not be decoded are None."""

    data: bytes
    ethernet: Optional[Ethernet] = None
    llc: bool = False
    arp: Optional[ARP] = None
    src_ip: Optional[IPAddress] = None
    dst_ip: Optional[IPAddress] = None
    transport: Optional[Transport] = None
    dns: Optional[DNSMessage] = None


def _read_name(payload: bytes, offset: int) -> tuple[str, int]:
    labels: list[str] = []
    end = None
    jumps = 0
    while True:
        if offset >= len(payload):
            raise PacketError("DNS name out of bounds")
        length = payload[offset]
        if length == 0:
            offset += 1
            break
        if length & 0xC0 == 0xC0:
            if offset + 1 >= len(payload):
                raise PacketError("DNS pointer out of bounds")
            jumps += 1
            if jumps > 32:
                raise PacketError("DNS compression loop")
            if end is None:
                end = offset + 2
            offset = ((length & 0x3F) << 8) | payload[offset + 1]
            continue
        if length & 0xC0:
            raise PacketError("invalid DNS label")
        label = payload[offset + 1:offset + 1 + length]
        if len(label) != length:
            raise PacketError("DNS label out of bounds")
        labels.append(label.decode("latin-1"))
        offset += 1 + length
    return ".".join(labels), (end if end is not None else offset)


def parse_dns(payload: bytes) -> DNSMessage:
    """Parse a DNS header and its question names."""
    if len(payload) < 12:
        raise PacketError("DNS message too short")
    ident, flags, qdcount = struct.unpack("!HHH", payload[:6])
    offset = 12
    questions = []
    for _ in range(qdcount):
        name, offset = _read_name(payload, offset)
        if offset + 4 > len(payload):
            raise PacketError("DNS question truncated")
        offset += 4
        questions.append(name)
    return DNSMessage(id=ident, qr=bool(flags & 0x8000), questions=questions)


def _ip(raw: bytes) -> Optional[IPAddress]:
    if len(raw) == 4:
        return ipaddress.IPv4Address(raw)
    if len(raw) == 16:
        return ipaddress.IPv6Address(raw)
    return None


def _decode_arp(data: bytes) -> Optional[ARP]:
    if len(data) < 8:
        return None
    _, _, hlen, plen, op = struct.unpack("!HHBBH", data[:8])
    need = 8 + 2 * (hlen + plen)
    if len(data) < need:
        return None
    pos = 8
    sha = data[pos:pos + hlen]
    pos += hlen
    spa = data[pos:pos + plen]
    pos += plen
    tha = data[pos:pos + hlen]
    pos += hlen
    tpa = data[pos:pos + plen]
    return ARP(op, format_mac(sha), _ip(spa), format_mac(tha), _ip(tpa))


def _decode_transport(proto: int, data: bytes) -> Optional[Transport]:
    if proto == 17 and len(data) >= 8:
        src, dst, length = struct.unpack("!HHH", data[:6])
        end = length if 8 <= length <= len(data) else len(data)
        return Transport("udp", src, dst, data[8:end])
    if proto == 6 and len(data) >= 20:
        src, dst = struct.unpack("!HH", data[:4])
        header = (data[12] >> 4) * 4
        if header < 20 or header > len(data):
            return None
        return Transport("tcp", src, dst, data[header:])
    return None


def decode(data: bytes) -> Packet:
    """Decode an Ethernet frame as far as possible; never raises."""
    data = bytes(data)
    packet = Packet(data=data)
    if len(data) < 14:
        return packet
    ethertype = struct.unpack("!H", data[12:14])[0]
    packet.ethernet = Ethernet(format_mac(data[6:12]), format_mac(data[0:6]), ethertype)
    offset = 14
    while ethertype == ETHERTYPE_VLAN and len(data) >= offset + 4:
        ethertype = struct.unpack("!H", data[offset + 2:offset + 4])[0]
        offset += 4
    body = data[offset:]

    if ethertype <= 1500:
        packet.llc = len(body) >= 3
    elif ethertype == ETHERTYPE_ARP:
        packet.arp = _decode_arp(body)
    elif ethertype == ETHERTYPE_IPV4 and len(body) >= 20:
        ihl = (body[0] & 0x0F) * 4
        total = struct.unpack("!H", body[2:4])[0]
        if ihl >= 20 and len(body) >= ihl:
            packet.src_ip = ipaddress.IPv4Address(body[12:16])
            packet.dst_ip = ipaddress.IPv4Address(body[16:20])
            end = total if ihl <= total <= len(body) else len(body)
            packet.transport = _decode_transport(body[9], body[ihl:end])
    elif ethertype == ETHERTYPE_IPV6 and len(body) >= 40:
        packet.src_ip = ipaddress.IPv6Address(body[8:24])
        packet.dst_ip = ipaddress.IPv6Address(body[24:40])
        packet.transport = _decode_transport(body[6], body[40:])

    transport = packet.transport
    if transport and transport.protocol == "udp" and (
        transport.src_port in DNS_PORTS or transport.dst_port in DNS_PORTS
    ):
        try:
            packet.dns = parse_dns(transport.payload)
        except PacketError:
            packet.dns = None
    return packet


def build_arp_request(src_mac: str | bytes, src_ip: str | IPAddress, target_ip: str | IPAddress) -> bytes:
    """Build a broadcast Ethernet ARP who-has frame."""
    mac = parse_mac(src_mac) if isinstance(src_mac, str) else bytes(src_mac)
    if len(mac) != 6:
        raise PacketError("source MAC must be 6 bytes")
    try:
        sip = ipaddress.IPv4Address(str(src_ip))
        tip = ipaddress.IPv4Address(str(target_ip))
    except ValueError as exc:
        raise PacketError(str(exc)) from None
    header = b"\xff" * 6 + mac + struct.pack("!H", ETHERTYPE_ARP)
    arp = struct.pack("!HHBBH", 1, ETHERTYPE_IPV4, 6, 4, ARP_REQUEST)
    return header + arp + mac + sip.packed + b"\x00" * 6 + tip.packed