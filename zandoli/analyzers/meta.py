"""Cross-protocol anomaly tracking of MAC to IP pairings."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field
from typing import Any, Union

from ..packet import Packet

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


def _to_ip(value: Any) -> IPAddress:
    if isinstance(value, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        return value
    if isinstance(value, (bytes, bytearray)):
        return ipaddress.ip_address(bytes(value))
    return ipaddress.ip_address(str(value))


@dataclass
class MACIPTracker:
    """Remembers every IP each source MAC has used."""

    mac_to_ips: dict[str, list[IPAddress]] = field(default_factory=dict)

    def detect_mac_multiple_ips(self, mac: str, ip: Any) -> bool:
        """Record a pairing; return True if it gives the MAC a second or further IP."""
        key = mac.lower()
        addr = _to_ip(ip)
        ips = self.mac_to_ips.setdefault(key, [])
        if addr in ips:
            return False
        ips.append(addr)
        return len(ips) > 1

    def observe(self, packet: Packet) -> bool:
        """Record the source MAC and IP of an IP frame."""
        if packet.ethernet is None or packet.src_ip is None:
            return False
        return self.detect_mac_multiple_ips(packet.ethernet.src, packet.src_ip)