"""Passive security signals: topology protocols and MAC/IP anomalies."""

from __future__ import annotations

import ipaddress
import logging
from dataclasses import dataclass, field
from typing import Any, Union

from .packet import ETHERTYPE_LLDP, Packet

log = logging.getLogger("zandoli.security")

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

ETHERTYPE_CDP = 0x2000
STP_MULTICAST = "01:80:c2:00:00:00"


def _to_ip(value: Any) -> IPAddress:
    if isinstance(value, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        addr = value
    elif isinstance(value, (bytes, bytearray)):
        addr = ipaddress.ip_address(bytes(value))
    else:
        addr = ipaddress.ip_address(str(value))
    if isinstance(addr, ipaddress.IPv6Address) and addr.ipv4_mapped is not None:
        return addr.ipv4_mapped
    return addr


@dataclass
class SecuritySummary:
    """Security-relevant signals collected while listening to the network."""

    passive_security_8021x: bool = False
    mac_with_multiple_ips: dict[str, list[IPAddress]] = field(default_factory=dict)
    ip_with_multiple_macs: dict[str, list[str]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping, leaving out empty signals."""
        result: dict[str, Any] = {}
        if self.passive_security_8021x:
            result["eapol_8021x"] = True
        if self.mac_with_multiple_ips:
            result["mac_with_multiple_ips"] = {
                mac: [str(ip) for ip in ips] for mac, ips in self.mac_with_multiple_ips.items()
            }
        if self.ip_with_multiple_macs:
            result["ip_with_multiple_macs"] = {
                ip: list(macs) for ip, macs in self.ip_with_multiple_macs.items()
            }
        return result


@dataclass
class TopologyProtocols:
    """Which topology discovery protocols were seen on the wire."""

    lldp: bool = False
    cdp: bool = False
    stp: bool = False

    def observe(self, packet: Packet) -> None:
        """Record LLDP, CDP or STP if the frame carries one of them."""
        eth = packet.ethernet
        if eth is None:
            return
        if eth.ethertype == ETHERTYPE_LLDP:
            if not self.lldp:
                self.lldp = True
                log.info("[TOPO] LLDP detected on the wire")
        elif eth.ethertype == ETHERTYPE_CDP:
            if not self.cdp:
                self.cdp = True
                log.info("[TOPO] CDP detected on the wire")
        elif eth.dst == STP_MULTICAST:
            if not self.stp:
                self.stp = True
                log.info("[TOPO] STP detected on the wire")


@dataclass
class AnomalyTracker:
    """Tracks MAC/IP pairings and reports addresses bound to several peers."""

    summary: SecuritySummary = field(default_factory=SecuritySummary)
    _mac_to_ips: dict[str, list[IPAddress]] = field(default_factory=dict, repr=False)
    _ip_to_macs: dict[str, list[str]] = field(default_factory=dict, repr=False)

    def detect_mac_multiple_ips(self, mac: str, ip: Any) -> bool:
        """Record a pairing; return True if the MAC now has several IPs."""
        key = mac.lower()
        addr = _to_ip(ip)
        ips = self._mac_to_ips.setdefault(key, [])
        if addr in ips:
            return False
        ips.append(addr)
        if len(ips) > 1:
            self.summary.mac_with_multiple_ips[key] = list(ips)
            log.warning("[ANOMALY] MAC %s seen with multiple IPs: %s", key, [str(i) for i in ips])
            return True
        return False

    def detect_ip_multiple_macs(self, ip: Any, mac: str) -> bool:
        """Record a pairing; return True if the IP now has several MACs."""
        key = str(_to_ip(ip))
        mac = mac.lower()
        macs = self._ip_to_macs.setdefault(key, [])
        if mac in macs:
            return False
        macs.append(mac)
        if len(macs) > 1:
            self.summary.ip_with_multiple_macs[key] = list(macs)
            log.warning("[ANOMALY] IP %s seen with multiple MACs: %s", key, macs)
            return True
        return False