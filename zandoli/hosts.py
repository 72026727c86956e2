"""Discovered hosts, their classification and the registry holding them."""

from __future__ import annotations

import ipaddress
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterator, Optional, Union

from .oui import OUIDatabase, guess_category

log = logging.getLogger("zandoli.hosts")

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

_PRIVATE_NETWORKS = tuple(
    ipaddress.IPv4Network(cidr) for cidr in ("10.0.0.0/8", "172.16.0.0/12", "192.168.0.0/16")
)


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


def _now() -> datetime:
    return datetime.now().astimezone()


def is_private_ip(ip: Any) -> bool:
    """Return True for IPv4 addresses in the RFC 1918 private ranges."""
    addr = _to_ip(ip)
    return addr.version == 4 and any(addr in net for net in _PRIVATE_NETWORKS)


@dataclass
class Host:
    """A device seen on the network."""

    ip: Optional[IPAddress] = None
    mac: str = ""
    timestamp: datetime = field(default_factory=_now)
    detection_method: str = ""
    vendor: str = ""
    category: str = ""
    hostname: str = ""
    domain_name: str = ""
    protocols_seen: set[str] = field(default_factory=set)
    protocols: set[str] = field(default_factory=set)
    metadata: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping of the host."""
        return {
            "ip": "" if self.ip is None else str(self.ip),
            "mac": self.mac,
            "timestamp": self.timestamp.isoformat(timespec="seconds"),
            "detection_method": self.detection_method,
            "vendor": self.vendor,
            "category": self.category,
            "hostname": self.hostname,
            "domain_name": self.domain_name,
            "protocols_seen": {name: True for name in sorted(self.protocols_seen)},
            "protocols": {name: True for name in sorted(self.protocols)},
            "metadata": dict(self.metadata),
        }


def new_host(ip: Any, mac: str, method: str, oui_db: Optional[OUIDatabase] = None) -> Host:
    """Create a host with its vendor and vendor-based category filled in."""
    db = oui_db if oui_db is not None else OUIDatabase()
    mac = mac.lower()
    vendor = db.get_vendor(mac)
    host = Host(
        ip=None if ip is None else _to_ip(ip),
        mac=mac,
        detection_method=method,
        vendor=vendor,
        category=guess_category(vendor),
    )
    log.debug("NewHost => IP=%s MAC=%s Vendor=%s InitialCategory=%s",
              host.ip, host.mac, host.vendor, host.category)
    return host


def classify_host(host: Host) -> str:
    """Set and return the host's category from the protocols it was seen using."""
    seen = host.protocols_seen
    if seen & {"SMB", "NetBIOS"}:
        host.category = "server"
    elif seen & {"DHCP", "mDNS", "LLMNR"}:
        host.category = "workstation"
    elif seen & {"CDP", "LLDP", "STP"}:
        host.category = "network"
    else:
        host.category = guess_category(host.vendor)
    log.debug("ClassifyHost => IP=%s Category=%s", host.ip, host.category)
    return host.category


@dataclass
class HostRegistry:
    """All hosts discovered so far and the private /24 networks seen."""

    hosts: list[Host] = field(default_factory=list)
    networks: set[str] = field(default_factory=set)

    def __iter__(self) -> Iterator[Host]:
        return iter(self.hosts)

    def __len__(self) -> int:
        return len(self.hosts)

    def add(self, host: Host) -> Host:
        self.hosts.append(host)
        return host

    def find_by_ip(self, ip: Any) -> Optional[Host]:
        addr = _to_ip(ip)
        for host in self.hosts:
            if host.ip is not None and host.ip == addr:
                return host
        return None

    def is_known_ip(self, ip: Any) -> bool:
        return self.find_by_ip(ip) is not None

    def is_known_mac(self, mac: str) -> bool:
        mac = mac.lower()
        return any(host.mac == mac for host in self.hosts)

    def update_dns(self, ip: Any, domain: str) -> Optional[Host]:
        """Attach a resolved name to the host with this IP, if there is one."""
        host = self.find_by_ip(ip)
        if host is None:
            return None
        if not host.domain_name:
            host.domain_name = domain
        if not host.hostname:
            host.hostname = domain.split(".")[0]
        host.protocols_seen.add("dns")
        self.register_ip(ip)
        return host

    def register_ip(self, ip: Any) -> bool:
        """Record the /24 of a private IPv4 address; return True if it is new."""
        addr = _to_ip(ip)
        if addr.version != 4 or not is_private_ip(addr):
            return False
        network = ipaddress.IPv4Network((addr, 24), strict=False)
        key = f"{network.network_address}/24"
        if key in self.networks:
            return False
        self.networks.add(key)
        return True

    def get_or_create_by_mac(self, mac: str) -> Host:
        mac = mac.lower()
        for host in self.hosts:
            if host.mac == mac:
                return host
        return self.add(Host(mac=mac))

    def get_or_create_by_ip(self, ip: Any) -> Host:
        addr = _to_ip(ip)
        existing = self.find_by_ip(addr)
        if existing is not None:
            return existing
        return self.add(Host(ip=addr))