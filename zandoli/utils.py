"""IP range iteration, UCS-2 decoding and interface lookup helpers."""

from __future__ import annotations

import ipaddress
import socket
from dataclasses import dataclass
from typing import Iterator, Optional, Union

import psutil

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]


def inc_ip(ip: IPAddress) -> IPAddress:
    """Return the next address, wrapping around at the top of the space."""
    size = 1 << ip.max_prefixlen
    return type(ip)((int(ip) + 1) % size)


def ips_in_subnet(subnet: str | IPNetwork, exclude: Optional[str | IPAddress] = None) -> Iterator[IPAddress]:
    """Yield every address of a subnet in order, except the excluded one."""
    network = ipaddress.ip_network(subnet, strict=False) if isinstance(subnet, str) else subnet
    skip = ipaddress.ip_address(exclude) if isinstance(exclude, str) and exclude else exclude
    for ip in network:
        if ip != skip:
            yield ip


def bytes_to_utf16(data: bytes) -> list[int]:
    """Split little-endian UCS-2 bytes into 16-bit code units."""
    return [int.from_bytes(data[i:i + 2], "little") for i in range(0, len(data) - 1, 2)]


def decode_utf16(units: list[int]) -> str:
    """Decode code units up to the first NUL; surrogates become U+FFFD."""
    chars = []
    for unit in units:
        if unit == 0:
            break
        chars.append("\ufffd" if 0xD800 <= unit <= 0xDFFF else chr(unit))
    return "".join(chars)


@dataclass(frozen=True)
class InterfaceInfo:
    name: str
    ip: Optional[ipaddress.IPv4Address]
    mac: str


def _addresses(name: str):
    addrs = psutil.net_if_addrs().get(name)
    if addrs is None:
        raise LookupError(f"no such network interface: {name}")
    return addrs


def get_interface_info(name: str) -> InterfaceInfo:
    """Return the first IPv4 address and the MAC of an interface."""
    addrs = _addresses(name)
    if not addrs:
        raise LookupError(f"No IP found on interface {name}")
    ip = next(
        (ipaddress.IPv4Address(a.address) for a in addrs if a.family == socket.AF_INET),
        None,
    )
    mac = next((a.address.lower().replace("-", ":") for a in addrs if a.family == psutil.AF_LINK), "")
    return InterfaceInfo(name=name, ip=ip, mac=mac)


def get_local_subnet(ip: str | ipaddress.IPv4Address, name: str) -> ipaddress.IPv4Network:
    """Return the network that the interface's address belongs to."""
    wanted = ipaddress.ip_address(ip)
    for addr in _addresses(name):
        if addr.family != socket.AF_INET or not addr.netmask:
            continue
        if ipaddress.IPv4Address(addr.address) == wanted:
            return ipaddress.IPv4Network(f"{wanted}/{addr.netmask}", strict=False)
    raise LookupError(f"Subnet not found for IP {wanted}")