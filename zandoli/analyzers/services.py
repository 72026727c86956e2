"""IP service analyzers: DHCP, DNS, LLMNR, mDNS, NetBIOS and SMB."""

from __future__ import annotations

import logging
from typing import Optional

from ..hosts import Host, HostRegistry, classify_host
from ..packet import Packet, Transport

log = logging.getLogger("zandoli.analyzers.services")


def _udp(packet: Packet) -> Optional[Transport]:
    transport = packet.transport
    if transport is None or transport.protocol != "udp":
        return None
    return transport


def _uses_port(transport: Transport, *ports: int) -> bool:
    return transport.src_port in ports or transport.dst_port in ports


def analyze_dhcp(packet: Packet, registry: HostRegistry) -> Optional[Host]:
    """Tag the sender MAC of BOOTP/DHCP traffic."""
    udp = _udp(packet)
    if udp is None or not _uses_port(udp, 67, 68):
        return None
    eth = packet.ethernet
    if eth is None:
        return None
    host = registry.get_or_create_by_mac(eth.src)
    host.protocols_seen.add("dhcp")
    log.debug("[DHCP] Detected DHCP traffic from %s", eth.src)
    return host


def analyze_dns(packet: Packet, registry: HostRegistry) -> Optional[Host]:
    """Attach names queried over DNS to the querying host."""
    udp = _udp(packet)
    if udp is None or not _uses_port(udp, 53):
        return None
    dns = packet.dns
    if dns is None or dns.qr or packet.src_ip is None:
        return None
    src_ip = packet.src_ip
    host = None
    for question in dns.questions:
        name = question.lower()
        registry.update_dns(src_ip, name)
        registry.register_ip(src_ip)
        host = registry.find_by_ip(src_ip)
        if host is not None:
            host.protocols_seen.add("DNS")
            classify_host(host)
        log.debug("[DNS] Request for %s from %s", name, src_ip)
    return host


def analyze_llmnr(packet: Packet, registry: HostRegistry) -> Optional[Host]:
    """Tag the source of LLMNR traffic, creating the host if needed."""
    udp = _udp(packet)
    if udp is None or not _uses_port(udp, 5355):
        return None
    if packet.src_ip is None:
        log.debug("[LLMNR] No IP layer found")
        return None
    host = registry.get_or_create_by_ip(packet.src_ip)
    host.protocols_seen.add("LLMNR")
    classify_host(host)
    log.debug("[LLMNR] Protocol passively detected for host %s", host.ip)
    return host


def analyze_mdns(packet: Packet, registry: HostRegistry) -> Optional[Host]:
    """Tag a known host that answers mDNS queries."""
    udp = _udp(packet)
    if udp is None or not _uses_port(udp, 5353):
        return None
    dns = packet.dns
    if dns is None or not dns.qr:
        return None
    if packet.src_ip is None:
        log.debug("[mDNS] No IP layer found")
        return None
    host = registry.find_by_ip(packet.src_ip)
    if host is None:
        log.debug("[mDNS] Host not found")
        return None
    host.protocols_seen.add("mDNS")
    classify_host(host)
    log.debug("[mDNS] Protocol detected for host %s", host.ip)
    return host


def decode_netbios_name(data: bytes) -> str:
    """Decode a 32-byte first-level encoded NetBIOS name."""
    if len(data) < 32:
        return ""
    decoded = bytearray()
    for hi, lo in zip(data[0:32:2], data[1:32:2]):
        c1 = (hi - ord("A")) & 0xFF
        c2 = (lo - ord("A")) & 0xFF
        decoded.append(((c1 << 4) | c2) & 0xFF)
    return decoded.decode("latin-1").rstrip("\x00 ")


def analyze_netbios(packet: Packet, registry: HostRegistry) -> Optional[Host]:
    """Take the NetBIOS name from UDP/137 traffic as the source host's name."""
    udp = _udp(packet)
    if udp is None or not _uses_port(udp, 137):
        return None
    payload = udp.payload
    if len(payload) < 57:
        return None
    name = decode_netbios_name(payload[13:13 + 32])
    if packet.src_ip is None:
        return None
    src_ip = packet.src_ip
    registry.update_dns(src_ip, name)
    registry.register_ip(src_ip)
    host = registry.find_by_ip(src_ip)
    if host is not None:
        host.protocols_seen.add("NetBIOS")
        classify_host(host)
    log.debug("[NetBIOS] Passive hostname: %s from %s", name, src_ip)
    return host


def analyze_smb(packet: Packet, registry: HostRegistry) -> Optional[Host]:
    """Tag the sender MAC of traffic on port 445."""
    transport = packet.transport
    if transport is None or not _uses_port(transport, 445):
        return None
    log.debug("[SMB] Detected %s/445 - attempting MAC extraction", transport.protocol.upper())
    eth = packet.ethernet
    if eth is None:
        log.warning("[SMB] Ethernet layer missing - skipping packet")
        return None
    if not eth.src:
        log.warning("[SMB] MAC address empty - skipping packet")
        return None
    host = registry.get_or_create_by_mac(eth.src)
    host.protocols_seen.add("smb")
    log.debug("[SMB] SMB traffic tagged to host %s", eth.src)
    return host