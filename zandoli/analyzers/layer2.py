"""Layer 2 analyzers: 802.1X/EAPOL, CDP, LLDP and STP detection."""

from __future__ import annotations

import logging
from typing import Optional

from ..hosts import Host, HostRegistry
from ..packet import ETHERTYPE_EAPOL, ETHERTYPE_LLDP, Packet

log = logging.getLogger("zandoli.analyzers.layer2")

CDP_MULTICAST = "01:00:0c:cc:cc:cc"
STP_MULTICAST = "01:80:c2:00:00:00"


def _tag(registry: HostRegistry, mac: str, protocol: str) -> Host:
    host = registry.get_or_create_by_mac(mac)
    host.protocols_seen.add(protocol)
    return host


def analyze_8021x(packet: Packet, registry: HostRegistry) -> Optional[Host]:
    """Tag the sender of an EAPOL (802.1X) frame; return the host or None."""
    eth = packet.ethernet
    if eth is None or eth.ethertype != ETHERTYPE_EAPOL:
        return None
    host = _tag(registry, eth.src, "eapol")
    log.debug("[802.1X] Detected EAPOL traffic from %s", eth.src)
    return host


def analyze_cdp(packet: Packet, registry: HostRegistry) -> Optional[Host]:
    """Tag the sender of a frame addressed to the CDP multicast MAC."""
    eth = packet.ethernet
    if eth is None or eth.dst != CDP_MULTICAST:
        return None
    host = _tag(registry, eth.src, "cdp")
    log.debug("[CDP] Cisco Discovery Protocol detected from %s", eth.src)
    return host


def analyze_lldp(packet: Packet, registry: HostRegistry) -> Optional[Host]:
    """Tag the sender of an LLDP frame."""
    eth = packet.ethernet
    if eth is None or eth.ethertype != ETHERTYPE_LLDP:
        return None
    host = _tag(registry, eth.src, "lldp")
    log.debug("[LLDP] Protocol detected from %s", eth.src)
    return host


def analyze_stp(packet: Packet, registry: HostRegistry) -> Optional[Host]:
    """Tag the sender of an LLC frame sent to the STP multicast MAC."""
    eth = packet.ethernet
    if eth is None or eth.dst != STP_MULTICAST or not packet.llc:
        return None
    host = _tag(registry, eth.src, "stp")
    log.debug("[STP] Spanning Tree Protocol detected from %s", eth.src)
    return host