"""Runs every packet analyzer on each captured frame."""

from __future__ import annotations

import contextlib
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Callable

from .analyzers.layer2 import analyze_8021x, analyze_cdp, analyze_lldp, analyze_stp
from .analyzers.meta import MACIPTracker
from .analyzers.services import (
    analyze_dhcp,
    analyze_dns,
    analyze_llmnr,
    analyze_mdns,
    analyze_netbios,
    analyze_smb,
)
from .hosts import HostRegistry
from .packet import Packet
from .security import TopologyProtocols

Analyzer = Callable[[Packet], Any]


def default_analyzers(registry: HostRegistry, topology: TopologyProtocols,
                      meta_tracker: MACIPTracker) -> list[Analyzer]:
    """Return the standard analyzer chain in its fixed order."""
    return [
        topology.observe,
        partial(analyze_8021x, registry=registry),
        partial(analyze_lldp, registry=registry),
        partial(analyze_cdp, registry=registry),
        partial(analyze_stp, registry=registry),
        partial(analyze_dns, registry=registry),
        partial(analyze_mdns, registry=registry),
        partial(analyze_dhcp, registry=registry),
        partial(analyze_llmnr, registry=registry),
        partial(analyze_netbios, registry=registry),
        partial(analyze_smb, registry=registry),
        meta_tracker.observe,
    ]


@dataclass
class Dispatcher:
    """Calls each analyzer in order; a failing analyzer does not stop the others."""

    analyzers: list[Analyzer] = field(default_factory=list)

    def handle_packet(self, packet: Packet) -> int:
        """Run all analyzers on a packet and return how many of them failed."""
        failures = 0
        for analyzer in self.analyzers:
            with contextlib.suppress(Exception):
                analyzer(packet)
                continue
            failures += 1
        return failures