"""Console summary tables of discovered hosts."""

from __future__ import annotations

from typing import Iterable

from .hosts import Host

SUMMARY_HEADER = "========== SCAN SUMMARY =========="
SUMMARY_FOOTER = "=================================="
DIVIDER = (
    "+----------------+---------------------+---------------------------+"
    "-------------------+-------------+------------------------------+"
)
_ROW = "| {:<15} | {:<19} | {:<25} | {:<17} | {:<11} | {:<28} |"


def truncate(text: str, limit: int) -> str:
    """Shorten text to `limit` characters, ending with '...' when cut."""
    if len(text) <= limit:
        return text
    return text[:limit - 3] + "..."


def format_protocols(protocols: Iterable[str]) -> str:
    """Return the protocol names sorted and comma separated."""
    return ",".join(sorted(protocols))


def filter_hosts_by_method(hosts: Iterable[Host], method: str) -> list[Host]:
    """Return the hosts whose detection method matches, ignoring case."""
    return [host for host in hosts if host.detection_method.lower() == method]


def format_hosts_table(hosts: Iterable[Host]) -> str:
    """Render hosts as a fixed-width table sorted by IP text."""
    ordered = sorted(hosts, key=lambda h: "" if h.ip is None else str(h.ip))
    lines = [
        DIVIDER,
        _ROW.format("IP Address", "MAC Address", "Vendor", "Detection Method", "Category", "Protocols"),
        DIVIDER,
    ]
    for host in ordered:
        vendor = truncate(host.vendor, 25) or "Unknown"
        lines.append(_ROW.format(
            "" if host.ip is None else str(host.ip),
            host.mac,
            vendor,
            host.detection_method,
            host.category,
            truncate(format_protocols(host.protocols_seen), 28),
        ))
    lines.append(DIVIDER)
    return "\n".join(lines)


def display_summary(hosts: Iterable[Host]) -> None:
    """Print the passive and active hosts as tables with totals."""
    hosts = list(hosts)
    print(SUMMARY_HEADER)
    if not hosts:
        print("No hosts discovered.")
        print(SUMMARY_FOOTER)
        return

    passive = filter_hosts_by_method(hosts, "passive")
    active = filter_hosts_by_method(hosts, "active")
    if passive:
        print(f"🟢 Passive Discovery (Total: {len(passive)})")
        print(format_hosts_table(passive))
    if active:
        print(f"🔴 Active Discovery (Total: {len(active)})")
        print(format_hosts_table(active))
    print(f"\n🧮 Total hosts discovered: {len(hosts)}")
    print(SUMMARY_FOOTER)