"""Writing scan results as JSON, CSV and HTML reports."""

from __future__ import annotations

import csv
import html
import json
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable

from .hosts import Host

_FILE_STAMP = "%Y-%m-%dT%H-%M-%S"
_HTML_STAMP = "%Y-%m-%d %H:%M:%S"

_HTML_HEAD = (
    "<html><head><meta charset='utf-8'><style>",
    "table {border-collapse: collapse; width: 100%;}",
    "th, td {border: 1px solid #ddd; padding: 8px; font-family: monospace;}",
    "th {background-color: #f2f2f2;}",
    "</style></head><body>",
)
_HTML_COLUMNS = (
    "<tr><th>#</th><th>IP Address</th><th>MAC Address</th><th>Timestamp</th>"
    "<th>Detection</th><th>Protocols</th></tr>"
)


@dataclass
class ScanResult:
    """The JSON report: scan metadata plus hosts split by detection method."""

    scan_timestamp: str
    interface: str
    duration_passive_seconds: int
    host_count: dict[str, int] = field(default_factory=dict)
    passive: list[Host] = field(default_factory=list)
    active: list[Host] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "scan_timestamp": self.scan_timestamp,
            "interface": self.interface,
            "duration_passive_seconds": self.duration_passive_seconds,
            "host_count": dict(self.host_count),
            "passive": [host.to_dict() for host in self.passive],
            "active": [host.to_dict() for host in self.active],
        }


def protocols_to_list(protocols: Iterable[str]) -> list[str]:
    """Return the protocol names in sorted order."""
    return sorted(protocols)


def _by_method(hosts: list[Host], method: str) -> list[Host]:
    return [host for host in hosts if host.detection_method.lower() == method]


def _ip_text(host: Host) -> str:
    return "" if host.ip is None else str(host.ip)


def _write_json(result: ScanResult, path: Path) -> None:
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(result.to_dict(), handle, indent=2, ensure_ascii=False)
        handle.write("\n")


def _write_csv(hosts: list[Host], path: Path) -> None:
    with open(path, "w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle, lineterminator="\n")
        writer.writerow(["IP", "MAC", "Timestamp", "DetectionMethod"])
        for host in hosts:
            writer.writerow([
                _ip_text(host),
                host.mac,
                host.timestamp.isoformat(timespec="seconds"),
                host.detection_method,
            ])


def _html_title(passive: int, active: int) -> str:
    if passive and active:
        return "Discovered Hosts (Combined Mode)"
    if passive:
        return "Discovered Hosts (Passive Mode)"
    if active:
        return "Discovered Hosts (Active Mode)"
    return "Discovered Hosts"


def _write_html(hosts: list[Host], path: Path) -> None:
    passive = len(_by_method(hosts, "passive"))
    active = len(_by_method(hosts, "active"))
    lines = list(_HTML_HEAD)
    lines.append(f"<h2>{_html_title(passive, active)}</h2>")
    lines.append(f"<p>Total: {len(hosts)} | Passive: {passive} | Active: {active}</p>")
    lines.append("<table>")
    lines.append(_HTML_COLUMNS)
    for number, host in enumerate(hosts, start=1):
        cells = [
            str(number),
            _ip_text(host),
            host.mac,
            host.timestamp.strftime(_HTML_STAMP),
            host.detection_method,
            ", ".join(protocols_to_list(host.protocols_seen)),
        ]
        lines.append("<tr>" + "".join(f"<td>{html.escape(c)}</td>" for c in cells) + "</tr>")
    lines.append("</table></body></html>")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def export_all(hosts: Iterable[Host], output_dir: str | Path, iface: str, duration: int) -> list[Path]:
    """Write the JSON, CSV and HTML reports; return their paths in that order."""
    hosts = list(hosts)
    now = datetime.now().astimezone()
    base = Path(output_dir) / f"Results_{now.strftime(_FILE_STAMP)}"

    passive = _by_method(hosts, "passive")
    active = _by_method(hosts, "active")
    result = ScanResult(
        scan_timestamp=now.isoformat(timespec="seconds"),
        interface=iface,
        duration_passive_seconds=duration,
        host_count={"total": len(hosts), "passive": len(passive), "active": len(active)},
        passive=passive,
        active=active,
    )

    json_path = base.with_name(base.name + ".json")
    csv_path = base.with_name(base.name + ".csv")
    html_path = base.with_name(base.name + ".html")
    _write_json(result, json_path)
    _write_csv(hosts, csv_path)
    _write_html(hosts, html_path)
    return [json_path, csv_path, html_path]