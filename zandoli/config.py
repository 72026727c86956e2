"""Configuration file loading and IP exclusion lists."""

from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

import yaml

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]


class ConfigError(Exception):
    """Raised when a configuration or exclusion file cannot be used."""


_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ns|us|µs|ms|s|m|h)")


def _parse_duration(value: Any) -> float:
    """Return a duration in seconds from a number or a string such as '1m30s'."""
    if value is None:
        return 0.0
    if isinstance(value, bool):
        raise ConfigError(f"invalid duration: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip()
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        pass
    pos = 0
    total = 0.0
    for match in _DURATION_PART.finditer(text):
        if match.start() != pos:
            raise ConfigError(f"invalid duration: {value!r}")
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    if pos != len(text):
        raise ConfigError(f"invalid duration: {value!r}")
    return total


def _as_int(value: Any, key: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"invalid integer for {key}: {value!r}")
    return value


def _as_str(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass
class ScanConfig:
    """Scan mode (passive, active, combined, pcap) and active scan type."""

    mode: str = ""
    active_type: str = ""

    @classmethod
    def from_mapping(cls, data: Any) -> "ScanConfig":
        data = data or {}
        if not isinstance(data, dict):
            raise ConfigError("'scan' must be a mapping")
        return cls(mode=_as_str(data.get("mode")), active_type=_as_str(data.get("active_type")))


@dataclass
class StealthConfig:
    """Rate limits for the stealth ARP scan; durations are in seconds."""

    max_per_second: int = 0
    max_per_burst: int = 0
    min_per_burst: int = 0
    burst_window: float = 0.0
    jitter_mean: float = 0.0
    burst_pause_min: float = 0.0
    burst_pause_max: float = 0.0

    @classmethod
    def from_mapping(cls, data: Any) -> "StealthConfig":
        data = data or {}
        if not isinstance(data, dict):
            raise ConfigError("'stealth_scan' must be a mapping")
        return cls(
            max_per_second=_as_int(data.get("max_requests_per_second"), "max_requests_per_second"),
            max_per_burst=_as_int(data.get("max_requests_per_burst"), "max_requests_per_burst"),
            min_per_burst=_as_int(data.get("min_requests_per_burst"), "min_requests_per_burst"),
            burst_window=_parse_duration(data.get("burst_interval_seconds")),
            jitter_mean=_parse_duration(data.get("jitter_mean")),
            burst_pause_min=_parse_duration(data.get("burst_pause_min")),
            burst_pause_max=_parse_duration(data.get("burst_pause_max")),
        )


DEFAULT_STEALTH = StealthConfig(
    max_per_second=3,
    max_per_burst=10,
    min_per_burst=2,
    burst_window=25.0,
    jitter_mean=0.2,
    burst_pause_min=1.0,
    burst_pause_max=3.0,
)


@dataclass
class Config:
    """Main application configuration."""

    iface: str = ""
    passive_duration: int = 0
    output_dir: str = ""
    log_file: str = ""
    log_level: str = ""
    exclude_ips: list[str] = field(default_factory=list)
    scan: ScanConfig = field(default_factory=ScanConfig)
    stealth: StealthConfig = field(default_factory=StealthConfig)


def load_config(path: str | Path) -> Config:
    """Read and parse a YAML configuration file, filling stealth defaults."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read config file {path}: {exc}") from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"cannot parse config file {path}: {exc}") from exc
    data = data or {}
    if not isinstance(data, dict):
        raise ConfigError("configuration must be a mapping")

    exclude = data.get("exclude_ips") or []
    if not isinstance(exclude, list):
        raise ConfigError("'exclude_ips' must be a list")

    cfg = Config(
        iface=_as_str(data.get("iface")),
        passive_duration=_as_int(data.get("passive_duration"), "passive_duration"),
        output_dir=_as_str(data.get("output_dir")),
        log_file=_as_str(data.get("log_file")),
        log_level=_as_str(data.get("log_level")),
        exclude_ips=[str(item) for item in exclude],
        scan=ScanConfig.from_mapping(data.get("scan")),
        stealth=StealthConfig.from_mapping(data.get("stealth_scan")),
    )
    if cfg.stealth.max_per_second == 0:
        cfg.stealth.max_per_second = DEFAULT_STEALTH.max_per_second
    if cfg.stealth.max_per_burst == 0:
        cfg.stealth.max_per_burst = DEFAULT_STEALTH.max_per_burst
    if cfg.stealth.burst_window == 0:
        cfg.stealth.burst_window = DEFAULT_STEALTH.burst_window
    return cfg


@dataclass
class ExclusionList:
    """Single addresses and subnets that must never be scanned."""

    ips: list[IPAddress] = field(default_factory=list)
    subnets: list[IPNetwork] = field(default_factory=list)

    def is_excluded(self, ip: str | IPAddress) -> bool:
        """Return True if the address matches an excluded IP or subnet."""
        addr = ipaddress.ip_address(ip) if isinstance(ip, str) else ip
        if isinstance(addr, ipaddress.IPv6Address) and addr.ipv4_mapped is not None:
            addr = addr.ipv4_mapped
        if addr in self.ips:
            return True
        return any(addr.version == net.version and addr in net for net in self.subnets)


def load_exclusions(path: str | Path) -> ExclusionList:
    """Read IPs and CIDR ranges, one per line; '#' starts a comment line."""
    exclusions = ExclusionList()
    try:
        with open(path, encoding="utf-8") as handle:
            lines = [line.strip() for line in handle]
    except OSError as exc:
        raise ConfigError(f"failed to open exclusion file: {exc}") from exc

    for line in lines:
        if not line or line.startswith("#"):
            continue
        try:
            if "/" in line:
                exclusions.subnets.append(ipaddress.ip_network(line, strict=False))
            else:
                exclusions.ips.append(ipaddress.ip_address(line))
        except ValueError:
            raise ConfigError(f"invalid entry in exclusion file: {line}") from None
    return exclusions