"""MAC vendor lookup, OUI filter lists and vendor categorisation."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from pathlib import Path

log = logging.getLogger("zandoli.oui")


class LabelType(str, enum.Enum):
    DEFENSIVE = "defensive"
    BLACKLISTED = "blacklisted"


@dataclass(frozen=True)
class LabelInfo:
    type: LabelType
    source: str


def normalize_oui(mac: str) -> str:
    """Return the upper-case six-hex-digit OUI of a MAC, or '' if too short."""
    clean = mac.replace(":", "").upper()
    return clean[:6] if len(clean) >= 6 else ""


def read_lines(path: str | Path) -> list[str]:
    """Return the stripped, non-empty, non-comment lines of a file."""
    with open(path, encoding="utf-8") as handle:
        stripped = (line.strip() for line in handle)
        return [line for line in stripped if line and not line.startswith("#")]


@dataclass
class OUIDatabase:
    """Vendor names and defensive/blacklist labels keyed by OUI."""

    vendors: dict[str, str] = field(default_factory=dict)
    labels: dict[str, LabelInfo] = field(default_factory=dict)

    def load_vendors(self, path: str | Path) -> None:
        """Load 'OUI<TAB>Vendor' lines."""
        for line in read_lines(path):
            parts = line.split("\t", 1)
            if len(parts) != 2:
                continue
            oui = normalize_oui(parts[0])
            vendor = parts[1].strip()
            if oui and vendor:
                self.vendors[oui] = vendor

    def load_oui_lists(self, defensive_path: str | Path, blacklist_path: str | Path) -> None:
        """Load and merge the defensive and blacklisted OUI files."""
        self._load_label_file(defensive_path, LabelType.DEFENSIVE)
        self._load_label_file(blacklist_path, LabelType.BLACKLISTED)

    def _load_label_file(self, path: str | Path, label: LabelType) -> None:
        for line in read_lines(path):
            oui = normalize_oui(line)
            if oui:
                self.labels[oui] = LabelInfo(type=label, source=str(path))

    def is_filtered(self, mac: str) -> bool:
        return normalize_oui(mac) in self.labels

    def get_label(self, mac: str) -> tuple[LabelType | str, bool]:
        """Return the label type of a MAC and whether one was found."""
        info = self.labels.get(normalize_oui(mac))
        if info is None:
            return "unknown", False
        return info.type, True

    def get_vendor(self, mac: str) -> str:
        return self.vendors.get(normalize_oui(mac), "Unknown")


_CATEGORIES: list[tuple[str, tuple[str, ...]]] = [
    ("workstation", ("dell", "lenovo", "hp", "hewlett", "samsung", "apple", "acer", "asus",
                     "toshiba", "msi")),
    ("printer", ("canon", "epson", "brother", "ricoh", "lexmark", "xerox", "kyocera")),
    ("network", ("cisco", "juniper", "arista", "netgear", "tp link", "d link", "extremenetworks",
                 "ubiquiti", "mikrotik", "huawei", "asus", "linksys", "zyxel")),
    ("iot", ("espressif", "tuya", "sonoff", "shelly", "broadlink", "tplink", "nordic",
             "smartthings")),
    ("virtual", ("vmware", "virtualbox", "xen", "qemu", "parallels")),
    ("firewall", ("fortinet", "palo alto", "sophos", "watchguard", "checkpoint")),
    ("access_point", ("aruba", "linksys", "ubiquiti", "tp link", "d link")),
    ("camera", ("hikvision", "dahua", "axis", "reolink", "amcrest")),
    ("storage", ("synology", "qnap", "seagate", "wd", "western digital", "drobo")),
]

_SEPARATORS = str.maketrans({c: " " for c in "-:.,_"})


def guess_category(vendor: str) -> str:
    """Guess a device category from a vendor name."""
    normalized = vendor.lower().translate(_SEPARATORS)
    log.debug("[GuessCategory] Vendor raw: '%s' | Normalized: '%s'", vendor, normalized)
    for category, keywords in _CATEGORIES:
        if any(word in normalized for word in keywords):
            return category
    log.debug("[GuessCategory] Unmatched category for vendor: '%s'", vendor)
    return "unknown"