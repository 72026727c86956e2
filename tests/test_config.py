import ipaddress

import pytest

from zandoli.config import (
    DEFAULT_STEALTH,
    Config,
    ConfigError,
    ExclusionList,
    load_config,
    load_exclusions,
)


def write(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "ip, expected",
    [
        ("192.168.1.42", True),
        ("10.5.5.5", True),
        ("172.16.42.42", True),
        ("192.168.2.1", False),
        ("8.8.8.8", False),
    ],
)
def test_load_excluded_subnets(tmp_path, ip, expected):
    path = write(
        tmp_path,
        "excluded.txt",
        "\n192.168.1.0/24\n10.0.0.0/8\n172.16.0.0/12\n# this is a comment\n",
    )
    exclusions = load_exclusions(path)
    assert exclusions.is_excluded(ip) is expected


def test_single_ip_exclusion(tmp_path):
    path = write(tmp_path, "excluded.txt", "192.168.5.7\n")
    exclusions = load_exclusions(path)
    assert exclusions.is_excluded(ipaddress.ip_address("192.168.5.7"))
    assert not exclusions.is_excluded("192.168.5.8")
    assert exclusions.subnets == []


def test_invalid_exclusion_entry(tmp_path):
    path = write(tmp_path, "excluded.txt", "not-an-ip\n")
    with pytest.raises(ConfigError):
        load_exclusions(path)


def test_missing_exclusion_file(tmp_path):
    with pytest.raises(ConfigError):
        load_exclusions(tmp_path / "missing.txt")


def test_empty_exclusion_list_excludes_nothing():
    assert not ExclusionList().is_excluded("10.0.0.1")


def test_load_config_applies_defaults(tmp_path):
    path = write(
        tmp_path,
        "config.yaml",
        "iface: eth0\npassive_duration: 30\noutput_dir: out\nscan:\n  mode: passive\n",
    )
    cfg = load_config(path)
    assert cfg.iface == "eth0"
    assert cfg.passive_duration == 30
    assert cfg.scan.mode == "passive"
    assert cfg.stealth.max_per_second == 3
    assert cfg.stealth.max_per_burst == 10
    assert cfg.stealth.burst_window == DEFAULT_STEALTH.burst_window
    assert cfg.stealth.min_per_burst == 0


def test_load_config_keeps_explicit_values(tmp_path):
    path = write(
        tmp_path,
        "config.yaml",
        "stealth_scan:\n  max_requests_per_second: 7\n  burst_interval_seconds: 5\n"
        "  jitter_mean: 200ms\n",
    )
    cfg = load_config(path)
    assert cfg.stealth.max_per_second == 7
    assert cfg.stealth.burst_window == 5.0
    assert cfg.stealth.jitter_mean == pytest.approx(0.2)


def test_load_config_empty_file(tmp_path):
    cfg = load_config(write(tmp_path, "config.yaml", ""))
    assert cfg.iface == Config().iface
    assert cfg.stealth.max_per_burst == DEFAULT_STEALTH.max_per_burst


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "nonexistent.yaml")


def test_load_config_invalid_yaml(tmp_path):
    with pytest.raises(ConfigError):
        load_config(write(tmp_path, "config.yaml", "iface: [unclosed\n"))