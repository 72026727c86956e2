import pytest

from zandoli.oui import LabelType, OUIDatabase, guess_category, normalize_oui, read_lines


def test_normalize_oui():
    assert normalize_oui("0a:1b:2c:3d:4e:5f") == "0A1B2C"
    assert normalize_oui("0a:1b") == ""


def test_read_lines_skips_comments_and_blanks(tmp_path):
    path = tmp_path / "list.txt"
    path.write_text("# header\n\n  AA:BB:CC  \nDD:EE:FF\n", encoding="utf-8")
    assert read_lines(path) == ["AA:BB:CC", "DD:EE:FF"]


def test_read_lines_missing_file(tmp_path):
    with pytest.raises(OSError):
        read_lines(tmp_path / "nope.txt")


def test_vendors(tmp_path):
    path = tmp_path / "vendors.txt"
    path.write_text("0a:1b:2c\tExample Vendor\nbadline\n", encoding="utf-8")
    db = OUIDatabase()
    db.load_vendors(path)
    assert db.get_vendor("0a:1b:2c:00:00:01") == "Example Vendor"
    assert db.get_vendor("0e:0e:0e:00:00:01") == "Unknown"


def test_oui_lists_and_labels(tmp_path):
    defensive = tmp_path / "def.txt"
    black = tmp_path / "black.txt"
    defensive.write_text("0a:1b:2c\n", encoding="utf-8")
    black.write_text("0d:0e:0f\n", encoding="utf-8")
    db = OUIDatabase()
    db.load_oui_lists(defensive, black)
    assert db.is_filtered("0a:1b:2c:11:22:33")
    assert db.get_label("0d:0e:0f:11:22:33") == (LabelType.BLACKLISTED, True)
    assert db.get_label("0a:1b:2c:11:22:33") == (LabelType.DEFENSIVE, True)
    assert db.get_label("02:00:00:11:22:33") == ("unknown", False)
    assert not db.is_filtered("02:00:00:11:22:33")


def test_oui_lists_missing_file(tmp_path):
    with pytest.raises(OSError):
        OUIDatabase().load_oui_lists(tmp_path / "a", tmp_path / "b")


@pytest.mark.parametrize(
    "vendor, expected",
    [
        ("Dell Inc.", "workstation"),
        ("Cisco Systems", "network"),
        ("Espressif Inc.", "iot"),
        ("VMware, Inc.", "virtual"),
        ("Fortinet", "firewall"),
        ("Hikvision", "camera"),
        ("Synology", "storage"),
        ("Canon", "printer"),
        ("Zzz Corp", "unknown"),
    ],
)
def test_guess_category(vendor, expected):
    assert guess_category(vendor) == expected


def test_guess_category_separators_normalised():
    assert guess_category("TP-Link") == guess_category("tp link")