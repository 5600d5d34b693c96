from datetime import UTC, datetime
from pathlib import Path

import pytest

from team_shuffle.errors import UsageLogError
from team_shuffle.usage_log import UsageLog, format_entry

MOMENT = datetime(2024, 5, 1, 12, 30, 15, 123456, tzinfo=UTC)


def test_format_entry_layout():
    entry = format_entry(["A", "B", "C", "D"], ["A", "C"], ["B", "D"], "10.0.0.1", MOMENT)
    delimiter = "-" * 50
    assert entry == (
        "\n"
        f"{delimiter}\n"
        "Time: 2024-05-01T12:30:15.123Z\n"
        "IP: 10.0.0.1\n"
        'Input Players: ["A","B","C","D"]\n'
        "Result:\n"
        '  Blue Team: ["A","C"]\n'
        '  Red Team: ["B","D"]\n'
        f"{delimiter}\n"
    )


def test_format_entry_keeps_unicode_names():
    entry = format_entry(["페이커", "Bob"], ["페이커"], ["Bob"], None, MOMENT)
    assert 'Input Players: ["페이커","Bob"]' in entry
    assert "IP: unknown" in entry


def test_append_creates_directory_and_accumulates(tmp_path: Path):
    log = UsageLog(tmp_path / "logs" / "usage.log")
    log.append(["A", "B"], ["A"], ["B"], "1.1.1.1", MOMENT)
    log.append(["C", "D"], ["D"], ["C"], "2.2.2.2", MOMENT)

    text = log.path.read_text(encoding="utf-8")
    assert text.count("Time: 2024-05-01T12:30:15.123Z") == 2
    assert text.index("IP: 1.1.1.1") < text.index("IP: 2.2.2.2")


def test_record_safely_swallows_write_errors(tmp_path: Path):
    # a directory where the file should be makes open() fail
    target = tmp_path / "usage.log"
    target.mkdir()
    log = UsageLog(target)
    assert log.record_safely(["A", "B"], ["A"], ["B"], "1.1.1.1") is False


def test_record_safely_reports_success(tmp_path: Path):
    log = UsageLog(tmp_path / "usage.log")
    assert log.record_safely(["A", "B"], ["B"], ["A"], "1.1.1.1") is True
    assert "Blue Team: [\"B\"]" in log.path.read_text(encoding="utf-8")


def test_unencodable_name_is_reported_not_raised(tmp_path: Path):
    log = UsageLog(tmp_path / "usage.log")
    with pytest.raises(UsageLogError):
        log.append(["\ud800", "B"], ["\ud800"], ["B"], "1.1.1.1", MOMENT)
    assert log.record_safely(["\ud800", "B"], ["\ud800"], ["B"], "1.1.1.1") is False


def test_record_safely_swallows_unexpected_errors(tmp_path: Path, monkeypatch):
    log = UsageLog(tmp_path / "usage.log")

    def _explode(*args, **kwargs):
        raise RuntimeError("sink exploded")

    monkeypatch.setattr(log, "append", _explode)
    assert log.record_safely(["A", "B"], ["A"], ["B"], "1.1.1.1") is False
