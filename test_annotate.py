import csv
from datetime import date

import pytest

from lunar_phases import annotate
from lunar_phases.annotate import annotate_rows, main, parse_date


def read_rows(path):
    with path.open(newline="") as f:
        return list(csv.DictReader(f))


def test_parse_date_formats():
    assert parse_date("2025-01-14") == date(2025, 1, 14)
    assert parse_date("01/14/2025") == date(2025, 1, 14)
    assert parse_date(" ") is None
    assert parse_date("14.01.2025") is None


def test_annotate_rows_fills_columns():
    rows = [
        {"date": "2025-01-14"},
        {"date": "01/16/2025", "timezone": "Europe/London"},
    ]

    updated, skipped = annotate_rows(rows, "Australia/Brisbane")

    assert (updated, skipped) == (2, 0)
    assert rows[0]["moon_phase"] == "Full Moon"
    assert rows[0]["moon_primary"] == "full_moon"
    assert rows[0]["moon_offset"] == "0"
    assert rows[0]["moon_id"] == "22"
    assert rows[1]["moon_phase"] == "Full Moon+3"
    assert rows[1]["moon_id"] == "25"
    assert 0.0 <= float(rows[0]["moon_illumination"]) <= 1.0


def test_annotate_rows_skips_unusable_rows():
    rows = [
        {"date": ""},
        {"date": "garbage"},
        {"date": "1990-01-01"},
        {"date": "2025-01-14", "timezone": "Invalid/Zone"},
        {"date": "2025-01-29", "moon_phase": "stale"},
    ]

    updated, skipped = annotate_rows(rows, "Australia/Brisbane")

    assert (updated, skipped) == (1, 4)
    assert all(r["moon_phase"] == "" for r in rows[:4])
    assert rows[4]["moon_phase"] == "New Moon"


def test_main_rewrites_csv(tmp_path, capsys):
    path = tmp_path / "events.csv"
    path.write_text("camera,date\ngate,2025-01-14\ngate,\n")

    main([str(path)])

    rows = read_rows(path)
    assert list(rows[0].keys()) == ["camera", "date"] + annotate.MOON_FIELDS
    assert rows[0]["moon_phase"] == "Full Moon"
    assert rows[1]["moon_phase"] == ""
    assert "1 rows annotated, 1 skipped" in capsys.readouterr().out


def test_main_keeps_existing_columns_in_place(tmp_path):
    path = tmp_path / "events.csv"
    path.write_text("moon_phase,date,note\nstale,2025-01-15,x\n")

    main([str(path)])

    header = path.read_text().splitlines()[0].split(",")
    assert header == ["moon_phase", "date", "note"] + annotate.MOON_FIELDS[1:]
    row = read_rows(path)[0]
    assert row["moon_phase"] == "Full Moon+1"
    assert row["note"] == "x"


def test_main_uses_configured_default_path(tmp_path, monkeypatch):
    path = tmp_path / "events.csv"
    path.write_text("date\n2025-01-15\n")
    monkeypatch.setattr(annotate.config, "EVENTS_CSV", path)

    main([])

    assert read_rows(path)[0]["moon_phase"] == "Full Moon+1"


def test_main_missing_file(tmp_path):
    with pytest.raises(SystemExit, match="not found"):
        main([str(tmp_path / "nope.csv")])
