import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app.core.defect_parser import parse_defect_blocks
from app.core.night_report_generator import (
    EOSS_LEGEND,
    find_unknown_codes,
    format_day_header,
    generate_night_report,
    parse_code_list,
)
from app.core.status_report_parser import parse_status_report
from models.defect import DefectRecord
from models.status import StatusTag

TELEGRAM_TEXT = """F2

Date/Time ‘U/S’: 12 Aug 1400
Defect: Hyd leak
Rect: Replace seal
ETR: 1800

G/run requirement:
- Leak check
FCF requirement:
- Vibration check

S1
Recovery
Defect: Post phase items
"""


def test_format_day_header():
    assert format_day_header(date(2025, 8, 13)) == "13 Aug (Wed)"
    assert format_day_header("2025-08-04") == "4 Aug (Mon)"
    assert format_day_header("tonight") == "tonight"
    assert format_day_header(None) == ""


def test_parse_code_list_normalizes_and_dedups():
    assert parse_code_list("f2, S1 s1 X9") == ["F2", "S1"]
    assert parse_code_list(["S3", "s3", "F1"]) == ["S3", "F1"]
    assert parse_code_list(None) == []


def test_find_unknown_codes():
    assert find_unknown_codes("F2, X9 F23") == ["X9", "F23"]
    assert find_unknown_codes("") == []


def test_empty_report_layout():
    text = generate_night_report({}, "", "2025-08-13")

    assert text.split("\n") == [
        "Night Report for 13 Aug (Wed)",
        "",
        "0 x ‘S’ Bird",
        "—",
        "",
        "Fishing 🎣",
        "Nil",
        "",
        "Healing ❤️‍🩹",
        "Nil",
        "",
        "Status 🚁",
        *EOSS_LEGEND,
        "",
    ]


def test_defect_block_layout():
    defects = {"F2": DefectRecord(
        unit_code="F2",
        unserviceable_since="1400",
        etr="1800",
        defect_text="Hyd leak",
        rect_text="Replace seal",
        ground_run_requirements=("Leak check",),
    )}

    lines = generate_night_report(defects, "", "2025-08-13").split("\n")
    start = lines.index("*F2 - GR")

    assert lines[start:start + 10] == [
        "*F2 - GR",
        "Input: 1400",
        "ETR: 1800",
        "",
        "- Defect: Hyd leak",
        "> Rect: Replace seal",
        "Requirements",
        "- G/R",
        "> Leak check",
        "",
    ]


def test_serviceable_codes_skip_those_with_defects():
    defects = parse_defect_blocks(TELEGRAM_TEXT)

    text = generate_night_report(defects, "F2, F3, S4, X1", "2025-08-13", fishing="F3 0900")

    assert "3 x ‘S’ Bird\nF2, F3, S4" in text
    assert "Fishing 🎣\nF3 0900" in text
    assert "*F2 - S" not in text
    assert "*F3 - S" in text
    assert "*S4 - S" in text


def test_generated_text_parses_back_as_status_report():
    defects = parse_defect_blocks(TELEGRAM_TEXT)
    text = generate_night_report(defects, "F3, S4", date(2025, 8, 13))

    entries = parse_status_report(text)

    assert list(entries) == ["F2", "S1", "F3", "S4"]
    assert entries["F2"].status_tag is StatusTag.RECTIFICATION
    assert entries["F2"].input_time == "12 Aug 1400"
    assert entries["F2"].etr == "1800"
    assert "> Rect: Replace seal" in entries["F2"].notes
    assert "> Vibration check" in entries["F2"].notes
    assert "> Post phase rcv" in entries["S1"].notes
    assert entries["F3"].status_tag is StatusTag.SERVICEABLE
    assert entries["S4"].status_tag is StatusTag.SERVICEABLE


def test_multiline_texts_and_code_like_requirements_stay_in_their_entry():
    telegram = (
        "F2\n\n"
        "Defect: hyd leak at\nstation 5 aft\n"
        "Rect: replace seal\n\n"
        "G/run requirement:\n- S2 - eng run\n"
        "FCF requirement:\n- F3 - hover check\n"
    )
    defects = parse_defect_blocks(telegram)

    text = generate_night_report(defects, "F3", "2025-08-13", healing="S2 - 1300 FCF")
    entries = parse_status_report(text)

    assert list(entries) == ["F2", "F3"]
    f2 = entries["F2"]
    assert "Defect: hyd leak at station 5 aft" in f2.notes
    assert "> Rect: replace seal" in f2.notes
    assert "> • S2 - eng run" in f2.notes
    assert "> • F3 - hover check" in f2.notes
    assert entries["F3"].status_tag is StatusTag.SERVICEABLE
    assert "Healing ❤️‍🩹\n• S2 - 1300 FCF" in text


def test_rect_text_is_collapsed_to_one_line():
    defects = {"S1": DefectRecord(unit_code="S1", defect_text="a\n b", rect_text="replace\nseal")}

    lines = generate_night_report(defects, "", "2025-08-13").split("\n")

    assert "- Defect: a b" in lines
    assert "> Rect: replace seal" in lines
