import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app.core.status_report_parser import (
    derive_status_tag,
    first_defect_line,
    is_status_header,
    parse_status_report,
)
from models.status import StatusEntry, StatusTag

REPORT_TEXT = """Night Report for 13 Aug (Wed)

2 x ‘S’ Bird
F2, F3

Status 🚁
(* denotes fitted with 'S' EOSS TU)

*S2 - GR
Input: 1300
ETR: 1800

- Defect: hyd leak
> Rect: replace seal
Requirements
- G/R
> engine ground run

*F2 - S

*S0 - Major Serv (Phase)
> Post phase rcv

*F3 - S
> Post phase rcv

*S1 - AOG awaiting spares
"""


def test_entries_keyed_by_code_in_order():
    entries = parse_status_report(REPORT_TEXT)

    assert list(entries) == ["S2", "F2", "S0", "F3", "S1"]
    assert entries["S2"].title == "S2 - GR"
    assert entries["S0"].title == "S0 - Major Serv (Phase)"


def test_input_etr_and_notes_are_collected():
    s2 = parse_status_report(REPORT_TEXT)["S2"]

    assert s2.input_time == "1300"
    assert s2.etr == "1800"
    assert s2.notes == (
        "Defect: hyd leak",
        "> Rect: replace seal",
        "Requirements:",
        "G/R",
        "> engine ground run",
    )


def test_status_tags_follow_priority():
    entries = parse_status_report(REPORT_TEXT)

    assert entries["S2"].status_tag is StatusTag.RECTIFICATION
    assert entries["F2"].status_tag is StatusTag.SERVICEABLE
    assert entries["S0"].status_tag is StatusTag.IN_PHASE
    assert entries["F3"].status_tag is StatusTag.RECOVERY
    assert entries["S1"].status_tag is StatusTag.AOG


def test_derive_status_tag_direct():
    assert derive_status_tag("F2 - S") is StatusTag.SERVICEABLE
    assert derive_status_tag("F2 - ‘U/S’") is StatusTag.RECTIFICATION
    assert derive_status_tag("F2 - S", notes=("> awaiting rect",)) is StatusTag.RECTIFICATION
    assert derive_status_tag("F2 - GR AOG") is StatusTag.AOG
    assert derive_status_tag("S0 - Phase 2") is StatusTag.IN_PHASE
    assert derive_status_tag("F5 - S", notes=("Recovery",)) is StatusTag.RECOVERY


def test_words_containing_tag_text_do_not_match():
    assert derive_status_tag("F2 - S", notes=("> focus on grease points",)) is StatusTag.SERVICEABLE
    assert derive_status_tag("F2 - S", notes=("> corrected paperwork",)) is StatusTag.SERVICEABLE


def test_etr_promoted_from_notes():
    entries = parse_status_report("*F4 - GR\n> ETR: 2100\n- Defect: tail rotor")

    assert entries["F4"].etr == "2100"
    assert entries["F4"].notes[0] == "> ETR: 2100"


def test_lines_before_first_header_are_ignored():
    assert parse_status_report("Input: 1200\n- Defect: x\n> something") == {}
    assert parse_status_report("") == {}
    assert parse_status_report(None) == {}


def test_header_variants_are_recognized():
    entries = parse_status_report("> f2 - S\nS0  - Major Serv (tail)\n- * S3 - GR")

    assert list(entries) == ["F2", "S0", "S3"]
    assert entries["F2"].title == "F2 - S"


def test_repeated_header_restarts_entry_in_place():
    entries = parse_status_report("*F2 - GR\n- Defect: old\n*S1 - S\n*F2 - S")

    assert list(entries) == ["F2", "S1"]
    assert entries["F2"].title == "F2 - S"
    assert entries["F2"].notes == ()
    assert entries["F2"].status_tag is StatusTag.SERVICEABLE


def test_first_defect_line_sources():
    entries = parse_status_report(REPORT_TEXT)

    assert first_defect_line(entries["S2"]) == "hyd leak"
    assert first_defect_line(entries["S1"]) == "AOG awaiting spares"
    assert first_defect_line(StatusEntry("F5", "F5 - Defect: chip light")) == "chip light"
    assert first_defect_line(None) == ""


def test_to_dict_uses_wire_keys():
    data = parse_status_report(REPORT_TEXT)["S2"].to_dict()

    assert data["unitCode"] == "S2"
    assert data["inputTime"] == "1300"
    assert data["statusTag"] == "rectification"


def test_malformed_codes_never_become_keys():
    entries = parse_status_report("*F23 - GR\n- Defect: x\nX9 - S\n*S4 - S\nS - GR")

    assert list(entries) == ["S4"]


def test_bare_markers_do_not_add_empty_notes():
    entries = parse_status_report("F2 - S\n-\n>\n> \n- real note")

    assert entries["F2"].notes == ("real note",)


def test_is_status_header():
    assert is_status_header("> S2 - eng run") is True
    assert is_status_header("*F2 - GR") is True
    assert is_status_header("> • S2 - eng run") is False
    assert is_status_header("- Defect: S2 - leak") is False
