import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app.core.defect_parser import extract_defect, parse_defect_blocks, split_blocks

TELEGRAM_TEXT = """Morning all, defects below

F2

Date/Time ‘U/S’: 12 Aug 1400
Defect: Hyd leak at
MGB
Rect: Replace seal
ETR: 1800

G/run requirement:
- Leak check
- Ops check
FCF requirement:
- Vibration check
Workcenter: Airframes
Prime Trade: AF
System: Hydraulics

S1
Recovery
Defect: Post phase items
"""


def test_split_blocks_drops_blank_runs():
    assert split_blocks("a\n\n\nb\r\n\r\nc") == ["a", "b", "c"]
    assert split_blocks("") == []
    assert split_blocks(None) == []


def test_records_grouped_by_code_and_preamble_ignored():
    records = parse_defect_blocks(TELEGRAM_TEXT)

    assert list(records) == ["F2", "S1"]
    assert records["F2"].raw_blocks[0] == "F2"
    assert len(records["F2"].raw_blocks) == 3


def test_named_fields_are_extracted():
    f2 = parse_defect_blocks(TELEGRAM_TEXT)["F2"]

    assert f2.unserviceable_since == "12 Aug 1400"
    assert f2.defect_text == "Hyd leak at\nMGB"
    assert f2.rect_text == "Replace seal"
    assert f2.etr == "1800"
    assert f2.workcenter == "Airframes"
    assert f2.prime_trade == "AF"
    assert f2.system == "Hydraulics"
    assert f2.is_recovery is False


def test_requirement_bullets_are_split():
    f2 = parse_defect_blocks(TELEGRAM_TEXT)["F2"]

    assert f2.ground_run_requirements == ("Leak check", "Ops check")
    assert f2.flight_check_requirements == ("Vibration check",)


def test_recovery_line_sets_flag():
    s1 = parse_defect_blocks(TELEGRAM_TEXT)["S1"]

    assert s1.is_recovery is True
    assert s1.defect_text == "Post phase items"
    assert s1.rect_text == ""
    assert s1.ground_run_requirements == ()


def test_recovery_word_inside_sentence_is_not_a_flag():
    record = extract_defect("F5", ["F5\nDefect: x\nRecovery action pending"])

    assert record.is_recovery is False


def test_post_phase_rcv_sets_flag():
    record = extract_defect("F5", ["F5\nDefect: x\n> Post phase rcv"])

    assert record.is_recovery is True


def test_lowercase_label_does_not_end_defect_text():
    record = extract_defect("F5", ["F5\nDefect: engine chip\nlight: amber\nRect: swap sensor"])

    assert record.defect_text == "engine chip\nlight: amber"
    assert record.rect_text == "swap sensor"


def test_code_inside_a_block_does_not_open_a_record():
    records = parse_defect_blocks("F2\n\nnote about S1\n\nS1 is fine\nDefect: none")

    assert list(records) == ["F2"]
    assert len(records["F2"].raw_blocks) == 3


def test_to_dict_omits_raw_blocks():
    data = parse_defect_blocks(TELEGRAM_TEXT)["F2"].to_dict()

    assert data["unitCode"] == "F2"
    assert data["groundRunRequirements"] == ["Leak check", "Ops check"]
    assert "rawBlocks" not in data


def test_malformed_bare_codes_do_not_open_records():
    records = parse_defect_blocks("F23\n\nDefect: a\n\nX9\n\nDefect: b\n\nS4\n\nDefect: c")

    assert list(records) == ["S4"]
    assert records["S4"].defect_text == "c"
