import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from utils.observability import (
    PARSE_SLO_MS,
    Events,
    emit_event,
    evaluate_parse_budget,
    get_session_id,
    metrics_snapshot,
    publish_release_report,
    record_cache_result,
    record_parse_duration,
    reset_metrics,
)


class _FakeStructuredLogger:
    def __init__(self) -> None:
        self.calls = []

    def log(self, level: str, message: str, **context):
        self.calls.append((level, message, context))


def setup_function():
    reset_metrics()


def test_emit_event_includes_standard_event_key_and_session_id():
    logger = _FakeStructuredLogger()

    emit_event(logger, Events.HANDOVER_ITEMS_MOVED, moved_count=2)

    assert len(logger.calls) == 1
    level, message, context = logger.calls[0]
    assert level == "info"
    assert message == Events.HANDOVER_ITEMS_MOVED
    assert context["event"] == Events.HANDOVER_ITEMS_MOVED
    assert context["moved_count"] == 2
    assert context["session_id"] == get_session_id()


def test_parse_duration_feeds_snapshot_and_budget():
    logger = _FakeStructuredLogger()
    record_parse_duration(logger, "status", PARSE_SLO_MS - 40, success=True)
    record_parse_duration(logger, "daily", PARSE_SLO_MS - 20, success=True)
    record_cache_result(hit=True)
    record_cache_result(hit=False)

    snapshot = metrics_snapshot()

    assert snapshot["parses_total"] == 2
    assert snapshot["parse_duration_ms"] == PARSE_SLO_MS - 30
    assert snapshot["max_parse_ms"] == PARSE_SLO_MS - 20
    assert snapshot["cache_hit_rate"] == 0.5
    assert snapshot["error_rate"] == 0.0
    assert evaluate_parse_budget(snapshot) == {
        "average_parse_within_slo": True,
        "max_parse_within_slo": True,
        "no_failed_parses": True,
    }
    assert logger.calls[0][2]["kind"] == "status"


def test_failed_and_slow_parses_break_budget():
    logger = _FakeStructuredLogger()
    record_parse_duration(logger, "handover", PARSE_SLO_MS + 10, success=False)

    budget = evaluate_parse_budget(metrics_snapshot())

    assert logger.calls[0][0] == "warning"
    assert budget["max_parse_within_slo"] is False
    assert budget["no_failed_parses"] is False
    assert metrics_snapshot()["error_rate"] == 1.0


def test_publish_release_report_compares_with_baseline(tmp_path: Path):
    logger = _FakeStructuredLogger()

    baseline = {"metrics": {"parse_duration_ms": 5.0, "max_parse_ms": 8.0, "error_rate": 0.5, "cache_hit_rate": 0.2}}
    baseline_path = tmp_path / "baseline.json"
    baseline_path.write_text(json.dumps(baseline), encoding="utf-8")

    record_parse_duration(logger, "weekly", 3.0, success=True)
    record_cache_result(hit=True)

    report_path = publish_release_report(
        logger,
        release_tag="r1",
        output_dir=tmp_path,
        baseline_path=baseline_path,
    )

    report = json.loads(report_path.read_text(encoding="utf-8"))
    assert report_path.name == "observability_r1.json"
    assert report["release"] == "r1"
    assert report["session_id"] == get_session_id()
    assert report["baseline_delta"]["parse_duration_ms"] == -2.0
    assert report["baseline_delta"]["error_rate"] == -0.5
    assert report["parse_budget"]["no_failed_parses"] is True
    assert logger.calls[-1][1] == Events.OBSERVABILITY_REPORT_PUBLISHED


def test_publish_release_report_tolerates_corrupt_baseline(tmp_path: Path):
    baseline_path = tmp_path / "baseline.json"
    baseline_path.write_text("{not json", encoding="utf-8")

    report_path = publish_release_report(
        _FakeStructuredLogger(), release_tag="r2", output_dir=tmp_path / "out", baseline_path=baseline_path,
    )

    report = json.loads(report_path.read_text(encoding="utf-8"))
    assert report["baseline_delta"]["max_parse_ms"] == 0.0
