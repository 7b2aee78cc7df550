# -*- coding: utf-8 -*-
"""Observabilidade estruturada para os parsers e serviços do painel."""

from __future__ import annotations

import json
import time
import uuid
from pathlib import Path
from typing import Any, Optional

from utils.structured_logger import StructuredLogger

# Orçamento de latência: o parse roda a cada alteração do texto colado
PARSE_SLO_MS = 50.0


class Events:
    PARSE_COMPLETED = "parse_completed"
    PARSE_CACHE_HIT = "parse_cache_hit"
    HANDOVER_ITEMS_MOVED = "handover_items_moved"
    NIGHT_REPORT_GENERATED = "night_report_generated"
    OBSERVABILITY_REPORT_PUBLISHED = "observability_report_published"


class _MetricsState:
    def __init__(self) -> None:
        self.parses_total: int = 0
        self.parses_failed: int = 0
        self.parse_duration_ms_total: float = 0.0
        self.max_parse_ms: float = 0.0
        self.cache_hits: int = 0
        self.cache_misses: int = 0

    def snapshot(self) -> dict[str, float]:
        error_rate = (self.parses_failed / self.parses_total) if self.parses_total else 0.0
        cache_total = self.cache_hits + self.cache_misses
        cache_hit_rate = (self.cache_hits / cache_total) if cache_total else 0.0
        avg_parse = (self.parse_duration_ms_total / self.parses_total) if self.parses_total else 0.0
        return {
            "parse_duration_ms": round(avg_parse, 2),
            "max_parse_ms": round(self.max_parse_ms, 2),
            "error_rate": round(error_rate, 4),
            "cache_hit_rate": round(cache_hit_rate, 4),
            "parses_total": float(self.parses_total),
            "parses_failed": float(self.parses_failed),
            "cache_hits": float(self.cache_hits),
            "cache_misses": float(self.cache_misses),
        }


_SESSION_ID = uuid.uuid4().hex
_METRICS = _MetricsState()


def get_session_id() -> str:
    return _SESSION_ID


def reset_metrics() -> None:
    global _METRICS
    _METRICS = _MetricsState()


def emit_event(logger: StructuredLogger, event: str, level: str = "info", **context: Any) -> None:
    logger.log(level, event, event=event, session_id=get_session_id(), **context)


def record_parse_duration(
    logger: StructuredLogger,
    kind: str,
    duration_ms: float,
    success: bool,
    **context: Any,
) -> None:
    duration = max(0.0, float(duration_ms))
    _METRICS.parses_total += 1
    _METRICS.parse_duration_ms_total += duration
    _METRICS.max_parse_ms = max(_METRICS.max_parse_ms, duration)
    if not success:
        _METRICS.parses_failed += 1

    emit_event(
        logger,
        Events.PARSE_COMPLETED,
        level="info" if success else "warning",
        kind=kind,
        parse_duration_ms=round(duration, 2),
        success=bool(success),
        **context,
    )


def record_cache_result(hit: bool) -> None:
    if hit:
        _METRICS.cache_hits += 1
    else:
        _METRICS.cache_misses += 1


def metrics_snapshot() -> dict[str, float]:
    return _METRICS.snapshot()


def evaluate_parse_budget(
    snapshot: Optional[dict[str, float]] = None,
    slo_ms: float = PARSE_SLO_MS,
) -> dict[str, bool]:
    snap = snapshot or metrics_snapshot()
    return {
        "average_parse_within_slo": float(snap.get("parse_duration_ms", 0.0)) <= slo_ms,
        "max_parse_within_slo": float(snap.get("max_parse_ms", 0.0)) <= slo_ms,
        "no_failed_parses": float(snap.get("parses_failed", 0.0)) == 0.0,
    }


def publish_release_report(
    logger: StructuredLogger,
    release_tag: str,
    output_dir: Path,
    baseline_path: Optional[Path] = None,
    slo_ms: float = PARSE_SLO_MS,
) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    snapshot = metrics_snapshot()
    budget = evaluate_parse_budget(snapshot, slo_ms)

    baseline: dict[str, Any] = {}
    if baseline_path and baseline_path.exists():
        try:
            baseline = json.loads(baseline_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            baseline = {}

    delta = {}
    baseline_metrics = baseline.get("metrics", {}) if isinstance(baseline, dict) else {}
    for key in ("parse_duration_ms", "max_parse_ms", "error_rate", "cache_hit_rate"):
        old = float(baseline_metrics.get(key, 0.0) or 0.0)
        delta[key] = round(float(snapshot.get(key, 0.0)) - old, 4)

    report = {
        "release": release_tag,
        "session_id": get_session_id(),
        "generated_at_epoch_ms": int(time.time() * 1000),
        "metrics": snapshot,
        "parse_budget": budget,
        "baseline_delta": delta,
    }

    report_path = output_dir / f"observability_{release_tag}.json"
    report_path.write_text(json.dumps(report, ensure_ascii=False, indent=2), encoding="utf-8")

    emit_event(
        logger,
        Events.OBSERVABILITY_REPORT_PUBLISHED,
        release=release_tag,
        report_path=str(report_path),
        parse_budget=budget,
    )
    return report_path
