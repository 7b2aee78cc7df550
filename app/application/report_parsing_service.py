from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from app.core.defect_parser import parse_defect_blocks
from app.core.handover_parser import parse_handover
from app.core.schedule_parser import parse_daily_schedule, parse_weekly_schedule
from app.core.status_report_parser import parse_status_report
from models.defect import DefectRecord
from models.handover import HandoverReport
from models.schedule import DayRecord
from models.status import StatusEntry
from utils.notification_bus import notify_warning
from utils.observability import Events, emit_event, record_cache_result, record_parse_duration
from utils.structured_logger import StructuredLogger, get_structured_logger

logger = logging.getLogger("NightReportBoard")


class ParseKind(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    STATUS = "status"
    HANDOVER = "handover"
    DEFECTS = "defects"


_PARSERS: Dict[ParseKind, Callable[[str], Any]] = {
    ParseKind.DAILY: parse_daily_schedule,
    ParseKind.WEEKLY: parse_weekly_schedule,
    ParseKind.STATUS: parse_status_report,
    ParseKind.HANDOVER: parse_handover,
    ParseKind.DEFECTS: parse_defect_blocks,
}


def _result_size(result: Any) -> int:
    if result is None:
        return 0
    if isinstance(result, DayRecord):
        return 0 if result.is_empty else 1
    if isinstance(result, HandoverReport):
        return (
            len(result.completed)
            + len(result.outstanding)
            + sum(len(items) for items in result.extra.values())
        )
    return len(result)


class ReportParsingService:
    """Ponto único de parse para a UI: mede, registra e evita re-parse.

    Guarda o último texto e resultado por tipo; texto idêntico devolve o
    resultado anterior (os parsers são funções puras).
    """

    def __init__(self, structured_logger: Optional[StructuredLogger] = None) -> None:
        self._slog = structured_logger or get_structured_logger("parsing")
        self._last: Dict[ParseKind, Tuple[str, Any]] = {}

    def parse(self, kind: ParseKind, text: Optional[str]) -> Any:
        source = text or ""
        cached = self._last.get(kind)
        if cached is not None and cached[0] == source:
            record_cache_result(hit=True)
            emit_event(self._slog, Events.PARSE_CACHE_HIT, level="debug", kind=kind.value)
            return cached[1]
        record_cache_result(hit=False)

        t0 = time.perf_counter()
        result = _PARSERS[kind](source)
        duration_ms = (time.perf_counter() - t0) * 1000.0

        size = _result_size(result)
        success = size > 0 or not source.strip()
        record_parse_duration(
            self._slog, kind.value, duration_ms, success,
            items=size, input_lines=source.count("\n") + 1 if source else 0,
        )
        if not success:
            logger.warning(f"Nenhum registro reconhecido no texto ({kind.value})")
            notify_warning(f"Nenhum registro reconhecido no texto colado ({kind.value}).")

        self._last[kind] = (source, result)
        return result

    def clear_cache(self) -> None:
        self._last.clear()

    def parse_daily(self, text: Optional[str]) -> Optional[DayRecord]:
        return self.parse(ParseKind.DAILY, text)

    def parse_weekly(self, text: Optional[str]) -> list[DayRecord]:
        return self.parse(ParseKind.WEEKLY, text)

    def parse_status(self, text: Optional[str]) -> Dict[str, StatusEntry]:
        return self.parse(ParseKind.STATUS, text)

    def parse_handover(self, text: Optional[str]) -> HandoverReport:
        return self.parse(ParseKind.HANDOVER, text)

    def parse_defects(self, text: Optional[str]) -> Dict[str, DefectRecord]:
        return self.parse(ParseKind.DEFECTS, text)
