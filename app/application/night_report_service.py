from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Union

from app.application.report_parsing_service import ReportParsingService
from app.core.night_report_generator import find_unknown_codes, generate_night_report
from utils.notification_bus import notify_warning
from utils.observability import Events, emit_event
from utils.structured_logger import StructuredLogger, get_structured_logger

logger = logging.getLogger("NightReportBoard")


class NightReportService:
    """Compõe o Night Report a partir dos defeitos do Telegram + aeronaves 'S'."""

    def __init__(
        self,
        parsing: ReportParsingService,
        structured_logger: Optional[StructuredLogger] = None,
    ) -> None:
        self._parsing = parsing
        self._slog = structured_logger or get_structured_logger("generator")

    def generate(
        self,
        telegram_text: Optional[str],
        serviceable_codes: Optional[str],
        report_date: Union[date, str, None],
        fishing: str = "",
        healing: str = "",
    ) -> str:
        unknown = find_unknown_codes(serviceable_codes)
        if unknown:
            logger.warning(f"Códigos ignorados na lista 'S': {', '.join(unknown)}")
            notify_warning(f"Códigos ignorados: {', '.join(unknown)}")

        defects = self._parsing.parse_defects(telegram_text)
        text = generate_night_report(defects, serviceable_codes, report_date, fishing, healing)

        emit_event(
            self._slog,
            Events.NIGHT_REPORT_GENERATED,
            defect_codes=sorted(defects),
            ignored_codes=unknown,
        )
        return text
