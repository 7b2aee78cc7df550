# -*- coding: utf-8 -*-
# ===================================================================
# Night Board - app/core/night_report_generator.py
# Gera o texto do Night Report a partir dos defeitos do Telegram
# ===================================================================

import logging
import re
from datetime import date
from typing import Iterable, List, Mapping, Optional, Union

from app.core.status_report_parser import is_status_header
from models.defect import DefectRecord
from models.fleet import is_unit_code

logger = logging.getLogger("NightReportBoard")

EOSS_LEGEND = (
    "(* denotes fitted with 'S' EOSS TU)",
    "(^ denotes fitted with ‘U/S’  EOSS TU)",
)


def format_day_header(day: Union[date, str, None]) -> str:
    """Formata a data como "13 Aug (Wed)"; texto inválido é devolvido como veio."""
    if isinstance(day, str):
        try:
            day = date.fromisoformat(day)
        except ValueError:
            return day
    if day is None:
        return ""
    return f"{day.day} {day.strftime('%b')} ({day.strftime('%a')})"


def parse_code_list(codes: Union[str, Iterable[str], None]) -> List[str]:
    """Normaliza uma lista de códigos (texto separado por vírgula/espaço), sem duplicatas."""
    if codes is None:
        return []
    raw = re.split(r"[,\s]+", codes) if isinstance(codes, str) else list(codes)
    normalized = (c.strip().upper() for c in raw)
    return list(dict.fromkeys(c for c in normalized if is_unit_code(c)))


def _one_line(text: str) -> str:
    return " ".join(text.split())


def _body_line(prefix: str, text: str) -> str:
    # "• " impede que o texto seja lido como cabeçalho de outra aeronave
    line = f"{prefix}{text}"
    return f"{prefix}• {text}" if is_status_header(line) else line


def _free_text(text: str) -> List[str]:
    lines = [ln.strip() for ln in (text or "").replace("\r", "").split("\n") if ln.strip()]
    return [_body_line("", ln) for ln in lines] or ["Nil"]


def _defect_lines(record: DefectRecord) -> List[str]:
    lines = [f"*{record.unit_code} - GR"]
    if record.unserviceable_since:
        lines.append(f"Input: {record.unserviceable_since}")
    if record.etr:
        lines.append(f"ETR: {record.etr}")
    lines.append("")
    if record.defect_text:
        lines.append(f"- Defect: {_one_line(record.defect_text)}")
    if record.rect_text:
        lines.append(f"> Rect: {_one_line(record.rect_text)}")
    if record.is_recovery:
        lines.extend(["> Post phase rcv", ""])
    if record.ground_run_requirements:
        lines.extend(["Requirements", "- G/R"])
        lines.extend(_body_line("> ", g) for g in record.ground_run_requirements)
    if record.flight_check_requirements:
        if not record.ground_run_requirements:
            lines.append("Requirements")
        lines.append("- FCF")
        lines.extend(_body_line("> ", f) for f in record.flight_check_requirements)
    return lines


def generate_night_report(
    defects: Mapping[str, DefectRecord],
    serviceable_codes: Union[str, Iterable[str], None],
    report_date: Union[date, str, None],
    fishing: str = "",
    healing: str = "",
) -> str:
    """Compõe o texto-fonte do Night Report.

    O resultado é entrada válida para ``parse_status_report``: aeronaves com
    defeito saem como ``*<código> - GR`` e as demais listadas como ``- S``.

    Args:
        defects: Resultado de ``parse_defect_blocks``
        serviceable_codes: Códigos das aeronaves 'S' (texto livre ou lista)
        report_date: Data do relatório (date ou ISO)
        fishing: Texto livre da seção Fishing
        healing: Texto livre da seção Healing
    """
    s_codes = parse_code_list(serviceable_codes)

    lines: List[str] = [
        f"Night Report for {format_day_header(report_date)}",
        "",
        f"{len(s_codes)} x ‘S’ Bird",
        ", ".join(s_codes) or "—",
        "",
        "Fishing 🎣",
        *_free_text(fishing),
        "",
        "Healing ❤️‍🩹",
        *_free_text(healing),
        "",
        "Status 🚁",
        *EOSS_LEGEND,
        "",
    ]

    defect_codes = sorted(c for c in defects if is_unit_code(c))
    for idx, code in enumerate(defect_codes):
        lines.extend(_defect_lines(defects[code]))
        if idx < len(defect_codes) - 1:
            lines.append("")
    if defect_codes:
        lines.append("")

    for code in s_codes:
        if code not in defects:
            lines.extend([f"*{code} - S", ""])

    logger.debug(
        f"Night Report gerado: {len(defect_codes)} com defeito, {len(s_codes)} 'S'"
    )
    return "\n".join(lines)


def find_unknown_codes(codes: Optional[str]) -> List[str]:
    """Tokens informados que não são códigos válidos (para aviso ao usuário)."""
    tokens = re.split(r"[,\s]+", codes or "")
    return [t for t in tokens if t and not is_unit_code(t.strip().upper())]
