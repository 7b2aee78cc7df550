# -*- coding: utf-8 -*-
# ===================================================================
# Night Board - app/core/defect_parser.py
# Parser dos blocos de defeitos colados do Telegram
# ===================================================================

import logging
import re
from typing import Dict, List, Optional, Tuple

from models.defect import DefectRecord

logger = logging.getLogger("NightReportBoard")

_BLOCK_SPLIT_RE = re.compile(r"\n{2,}")
_BARE_CODE_RE = re.compile(r"^\s*([FS]\d)\s*$", re.IGNORECASE)

# Rótulo de campo que encerra a descrição do defeito: palavra capitalizada
# (até três palavras) seguida de ":" no início de linha
_FIELD_LABEL = r"(?-i:[A-Z][A-Za-z/]*(?:[ ][A-Za-z/‘’'\"]+){0,2}):"

_US_SINCE_RE = re.compile(r"Date/Time\s*[‘'\"]?U/S[’'\"]?\s*:\s*([^\n]+)", re.IGNORECASE)
_DEFECT_RE = re.compile(
    rf"\bDefect:\s*([\s\S]*?)(?:\n{{1,2}}{_FIELD_LABEL}|\n{{2,}}|$)", re.IGNORECASE
)
_RECT_RE = re.compile(r"\bRect:\s*([^\n]+)", re.IGNORECASE)
_ETR_RE = re.compile(r"\bETR:\s*([^\n]+)", re.IGNORECASE)
_RECOVERY_LINE_RE = re.compile(r"^\s*Recovery\s*$", re.IGNORECASE | re.MULTILINE)
_POST_PHASE_RE = re.compile(r"post\s*phase\s*rcv", re.IGNORECASE)
_GROUND_RUN_RE = re.compile(
    r"G/?run requirement:\s*([\s\S]*?)(?:\n{2,}|FCF requirement:|Workcenter:|$)", re.IGNORECASE
)
_FLIGHT_CHECK_RE = re.compile(
    r"FCF requirement:\s*([\s\S]*?)(?:\n{2,}|G/?run requirement:|Workcenter:|$)", re.IGNORECASE
)
_WORKCENTER_RE = re.compile(r"Workcenter:\s*([^\n]+)", re.IGNORECASE)
_PRIME_TRADE_RE = re.compile(r"Prime Trade:\s*([^\n]+)", re.IGNORECASE)
_SYSTEM_RE = re.compile(r"System:\s*([^\n]+)", re.IGNORECASE)


def split_blocks(text: Optional[str]) -> List[str]:
    blocks = _BLOCK_SPLIT_RE.split((text or "").replace("\r", ""))
    return [b.strip() for b in blocks if b.strip()]


def _first(pattern: "re.Pattern[str]", text: str) -> str:
    m = pattern.search(text)
    return (m.group(1) or "").strip() if m else ""


def _bullets(pattern: "re.Pattern[str]", text: str) -> Tuple[str, ...]:
    m = pattern.search(text)
    if not m:
        return ()
    lines = (re.sub(r"^\s*[-•]\s*", "", ln).strip() for ln in m.group(1).split("\n"))
    return tuple(ln for ln in lines if ln)


def extract_defect(unit_code: str, blocks: List[str]) -> DefectRecord:
    """Extrai os campos nomeados de um registro já agrupado por código.

    Cada campo é buscado de forma independente; ausentes ficam vazios.
    """
    all_text = "\n\n".join(blocks)
    return DefectRecord(
        unit_code=unit_code,
        unserviceable_since=_first(_US_SINCE_RE, all_text),
        defect_text=_first(_DEFECT_RE, all_text),
        rect_text=_first(_RECT_RE, all_text),
        etr=_first(_ETR_RE, all_text),
        is_recovery=bool(_RECOVERY_LINE_RE.search(all_text) or _POST_PHASE_RE.search(all_text)),
        ground_run_requirements=_bullets(_GROUND_RUN_RE, all_text),
        flight_check_requirements=_bullets(_FLIGHT_CHECK_RE, all_text),
        workcenter=_first(_WORKCENTER_RE, all_text),
        prime_trade=_first(_PRIME_TRADE_RE, all_text),
        system=_first(_SYSTEM_RE, all_text),
        raw_blocks=tuple(blocks),
    )


def parse_defect_blocks(text: Optional[str]) -> Dict[str, DefectRecord]:
    """Agrupa blocos (separados por linha em branco) por aeronave e extrai os defeitos.

    Um bloco cuja primeira linha é apenas um código (ex.: "F2") abre um novo
    registro; os blocos seguintes pertencem a ele até o próximo código.
    Blocos antes do primeiro código são ignorados.

    Returns:
        Dicionário ``código -> DefectRecord``
    """
    grouped: Dict[str, List[str]] = {}
    current: Optional[List[str]] = None
    skipped = 0

    for block in split_blocks(text):
        m = _BARE_CODE_RE.match(block.split("\n", 1)[0])
        if m:
            current = grouped[m.group(1).upper()] = []
        if current is None:
            skipped += 1
            continue
        current.append(block)

    records = {code: extract_defect(code, blocks) for code, blocks in grouped.items()}
    logger.debug(f"Defeitos Telegram: {len(records)} aeronaves, {skipped} blocos ignorados")
    return records
