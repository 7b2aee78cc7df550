# -*- coding: utf-8 -*-
# ===================================================================
# Night Board - app/core/status_report_parser.py
# Parser do Night Report (status por aeronave) e derivação de status
# ===================================================================

import logging
import re
from typing import Dict, List, Optional, Sequence

from models.status import StatusEntry, StatusTag

logger = logging.getLogger("NightReportBoard")

# Cabeçalhos como "*S2 - GR", "S0  - Major Serv (...)", "> F2 - S"
_HEADER_RE = re.compile(r"^[>*\s-]*\*?\s*([SF]\d)\s*-\s*(.+)$", re.IGNORECASE)
_INPUT_RE = re.compile(r"^Input:\s*(.+)$", re.IGNORECASE)
_ETR_RE = re.compile(r"^ETR:\s*(.+)$", re.IGNORECASE)
_REQUIREMENTS_RE = re.compile(r"^Requirements$", re.IGNORECASE)
_NOTE_ETR_RE = re.compile(r"^(?:>\s*)?ETR\s*:\s*", re.IGNORECASE)
_QUOTES_RE = re.compile(r"[“”‘’\"']")

_AOG_RE = re.compile(r"\baog\b")
_US_RE = re.compile(r"\bu/s\b|\bus\b")
_DEFECT_RE = re.compile(r"\bdefect\b|\brect\b|\bgr\b")
_PHASE_RE = re.compile(r"major serv|phase\b", re.IGNORECASE)
_RECOVERY_RE = re.compile(r"\b(?:post\s*phase\s*rcv|recovery)\b", re.IGNORECASE)


def is_status_header(line: str) -> bool:
    """Indica se a linha seria lida como cabeçalho de aeronave (ex.: "> S2 - GR")."""
    return bool(_HEADER_RE.match((line or "").strip()))


def derive_status_tag(
    title: str,
    notes: Sequence[str] = (),
    input_time: str = "",
    etr: str = "",
) -> StatusTag:
    """Deriva o status da aeronave a partir do título e das notas.

    Prioridade: AOG > U/S ou defeito/rect/GR > fase (título) > recovery
    > serviceable.
    """
    all_text = " ".join([title or "", input_time or "", etr or "", *notes])
    normalized = _QUOTES_RE.sub("", all_text).lower()

    if _AOG_RE.search(normalized):
        return StatusTag.AOG
    if _US_RE.search(normalized) or _DEFECT_RE.search(normalized):
        return StatusTag.RECTIFICATION
    if _PHASE_RE.search(title or ""):
        return StatusTag.IN_PHASE
    if _RECOVERY_RE.search(normalized):
        return StatusTag.RECOVERY
    return StatusTag.SERVICEABLE


def _promote_etr(etr: str, notes: Sequence[str]) -> str:
    if etr:
        return etr
    for note in notes:
        if _NOTE_ETR_RE.match(note):
            return _NOTE_ETR_RE.sub("", note, count=1).strip()
    return ""


class _EntryDraft:
    def __init__(self, code: str, tail: str) -> None:
        self.code = code
        self.title = f"{code} - {tail}"
        self.input_time = ""
        self.etr = ""
        self.notes: List[str] = []

    def freeze(self) -> StatusEntry:
        etr = _promote_etr(self.etr, self.notes)
        return StatusEntry(
            unit_code=self.code,
            title=self.title,
            input_time=self.input_time,
            etr=etr,
            notes=tuple(self.notes),
            status_tag=derive_status_tag(self.title, self.notes, self.input_time, etr),
        )


def parse_status_report(text: Optional[str]) -> Dict[str, StatusEntry]:
    """Converte o texto do Night Report em entradas por código de aeronave.

    Linhas antes do primeiro cabeçalho são ignoradas. Um cabeçalho repetido
    para o mesmo código reinicia a entrada.

    Returns:
        Dicionário ``código -> StatusEntry`` na ordem de aparição
    """
    drafts: Dict[str, _EntryDraft] = {}
    current: Optional[_EntryDraft] = None

    for raw in (text or "").replace("\r", "").split("\n"):
        line = raw.strip()
        if not line:
            continue

        h = _HEADER_RE.match(line)
        if h:
            code = h.group(1).upper()
            current = drafts[code] = _EntryDraft(code, h.group(2).strip())
            continue

        if current is None:
            continue

        m = _INPUT_RE.match(line)
        if m:
            current.input_time = m.group(1).strip()
            continue
        m = _ETR_RE.match(line)
        if m:
            current.etr = m.group(1).strip()
            continue

        if line.startswith(">"):
            rest = line[1:].strip()
            if rest:
                current.notes.append("> " + rest)
        elif line.startswith("-"):
            rest = re.sub(r"^-+\s*", "", line)
            if rest:
                current.notes.append(rest)
        elif _REQUIREMENTS_RE.match(line):
            current.notes.append("Requirements:")

    entries = {code: draft.freeze() for code, draft in drafts.items()}
    logger.debug(f"Night Report: {len(entries)} aeronaves ({', '.join(entries)})")
    return entries


def first_defect_line(entry: Optional[StatusEntry]) -> str:
    """Primeira linha de defeito para o card: título, nota 'Defect:' ou resto do título."""
    if entry is None:
        return ""
    m = re.search(r"defect:\s*(.*)", entry.title, re.IGNORECASE)
    if m and m.group(1).strip():
        return m.group(1).strip()
    for note in entry.notes:
        n = re.sub(r"^>\s*", "", note)
        if re.match(r"^defect:", n, re.IGNORECASE):
            return re.sub(r"^defect:\s*", "", n, flags=re.IGNORECASE).strip()
    return " - ".join(entry.title.split(" - ")[1:])
