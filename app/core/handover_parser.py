# -*- coding: utf-8 -*-
# ===================================================================
# Night Board - app/core/handover_parser.py
# Parser do HOTO: máquina de estados sobre cabeçalhos com emoji/glifo
# ===================================================================

import logging
import re
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from models.handover import HandoverCategory, HandoverGroup, HandoverReport

logger = logging.getLogger("NightReportBoard")


class TaskSection(str, Enum):
    COMPLETED = "completed"
    OUTSTANDING = "outstanding"


Section = Union[TaskSection, HandoverCategory]

# Regras avaliadas em ordem: a mais específica primeiro
# ("112D/150Hrly" precisa vir antes de "112D")
SECTION_RULES: Tuple[Tuple["re.Pattern[str]", Section], ...] = (
    (re.compile(r"^🟩️?\s*Job\s*Completed", re.IGNORECASE), TaskSection.COMPLETED),
    (re.compile(r"^🟥️?\s*Outstanding", re.IGNORECASE), TaskSection.OUTSTANDING),
    (re.compile(r"^•\s*14D\b", re.IGNORECASE), HandoverCategory.PROJ14),
    (re.compile(r"^•\s*28D\b", re.IGNORECASE), HandoverCategory.PROJ28),
    (re.compile(r"^•\s*56D\b", re.IGNORECASE), HandoverCategory.PROJ56),
    (re.compile(r"^•\s*112D\s*/\s*150", re.IGNORECASE), HandoverCategory.PROJ112150),
    (re.compile(r"^•\s*112D\b", re.IGNORECASE), HandoverCategory.PROJ112),
    (re.compile(r"^•\s*180D\b", re.IGNORECASE), HandoverCategory.PROJ180),
    (re.compile(r"^■\s*MEE\b", re.IGNORECASE), HandoverCategory.MEE),
    (re.compile(r"^■\s*EOSS\b", re.IGNORECASE), HandoverCategory.EOSS),
    (re.compile(r"^■\s*BRU\b", re.IGNORECASE), HandoverCategory.BRU),
    (re.compile(r"^■\s*Probe\b", re.IGNORECASE), HandoverCategory.PROBE),
    (re.compile(r"^●\s*AOM\b", re.IGNORECASE), HandoverCategory.AOM),
    (re.compile(r"^●\s*Lesson", re.IGNORECASE), HandoverCategory.LESSONS),
)

# Glifos que só aparecem em cabeçalhos; "•" também marca itens
_HEADER_GLYPH_RE = re.compile(r"^(?:[■●]\s|🟩|🟥)")
_CODE_RE = re.compile(r"^([FS]\d)\b(?:\s*\(([^)]+)\))?", re.IGNORECASE)
_ITEM_MARKER_RE = re.compile(r"^[-•>]")


def match_section(line: str) -> Optional[Section]:
    for pattern, section in SECTION_RULES:
        if pattern.match(line):
            return section
    return None


def _clean_item(line: str) -> str:
    clean = re.sub(r"^[-•]\s*", "", line).strip()
    return re.sub(r"^>\s*", "> ", clean)


def _clean_extra(line: str) -> str:
    return re.sub(r"^>\s*", "", re.sub(r"^[-•]\s*", "", line)).strip()


class _HandoverBuilder:
    def __init__(self) -> None:
        self.completed: Dict[str, List[str]] = {}
        self.outstanding: Dict[str, Tuple[str, List[str]]] = {}
        self.extra: Dict[HandoverCategory, List[str]] = {c: [] for c in HandoverCategory}

    def open_group(self, section: TaskSection, code: str, tag: Optional[str]) -> None:
        if section is TaskSection.COMPLETED:
            self.completed.setdefault(code, [])
            return
        previous_tag, items = self.outstanding.get(code, ("", []))
        self.outstanding[code] = ((tag or "").strip() or previous_tag, items)

    def append(self, section: TaskSection, code: str, item: str) -> None:
        if section is TaskSection.COMPLETED:
            self.completed[code].append(item)
        else:
            self.outstanding[code][1].append(item)

    def build(self) -> HandoverReport:
        return HandoverReport(
            completed={code: tuple(items) for code, items in self.completed.items()},
            outstanding={
                code: HandoverGroup(unit_code=code, tag=tag, items=tuple(items))
                for code, (tag, items) in self.outstanding.items()
            },
            extra={c: tuple(items) for c, items in self.extra.items()},
        )


def parse_handover(text: Optional[str]) -> HandoverReport:
    """Separa o texto do HOTO em concluídos, pendentes (por aeronave) e extras.

    Estado: seção corrente + código corrente (só em concluídos/pendentes).
    Linhas fora de seção reconhecida são descartadas.
    """
    out = _HandoverBuilder()
    section: Optional[Section] = None
    current_code: Optional[str] = None
    discarded = 0

    for raw in (text or "").replace("\r", "").split("\n"):
        line = raw.strip()
        if not line:
            continue

        matched = match_section(line)
        if matched is not None:
            section = matched
            if isinstance(matched, TaskSection):
                current_code = None
            continue
        if _HEADER_GLYPH_RE.match(line):
            # Cabeçalho desconhecido encerra a seção corrente
            section, current_code = None, None
            continue

        if isinstance(section, TaskSection):
            m = _CODE_RE.match(line)
            if m:
                current_code = m.group(1).upper()
                out.open_group(section, current_code, m.group(2))
                continue
            if current_code is None:
                discarded += 1
                continue
            item = _clean_item(line) if _ITEM_MARKER_RE.match(line) else line
            if item:
                out.append(section, current_code, item)
        elif isinstance(section, HandoverCategory):
            clean = _clean_extra(line)
            if clean:
                out.extra[section].append(clean)
        else:
            discarded += 1

    report = out.build()
    logger.debug(
        f"HOTO: {len(report.completed)} grupos concluídos, "
        f"{len(report.outstanding)} pendentes, {discarded} linhas descartadas"
    )
    return report
