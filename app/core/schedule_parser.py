# -*- coding: utf-8 -*-
# ===================================================================
# Night Board - app/core/schedule_parser.py
# Parser das RTS diárias e semanais (missões, spares, healing, etc.)
# ===================================================================

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from app.core.date_header import parse_date_header
from models.schedule import DayRecord, EntryKind, HealingEntry, ScheduleEntry

logger = logging.getLogger("NightReportBoard")

_NIL_RE = re.compile(r"^nil$", re.IGNORECASE)
_SPARE_RE = re.compile(r"\bspare\b(?!\s*window)", re.IGNORECASE)
_MISSION_RE = re.compile(
    r"^([FS]\d)\b\s*[:\-]?\s*(\d{3,4}\s*-\s*\d{3,4})?\s*(.*)$", re.IGNORECASE
)
_CODE_THEN_SPARE_RE = re.compile(r"\b([FS]\d)\b.*?\bspare\b", re.IGNORECASE)
_SPARE_WINDOW_RE = re.compile(r"\bspare\s*window\b", re.IGNORECASE)
_NIL_SPARE_RE = re.compile(r"^nil\s*spare", re.IGNORECASE)
_BULK_NOTICE_RE = re.compile(r"^(BMD|RSD)\b", re.IGNORECASE)

_HEALING_RE = re.compile(r"^([FS]\d)\b\s*:?\s*(.+)$", re.IGNORECASE)
_TIME_RANGE_RE = re.compile(r"\d{3,4}\s*-\s*\d{3,4}")

_DAY_HEADER_RE = re.compile(r"^\s*\d{1,2}\s+[A-Za-z]{3,9}(?:\s+\d{2,4})?\s*(?:\([^)]+\))?")


class ScheduleSection(str, Enum):
    RTS = "rts"
    HEALING = "healing"
    HOT = "hot"
    COLD = "cold"
    OPS = "ops"
    NOTES = "notes"


# Ordem legal das seções: cada seção termina em qualquer cabeçalho posterior
_SECTION_ORDER: Tuple[ScheduleSection, ...] = tuple(ScheduleSection)

_SECTION_HEADERS: Dict[ScheduleSection, "re.Pattern[str]"] = {
    ScheduleSection.RTS: re.compile(r"^rts\s*:", re.IGNORECASE),
    ScheduleSection.HEALING: re.compile(r"^healing\b", re.IGNORECASE),
    ScheduleSection.HOT: re.compile(r"^hot\b", re.IGNORECASE),
    ScheduleSection.COLD: re.compile(r"^cold\b", re.IGNORECASE),
    ScheduleSection.OPS: re.compile(r"^ops\s*brief\b", re.IGNORECASE),
    ScheduleSection.NOTES: re.compile(r"^notes\b", re.IGNORECASE),
}

_SECTION_KEYWORDS: Dict[ScheduleSection, str] = {
    ScheduleSection.HEALING: "Healing",
    ScheduleSection.HOT: "Hot",
    ScheduleSection.COLD: "Cold",
    ScheduleSection.OPS: "Ops Brief",
    ScheduleSection.NOTES: "Notes",
}


@dataclass(frozen=True)
class SectionScan:
    items: Tuple[str, ...]
    next_index: int


def _is_nil(line: str) -> bool:
    return bool(_NIL_RE.match(line))


def _compress(time_range: str) -> str:
    return re.sub(r"\s+", "", time_range)


def parse_mission_line(line: Optional[str]) -> Optional[ScheduleEntry]:
    """Classifica uma linha da RTS como missão, spare ou ruído.

    A primeira regra que casar vence:

    1. ``<código>[:-]? [HHMM-HHMM] <resto>`` -> spare se "spare" aparecer
       (exceto "spare window"), senão missão com horário compactado.
    2. Código em qualquer posição seguido de "spare" -> spare com a linha inteira.
    3. "Nil spare" -> spare sem código.
    4. Avisos em massa (BMD/RSD) -> missão sem código.

    Returns:
        ScheduleEntry ou None quando a linha não é dado (vazia, "Nil", ruído)
    """
    s = (line or "").strip()
    if not s or _is_nil(s):
        return None

    is_spare = bool(_SPARE_RE.search(s))

    m = _MISSION_RE.match(s)
    if m:
        code = m.group(1).upper()
        time_range = _compress(m.group(2) or "")
        rest = (m.group(3) or "").strip()
        if is_spare:
            trailing = re.sub(r"^spare", "", rest, flags=re.IGNORECASE).strip()
            label = f"{code} Spare {trailing}" if trailing else f"{code} Spare"
            return ScheduleEntry(EntryKind.SPARE, code, label)
        text = " ".join(p for p in (time_range, re.sub(r"\s+", " ", rest)) if p)
        return ScheduleEntry(EntryKind.MISSION, code, text or code)

    m = _CODE_THEN_SPARE_RE.search(s)
    if m and not _SPARE_WINDOW_RE.search(s):
        return ScheduleEntry(EntryKind.SPARE, m.group(1).upper(), s)

    if _NIL_SPARE_RE.match(s):
        return ScheduleEntry(EntryKind.SPARE, None, "Nil Spare")

    if _BULK_NOTICE_RE.match(s):
        return ScheduleEntry(EntryKind.MISSION, None, s)

    return None


def parse_healing_line(line: Optional[str]) -> List[HealingEntry]:
    """Extrai uma ou mais janelas de healing de uma linha.

    Cada faixa ``HHMM-HHMM`` gera uma entrada; o texto após a última faixa
    é compartilhado como sufixo por todas elas.
    """
    s = (line or "").strip()
    if not s or _is_nil(s):
        return []

    m = _HEALING_RE.match(s)
    if not m:
        return [HealingEntry(None, s)]

    code = m.group(1).upper()
    rest = m.group(2).strip()

    times: List[str] = []
    last_end = 0
    for t in _TIME_RANGE_RE.finditer(rest):
        times.append(_compress(t.group(0)))
        last_end = t.end()

    if not times:
        return [HealingEntry(code, rest)]

    trailing = rest[last_end:].strip().lstrip(",;").strip()
    return [HealingEntry(code, f"{t} {trailing}" if trailing else t) for t in times]


def scan_section(
    lines: Sequence[str],
    start_index: int,
    next_headers: Sequence[str],
) -> SectionScan:
    """Coleta as linhas de uma seção até o próximo cabeçalho terminador.

    O índice retornado aponta para a linha do terminador (não a consome),
    para que o chamador a reexamine como novo cabeçalho. Linhas em branco
    viram placeholders vazios; as do final são removidas.

    Args:
        lines: Todas as linhas do texto
        start_index: Primeira linha do conteúdo da seção
        next_headers: Palavras-chave que encerram a seção (literais, sem caixa)
    """
    guard: Optional["re.Pattern[str]"] = None
    keywords = [h for h in next_headers if h]
    if keywords:
        # Palavra-chave terminada em letra/dígito não pode emendar em outra palavra
        alternation = "|".join(
            re.escape(h) + (r"(?!\w)" if re.match(r"\w", h[-1]) else "")
            for h in keywords
        )
        guard = re.compile(rf"^\s*(?:{alternation})", re.IGNORECASE)

    out: List[str] = []
    i = start_index
    while i < len(lines):
        s = lines[i].strip()
        if not s:
            out.append("")
        elif guard is not None and guard.match(s):
            break
        else:
            out.append(s)
        i += 1

    while out and not out[-1]:
        out.pop()

    return SectionScan(items=tuple(out), next_index=i)


def _header_of(line: str) -> Optional[ScheduleSection]:
    for section, pattern in _SECTION_HEADERS.items():
        if pattern.match(line):
            return section
    return None


def _terminators_after(section: ScheduleSection) -> List[str]:
    idx = _SECTION_ORDER.index(section)
    return [_SECTION_KEYWORDS[s] for s in _SECTION_ORDER[idx + 1:]]


def has_section_header(text: str) -> bool:
    return any(_header_of(ln.strip()) for ln in (text or "").split("\n"))


class _DayBuilder:
    def __init__(self) -> None:
        self.missions: List[ScheduleEntry] = []
        self.spares: List[ScheduleEntry] = []
        self.healing: List[HealingEntry] = []
        self.hot: List[str] = []
        self.cold: List[str] = []
        self.ops: List[str] = []
        self.notes: List[str] = []
        self.dropped = 0

    def add_rts(self, items: Sequence[str]) -> None:
        for ln in items:
            entry = parse_mission_line(ln)
            if entry is None:
                if ln:
                    self.dropped += 1
                continue
            if entry.kind is EntryKind.SPARE:
                self.spares.append(entry)
            else:
                self.missions.append(entry)

    def add(self, section: ScheduleSection, items: Sequence[str]) -> None:
        if section is ScheduleSection.RTS:
            self.add_rts(items)
        elif section is ScheduleSection.HEALING:
            for ln in items:
                self.healing.extend(parse_healing_line(ln))
        elif section is ScheduleSection.HOT:
            self.hot.extend(ln for ln in items if ln.strip() and not _is_nil(ln))
        elif section is ScheduleSection.COLD:
            self.cold.extend(ln for ln in items if ln.strip() and not _is_nil(ln))
        elif section is ScheduleSection.OPS:
            self.ops.extend(re.sub(r"[,;]", ",", ln).strip() for ln in items if ln.strip())
        elif section is ScheduleSection.NOTES:
            self.notes.extend(ln for ln in items if ln.strip())

    def build(self, date_iso: Optional[str], date_label: str) -> DayRecord:
        return DayRecord(
            date_iso=date_iso,
            date_label=date_label,
            missions=tuple(self.missions),
            spares=tuple(self.spares),
            healing=tuple(self.healing),
            hot=tuple(self.hot),
            cold=tuple(self.cold),
            ops=tuple(self.ops),
            notes=tuple(self.notes),
        )


def parse_daily_schedule(text: Optional[str]) -> Optional[DayRecord]:
    """Transforma o bloco de texto de um dia de RTS em DayRecord.

    A primeira linha é o cabeçalho de data. Linhas antes do primeiro
    cabeçalho reconhecido (RTS:, Healing, Hot, Cold, Ops Brief, Notes) são
    tratadas como lista implícita de missões.

    Returns:
        DayRecord, ou None apenas para entrada vazia
    """
    if not text or not text.strip():
        return None

    # Linhas em branco antes do cabeçalho são ignoradas
    lines = text.replace("\r", "").lstrip().split("\n")
    header = parse_date_header(lines[0])
    day = _DayBuilder()

    i = 1
    j = i
    while j < len(lines) and _header_of(lines[j].strip()) is None:
        j += 1
    if j > i:
        day.add_rts([ln.strip() for ln in lines[i:j] if ln.strip()])
        i = j

    while i < len(lines):
        section = _header_of(lines[i].strip())
        if section is None:
            i += 1
            continue
        scan = scan_section(lines, i + 1, _terminators_after(section))
        day.add(section, scan.items)
        i = scan.next_index

    record = day.build(header.iso_string, header.label)
    logger.debug(
        f"RTS {record.date_label}: {len(record.missions)} missões, "
        f"{len(record.spares)} spares, {len(record.healing)} healing, "
        f"{day.dropped} linhas descartadas"
    )
    return record


def split_week_into_blocks(text: Optional[str]) -> List[str]:
    """Divide o texto semanal em blocos, um por linha de cabeçalho de dia."""
    lines = (text or "").replace("\r", "").split("\n")
    starts = [i for i, ln in enumerate(lines) if _DAY_HEADER_RE.match(ln.strip())]

    blocks: List[str] = []
    for k, start in enumerate(starts):
        end = starts[k + 1] if k + 1 < len(starts) else len(lines)
        chunk = "\n".join(lines[start:end]).strip()
        if chunk:
            blocks.append(chunk)
    return blocks


def parse_weekly_schedule(text: Optional[str]) -> List[DayRecord]:
    """Faz o parse de uma RTS semanal, um DayRecord por dia.

    Blocos sem nenhum cabeçalho de seção recebem um "RTS:" explícito, de
    modo que missões soltas sob a data continuam sendo capturadas.
    """
    records: List[DayRecord] = []
    for chunk in split_week_into_blocks(text):
        header_line, _, body = chunk.partition("\n")
        if not has_section_header(body):
            body = f"RTS:\n{body}"
        record = parse_daily_schedule(f"{header_line}\n{body}")
        if record is None:
            parsed = parse_date_header(header_line)
            record = DayRecord(date_iso=parsed.iso_string, date_label=parsed.label)
        records.append(record)

    logger.debug(f"RTS semanal: {len(records)} dias")
    return records
