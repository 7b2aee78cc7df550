# -*- coding: utf-8 -*-
# ===================================================================
# Night Board - app/core/date_header.py
# Parser do cabeçalho de data das RTS ("13 Aug 25 (Wed)")
# ===================================================================

import logging
import re
from datetime import date
from typing import Dict, Optional

from models.schedule import DateHeader

logger = logging.getLogger("NightReportBoard")

MONTHS: Dict[str, int] = {
    "jan": 1, "january": 1,
    "feb": 2, "february": 2,
    "mar": 3, "march": 3,
    "apr": 4, "april": 4,
    "may": 5,
    "jun": 6, "june": 6,
    "jul": 7, "july": 7,
    "aug": 8, "august": 8,
    "sep": 9, "sept": 9, "september": 9,
    "oct": 10, "october": 10,
    "nov": 11, "november": 11,
    "dec": 12, "december": 12,
}

EMPTY_LABEL = "—"

_NOISE_RE = re.compile(r"[^A-Za-z0-9_\s()/-]")
_HEADER_RE = re.compile(r"^(\d{1,2})\s+([A-Za-z]{3,9})(?:\s+(\d{2,4}))?")


def resolve_year(raw_year: Optional[str], today: Optional[date] = None) -> int:
    """Resolve o ano do cabeçalho.

    Ausente -> ano corrente; dois dígitos -> 2000 + YY.
    """
    if not raw_year:
        return (today or date.today()).year
    year = int(raw_year)
    return 2000 + year if year < 100 else year


def parse_date_header(header: Optional[str], today: Optional[date] = None) -> DateHeader:
    """Converte uma linha de cabeçalho em data de calendário e rótulo de exibição.

    Remove emojis e pontuação (mantém letras, dígitos, espaços, parênteses,
    barra e hífen) e procura ``<dia> <mês> [ano]`` no início da linha.
    O rótulo mantém dia, mês e o restante da linha (ex.: dia da semana),
    sem o ano.

    Args:
        header: Linha de cabeçalho (pode ser None)
        today: Data de referência para o ano ausente (padrão: hoje)

    Returns:
        DateHeader com ``iso`` None quando dia/mês não podem ser resolvidos

    Example:
        >>> parse_date_header("13 Aug 25 (Wed)")
        DateHeader(iso=datetime.date(2025, 8, 13), label='13 Aug (Wed)')
    """
    raw = (header or "").strip()
    line = _NOISE_RE.sub("", raw).strip()

    m = _HEADER_RE.match(line)
    if not m:
        return DateHeader(iso=None, label=raw or EMPTY_LABEL)

    if m.group(3):
        label = f"{line[:m.start(3)].rstrip()} {line[m.end(3):].lstrip()}"
    else:
        label = line
    label = re.sub(r"\s+", " ", label).strip() or raw or EMPTY_LABEL

    month = MONTHS.get(m.group(2).lower())
    if month is None:
        logger.debug(f"Mês não reconhecido no cabeçalho: {raw!r}")
        return DateHeader(iso=None, label=label)

    try:
        iso = date(resolve_year(m.group(3), today), month, int(m.group(1)))
    except ValueError:
        # Dia inexistente no mês (ex.: 31 Feb) ou ano fora do intervalo
        logger.debug(f"Data inválida no cabeçalho: {raw!r}")
        iso = None

    return DateHeader(iso=iso, label=label)
