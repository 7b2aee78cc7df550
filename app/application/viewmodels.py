from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence

from models.handover import HandoverReport
from models.schedule import DayRecord
from models.status import StatusEntry


@dataclass
class ViewState:
    state: str
    message: str


class OverviewViewModel:
    def state_for_entries(self, entries: Mapping[str, StatusEntry]) -> ViewState:
        if not entries:
            return ViewState("empty", "Nenhuma aeronave no Night Report colado.")
        return ViewState("success", f"{len(entries)} aeronaves carregadas.")

    def filter_visibility(self, entries: Sequence[StatusEntry], query: str) -> List[bool]:
        q = (query or "").strip().lower()
        if not q:
            return [True] * len(entries)

        visible: List[bool] = []
        for entry in entries:
            haystack = " | ".join([entry.title.lower(), *(n.lower() for n in entry.notes)])
            visible.append(q in haystack)
        return visible


class RtsViewModel:
    def state_for_days(self, days: Sequence[Optional[DayRecord]]) -> ViewState:
        parsed = [d for d in days if d is not None]
        if not parsed:
            return ViewState("empty", "Nenhum dia de RTS reconhecido.")
        undated = sum(1 for d in parsed if d.date_iso is None)
        if undated:
            return ViewState("success", f"{len(parsed)} dia(s) carregado(s), {undated} sem data.")
        return ViewState("success", f"{len(parsed)} dia(s) carregado(s).")


class HandoverViewModel:
    def state_for_report(self, report: HandoverReport) -> ViewState:
        if not report.completed and not report.outstanding:
            return ViewState("empty", "Nenhum item de HOTO reconhecido.")
        pending = sum(len(g.items) for g in report.outstanding.values())
        return ViewState("success", f"{pending} item(ns) pendente(s).")
