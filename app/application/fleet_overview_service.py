from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence

from models.fleet import PLACEHOLDERS, FleetCard, id_to_code
from models.status import StatusEntry, StatusTag

_STATUS_LABELS: Dict[StatusTag, str] = {
    StatusTag.SERVICEABLE: "Serviceable",
    StatusTag.RECTIFICATION: "Rectification",
    StatusTag.IN_PHASE: "In Phase",
    StatusTag.RECOVERY: "Recovery",
    StatusTag.AOG: "AOG",
}


def status_label(tag: Optional[StatusTag]) -> str:
    if tag is None:
        return "No status"
    return _STATUS_LABELS.get(tag, "No status")


class FleetOverviewService:
    """Monta os cards do Overview (um por placeholder) a partir do Night Report."""

    def __init__(self, placeholders: Optional[Sequence[int]] = None) -> None:
        self._placeholders = tuple(placeholders or PLACEHOLDERS)

    @property
    def placeholders(self) -> tuple[int, ...]:
        return self._placeholders

    def build_cards(self, entries: Mapping[str, StatusEntry]) -> List[FleetCard]:
        cards: List[FleetCard] = []
        for pid in self._placeholders:
            code = id_to_code(pid)
            cards.append(FleetCard(placeholder_id=pid, unit_code=code, entry=entries.get(code)))
        return cards

    def untracked_codes(self, entries: Mapping[str, StatusEntry]) -> List[str]:
        """Códigos presentes no relatório que não têm card na frota configurada."""
        known = {id_to_code(pid) for pid in self._placeholders}
        return [code for code in entries if code not in known]

    def count_by_status(self, entries: Mapping[str, StatusEntry]) -> Dict[StatusTag, int]:
        counts: Dict[StatusTag, int] = {tag: 0 for tag in StatusTag}
        for card in self.build_cards(entries):
            if card.entry is not None:
                counts[card.entry.status_tag] += 1
        return counts
