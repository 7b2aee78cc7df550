from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Tuple

from models.handover import HandoverGroup, HandoverReport, TickedItem
from utils.notification_bus import notify_info, notify_warning
from utils.observability import Events, emit_event
from utils.structured_logger import StructuredLogger, get_structured_logger

logger = logging.getLogger("NightReportBoard")


@dataclass(frozen=True)
class ReconciliationResult:
    done: Dict[str, Tuple[str, ...]]
    remaining_ticks: FrozenSet[TickedItem]
    moved_count: int


class HandoverReconciliationService:
    """Move itens pendentes marcados para 'Job Completed' sem tocar no parse.

    O resultado do parser é somente leitura; o estado da aplicação é o
    conjunto de marcações e o mapa de itens já movidos (``done``).
    """

    def __init__(self, structured_logger: Optional[StructuredLogger] = None) -> None:
        self._slog = structured_logger or get_structured_logger("handover")

    def move_ticked_to_completed(
        self,
        report: HandoverReport,
        ticks: Iterable[TickedItem],
        done: Optional[Mapping[str, Sequence[str]]] = None,
    ) -> ReconciliationResult:
        tick_set = frozenset(ticks)
        next_done: Dict[str, List[str]] = {code: list(items) for code, items in (done or {}).items()}
        moved: set[TickedItem] = set()

        for code, group in report.outstanding.items():
            for item in group.items:
                tick = TickedItem(unit_code=code, item=item)
                if tick not in tick_set:
                    continue
                bucket = next_done.setdefault(code, [])
                if item not in bucket:
                    bucket.append(item)
                moved.add(tick)

        remaining = frozenset(tick_set - moved)
        result = ReconciliationResult(
            done={code: tuple(items) for code, items in next_done.items()},
            remaining_ticks=remaining,
            moved_count=len(moved),
        )

        if not moved:
            notify_warning("Nenhum item marcado para mover.")
            return result

        logger.info(f"HOTO: {len(moved)} itens movidos para concluídos")
        emit_event(
            self._slog,
            Events.HANDOVER_ITEMS_MOVED,
            moved_count=len(moved),
            unit_codes=sorted({t.unit_code for t in moved}),
        )
        notify_info(f"{len(moved)} item(ns) movido(s) para Job Completed.")
        return result

    @staticmethod
    def merge_completed(
        report: HandoverReport,
        done: Optional[Mapping[str, Sequence[str]]] = None,
    ) -> Dict[str, List[str]]:
        merged: Dict[str, List[str]] = {code: list(items) for code, items in report.completed.items()}
        for code, items in (done or {}).items():
            bucket = merged.setdefault(code, [])
            for item in items:
                if item not in bucket:
                    bucket.append(item)
        return merged

    @staticmethod
    def is_moved(code: str, item: str, done: Optional[Mapping[str, Sequence[str]]] = None) -> bool:
        return item in (done or {}).get(code, ())

    def remaining_outstanding(
        self,
        report: HandoverReport,
        done: Optional[Mapping[str, Sequence[str]]] = None,
    ) -> Dict[str, HandoverGroup]:
        out: Dict[str, HandoverGroup] = {}
        for code, group in report.outstanding.items():
            items = tuple(i for i in group.items if not self.is_moved(code, i, done))
            out[code] = HandoverGroup(unit_code=code, tag=group.tag, items=items)
        return out
