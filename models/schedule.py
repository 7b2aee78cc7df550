# models/schedule.py
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class EntryKind(str, Enum):
    MISSION = "mission"
    SPARE = "spare"


@dataclass(frozen=True)
class DateHeader:
    iso: Optional[date]
    label: str

    @property
    def iso_string(self) -> Optional[str]:
        return self.iso.isoformat() if self.iso else None


@dataclass(frozen=True)
class ScheduleEntry:
    kind: EntryKind
    unit_code: Optional[str]
    label: str

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "unitCode": self.unit_code, "label": self.label}


@dataclass(frozen=True)
class HealingEntry:
    unit_code: Optional[str]
    label: str

    def to_dict(self) -> Dict[str, Any]:
        return {"unitCode": self.unit_code, "label": self.label}


@dataclass(frozen=True)
class DayRecord:
    """Retrato imutável de um dia de RTS (uma chamada de parse)."""

    date_iso: Optional[str]
    date_label: str
    missions: Tuple[ScheduleEntry, ...] = field(default_factory=tuple)
    spares: Tuple[ScheduleEntry, ...] = field(default_factory=tuple)
    healing: Tuple[HealingEntry, ...] = field(default_factory=tuple)
    hot: Tuple[str, ...] = field(default_factory=tuple)
    cold: Tuple[str, ...] = field(default_factory=tuple)
    ops: Tuple[str, ...] = field(default_factory=tuple)
    notes: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not any(
            (self.missions, self.spares, self.healing, self.hot, self.cold, self.ops, self.notes)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dateISO": self.date_iso,
            "dateLabel": self.date_label,
            "missions": [m.to_dict() for m in self.missions],
            "spares": [s.to_dict() for s in self.spares],
            "healing": [h.to_dict() for h in self.healing],
            "hot": list(self.hot),
            "cold": list(self.cold),
            "ops": list(self.ops),
            "notes": list(self.notes),
        }
