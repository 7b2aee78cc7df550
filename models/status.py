# models/status.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple


class StatusTag(str, Enum):
    AOG = "aog"
    RECTIFICATION = "rectification"
    IN_PHASE = "in-phase"
    RECOVERY = "recovery"
    SERVICEABLE = "serviceable"


@dataclass(frozen=True)
class StatusEntry:
    unit_code: str
    title: str
    input_time: str = ""
    etr: str = ""
    notes: Tuple[str, ...] = field(default_factory=tuple)
    status_tag: StatusTag = StatusTag.SERVICEABLE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unitCode": self.unit_code,
            "title": self.title,
            "inputTime": self.input_time,
            "etr": self.etr,
            "notes": list(self.notes),
            "statusTag": self.status_tag.value,
        }
