# -*- coding: utf-8 -*-
# ===================================================================
# Night Board - models/handover.py
# Modelos do HOTO (handover/takeover): concluídos, pendentes e extras
# ===================================================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.fleet import is_unit_code


class HandoverCategory(str, Enum):
    PROJ14 = "proj14"
    PROJ28 = "proj28"
    PROJ56 = "proj56"
    PROJ112 = "proj112"
    PROJ112150 = "proj112150"
    PROJ180 = "proj180"
    MEE = "mee"
    EOSS = "eoss"
    BRU = "bru"
    PROBE = "probe"
    AOM = "aom"
    LESSONS = "lessons"


@dataclass(frozen=True)
class HandoverGroup:
    unit_code: str
    tag: str = ""
    items: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {"unitCode": self.unit_code, "tag": self.tag, "items": list(self.items)}


@dataclass(frozen=True)
class HandoverReport:
    completed: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    outstanding: Dict[str, HandoverGroup] = field(default_factory=dict)
    extra: Dict[HandoverCategory, Tuple[str, ...]] = field(
        default_factory=lambda: {c: () for c in HandoverCategory}
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "completed": {code: list(items) for code, items in self.completed.items()},
            "outstanding": {code: g.to_dict() for code, g in self.outstanding.items()},
            "extra": {c.value: list(items) for c, items in self.extra.items()},
        }


class TickedItem(BaseModel):
    """Item pendente marcado pelo usuário para mover para 'Job Completed'.

    Attributes:
        unit_code: Código da aeronave (F/S + dígito)
        item: Texto exato do item pendente
    """
    model_config = ConfigDict(frozen=True)

    unit_code: str = Field(..., description="Código da aeronave")
    item: str = Field(..., min_length=1, description="Texto do item pendente")

    @field_validator('unit_code')
    @classmethod
    def validate_unit_code(cls, v: str) -> str:
        """Normaliza e valida o código da aeronave.

        Raises:
            ValueError: Se o código não seguir o padrão F/S + dígito
        """
        normalized = v.strip().upper()
        if not is_unit_code(normalized):
            raise ValueError(f"Código de aeronave inválido: '{v}'")
        return normalized
