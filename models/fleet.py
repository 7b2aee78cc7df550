# -*- coding: utf-8 -*-
# ===================================================================
# Night Board - models/fleet.py
# Códigos de aeronave, placeholders da frota e configurações validadas
# ===================================================================

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from models.status import StatusEntry

# Código de unidade: F<dígito> ou S<dígito>
UNIT_CODE_RE = re.compile(r"^[FS]\d$")

# Placeholders exibidos no Overview (ordem dos cards)
PLACEHOLDERS: Tuple[int, ...] = (252, 253, 260, 261, 262, 263, 265, 266)

DEFAULT_PARSE_SLO_MS = 50.0


def is_unit_code(value: str) -> bool:
    return bool(UNIT_CODE_RE.match(value or ""))


def id_to_code(placeholder_id: int) -> str:
    """Converte id numérico do placeholder em código (252 -> F2, 260 -> S0)."""
    if 251 <= placeholder_id <= 259:
        return f"F{placeholder_id - 250}"
    if 260 <= placeholder_id <= 269:
        return f"S{placeholder_id - 260}"
    return str(placeholder_id)


@dataclass(frozen=True)
class FleetCard:
    placeholder_id: int
    unit_code: str
    entry: Optional[StatusEntry] = None


class FleetSettings(BaseModel):
    """Configuração da frota e do orçamento de latência dos parsers.

    Attributes:
        placeholders: IDs numéricos dos cards exibidos, em ordem
        parse_slo_ms: Tempo máximo aceitável (ms) para um re-parse interativo
    """
    placeholders: List[int] = Field(
        default_factory=lambda: list(PLACEHOLDERS),
        description="IDs dos placeholders da frota",
    )
    parse_slo_ms: float = Field(
        default=DEFAULT_PARSE_SLO_MS,
        gt=0,
        description="Orçamento de latência por parse (ms)",
    )

    @field_validator('placeholders')
    @classmethod
    def validate_placeholders(cls, v: List[int]) -> List[int]:
        """Valida que cada placeholder mapeia para um código F/S.

        Args:
            v: Lista de IDs a validar

        Returns:
            Lista sem duplicatas, ordem preservada

        Raises:
            ValueError: Se a lista estiver vazia ou algum ID não mapear para código válido
        """
        if not v:
            raise ValueError("A frota deve ter pelo menos um placeholder")

        invalid = [pid for pid in v if not is_unit_code(id_to_code(pid))]
        if invalid:
            raise ValueError(
                f"Placeholders inválidos: {', '.join(str(p) for p in invalid)}"
            )

        return list(dict.fromkeys(v))
