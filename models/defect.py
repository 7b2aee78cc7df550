# models/defect.py
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class DefectRecord:
    """Defeito de uma aeronave extraído dos blocos do Telegram.

    Todos os campos de texto são opcionais: ausentes ficam como string vazia.
    """

    unit_code: str
    unserviceable_since: str = ""
    defect_text: str = ""
    rect_text: str = ""
    etr: str = ""
    is_recovery: bool = False
    ground_run_requirements: Tuple[str, ...] = field(default_factory=tuple)
    flight_check_requirements: Tuple[str, ...] = field(default_factory=tuple)
    workcenter: str = ""
    prime_trade: str = ""
    system: str = ""
    raw_blocks: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unitCode": self.unit_code,
            "unserviceableSince": self.unserviceable_since,
            "defectText": self.defect_text,
            "rectText": self.rect_text,
            "etr": self.etr,
            "isRecovery": self.is_recovery,
            "groundRunRequirements": list(self.ground_run_requirements),
            "flightCheckRequirements": list(self.flight_check_requirements),
            "workcenter": self.workcenter,
            "primeTrade": self.prime_trade,
            "system": self.system,
        }
