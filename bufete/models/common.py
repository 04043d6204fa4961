# bufete/models/common.py
import enum
from typing import Literal


class _Choice(str, enum.Enum):
    # str(x) y f"{x}" devuelven el código ("won"), no "OpportunityStatus.WON"
    def __str__(self) -> str:
        return self.value


class OpportunityStatus(_Choice):
    PROSPECT = "prospect"
    CONSULTATION = "consultation"
    ACTIVE = "active"
    WON = "won"
    LOST = "lost"


class Priority(_Choice):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class TaskStatus(_Choice):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    REVIEW = "review"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class MatterStatus(_Choice):
    ACTIVE = "active"
    ON_HOLD = "on_hold"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ExpiryStatus(_Choice):
    NONE = "none"
    EXPIRED = "expired"
    EXPIRING_SOON = "expiring_soon"
    VALID = "valid"


PracticeArea = Literal[
    "corporate", "litigation", "real-estate", "employment", "intellectual-property",
    "tax", "family", "criminal", "bankruptcy", "other",
]

# Flujo secuencial del pipeline; won/lost cierran la oportunidad
STATUS_FLOW = [OpportunityStatus.PROSPECT, OpportunityStatus.CONSULTATION, OpportunityStatus.ACTIVE]
TERMINAL_STATES = {OpportunityStatus.WON, OpportunityStatus.LOST}
OPEN_STATES = [s for s in OpportunityStatus if s not in TERMINAL_STATES]

assert set(STATUS_FLOW) | TERMINAL_STATES == set(OpportunityStatus), (
    "STATUS_FLOW/TERMINAL_STATES desincronizados con OpportunityStatus"
)

# Etiquetas heredadas que pueden venir de datos importados a mano
TASK_STATUS_SYNONYMS = {
    "Pendiente": "pending", "En Progreso": "in_progress", "En progreso": "in_progress",
    "En Revisión": "review", "En revisión": "review", "Completada": "completed",
    "Completado": "completed", "Cancelada": "cancelled", "Cancelado": "cancelled",
}
