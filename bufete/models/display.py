# bufete/models/display.py
"""
Metadatos de presentación (etiqueta + color) por estado.

Cada tabla debe cubrir exactamente los miembros de su enum; si alguien añade
un estado sin su entrada, el módulo falla al importar.
"""
from typing import Dict, NamedTuple, Type
import enum

from bufete.models.common import (
    ExpiryStatus, MatterStatus, OpportunityStatus, Priority, TaskStatus,
)


class StatusMeta(NamedTuple):
    label: str
    color: str


def _exhaustive(enum_cls: Type[enum.Enum], table: Dict[enum.Enum, StatusMeta]) -> Dict[enum.Enum, StatusMeta]:
    missing = set(enum_cls) - set(table)
    extra = set(table) - set(enum_cls)
    if missing or extra:
        raise RuntimeError(
            f"Tabla de presentación incompleta para {enum_cls.__name__}: "
            f"faltan={sorted(str(m) for m in missing)} sobran={sorted(str(e) for e in extra)}"
        )
    return dict(table)


OPPORTUNITY_STATUS_META = _exhaustive(OpportunityStatus, {
    OpportunityStatus.PROSPECT: StatusMeta("Prospect", "bg-accent/10 text-accent border-accent/20"),
    OpportunityStatus.CONSULTATION: StatusMeta("Consultation", "bg-warning/10 text-warning border-warning/20"),
    OpportunityStatus.ACTIVE: StatusMeta("Active", "bg-success/10 text-success border-success/20"),
    OpportunityStatus.WON: StatusMeta("Won", "bg-green-500/10 text-green-700 border-green-500/20"),
    OpportunityStatus.LOST: StatusMeta("Lost", "bg-destructive/10 text-destructive border-destructive/20"),
})

PRIORITY_META = _exhaustive(Priority, {
    Priority.LOW: StatusMeta("Baja", "bg-gray-100 text-gray-800"),
    Priority.MEDIUM: StatusMeta("Media", "bg-yellow-100 text-yellow-800"),
    Priority.HIGH: StatusMeta("Alta", "bg-orange-100 text-orange-800"),
    Priority.URGENT: StatusMeta("Urgente", "bg-red-100 text-red-800"),
})

TASK_STATUS_META = _exhaustive(TaskStatus, {
    TaskStatus.PENDING: StatusMeta("Pendiente", "bg-gray-500"),
    TaskStatus.IN_PROGRESS: StatusMeta("En Progreso", "bg-yellow-500"),
    TaskStatus.REVIEW: StatusMeta("En Revisión", "bg-blue-500"),
    TaskStatus.COMPLETED: StatusMeta("Completada", "bg-green-500"),
    TaskStatus.CANCELLED: StatusMeta("Cancelada", "bg-red-500"),
})

MATTER_STATUS_META = _exhaustive(MatterStatus, {
    MatterStatus.ACTIVE: StatusMeta("Activo", "bg-green-500"),
    MatterStatus.ON_HOLD: StatusMeta("En Pausa", "bg-yellow-500"),
    MatterStatus.COMPLETED: StatusMeta("Completado", "bg-blue-500"),
    MatterStatus.CANCELLED: StatusMeta("Cancelado", "bg-red-500"),
})

EXPIRY_STATUS_META = _exhaustive(ExpiryStatus, {
    ExpiryStatus.NONE: StatusMeta("No Expiration", "bg-muted/10 text-muted-foreground border-muted/20"),
    ExpiryStatus.EXPIRED: StatusMeta("Expired", "bg-destructive/10 text-destructive border-destructive/20"),
    ExpiryStatus.EXPIRING_SOON: StatusMeta("Expiring Soon", "bg-warning/10 text-warning border-warning/20"),
    ExpiryStatus.VALID: StatusMeta("Valid", "bg-success/10 text-success border-success/20"),
})


def meta_dict(meta: StatusMeta) -> dict:
    return {"label": meta.label, "color": meta.color}
