# bufete/services/task_progress.py
import math
from typing import Iterable, Tuple

from bufete.core.errors import InvalidHours
from bufete.models.common import TaskStatus
from bufete.models.matter import MatterSummary, Task, TimeEntry


def progress_percent(completed: int, total: int) -> int:
    # redondeo half-up en enteros: 7/12 -> 58, 1/8 -> 13
    if total <= 0:
        return 0
    return (completed * 200 + total) // (2 * total)


def summarize(tasks: Iterable[Task]) -> MatterSummary:
    tasks = list(tasks)
    completed = sum(1 for t in tasks if t.status == TaskStatus.COMPLETED)
    total_hours = sum(float(t.actual_hours or 0) for t in tasks)
    return MatterSummary(
        task_count=len(tasks),
        completed_count=completed,
        total_actual_hours=round(total_hours, 2),
        progress_percent=progress_percent(completed, len(tasks)),
    )


def log_time(task: Task, hours_spent: float, description: str = "", user_name: str = "") -> Tuple[Task, TimeEntry]:
    """Devuelve una copia de la tarea con las horas sumadas y la entrada registrada.

    La tarea recibida no se modifica.
    """
    # NaN e inf no son horas: romperían la suma del asunto
    if not (hours_spent > 0 and math.isfinite(hours_spent)):
        raise InvalidHours(hours_spent)
    updated = task.model_copy(update={"actual_hours": task.actual_hours + hours_spent})
    entry = TimeEntry(
        task_id=task.id,
        matter_id=task.matter_id,
        user_name=user_name,
        hours_spent=hours_spent,
        description=(description or "").strip(),
    )
    return updated, entry
