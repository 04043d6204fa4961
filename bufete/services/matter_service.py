# bufete/services/matter_service.py
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import HTTPException

from bufete.models.common import MatterStatus, Priority, TaskStatus, TASK_STATUS_SYNONYMS
from bufete.models.display import MATTER_STATUS_META, PRIORITY_META, TASK_STATUS_META, meta_dict
from bufete.models.matter import MatterInDB, Task, TaskCreate, TimeEntryPayload
from bufete.repositories import matters_repo as repo
from bufete.repositories import worklogs_repo
from bufete.services import task_progress
from bufete.utils.mongo_helpers import fix_mongo_id, to_mongo

logger = logging.getLogger(__name__)


def _task_from_doc(doc: Dict[str, Any]) -> Task:
    out = fix_mongo_id(doc)
    st = out.get("status")
    if isinstance(st, str) and st in TASK_STATUS_SYNONYMS:
        out["status"] = TASK_STATUS_SYNONYMS[st]
    return Task(**out)


def _present_task(task: Task) -> Dict[str, Any]:
    out = task.model_dump(mode="json")
    out["status_meta"] = meta_dict(TASK_STATUS_META[task.status])
    out["priority_meta"] = meta_dict(PRIORITY_META[task.priority])
    return out


def _present_matter(doc: Dict[str, Any], tasks: List[Task]) -> Dict[str, Any]:
    out = fix_mongo_id(doc)
    summary = task_progress.summarize(tasks)
    out["status_meta"] = meta_dict(MATTER_STATUS_META[MatterStatus(out.get("status", "active"))])
    # derivados: siempre recalculados desde la lista de tareas, nunca desde lo guardado
    out["task_count"] = summary.task_count
    out["completed_tasks"] = summary.completed_count
    out["total_hours"] = summary.total_actual_hours
    out["progress_percent"] = summary.progress_percent
    return out


async def create_from_opportunity(opportunity: Dict[str, Any]) -> Dict[str, Any]:
    """Crea el asunto que gestiona una oportunidad ganada.

    Si un intento anterior ya lo creó (la oportunidad no llegó a marcarse como
    ganada) se devuelve ese mismo asunto.
    """
    existing = await repo.find_by_opportunity(opportunity["id"])
    if existing:
        tasks = [_task_from_doc(t) for t in await repo.list_tasks([existing["id"]])]
        logger.info("Oportunidad %s ya tiene el asunto %s", opportunity["id"], existing["id"])
        return _present_matter(existing, tasks)
    matter = MatterInDB(
        name=opportunity["title"],
        description=opportunity.get("description"),
        client_id=opportunity.get("client_id"),
        client_name=opportunity.get("client_name"),
        opportunity_id=opportunity["id"],
        start_date=datetime.now(timezone.utc).date(),
        target_completion_date=opportunity.get("estimated_close_date"),
    )
    await repo.insert(to_mongo(matter))
    logger.info("Asunto %s creado desde la oportunidad %s", matter.id, opportunity["id"])
    return _present_matter(to_mongo(matter), [])


async def list_matters(status: Optional[MatterStatus] = None) -> List[Dict[str, Any]]:
    docs = await repo.list_all(str(status) if status else None)
    task_docs = await repo.list_tasks([d["id"] for d in docs]) if docs else []
    by_matter: Dict[str, List[Task]] = {}
    for t in task_docs:
        by_matter.setdefault(t["matter_id"], []).append(_task_from_doc(t))
    return [_present_matter(d, by_matter.get(d["id"], [])) for d in docs]


async def get_detail(matter_id: str) -> Dict[str, Any]:
    doc = await repo.find_by_id(matter_id)
    if not doc:
        raise HTTPException(404, "Asunto no encontrado")
    tasks = [_task_from_doc(t) for t in await repo.list_tasks([matter_id])]
    out = _present_matter(doc, tasks)
    out["tasks"] = [_present_task(t) for t in tasks]
    return out


async def add_task(matter_id: str, payload: TaskCreate) -> Dict[str, Any]:
    if not await repo.find_by_id(matter_id):
        raise HTTPException(404, "Asunto no encontrado")
    title = (payload.title or "").strip()
    if not title:
        raise HTTPException(422, "El título de la tarea es requerido")
    task = Task(
        matter_id=matter_id,
        title=title,
        description=payload.description,
        priority=payload.priority or Priority.MEDIUM,
        assigned_to=payload.assigned_to or None,
        estimated_hours=payload.estimated_hours,
        due_date=payload.due_date,
    )
    await repo.insert_task(to_mongo(task))
    return _present_task(task)


async def _get_task(task_id: str) -> Task:
    doc = await repo.find_task(task_id)
    if not doc:
        raise HTTPException(404, "Tarea no encontrada")
    return _task_from_doc(doc)


async def set_task_status(task_id: str, status: TaskStatus) -> Dict[str, Any]:
    task = await _get_task(task_id)
    # reasignación simple: cualquier estado es válido
    await repo.update_task(task_id, {"status": str(status)})
    logger.info("Tarea %s: %s → %s", task_id, task.status, status)
    return _present_task(task.model_copy(update={"status": status}))


async def log_time(task_id: str, payload: TimeEntryPayload, actor: dict) -> Dict[str, Any]:
    task = await _get_task(task_id)
    user_name = (payload.user_name or actor.get("full_name") or "").strip()
    if not user_name:
        raise HTTPException(422, "Horas y nombre del usuario son requeridos")
    updated, entry = task_progress.log_time(task, payload.hours_spent, payload.description, user_name)
    await worklogs_repo.create(to_mongo(entry))
    await repo.add_task_hours(task_id, entry.hours_spent)
    updated = await _get_task(task_id)
    total = await worklogs_repo.sum_hours_by_task(task_id)
    logger.info("Registradas %.2f h en la tarea %s por %s", entry.hours_spent, task_id, user_name)
    return {"task": _present_task(updated), "time_entry": entry.model_dump(mode="json"), "worklog_total_hours": total}


async def list_time_entries(task_id: str) -> Dict[str, Any]:
    await _get_task(task_id)
    items = fix_mongo_id(await worklogs_repo.list_by_task(task_id))
    total = await worklogs_repo.sum_hours_by_task(task_id)
    return {"items": items, "total_hours": round(total, 2)}
