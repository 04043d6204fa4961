# bufete/repositories/matters_repo.py
from typing import Dict, Any, List, Optional
from bufete.core.db import get_db

# --- asuntos ---

async def insert(doc: dict):
    await get_db().matters.insert_one(doc)

async def find_by_id(matter_id: str) -> dict | None:
    return await get_db().matters.find_one({"id": matter_id})

async def find_by_opportunity(opportunity_id: str) -> dict | None:
    return await get_db().matters.find_one({"opportunity_id": opportunity_id})

async def list_all(status: Optional[str] = None, limit: int = 500) -> List[dict]:
    filt: Dict[str, Any] = {"status": status} if status else {}
    cur = get_db().matters.find(filt).sort("created_at", -1).limit(limit)
    return await cur.to_list(length=limit)

async def count(status: Optional[str] = None) -> int:
    filt: Dict[str, Any] = {"status": status} if status else {}
    return await get_db().matters.count_documents(filt)

# --- tareas ---

async def insert_task(doc: dict):
    await get_db().tasks.insert_one(doc)

async def find_task(task_id: str) -> dict | None:
    return await get_db().tasks.find_one({"id": task_id})

async def list_tasks(matter_ids: List[str]) -> List[dict]:
    cur = get_db().tasks.find({"matter_id": {"$in": matter_ids}})
    return await cur.to_list(length=None)

async def update_task(task_id: str, fields: Dict[str, Any]):
    await get_db().tasks.update_one({"id": task_id}, {"$set": fields})

async def add_task_hours(task_id: str, hours: float):
    # $inc: las horas solo crecen y no dependen de una lectura previa
    await get_db().tasks.update_one({"id": task_id}, {"$inc": {"actual_hours": float(hours)}})