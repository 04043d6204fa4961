# bufete/repositories/worklogs_repo.py
from __future__ import annotations
from typing import List
from bufete.core.db import get_db

async def create(entry: dict) -> dict:
    await get_db().time_entries.insert_one(entry)
    return entry

async def list_by_task(task_id: str, limit: int = 200) -> List[dict]:
    cur = get_db().time_entries.find({"task_id": task_id}).sort("entry_date", -1).limit(limit)
    return await cur.to_list(length=limit)

async def sum_hours_by_task(task_id: str) -> float:
    agg = [
        {"$match": {"task_id": task_id}},
        {"$group": {"_id": None, "total": {"$sum": "$hours_spent"}}}
    ]
    res = await get_db().time_entries.aggregate(agg).to_list(1)
    return float(res[0]["total"]) if res else 0.0
