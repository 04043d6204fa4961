# bufete/repositories/opportunities_repo.py
import re
from typing import Dict, Any, List, Optional
from bufete.core.db import get_db

def _filter(q: Optional[str], status: Optional[str]) -> Dict[str, Any]:
    filt: Dict[str, Any] = {}
    if status:
        filt["status"] = status
    if q:
        rx = {"$regex": re.escape(q), "$options": "i"}
        filt["$or"] = [{"title": rx}, {"client_name": rx}, {"practice_area": rx}]
    return filt

async def insert(doc: dict):
    await get_db().opportunities.insert_one(doc)

async def find_by_id(opportunity_id: str) -> dict | None:
    return await get_db().opportunities.find_one({"id": opportunity_id})

async def update_by_id(opportunity_id: str, fields: Dict[str, Any], activity: Optional[dict] = None):
    ops: Dict[str, Any] = {"$set": fields}
    if activity:
        ops["$push"] = {"activities": activity}
    await get_db().opportunities.update_one({"id": opportunity_id}, ops)

async def search(q: Optional[str], status: Optional[str], skip: int, limit: int) -> List[dict]:
    cur = get_db().opportunities.find(_filter(q, status)).sort("created_at", -1).skip(skip).limit(limit)
    return await cur.to_list(length=limit)

async def count(q: Optional[str] = None, status: Optional[str] = None) -> int:
    return await get_db().opportunities.count_documents(_filter(q, status))

async def totals(q: Optional[str] = None, status: Optional[str] = None) -> Dict[str, float]:
    """Valor total y nº de oportunidades activas sobre el conjunto filtrado."""
    agg = [
        {"$match": _filter(q, status)},
        {"$group": {
            "_id": None,
            "total_value": {"$sum": {"$ifNull": ["$value", 0]}},
            "active_count": {"$sum": {"$cond": [{"$eq": ["$status", "active"]}, 1, 0]}},
        }},
    ]
    res = await get_db().opportunities.aggregate(agg).to_list(1)
    if not res:
        return {"total_value": 0.0, "active_count": 0}
    return {"total_value": float(res[0]["total_value"]), "active_count": int(res[0]["active_count"])}

async def count_by_status() -> Dict[str, int]:
    agg = [{"$group": {"_id": "$status", "n": {"$sum": 1}}}]
    res = await get_db().opportunities.aggregate(agg).to_list(None)
    return {r["_id"]: int(r["n"]) for r in res}

async def sum_value(statuses: List[str]) -> float:
    agg = [
        {"$match": {"status": {"$in": statuses}}},
        {"$group": {"_id": None, "total": {"$sum": {"$ifNull": ["$value", 0]}}}},
    ]
    res = await get_db().opportunities.aggregate(agg).to_list(1)
    return float(res[0]["total"]) if res else 0.0

async def count_by_client(client_id: str) -> int:
    return await get_db().opportunities.count_documents({"client_id": client_id})
