# bufete/repositories/clients_repo.py
import re
from typing import Dict, Any, List, Optional
from bufete.core.db import get_db

def _search_filter(q: Optional[str]) -> Dict[str, Any]:
    if not q:
        return {}
    rx = {"$regex": re.escape(q), "$options": "i"}
    return {"$or": [{"name": rx}, {"company": rx}, {"email": rx}]}

async def insert(doc: dict):
    await get_db().clients.insert_one(doc)

async def find_by_id(client_id: str) -> dict | None:
    return await get_db().clients.find_one({"id": client_id})

async def search(q: Optional[str], skip: int, limit: int) -> List[dict]:
    cur = get_db().clients.find(_search_filter(q)).sort("created_at", -1).skip(skip).limit(limit)
    return await cur.to_list(length=limit)

async def count(q: Optional[str] = None) -> int:
    return await get_db().clients.count_documents(_search_filter(q))
