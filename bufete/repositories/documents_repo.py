# bufete/repositories/documents_repo.py
from typing import List
from bufete.core.db import get_db

async def insert(doc: dict):
    await get_db().documents.insert_one(doc)

async def find_by_id(document_id: str) -> dict | None:
    return await get_db().documents.find_one({"id": document_id})

async def delete(document_id: str):
    await get_db().documents.delete_one({"id": document_id})

async def list_by_client(client_id: str, limit: int = 500) -> List[dict]:
    cur = get_db().documents.find({"client_id": client_id}).sort("created_at", -1).limit(limit)
    return await cur.to_list(length=limit)

# expiration_date se guarda como YYYY-MM-DD: la comparación lexicográfica sirve

def _expired(now_iso: str) -> dict:
    return {"expiration_date": {"$ne": None, "$lt": now_iso}}

def _expiring(now_iso: str, until_iso: str) -> dict:
    return {"expiration_date": {"$gte": now_iso, "$lt": until_iso}}

async def list_expired(now_iso: str, limit: int = 500) -> List[dict]:
    cur = get_db().documents.find(_expired(now_iso)).sort("expiration_date", 1).limit(limit)
    return await cur.to_list(length=limit)

async def list_expiring_between(now_iso: str, until_iso: str, limit: int = 500) -> List[dict]:
    cur = get_db().documents.find(_expiring(now_iso, until_iso)).sort("expiration_date", 1).limit(limit)
    return await cur.to_list(length=limit)

async def count_expired(now_iso: str) -> int:
    return await get_db().documents.count_documents(_expired(now_iso))

async def count_expiring_between(now_iso: str, until_iso: str) -> int:
    return await get_db().documents.count_documents(_expiring(now_iso, until_iso))

async def count_by_client(client_id: str) -> int:
    return await get_db().documents.count_documents({"client_id": client_id})
