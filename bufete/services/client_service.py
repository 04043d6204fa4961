# bufete/services/client_service.py
import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException

from bufete.models.client import ClientCreate, ClientInDB
from bufete.repositories import clients_repo as repo
from bufete.repositories import documents_repo, opportunities_repo
from bufete.utils.mongo_helpers import fix_mongo_id, to_mongo
from bufete.utils.pagination import paginate

logger = logging.getLogger(__name__)


async def create(payload: ClientCreate, actor: dict) -> Dict[str, Any]:
    client = ClientInDB(created_by=actor["id"], **payload.model_dump())
    doc = to_mongo(client)
    await repo.insert(doc)
    logger.info("Cliente %s creado por %s", client.id, actor["id"])
    return fix_mongo_id(doc)


async def list_clients(q: Optional[str], page: int, page_size: int) -> Dict[str, Any]:
    total = await repo.count(q)
    window = paginate(total, page, page_size)
    items = await repo.search(q, window.skip, window.limit)
    return {"items": fix_mongo_id(items), **window.model_dump()}


async def get_detail(client_id: str) -> Dict[str, Any]:
    doc = await repo.find_by_id(client_id)
    if not doc:
        raise HTTPException(404, "Cliente no encontrado")
    out = fix_mongo_id(doc)
    out["opportunity_count"] = await opportunities_repo.count_by_client(client_id)
    out["document_count"] = await documents_repo.count_by_client(client_id)
    return out
