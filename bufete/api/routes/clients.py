# bufete/api/routes/clients.py
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request
from bufete.api.deps import get_current_user
from bufete.core.config import settings
from bufete.core.rate_limit import limiter, WRITE_LIMIT
from bufete.models.client import ClientCreate
from bufete.services import client_service

router = APIRouter()

@router.post("", status_code=201)
@limiter.limit(WRITE_LIMIT)
async def create_client(request: Request, payload: ClientCreate, current=Depends(get_current_user)):
    return await client_service.create(payload, current)

@router.get("")
async def list_clients(
    current=Depends(get_current_user),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=settings.max_page_size),
    q: Optional[str] = None,
):
    return await client_service.list_clients(q, page, page_size)

@router.get("/{client_id}")
async def get_client(client_id: str, current=Depends(get_current_user)):
    return await client_service.get_detail(client_id)
