# bufete/api/routes/opportunities.py
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request
from bufete.api.deps import get_current_user
from bufete.core.config import settings
from bufete.core.rate_limit import limiter, WRITE_LIMIT
from bufete.models.common import OpportunityStatus
from bufete.models.opportunity import OpportunityCreate, TransitionPayload
from bufete.services import opportunity_service as svc

router = APIRouter()

@router.post("", status_code=201)
@limiter.limit(WRITE_LIMIT)
async def create_opportunity(request: Request, payload: OpportunityCreate, current=Depends(get_current_user)):
    return await svc.create(payload, current)

@router.get("")
async def list_opportunities(
    current=Depends(get_current_user),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=settings.max_page_size),
    status: Optional[OpportunityStatus] = None,
    q: Optional[str] = None,
):
    return await svc.list_opportunities(q, status, page, page_size)

@router.get("/statuses")
async def statuses(current=Depends(get_current_user)):
    return svc.status_catalog()

@router.get("/{opportunity_id}")
async def get_opportunity(opportunity_id: str, current=Depends(get_current_user)):
    return await svc.get(opportunity_id)

@router.post("/{opportunity_id}/transition")
@limiter.limit(WRITE_LIMIT)
async def transition(request: Request, opportunity_id: str, payload: TransitionPayload, current=Depends(get_current_user)):
    # IllegalTransition -> 400 vía el handler de DomainError
    return await svc.transition(opportunity_id, payload.to_status, current)
