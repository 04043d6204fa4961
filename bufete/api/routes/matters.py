# bufete/api/routes/matters.py
from typing import Optional
from fastapi import APIRouter, Depends, Request
from bufete.api.deps import get_current_user
from bufete.core.rate_limit import limiter, WRITE_LIMIT
from bufete.models.common import MatterStatus
from bufete.models.matter import TaskCreate, TaskStatusPayload, TimeEntryPayload
from bufete.services import matter_service as svc

router = APIRouter()

@router.get("")
async def list_matters(status: Optional[MatterStatus] = None, current=Depends(get_current_user)):
    return {"items": await svc.list_matters(status)}

@router.get("/{matter_id}")
async def get_matter(matter_id: str, current=Depends(get_current_user)):
    return await svc.get_detail(matter_id)

@router.post("/{matter_id}/tasks", status_code=201)
@limiter.limit(WRITE_LIMIT)
async def add_task(request: Request, matter_id: str, payload: TaskCreate, current=Depends(get_current_user)):
    return await svc.add_task(matter_id, payload)

@router.post("/tasks/{task_id}/status")
@limiter.limit(WRITE_LIMIT)
async def set_task_status(request: Request, task_id: str, payload: TaskStatusPayload, current=Depends(get_current_user)):
    return await svc.set_task_status(task_id, payload.status)

@router.post("/tasks/{task_id}/worklogs")
@limiter.limit(WRITE_LIMIT)
async def add_worklog(request: Request, task_id: str, payload: TimeEntryPayload, current=Depends(get_current_user)):
    # InvalidHours -> 422 vía el handler de DomainError
    return await svc.log_time(task_id, payload, current)

@router.get("/tasks/{task_id}/worklogs")
async def list_worklogs(task_id: str, current=Depends(get_current_user)):
    return await svc.list_time_entries(task_id)
