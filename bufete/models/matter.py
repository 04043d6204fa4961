# bufete/models/matter.py
from pydantic import BaseModel, Field
from datetime import date, datetime, timezone
from typing import Optional
import uuid
from bufete.models.common import MatterStatus, Priority, TaskStatus

class Task(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    matter_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.PENDING
    priority: Priority = Priority.MEDIUM
    assigned_to: Optional[str] = None
    estimated_hours: Optional[float] = Field(default=None, ge=0)
    due_date: Optional[date] = None
    actual_hours: float = Field(default=0.0, ge=0)

class TimeEntry(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    task_id: str
    matter_id: Optional[str] = None
    user_name: str
    hours_spent: float
    description: str = ""
    entry_date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

class MatterInDB(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str
    description: Optional[str] = None
    status: MatterStatus = MatterStatus.ACTIVE
    client_id: Optional[str] = None
    client_name: Optional[str] = None
    opportunity_id: Optional[str] = None
    start_date: date = Field(default_factory=date.today)
    target_completion_date: Optional[date] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

class MatterSummary(BaseModel):
    task_count: int = 0
    completed_count: int = 0
    total_actual_hours: float = 0.0
    progress_percent: int = 0

class TaskCreate(BaseModel):
    title: str
    description: Optional[str] = None
    priority: Priority = Priority.MEDIUM
    assigned_to: Optional[str] = None
    estimated_hours: Optional[float] = Field(default=None, ge=0)
    due_date: Optional[date] = None

class TaskStatusPayload(BaseModel):
    status: TaskStatus

class TimeEntryPayload(BaseModel):
    # sin validación de signo aquí: la regla vive en task_progress.log_time
    hours_spent: float = Field(allow_inf_nan=False)
    description: str = ""
    user_name: Optional[str] = None
