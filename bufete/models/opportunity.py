# bufete/models/opportunity.py
from pydantic import BaseModel, Field
from datetime import date, datetime, timezone
from typing import Optional, List
import uuid
from bufete.models.common import OpportunityStatus, Priority, PracticeArea

class Activity(BaseModel):
    date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    action: str
    status: OpportunityStatus
    by_user_id: Optional[str] = None
    by_user_name: Optional[str] = None

class OpportunityInDB(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    title: str
    description: Optional[str] = None
    client_id: Optional[str] = None
    client_name: Optional[str] = None
    value: Optional[float] = Field(default=None, ge=0)
    status: OpportunityStatus = OpportunityStatus.PROSPECT
    priority: Priority = Priority.MEDIUM
    practice_area: Optional[PracticeArea] = None
    estimated_close_date: Optional[date] = None
    notes: Optional[str] = None
    created_by: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    activities: List[Activity] = Field(default_factory=list)
    matter_id: Optional[str] = None

class OpportunityCreate(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    client_id: Optional[str] = None
    value: Optional[float] = Field(default=None, ge=0)
    priority: Priority = Priority.MEDIUM
    practice_area: Optional[PracticeArea] = None
    estimated_close_date: Optional[date] = None
    notes: Optional[str] = None

class TransitionPayload(BaseModel):
    to_status: OpportunityStatus
