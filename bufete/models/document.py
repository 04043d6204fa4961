# bufete/models/document.py
from pydantic import BaseModel, Field
from datetime import date, datetime, timezone
from typing import Optional
import uuid

class DocumentInDB(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    client_id: str
    name: str
    file_path: str
    file_size: int = Field(default=0, ge=0)
    file_type: Optional[str] = None
    expiration_date: Optional[date] = None
    uploaded_by: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

class DocumentCreate(BaseModel):
    # los bytes los sube el front al storage; aquí solo llega la metadata
    name: str = Field(min_length=1)
    file_path: str = Field(min_length=1)
    file_size: int = Field(default=0, ge=0)
    file_type: Optional[str] = None
    expiration_date: Optional[date] = None
