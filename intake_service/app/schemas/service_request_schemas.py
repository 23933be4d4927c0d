from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict


class ServiceRequestCreate(BaseModel):
    org_id: str
    site_id: Optional[str] = None
    block_id: Optional[str] = None
    asset_id: Optional[str] = None
    title: str
    description: str
    requester_phone: str


class ServiceRequestOut(BaseModel):
    id: str
    org_id: str
    site_id: Optional[str] = None
    block_id: Optional[str] = None
    asset_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    requester_phone: Optional[str] = None
    status: str
    source: str
    resolution_notes: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class IntakeResult(BaseModel):
    ticket: ServiceRequestOut
    identity_kind: str
    org_name: Optional[str] = None
    reply: str
