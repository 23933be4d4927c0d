from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict

from shared.core.schemas import CommonQueryParams
from ..enum.identity_enum import ApprovalAction


class RequesterOut(BaseModel):
    id: str
    org_id: Optional[str] = None
    phone: str
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class RequesterRequest(CommonQueryParams):
    org_id: Optional[str] = None
    status: Optional[str] = "pending"


class RequesterListResponse(BaseModel):
    requesters: List[RequesterOut]
    total: int


class RequesterApprovalRequest(BaseModel):
    id: str
    status: ApprovalAction
