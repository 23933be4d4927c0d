from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.database import get_intake_db as get_db
from ...core.admin_auth import validate_admin_token
from ...crud.requesters import requester_crud as crud
from ...schemas.requester_schemas import (
    RequesterApprovalRequest, RequesterListResponse, RequesterOut, RequesterRequest)

router = APIRouter(prefix="/api/requesters",
                   tags=["Requester Approvals"], dependencies=[Depends(validate_admin_token)])


@router.get("/all", response_model=RequesterListResponse)
def get_requesters_for_approval(
    params: RequesterRequest = Depends(),
    db: Session = Depends(get_db),
):
    return crud.get_requesters(db, params)


@router.put("/", response_model=RequesterOut)
def update_requester_approval_status(
    request: RequesterApprovalRequest,
    db: Session = Depends(get_db),
):
    return crud.update_requester_approval_status(db, request)
