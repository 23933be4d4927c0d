from fastapi import HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from ...enum.identity_enum import ApprovalAction, RequesterStatus
from ...models.identity.requesters import Requester
from ...schemas.requester_schemas import (
    RequesterApprovalRequest, RequesterListResponse, RequesterOut, RequesterRequest)


def get_requesters(db: Session, params: RequesterRequest) -> RequesterListResponse:
    query = db.query(Requester)

    if params.org_id:
        query = query.filter(Requester.org_id == params.org_id)

    if params.status and params.status.lower() != "all":
        query = query.filter(func.lower(Requester.status) == params.status.lower())

    if params.search:
        query = query.filter(Requester.phone.ilike(f"%{params.search}%"))

    total = query.with_entities(func.count(Requester.id)).scalar()

    requesters = (
        query
        .order_by(Requester.created_at.desc(), Requester.id.desc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )

    return RequesterListResponse(
        requesters=[RequesterOut.model_validate(r) for r in requesters],
        total=total or 0,
    )


def update_requester_approval_status(db: Session, request: RequesterApprovalRequest) -> RequesterOut:
    requester = db.get(Requester, request.id)
    if not requester:
        raise HTTPException(status_code=404, detail="Requester not found")

    if request.status == ApprovalAction.approve:
        requester.status = RequesterStatus.approved.value
    else:
        requester.status = RequesterStatus.rejected.value

    db.commit()
    db.refresh(requester)
    return RequesterOut.model_validate(requester)
