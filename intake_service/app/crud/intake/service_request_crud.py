import logging
import random
import re
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.core.config import settings
from ..errors import TicketWriteError
from ...enum.identity_enum import RequesterStatus
from ...enum.service_request_enum import ServiceRequestSource, ServiceRequestStatus
from ...models.maintenance_assets.assets import Asset
from ...models.maintenance_assets.service_request import ServiceRequest
from ...schemas.identity_schemas import Identity
from ...schemas.service_request_schemas import ServiceRequestCreate

logger = logging.getLogger(__name__)

TICKET_PREFIX = "SR-"

_ASSET_CODE = re.compile(r"\b[A-Za-z]+-\d+\b")


def generate_ticket_id() -> str:
    return f"{TICKET_PREFIX}{random.randint(100000, 999999)}"


def allocate_ticket_id(db: Session) -> str:
    """Random SR code, re-drawn while it collides with an existing ticket."""
    for _ in range(max(settings.TICKET_ID_ATTEMPTS, 1)):
        ticket_id = generate_ticket_id()
        if db.get(ServiceRequest, ticket_id) is None:
            return ticket_id
        logger.warning("Ticket id %s already taken, drawing again", ticket_id)
    raise TicketWriteError("Could not allocate a unique ticket id")


def find_asset_by_code(db: Session, org_id: str, message: str) -> Optional[Asset]:
    codes = {code.upper() for code in _ASSET_CODE.findall(message or "")}
    if not codes:
        return None
    return (
        db.query(Asset)
        .filter(Asset.org_id == org_id, Asset.code.isnot(None), func.upper(Asset.code).in_(codes))
        .order_by(Asset.created_at.asc(), Asset.id.asc())
        .first()
    )


def create_whatsapp_service_request(db: Session, request: ServiceRequestCreate) -> ServiceRequest:
    """
    Insert one New/WhatsApp ticket. Flushes but does not commit; a store
    failure is raised as TicketWriteError.
    """
    try:
        db_request = ServiceRequest(
            id=allocate_ticket_id(db),
            org_id=request.org_id,
            site_id=request.site_id,
            block_id=request.block_id,
            asset_id=request.asset_id,
            title=request.title,
            description=request.description,
            requester_phone=request.requester_phone,
            status=ServiceRequestStatus.new.value,
            source=ServiceRequestSource.whatsapp.value,
        )
        db.add(db_request)
        db.flush()
    except SQLAlchemyError as e:
        raise TicketWriteError(str(e), cause=e) from e

    logger.info("Service request %s created for org %s", db_request.id, db_request.org_id)
    return db_request


def build_acknowledgement(identity: Identity, ticket_id: str, org_name: Optional[str]) -> str:
    org_label = org_name or "Facility"

    if identity.kind in ("profile", "tenant"):
        return (
            f"✅ Hello {identity.display_name or 'Resident'}! "
            f"Ticket {ticket_id} has been logged to the {org_label} dashboard."
        )

    if identity.kind == "unresolved":
        return (
            f"✅ Welcome! Ticket {ticket_id} logged for {org_label}. "
            "As you are a new contact, your number is pending approval by an administrator."
        )

    if identity.kind == "requester" and identity.status == RequesterStatus.pending.value:
        return (
            f"✅ Ticket {ticket_id} logged for {org_label}. "
            "Note: Your contact is still pending administrator approval."
        )

    return f"✅ Ticket {ticket_id} logged for {org_label}."
