import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import TicketWriteError
from ...enum.identity_enum import RequesterStatus
from ...helpers.phone_helper import mask_phone, normalize_phone
from ...models.space_sites.orgs import Org
from ...schemas.identity_schemas import FallbackRoute, RequesterIdentity
from ...schemas.service_request_schemas import (
    IntakeResult, ServiceRequestCreate, ServiceRequestOut)
from . import fallback_org_crud, identity_crud, service_request_crud, title_crud

logger = logging.getLogger(__name__)


def _org_name(db: Session, org_id: str) -> Optional[str]:
    org = db.get(Org, org_id)
    return org.name if org else None


def process_inbound_message(db: Session, raw_from: str, body: str, summarizer=None) -> IntakeResult:
    """
    Turn one inbound WhatsApp message into a service request.

    normalize -> resolve identity -> (fallback organization) -> title ->
    write. The pending-requester upsert and the ticket insert are committed
    together, so a failed insert leaves no requester row behind.

    Raises NoOrganizationConfigured when an unknown sender cannot be routed
    and TicketWriteError when the store rejects the writes.
    """
    phone = normalize_phone(raw_from)
    message = title_crud.clean_message_body(body)

    identity = identity_crud.resolve_identity(db, phone.suffix)

    route: Optional[FallbackRoute] = None
    site_id = block_id = None
    try:
        if identity.kind == "unresolved":
            route = fallback_org_crud.select_fallback_org(db, message)
            org_id, site_id = route.org_id, route.site_id
            logger.info("Unknown sender %s routed to org %s via %s",
                        mask_phone(phone.canonical), org_id, route.strategy)
        else:
            org_id = identity.org_id
            if identity.kind == "tenant":
                site_id, block_id = identity.site_id, identity.block_id

        org_name = route.org_name if route and route.org_name else _org_name(db, org_id)

        asset = service_request_crud.find_asset_by_code(db, org_id, message)
    except SQLAlchemyError as e:
        db.rollback()
        raise TicketWriteError(str(e), cause=e) from e

    asset_id = None
    if asset:
        asset_id = asset.id
        site_id = site_id or asset.site_id

    title = title_crud.generate_title(message, summarizer)

    reply_identity = identity
    try:
        if route is not None:
            requester = fallback_org_crud.upsert_pending_requester(db, phone.canonical, org_id)
            # a lookup that failed may hide an already reviewed requester
            if requester.status != RequesterStatus.pending.value:
                reply_identity = RequesterIdentity(
                    org_id=requester.org_id, status=requester.status)

        ticket = service_request_crud.create_whatsapp_service_request(db, ServiceRequestCreate(
            org_id=org_id,
            site_id=site_id,
            block_id=block_id,
            asset_id=asset_id,
            title=title,
            description=message,
            requester_phone=phone.canonical,
        ))
        db.commit()
    except TicketWriteError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        raise TicketWriteError(str(e), cause=e) from e

    db.refresh(ticket)
    reply = service_request_crud.build_acknowledgement(reply_identity, ticket.id, org_name)

    return IntakeResult(
        ticket=ServiceRequestOut.model_validate(ticket),
        identity_kind=identity.kind,
        org_name=org_name,
        reply=reply,
    )
