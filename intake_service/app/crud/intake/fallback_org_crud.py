import logging
import re
import uuid
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shared.core.config import settings
from ..errors import NoOrganizationConfigured
from ...enum.identity_enum import RequesterStatus
from ...helpers.phone_helper import mask_phone
from ...models.identity.requesters import Requester
from ...models.space_sites.orgs import Org
from ...models.space_sites.sites import Site
from ...schemas.identity_schemas import FallbackRoute

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def extract_site_codes(body: str, pattern: str | None = None) -> List[str]:
    regex = re.compile(pattern or settings.SITE_CODE_PATTERN, re.IGNORECASE)
    codes = []
    for match in regex.findall(body or ""):
        code = match.upper()
        if code not in codes:
            codes.append(code)
    return codes


def find_site_by_code(db: Session, body: str) -> Optional[Site]:
    codes = extract_site_codes(body)
    if not codes:
        return None
    return (
        db.query(Site)
        .filter(Site.code.isnot(None), func.upper(Site.code).in_(codes))
        .order_by(Site.created_at.asc(), Site.id.asc())
        .first()
    )


def get_latest_org(db: Session) -> Optional[Org]:
    return (
        db.query(Org)
        .order_by(Org.created_at.desc(), Org.id.desc())
        .first()
    )


def select_fallback_org(db: Session, body: str) -> FallbackRoute:
    """
    Choose the organization hosting a message from an unknown sender.

    Order: a site code quoted in the message, then DEFAULT_ORG_ID, then
    the most recently created organization while FALLBACK_TO_LATEST_ORG
    is on. Raises NoOrganizationConfigured when nothing qualifies.
    """
    site = find_site_by_code(db, body)
    if site:
        return FallbackRoute(
            org_id=site.org_id,
            org_name=site.org.name if site.org else None,
            site_id=site.id,
            strategy="site_code",
        )

    if settings.DEFAULT_ORG_ID:
        org = db.get(Org, settings.DEFAULT_ORG_ID)
        if org:
            return FallbackRoute(org_id=org.id, org_name=org.name, strategy="default_org")
        logger.warning("DEFAULT_ORG_ID %s does not exist", settings.DEFAULT_ORG_ID)

    if settings.FALLBACK_TO_LATEST_ORG:
        org = get_latest_org(db)
        if org:
            return FallbackRoute(org_id=org.id, org_name=org.name, strategy="latest_org")

    raise NoOrganizationConfigured("Configuration Error: No organizations exist.")


def upsert_pending_requester(db: Session, phone: str, org_id: str) -> Requester:
    """
    Record the sender as a pending requester, keyed by phone.

    Idempotent: a second call for the same phone leaves the existing row
    untouched. Does not commit; the caller owns the transaction.
    """
    values = dict(
        id=str(uuid.uuid4()),
        phone=phone,
        org_id=org_id,
        status=RequesterStatus.pending.value,
    )

    insert = _UPSERT_DIALECTS.get(db.get_bind().dialect.name)
    if insert is not None:
        stmt = insert(Requester).values(**values).on_conflict_do_nothing(
            index_elements=["phone"])
        db.execute(stmt)
    else:
        try:
            with db.begin_nested():
                db.add(Requester(**values))
        except IntegrityError:
            # phone already registered
            logger.debug("Requester %s already exists", mask_phone(phone))

    requester = db.query(Requester).filter(Requester.phone == phone).one()
    logger.info("Requester %s is %s in org %s",
                mask_phone(phone), requester.status, requester.org_id)
    return requester
