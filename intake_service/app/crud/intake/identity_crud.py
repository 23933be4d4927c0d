import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...helpers.phone_helper import PHONE_SUFFIX_LENGTH, mask_phone
from ...models.identity.profiles import Profile
from ...models.identity.requesters import Requester
from ...models.identity.tenants import Tenant
from ...schemas.identity_schemas import (
    Identity, ProfileIdentity, RequesterIdentity, TenantIdentity, Unresolved)

logger = logging.getLogger(__name__)


def _phone_suffix_filter(column, suffix: str):
    return column.ilike(f"%{suffix}")


def _first_match(db: Session, model, suffix: str):
    # duplicates are tolerated; the oldest record wins
    return (
        db.query(model)
        .filter(model.org_id.isnot(None), _phone_suffix_filter(model.phone, suffix))
        .order_by(model.created_at.asc(), model.id.asc())
        .first()
    )


def find_profile(db: Session, suffix: str) -> Optional[ProfileIdentity]:
    profile = _first_match(db, Profile, suffix)
    if not profile:
        return None
    return ProfileIdentity(
        org_id=profile.org_id,
        role=profile.role,
        display_name=profile.full_name,
    )


def find_tenant(db: Session, suffix: str) -> Optional[TenantIdentity]:
    tenant = _first_match(db, Tenant, suffix)
    if not tenant:
        return None
    return TenantIdentity(
        org_id=tenant.org_id,
        display_name=tenant.name,
        site_id=tenant.site_id,
        block_id=tenant.block_id,
    )


def find_requester(db: Session, suffix: str) -> Optional[RequesterIdentity]:
    requester = _first_match(db, Requester, suffix)
    if not requester:
        return None
    return RequesterIdentity(org_id=requester.org_id, status=requester.status)


# Profile > Tenant > Requester
IDENTITY_PROBES = (find_profile, find_tenant, find_requester)


def resolve_identity(db: Session, suffix: str) -> Identity:
    """
    Resolve the owning organization of a phone suffix.

    Probes run in strict priority order and the first hit wins. A failing
    probe is reported as unresolved so the caller can still route the
    message through the fallback organization. Suffixes shorter than a
    full phone suffix never match.
    """
    if not suffix or len(suffix) < PHONE_SUFFIX_LENGTH:
        logger.info("Sender %s is too short to resolve", mask_phone(suffix))
        return Unresolved()

    for probe in IDENTITY_PROBES:
        try:
            identity = probe(db, suffix)
        except SQLAlchemyError:
            logger.exception(
                "Identity lookup %s failed for %s", probe.__name__, mask_phone(suffix))
            db.rollback()
            return Unresolved()

        if identity is not None:
            logger.info("Sender %s resolved as %s in org %s",
                        mask_phone(suffix), identity.kind, identity.org_id)
            return identity

    return Unresolved()
