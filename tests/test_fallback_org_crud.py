from datetime import datetime, timezone

import pytest

from intake_service.app.crud.errors import NoOrganizationConfigured
from intake_service.app.crud.intake import fallback_org_crud
from intake_service.app.crud.intake.fallback_org_crud import (
    extract_site_codes, get_latest_org, select_fallback_org, upsert_pending_requester)
from intake_service.app.models.space_sites.orgs import Org
from intake_service.app.models.identity.requesters import Requester
from shared.core.config import settings


def test_latest_org_hosts_unknown_sender(db, make_org):
    make_org("org-1", "Acme", created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
    make_org("org-2", "Harbor", created_at=datetime(2025, 6, 1, tzinfo=timezone.utc))
    make_org("org-0", "Old", created_at=datetime(2023, 1, 1, tzinfo=timezone.utc))

    route = select_fallback_org(db, "lift stuck")

    assert route.org_id == "org-2"
    assert route.org_name == "Harbor"
    assert route.strategy == "latest_org"
    assert route.site_id is None


def test_site_code_in_message_selects_site_org(db, make_org, make_site):
    make_org("org-1", "Acme")
    make_org("org-2", "Harbor")
    make_site("site-1", "org-1", code="SITE-598")

    route = select_fallback_org(db, "AC not cooling at site-598 reception")

    assert route.org_id == "org-1"
    assert route.site_id == "site-1"
    assert route.strategy == "site_code"


def test_unknown_site_code_falls_through(db, make_org, make_site):
    make_org("org-1", "Acme")
    make_org("org-2", "Harbor")
    make_site("site-1", "org-1", code="SITE-598")

    assert select_fallback_org(db, "leak at SITE-111").org_id == "org-2"


def test_configured_default_org_beats_latest(db, make_org, monkeypatch):
    make_org("org-1", "Acme")
    make_org("org-2", "Harbor")
    monkeypatch.setattr(settings, "DEFAULT_ORG_ID", "org-1")

    route = select_fallback_org(db, "lift stuck")

    assert route.org_id == "org-1"
    assert route.strategy == "default_org"


def test_missing_default_org_falls_back_to_latest(db, make_org, monkeypatch):
    make_org("org-1", "Acme")
    monkeypatch.setattr(settings, "DEFAULT_ORG_ID", "org-404")

    assert select_fallback_org(db, "lift stuck").org_id == "org-1"


def test_no_org_raises_configuration_error(db):
    with pytest.raises(NoOrganizationConfigured):
        select_fallback_org(db, "lift stuck")


def test_latest_org_policy_can_be_switched_off(db, make_org, monkeypatch):
    make_org("org-1", "Acme")
    monkeypatch.setattr(settings, "FALLBACK_TO_LATEST_ORG", False)

    with pytest.raises(NoOrganizationConfigured):
        select_fallback_org(db, "lift stuck")


def test_extract_site_codes_dedupes_and_uppercases():
    assert extract_site_codes("site-598 and SITE-598, also blk-2") == ["SITE-598", "BLK-2"]
    assert extract_site_codes("no codes here") == []


def test_upsert_twice_keeps_single_pending_row(db, make_org, count_rows):
    make_org("org-1", "Acme")

    first = upsert_pending_requester(db, "19175551234", "org-1")
    second = upsert_pending_requester(db, "19175551234", "org-1")
    db.commit()

    assert count_rows(Requester) == 1
    assert first.id == second.id
    assert second.status == "pending"
    assert second.org_id == "org-1"


def test_upsert_never_overwrites_existing_status(db, make_org, make_requester):
    make_org("org-1", "Acme")
    make_requester("org-1", "19175551234", status="approved")

    requester = upsert_pending_requester(db, "19175551234", "org-1")

    assert requester.status == "approved"


def test_latest_org_follows_insertion_order_without_explicit_timestamps(db):
    db.add(Org(id="zzz-older", name="Older"))
    db.commit()
    db.add(Org(id="aaa-newer", name="Newer"))
    db.commit()

    assert get_latest_org(db).id == "aaa-newer"


def test_generic_upsert_twice_keeps_single_pending_row(db, make_org, count_rows, monkeypatch):
    make_org("org-1", "Acme")
    monkeypatch.setattr(fallback_org_crud, "_UPSERT_DIALECTS", {})

    first = upsert_pending_requester(db, "19175551234", "org-1")
    second = upsert_pending_requester(db, "19175551234", "org-1")
    db.commit()

    assert count_rows(Requester) == 1
    assert first.id == second.id
    assert second.status == "pending"


def test_generic_upsert_never_overwrites_existing_status(db, make_org, make_requester, monkeypatch):
    make_org("org-1", "Acme")
    make_requester("org-1", "19175551234", status="approved")
    monkeypatch.setattr(fallback_org_crud, "_UPSERT_DIALECTS", {})

    requester = upsert_pending_requester(db, "19175551234", "org-1")

    assert requester.status == "approved"
