from sqlalchemy.exc import OperationalError

from intake_service.app.crud.intake import identity_crud
from intake_service.app.crud.intake.identity_crud import resolve_identity

SUFFIX = "9175551234"


def test_unknown_phone_is_unresolved(db, make_org):
    make_org("org-1", "Acme")
    assert resolve_identity(db, SUFFIX).kind == "unresolved"


def test_empty_suffix_never_matches(db, make_org, make_tenant):
    make_org("org-1", "Acme")
    make_tenant("org-1", "+19175551234")
    assert resolve_identity(db, "").kind == "unresolved"


def test_profile_match(db, make_org, make_profile):
    make_org("org-1", "Acme")
    make_profile("org-1", "+19175551234", full_name="Ravi", role="admin")

    identity = resolve_identity(db, SUFFIX)

    assert identity.kind == "profile"
    assert identity.org_id == "org-1"
    assert identity.role == "admin"
    assert identity.display_name == "Ravi"


def test_tenant_match_carries_site_and_block(db, make_org, make_site, make_tenant):
    make_org("org-2", "Harbor")
    make_site("site-9", "org-2")
    make_tenant("org-2", "9175551234", name="Jane", site_id="site-9", block_id="block-1")

    identity = resolve_identity(db, SUFFIX)

    assert identity.kind == "tenant"
    assert identity.org_id == "org-2"
    assert identity.site_id == "site-9"
    assert identity.block_id == "block-1"
    assert identity.display_name == "Jane"


def test_profile_wins_over_tenant_and_requester(db, make_org, make_profile, make_tenant, make_requester):
    make_org("org-1", "Acme")
    make_org("org-2", "Harbor")
    make_org("org-3", "Summit")
    make_requester("org-3", "19175551234")
    make_tenant("org-2", "+19175551234")
    make_profile("org-1", "+19175551234")

    assert resolve_identity(db, SUFFIX).org_id == "org-1"


def test_tenant_wins_over_requester(db, make_org, make_tenant, make_requester):
    make_org("org-2", "Harbor")
    make_org("org-3", "Summit")
    make_requester("org-3", "19175551234")
    make_tenant("org-2", "+19175551234")

    identity = resolve_identity(db, SUFFIX)

    assert identity.kind == "tenant"
    assert identity.org_id == "org-2"


def test_requester_match_reports_status(db, make_org, make_requester):
    make_org("org-3", "Summit")
    make_requester("org-3", "19175551234", status="approved")

    identity = resolve_identity(db, SUFFIX)

    assert identity.kind == "requester"
    assert identity.status == "approved"


def test_match_is_case_insensitive_suffix_only(db, make_org, make_tenant):
    make_org("org-2", "Harbor")
    make_tenant("org-2", "WhatsApp:+19175551234")

    assert resolve_identity(db, SUFFIX).kind == "tenant"
    assert resolve_identity(db, "9175551239").kind == "unresolved"


def test_store_failure_degrades_to_unresolved(db, make_org, make_tenant, monkeypatch):
    make_org("org-2", "Harbor")
    make_tenant("org-2", "+19175551234")

    def broken_profile_probe(db, suffix):
        raise OperationalError("SELECT profiles", {}, Exception("connection reset"))

    monkeypatch.setattr(identity_crud, "IDENTITY_PROBES",
                        (broken_profile_probe, identity_crud.find_tenant))

    assert resolve_identity(db, SUFFIX).kind == "unresolved"


def test_short_sender_never_matches_longer_numbers(db, make_org, make_profile, make_tenant):
    make_org("org-1", "Acme")
    make_profile("org-1", "+19175551234", full_name="Ravi")
    make_tenant("org-1", "+19175551234")

    assert resolve_identity(db, "34").kind == "unresolved"
    assert resolve_identity(db, "551234").kind == "unresolved"
