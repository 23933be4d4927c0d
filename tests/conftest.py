"""
Test configuration and fixtures.

Provides:
- In-memory SQLite session shared by the test and the app under test
- TestClient with the database and title summarizer dependencies overridden
- Small factories for organizations and identity records
"""
import os
from datetime import datetime, timedelta, timezone

# Keep the app's own engine off disk and the summarizer off the network
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("GEMINI_API_KEY", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from intake_service.app.main import app
from intake_service.app.core.summarizer import get_title_summarizer
from intake_service.app.models.identity.profiles import Profile
from intake_service.app.models.identity.requesters import Requester
from intake_service.app.models.identity.tenants import Tenant
from intake_service.app.models.maintenance_assets.assets import Asset
from intake_service.app.models.maintenance_assets.service_request import ServiceRequest
from intake_service.app.models.space_sites.orgs import Org
from intake_service.app.models.space_sites.sites import Site
from shared.core.database import Base, get_intake_db

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


@pytest.fixture(scope="function")
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(engine) -> Session:
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture(scope="function")
def summarizer_holder():
    """Mutable slot read by the summarizer dependency override."""
    return {"summarizer": None}


@pytest.fixture(scope="function")
def client(db, summarizer_holder):
    app.dependency_overrides[get_intake_db] = lambda: db
    app.dependency_overrides[get_title_summarizer] = lambda: summarizer_holder["summarizer"]
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# =============================================================================
# Factories
# =============================================================================

@pytest.fixture
def make_org(db):
    counter = {"n": 0}

    def _make(org_id, name, created_at=None):
        counter["n"] += 1
        org = Org(
            id=org_id,
            name=name,
            created_at=created_at or BASE_TIME + timedelta(minutes=counter["n"]),
        )
        db.add(org)
        db.commit()
        return org
    return _make


@pytest.fixture
def make_site(db):
    def _make(site_id, org_id, name="Olympia Cyberspace", code=None):
        site = Site(id=site_id, org_id=org_id, name=name, code=code, location="Guindy")
        db.add(site)
        db.commit()
        return site
    return _make


@pytest.fixture
def make_asset(db):
    def _make(asset_id, org_id, site_id=None, name="HVAC", code=None):
        asset = Asset(id=asset_id, org_id=org_id, site_id=site_id, name=name, code=code)
        db.add(asset)
        db.commit()
        return asset
    return _make


@pytest.fixture
def make_profile(db):
    def _make(org_id, phone, full_name="Ravi", role="admin"):
        profile = Profile(org_id=org_id, phone=phone, full_name=full_name,
                          role=role, created_at=BASE_TIME)
        db.add(profile)
        db.commit()
        return profile
    return _make


@pytest.fixture
def make_tenant(db):
    def _make(org_id, phone, name="Jane", site_id=None, block_id=None, created_at=None):
        tenant = Tenant(org_id=org_id, phone=phone, name=name, site_id=site_id,
                        block_id=block_id, created_at=created_at or BASE_TIME)
        db.add(tenant)
        db.commit()
        return tenant
    return _make


@pytest.fixture
def make_requester(db):
    def _make(org_id, phone, status="pending"):
        requester = Requester(org_id=org_id, phone=phone, status=status,
                              created_at=BASE_TIME)
        db.add(requester)
        db.commit()
        return requester
    return _make


@pytest.fixture
def count_rows(db):
    def _count(model):
        db.expire_all()
        return db.query(model).count()
    return _count


@pytest.fixture
def all_tickets(db):
    def _all():
        db.expire_all()
        return db.query(ServiceRequest).order_by(ServiceRequest.created_at, ServiceRequest.id).all()
    return _all
