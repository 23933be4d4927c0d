import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import intake_engine, Base
from shared.helpers.exception_handler import setup_exception_handlers
from shared.wrappers.response_wrapper import JsonResponseMiddleware

from .models.space_sites import orgs, sites, blocks
from .models.maintenance_assets import assets, service_request
from .models.identity import profiles, tenants, requesters
from .router.webhooks import whatsapp_router
from .router.requesters import requester_router

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

app = FastAPI(title="WhatsApp Intake Service API")

# Create all tables
Base.metadata.create_all(bind=intake_engine)

origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Envelope JSON responses; TwiML passes through
app.add_middleware(JsonResponseMiddleware)

# Register exception handlers
setup_exception_handlers(app)

# Include routers
app.include_router(whatsapp_router.router)
app.include_router(requester_router.router)


@app.get("/api/intake/health")
def health():
    return {"status": "healthy"}
