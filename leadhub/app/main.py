# LeadHub backend entrypoint: lead lifecycle, conversion and tenant management.

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from leadhub.app.core.settings import get_settings
from leadhub.app.api import register
from leadhub.app.api import login
from leadhub.app.api import forms
from leadhub.app.api import leads
from leadhub.app.api import notes
from leadhub.app.api import lead_actions
from leadhub.app.api import timeline
from leadhub.app.api import conversion
from leadhub.app.api import organizations
from leadhub.app.core.dev_seed import ensure_bootstrap_admin, ensure_default_dev_admin
from leadhub.app.db.base import Base
from leadhub.app.db.session import SessionLocal, engine

settings = get_settings()
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, version=settings.api_version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(register.router)
app.include_router(login.router)
app.include_router(forms.router)
app.include_router(leads.router)
app.include_router(notes.router)
app.include_router(lead_actions.router)
app.include_router(timeline.router)
app.include_router(conversion.router)
app.include_router(organizations.router)


@app.exception_handler(OperationalError)
async def store_unavailable_handler(request: Request, exc: OperationalError):
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Data store unavailable"})


@app.get("/")
def read_root():
    return {"app": "LeadHub backend", "status": "ok"}


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.on_event("startup")
def prepare_database():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        ensure_bootstrap_admin(db)
        ensure_default_dev_admin(db)
    finally:
        db.close()
