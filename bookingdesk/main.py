from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bookingdesk.api.admin import router as admin_router
from bookingdesk.api.availability import router as availability_router
from bookingdesk.api.bookings import router as bookings_router
from bookingdesk.api.business import router as business_router
from bookingdesk.api.chat import router as chat_router
from bookingdesk.api.health import router as health_router
from bookingdesk.api.responses import error_body, no_store_json
from bookingdesk.config import get_settings
from bookingdesk.core.errors import BookingDeskError


settings = get_settings()

logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.google_script_url or not settings.google_script_secret:
        logger.warning("Booking backend not configured: booking endpoints will answer 500")
    if not settings.openai_api_key:
        logger.info("No completion provider key: chat uses fallback replies")
    logger.info("Application startup completed (business=%s)", settings.business_slug)
    yield
    logger.info("Application shutdown completed")


app = FastAPI(
    title="BookingDesk",
    description="Prenotazioni, disponibilità e chat per piccole attività",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

origins = (
    [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]
    if settings.allowed_origins != "*"
    else ["*"]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BookingDeskError)
async def booking_desk_error_handler(request: Request, exc: BookingDeskError) -> JSONResponse:
    return no_store_json(error_body(exc.message, exc.details), status_code=exc.status_code)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return no_store_json(error_body(f"Errore interno: {exc}"), status_code=500)


app.include_router(health_router)
app.include_router(business_router)
app.include_router(availability_router)
app.include_router(bookings_router)
app.include_router(admin_router)
app.include_router(chat_router)
