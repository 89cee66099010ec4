# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the InvoiceDesk API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   poetry run uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import InvoiceDeskException, invoicedesk_exception_handler
from app.middleware import BodySizeLimitMiddleware, SecurityHeadersMiddleware
from app.routers import health, invoices
from app.auth import routes as auth_routes

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Clients (Supabase, Redis) connect lazily on first use, so startup only
    reports the effective configuration.
    """
    logger.info(f"Starting InvoiceDesk API in {settings.ENVIRONMENT} mode")
    logger.info(
        f"Limits: form payload {settings.max_payload_size_bytes} bytes, "
        f"request body {settings.body_size_limit_bytes} bytes"
    )

    yield

    logger.info("Shutting down InvoiceDesk API")


# Create FastAPI application
app = FastAPI(
    title="InvoiceDesk API",
    description="""
## Invoice management

Form actions for creating, editing and deleting invoices, plus login.

| Action | Route |
|--------|-------|
| Create | `POST /dashboard/invoices` |
| Edit | `POST /dashboard/invoices/{id}/edit` |
| Delete | `POST /dashboard/invoices/{id}/delete` |
| Login | `POST /login` |

Amounts are submitted in dollars and stored in cents.
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Login, logout and token verification",
        },
        {
            "name": "Invoices",
            "description": "Invoice form actions and listing",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================
# Starlette runs the last-added middleware first: the body limit rejects
# oversized requests before anything else, and security headers are set on
# every response produced by the routers and exception handlers below.

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(BodySizeLimitMiddleware)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(InvoiceDeskException)
async def handle_invoicedesk_exception(request: Request, exc: InvoiceDeskException):
    """Handle custom InvoiceDesk exceptions."""
    return await invoicedesk_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Login / logout
app.include_router(
    auth_routes.router,
    tags=["Auth"]
)

# Invoice form actions and listing
app.include_router(
    invoices.router,
    prefix=settings.INVOICES_ROUTE,
    tags=["Invoices"]
)

# JSON invoice API
app.include_router(
    invoices.api_router,
    prefix="/api/v1/invoices",
    tags=["Invoices"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "InvoiceDesk API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
