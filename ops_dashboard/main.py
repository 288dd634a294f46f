"""
Acme Logistics: Operations Dashboard API

Endpoints:
  GET  /health, /api/health           – Health check (no auth)
  GET  /api/config                    – Public front-end keys (no auth)
  GET  /loads                         – Filtered, sorted, paginated loads
  POST /call-metrics                  – Record a call outcome
  GET  /api/call-metrics/*            – Call KPIs and breakdowns
  GET  /api/carrier-calls/*           – Legacy carrier-call analytics
  GET  /api/map/*                     – Won-call map points and routes
  *    /api/users/*                   – User admin (X-User-Id header)
  POST /api/admin/reset               – Regenerate synthetic data (admin)

Data endpoints require header: X-API-Key
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ops_dashboard.config import get_settings
from ops_dashboard.db.schema import init_db
from ops_dashboard.db.seed import seed_if_empty
from ops_dashboard.routes import (
    admin,
    call_metrics,
    carrier_calls,
    health,
    loads,
    maps,
    users,
)

log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    s = get_settings()
    logging.basicConfig(
        level=s.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_db()
    if s.seed_on_startup:
        await seed_if_empty()
    print(f"✅ {s.app_name} ready")
    print(f"   Database  : {s.database_path}")
    print(f"   API key   : {'set' if s.api_key else 'NOT SET'}")
    print(f"   Geocoding : {'nominatim fallback' if s.geocode_fallback else 'static only'}")
    yield


app = FastAPI(
    title="Operations Dashboard API",
    description="KPIs, analytics, load listing and map data for the carrier sales operations dashboard.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Error envelope: {"error": ..., "details": ...} ──────────────────────────

def _describe(err: dict) -> str:
    field = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
    if err.get("type") == "missing":
        return f"Missing required field: {field}"
    if err.get("type") == "json_invalid":
        return "Invalid JSON body"
    msg = err.get("msg", "Invalid value")
    msg = msg.removeprefix("Value error, ")
    return f"{field}: {msg}" if field and err.get("type") != "value_error" else msg


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    # Report missing fields before anything else
    errors = sorted(errors, key=lambda e: e.get("type") != "missing")
    details = _describe(errors[0]) if errors else "Invalid request"
    log.info("Validation error on %s %s: %s", request.method, request.url.path, details)
    return JSONResponse(
        status_code=400,
        content={"error": "Validation error", "details": details},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "details": str(exc)},
    )


app.include_router(health.router)
app.include_router(loads.router)
app.include_router(call_metrics.router)
app.include_router(carrier_calls.router)
app.include_router(maps.router)
app.include_router(users.router)
app.include_router(admin.router)
