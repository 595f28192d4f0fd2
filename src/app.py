"""Nexus WMS FastAPI application.

Single-domain web server that processes warehouse commands synchronously via
HTTP. Each request runs inside the warehouse domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from warehouse.api import include_api
from warehouse.domain import warehouse
from warehouse.utils.logging import bind_session, clear_session, configure_logging

configure_logging()

# Initialized at module level so uvicorn workers share it.
warehouse.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Nexus WMS API",
    description="Warehouse console: inventory ledger, receiving, pick/pack/ship",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the warehouse domain context for each request."""
    clear_session()
    bind_session(method=request.method, path=request.url.path)
    with warehouse.domain_context():
        response = await call_next(request)
    return response


include_api(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": warehouse.name})
