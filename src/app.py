"""Marketplace ordering FastAPI application.

Web server that processes checkout, fulfillment and settlement commands
synchronously via HTTP. Every request runs inside the ordering domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - "test"       → event_processing = "sync"  (handlers fire in UoW)
#   - "production" → event_processing = "async" (handlers fire via Engine)
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from ordering.domain import ordering  # noqa: E402
from ordering.utils.logging import bind_request_context, configure_logging
from protean.integrations.fastapi import register_exception_handlers

configure_logging()
ordering.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Marketplace Ordering API",
    description="Checkout, fulfillment and vendor settlement for a multi-vendor marketplace",
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
    """Push the ordering domain context and bind request details to the log context."""
    bind_request_context(
        method=request.method,
        path=request.url.path,
        user_id=request.headers.get("x-user-id"),
        role=request.headers.get("x-user-role"),
    )
    with ordering.domain_context():
        response = await call_next(request)
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from ordering.api import (  # noqa: E402
    cart_router,
    order_router,
    register_ordering_exception_handlers,
    settlement_router,
    vendor_router,
)

app.include_router(cart_router)
app.include_router(order_router)
app.include_router(vendor_router)
app.include_router(settlement_router)

register_exception_handlers(app)
register_ordering_exception_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": ordering.name})
