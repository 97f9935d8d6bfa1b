"""Lastmile FastAPI application.

Processes commands synchronously over HTTP inside the delivery domain's
context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV controls which config overlay is applied:
#   - "test"/unset → memory provider, event_processing = "sync"
#   - "production" → PostgreSQL, event_processing = "async" (projectors via Engine)
from delivery.domain import delivery
from delivery.utils.logging import clear_context, configure_logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

configure_logging()
delivery.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Lastmile API",
    description="Order fulfillment and last-mile delivery",
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
    """Run every request inside the delivery domain context."""
    if request.url.path in ("/health", "/docs", "/openapi.json"):
        return await call_next(request)
    with delivery.domain_context():
        try:
            return await call_next(request)
        finally:
            clear_context()


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from delivery.api import ROUTERS, register_error_handlers  # noqa: E402

for router in ROUTERS:
    app.include_router(router)

register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": delivery.name})
