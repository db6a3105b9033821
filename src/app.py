"""Shopping basket FastAPI application.

Processes commands synchronously over HTTP. Every request under a shopping
prefix runs inside the shopping domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from shopping.domain import shopping
from shopping.utils.logging import add_context, clear_context

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV selects the config overlay in shopping/domain.toml.
shopping.init()

_DOMAIN_PREFIXES = ("/baskets", "/products", "/discounts")

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Shopping Basket API",
    description="Baskets, catalogue pricing, discount codes and shipping",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the shopping domain context for basket, product and discount routes."""
    if request.url.path.startswith(_DOMAIN_PREFIXES):
        add_context(method=request.method, path=request.url.path)
        try:
            with shopping.domain_context():
                response = await call_next(request)
        finally:
            clear_context()
        return response
    # Health check, docs, etc.
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from shopping.api import basket_router, discount_router, product_router  # noqa: E402

app.include_router(basket_router)
app.include_router(product_router)
app.include_router(discount_router)


# ---------------------------------------------------------------------------
# Demo data
# ---------------------------------------------------------------------------
if os.environ.get("SEED_CATALOGUE", "").lower() in ("1", "true", "yes"):
    from shopping.utils.seed import seed_catalogue

    with shopping.domain_context():
        seed_catalogue()


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": shopping.name})
