"""Cardapio FastAPI application."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cardapio.api.auth import router as auth_router
from cardapio.api.categories import router as categories_router
from cardapio.api.errors import register_error_handlers
from cardapio.api.health import router as health_router
from cardapio.api.products import router as products_router
from cardapio.api.promotions import router as promotions_router
from cardapio.api.public import router as public_router
from cardapio.api.tenants import router as tenants_router
from cardapio.config import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Cardapio - Multi-tenant Menu Service",
    description="Online menus for independent restaurants, one private schema per restaurant",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health_router, tags=["Health"])
app.include_router(tenants_router, prefix="/v1", tags=["Tenants"])
app.include_router(auth_router, prefix="/v1", tags=["Auth"])
app.include_router(categories_router, prefix="/v1", tags=["Categories"])
app.include_router(products_router, prefix="/v1", tags=["Products"])
app.include_router(promotions_router, prefix="/v1", tags=["Promotions"])
app.include_router(public_router, prefix="/v1", tags=["Public"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {"service": "Cardapio", "version": "0.1.0", "docs": "/docs"}
