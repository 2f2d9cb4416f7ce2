"""Tenant registration and profile endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from cardapio.auth.middleware import TenantScopeDep
from cardapio.database import get_db, get_engine
from cardapio.schemas.common import PathId
from cardapio.schemas.tenant import TenantRegistration, TenantUpdate
from cardapio.services.tenants import get_tenant, update_tenant
from cardapio.tenancy.provisioner import provision_tenant

router = APIRouter()


@router.post("/tenants", status_code=status.HTTP_201_CREATED)
async def register_tenant(
    body: TenantRegistration,
    engine: Annotated[AsyncEngine, Depends(get_engine)],
):
    """Register a restaurant and create its private menu schema."""
    tenant = await provision_tenant(engine, body)
    return {"message": "Restaurant registered", "restaurante": tenant}


@router.get("/tenants/{tenant_id}")
async def read_tenant(
    tenant_id: PathId,
    context: TenantScopeDep,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await get_tenant(db, context.tenant_id)


@router.put("/tenants/{tenant_id}")
async def edit_tenant(
    tenant_id: PathId,
    body: TenantUpdate,
    context: TenantScopeDep,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Edit the restaurant profile and opening hours."""
    return await update_tenant(db, context.tenant_id, body)
