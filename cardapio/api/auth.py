"""Login endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cardapio.database import get_db
from cardapio.schemas.tenant import LoginRequest
from cardapio.services.tenants import authenticate_tenant

router = APIRouter()


@router.post("/auth/login")
async def login(body: LoginRequest, db: Annotated[AsyncSession, Depends(get_db)]):
    """Exchange the responsible party's email and password for a bearer token."""
    return await authenticate_tenant(db, body)
