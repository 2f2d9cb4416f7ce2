"""Public menu endpoint (no authentication)."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cardapio.database import get_db
from cardapio.services.public import get_public_menu

router = APIRouter()


@router.get("/public/cardapio/{slug}")
async def public_menu(slug: str, db: Annotated[AsyncSession, Depends(get_db)]):
    """Active categories and products of a restaurant, with its opening status."""
    return await get_public_menu(db, slug)
