"""Promotion and promotion-link endpoints, scoped to the authenticated tenant."""

from fastapi import APIRouter, status

from cardapio.auth.middleware import ScopedDep
from cardapio.schemas.common import PathId
from cardapio.schemas.menu import PromotionCreate, PromotionProductLinkCreate, PromotionUpdate
from cardapio.services import promotions

router = APIRouter(prefix="/tenants/{tenant_id}/promocoes")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_promotion(body: PromotionCreate, executor: ScopedDep):
    return await promotions.create_promotion(executor, body)


@router.get("")
async def list_promotions(executor: ScopedDep):
    return await promotions.list_promotions(executor)


@router.get("/{promotion_id}")
async def get_promotion(promotion_id: PathId, executor: ScopedDep):
    """Promotion with its linked products."""
    return await promotions.get_promotion(executor, promotion_id)


@router.put("/{promotion_id}")
async def update_promotion(promotion_id: PathId, body: PromotionUpdate, executor: ScopedDep):
    return await promotions.update_promotion(executor, promotion_id, body)


@router.delete("/{promotion_id}")
async def delete_promotion(promotion_id: PathId, executor: ScopedDep):
    await promotions.delete_promotion(executor, promotion_id)
    return {"message": f"Promotion {promotion_id} deleted"}


@router.post("/{promotion_id}/produtos", status_code=status.HTTP_201_CREATED)
async def link_product(promotion_id: PathId, body: PromotionProductLinkCreate, executor: ScopedDep):
    return await promotions.link_product(executor, promotion_id, body)


@router.delete("/{promotion_id}/produtos/{product_id}")
async def unlink_product(promotion_id: PathId, product_id: PathId, executor: ScopedDep):
    await promotions.unlink_product(executor, promotion_id, product_id)
    return {"message": f"Product {product_id} unlinked from promotion {promotion_id}"}
