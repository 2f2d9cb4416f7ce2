"""Product endpoints, scoped to the authenticated tenant."""

from fastapi import APIRouter, status

from cardapio.auth.middleware import ScopedDep
from cardapio.schemas.common import PathId
from cardapio.schemas.menu import ProductCreate, ProductUpdate
from cardapio.services import products

router = APIRouter(prefix="/tenants/{tenant_id}/produtos")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(body: ProductCreate, executor: ScopedDep):
    return await products.create_product(executor, body)


@router.get("")
async def list_products(executor: ScopedDep):
    return await products.list_products(executor)


@router.get("/{product_id}")
async def get_product(product_id: PathId, executor: ScopedDep):
    return await products.get_product(executor, product_id)


@router.put("/{product_id}")
async def update_product(product_id: PathId, body: ProductUpdate, executor: ScopedDep):
    return await products.update_product(executor, product_id, body)


@router.delete("/{product_id}")
async def delete_product(product_id: PathId, executor: ScopedDep):
    await products.delete_product(executor, product_id)
    return {"message": f"Product {product_id} deleted"}
