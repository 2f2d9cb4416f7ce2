"""Category endpoints, scoped to the authenticated tenant."""

from fastapi import APIRouter, status

from cardapio.auth.middleware import ScopedDep
from cardapio.schemas.common import PathId
from cardapio.schemas.menu import CategoryCreate, CategoryUpdate
from cardapio.services import categories

router = APIRouter(prefix="/tenants/{tenant_id}/categorias")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_category(body: CategoryCreate, executor: ScopedDep):
    return await categories.create_category(executor, body)


@router.get("")
async def list_categories(executor: ScopedDep):
    return await categories.list_categories(executor)


@router.get("/{category_id}")
async def get_category(category_id: PathId, executor: ScopedDep):
    return await categories.get_category(executor, category_id)


@router.put("/{category_id}")
async def update_category(category_id: PathId, body: CategoryUpdate, executor: ScopedDep):
    return await categories.update_category(executor, category_id, body)


@router.delete("/{category_id}")
async def delete_category(category_id: PathId, executor: ScopedDep):
    await categories.delete_category(executor, category_id)
    return {"message": f"Category {category_id} deleted"}
