"""Menu products of one tenant namespace."""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import delete, insert, select, update

from cardapio.errors import ForeignKeyConstraintError, ForeignKeyViolationError, NotFoundError
from cardapio.models import categorias, produtos
from cardapio.schemas.common import parse_model, provided_changes
from cardapio.schemas.menu import ProductCreate, ProductUpdate
from cardapio.storage.scoped import ScopedQueryExecutor

logger = logging.getLogger(__name__)


def _with_category_name():
    return select(produtos, categorias.c.nome.label("nome_categoria")).outerjoin(
        categorias, produtos.c.categoria_id == categorias.c.id
    )


async def _ensure_category(executor: ScopedQueryExecutor, category_id: int) -> None:
    # The foreign key still decides if the category vanishes before the write lands
    row = await executor.fetch_one(select(categorias.c.id).where(categorias.c.id == category_id))
    if row is None:
        raise ForeignKeyConstraintError(f"Category {category_id} does not exist in this menu")


async def create_product(
    executor: ScopedQueryExecutor,
    data: ProductCreate | Mapping[str, Any],
) -> dict:
    product = parse_model(ProductCreate, data)
    await _ensure_category(executor, product.categoria_id)
    row = await executor.fetch_one(
        insert(produtos).values(**product.model_dump()).returning(produtos)
    )
    logger.info("Product %s created in %s", row["id"], executor.namespace)
    return row


async def list_products(executor: ScopedQueryExecutor) -> list[dict]:
    """All products with their category name, in menu order."""
    return await executor.fetch_all(
        _with_category_name().order_by(
            categorias.c.ordem_exibicao, produtos.c.ordem_exibicao, produtos.c.nome
        )
    )


async def get_product(executor: ScopedQueryExecutor, product_id: int) -> dict:
    row = await executor.fetch_one(_with_category_name().where(produtos.c.id == product_id))
    if row is None:
        raise NotFoundError(f"Product {product_id} not found")
    return row


async def update_product(
    executor: ScopedQueryExecutor,
    product_id: int,
    data: ProductUpdate | Mapping[str, Any],
) -> dict:
    changes = provided_changes(parse_model(ProductUpdate, data))
    if changes.get("categoria_id") is not None:
        await _ensure_category(executor, changes["categoria_id"])
    row = await executor.fetch_one(
        update(produtos).where(produtos.c.id == product_id).values(**changes).returning(produtos)
    )
    if row is None:
        raise NotFoundError(f"Product {product_id} not found")
    return row


async def delete_product(executor: ScopedQueryExecutor, product_id: int) -> None:
    """Delete a product. Refused while it is linked to any promotion."""
    try:
        row = await executor.fetch_one(
            delete(produtos).where(produtos.c.id == product_id).returning(produtos.c.id)
        )
    except ForeignKeyViolationError as exc:
        raise ForeignKeyViolationError(
            f"Product {product_id} cannot be deleted while it is part of a promotion"
        ) from exc
    if row is None:
        raise NotFoundError(f"Product {product_id} not found")
    logger.info("Product %s deleted from %s", product_id, executor.namespace)
