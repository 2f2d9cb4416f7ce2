"""Menu categories of one tenant namespace."""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import delete, insert, select, update

from cardapio.errors import ConflictError, ForeignKeyViolationError, NotFoundError
from cardapio.models import categorias
from cardapio.schemas.common import parse_model, provided_changes
from cardapio.schemas.menu import CategoryCreate, CategoryUpdate
from cardapio.storage.scoped import ScopedQueryExecutor

logger = logging.getLogger(__name__)


async def create_category(
    executor: ScopedQueryExecutor,
    data: CategoryCreate | Mapping[str, Any],
) -> dict:
    """Insert a category. Names are unique within the namespace."""
    category = parse_model(CategoryCreate, data)
    try:
        row = await executor.fetch_one(
            insert(categorias).values(**category.model_dump()).returning(categorias)
        )
    except ConflictError as exc:
        raise ConflictError(f"A category named '{category.nome}' already exists") from exc
    logger.info("Category %s created in %s", row["id"], executor.namespace)
    return row


async def list_categories(executor: ScopedQueryExecutor) -> list[dict]:
    return await executor.fetch_all(
        select(categorias).order_by(categorias.c.ordem_exibicao, categorias.c.nome)
    )


async def get_category(executor: ScopedQueryExecutor, category_id: int) -> dict:
    row = await executor.fetch_one(select(categorias).where(categorias.c.id == category_id))
    if row is None:
        raise NotFoundError(f"Category {category_id} not found")
    return row


async def update_category(
    executor: ScopedQueryExecutor,
    category_id: int,
    data: CategoryUpdate | Mapping[str, Any],
) -> dict:
    changes = provided_changes(parse_model(CategoryUpdate, data))
    try:
        row = await executor.fetch_one(
            update(categorias)
            .where(categorias.c.id == category_id)
            .values(**changes)
            .returning(categorias)
        )
    except ConflictError as exc:
        raise ConflictError(f"A category named '{changes.get('nome')}' already exists") from exc
    if row is None:
        raise NotFoundError(f"Category {category_id} not found")
    return row


async def delete_category(executor: ScopedQueryExecutor, category_id: int) -> None:
    """Delete a category. Refused while any product still belongs to it."""
    try:
        row = await executor.fetch_one(
            delete(categorias).where(categorias.c.id == category_id).returning(categorias.c.id)
        )
    except ForeignKeyViolationError as exc:
        raise ForeignKeyViolationError(
            f"Category {category_id} cannot be deleted while products belong to it"
        ) from exc
    if row is None:
        raise NotFoundError(f"Category {category_id} not found")
    logger.info("Category %s deleted from %s", category_id, executor.namespace)
