"""
Promotions and their product links within one tenant namespace.

Field-level shape comes from the pydantic schemas; agreement between the
promotion type and its value fields, and the rules for linking products,
come from cardapio.engine.promotions.
"""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import delete, insert, select, update

from cardapio.engine.promotions import (
    changes_link_price_rule,
    check_link_consistency,
    check_links_match_type,
    check_promotion_consistency,
    merge_promotion_fields,
    needs_consistency_check,
)
from cardapio.errors import ConflictError, NotFoundError
from cardapio.models import produtos, promocao_produtos, promocoes
from cardapio.schemas.common import parse_model, provided_changes
from cardapio.schemas.menu import PromotionCreate, PromotionProductLinkCreate, PromotionUpdate
from cardapio.storage.scoped import ScopedQueryExecutor

logger = logging.getLogger(__name__)


async def _find_promotion(executor: ScopedQueryExecutor, promotion_id: int) -> dict | None:
    return await executor.fetch_one(select(promocoes).where(promocoes.c.id == promotion_id))


async def create_promotion(
    executor: ScopedQueryExecutor,
    data: PromotionCreate | Mapping[str, Any],
) -> dict:
    promotion = parse_model(PromotionCreate, data)
    fields = promotion.model_dump()
    check_promotion_consistency(fields)
    row = await executor.fetch_one(insert(promocoes).values(**fields).returning(promocoes))
    logger.info(
        "Promotion %s (%s) created in %s", row["id"], row["tipo_promocao"], executor.namespace
    )
    return row


async def list_promotions(executor: ScopedQueryExecutor) -> list[dict]:
    return await executor.fetch_all(
        select(promocoes).order_by(promocoes.c.data_inicio.desc(), promocoes.c.nome_promocao)
    )


async def list_promotion_products(executor: ScopedQueryExecutor, promotion_id: int) -> list[dict]:
    """Links of one promotion, each with the linked product's name and regular price."""
    return await executor.fetch_all(
        select(
            promocao_produtos,
            produtos.c.nome.label("nome_produto"),
            produtos.c.preco.label("preco_produto"),
        )
        .join(produtos, promocao_produtos.c.produto_id == produtos.c.id)
        .where(promocao_produtos.c.promocao_id == promotion_id)
        .order_by(produtos.c.nome)
    )


async def get_promotion(executor: ScopedQueryExecutor, promotion_id: int) -> dict:
    """The promotion with its linked products under `produtos`."""
    row = await _find_promotion(executor, promotion_id)
    if row is None:
        raise NotFoundError(f"Promotion {promotion_id} not found")
    row["produtos"] = await list_promotion_products(executor, promotion_id)
    return row


async def update_promotion(
    executor: ScopedQueryExecutor,
    promotion_id: int,
    data: PromotionUpdate | Mapping[str, Any],
) -> dict:
    """
    Apply a partial update.

    When the update touches the type or a value field, the stored row is
    merged with the incoming fields and the result must still be consistent.
    A type change into or out of PRECO_FIXO_PRODUTO is refused while existing
    links disagree with the new type about the per-product price.
    """
    changes = provided_changes(parse_model(PromotionUpdate, data))

    if needs_consistency_check(changes):
        stored = await _find_promotion(executor, promotion_id)
        if stored is None:
            raise NotFoundError(f"Promotion {promotion_id} not found")
        check_promotion_consistency(merge_promotion_fields(stored, changes))
        new_type = changes.get("tipo_promocao", stored.get("tipo_promocao"))
        if changes_link_price_rule(stored.get("tipo_promocao"), new_type):
            links = await executor.fetch_all(
                select(
                    promocao_produtos.c.produto_id,
                    promocao_produtos.c.preco_promocional_produto_individual,
                ).where(promocao_produtos.c.promocao_id == promotion_id)
            )
            check_links_match_type(new_type, links)

    row = await executor.fetch_one(
        update(promocoes).where(promocoes.c.id == promotion_id).values(**changes).returning(promocoes)
    )
    if row is None:
        raise NotFoundError(f"Promotion {promotion_id} not found")
    return row


async def delete_promotion(executor: ScopedQueryExecutor, promotion_id: int) -> None:
    """Delete a promotion; its product links go with it."""
    row = await executor.fetch_one(
        delete(promocoes).where(promocoes.c.id == promotion_id).returning(promocoes.c.id)
    )
    if row is None:
        raise NotFoundError(f"Promotion {promotion_id} not found")
    logger.info("Promotion %s deleted from %s", promotion_id, executor.namespace)


async def link_product(
    executor: ScopedQueryExecutor,
    promotion_id: int,
    data: PromotionProductLinkCreate | Mapping[str, Any],
) -> dict:
    """Attach a product to a promotion."""
    link = parse_model(PromotionProductLinkCreate, data)

    promotion = await _find_promotion(executor, promotion_id)
    product = await executor.fetch_one(
        select(produtos.c.id).where(produtos.c.id == link.produto_id)
    )
    existing = None
    if promotion is not None and product is not None:
        existing = await executor.fetch_one(
            select(promocao_produtos.c.id).where(
                promocao_produtos.c.promocao_id == promotion_id,
                promocao_produtos.c.produto_id == link.produto_id,
            )
        )

    check_link_consistency(
        promotion,
        promotion_id,
        product_exists=product is not None,
        product_id=link.produto_id,
        override_price=link.preco_promocional_produto_individual,
        already_linked=existing is not None,
    )

    try:
        row = await executor.fetch_one(
            insert(promocao_produtos)
            .values(promocao_id=promotion_id, **link.model_dump())
            .returning(promocao_produtos)
        )
    except ConflictError as exc:
        raise ConflictError(
            f"Product {link.produto_id} is already linked to promotion {promotion_id}"
        ) from exc
    logger.info(
        "Product %s linked to promotion %s in %s", link.produto_id, promotion_id, executor.namespace
    )
    return row


async def unlink_product(
    executor: ScopedQueryExecutor,
    promotion_id: int,
    product_id: int,
) -> None:
    row = await executor.fetch_one(
        delete(promocao_produtos)
        .where(
            promocao_produtos.c.promocao_id == promotion_id,
            promocao_produtos.c.produto_id == product_id,
        )
        .returning(promocao_produtos.c.id)
    )
    if row is None:
        raise NotFoundError(
            f"Product {product_id} is not linked to promotion {promotion_id}"
        )
    logger.info(
        "Product %s unlinked from promotion %s in %s", product_id, promotion_id, executor.namespace
    )
