"""Promotion consistency rules - type/value field agreement and product link checks."""

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from cardapio.errors import (
    BusinessLogicError,
    ConflictError,
    NotFoundError,
    ReferencedResourceNotFoundError,
    ValidationError,
)


class PromotionType(str, Enum):
    """Values accepted by the promocoes.tipo_promocao CHECK constraint."""

    PERCENTAGE_DISCOUNT = "DESCONTO_PERCENTUAL_PRODUTO"
    FIXED_PRICE_PRODUCT = "PRECO_FIXO_PRODUTO"
    FIXED_PRICE_COMBO = "COMBO_PRECO_FIXO"
    BUY_X_PAY_Y = "LEVE_X_PAGUE_Y_PRODUTO"


PERCENTAGE_FIELD = "valor_desconto_percentual"
COMBO_PRICE_FIELD = "preco_promocional_combo"
OVERRIDE_PRICE_FIELD = "preco_promocional_produto_individual"

# An update touching any of these re-runs the consistency check
CONSISTENCY_FIELDS = frozenset({"tipo_promocao", PERCENTAGE_FIELD, COMBO_PRICE_FIELD})


def _as_decimal(value: Any, field: str) -> Decimal:
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError.for_field(field, "must be a number")


def _promotion_type(value: Any) -> PromotionType:
    try:
        return PromotionType(value)
    except ValueError:
        allowed = ", ".join(t.value for t in PromotionType)
        raise ValidationError.for_field("tipo_promocao", f"must be one of: {allowed}")


def merge_promotion_fields(stored: Mapping[str, Any] | None, incoming: Mapping[str, Any]) -> dict:
    """
    Overlay the fields explicitly present in `incoming` on the stored row.

    `incoming` must hold only the fields the caller actually sent, so an
    explicit None clears a stored value while an absent key keeps it.
    """
    merged = dict(stored or {})
    merged.update(incoming)
    return merged


def needs_consistency_check(changes: Mapping[str, Any]) -> bool:
    return not CONSISTENCY_FIELDS.isdisjoint(changes)


def check_promotion_consistency(fields: Mapping[str, Any]) -> None:
    """
    Enforce that the value fields match the promotion type.

    DESCONTO_PERCENTUAL_PRODUTO requires valor_desconto_percentual in (0, 100];
    COMBO_PRECO_FIXO requires a positive preco_promocional_combo. The other
    types carry no value field requirement.
    """
    promotion_type = _promotion_type(fields.get("tipo_promocao"))

    if promotion_type is PromotionType.PERCENTAGE_DISCOUNT:
        value = fields.get(PERCENTAGE_FIELD)
        if value is None:
            raise BusinessLogicError.for_field(
                PERCENTAGE_FIELD, f"is required for promotions of type {promotion_type.value}"
            )
        percentage = _as_decimal(value, PERCENTAGE_FIELD)
        if not (0 < percentage <= 100):
            raise ValidationError.for_field(PERCENTAGE_FIELD, "must be greater than 0 and at most 100")

    elif promotion_type is PromotionType.FIXED_PRICE_COMBO:
        value = fields.get(COMBO_PRICE_FIELD)
        if value is None:
            raise BusinessLogicError.for_field(
                COMBO_PRICE_FIELD, f"is required for promotions of type {promotion_type.value}"
            )
        if _as_decimal(value, COMBO_PRICE_FIELD) <= 0:
            raise ValidationError.for_field(COMBO_PRICE_FIELD, "must be positive")


def check_link_consistency(
    promotion: Mapping[str, Any] | None,
    promotion_id: int,
    product_exists: bool,
    product_id: int,
    override_price: Any,
    already_linked: bool,
) -> None:
    """
    Validate a product-to-promotion link request, in this order: promotion
    exists, product exists, override price agrees with the promotion type,
    pair not yet linked.
    """
    if promotion is None:
        raise NotFoundError(f"Promotion {promotion_id} not found")
    if not product_exists:
        raise ReferencedResourceNotFoundError(f"Product {product_id} not found in this menu")

    promotion_type = _promotion_type(promotion.get("tipo_promocao"))
    if promotion_type is PromotionType.FIXED_PRICE_PRODUCT and override_price is None:
        raise BusinessLogicError.for_field(
            OVERRIDE_PRICE_FIELD,
            f"is required when linking to promotions of type {promotion_type.value}",
        )
    if promotion_type is not PromotionType.FIXED_PRICE_PRODUCT and override_price is not None:
        raise BusinessLogicError.for_field(
            OVERRIDE_PRICE_FIELD,
            f"is only allowed for promotions of type {PromotionType.FIXED_PRICE_PRODUCT.value}",
        )

    if already_linked:
        raise ConflictError(f"Product {product_id} is already linked to promotion {promotion_id}")


def check_links_match_type(promotion_type: Any, links: list[Mapping[str, Any]]) -> None:
    """
    Existing product links must still agree with the promotion type after a
    type change: every link carries an override price under
    PRECO_FIXO_PRODUTO and none does under any other type.
    """
    promotion_type = _promotion_type(promotion_type)
    fixed_price = promotion_type is PromotionType.FIXED_PRICE_PRODUCT
    for link in links:
        has_override = link.get(OVERRIDE_PRICE_FIELD) is not None
        if fixed_price and not has_override:
            raise BusinessLogicError.for_field(
                "tipo_promocao",
                f"cannot become {promotion_type.value} while product "
                f"{link.get('produto_id')} is linked without {OVERRIDE_PRICE_FIELD}",
            )
        if not fixed_price and has_override:
            raise BusinessLogicError.for_field(
                "tipo_promocao",
                f"cannot become {promotion_type.value} while product "
                f"{link.get('produto_id')} is linked with {OVERRIDE_PRICE_FIELD}",
            )


def changes_link_price_rule(stored_type: Any, new_type: Any) -> bool:
    """True when a type change moves into or out of PRECO_FIXO_PRODUTO."""
    fixed = PromotionType.FIXED_PRICE_PRODUCT.value
    return (stored_type == fixed) != (new_type == fixed)
