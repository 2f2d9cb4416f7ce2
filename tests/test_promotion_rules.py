"""Tests for promotion type/value consistency and link rules."""

from decimal import Decimal

import pytest

from cardapio.engine.promotions import (
    PromotionType,
    changes_link_price_rule,
    check_link_consistency,
    check_links_match_type,
    check_promotion_consistency,
    merge_promotion_fields,
    needs_consistency_check,
)
from cardapio.errors import (
    BusinessLogicError,
    ConflictError,
    NotFoundError,
    ReferencedResourceNotFoundError,
    ValidationError,
)

PERCENT = PromotionType.PERCENTAGE_DISCOUNT.value
FIXED_PRODUCT = PromotionType.FIXED_PRICE_PRODUCT.value
COMBO = PromotionType.FIXED_PRICE_COMBO.value
BUY_X = PromotionType.BUY_X_PAY_Y.value


def test_percentage_requires_value():
    """Missing percentage is a business logic error naming the field."""
    with pytest.raises(BusinessLogicError) as info:
        check_promotion_consistency({"tipo_promocao": PERCENT})
    assert info.value.details[0][0] == "valor_desconto_percentual"
    assert isinstance(info.value, ValidationError)


@pytest.mark.parametrize("value", [0, -5, Decimal("150"), "100.01"])
def test_percentage_out_of_range(value):
    with pytest.raises(ValidationError):
        check_promotion_consistency({"tipo_promocao": PERCENT, "valor_desconto_percentual": value})


@pytest.mark.parametrize("value", [Decimal("0.01"), Decimal("15"), 100])
def test_percentage_in_range(value):
    check_promotion_consistency({"tipo_promocao": PERCENT, "valor_desconto_percentual": value})


def test_combo_requires_positive_price():
    with pytest.raises(BusinessLogicError):
        check_promotion_consistency({"tipo_promocao": COMBO})
    with pytest.raises(ValidationError):
        check_promotion_consistency({"tipo_promocao": COMBO, "preco_promocional_combo": 0})
    check_promotion_consistency({"tipo_promocao": COMBO, "preco_promocional_combo": Decimal("15.00")})


@pytest.mark.parametrize("promotion_type", [FIXED_PRODUCT, BUY_X])
def test_other_types_unconstrained(promotion_type):
    check_promotion_consistency({"tipo_promocao": promotion_type})


def test_unknown_type_rejected():
    with pytest.raises(ValidationError):
        check_promotion_consistency({"tipo_promocao": "BOGO"})


def test_merge_overlays_only_provided_fields():
    """Absent keys keep stored values; explicit None clears them."""
    stored = {"tipo_promocao": PERCENT, "valor_desconto_percentual": Decimal("10"), "nome_promocao": "Happy"}
    merged = merge_promotion_fields(stored, {"valor_desconto_percentual": None})
    assert merged["tipo_promocao"] == PERCENT
    assert merged["valor_desconto_percentual"] is None
    assert merged["nome_promocao"] == "Happy"
    assert stored["valor_desconto_percentual"] == Decimal("10")


def test_update_switching_type_is_checked_against_stored_values():
    """Switching a percentage promotion to combo without a combo price fails."""
    stored = {"tipo_promocao": PERCENT, "valor_desconto_percentual": Decimal("10")}
    with pytest.raises(BusinessLogicError):
        check_promotion_consistency(merge_promotion_fields(stored, {"tipo_promocao": COMBO}))


def test_needs_consistency_check():
    assert needs_consistency_check({"tipo_promocao": COMBO})
    assert needs_consistency_check({"preco_promocional_combo": None})
    assert not needs_consistency_check({"nome_promocao": "Happy hour", "ativo": False})


def _link(promotion, product_exists=True, override=None, already_linked=False):
    check_link_consistency(
        promotion,
        5,
        product_exists=product_exists,
        product_id=9,
        override_price=override,
        already_linked=already_linked,
    )


def test_link_missing_promotion_checked_first():
    with pytest.raises(NotFoundError):
        _link(None, product_exists=False, already_linked=True)


def test_link_missing_product():
    with pytest.raises(ReferencedResourceNotFoundError):
        _link({"tipo_promocao": COMBO}, product_exists=False)


def test_link_fixed_price_requires_override():
    with pytest.raises(BusinessLogicError):
        _link({"tipo_promocao": FIXED_PRODUCT})
    _link({"tipo_promocao": FIXED_PRODUCT}, override=Decimal("9.90"))


def test_link_override_forbidden_for_other_types():
    with pytest.raises(BusinessLogicError):
        _link({"tipo_promocao": COMBO}, override=Decimal("9.90"))


def test_link_duplicate_is_conflict():
    with pytest.raises(ConflictError):
        _link({"tipo_promocao": COMBO}, already_linked=True)


def test_leaving_fixed_price_with_override_links_refused():
    links = [{"produto_id": 10, "preco_promocional_produto_individual": Decimal("9.90")}]
    with pytest.raises(BusinessLogicError) as info:
        check_links_match_type(COMBO, links)
    assert info.value.details[0][0] == "tipo_promocao"


def test_entering_fixed_price_with_plain_links_refused():
    links = [{"produto_id": 10, "preco_promocional_produto_individual": None}]
    with pytest.raises(BusinessLogicError):
        check_links_match_type(FIXED_PRODUCT, links)


def test_links_agreeing_with_new_type_accepted():
    check_links_match_type(FIXED_PRODUCT, [{"produto_id": 10, "preco_promocional_produto_individual": Decimal("9.90")}])
    check_links_match_type(COMBO, [{"produto_id": 10, "preco_promocional_produto_individual": None}])
    check_links_match_type(PERCENT, [])


def test_changes_link_price_rule():
    assert changes_link_price_rule(FIXED_PRODUCT, COMBO)
    assert changes_link_price_rule(BUY_X, FIXED_PRODUCT)
    assert not changes_link_price_rule(COMBO, PERCENT)
    assert not changes_link_price_rule(FIXED_PRODUCT, FIXED_PRODUCT)
