"""Category, product, promotion and promotion-link request schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, Field

from cardapio.engine.promotions import PromotionType
from cardapio.schemas.common import DisplayOrder, PositiveId, UrlStr

Price = Annotated[Decimal, Field(gt=0, max_digits=10, decimal_places=2)]
Percentage = Annotated[Decimal, Field(gt=0, le=100, decimal_places=2)]


class CategoryCreate(BaseModel):
    nome: str = Field(min_length=2)
    descricao: str | None = Field(default=None, min_length=3)
    ordem_exibicao: DisplayOrder = 0
    ativo: bool = True


class CategoryUpdate(BaseModel):
    nome: str | None = Field(default=None, min_length=2)
    descricao: str | None = Field(default=None, min_length=3)
    ordem_exibicao: DisplayOrder | None = None
    ativo: bool | None = None


class ProductCreate(BaseModel):
    nome: str = Field(min_length=2)
    descricao: str | None = Field(default=None, min_length=3)
    preco: Price
    categoria_id: PositiveId
    url_foto: UrlStr | None = None
    ordem_exibicao: DisplayOrder = 0
    ativo: bool = True


class ProductUpdate(BaseModel):
    nome: str | None = Field(default=None, min_length=2)
    descricao: str | None = Field(default=None, min_length=3)
    preco: Price | None = None
    categoria_id: PositiveId | None = None
    url_foto: UrlStr | None = None
    ordem_exibicao: DisplayOrder | None = None
    ativo: bool | None = None


class PromotionCreate(BaseModel):
    """
    Shape only. Whether the value fields match `tipo_promocao` is checked by
    cardapio.engine.promotions.check_promotion_consistency.
    """

    model_config = {"use_enum_values": True}

    nome_promocao: str = Field(min_length=3)
    descricao_promocao: str | None = Field(default=None, min_length=3)
    tipo_promocao: PromotionType
    valor_desconto_percentual: Percentage | None = None
    preco_promocional_combo: Price | None = None
    data_inicio: datetime
    data_fim: datetime | None = None
    ativo: bool = True


class PromotionUpdate(BaseModel):
    model_config = {"use_enum_values": True}

    nome_promocao: str | None = Field(default=None, min_length=3)
    descricao_promocao: str | None = Field(default=None, min_length=3)
    tipo_promocao: PromotionType | None = None
    valor_desconto_percentual: Percentage | None = None
    preco_promocional_combo: Price | None = None
    data_inicio: datetime | None = None
    data_fim: datetime | None = None
    ativo: bool | None = None


class PromotionProductLinkCreate(BaseModel):
    produto_id: PositiveId
    quantidade_no_combo: PositiveId = 1
    preco_promocional_produto_individual: Price | None = None
