"""Database models."""

from cardapio.models.tenant import Tenant
from cardapio.models.menu import categorias, produtos, promocoes, promocao_produtos

__all__ = ["Tenant", "categorias", "produtos", "promocoes", "promocao_produtos"]
