"""
Per-tenant menu tables.

Declared under the placeholder schema `tenant`; queries are bound to a real
namespace at execution time by the scoped executor. The tables mirror the
DDL in cardapio.tenancy.ddl, which is what actually creates them.
"""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    Table,
    Text,
    UniqueConstraint,
)

from cardapio.database import TENANT_SCHEMA, tenant_metadata

categorias = Table(
    "categorias",
    tenant_metadata,
    Column("id", Integer, primary_key=True),
    Column("nome", Text, nullable=False, unique=True),
    Column("descricao", Text),
    Column("ordem_exibicao", Integer, server_default="0"),
    Column("ativo", Boolean, server_default="true"),
    Column("data_criacao", DateTime(timezone=True)),
    Column("data_atualizacao", DateTime(timezone=True)),
)

produtos = Table(
    "produtos",
    tenant_metadata,
    Column("id", Integer, primary_key=True),
    Column(
        "categoria_id",
        Integer,
        ForeignKey(f"{TENANT_SCHEMA}.categorias.id", ondelete="RESTRICT"),
        nullable=False,
    ),
    Column("nome", Text, nullable=False),
    Column("descricao", Text),
    Column("preco", Numeric(10, 2), nullable=False),
    Column("url_foto", Text),
    Column("ativo", Boolean, server_default="true"),
    Column("ordem_exibicao", Integer, server_default="0"),
    Column("data_criacao", DateTime(timezone=True)),
    Column("data_atualizacao", DateTime(timezone=True)),
)

promocoes = Table(
    "promocoes",
    tenant_metadata,
    Column("id", Integer, primary_key=True),
    Column("nome_promocao", Text, nullable=False),
    Column("descricao_promocao", Text),
    Column("tipo_promocao", Text, nullable=False),
    Column("valor_desconto_percentual", Numeric(5, 2)),
    Column("preco_promocional_combo", Numeric(10, 2)),
    Column("data_inicio", DateTime(timezone=True), nullable=False),
    Column("data_fim", DateTime(timezone=True)),
    Column("ativo", Boolean, server_default="true"),
    Column("data_criacao", DateTime(timezone=True)),
    Column("data_atualizacao", DateTime(timezone=True)),
)

promocao_produtos = Table(
    "promocao_produtos",
    tenant_metadata,
    Column("id", Integer, primary_key=True),
    Column(
        "promocao_id",
        Integer,
        ForeignKey(f"{TENANT_SCHEMA}.promocoes.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "produto_id",
        Integer,
        ForeignKey(f"{TENANT_SCHEMA}.produtos.id", ondelete="RESTRICT"),
        nullable=False,
    ),
    Column("quantidade_no_combo", Integer, server_default="1"),
    Column("preco_promocional_produto_individual", Numeric(10, 2)),
    Column("data_criacao", DateTime(timezone=True)),
    UniqueConstraint("promocao_id", "produto_id"),
)
