"""Initial schema - restaurant registry.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "restaurantes",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("identificador_url", sa.Text(), nullable=False, unique=True),
        sa.Column("nome_fantasia", sa.Text(), nullable=False),
        sa.Column("razao_social", sa.Text(), nullable=True),
        sa.Column("cnpj", sa.Text(), nullable=True),
        sa.Column("endereco_completo", sa.Text(), nullable=True),
        sa.Column("telefone_contato", sa.Text(), nullable=True),
        sa.Column("path_logo", sa.Text(), nullable=True),
        sa.Column("cor_primaria_hex", sa.Text(), nullable=True),
        sa.Column("cor_secundaria_hex", sa.Text(), nullable=True),
        sa.Column("horario_abertura", sa.Text(), nullable=True),
        sa.Column("horario_fechamento", sa.Text(), nullable=True),
        sa.Column("dias_funcionamento", postgresql.JSONB(), nullable=True),
        sa.Column("email_responsavel", sa.Text(), nullable=False, unique=True),
        sa.Column("hash_senha_responsavel", sa.Text(), nullable=False),
        sa.Column("nome_schema_db", sa.Text(), nullable=False, unique=True),
        sa.Column("ativo", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column(
            "data_criacao",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "data_atualizacao",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    )


def downgrade() -> None:
    op.drop_table("restaurantes")
