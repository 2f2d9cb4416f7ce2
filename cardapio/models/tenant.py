"""Tenant registry model (one row per restaurant, public schema)."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, Text, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from cardapio.database import Base


class Tenant(Base):
    """Restaurant registry. `nome_schema_db` addresses the tenant's private schema."""

    __tablename__ = "restaurantes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    identificador_url: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    nome_fantasia: Mapped[str] = mapped_column(Text, nullable=False)
    razao_social: Mapped[str | None] = mapped_column(Text, nullable=True)
    cnpj: Mapped[str | None] = mapped_column(Text, nullable=True)
    endereco_completo: Mapped[str | None] = mapped_column(Text, nullable=True)
    telefone_contato: Mapped[str | None] = mapped_column(Text, nullable=True)
    path_logo: Mapped[str | None] = mapped_column(Text, nullable=True)
    cor_primaria_hex: Mapped[str | None] = mapped_column(Text, nullable=True)
    cor_secundaria_hex: Mapped[str | None] = mapped_column(Text, nullable=True)
    horario_abertura: Mapped[str | None] = mapped_column(Text, nullable=True)  # HH:MM
    horario_fechamento: Mapped[str | None] = mapped_column(Text, nullable=True)  # HH:MM
    dias_funcionamento: Mapped[dict | None] = mapped_column(JSONB, nullable=True)
    email_responsavel: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    hash_senha_responsavel: Mapped[str] = mapped_column(Text, nullable=False)
    nome_schema_db: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    ativo: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="true")
    data_criacao: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    data_atualizacao: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    # Columns safe to return to callers (everything but the password hash)
    PUBLIC_FIELDS = (
        "id",
        "identificador_url",
        "nome_fantasia",
        "razao_social",
        "cnpj",
        "endereco_completo",
        "telefone_contato",
        "path_logo",
        "cor_primaria_hex",
        "cor_secundaria_hex",
        "horario_abertura",
        "horario_fechamento",
        "dias_funcionamento",
        "email_responsavel",
        "nome_schema_db",
        "ativo",
        "data_criacao",
        "data_atualizacao",
    )

    def to_public_dict(self) -> dict:
        return {field: getattr(self, field) for field in self.PUBLIC_FIELDS}
