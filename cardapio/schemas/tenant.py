"""Tenant registration, administrative edit and login schemas."""

from typing import Annotated

from pydantic import BaseModel, EmailStr, Field, field_validator

from cardapio.errors import ValidationError as AppValidationError
from cardapio.schemas.common import UrlStr
from cardapio.tenancy.identifiers import validate_identifier

CNPJ_PATTERN = r"^\d{2}\.?\d{3}\.?\d{3}/?\d{4}-?\d{2}$"
HEX_COLOR_PATTERN = r"^#([0-9A-Fa-f]{3}){1,2}$"
TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"
WEEKDAYS = ("dom", "seg", "ter", "qua", "qui", "sex", "sab")

Cnpj = Annotated[str, Field(pattern=CNPJ_PATTERN)]
HexColor = Annotated[str, Field(pattern=HEX_COLOR_PATTERN)]
ClockTime = Annotated[str, Field(pattern=TIME_PATTERN)]


def _check_identifier(value: str, field: str) -> str:
    # Re-raised as ValueError so pydantic reports it alongside the other field errors
    try:
        return validate_identifier(value, field)
    except AppValidationError as exc:
        raise ValueError(exc.details[0][1]) from exc


class TenantRegistration(BaseModel):
    """POST /v1/tenants request."""

    identificador_url: str
    nome_fantasia: str = Field(min_length=2)
    email_responsavel: EmailStr
    senha_responsavel: str = Field(min_length=8)
    nome_schema_db: str
    razao_social: str | None = Field(default=None, min_length=2)
    cnpj: Cnpj | None = None
    endereco_completo: str | None = Field(default=None, min_length=5)
    telefone_contato: str | None = Field(default=None, min_length=8)
    path_logo: UrlStr | None = None
    cor_primaria_hex: HexColor | None = None
    cor_secundaria_hex: HexColor | None = None

    @field_validator("identificador_url")
    @classmethod
    def check_slug(cls, v: str) -> str:
        return _check_identifier(v, "identificador_url")

    @field_validator("nome_schema_db")
    @classmethod
    def check_namespace(cls, v: str) -> str:
        return _check_identifier(v, "nome_schema_db")


class TenantUpdate(BaseModel):
    """PUT /v1/tenants/{tenant_id} request. Identity fields are not editable."""

    model_config = {"extra": "forbid"}

    nome_fantasia: str | None = Field(default=None, min_length=2)
    razao_social: str | None = Field(default=None, min_length=2)
    cnpj: Cnpj | None = None
    endereco_completo: str | None = Field(default=None, min_length=5)
    telefone_contato: str | None = Field(default=None, min_length=8)
    path_logo: UrlStr | None = None
    cor_primaria_hex: HexColor | None = None
    cor_secundaria_hex: HexColor | None = None
    horario_abertura: ClockTime | None = None
    horario_fechamento: ClockTime | None = None
    dias_funcionamento: dict[str, bool] | None = None

    @field_validator("dias_funcionamento")
    @classmethod
    def check_weekdays(cls, v: dict[str, bool] | None) -> dict[str, bool] | None:
        if v is None:
            return v
        unknown = sorted(set(v) - set(WEEKDAYS))
        if unknown:
            raise ValueError(f"unknown weekday keys {unknown}; use {list(WEEKDAYS)}")
        return v


class LoginRequest(BaseModel):
    """POST /v1/auth/login request."""

    email_responsavel: EmailStr
    senha_responsavel: str = Field(min_length=1)

