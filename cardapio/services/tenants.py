"""Tenant login, profile read and administrative edit."""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from cardapio.auth.passwords import verify_password
from cardapio.auth.tokens import issue_token
from cardapio.errors import InvalidCredentialsError, NotFoundError
from cardapio.schemas.common import parse_model, provided_changes
from cardapio.schemas.tenant import LoginRequest, TenantUpdate
from cardapio.storage.repositories import get_tenant_by_email, get_tenant_by_id, update_tenant_fields

logger = logging.getLogger(__name__)

# Same answer for unknown email, inactive tenant and wrong password
_BAD_CREDENTIALS = "Invalid email or password"


async def authenticate_tenant(db: AsyncSession, data: LoginRequest | Mapping[str, Any]) -> dict:
    """
    Check the responsible party's credentials and issue a bearer token.

    Returns {"token": str, "restaurante": public tenant fields}.
    """
    login = parse_model(LoginRequest, data)
    tenant = await get_tenant_by_email(db, login.email_responsavel)
    if tenant is None or not tenant.ativo:
        logger.info("Login refused for %s: unknown or inactive tenant", login.email_responsavel)
        raise InvalidCredentialsError(_BAD_CREDENTIALS)
    if not await run_in_threadpool(
        verify_password, login.senha_responsavel, tenant.hash_senha_responsavel
    ):
        logger.info("Login refused for tenant %s: wrong password", tenant.id)
        raise InvalidCredentialsError(_BAD_CREDENTIALS)

    token = issue_token(tenant.id, tenant.email_responsavel, tenant.nome_schema_db)
    logger.info("Tenant %s logged in", tenant.id)
    return {"token": token, "restaurante": tenant.to_public_dict()}


async def get_tenant(db: AsyncSession, tenant_id: int) -> dict:
    tenant = await get_tenant_by_id(db, tenant_id)
    if tenant is None:
        raise NotFoundError(f"Restaurant {tenant_id} not found")
    return tenant.to_public_dict()


async def update_tenant(
    db: AsyncSession,
    tenant_id: int,
    data: TenantUpdate | Mapping[str, Any],
) -> dict:
    """Edit profile fields. Slug, namespace, email and password are not editable here."""
    changes = provided_changes(parse_model(TenantUpdate, data))
    tenant = await update_tenant_fields(db, tenant_id, changes)
    if tenant is None:
        raise NotFoundError(f"Restaurant {tenant_id} not found")
    logger.info("Tenant %s updated fields %s", tenant_id, sorted(changes))
    return tenant.to_public_dict()
