"""
Tenant provisioning: registry row plus private namespace, in one transaction.

Either the restaurantes row and every namespace object exist afterwards, or
none of them do. Concurrent registrations with the same slug, email or
namespace race on the unique constraints (and on CREATE SCHEMA); the loser
rolls back and is reported as a conflict.
"""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import insert
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncEngine
from starlette.concurrency import run_in_threadpool

from cardapio.auth.passwords import hash_password
from cardapio.errors import (
    DUPLICATE_SCHEMA,
    DUPLICATE_TABLE,
    UNIQUE_VIOLATION,
    ConflictError,
    ProvisioningError,
    sqlstate_of,
)
from cardapio.models import Tenant
from cardapio.schemas.common import parse_model
from cardapio.schemas.tenant import TenantRegistration
from cardapio.tenancy.ddl import render_namespace_ddl
from cardapio.tenancy.identifiers import validate_identifier

logger = logging.getLogger(__name__)

_CONFLICT_CODES = (UNIQUE_VIOLATION, DUPLICATE_SCHEMA, DUPLICATE_TABLE)


async def provision_tenant(
    engine: AsyncEngine,
    registration: TenantRegistration | Mapping[str, Any],
) -> dict:
    """
    Register a restaurant and create its namespace.

    `registration` is a TenantRegistration or a raw mapping to validate.
    Returns the public fields of the new tenant row.
    """
    data = parse_model(TenantRegistration, registration)
    namespace = validate_identifier(data.nome_schema_db, "nome_schema_db")
    statements = render_namespace_ddl(namespace)

    row = data.model_dump(exclude={"senha_responsavel"})
    row["hash_senha_responsavel"] = await run_in_threadpool(hash_password, data.senha_responsavel)
    public_columns = [Tenant.__table__.c[name] for name in Tenant.PUBLIC_FIELDS]

    try:
        async with engine.begin() as conn:
            result = await conn.execute(
                insert(Tenant.__table__).values(**row).returning(*public_columns)
            )
            tenant = dict(result.mappings().one())
            for statement in statements:
                await conn.exec_driver_sql(statement)
    except DBAPIError as exc:
        code = sqlstate_of(exc)
        if code in _CONFLICT_CODES:
            logger.info(
                "Provisioning conflict for slug=%s namespace=%s (sqlstate=%s)",
                data.identificador_url,
                namespace,
                code,
            )
            raise ConflictError(
                "A restaurant with this URL identifier, email or schema name already exists"
            ) from exc
        logger.exception("Provisioning failed for namespace %s (sqlstate=%s)", namespace, code)
        raise ProvisioningError("Failed to provision the restaurant, please try again") from exc

    logger.info("Provisioned tenant id=%s namespace=%s", tenant["id"], namespace)
    return tenant

