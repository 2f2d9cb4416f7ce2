"""Statement execution bound to one tenant namespace."""

import logging
from typing import Any

from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Delete, Executable

from cardapio.database import TENANT_SCHEMA
from cardapio.errors import classify_db_error
from cardapio.tenancy.identifiers import ValidIdentifier, validate_identifier

logger = logging.getLogger(__name__)


class ScopedQueryExecutor:
    """
    Runs statements against the tables of cardapio.models.menu inside one
    tenant's schema.

    The namespace must be a ValidIdentifier: either fresh from the identifier
    validator or read back from the tenant registry (`from_storage`). Request
    path or body values are never accepted here.
    """

    def __init__(self, session: AsyncSession, namespace: ValidIdentifier):
        if not isinstance(namespace, ValidIdentifier):
            raise TypeError("ScopedQueryExecutor requires a validated namespace")
        self.session = session
        self.namespace = namespace

    @classmethod
    def from_storage(cls, session: AsyncSession, stored_namespace: str) -> "ScopedQueryExecutor":
        """Build from a tenant row's nome_schema_db, re-checking it on the way in."""
        return cls(session, validate_identifier(stored_namespace, "nome_schema_db"))

    @property
    def execution_options(self) -> dict:
        return {"schema_translate_map": {TENANT_SCHEMA: str(self.namespace)}}

    async def run(self, statement: Executable, params: dict[str, Any] | None = None):
        """Execute `statement` in this namespace; database errors come back as AppError."""
        try:
            return await self.session.execute(
                statement, params, execution_options=self.execution_options
            )
        except DBAPIError as exc:
            error = classify_db_error(exc, deleting=isinstance(statement, Delete))
            logger.info(
                "Statement failed in namespace %s: %s (%s)",
                self.namespace,
                error.kind.value,
                exc.__class__.__name__,
            )
            raise error from exc

    async def fetch_one(self, statement: Executable, params: dict[str, Any] | None = None) -> dict | None:
        result = await self.run(statement, params)
        row = result.mappings().first()
        return dict(row) if row is not None else None

    async def fetch_all(self, statement: Executable, params: dict[str, Any] | None = None) -> list[dict]:
        result = await self.run(statement, params)
        return [dict(row) for row in result.mappings().all()]
