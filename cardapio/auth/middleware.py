"""Bearer token authentication and tenant scoping dependencies."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from cardapio.auth.guard import authorize
from cardapio.auth.tokens import TenantContext, resolve_token
from cardapio.database import get_db
from cardapio.errors import InvalidTokenError
from cardapio.schemas.common import PathId
from cardapio.storage.scoped import ScopedQueryExecutor

BEARER = HTTPBearer(auto_error=False)


async def get_tenant_context(
    credentials: HTTPAuthorizationCredentials | None = Depends(BEARER),
) -> TenantContext:
    """Resolve the Authorization: Bearer header into a TenantContext."""
    if credentials is None or not credentials.credentials:
        raise InvalidTokenError("Missing or invalid Authorization header")
    return resolve_token(credentials.credentials.strip())


async def require_tenant_scope(
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    tenant_id: PathId,
) -> TenantContext:
    """Refuse the request unless the token's tenant is the one named in the path."""
    authorize(context, tenant_id)
    return context


TenantScopeDep = Annotated[TenantContext, Depends(require_tenant_scope)]


async def get_scoped_executor(
    context: TenantScopeDep,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ScopedQueryExecutor:
    """Executor bound to the authenticated tenant's namespace."""
    return ScopedQueryExecutor(db, context.namespace)


# Type alias for dependency injection
ScopedDep = Annotated[ScopedQueryExecutor, Depends(get_scoped_executor)]
