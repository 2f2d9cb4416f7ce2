"""Repository functions for the tenant registry (public.restaurantes)."""

from sqlalchemy import func, select, update
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from cardapio.errors import classify_db_error
from cardapio.models import Tenant


async def get_tenant_by_id(db: AsyncSession, tenant_id: int) -> Tenant | None:
    result = await db.execute(select(Tenant).where(Tenant.id == tenant_id))
    return result.scalar_one_or_none()


async def get_tenant_by_email(db: AsyncSession, email: str) -> Tenant | None:
    """Find tenant by responsible party email (login)."""
    result = await db.execute(select(Tenant).where(Tenant.email_responsavel == email))
    return result.scalar_one_or_none()


async def get_active_tenant_by_slug(db: AsyncSession, slug: str) -> Tenant | None:
    """Find an active tenant by its public URL slug."""
    result = await db.execute(
        select(Tenant).where(
            Tenant.identificador_url == slug,
            Tenant.ativo.is_(True),
        )
    )
    return result.scalar_one_or_none()


async def update_tenant_fields(db: AsyncSession, tenant_id: int, changes: dict) -> Tenant | None:
    """
    Apply `changes` to the tenant row and return the refreshed row,
    or None when no tenant has that id.
    """
    try:
        result = await db.execute(
            update(Tenant)
            .where(Tenant.id == tenant_id)
            .values(**changes, data_atualizacao=func.now())
            .returning(Tenant)
            .execution_options(populate_existing=True)
        )
    except DBAPIError as exc:
        raise classify_db_error(exc) from exc
    return result.scalar_one_or_none()
