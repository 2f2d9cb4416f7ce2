"""Database connection and session management."""

from collections.abc import AsyncGenerator
from urllib.parse import parse_qs, urlencode, urlparse, urlunparse

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from cardapio.config import settings

# Placeholder schema name for per-tenant tables; replaced at execution time
# through schema_translate_map (see cardapio.storage.scoped).
TENANT_SCHEMA = "tenant"


def get_engine_url_and_connect_args(url: str) -> tuple[str, dict]:
    """Strip sslmode from URL (asyncpg doesn't accept it) and pass it via connect_args."""
    connect_args = {}
    if "sslmode=" in url:
        parsed = urlparse(url)
        query = parse_qs(parsed.query)
        sslmode = query.pop("sslmode", ["prefer"])[0]
        url = urlunparse(parsed._replace(query=urlencode(query, doseq=True)))
        if sslmode in ("require", "verify-ca", "verify-full"):
            connect_args["ssl"] = sslmode
    return url, connect_args


_db_url, _connect_args = get_engine_url_and_connect_args(settings.database_url)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for the global (public schema) registry."""

    pass


tenant_metadata = MetaData(schema=TENANT_SCHEMA)

engine = create_async_engine(
    _db_url,
    echo=settings.log_level == "DEBUG",
    connect_args=_connect_args,
    pool_pre_ping=True,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for database sessions."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


def get_engine() -> AsyncEngine:
    """Dependency for operations that manage their own transaction (provisioning)."""
    return engine
