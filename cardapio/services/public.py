"""Public, unauthenticated menu of a restaurant addressed by its URL slug."""

from datetime import datetime
from zoneinfo import ZoneInfo

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cardapio.config import settings
from cardapio.errors import NotFoundError
from cardapio.models import Tenant, categorias, produtos
from cardapio.schemas.tenant import WEEKDAYS
from cardapio.storage.repositories import get_active_tenant_by_slug
from cardapio.storage.scoped import ScopedQueryExecutor

OPEN_TEXT = "Aberto agora"
CLOSED_TEXT = "Fechado agora"
UNKNOWN_HOURS_TEXT = "Horário não informado"

RESTAURANT_FIELDS = (
    "id",
    "nome_fantasia",
    "path_logo",
    "endereco_completo",
    "cor_primaria_hex",
    "cor_secundaria_hex",
    "horario_abertura",
    "horario_fechamento",
    "dias_funcionamento",
)


def opening_status(tenant: Tenant, now: datetime) -> dict:
    """
    Whether the restaurant is open at `now` (already in the restaurant's timezone).

    Opening hours are "HH:MM" strings, so they compare lexically. A closing
    time earlier than the opening time means the range crosses midnight;
    the weekday of `now` decides in both cases.
    """
    opens, closes, days = tenant.horario_abertura, tenant.horario_fechamento, tenant.dias_funcionamento
    if not opens or not closes or not days:
        return {"aberto": False, "texto": UNKNOWN_HOURS_TEXT}

    # isoweekday: Monday=1 .. Sunday=7; WEEKDAYS starts on Sunday
    weekday = WEEKDAYS[now.isoweekday() % 7]
    if not days.get(weekday):
        return {"aberto": False, "texto": CLOSED_TEXT}

    current = now.strftime("%H:%M")
    if opens < closes:
        is_open = opens <= current < closes
    else:
        is_open = current >= opens or current < closes
    return {"aberto": is_open, "texto": OPEN_TEXT if is_open else CLOSED_TEXT}


async def get_public_menu(db: AsyncSession, slug: str, now: datetime | None = None) -> dict:
    """Active categories with their active products, plus the restaurant's public profile."""
    tenant = await get_active_tenant_by_slug(db, slug)
    if tenant is None:
        raise NotFoundError(f"Restaurant '{slug}' not found")

    executor = ScopedQueryExecutor.from_storage(db, tenant.nome_schema_db)
    categories = await executor.fetch_all(
        select(categorias.c.id, categorias.c.nome, categorias.c.descricao)
        .where(categorias.c.ativo.is_(True))
        .order_by(categorias.c.ordem_exibicao, categorias.c.id)
    )
    products = await executor.fetch_all(
        select(
            produtos.c.id,
            produtos.c.nome,
            produtos.c.descricao,
            produtos.c.preco,
            produtos.c.url_foto,
            produtos.c.categoria_id,
        )
        .where(produtos.c.ativo.is_(True))
        .order_by(produtos.c.ordem_exibicao, produtos.c.id)
    )

    by_category: dict[int, list[dict]] = {}
    for product in products:
        by_category.setdefault(product["categoria_id"], []).append(product)
    menu = [{**category, "produtos": by_category.get(category["id"], [])} for category in categories]

    if now is None:
        now = datetime.now(ZoneInfo(settings.timezone))
    restaurant = {field: getattr(tenant, field) for field in RESTAURANT_FIELDS}
    restaurant["status_abertura"] = opening_status(tenant, now)
    return {"restaurante": restaurant, "menu": menu}
