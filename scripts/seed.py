#!/usr/bin/env python3
"""
Seed script: provisions the demo restaurant cantina_do_vale with a small menu.
Run after migrations: python scripts/seed.py
"""

import asyncio
import os
import sys
from datetime import datetime, timezone

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cardapio.database import async_session_maker, engine
from cardapio.errors import ConflictError
from cardapio.services import categories, products, promotions
from cardapio.services.tenants import authenticate_tenant, update_tenant
from cardapio.storage.scoped import ScopedQueryExecutor
from cardapio.tenancy.provisioner import provision_tenant

EMAIL = "contato@cantinadovale.com.br"
PASSWORD = "cantina123"  # Demo password - print this for user

REGISTRATION = {
    "identificador_url": "cantina_do_vale",
    "nome_fantasia": "Cantina do Vale",
    "email_responsavel": EMAIL,
    "senha_responsavel": PASSWORD,
    "nome_schema_db": "cantina_do_vale_schema",
    "endereco_completo": "Rua das Videiras, 120 - Bento Goncalves/RS",
    "telefone_contato": "54 3451-0000",
    "cor_primaria_hex": "#7B1E3A",
}


async def seed():
    try:
        tenant = await provision_tenant(engine, REGISTRATION)
        print(f"Restaurant provisioned with id {tenant['id']}.")
    except ConflictError:
        print("Restaurant already exists, skipping menu seed.")
        return

    async with async_session_maker() as session:
        await update_tenant(
            session,
            tenant["id"],
            {
                "horario_abertura": "11:00",
                "horario_fechamento": "23:00",
                "dias_funcionamento": {
                    "dom": True, "seg": False, "ter": True, "qua": True,
                    "qui": True, "sex": True, "sab": True,
                },
            },
        )
        executor = ScopedQueryExecutor.from_storage(session, tenant["nome_schema_db"])

        bebidas = await categories.create_category(executor, {"nome": "Bebidas", "ordem_exibicao": 1})
        massas = await categories.create_category(executor, {"nome": "Massas", "ordem_exibicao": 0})
        suco = await products.create_product(
            executor, {"nome": "Suco", "preco": "8.50", "categoria_id": bebidas["id"]}
        )
        await products.create_product(
            executor,
            {
                "nome": "Talharim ao sugo",
                "descricao": "Massa fresca com molho de tomate",
                "preco": "42.00",
                "categoria_id": massas["id"],
            },
        )
        combo = await promotions.create_promotion(
            executor,
            {
                "nome_promocao": "Combo Refresco",
                "tipo_promocao": "COMBO_PRECO_FIXO",
                "preco_promocional_combo": "15.00",
                "data_inicio": datetime.now(timezone.utc),
            },
        )
        await promotions.link_product(
            executor, combo["id"], {"produto_id": suco["id"], "quantidade_no_combo": 2}
        )
        await session.commit()

        login = await authenticate_tenant(session, {"email_responsavel": EMAIL, "senha_responsavel": PASSWORD})

    print("Seed complete!")
    print(f"Login: {EMAIL} / {PASSWORD}")
    print(f"Use: Authorization: Bearer {login['token']}")
    print(f"Example: curl http://localhost:8000/v1/tenants/{tenant['id']}/produtos \\")
    print('  -H "Authorization: Bearer ' + login["token"] + '"')
    print("Public menu: curl http://localhost:8000/v1/public/cardapio/cantina_do_vale")


if __name__ == "__main__":
    asyncio.run(seed())
