"""Tests for namespace-bound statement execution."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import delete, insert, select

from cardapio.errors import (
    ConflictError,
    ForeignKeyConstraintError,
    ForeignKeyViolationError,
    ValidationError,
)
from cardapio.models import categorias, produtos
from cardapio.storage.scoped import ScopedQueryExecutor
from cardapio.tenancy.identifiers import validate_identifier


@pytest.fixture
def session():
    session = MagicMock()
    session.execute = AsyncMock()
    return session


def test_rejects_unvalidated_namespace(session):
    """Raw request strings cannot address a schema."""
    with pytest.raises(TypeError):
        ScopedQueryExecutor(session, "cantina_do_vale_schema")


def test_from_storage_revalidates(session):
    executor = ScopedQueryExecutor.from_storage(session, "cantina_do_vale_schema")
    assert executor.namespace == "cantina_do_vale_schema"
    with pytest.raises(ValidationError):
        ScopedQueryExecutor.from_storage(session, "public; DROP TABLE x")


async def test_run_translates_placeholder_schema(session):
    executor = ScopedQueryExecutor(session, validate_identifier("cantina_do_vale_schema"))
    statement = select(categorias)
    await executor.run(statement)

    args, kwargs = session.execute.call_args
    assert args[0] is statement
    assert kwargs["execution_options"] == {
        "schema_translate_map": {"tenant": "cantina_do_vale_schema"}
    }


async def test_tables_are_declared_under_placeholder_schema():
    assert categorias.schema == "tenant"
    assert produtos.schema == "tenant"


async def test_fetch_helpers_return_dicts(session):
    result = MagicMock()
    result.mappings.return_value.first.return_value = {"id": 3, "nome": "Bebidas"}
    result.mappings.return_value.all.return_value = [{"id": 3}, {"id": 4}]
    session.execute.return_value = result
    executor = ScopedQueryExecutor(session, validate_identifier("cantina_do_vale_schema"))

    assert await executor.fetch_one(select(categorias)) == {"id": 3, "nome": "Bebidas"}
    assert await executor.fetch_all(select(categorias)) == [{"id": 3}, {"id": 4}]


async def test_foreign_key_on_delete_is_violation(session, make_db_error):
    session.execute.side_effect = make_db_error("23503")
    executor = ScopedQueryExecutor(session, validate_identifier("cantina_do_vale_schema"))
    with pytest.raises(ForeignKeyViolationError):
        await executor.run(delete(categorias).where(categorias.c.id == 1))


async def test_foreign_key_on_insert_is_constraint(session, make_db_error):
    session.execute.side_effect = make_db_error("23503")
    executor = ScopedQueryExecutor(session, validate_identifier("cantina_do_vale_schema"))
    with pytest.raises(ForeignKeyConstraintError):
        await executor.run(insert(produtos).values(nome="Suco", preco=8.5, categoria_id=99))


async def test_unique_violation_is_conflict(session, make_db_error):
    session.execute.side_effect = make_db_error("23505")
    executor = ScopedQueryExecutor(session, validate_identifier("cantina_do_vale_schema"))
    with pytest.raises(ConflictError):
        await executor.run(insert(categorias).values(nome="Bebidas"))
