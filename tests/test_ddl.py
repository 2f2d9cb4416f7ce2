"""Tests for the namespace DDL template."""

import pytest

from cardapio.engine.promotions import PromotionType
from cardapio.tenancy.ddl import NAMESPACE_DDL, NAMESPACE_TABLES, render_namespace_ddl
from cardapio.tenancy.identifiers import validate_identifier


@pytest.fixture
def statements():
    return render_namespace_ddl(validate_identifier("cantina_do_vale_schema"))


def test_one_statement_per_template_entry(statements):
    assert len(statements) == len(NAMESPACE_DDL)


def test_creates_schema_without_if_not_exists(statements):
    """A second provisioning of the same namespace must fail, not no-op."""
    assert statements[0] == 'CREATE SCHEMA "cantina_do_vale_schema"'


def test_every_table_created_in_namespace(statements):
    text = "\n".join(statements)
    for table in NAMESPACE_TABLES:
        assert f'CREATE TABLE "cantina_do_vale_schema".{table} (' in text


def test_placeholder_fully_rendered(statements):
    assert not any("{schema}" in s for s in statements)


def test_constraints_present(statements):
    text = "\n".join(statements)
    for promotion_type in PromotionType:
        assert f"'{promotion_type.value}'" in text
    assert "ON DELETE RESTRICT" in text
    assert "ON DELETE CASCADE" in text
    assert "UNIQUE (promocao_id, produto_id)" in text
    assert "quantidade_no_combo INTEGER DEFAULT 1 CHECK (quantidade_no_combo > 0)" in text


def test_triggers_for_updated_tables(statements):
    triggers = [s for s in statements if s.startswith("CREATE TRIGGER")]
    assert len(triggers) == 3


def test_refuses_unvalidated_namespace():
    with pytest.raises(TypeError):
        render_namespace_ddl("cantina_do_vale_schema")
