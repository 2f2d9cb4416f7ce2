"""
Shared fixtures.

Settings are read at import time, so the environment is prepared here before
any cardapio module loads. Database-backed tests under tests/integration use
CARDAPIO_TEST_DATABASE_URL and are skipped when it is not set.
"""

import os

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
if os.getenv("CARDAPIO_TEST_DATABASE_URL"):
    os.environ["DATABASE_URL"] = os.environ["CARDAPIO_TEST_DATABASE_URL"]

from contextlib import asynccontextmanager
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import DBAPIError

from cardapio.auth.tokens import issue_token
from cardapio.tenancy.identifiers import validate_identifier


class FakeDriverError(Exception):
    """Stands in for an asyncpg error: carries sqlstate and constraint_name."""

    def __init__(self, sqlstate, constraint_name=None):
        super().__init__(f"driver error {sqlstate}")
        self.sqlstate = sqlstate
        self.constraint_name = constraint_name


def _db_error(sqlstate, constraint_name=None) -> DBAPIError:
    return DBAPIError("SELECT 1", {}, FakeDriverError(sqlstate, constraint_name))


class FakeExecutor:
    """
    ScopedQueryExecutor double for service tests.

    Each fetch consumes the next queued response; an exception instance is
    raised instead of returned. Statements are recorded in order.
    """

    def __init__(self, *responses, namespace="cantina_do_vale_schema"):
        self.namespace = validate_identifier(namespace)
        self.responses = list(responses)
        self.statements = []

    def _next(self, statement):
        self.statements.append(statement)
        if not self.responses:
            raise AssertionError(f"unexpected statement: {statement}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def fetch_one(self, statement, params=None):
        return self._next(statement)

    async def fetch_all(self, statement, params=None):
        return self._next(statement)


class FakeConnection:
    """Connection inside engine.begin(); fails the DDL statement at index `fail_at`."""

    def __init__(self, fail_at=None, error=None, insert_error=None):
        self.fail_at = fail_at
        self.error = error
        self.insert_error = insert_error
        self.inserted = None
        self.ddl = []

    async def execute(self, statement):
        if self.insert_error is not None:
            raise self.insert_error
        self.inserted = statement
        result = MagicMock()
        result.mappings.return_value.one.return_value = {
            "id": 1,
            "identificador_url": "cantina_do_vale",
            "nome_schema_db": "cantina_do_vale_schema",
        }
        return result

    async def exec_driver_sql(self, sql):
        if self.fail_at is not None and len(self.ddl) == self.fail_at:
            raise self.error
        self.ddl.append(sql)


class FakeEngine:
    """Records whether the begin() block committed or rolled back."""

    def __init__(self, connection=None):
        self.connection = connection or FakeConnection()
        self.committed = False
        self.rolled_back = False

    @asynccontextmanager
    async def begin(self):
        try:
            yield self.connection
        except BaseException:
            self.rolled_back = True
            raise
        else:
            self.committed = True


@pytest.fixture
def registration():
    return {
        "identificador_url": "cantina_do_vale",
        "nome_fantasia": "Cantina do Vale",
        "email_responsavel": "contato@cantinadovale.com.br",
        "senha_responsavel": "cantina123",
        "nome_schema_db": "cantina_do_vale_schema",
    }


@pytest.fixture
def token_tenant_1():
    """Bearer token for tenant 1."""
    return issue_token(1, "a@cantina.com.br", "cantina_do_vale_schema")


@pytest.fixture
def token_tenant_2():
    """Bearer token for tenant 2."""
    return issue_token(2, "b@trattoria.com.br", "trattoria_schema")


@pytest.fixture
def make_db_error():
    """Factory for SQLAlchemy DBAPIError wrapping a driver error with the given SQLSTATE."""
    return _db_error


@pytest.fixture
def executor_with():
    """Factory for FakeExecutor instances with queued responses."""
    return FakeExecutor


@pytest.fixture
def fake_engine():
    """Factory for FakeEngine; keyword arguments go to FakeConnection."""

    def build(**connection_kwargs):
        return FakeEngine(FakeConnection(**connection_kwargs))

    return build
