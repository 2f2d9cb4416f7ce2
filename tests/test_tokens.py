"""Tests for token issuance and tenant context resolution."""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from cardapio.auth.tokens import TenantContext, issue_token, resolve_token
from cardapio.config import settings
from cardapio.errors import ExpiredTokenError, InvalidTokenError, ValidationError
from cardapio.tenancy.identifiers import ValidIdentifier, validate_identifier


def _sign(claims):
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def _future():
    return datetime.now(timezone.utc) + timedelta(minutes=5)


def test_round_trip_builds_context():
    """A freshly issued token resolves to the same tenant and namespace."""
    context = resolve_token(issue_token(7, "dono@cantina.com.br", "cantina_do_vale_schema"))
    assert context.tenant_id == 7
    assert context.email == "dono@cantina.com.br"
    assert context.namespace == "cantina_do_vale_schema"
    assert isinstance(context.namespace, ValidIdentifier)


def test_expired_token():
    token = issue_token(7, "dono@cantina.com.br", "cantina_do_vale_schema", expires_minutes=-1)
    with pytest.raises(ExpiredTokenError):
        resolve_token(token)


def test_tampered_token():
    """Signature mismatch is an invalid token."""
    token = jwt.encode(
        {"sub": "7", "email": "x@y.com", "namespace": "cantina_schema", "exp": _future()},
        "another-secret",
        algorithm="HS256",
    )
    with pytest.raises(InvalidTokenError):
        resolve_token(token)


def test_garbage_and_empty_token():
    with pytest.raises(InvalidTokenError):
        resolve_token("not.a.token")
    with pytest.raises(InvalidTokenError):
        resolve_token("")


def test_namespace_claim_is_revalidated():
    """A signed token carrying an unsafe namespace is still refused."""
    token = _sign({"sub": "7", "email": "x@y.com", "namespace": 'evil"; --', "exp": _future()})
    with pytest.raises(InvalidTokenError):
        resolve_token(token)


def test_missing_claims():
    token = _sign({"sub": "7", "exp": _future()})
    with pytest.raises(InvalidTokenError):
        resolve_token(token)


def test_non_numeric_subject():
    token = _sign({"sub": "abc", "email": "x@y.com", "namespace": "cantina_schema", "exp": _future()})
    with pytest.raises(InvalidTokenError):
        resolve_token(token)


def test_issue_refuses_unsafe_namespace():
    with pytest.raises(ValidationError):
        issue_token(7, "x@y.com", "Bad Name")


def test_context_rejects_non_positive_tenant():
    with pytest.raises(ValueError, match="tenant_id must be positive"):
        TenantContext(tenant_id=0, email="x@y.com", namespace=validate_identifier("cantina_schema"))


def test_context_requires_validated_namespace():
    with pytest.raises(TypeError):
        TenantContext(tenant_id=1, email="x@y.com", namespace="cantina_schema")


def test_context_is_immutable():
    context = TenantContext(tenant_id=1, email="x@y.com", namespace=validate_identifier("cantina_schema"))
    with pytest.raises(Exception):  # FrozenInstanceError
        context.tenant_id = 2
