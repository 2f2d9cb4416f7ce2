"""
Bearer token issuance and resolution into a TenantContext.

The token carries the tenant id, responsible email and namespace name read
from the tenant row at login. Namespace names never change after
provisioning, so requests trust the signed claim instead of re-reading the
registry.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

from cardapio.config import settings
from cardapio.errors import ExpiredTokenError, InvalidTokenError, ValidationError
from cardapio.tenancy.identifiers import ValidIdentifier, validate_identifier


@dataclass(frozen=True)
class TenantContext:
    """
    Authenticated tenant for one request.

    Attributes:
        tenant_id: restaurantes.id of the authenticated tenant
        email: responsible party email
        namespace: validated schema name holding the tenant's tables
    """

    tenant_id: int
    email: str
    namespace: ValidIdentifier

    def __post_init__(self):
        if self.tenant_id <= 0:
            raise ValueError(f"tenant_id must be positive, got {self.tenant_id}")
        if not isinstance(self.namespace, ValidIdentifier):
            raise TypeError("namespace must be a ValidIdentifier")


def issue_token(tenant_id: int, email: str, namespace: str, expires_minutes: int | None = None) -> str:
    """Sign a time-limited token for an authenticated tenant."""
    expires = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes if expires_minutes is not None else settings.jwt_expire_minutes
    )
    payload = {
        "sub": str(tenant_id),
        "email": email,
        "namespace": str(validate_identifier(namespace, "namespace")),
        "exp": expires,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def resolve_token(token: str) -> TenantContext:
    """Verify signature and expiry, then build the TenantContext from the claims."""
    if not token:
        raise InvalidTokenError("Missing token")
    try:
        claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError:
        raise ExpiredTokenError("Token expired, please log in again")
    except JWTError:
        raise InvalidTokenError("Invalid token")

    try:
        tenant_id = int(claims["sub"])
        email = str(claims["email"])
        namespace = validate_identifier(claims["namespace"], "namespace")
        return TenantContext(tenant_id=tenant_id, email=email, namespace=namespace)
    except (KeyError, TypeError, ValueError, ValidationError):
        raise InvalidTokenError("Invalid token claims")
