"""Cross-tenant authorization check."""

import logging

from cardapio.auth.tokens import TenantContext
from cardapio.errors import ForbiddenError

logger = logging.getLogger(__name__)


def authorize(context: TenantContext | None, requested_tenant_id: int) -> None:
    """
    Allow only when the authenticated tenant is the one named in the path.

    This is the whole isolation boundary between tenants; a missing context
    is refused.
    """
    if context is None:
        raise ForbiddenError("Access forbidden: no authenticated tenant")
    if context.tenant_id != requested_tenant_id:
        logger.warning(
            "Cross-tenant access refused: token tenant=%s path tenant=%s",
            context.tenant_id,
            requested_tenant_id,
        )
        raise ForbiddenError("Access forbidden: you cannot access this restaurant's data")
