"""FastAPI dependencies: caller identity and the marketplace instance.

The host runtime authenticates callers and forwards the principal's address in
the ``X-Caller-Address`` header; this service trusts it as-is.

Usage in any router:
    @router.post("/orders/buy")
    async def create(caller: Annotated[str, Depends(get_caller)], ...):
        ...
"""
from typing import Annotated

from fastapi import Header

from config.settings import settings
from src.xm_common.errors import MissingCallerError
from src.xm_market.engine import Marketplace, build_marketplace

CALLER_HEADER = "X-Caller-Address"

_marketplace = build_marketplace(settings)


async def get_caller(
    x_caller_address: Annotated[str | None, Header(alias=CALLER_HEADER)] = None,
) -> str:
    """Return the caller address. Raises MissingCallerError (401) if absent or blank."""
    if x_caller_address is None or not x_caller_address.strip():
        raise MissingCallerError()
    return x_caller_address.strip()


def get_marketplace() -> Marketplace:
    """Process-wide marketplace; override in tests via app.dependency_overrides."""
    return _marketplace
