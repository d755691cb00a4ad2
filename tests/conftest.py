"""Shared test fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from src.main import app
from src.xm_common.enums import PartialFillPolicy
from src.xm_escrow.infrastructure.memory_ledger import InMemorySettlementLedger
from src.xm_gateway.dependencies import get_marketplace
from src.xm_market.engine import Marketplace
from tests.support import ESCROW, make_params


@pytest.fixture
def ledger() -> InMemorySettlementLedger:
    return InMemorySettlementLedger()


@pytest.fixture
def market(ledger: InMemorySettlementLedger) -> Marketplace:
    return Marketplace(params=make_params(), ledger=ledger, escrow_account=ESCROW)


@pytest.fixture
def pro_rata_market(ledger: InMemorySettlementLedger) -> Marketplace:
    return Marketplace(
        params=make_params(),
        ledger=ledger,
        escrow_account=ESCROW,
        partial_fill_policy=PartialFillPolicy.PRO_RATA,
    )


@pytest.fixture
async def client(market: Marketplace) -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints against a fresh marketplace."""
    app.dependency_overrides[get_marketplace] = lambda: market
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
