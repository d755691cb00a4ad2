# src/xm_trade/api/router.py
"""Trade REST API — matching, buyer confirmation, arbitration and seller stats."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.xm_common.enums import TradeStatus
from src.xm_common.response import ApiResponse, respond
from src.xm_gateway.dependencies import get_caller, get_marketplace
from src.xm_market.engine import Marketplace
from src.xm_trade.application.schemas import (
    MatchSellOrderRequest,
    ReleaseTradeRequest,
    SellerStatsResponse,
    TradeListResponse,
    TradeResponse,
)

router = APIRouter(prefix="/trades", tags=["trades"])
sellers_router = APIRouter(prefix="/sellers", tags=["trades"])


@router.post("/match-buy/{buy_order_id}", status_code=201)
async def sell_order_match_buy(
    buy_order_id: int,
    caller: Annotated[str, Depends(get_caller)],
    market: Annotated[Marketplace, Depends(get_marketplace)],
    request: Request,
) -> ApiResponse:
    trade = market.sell_order_match_buy(caller, buy_order_id)
    return respond(request, TradeResponse.from_domain(trade).model_dump(mode="json"))


@router.post("/match-sell/{sell_order_id}", status_code=201)
async def buy_order_match_sell(
    sell_order_id: int,
    body: MatchSellOrderRequest,
    caller: Annotated[str, Depends(get_caller)],
    market: Annotated[Marketplace, Depends(get_marketplace)],
    request: Request,
) -> ApiResponse:
    trade = market.buy_order_match_sell(
        caller, sell_order_id, body.xnm_amount, body.delivery_address
    )
    return respond(request, TradeResponse.from_domain(trade).model_dump(mode="json"))


@router.post("/{trade_id}/complete")
async def complete_trade(
    trade_id: int,
    caller: Annotated[str, Depends(get_caller)],
    market: Annotated[Marketplace, Depends(get_marketplace)],
    request: Request,
) -> ApiResponse:
    trade = market.complete_trade(caller, trade_id)
    return respond(request, TradeResponse.from_domain(trade).model_dump(mode="json"))


@router.post("/{trade_id}/release")
async def release_trade(
    trade_id: int,
    body: ReleaseTradeRequest,
    caller: Annotated[str, Depends(get_caller)],
    market: Annotated[Marketplace, Depends(get_marketplace)],
    request: Request,
) -> ApiResponse:
    trade = market.release_trade(
        caller,
        trade_id,
        body.usdt_to_seller,
        body.usdt_to_buyer,
        body.seller_deposit_penalty,
        body.buyer_deposit_penalty,
    )
    return respond(request, TradeResponse.from_domain(trade).model_dump(mode="json"))


@router.get("")
async def list_trades(
    market: Annotated[Marketplace, Depends(get_marketplace)],
    request: Request,
    party: str | None = Query(None, description="Buyer or seller address"),
    status: TradeStatus | None = Query(None, description="Filter by trade status"),
) -> ApiResponse:
    items = [TradeResponse.from_domain(t) for t in market.list_trades(party, status)]
    return respond(request, TradeListResponse(items=items).model_dump(mode="json"))


@router.get("/{trade_id}")
async def get_trade(
    trade_id: int,
    market: Annotated[Marketplace, Depends(get_marketplace)],
    request: Request,
) -> ApiResponse:
    trade = market.get_trade(trade_id)
    return respond(request, TradeResponse.from_domain(trade).model_dump(mode="json"))


@sellers_router.get("/{address}/stats")
async def get_seller_stats(
    address: str,
    market: Annotated[Marketplace, Depends(get_marketplace)],
    request: Request,
) -> ApiResponse:
    stats = market.seller_stats(address)
    return respond(request, SellerStatsResponse.from_domain(stats).model_dump())
