# src/xm_order/api/router.py
"""Order book REST API."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.xm_common.response import ApiResponse, respond
from src.xm_gateway.dependencies import get_caller, get_marketplace
from src.xm_market.engine import Marketplace
from src.xm_order.application.schemas import (
    BuyOrderListResponse,
    BuyOrderResponse,
    CreateBuyOrderRequest,
    CreateSellOrderRequest,
    SellOrderListResponse,
    SellOrderResponse,
)

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("/buy", status_code=201)
async def create_buy_order(
    body: CreateBuyOrderRequest,
    caller: Annotated[str, Depends(get_caller)],
    market: Annotated[Marketplace, Depends(get_marketplace)],
    request: Request,
) -> ApiResponse:
    order = market.create_buy_order(
        caller, body.xnm_amount, body.price, body.max_delivery_days, body.delivery_address
    )
    return respond(request, BuyOrderResponse.from_domain(order).model_dump(mode="json"))


@router.post("/buy/{order_id}/cancel")
async def cancel_buy_order(
    order_id: int,
    caller: Annotated[str, Depends(get_caller)],
    market: Annotated[Marketplace, Depends(get_marketplace)],
    request: Request,
) -> ApiResponse:
    order = market.cancel_buy_order(caller, order_id)
    return respond(request, BuyOrderResponse.from_domain(order).model_dump(mode="json"))


@router.get("/buy")
async def list_buy_orders(
    market: Annotated[Marketplace, Depends(get_marketplace)],
    request: Request,
    active_only: bool = Query(False, description="Only orders still open for matching"),
) -> ApiResponse:
    items = [BuyOrderResponse.from_domain(o) for o in market.list_buy_orders(active_only)]
    return respond(request, BuyOrderListResponse(items=items).model_dump(mode="json"))


@router.get("/buy/{order_id}")
async def get_buy_order(
    order_id: int,
    market: Annotated[Marketplace, Depends(get_marketplace)],
    request: Request,
) -> ApiResponse:
    order = market.get_buy_order(order_id)
    return respond(request, BuyOrderResponse.from_domain(order).model_dump(mode="json"))


@router.post("/sell", status_code=201)
async def create_sell_order(
    body: CreateSellOrderRequest,
    caller: Annotated[str, Depends(get_caller)],
    market: Annotated[Marketplace, Depends(get_marketplace)],
    request: Request,
) -> ApiResponse:
    order = market.create_sell_order(
        caller, body.price, body.min_xnm, body.max_xnm, body.max_delivery_days
    )
    return respond(request, SellOrderResponse.from_domain(order).model_dump(mode="json"))


@router.post("/sell/{order_id}/cancel")
async def cancel_sell_order(
    order_id: int,
    caller: Annotated[str, Depends(get_caller)],
    market: Annotated[Marketplace, Depends(get_marketplace)],
    request: Request,
) -> ApiResponse:
    order = market.cancel_sell_order(caller, order_id)
    return respond(request, SellOrderResponse.from_domain(order).model_dump(mode="json"))


@router.get("/sell")
async def list_sell_orders(
    market: Annotated[Marketplace, Depends(get_marketplace)],
    request: Request,
    active_only: bool = Query(False, description="Only orders still open for matching"),
) -> ApiResponse:
    items = [SellOrderResponse.from_domain(o) for o in market.list_sell_orders(active_only)]
    return respond(request, SellOrderListResponse(items=items).model_dump(mode="json"))


@router.get("/sell/{order_id}")
async def get_sell_order(
    order_id: int,
    market: Annotated[Marketplace, Depends(get_marketplace)],
    request: Request,
) -> ApiResponse:
    order = market.get_sell_order(order_id)
    return respond(request, SellOrderResponse.from_domain(order).model_dump(mode="json"))
