# src/xm_params/api/router.py
"""Admin REST API — owner-only parameter updates, pause switch and event feed."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.xm_common.response import ApiResponse, respond
from src.xm_gateway.dependencies import get_caller, get_marketplace
from src.xm_market.engine import Marketplace
from src.xm_params.application.schemas import (
    EventItem,
    EventListResponse,
    FeeReceiverRequest,
    FeeTiersRequest,
    ParamsResponse,
    PauseRequest,
    SetParamsRequest,
)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/params")
async def get_params(
    market: Annotated[Marketplace, Depends(get_marketplace)],
    request: Request,
) -> ApiResponse:
    return respond(request, ParamsResponse.from_domain(market.get_params()).model_dump())


@router.put("/params")
async def set_params(
    body: SetParamsRequest,
    caller: Annotated[str, Depends(get_caller)],
    market: Annotated[Marketplace, Depends(get_marketplace)],
    request: Request,
) -> ApiResponse:
    params = market.set_params(
        caller, body.seller_deposit_rate, body.buyer_deposit_rate, body.min_trade_amount
    )
    return respond(request, ParamsResponse.from_domain(params).model_dump())


@router.post("/pause")
async def pause_new_orders(
    body: PauseRequest,
    caller: Annotated[str, Depends(get_caller)],
    market: Annotated[Marketplace, Depends(get_marketplace)],
    request: Request,
) -> ApiResponse:
    params = market.pause_new_orders(caller, body.paused)
    return respond(request, ParamsResponse.from_domain(params).model_dump())


@router.put("/fee-receiver")
async def set_fee_receiver(
    body: FeeReceiverRequest,
    caller: Annotated[str, Depends(get_caller)],
    market: Annotated[Marketplace, Depends(get_marketplace)],
    request: Request,
) -> ApiResponse:
    params = market.set_fee_receiver(caller, body.fee_receiver)
    return respond(request, ParamsResponse.from_domain(params).model_dump())


@router.put("/fee-tiers")
async def set_fee_tiers(
    body: FeeTiersRequest,
    caller: Annotated[str, Depends(get_caller)],
    market: Annotated[Marketplace, Depends(get_marketplace)],
    request: Request,
) -> ApiResponse:
    params = market.set_fee_tiers(caller, body.to_domain())
    return respond(request, ParamsResponse.from_domain(params).model_dump())


@router.get("/events")
async def list_events(
    market: Annotated[Marketplace, Depends(get_marketplace)],
    request: Request,
    since: int = Query(0, ge=0, description="Return events with seq greater than this"),
) -> ApiResponse:
    items = [EventItem.from_domain(e) for e in market.events_since(since)]
    return respond(request, EventListResponse(items=items).model_dump(mode="json"))
