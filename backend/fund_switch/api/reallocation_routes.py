"""Reallocation API routes."""

import logging

from fastapi import APIRouter, HTTPException

from fund_switch.api.schemas import (
    IntersectionRequest,
    IntersectionResponse,
    ReallocationRequest,
    ReallocationResponse,
    ValuationRequest,
    ValuationResponse,
)
from fund_switch.services.errors import SwitchError
from fund_switch.services.intersection import intersect
from fund_switch.services.prices import StaticPriceOracle
from fund_switch.services.reallocator import reallocation_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["reallocation"])


def _price_oracle(prices: dict[str, float]) -> StaticPriceOracle:
    try:
        return StaticPriceOracle(prices)
    except ValueError as e:
        logger.error(f"Rejected prices: {e}")
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/reallocations", response_model=ReallocationResponse)
async def create_reallocation(req: ReallocationRequest):
    prices = _price_oracle(req.prices)
    try:
        result = reallocation_service.reallocate(req.holdings, req.targets, prices)
    except SwitchError as e:
        logger.error(f"Reallocation failed: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return ReallocationResponse(
        switches=result.switches,
        completed=result.completed,
        created=result.created,
        remaining_holdings=result.remaining_holdings,
        remaining_targets=result.remaining_targets,
        valuation_before=round(result.valuation_before, 4),
        valuation_after=round(result.valuation_after, 4),
    )


@router.post("/reallocations/intersection", response_model=IntersectionResponse)
async def create_intersection(req: IntersectionRequest):
    """Resolve only the funds present on both sides; no prices needed."""
    try:
        resolution = intersect(req.holdings, req.targets)
    except SwitchError as e:
        logger.error(f"Intersection failed: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return IntersectionResponse(
        switches=resolution.switches,
        remaining_holdings=resolution.holdings,
        remaining_targets=resolution.targets,
    )


@router.post("/valuations", response_model=ValuationResponse)
async def create_valuation(req: ValuationRequest):
    prices = _price_oracle(req.prices)
    try:
        valuation = reallocation_service.valuate(req.holdings, prices)
    except SwitchError as e:
        logger.error(f"Valuation failed: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return ValuationResponse(
        total=round(valuation["total"], 4),
        details=valuation["details"],
    )
