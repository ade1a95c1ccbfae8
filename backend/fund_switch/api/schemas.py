"""Pydantic schemas for API request/response."""

from pydantic import BaseModel, Field

from fund_switch.models.switch import Holding, SwitchRecord, Target


class ReallocationRequest(BaseModel):
    holdings: list[Holding]
    targets: list[Target]
    prices: dict[str, float] = Field(default_factory=dict)


class IntersectionRequest(BaseModel):
    holdings: list[Holding]
    targets: list[Target]


class ValuationRequest(BaseModel):
    holdings: list[Holding]
    prices: dict[str, float]


class IntersectionResponse(BaseModel):
    switches: list[SwitchRecord]
    remaining_holdings: list[Holding]
    remaining_targets: list[Target]


class ReallocationResponse(BaseModel):
    switches: list[SwitchRecord]
    completed: list[SwitchRecord]
    created: list[SwitchRecord]
    remaining_holdings: list[Holding]
    remaining_targets: list[Target]
    valuation_before: float
    valuation_after: float


class HoldingValuation(BaseModel):
    fund: str
    percentage: float
    units: float
    price: float
    amount: float


class ValuationResponse(BaseModel):
    total: float
    details: list[HoldingValuation]
