"""Holding, Target and SwitchRecord models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SwitchState(str, Enum):
    COMPLETED = "completed"  # same-fund percentage adjustment
    CREATED = "created"  # pending cross-fund move


class Holding(BaseModel):
    """A slice of the current portfolio held in one fund."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    fund: str
    percentage: float = Field(gt=0, le=100)  # share of total portfolio value
    units: float = Field(ge=0)


class Target(BaseModel):
    """Desired share of the portfolio in one fund."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    fund: str
    percentage: float = Field(gt=0, le=100)


class SwitchRecord(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True, frozen=True)

    from_fund: str
    to_fund: str
    units: float = Field(ge=0)
    state: SwitchState


class Resolution(BaseModel):
    """Output of one resolver pass: what is left plus the switches emitted."""

    holdings: list[Holding]
    targets: list[Target]
    switches: list[SwitchRecord]
