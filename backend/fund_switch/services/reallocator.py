"""Reallocation engine.

Runs the intersection pass and then the residual pass over copies of the
caller's holdings and targets, and values the portfolio on both sides.

Algorithm:
    1. same-fund targets trim their matching holding  -> completed switches
    2. leftover value is split across leftover targets -> created switches
"""

import logging
from typing import Any, Sequence

from pydantic import BaseModel

from fund_switch.config import SWITCH_EPSILON
from fund_switch.models.switch import Holding, SwitchRecord, Target
from fund_switch.services.intersection import intersect
from fund_switch.services.prices import PriceOracle
from fund_switch.services.residual import redistribute

logger = logging.getLogger(__name__)


class ReallocationResult(BaseModel):
    completed: list[SwitchRecord]
    created: list[SwitchRecord]
    remaining_holdings: list[Holding]
    remaining_targets: list[Target]
    valuation_before: float
    valuation_after: float

    @property
    def switches(self) -> list[SwitchRecord]:
        """The full ledger in processing order."""
        return self.completed + self.created


class ReallocationService:
    """Turns current holdings and new target splits into switch instructions."""

    def __init__(self, epsilon: float = SWITCH_EPSILON):
        self.epsilon = epsilon

    def valuate(
        self, holdings: Sequence[Holding], prices: PriceOracle
    ) -> dict[str, Any]:
        """Value each holding at its unit price.

        Returns:
            {total, details: [{fund, percentage, units, price, amount}]}
        """
        details = []
        total = 0.0
        for holding in holdings:
            price = prices.price(holding.fund)
            value = holding.units * price
            total += value
            details.append(
                {
                    "fund": holding.fund,
                    "percentage": holding.percentage,
                    "units": holding.units,
                    "price": price,
                    "amount": value,
                }
            )
        return {"total": total, "details": details}

    def reallocate(
        self,
        holdings: Sequence[Holding],
        targets: Sequence[Target],
        prices: PriceOracle,
    ) -> ReallocationResult:
        valuation_before = self.valuate(holdings, prices)["total"]

        intersection = intersect(holdings, targets)
        residual = redistribute(
            intersection.holdings, intersection.targets, prices, self.epsilon
        )

        valuation_after = self.valuate(residual.holdings, prices)["total"]
        logger.info(
            f"Reallocated {len(holdings)} holdings into {len(targets)} targets: "
            f"{len(intersection.switches)} completed, {len(residual.switches)} created"
        )
        if residual.targets:
            logger.info(
                f"{len(residual.targets)} targets left unsatisfied after reallocation"
            )

        return ReallocationResult(
            completed=intersection.switches,
            created=residual.switches,
            remaining_holdings=residual.holdings,
            remaining_targets=residual.targets,
            valuation_before=valuation_before,
            valuation_after=valuation_after,
        )


# Global instance
reallocation_service = ReallocationService()
