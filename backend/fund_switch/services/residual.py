"""Residual resolver.

After the intersection pass, whatever value is still held gets spread
over whatever target percentage is still open. Each target is owed a
share of the remaining money proportional to its percentage:

    target_amount = total_amount * target.percentage / total_percentage

where ``total_percentage`` is the sum of the remaining *holding*
percentages. Holdings are then drained head-first into the target,
emitting one ``created`` switch per holding touched.
"""

import logging
from typing import Sequence

from fund_switch.config import SWITCH_EPSILON
from fund_switch.models.switch import (
    Holding,
    Resolution,
    SwitchRecord,
    SwitchState,
    Target,
)
from fund_switch.services.errors import UnresolvableResidualError
from fund_switch.services.intersection import ensure_unique_funds, is_dust
from fund_switch.services.prices import PriceOracle, amount, total_percentage

logger = logging.getLogger(__name__)


def redistribute(
    holdings: Sequence[Holding],
    targets: Sequence[Target],
    prices: PriceOracle,
    epsilon: float = SWITCH_EPSILON,
) -> Resolution:
    """Move leftover holdings into leftover targets without touching the inputs."""
    ensure_unique_funds(holdings, "holdings")
    ensure_unique_funds(targets, "targets")

    remaining_holdings = [h.model_copy() for h in holdings]
    amounts = [amount(h, prices) for h in remaining_holdings]
    total_amt = sum(amounts)
    total_pct = total_percentage(remaining_holdings)

    remaining_targets = []
    switches = []

    for target in targets:
        if not remaining_holdings:
            remaining_targets.append(target.model_copy())
            continue
        if total_pct <= 0:
            raise UnresolvableResidualError(
                f"No holding percentage left to split for fund {target.fund}"
            )

        target_pct = target.percentage
        target_amt = total_amt * (target_pct / total_pct)
        if target_amt <= 0:
            raise UnresolvableResidualError(
                f"Fund {target.fund} would receive a non-positive amount {target_amt}"
            )

        satisfied = False
        while remaining_holdings:
            holding = remaining_holdings[0]
            holding_amt = amounts[0]

            if abs(holding_amt - target_amt) <= epsilon:
                total_amt -= holding_amt
                total_pct -= target_pct
                units = holding.units
                remaining_holdings.pop(0)
                amounts.pop(0)
                satisfied = True
            elif holding_amt > target_amt:
                ratio = target_amt / holding_amt
                total_amt -= target_amt
                total_pct -= target_pct
                units = ratio * holding.units
                left_units = holding.units - units
                left_pct = holding.percentage - ratio * holding.percentage
                if is_dust(left_units) or is_dust(left_pct):
                    units = holding.units
                    total_amt -= holding_amt - target_amt
                    remaining_holdings.pop(0)
                    amounts.pop(0)
                else:
                    holding.units = left_units
                    holding.percentage = left_pct
                    amounts[0] = holding_amt - target_amt
                satisfied = True
            else:
                consumed_pct = (holding_amt / target_amt) * target_pct
                total_amt -= holding_amt
                total_pct -= consumed_pct
                target_amt -= holding_amt
                target_pct -= consumed_pct
                units = holding.units
                remaining_holdings.pop(0)
                amounts.pop(0)
                satisfied = is_dust(target_pct)

            switches.append(
                SwitchRecord(
                    from_fund=holding.fund,
                    to_fund=target.fund,
                    units=units,
                    state=SwitchState.CREATED,
                )
            )
            if satisfied:
                break

        if not satisfied:
            remaining_targets.append(target.model_copy(update={"percentage": target_pct}))

    logger.info(
        f"Residual created {len(switches)} switches, "
        f"{len(remaining_holdings)} holdings and {len(remaining_targets)} targets left"
    )
    return Resolution(
        holdings=remaining_holdings, targets=remaining_targets, switches=switches
    )


def resolve_residual(
    holdings: list[Holding],
    targets: list[Target],
    prices: PriceOracle,
    epsilon: float = SWITCH_EPSILON,
) -> list[SwitchRecord]:
    """In-place form of :func:`redistribute`; returns the created switches.

    Run it after :func:`~fund_switch.services.intersection.resolve_intersection`
    so the totals only cover funds that still need moving.
    """
    resolution = redistribute(holdings, targets, prices, epsilon)
    holdings[:] = resolution.holdings
    targets[:] = resolution.targets
    return resolution.switches
