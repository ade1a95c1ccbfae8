"""Intersection resolver.

Funds present in both the current holdings and the new targets are
rebalanced in place: the matched holding is trimmed toward the target
percentage and a ``completed`` same-fund switch is recorded.
"""

import logging
from typing import Sequence

from fund_switch.config import DUST_TOLERANCE
from fund_switch.models.switch import (
    Holding,
    Resolution,
    SwitchRecord,
    SwitchState,
    Target,
)
from fund_switch.services.errors import DuplicateFundError

logger = logging.getLogger(__name__)


def ensure_unique_funds(items: Sequence[Holding | Target], kind: str) -> None:
    """Reject sets that name the same fund twice."""
    seen = set()
    for item in items:
        if item.fund in seen:
            raise DuplicateFundError(item.fund, kind)
        seen.add(item.fund)


def is_dust(value: float) -> bool:
    """True for a percentage or unit count too small to be a real position."""
    return value <= DUST_TOLERANCE


def find_index_by_fund(holdings: Sequence[Holding], fund: str) -> int:
    for i, holding in enumerate(holdings):
        if holding.fund == fund:
            return i
    return -1


def intersect(holdings: Sequence[Holding], targets: Sequence[Target]) -> Resolution:
    """Resolve overlapping funds without touching the inputs.

    For each target (in order) with a matching holding:
        holding > target: move target/holding of the units, drop the target
        holding < target: move all units, drop the holding, shrink the target
        holding == target: move all units, drop both
    Targets without a match are carried over unchanged.
    """
    ensure_unique_funds(holdings, "holdings")
    ensure_unique_funds(targets, "targets")

    remaining_holdings = [h.model_copy() for h in holdings]
    remaining_targets = []
    switches = []

    for target in targets:
        index = find_index_by_fund(remaining_holdings, target.fund)
        if index == -1:
            remaining_targets.append(target.model_copy())
            continue

        holding = remaining_holdings[index]
        if holding.percentage > target.percentage:
            units = target.percentage / holding.percentage * holding.units
            left_pct = holding.percentage - target.percentage
            left_units = holding.units - units
            if is_dust(left_pct) or is_dust(left_units):
                units = holding.units
                del remaining_holdings[index]
            else:
                holding.units = left_units
                holding.percentage = left_pct
        elif holding.percentage < target.percentage:
            units = holding.units
            leftover = target.percentage - holding.percentage
            if not is_dust(leftover):
                remaining_targets.append(
                    target.model_copy(update={"percentage": leftover})
                )
            del remaining_holdings[index]
        else:
            units = holding.units
            del remaining_holdings[index]

        switches.append(
            SwitchRecord(
                from_fund=holding.fund,
                to_fund=holding.fund,
                units=units,
                state=SwitchState.COMPLETED,
            )
        )

    logger.info(
        f"Intersection resolved {len(switches)} funds, "
        f"{len(remaining_holdings)} holdings and {len(remaining_targets)} targets left"
    )
    return Resolution(
        holdings=remaining_holdings, targets=remaining_targets, switches=switches
    )


def resolve_intersection(
    holdings: list[Holding], targets: list[Target]
) -> list[SwitchRecord]:
    """In-place form of :func:`intersect`; returns the completed switches."""
    resolution = intersect(holdings, targets)
    holdings[:] = resolution.holdings
    targets[:] = resolution.targets
    return resolution.switches
