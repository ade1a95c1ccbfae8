"""Unit price lookup for funds.

Prices come from an external collaborator; the resolvers only see the
``PriceOracle`` protocol, so tests and callers inject their own.
"""

from typing import Iterable, Mapping, Protocol

from fund_switch.models.switch import Holding
from fund_switch.services.errors import MissingPriceError


class PriceOracle(Protocol):
    def price(self, fund: str) -> float:
        """Return the current unit price of ``fund``."""
        ...


class StaticPriceOracle:
    """Price oracle backed by a fixed fund -> price mapping."""

    def __init__(self, prices: Mapping[str | int, float]):
        self._prices: dict[str, float] = {}
        for fund, price in prices.items():
            if price < 0:
                raise ValueError(f"Negative unit price {price} for fund {fund}")
            self._prices[str(fund)] = float(price)

    def price(self, fund: str) -> float:
        try:
            return self._prices[str(fund)]
        except KeyError:
            raise MissingPriceError(str(fund)) from None


def amount(holding: Holding, prices: PriceOracle) -> float:
    """Monetary value of a holding: units * unit price."""
    return holding.units * prices.price(holding.fund)


def total_percentage(holdings: Iterable[Holding]) -> float:
    return sum(h.percentage for h in holdings)
