"""Stockpile of commodity stocks and helper functions."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from data_colony.types import COMMODITIES, ResourceRates


def _zero_levels() -> dict[str, float]:
    return {c: 0.0 for c in COMMODITIES}


@dataclass
class Stockpile:
    """Current commodity stocks.

    Attributes:
        levels: Mapping of commodity -> amount. Always holds every commodity.
    """

    levels: dict[str, float] = field(default_factory=_zero_levels)

    def __post_init__(self) -> None:
        for name in self.levels:
            if name not in COMMODITIES:
                raise KeyError(name)
        for c in COMMODITIES:
            self.levels.setdefault(c, 0.0)

    @classmethod
    def from_mapping(cls, amounts: Mapping[str, float]) -> Stockpile:
        return cls(levels={name: float(amount) for name, amount in amounts.items()})


class StockpileHelper:
    """Pure functions for stockpile manipulation."""

    @staticmethod
    def count(stock: Stockpile, commodity: str) -> float:
        return stock.levels[commodity]

    @staticmethod
    def can_afford(stock: Stockpile, cost: Mapping[str, float]) -> bool:
        """True if every non-zero cost entry is covered."""
        for name, needed in cost.items():
            if needed and stock.levels.get(name, 0.0) < needed:
                return False
        return True

    @staticmethod
    def deduct(stock: Stockpile, cost: Mapping[str, float]) -> bool:
        """Subtract each present cost entry. Returns False (no change) if unaffordable."""
        if not StockpileHelper.can_afford(stock, cost):
            return False
        for name, amount in cost.items():
            stock.levels[name] -= amount
        return True

    @staticmethod
    def credit(stock: Stockpile, amounts: Mapping[str, float]) -> None:
        for name, amount in amounts.items():
            if amount < 0:
                raise ValueError(f"amount must be >= 0, got {amount}")
            stock.levels[name] += amount

    @staticmethod
    def apply_rates(stock: Stockpile, rates: ResourceRates) -> None:
        """Add one tick of rates, then clamp every stock to >= 0.

        Each commodity stalls on its own; a shortfall in one never blocks
        the others.
        """
        for c in COMMODITIES:
            stock.levels[c] = max(0.0, stock.levels[c] + rates.get(c))

    @staticmethod
    def reset(stock: Stockpile, amounts: Mapping[str, float]) -> None:
        stock.levels.clear()
        stock.levels.update(_zero_levels())
        for name, amount in amounts.items():
            if name not in COMMODITIES:
                raise KeyError(name)
            stock.levels[name] = float(amount)

    @staticmethod
    def as_dict(stock: Stockpile) -> dict[str, float]:
        return {c: stock.levels[c] for c in COMMODITIES}
