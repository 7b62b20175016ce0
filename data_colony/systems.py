"""Per-tick systems registered on the TickScheduler."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from data_colony.adjacency import calculate_rates
from data_colony.stockpile import StockpileHelper
from data_colony.types import SERVICES, PlacedBuilding, Position, ResourceRates, TickContext

if TYPE_CHECKING:
    from data_colony.colony import ColonyState

logger = logging.getLogger(__name__)


def make_economy_system(
    colony: ColonyState,
    on_applied: Callable[[TickContext, ResourceRates], None] | None = None,
) -> Callable[[TickContext], None]:
    """Return a system that recomputes rates and applies them to stocks.

    Stocks are clamped at zero per commodity after the rates are added.
    ``on_applied(ctx, rates)`` fires after the stocks are updated.
    """

    def economy_system(ctx: TickContext) -> None:
        rates = calculate_rates(colony)
        colony.set_rates(rates)
        StockpileHelper.apply_rates(colony.stockpile, rates)
        if on_applied is not None:
            on_applied(ctx, rates)

    return economy_system


class SpecialProductionTimers:
    """Fires each placed building's special production on its own interval.

    Progress is kept in milliseconds per placement. A building that is
    removed and placed again starts from zero, even within one tick.
    """

    def __init__(self, colony: ColonyState) -> None:
        self._colony = colony
        self._elapsed_ms: dict[Position, tuple[PlacedBuilding, float]] = {}

    def elapsed_at(self, pos: Position) -> float:
        """Seconds of progress for the building at ``pos``."""
        entry = self._elapsed_ms.get(pos)
        return 0.0 if entry is None else entry[1] / 1000

    def reset(self) -> None:
        self._elapsed_ms.clear()

    def __call__(self, ctx: TickContext) -> None:
        live: dict[Position, tuple[PlacedBuilding, float]] = {}
        for placed in self._colony.placed_buildings():
            special = placed.building.special_production
            if special is None:
                continue
            entry = self._elapsed_ms.get(placed.position)
            elapsed = entry[1] if entry is not None and entry[0] is placed else 0.0
            elapsed += ctx.interval
            period = special.interval * 1000
            while elapsed >= period:
                elapsed -= period
                self._produce(special.resource, special.amount)
            live[placed.position] = (placed, elapsed)
        self._elapsed_ms = live

    def _produce(self, resource: str, amount: float) -> None:
        if resource == SERVICES:
            self._colony.increment_services(int(amount))
            logger.debug("Service produced (total %d)", self._colony.services_produced)
        else:
            StockpileHelper.credit(self._colony.stockpile, {resource: amount})


class Countdown:
    """Game clock. Calls ``on_expire`` once when ``duration`` seconds have elapsed.

    Elapsed time is summed in tick milliseconds, so a run of short ticks
    expires on the exact tick that covers the duration.
    """

    def __init__(self, duration: float, on_expire: Callable[[TickContext], None]) -> None:
        self._duration_ms = duration * 1000
        self._elapsed_ms = 0.0
        self._on_expire = on_expire
        self._expired = False

    @property
    def remaining(self) -> float:
        """Seconds left, never below zero."""
        return max(0.0, self._duration_ms - self._elapsed_ms) / 1000

    @property
    def expired(self) -> bool:
        return self._expired

    def reset(self) -> None:
        self._elapsed_ms = 0.0
        self._expired = False

    def __call__(self, ctx: TickContext) -> None:
        if self._expired:
            return
        self._elapsed_ms += ctx.interval
        if self._elapsed_ms >= self._duration_ms:
            self._expired = True
            self._on_expire(ctx)
