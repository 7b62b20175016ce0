"""ColonyState - placed buildings, stocks, rates and the service counter."""
from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from data_colony.catalog import BuildingCatalog
from data_colony.grid import ColonyGrid
from data_colony.stockpile import Stockpile, StockpileHelper
from data_colony.types import (
    ACCEPTED,
    COMMODITIES,
    BuildingDef,
    CommandResult,
    PlacedBuilding,
    Position,
    Rejection,
    ResourceRates,
    rejected,
)

logger = logging.getLogger(__name__)


class ColonyState:
    """Owns placement and refund bookkeeping.

    The grid and the placement map always agree on occupancy: every
    mutation of one is paired with the other, and a failed grid update
    rolls back the cost already paid.
    """

    def __init__(
        self,
        catalog: BuildingCatalog,
        grid: ColonyGrid,
        starting_stocks: Mapping[str, float] | None = None,
    ) -> None:
        self._catalog = catalog
        self._grid = grid
        self._stockpile = Stockpile.from_mapping(starting_stocks or {})
        self._rates = ResourceRates()
        self._placed: dict[Position, PlacedBuilding] = {}
        self._services = 0

    @property
    def catalog(self) -> BuildingCatalog:
        return self._catalog

    @property
    def grid(self) -> ColonyGrid:
        return self._grid

    @property
    def stockpile(self) -> Stockpile:
        return self._stockpile

    @property
    def stocks(self) -> dict[str, float]:
        return StockpileHelper.as_dict(self._stockpile)

    @property
    def rates(self) -> ResourceRates:
        return self._rates

    def set_rates(self, rates: ResourceRates) -> None:
        self._rates = rates

    @property
    def services_produced(self) -> int:
        return self._services

    def place(self, building_id: str, pos: Position) -> CommandResult:
        building = self._catalog.get_building(building_id)
        if building is None:
            return self._reject(Rejection.UNKNOWN_BUILDING, building_id, pos)
        cell = self._grid.get_cell(pos)
        if cell is None:
            return self._reject(Rejection.INVALID_POSITION, building_id, pos)
        if cell.building_id is not None:
            return self._reject(Rejection.CELL_OCCUPIED, building_id, pos)
        if not StockpileHelper.deduct(self._stockpile, building.cost):
            return self._reject(Rejection.INSUFFICIENT_FUNDS, building_id, pos)

        if not self._grid.set_building(pos, building.id):
            StockpileHelper.credit(self._stockpile, building.cost)
            return self._reject(Rejection.PLACEMENT_CONFLICT, building_id, pos)

        self._placed[pos] = PlacedBuilding(building=building, position=pos)
        logger.info("Placed %s at %s", building.name or building.id, pos)
        return ACCEPTED

    def remove(self, pos: Position) -> CommandResult:
        if not self._grid.in_bounds(pos):
            return self._reject(Rejection.INVALID_POSITION, None, pos)
        placed = self._placed.get(pos)
        if placed is None:
            return self._reject(Rejection.NOTHING_TO_REMOVE, None, pos)

        StockpileHelper.credit(self._stockpile, refund_for(placed.building.cost))
        self._grid.set_building(pos, None)
        del self._placed[pos]
        logger.info("Removed %s at %s, refunded 50%%", placed.building.name or placed.building.id, pos)
        return ACCEPTED

    def increment_services(self, amount: int = 1) -> None:
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        self._services += amount

    def building_at(self, pos: Position) -> PlacedBuilding | None:
        return self._placed.get(pos)

    def placed_buildings(self) -> list[PlacedBuilding]:
        return list(self._placed.values())

    def clear(self) -> None:
        """Drop every placement, zero the service counter and clear the grid."""
        self._placed.clear()
        self._services = 0
        self._grid.clear()

    def reset(self, starting_stocks: Mapping[str, float]) -> None:
        """Clear, then restore starting stocks and zero rates."""
        self.clear()
        StockpileHelper.reset(self._stockpile, starting_stocks)
        self._rates = ResourceRates()

    def snapshot(self) -> dict[str, Any]:
        return {
            "stocks": self.stocks,
            "rates": self._rates.as_dict(),
            "services": self._services,
            "placements": [
                {"id": p.building.id, "x": p.position[0], "y": p.position[1]}
                for p in self._placed.values()
            ],
        }

    def restore(self, data: dict[str, Any]) -> None:
        """Replace state from snapshot data.

        The whole snapshot is checked first; on error nothing changes.
        Raises KeyError on unknown building ids or commodities and
        ValueError on out-of-bounds or doubly occupied cells.
        """
        placements: dict[Position, BuildingDef] = {}
        for entry in data.get("placements", []):
            building = self._catalog.get_building(entry["id"])
            if building is None:
                raise KeyError(entry["id"])
            pos = (entry["x"], entry["y"])
            if not self._grid.in_bounds(pos):
                raise ValueError(f"snapshot places {building.id!r} outside the grid at {pos}")
            if pos in placements:
                raise ValueError(f"snapshot places two buildings at {pos}")
            placements[pos] = building
        stocks = data.get("stocks", {})
        for name in stocks:
            if name not in COMMODITIES:
                raise KeyError(name)
        rates = ResourceRates(**data.get("rates", {}))
        services = data.get("services", 0)
        if services < 0:
            raise ValueError(f"services must be >= 0, got {services}")

        self.clear()
        StockpileHelper.reset(self._stockpile, stocks)
        self._rates = rates
        self._services = services
        for pos, building in placements.items():
            self._grid.set_building(pos, building.id)
            self._placed[pos] = PlacedBuilding(building=building, position=pos)

    def _reject(self, reason: Rejection, building_id: str | None, pos: Position) -> CommandResult:
        logger.debug("Rejected %s at %s: %s", building_id or "removal", pos, reason.value)
        return rejected(reason)


def refund_for(cost: Mapping[str, float]) -> dict[str, float]:
    """Half of each cost component, rounded down. Missing components refund 0."""
    return {c: math.floor(cost.get(c, 0) / 2) for c in COMMODITIES}
