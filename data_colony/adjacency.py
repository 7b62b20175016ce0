"""Rate calculation with adjacency bonuses.

Rates are recomputed from scratch on every call. For each placed building:

1. base production is added,
2. base consumption is subtracted,
3. each adjacency rule is applied once per neighbor holding the rule's
   target building.

Adjacency modifiers are not uniform across commodities. ``cpu_rate`` and
``throughput_rate`` multiply the building's own base production of that
commodity, while ``storage_rate`` and ``quality_rate`` are flat amounts.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from data_colony.types import (
    COMMODITIES,
    CPU,
    QUALITY,
    RATE_KEYS,
    STORAGE,
    THROUGHPUT,
    AdjacencyRule,
    PlacedBuilding,
    Position,
    ResourceRates,
)

if TYPE_CHECKING:
    from data_colony.colony import ColonyState
    from data_colony.grid import ColonyGrid

SCALED = (CPU, THROUGHPUT)
FLAT = (STORAGE, QUALITY)


def calculate_rates(colony: ColonyState, grid: ColonyGrid | None = None) -> ResourceRates:
    """Net per-tick rates for the colony's current placements."""
    grid = grid if grid is not None else colony.grid
    totals = {c: 0.0 for c in COMMODITIES}

    for placed in colony.placed_buildings():
        building = placed.building
        for commodity, amount in building.production.items():
            if amount:
                totals[commodity] += amount
        for commodity, amount in building.consumption.items():
            if amount:
                totals[commodity] -= amount
        _apply_adjacency(totals, placed, grid)

    return ResourceRates(**totals)


def _apply_adjacency(totals: dict[str, float], placed: PlacedBuilding, grid: ColonyGrid) -> None:
    building = placed.building
    for rule in building.adjacency_rules:
        # stacks once per matching neighbor
        for _ in range(_matching_neighbors(rule, placed, grid)):
            for commodity in SCALED:
                modifier = rule.modifier.get(RATE_KEYS[commodity])
                if modifier is not None:
                    totals[commodity] += building.production.get(commodity, 0) * modifier
            for commodity in FLAT:
                modifier = rule.modifier.get(RATE_KEYS[commodity])
                if modifier is not None:
                    totals[commodity] += modifier


def _matching_neighbors(rule: AdjacencyRule, placed: PlacedBuilding, grid: ColonyGrid) -> int:
    return sum(
        1 for cell in grid.get_neighbors(placed.position)
        if cell.building_id == rule.target
    )


def active_adjacency_positions(
    colony: ColonyState, grid: ColonyGrid | None = None
) -> set[Position]:
    """Positions whose building has at least one rule with a matching neighbor."""
    grid = grid if grid is not None else colony.grid
    active: set[Position] = set()
    for placed in colony.placed_buildings():
        for rule in placed.building.adjacency_rules:
            if _matching_neighbors(rule, placed, grid) > 0:
                active.add(placed.position)
                break
    return active


def adjacency_info(colony: ColonyState, pos: Position) -> list[str]:
    """Tooltip lines for the active bonuses of the building at ``pos``."""
    placed = colony.building_at(pos)
    if placed is None:
        return []
    info: list[str] = []
    for rule in placed.building.adjacency_rules:
        count = _matching_neighbors(rule, placed, colony.grid)
        if count == 0:
            continue
        target = colony.catalog.get_building(rule.target)
        if target is not None and rule.description:
            info.append(f"{rule.description} ({count}x {target.icon})")
    return info
