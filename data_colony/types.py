"""Shared data types for the colony economy."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

Position = tuple[int, int]

CPU = "cpu"
STORAGE = "storage"
QUALITY = "quality"
THROUGHPUT = "throughput"

COMMODITIES: tuple[str, ...] = (CPU, STORAGE, QUALITY, THROUGHPUT)

# Adjacency modifier keys, one per commodity.
RATE_KEYS: dict[str, str] = {c: f"{c}_rate" for c in COMMODITIES}

SERVICES = "services"


class CatalogError(ValueError):
    """Raised when building definitions are malformed."""


@dataclass(frozen=True, slots=True)
class ResourceRates:
    """Net per-tick delta for each commodity. A fresh value every tick."""

    cpu: float = 0.0
    storage: float = 0.0
    quality: float = 0.0
    throughput: float = 0.0

    def get(self, commodity: str) -> float:
        if commodity not in COMMODITIES:
            raise KeyError(commodity)
        return getattr(self, commodity)

    def as_dict(self) -> dict[str, float]:
        return {c: getattr(self, c) for c in COMMODITIES}


@dataclass(frozen=True)
class AdjacencyRule:
    """Bonus applied once per neighbor occupied by ``target``.

    Attributes:
        target: Building id the neighbor must hold.
        modifier: Rate key (``cpu_rate``, ``storage_rate``, ...) -> value.
            cpu and throughput values scale the owner's own base production;
            storage and quality values are flat.
        description: Tooltip text, presentation only.
    """

    target: str
    modifier: dict[str, float] = field(default_factory=dict)
    description: str = ""


@dataclass(frozen=True)
class SpecialProduction:
    """Periodic output outside the rate model.

    Attributes:
        resource: A commodity name, or ``"services"``.
        amount: Quantity produced each time the interval elapses.
        interval: Seconds of game time between outputs.
    """

    resource: str
    amount: float
    interval: float

    def __post_init__(self) -> None:
        if self.resource != SERVICES and self.resource not in COMMODITIES:
            raise CatalogError(f"unknown special production resource {self.resource!r}")
        if self.amount < 0:
            raise CatalogError(f"special production amount must be >= 0, got {self.amount}")
        if self.resource == SERVICES and self.amount != int(self.amount):
            raise CatalogError(f"services are produced in whole units, got {self.amount}")
        if self.interval <= 0:
            raise CatalogError(f"special production interval must be > 0, got {self.interval}")


@dataclass(frozen=True)
class BuildingDef:
    """Immutable building definition.

    Cost, production and consumption are partial commodity mappings; a
    missing entry means zero.
    """

    id: str
    name: str = ""
    icon: str = ""
    description: str = ""
    cost: dict[str, float] = field(default_factory=dict)
    production: dict[str, float] = field(default_factory=dict)
    consumption: dict[str, float] = field(default_factory=dict)
    adjacency_rules: tuple[AdjacencyRule, ...] = ()
    special_production: SpecialProduction | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise CatalogError("BuildingDef id must be non-empty")
        for label, mapping in (
            ("cost", self.cost),
            ("production", self.production),
            ("consumption", self.consumption),
        ):
            for commodity, amount in mapping.items():
                if commodity not in COMMODITIES:
                    raise CatalogError(f"{self.id}: unknown commodity {commodity!r} in {label}")
                if amount < 0:
                    raise CatalogError(f"{self.id}: {label}[{commodity}] must be >= 0, got {amount}")
        valid_keys = set(RATE_KEYS.values())
        for rule in self.adjacency_rules:
            for key in rule.modifier:
                if key not in valid_keys:
                    raise CatalogError(f"{self.id}: unknown adjacency modifier {key!r}")


@dataclass(frozen=True, slots=True)
class GridCell:
    x: int
    y: int
    building_id: str | None = None

    @property
    def position(self) -> Position:
        return (self.x, self.y)


@dataclass(frozen=True, slots=True)
class PlacedBuilding:
    building: BuildingDef
    position: Position


@dataclass(frozen=True, slots=True)
class ScoreBreakdown:
    services: int
    quality: int
    throughput: int
    total: int


class Rejection(Enum):
    """Why a command did not change state."""

    UNKNOWN_BUILDING = "unknown_building"
    CELL_OCCUPIED = "cell_occupied"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    PLACEMENT_CONFLICT = "placement_conflict"
    NOTHING_TO_REMOVE = "nothing_to_remove"
    INVALID_POSITION = "invalid_position"
    GAME_OVER = "game_over"


@dataclass(frozen=True, slots=True)
class CommandResult:
    ok: bool
    reason: Rejection | None = None

    def __bool__(self) -> bool:
        return self.ok


ACCEPTED = CommandResult(ok=True)


def rejected(reason: Rejection) -> CommandResult:
    return CommandResult(ok=False, reason=reason)


@dataclass(frozen=True, slots=True)
class TickContext:
    tick_number: int
    interval: float
    elapsed: float
    request_stop: Callable[[], None]
