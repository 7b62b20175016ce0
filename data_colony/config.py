"""Game configuration and difficulty presets."""
from __future__ import annotations

from dataclasses import dataclass, field

from data_colony.types import COMMODITIES


def _default_stocks() -> dict[str, float]:
    return {"cpu": 100, "storage": 100, "quality": 0, "throughput": 0}


@dataclass(frozen=True)
class GameConfig:
    """Fixed inputs for one game.

    Attributes:
        grid_size: Width and height of the square grid.
        tick_interval: Milliseconds between ticks.
        game_duration: Seconds until the countdown ends the game.
        starting_stocks: Commodity -> starting amount. Missing entries start at 0.
        cost_multiplier: Scales every building cost (rounded up).
    """

    grid_size: int = 5
    tick_interval: float = 1000
    game_duration: float = 180
    starting_stocks: dict[str, float] = field(default_factory=_default_stocks)
    cost_multiplier: float = 1.0

    def __post_init__(self) -> None:
        if self.grid_size <= 0:
            raise ValueError(f"grid_size must be > 0, got {self.grid_size}")
        if self.tick_interval <= 0:
            raise ValueError(f"tick_interval must be > 0, got {self.tick_interval}")
        if self.game_duration <= 0:
            raise ValueError(f"game_duration must be > 0, got {self.game_duration}")
        if self.cost_multiplier <= 0:
            raise ValueError(f"cost_multiplier must be > 0, got {self.cost_multiplier}")
        for name, amount in self.starting_stocks.items():
            if name not in COMMODITIES:
                raise ValueError(f"unknown commodity {name!r} in starting_stocks")
            if amount < 0:
                raise ValueError(f"starting_stocks[{name}] must be >= 0, got {amount}")

    @classmethod
    def for_difficulty(cls, name: str, **overrides: object) -> GameConfig:
        """Config for a named preset. Raises KeyError for unknown names."""
        preset = DIFFICULTIES[name]
        values: dict[str, object] = {
            "starting_stocks": dict(preset.starting_stocks),
            "cost_multiplier": preset.cost_multiplier,
            "game_duration": preset.game_duration,
        }
        values.update(overrides)
        return cls(**values)  # type: ignore[arg-type]


@dataclass(frozen=True)
class Difficulty:
    name: str
    description: str
    starting_stocks: dict[str, float]
    cost_multiplier: float
    game_duration: float


DIFFICULTIES: dict[str, Difficulty] = {
    "easy": Difficulty(
        name="Easy",
        description="Generous budget and plenty of time.",
        starting_stocks={"cpu": 150, "storage": 150, "quality": 10, "throughput": 0},
        cost_multiplier=0.8,
        game_duration=240,
    ),
    "normal": Difficulty(
        name="Normal",
        description="The intended experience.",
        starting_stocks={"cpu": 100, "storage": 100, "quality": 0, "throughput": 0},
        cost_multiplier=1.0,
        game_duration=180,
    ),
    "hard": Difficulty(
        name="Hard",
        description="Tight budget, pricier buildings, less time.",
        starting_stocks={"cpu": 60, "storage": 60, "quality": 0, "throughput": 0},
        cost_multiplier=1.25,
        game_duration=120,
    ),
}
