"""ColonyGame - wires the economy together and runs one game at a time."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from data_colony.adjacency import active_adjacency_positions, adjacency_info, calculate_rates
from data_colony.buildings import default_catalog
from data_colony.catalog import BuildingCatalog
from data_colony.colony import ColonyState
from data_colony.config import GameConfig
from data_colony.grid import ColonyGrid
from data_colony.scheduler import SchedulerState, TickScheduler
from data_colony.score import calculate_score, rank_title, score_rank
from data_colony.signals import SignalBus
from data_colony.storage import MemoryScoreStore, ScoreStore
from data_colony.systems import Countdown, SpecialProductionTimers, make_economy_system
from data_colony.types import (
    CommandResult,
    Position,
    Rejection,
    ResourceRates,
    ScoreBreakdown,
    TickContext,
    rejected,
)

logger = logging.getLogger(__name__)

SIGNALS = ("tick", "placed", "removed", "rejected", "game_over")


@dataclass(frozen=True)
class ColonyView:
    """What a presentation layer needs after a tick or command."""

    stocks: dict[str, float]
    rates: ResourceRates
    tick_count: int
    active_positions: frozenset[Position]
    services: int
    time_remaining: float
    state: SchedulerState


@dataclass(frozen=True)
class GameResult:
    score: ScoreBreakdown
    rank: str
    title: str
    is_new_high_score: bool
    high_score: int
    games_played: int
    ticks: int


class ColonyGame:
    """Orchestrates grid, colony, scheduler, scoring and persistence.

    Signals published on :attr:`bus`, delivered as they happen:

    - ``tick``: ``tick``, ``rates``, ``stocks``
    - ``placed`` / ``removed``: ``building_id``, ``position``
    - ``rejected``: ``action``, ``position``, ``reason``
    - ``game_over``: ``result``
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        catalog: BuildingCatalog | None = None,
        score_store: ScoreStore | None = None,
        bus: SignalBus | None = None,
    ) -> None:
        self._config = config if config is not None else GameConfig()
        base = catalog if catalog is not None else default_catalog()
        self._catalog = base.with_cost_multiplier(self._config.cost_multiplier)
        self._grid = ColonyGrid(self._config.grid_size)
        self._colony = ColonyState(self._catalog, self._grid, self._config.starting_stocks)
        self._store: ScoreStore = score_store if score_store is not None else MemoryScoreStore()
        self._bus = bus if bus is not None else SignalBus(SIGNALS)
        self._result: GameResult | None = None

        self._scheduler = TickScheduler(self._config.tick_interval)
        self._special = SpecialProductionTimers(self._colony)
        self._countdown = Countdown(self._config.game_duration, self._on_time_up)
        self._scheduler.on_tick(make_economy_system(self._colony))
        self._scheduler.on_tick(self._special)
        self._scheduler.on_tick(self._countdown)
        self._scheduler.on_tick(self._after_tick)

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def catalog(self) -> BuildingCatalog:
        return self._catalog

    @property
    def grid(self) -> ColonyGrid:
        return self._grid

    @property
    def colony(self) -> ColonyState:
        return self._colony

    @property
    def scheduler(self) -> TickScheduler:
        return self._scheduler

    @property
    def bus(self) -> SignalBus:
        return self._bus

    @property
    def score_store(self) -> ScoreStore:
        return self._store

    @property
    def time_remaining(self) -> float:
        return self._countdown.remaining

    @property
    def result(self) -> GameResult | None:
        return self._result

    @property
    def is_over(self) -> bool:
        return self._result is not None

    # --- lifecycle ---

    def start(self) -> None:
        if self.is_over:
            logger.warning("Game is over; call restart() before start()")
            return
        self._scheduler.start()

    def pause(self) -> None:
        self._scheduler.pause()

    def resume(self) -> None:
        self._scheduler.resume()

    def advance(self, elapsed: float) -> int:
        """Feed elapsed milliseconds from the host timer. Returns ticks fired."""
        return self._scheduler.advance(elapsed)

    def step(self) -> bool:
        return self._scheduler.step()

    def end_game(self) -> GameResult:
        """Stop ticking, score the colony and record it. Idempotent."""
        if self._result is not None:
            return self._result
        self._scheduler.stop()
        breakdown = calculate_score(self._colony.services_produced, self._colony.stocks)
        is_new = self._store.set_high_score(breakdown.total)
        self._store.increment_games_played()
        self._result = GameResult(
            score=breakdown,
            rank=score_rank(breakdown.total),
            title=rank_title(breakdown.total),
            is_new_high_score=is_new,
            high_score=self._store.get_high_score(),
            games_played=self._store.get_games_played(),
            ticks=self._scheduler.tick_count,
        )
        logger.info(
            "Game over: score %d (%s)%s",
            breakdown.total,
            self._result.title,
            " - new high score" if is_new else "",
        )
        self._emit("game_over", result=self._result)
        return self._result

    def restart(self) -> None:
        """Discard the current game and return to an idle, unstarted one."""
        self._scheduler.stop()
        self._scheduler.reset()
        self._colony.reset(self._config.starting_stocks)
        self._special.reset()
        self._countdown.reset()
        self._result = None

    # --- commands ---

    def place_building(self, building_id: str, pos: Position) -> CommandResult:
        if self.is_over:
            return self._refuse("place", pos)
        result = self._colony.place(building_id, pos)
        if result:
            self._refresh_rates()
            self._emit("placed", building_id=building_id, position=pos)
        else:
            self._emit("rejected", action="place", position=pos, reason=result.reason)
        return result

    def remove_building(self, pos: Position) -> CommandResult:
        if self.is_over:
            return self._refuse("remove", pos)
        placed = self._colony.building_at(pos)
        result = self._colony.remove(pos)
        if result and placed is not None:
            self._refresh_rates()
            self._emit("removed", building_id=placed.building.id, position=pos)
        else:
            self._emit("rejected", action="remove", position=pos, reason=result.reason)
        return result

    def increment_services(self, amount: int = 1) -> None:
        self._colony.increment_services(amount)

    # --- observation ---

    def observe(self) -> ColonyView:
        return ColonyView(
            stocks=self._colony.stocks,
            rates=self._colony.rates,
            tick_count=self._scheduler.tick_count,
            active_positions=frozenset(active_adjacency_positions(self._colony)),
            services=self._colony.services_produced,
            time_remaining=self._countdown.remaining,
            state=self._scheduler.state,
        )

    def adjacency_info(self, pos: Position) -> list[str]:
        return adjacency_info(self._colony, pos)

    # --- internals ---

    def _refresh_rates(self) -> None:
        self._colony.set_rates(calculate_rates(self._colony))

    def _on_time_up(self, ctx: TickContext) -> None:
        ctx.request_stop()

    def _after_tick(self, ctx: TickContext) -> None:
        self._emit(
            "tick",
            tick=ctx.tick_number,
            rates=self._colony.rates,
            stocks=self._colony.stocks,
        )
        if self._countdown.expired:
            self.end_game()

    def _refuse(self, action: str, pos: Position) -> CommandResult:
        logger.debug("Rejected %s at %s: game is over", action, pos)
        self._emit("rejected", action=action, position=pos, reason=Rejection.GAME_OVER)
        return rejected(Rejection.GAME_OVER)

    def _emit(self, signal_name: str, **data: object) -> None:
        self._bus.publish(signal_name, **data)
