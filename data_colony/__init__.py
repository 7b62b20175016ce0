"""data-colony - Grid economy simulation: placement, adjacency bonuses, ticks and scoring."""
from data_colony.adjacency import active_adjacency_positions, adjacency_info, calculate_rates
from data_colony.buildings import default_catalog
from data_colony.catalog import BuildingCatalog, load_catalog
from data_colony.colony import ColonyState, refund_for
from data_colony.config import DIFFICULTIES, Difficulty, GameConfig
from data_colony.game import SIGNALS, ColonyGame, ColonyView, GameResult
from data_colony.grid import ColonyGrid
from data_colony.scheduler import SchedulerState, TickScheduler
from data_colony.score import calculate_score, format_score, rank_title, score_rank
from data_colony.signals import SignalBus
from data_colony.stockpile import Stockpile, StockpileHelper
from data_colony.storage import JsonScoreStore, MemoryScoreStore, ScoreStore
from data_colony.systems import Countdown, SpecialProductionTimers, make_economy_system
from data_colony.types import (
    COMMODITIES,
    AdjacencyRule,
    BuildingDef,
    CatalogError,
    CommandResult,
    GridCell,
    PlacedBuilding,
    Rejection,
    ResourceRates,
    ScoreBreakdown,
    SpecialProduction,
    TickContext,
)

__all__ = [
    "COMMODITIES",
    "DIFFICULTIES",
    "SIGNALS",
    "AdjacencyRule",
    "BuildingCatalog",
    "BuildingDef",
    "CatalogError",
    "ColonyGame",
    "ColonyGrid",
    "ColonyState",
    "ColonyView",
    "CommandResult",
    "Countdown",
    "Difficulty",
    "GameConfig",
    "GameResult",
    "GridCell",
    "JsonScoreStore",
    "MemoryScoreStore",
    "PlacedBuilding",
    "Rejection",
    "ResourceRates",
    "SchedulerState",
    "ScoreBreakdown",
    "ScoreStore",
    "SignalBus",
    "SpecialProduction",
    "SpecialProductionTimers",
    "Stockpile",
    "StockpileHelper",
    "TickContext",
    "TickScheduler",
    "active_adjacency_positions",
    "adjacency_info",
    "calculate_rates",
    "calculate_score",
    "default_catalog",
    "format_score",
    "load_catalog",
    "make_economy_system",
    "rank_title",
    "refund_for",
    "score_rank",
]
