"""Tests for the per-tick systems."""
from __future__ import annotations

from data_colony import (
    BuildingCatalog,
    BuildingDef,
    ColonyGrid,
    ColonyState,
    Countdown,
    ResourceRates,
    SpecialProduction,
    SpecialProductionTimers,
    TickContext,
    TickScheduler,
    make_economy_system,
)


def ctx(tick: int = 1, interval: float = 1000) -> TickContext:
    return TickContext(tick_number=tick, interval=interval, elapsed=tick * interval, request_stop=lambda: None)


def make_colony(*buildings: BuildingDef, **stocks: float) -> ColonyState:
    return ColonyState(BuildingCatalog(buildings), ColonyGrid(5), stocks)


class TestEconomySystem:
    def test_writes_rates_and_applies_them(self) -> None:
        colony = make_colony(BuildingDef(id="node", production={"cpu": 3}), cpu=0)
        colony.place("node", (0, 0))
        system = make_economy_system(colony)
        system(ctx())
        assert colony.rates == ResourceRates(cpu=3)
        assert colony.stocks["cpu"] == 3
        system(ctx(2))
        assert colony.stocks["cpu"] == 6

    def test_stalls_per_commodity(self) -> None:
        colony = make_colony(
            BuildingDef(id="etl", production={"throughput": 2}, consumption={"cpu": 5}),
            cpu=3,
        )
        colony.place("etl", (0, 0))
        system = make_economy_system(colony)
        system(ctx())
        assert colony.stocks["cpu"] == 0
        assert colony.stocks["throughput"] == 2
        system(ctx(2))
        assert colony.stocks["cpu"] == 0
        assert colony.stocks["throughput"] == 4

    def test_stocks_never_negative_over_many_ticks(self) -> None:
        colony = make_colony(
            BuildingDef(id="sink", consumption={"cpu": 7, "storage": 1, "quality": 2, "throughput": 3}),
            cpu=20, storage=2, quality=1, throughput=50,
        )
        colony.place("sink", (0, 0))
        colony.place("sink", (1, 0))
        system = make_economy_system(colony)
        for tick in range(1, 30):
            system(ctx(tick))
            assert all(v >= 0 for v in colony.stocks.values())

    def test_on_applied_hook(self) -> None:
        colony = make_colony()
        seen = []
        system = make_economy_system(colony, on_applied=lambda c, r: seen.append((c.tick_number, r)))
        system(ctx(4))
        assert seen == [(4, ResourceRates())]

    def test_as_scheduler_callback(self) -> None:
        colony = make_colony(BuildingDef(id="node", production={"storage": 1.5}))
        colony.place("node", (2, 2))
        scheduler = TickScheduler(interval=100)
        scheduler.on_tick(make_economy_system(colony))
        scheduler.start()
        scheduler.advance(400)
        assert colony.stocks["storage"] == 6


class TestSpecialProduction:
    gateway = BuildingDef(id="gateway", special_production=SpecialProduction("services", 1, 3))
    miner = BuildingDef(id="miner", special_production=SpecialProduction("quality", 2.5, 2))

    def test_services_every_interval(self) -> None:
        colony = make_colony(self.gateway)
        colony.place("gateway", (0, 0))
        timers = SpecialProductionTimers(colony)
        for tick in range(1, 7):
            timers(ctx(tick))
        assert colony.services_produced == 2

    def test_each_building_counts_separately(self) -> None:
        colony = make_colony(self.gateway)
        colony.place("gateway", (0, 0))
        timers = SpecialProductionTimers(colony)
        timers(ctx(1))
        colony.place("gateway", (1, 0))
        timers(ctx(2))
        timers(ctx(3))
        assert colony.services_produced == 1
        assert timers.elapsed_at((1, 0)) == 2
        timers(ctx(4))
        assert colony.services_produced == 2

    def test_commodity_output(self) -> None:
        colony = make_colony(self.miner)
        colony.place("miner", (0, 0))
        timers = SpecialProductionTimers(colony)
        for tick in range(1, 5):
            timers(ctx(tick))
        assert colony.stocks["quality"] == 5

    def test_removal_discards_progress(self) -> None:
        colony = make_colony(self.gateway)
        colony.place("gateway", (0, 0))
        timers = SpecialProductionTimers(colony)
        timers(ctx(1))
        timers(ctx(2))
        colony.remove((0, 0))
        timers(ctx(3))
        assert timers.elapsed_at((0, 0)) == 0
        colony.place("gateway", (0, 0))
        timers(ctx(4))
        timers(ctx(5))
        assert colony.services_produced == 0

    def test_replaced_building_starts_from_zero(self) -> None:
        colony = make_colony(self.gateway)
        colony.place("gateway", (0, 0))
        timers = SpecialProductionTimers(colony)
        timers(ctx(1))
        timers(ctx(2))
        colony.remove((0, 0))
        colony.place("gateway", (0, 0))
        timers(ctx(3))
        assert colony.services_produced == 0
        assert timers.elapsed_at((0, 0)) == 1
        timers(ctx(4))
        timers(ctx(5))
        assert colony.services_produced == 1

    def test_short_ticks_reach_interval_exactly(self) -> None:
        colony = make_colony(BuildingDef(id="beacon", special_production=SpecialProduction("services", 1, 1)))
        colony.place("beacon", (0, 0))
        timers = SpecialProductionTimers(colony)
        for tick in range(1, 11):
            timers(ctx(tick, interval=100))
        assert colony.services_produced == 1
        assert timers.elapsed_at((0, 0)) == 0

    def test_interval_uses_tick_length(self) -> None:
        colony = make_colony(self.gateway)
        colony.place("gateway", (0, 0))
        timers = SpecialProductionTimers(colony)
        timers(ctx(1, interval=3000))
        assert colony.services_produced == 1

    def test_reset(self) -> None:
        colony = make_colony(self.gateway)
        colony.place("gateway", (0, 0))
        timers = SpecialProductionTimers(colony)
        timers(ctx(1))
        timers.reset()
        assert timers.elapsed_at((0, 0)) == 0


class TestCountdown:
    def test_expires_once(self) -> None:
        fired = []
        countdown = Countdown(3, on_expire=lambda c: fired.append(c.tick_number))
        for tick in range(1, 6):
            countdown(ctx(tick))
        assert fired == [3]
        assert countdown.remaining == 0
        assert countdown.expired

    def test_short_ticks_expire_on_exact_tick(self) -> None:
        fired = []
        countdown = Countdown(1, on_expire=lambda c: fired.append(c.tick_number))
        for tick in range(1, 13):
            countdown(ctx(tick, interval=100))
        assert fired == [10]
        assert countdown.remaining == 0

    def test_remaining_in_seconds(self) -> None:
        countdown = Countdown(2, on_expire=lambda c: None)
        countdown(ctx(1, interval=500))
        assert countdown.remaining == 1.5

    def test_clamps_at_zero(self) -> None:
        countdown = Countdown(1, on_expire=lambda c: None)
        countdown(ctx(1, interval=2500))
        assert countdown.remaining == 0

    def test_reset(self) -> None:
        countdown = Countdown(2, on_expire=lambda c: None)
        countdown(ctx(1))
        countdown(ctx(2))
        countdown.reset()
        assert countdown.remaining == 2
        assert not countdown.expired
