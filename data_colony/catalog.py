"""BuildingCatalog - read-only lookup of building definitions."""
from __future__ import annotations

import json
import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable

from data_colony.types import (
    COMMODITIES,
    RATE_KEYS,
    AdjacencyRule,
    BuildingDef,
    CatalogError,
    SpecialProduction,
)

logger = logging.getLogger(__name__)

# camelCase modifier keys as written in catalog files
_CAMEL_RATE_KEYS = {f"{c}Rate": key for c, key in RATE_KEYS.items()}


class BuildingCatalog:
    """Immutable building lookup, kept in load order."""

    def __init__(self, buildings: Iterable[BuildingDef]) -> None:
        self._buildings: dict[str, BuildingDef] = {}
        for building in buildings:
            if not isinstance(building, BuildingDef):
                raise CatalogError(f"expected BuildingDef, got {type(building).__name__}")
            if building.id in self._buildings:
                raise CatalogError(f"duplicate building id {building.id!r}")
            self._buildings[building.id] = building

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> BuildingCatalog:
        """Build a catalog from plain dicts (the JSON catalog shape)."""
        catalog = cls(_parse_building(record) for record in records)
        logger.info("Loaded %d building types", len(catalog))
        return catalog

    def get_building(self, building_id: str) -> BuildingDef | None:
        return self._buildings.get(building_id)

    def get_all_buildings(self) -> list[BuildingDef]:
        return list(self._buildings.values())

    def get_buildings_by_filter(
        self, predicate: Callable[[BuildingDef], bool]
    ) -> list[BuildingDef]:
        return [b for b in self._buildings.values() if predicate(b)]

    def has_building(self, building_id: str) -> bool:
        return building_id in self._buildings

    def with_cost_multiplier(self, multiplier: float) -> BuildingCatalog:
        """Return a new catalog with every cost entry scaled and rounded up."""
        if multiplier <= 0:
            raise ValueError(f"multiplier must be > 0, got {multiplier}")
        if multiplier == 1:
            return self
        return BuildingCatalog(
            replace(b, cost={k: math.ceil(v * multiplier) for k, v in b.cost.items()})
            for b in self._buildings.values()
        )

    def __len__(self) -> int:
        return len(self._buildings)

    def __contains__(self, building_id: object) -> bool:
        return building_id in self._buildings


def load_catalog(path: str | Path) -> BuildingCatalog:
    """Read a JSON list of building records. Raises CatalogError if malformed."""
    try:
        records = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise CatalogError(f"{path}: invalid JSON: {exc}") from exc
    if not isinstance(records, list):
        raise CatalogError(f"{path}: expected a list of buildings")
    return BuildingCatalog.from_records(records)


def _pick(record: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in record:
            return record[key]
    return default


def _amounts(record: Mapping[str, Any], key: str, building_id: str) -> dict[str, float]:
    raw = record.get(key) or {}
    if not isinstance(raw, Mapping):
        raise CatalogError(f"{building_id}: {key} must be a mapping")
    amounts: dict[str, float] = {}
    for commodity, amount in raw.items():
        if commodity not in COMMODITIES:
            raise CatalogError(f"{building_id}: unknown commodity {commodity!r} in {key}")
        if not isinstance(amount, (int, float)) or isinstance(amount, bool):
            raise CatalogError(f"{building_id}: {key}[{commodity}] must be a number")
        amounts[commodity] = amount
    return amounts


def _parse_rule(raw: Any, building_id: str) -> AdjacencyRule:
    if not isinstance(raw, Mapping):
        raise CatalogError(f"{building_id}: adjacency rule must be a mapping")
    target = _pick(raw, "targetBuildingId", "target")
    if not isinstance(target, str) or not target:
        raise CatalogError(f"{building_id}: adjacency rule needs a target building id")
    raw_modifier = raw.get("modifier") or {}
    if not isinstance(raw_modifier, Mapping):
        raise CatalogError(f"{building_id}: adjacency modifier must be a mapping")
    modifier: dict[str, float] = {}
    for key, value in raw_modifier.items():
        norm = _CAMEL_RATE_KEYS.get(key, key)
        if norm not in RATE_KEYS.values():
            raise CatalogError(f"{building_id}: unknown adjacency modifier {key!r}")
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise CatalogError(f"{building_id}: modifier {key!r} must be a number")
        modifier[norm] = value
    return AdjacencyRule(
        target=target,
        modifier=modifier,
        description=raw.get("description") or "",
    )


def _parse_special(raw: Any, building_id: str) -> SpecialProduction | None:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise CatalogError(f"{building_id}: special production must be a mapping")
    try:
        return SpecialProduction(
            resource=_pick(raw, "resourceType", "resource"),
            amount=raw["amount"],
            interval=raw["interval"],
        )
    except KeyError as exc:
        raise CatalogError(f"{building_id}: special production missing {exc}") from exc


def _parse_building(record: Mapping[str, Any]) -> BuildingDef:
    if not isinstance(record, Mapping):
        raise CatalogError("building record must be a mapping")
    building_id = record.get("id")
    if not isinstance(building_id, str) or not building_id:
        raise CatalogError("building record needs a non-empty string id")
    rules_raw = _pick(record, "adjacencyRules", "adjacency_rules", default=[]) or []
    if not isinstance(rules_raw, list):
        raise CatalogError(f"{building_id}: adjacency rules must be a list")
    return BuildingDef(
        id=building_id,
        name=record.get("name") or building_id,
        icon=record.get("icon") or "",
        description=record.get("description") or "",
        cost=_amounts(record, "cost", building_id),
        production=_amounts(record, "production", building_id),
        consumption=_amounts(record, "consumption", building_id),
        adjacency_rules=tuple(_parse_rule(r, building_id) for r in rules_raw),
        special_production=_parse_special(
            _pick(record, "specialProduction", "special_production"), building_id
        ),
    )
