"""Bundled building definitions."""
from __future__ import annotations

from typing import Any

from data_colony.catalog import BuildingCatalog

BUILDING_RECORDS: list[dict[str, Any]] = [
    {
        "id": "compute_node",
        "name": "Compute Node",
        "icon": "🖥️",
        "description": "Generates CPU cycles.",
        "cost": {"storage": 10},
        "production": {"cpu": 3},
        "adjacencyRules": [
            {
                "targetBuildingId": "cooling_unit",
                "modifier": {"cpuRate": 0.5},
                "description": "+50% CPU from cooling",
            },
        ],
    },
    {
        "id": "storage_array",
        "name": "Storage Array",
        "icon": "💾",
        "description": "Provides storage capacity.",
        "cost": {"cpu": 15},
        "production": {"storage": 2},
        "consumption": {"cpu": 1},
        "adjacencyRules": [
            {
                "targetBuildingId": "compute_node",
                "modifier": {"storageRate": 1},
                "description": "+1 storage next to compute",
            },
        ],
    },
    {
        "id": "etl_pipeline",
        "name": "ETL Pipeline",
        "icon": "🔄",
        "description": "Moves data through the colony.",
        "cost": {"cpu": 25, "storage": 15},
        "production": {"throughput": 2},
        "consumption": {"cpu": 1, "storage": 1},
        "adjacencyRules": [
            {
                "targetBuildingId": "storage_array",
                "modifier": {"throughputRate": 0.5},
                "description": "+50% throughput near storage",
            },
        ],
    },
    {
        "id": "quality_checker",
        "name": "Quality Checker",
        "icon": "✅",
        "description": "Validates data and raises quality.",
        "cost": {"cpu": 30, "storage": 10},
        "production": {"quality": 1},
        "consumption": {"throughput": 1},
        "adjacencyRules": [
            {
                "targetBuildingId": "etl_pipeline",
                "modifier": {"qualityRate": 1},
                "description": "+1 quality per pipeline",
            },
        ],
    },
    {
        "id": "cooling_unit",
        "name": "Cooling Unit",
        "icon": "❄️",
        "description": "Boosts neighbouring compute nodes.",
        "cost": {"storage": 20},
        "consumption": {"cpu": 0.5},
    },
    {
        "id": "service_gateway",
        "name": "Service Gateway",
        "icon": "🚀",
        "description": "Ships a finished data service every 10 seconds.",
        "cost": {"cpu": 50, "storage": 30, "quality": 5},
        "consumption": {"throughput": 2, "quality": 0.5},
        "adjacencyRules": [
            {
                "targetBuildingId": "quality_checker",
                "modifier": {"qualityRate": 0.5},
                "description": "+0.5 quality from validation",
            },
        ],
        "specialProduction": {"resourceType": "services", "amount": 1, "interval": 10},
    },
]

BUILDING_IDS = [record["id"] for record in BUILDING_RECORDS]


def default_catalog() -> BuildingCatalog:
    """Create and return the bundled building catalog."""
    return BuildingCatalog.from_records(BUILDING_RECORDS)
