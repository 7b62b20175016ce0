"""Layout and color constants."""
from __future__ import annotations

TILE_SIZE = 80
SIDEBAR_W = 240
HUD_H = 64
STATUS_H = 24
FPS = 60

COLOR_BG = (15, 23, 42)
COLOR_CELL = (30, 41, 59)
COLOR_CELL_HOVER = (51, 65, 85)
COLOR_GRID_LINE = (71, 85, 105)
COLOR_ACTIVE = (34, 197, 94)
COLOR_TEXT = (226, 232, 240)
COLOR_TEXT_DIM = (148, 163, 184)
COLOR_SELECTED = (59, 130, 246)
COLOR_ACCEPT = (100, 255, 100)
COLOR_REJECT = (255, 80, 80)

BUILDING_COLORS: dict[str, tuple[int, int, int]] = {
    "compute_node": (14, 165, 233),
    "storage_array": (168, 85, 247),
    "etl_pipeline": (234, 179, 8),
    "quality_checker": (34, 197, 94),
    "cooling_unit": (125, 211, 252),
    "service_gateway": (244, 63, 94),
}


def compute_layout(grid_size: int) -> dict[str, int]:
    """Compute window dimensions from grid size."""
    grid_px = grid_size * TILE_SIZE
    return {
        "grid_px": grid_px,
        "screen_w": grid_px + SIDEBAR_W,
        "screen_h": HUD_H + grid_px + STATUS_H,
    }
