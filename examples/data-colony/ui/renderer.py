"""Grid, palette, HUD and result rendering."""
from __future__ import annotations

import pygame

from data_colony import COMMODITIES, BuildingDef, ColonyGame, ColonyView, GameResult, format_score
from ui.constants import (
    BUILDING_COLORS,
    COLOR_ACTIVE,
    COLOR_CELL,
    COLOR_CELL_HOVER,
    COLOR_GRID_LINE,
    COLOR_SELECTED,
    COLOR_TEXT,
    COLOR_TEXT_DIM,
    HUD_H,
    TILE_SIZE,
)


def cell_at(px: int, py: int, grid_size: int) -> tuple[int, int] | None:
    """Map a window pixel to a grid coordinate, or None outside the grid."""
    gx, gy = px // TILE_SIZE, (py - HUD_H) // TILE_SIZE
    if py < HUD_H or not (0 <= gx < grid_size and 0 <= gy < grid_size):
        return None
    return (gx, gy)


def draw_grid(
    surface: pygame.Surface,
    game: ColonyGame,
    view: ColonyView,
    font: pygame.font.Font,
    hover: tuple[int, int] | None,
) -> None:
    size = game.grid.size
    for row in game.grid.cells():
        for cell in row:
            rect = pygame.Rect(cell.x * TILE_SIZE, HUD_H + cell.y * TILE_SIZE, TILE_SIZE, TILE_SIZE)
            color = COLOR_CELL_HOVER if cell.position == hover else COLOR_CELL
            if cell.building_id is not None:
                color = BUILDING_COLORS.get(cell.building_id, (200, 200, 200))
            pygame.draw.rect(surface, color, rect.inflate(-2, -2))
            if cell.position in view.active_positions:
                pygame.draw.rect(surface, COLOR_ACTIVE, rect.inflate(-4, -4), 3)
            if cell.building_id is not None:
                building = game.catalog.get_building(cell.building_id)
                label = font.render((building.name or building.id)[:8], True, (10, 10, 10))
                surface.blit(label, label.get_rect(center=rect.center))

    grid_px = size * TILE_SIZE
    for i in range(size + 1):
        pygame.draw.line(surface, COLOR_GRID_LINE, (i * TILE_SIZE, HUD_H), (i * TILE_SIZE, HUD_H + grid_px))
        pygame.draw.line(surface, COLOR_GRID_LINE, (0, HUD_H + i * TILE_SIZE), (grid_px, HUD_H + i * TILE_SIZE))


def draw_palette(
    surface: pygame.Surface,
    buildings: list[BuildingDef],
    selected: int,
    x0: int,
    font: pygame.font.Font,
    tooltip: list[str],
) -> None:
    y = HUD_H + 8
    surface.blit(font.render("Buildings", True, COLOR_TEXT), (x0, y))
    y += 24
    for i, building in enumerate(buildings):
        if i == selected:
            pygame.draw.rect(surface, COLOR_SELECTED, pygame.Rect(x0 - 4, y - 2, 228, 38), 1)
        swatch = pygame.Rect(x0, y + 2, 12, 12)
        pygame.draw.rect(surface, BUILDING_COLORS.get(building.id, (200, 200, 200)), swatch)
        surface.blit(font.render(f"[{i + 1}] {building.name}", True, COLOR_TEXT), (x0 + 18, y))
        cost = " ".join(f"{k}:{v:g}" for k, v in building.cost.items()) or "free"
        surface.blit(font.render(cost, True, COLOR_TEXT_DIM), (x0 + 18, y + 16))
        y += 42

    y += 8
    for line in tooltip:
        surface.blit(font.render(line, True, COLOR_ACTIVE), (x0, y))
        y += 18


def draw_hud(surface: pygame.Surface, view: ColonyView, font: pygame.font.Font) -> None:
    x = 8
    for name in COMMODITIES:
        amount = view.stocks[name]
        rate = view.rates.get(name)
        surface.blit(font.render(f"{name}: {amount:.0f}", True, COLOR_TEXT), (x, 8))
        surface.blit(font.render(f"{rate:+.1f}/tick", True, COLOR_TEXT_DIM), (x, 28))
        x += 130
    info = f"services: {view.services}   time: {view.time_remaining:.0f}s   tick: {view.tick_count}"
    surface.blit(font.render(info, True, COLOR_TEXT), (x, 8))
    if view.state.value == "paused":
        surface.blit(font.render("PAUSED (space)", True, COLOR_SELECTED), (x, 28))


def draw_result(surface: pygame.Surface, result: GameResult, big: pygame.font.Font, font: pygame.font.Font) -> None:
    overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, 180))
    surface.blit(overlay, (0, 0))
    cx = surface.get_width() // 2
    lines = [
        (big, f"Score {format_score(result.score.total)}"),
        (font, result.title),
        (font, f"services {result.score.services} x100  quality {result.score.quality} x10  "
               f"throughput {result.score.throughput}"),
        (font, "New high score!" if result.is_new_high_score else f"High score {format_score(result.high_score)}"),
        (font, f"Games played: {result.games_played}"),
        (font, "R to restart, Esc to quit"),
    ]
    y = surface.get_height() // 3
    for f, text in lines:
        rendered = f.render(text, True, COLOR_TEXT)
        surface.blit(rendered, rendered.get_rect(center=(cx, y)))
        y += rendered.get_height() + 12
