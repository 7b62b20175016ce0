"""Data Colony: build a data-center colony on a small grid before time runs out."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import pygame

from data_colony import (
    DIFFICULTIES,
    ColonyGame,
    GameConfig,
    JsonScoreStore,
    MemoryScoreStore,
    SchedulerState,
)
from ui.constants import COLOR_ACCEPT, COLOR_BG, COLOR_REJECT, COLOR_TEXT_DIM, FPS, HUD_H, compute_layout
from ui.renderer import cell_at, draw_grid, draw_hud, draw_palette, draw_result


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--difficulty", choices=sorted(DIFFICULTIES), default="normal")
    parser.add_argument("--scores", type=Path, default=None,
                        help="JSON file for high score and games played (default: in memory)")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


class StatusLine:
    """Last command outcome, shown under the grid."""

    def __init__(self) -> None:
        self.text = "1-6 select, left click place, right click remove, space pause, R restart"
        self.color = COLOR_TEXT_DIM

    def on_signal(self, name: str, data: dict) -> None:
        if name == "rejected":
            self.text = f"Rejected: {data['reason'].value}"
            self.color = COLOR_REJECT
        elif name in ("placed", "removed"):
            self.text = f"{name.capitalize()} {data['building_id']} at {data['position']}"
            self.color = COLOR_ACCEPT


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    store = JsonScoreStore(args.scores) if args.scores else MemoryScoreStore()
    game = ColonyGame(GameConfig.for_difficulty(args.difficulty), score_store=store)
    status = StatusLine()
    for signal in ("placed", "removed", "rejected"):
        game.bus.subscribe(signal, status.on_signal)

    buildings = game.catalog.get_all_buildings()
    layout = compute_layout(game.grid.size)

    pygame.init()
    screen = pygame.display.set_mode((layout["screen_w"], layout["screen_h"]))
    pygame.display.set_caption(f"Data Colony ({args.difficulty})")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 14)
    big = pygame.font.SysFont("monospace", 32, bold=True)

    selected = 0
    game.start()
    running = True
    while running:
        elapsed = clock.tick(FPS)
        hover = cell_at(*pygame.mouse.get_pos(), game.grid.size)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_r:
                    game.restart()
                    game.start()
                elif event.key == pygame.K_SPACE and not game.is_over:
                    if game.scheduler.state is SchedulerState.PAUSED:
                        game.resume()
                    else:
                        game.pause()
                elif pygame.K_1 <= event.key <= pygame.K_9:
                    index = event.key - pygame.K_1
                    if index < len(buildings):
                        selected = index
            elif event.type == pygame.MOUSEBUTTONDOWN and hover is not None and not game.is_over:
                if event.button == 1:
                    game.place_building(buildings[selected].id, hover)
                elif event.button == 3:
                    game.remove_building(hover)

        game.advance(elapsed)

        view = game.observe()
        tooltip = game.adjacency_info(hover) if hover is not None else []
        screen.fill(COLOR_BG)
        draw_hud(screen, view, font)
        draw_grid(screen, game, view, font, hover)
        draw_palette(screen, buildings, selected, layout["grid_px"] + 12, font, tooltip)
        screen.blit(font.render(status.text, True, status.color), (8, HUD_H + layout["grid_px"] + 4))
        if game.result is not None:
            draw_result(screen, game.result, big, font)
        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
