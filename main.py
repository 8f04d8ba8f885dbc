from __future__ import annotations
import random
from typing import List

import pygame

from board import Grid, label_position
from config import setup_logging
from solver import SolveConfig, SolveResult, solve
from gui import (
    WINDOW_WIDTH, WINDOW_HEIGHT, TOP_BAR_HEIGHT, BG, TEXT_SECONDARY,
    draw_menu, get_menu_action,
    draw_top_bar, draw_solution_grid, pieces_in,
)
from ui_state import AppState, UIState

PIECE_DELAY = 0.15
SHAKE_DURATION = 0.1


def run_solve(month: str, day: int) -> SolveResult:
    print(f"Solving for {month} {day}...")
    return solve(month, day, SolveConfig.from_settings())


def main():
    setup_logging()
    pygame.init()
    screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT), pygame.RESIZABLE)
    pygame.display.set_caption("Calendar Puzzle")

    # Fonts
    title_font = pygame.font.SysFont("SF Pro Display", 32, bold=True)
    label_font = pygame.font.SysFont("SF Pro Text", 24)
    cell_font = pygame.font.SysFont("SF Pro Text", 22, bold=True)
    button_font = pygame.font.SysFont("SF Pro Text", 20)
    hint_font = pygame.font.SysFont("SF Pro Text", 16)

    clock = pygame.time.Clock()
    app_state = AppState()

    result: SolveResult | None = None
    solutions: List[Grid] = []
    current_sol_idx = 0
    next_sol_idx = 0

    # Animation State
    anim_phase = "IDLE"  # "IDLE", "REMOVING", "PLACING"
    visible_pieces: set[int] = set()
    pieces_sequence: List[int] = []
    current_piece_idx = 0
    piece_timer = 0.0
    shake_timer = 0.0

    def start_placing(idx: int):
        nonlocal anim_phase, visible_pieces, pieces_sequence, current_piece_idx, piece_timer
        anim_phase = "PLACING"
        visible_pieces = set()
        pieces_sequence = pieces_in(solutions[idx])
        current_piece_idx = 0
        piece_timer = 0.0

    def start_removing(target: int):
        nonlocal anim_phase, next_sol_idx, pieces_sequence, current_piece_idx, piece_timer
        next_sol_idx = target
        anim_phase = "REMOVING"
        # Remove in reverse order (8 -> 1)
        pieces_sequence = sorted(pieces_in(solutions[current_sol_idx]), reverse=True)
        current_piece_idx = 0
        piece_timer = 0.0

    def load(month: str, day: int):
        nonlocal result, solutions, current_sol_idx, anim_phase
        result = run_solve(month, day)
        solutions = result.solutions
        current_sol_idx = 0
        anim_phase = "IDLE"
        if solutions:
            start_placing(0)

    running = True
    while running:
        dt = clock.tick(60) / 1000.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)

            if app_state.current_state == UIState.MENU:
                if event.type == pygame.MOUSEBUTTONDOWN:
                    action = get_menu_action(event.pos, screen.get_size())
                    if action == "solve_today":
                        app_state = AppState()
                        app_state.current_state = UIState.SOLVE_TODAY
                        load(*app_state.selected_date)
                    elif action == "pick_date":
                        app_state.current_state = UIState.PICK_DATE
                        result, solutions = None, []

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    app_state.current_state = UIState.MENU
                    continue

                if app_state.current_state == UIState.PICK_DATE:
                    if event.key == pygame.K_UP:
                        app_state.step_day(1)
                    elif event.key == pygame.K_DOWN:
                        app_state.step_day(-1)
                    elif event.key == pygame.K_PAGEUP:
                        app_state.step_month(1)
                    elif event.key == pygame.K_PAGEDOWN:
                        app_state.step_month(-1)
                    elif event.key == pygame.K_RETURN:
                        load(*app_state.selected_date)
                    if event.key in (pygame.K_UP, pygame.K_DOWN, pygame.K_PAGEUP, pygame.K_PAGEDOWN):
                        result, solutions = None, []

                if solutions and anim_phase == "IDLE":
                    if event.key == pygame.K_RIGHT and current_sol_idx < len(solutions) - 1:
                        start_removing(current_sol_idx + 1)
                    elif event.key == pygame.K_LEFT and current_sol_idx > 0:
                        start_removing(current_sol_idx - 1)

        # Draw
        if app_state.current_state == UIState.MENU:
            draw_menu(screen, title_font, button_font)

        else:
            screen.fill(BG)
            month, day = app_state.selected_date
            draw_top_bar(
                screen, title_font, label_font, current_sol_idx, len(solutions),
                month, str(day), elapsed=result.elapsed if result else None,
            )

            if solutions:
                # --- UPDATE ANIMATION ---
                if anim_phase == "REMOVING":
                    piece_timer += dt
                    if piece_timer >= PIECE_DELAY * 0.4:  # Remove faster than place
                        piece_timer = 0.0
                        if current_piece_idx < len(pieces_sequence):
                            visible_pieces.discard(pieces_sequence[current_piece_idx])
                            current_piece_idx += 1
                        else:
                            current_sol_idx = next_sol_idx
                            start_placing(current_sol_idx)

                elif anim_phase == "PLACING":
                    piece_timer += dt
                    if piece_timer >= PIECE_DELAY:
                        piece_timer = 0.0
                        if current_piece_idx < len(pieces_sequence):
                            visible_pieces.add(pieces_sequence[current_piece_idx])
                            current_piece_idx += 1
                            shake_timer = SHAKE_DURATION
                        else:
                            anim_phase = "IDLE"

                shake_offset = (0, 0)
                if shake_timer > 0:
                    shake_timer -= dt
                    if shake_timer > 0:
                        shake_offset = (random.randint(-1, 1), random.randint(-1, 1))

                draw_solution_grid(
                    screen,
                    cell_font,
                    solutions[current_sol_idx],
                    visible_pieces=visible_pieces,
                    shake_offset=shake_offset,
                )
            else:
                date_cells = {label_position(month), label_position(str(day))}
                draw_solution_grid(screen, cell_font, None, date_cells={c for c in date_cells if c})
                if app_state.current_state == UIState.PICK_DATE:
                    hint = "Up/Down: day  PgUp/PgDn: month  Enter: solve"
                    hint_surf = hint_font.render(hint, True, TEXT_SECONDARY)
                    screen.blit(hint_surf, (36, TOP_BAR_HEIGHT - 26))

        pygame.display.flip()

    pygame.quit()

if __name__ == "__main__":
    main()
