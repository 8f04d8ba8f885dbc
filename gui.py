# gui.py

from __future__ import annotations

from typing import Dict, List, Tuple

import pygame

from board import BOARD_ROWS, BOARD_COLS, BOARD_LAYOUT, RESERVED, Grid, is_blocked

CELL_SIZE = 64
TOP_BAR_HEIGHT = 120

WINDOW_WIDTH = BOARD_COLS * CELL_SIZE
WINDOW_HEIGHT = BOARD_ROWS * CELL_SIZE + TOP_BAR_HEIGHT

# Colors – higher contrast, refined dark mode
BG = (15, 15, 17)
CARD_BG = (30, 30, 34)
GRID = (90, 90, 95)
TEXT_MAIN = (245, 245, 250)
TEXT_SECONDARY = (230, 230, 235)
ILLEGAL = (45, 45, 49)

DATE_BORDER = (220, 90, 90)

PIECE_COLORS: Dict[int, Tuple[int, int, int]] = {
    1: (170, 90, 230),   # purple
    2: (60, 210, 220),   # cyan U
    3: (45, 120, 255),   # blue chunky L
    4: (60, 200, 80),    # green tall
    5: (255, 190, 60),   # big L
    6: (250, 170, 130),  # peach zig
    7: (120, 190, 255),  # light blue long L
    8: (255, 140, 200),  # pink double bar
}

MENU_BUTTONS = [
    ("Solve Today", "solve_today"),
    ("Pick a Date", "pick_date"),
]


def pieces_in(solution: Grid) -> List[int]:
    """Piece ids present in a solution grid, ascending."""
    return sorted({v for row in solution for v in row if v > 0})


def cell_rect(r: int, c: int, offset: Tuple[int, int] = (0, 0)) -> Tuple[int, int, int, int]:
    sx, sy = offset
    x = c * CELL_SIZE + sx
    y = TOP_BAR_HEIGHT + r * CELL_SIZE + sy
    return (x + 2, y + 2, CELL_SIZE - 4, CELL_SIZE - 4)


def _blit_centered(screen: pygame.Surface, surf: pygame.Surface, rect: pygame.Rect):
    screen.blit(
        surf,
        (
            rect.x + (rect.width - surf.get_width()) // 2,
            rect.y + (rect.height - surf.get_height()) // 2,
        ),
    )


def draw_top_bar(
    screen: pygame.Surface,
    title_font: pygame.font.Font,
    label_font: pygame.font.Font,
    current_idx: int,
    total_solutions: int,
    month: str,
    day: str,
    elapsed: float | None = None,
):
    pygame.draw.rect(screen, BG, (0, 0, WINDOW_WIDTH, TOP_BAR_HEIGHT))

    card_rect = pygame.Rect(16, 16, WINDOW_WIDTH - 32, TOP_BAR_HEIGHT - 32)
    pygame.draw.rect(screen, CARD_BG, card_rect, border_radius=16)

    title_surf = title_font.render("Calendar Puzzle", True, TEXT_MAIN)
    screen.blit(title_surf, (card_rect.x + 20, card_rect.y + 12))

    date_surf = label_font.render(f"{month.title()} {day}", True, TEXT_MAIN)
    date_x = card_rect.right - date_surf.get_width() - 20
    screen.blit(date_surf, (date_x, card_rect.y + 12))

    if total_solutions:
        sol_text = f"Solution {current_idx + 1} of {total_solutions}"
    else:
        sol_text = "No solution"
    if elapsed is not None:
        sol_text += f"  ·  {elapsed:.2f}s"
    sol_surf = label_font.render(sol_text, True, TEXT_SECONDARY)
    screen.blit(sol_surf, (card_rect.x + 20, card_rect.y + 48))


def draw_solution_grid(
    screen: pygame.Surface,
    cell_font: pygame.font.Font,
    solution: Grid | None,
    visible_pieces: set[int] | None = None,
    shake_offset: Tuple[int, int] = (0, 0),
    date_cells: set[Tuple[int, int]] | None = None,
):
    """
    Draws the board.
    visible_pieces: piece ids to draw. If None, draw all.
    date_cells: reserved date cells when there is no solution to read them from.
    """
    for r in range(BOARD_ROWS):
        for c in range(BOARD_COLS):
            rect = pygame.Rect(cell_rect(r, c, shake_offset))

            if is_blocked(r, c):
                pygame.draw.rect(screen, ILLEGAL, rect, border_radius=12)
                continue

            value = solution[r][c] if solution is not None else 0
            is_date = value == RESERVED or (date_cells is not None and (r, c) in date_cells)

            if is_date:
                pygame.draw.rect(screen, BG, rect, border_radius=12)
                pygame.draw.rect(screen, DATE_BORDER, rect, width=2, border_radius=12)
                text_surf = cell_font.render(BOARD_LAYOUT[r][c], True, TEXT_MAIN)
                _blit_centered(screen, text_surf, rect)
                continue

            if value > 0 and (visible_pieces is None or value in visible_pieces):
                pygame.draw.rect(screen, PIECE_COLORS[value], rect, border_radius=12)
                text_surf = cell_font.render(str(value), True, (255, 255, 255))
                _blit_centered(screen, text_surf, rect)
            else:
                # Empty playable cell
                pygame.draw.rect(screen, BG, rect, border_radius=12)
                pygame.draw.rect(screen, GRID, rect, width=1, border_radius=12)


def _menu_rects(screen_size: Tuple[int, int]) -> List[Tuple[pygame.Rect, str, str]]:
    w, h = screen_size
    start_y = h // 2
    button_height = 60
    spacing = 20
    button_width = min(400, w - 80)
    return [
        (
            pygame.Rect((w - button_width) // 2, start_y + i * (button_height + spacing), button_width, button_height),
            text,
            action,
        )
        for i, (text, action) in enumerate(MENU_BUTTONS)
    ]


def draw_menu(screen: pygame.Surface, title_font: pygame.font.Font, button_font: pygame.font.Font):
    screen.fill(BG)
    w, h = screen.get_size()

    title_surf = title_font.render("Calendar Puzzle", True, TEXT_MAIN)
    title_rect = title_surf.get_rect(center=(w // 2, h // 4))
    screen.blit(title_surf, title_rect)

    mouse_pos = pygame.mouse.get_pos()
    for rect, text, _ in _menu_rects((w, h)):
        color = (50, 50, 55) if rect.collidepoint(mouse_pos) else CARD_BG
        pygame.draw.rect(screen, color, rect, border_radius=12)
        pygame.draw.rect(screen, GRID, rect, width=1, border_radius=12)

        label = button_font.render(text, True, TEXT_MAIN)
        screen.blit(label, label.get_rect(center=rect.center))


def get_menu_action(mouse_pos: Tuple[int, int], screen_size: Tuple[int, int] = (WINDOW_WIDTH, WINDOW_HEIGHT)) -> str | None:
    for rect, _, action in _menu_rects(screen_size):
        if rect.collidepoint(mouse_pos):
            return action
    return None
