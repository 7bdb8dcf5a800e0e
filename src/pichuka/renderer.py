"""pygame drawing of session snapshots.

Shared by the interactive engine and the Gymnasium environment. The world
layer (sky, gates, ground, flyer) is kept separate from the HUD layer
(scoreboard and overlay message) so observations can skip text.
"""

import pygame

from .session import Snapshot


# Colors (RGB)
COLOR_SKY = (112, 197, 206)
COLOR_GATE = (115, 191, 46)
COLOR_GATE_EDGE = (84, 56, 71)
COLOR_GROUND = (222, 216, 149)
COLOR_GROUND_EDGE = (84, 56, 71)
COLOR_FLYER = (250, 200, 40)
COLOR_TEXT = (255, 255, 255)
COLOR_OVERLAY = (0, 0, 0, 140)

SCOREBOARD_FONT_SIZE = 28
OVERLAY_FONT_SIZE = 36

# Font objects die with pygame.quit(), so the cache is emptied then
_fonts = {}


def get_font(size: int) -> pygame.font.Font:
    """Default font at the given size, created once per pygame session."""
    font = _fonts.get(size)
    if font is None:
        if not _fonts:
            pygame.register_quit(_fonts.clear)
        font = pygame.font.Font(None, size)
        _fonts[size] = font
    return font


def draw_world(surface: pygame.Surface, snapshot: Snapshot) -> None:
    """Draw sky, gates, ground strip and flyer."""
    surface.fill(COLOR_SKY)
    field = snapshot.field

    for gate in snapshot.gates:
        top = pygame.Rect(int(gate.x), 0, int(gate.width), int(gate.top_height))
        bottom = pygame.Rect(int(gate.x), int(gate.bottom_y), int(gate.width), int(gate.bottom_height))
        for rect in (top, bottom):
            pygame.draw.rect(surface, COLOR_GATE, rect)
            pygame.draw.rect(surface, COLOR_GATE_EDGE, rect, width=2)

    ground = pygame.Rect(0, int(field.ground_y), int(field.width), int(field.ground_height) + 1)
    pygame.draw.rect(surface, COLOR_GROUND, ground)
    pygame.draw.line(surface, COLOR_GROUND_EDGE, (0, int(field.ground_y)), (int(field.width), int(field.ground_y)), 3)

    _draw_flyer(surface, snapshot)


def _draw_flyer(surface: pygame.Surface, snapshot: Snapshot) -> None:
    w = int(snapshot.field.flyer_width)
    h = int(snapshot.field.flyer_height)
    sprite = pygame.Surface((w, h), pygame.SRCALPHA)
    pygame.draw.ellipse(sprite, COLOR_FLYER, sprite.get_rect())
    # pygame rotates counter-clockwise; positive hint means nose down
    rotated = pygame.transform.rotate(sprite, -snapshot.flyer_rotation)
    center = (snapshot.flyer_x + w / 2, snapshot.flyer_y + h / 2)
    surface.blit(rotated, rotated.get_rect(center=(int(center[0]), int(center[1]))))


def draw_hud(surface: pygame.Surface, snapshot: Snapshot) -> None:
    """Draw the scoreboard and, outside PLAYING, the overlay message."""
    font = get_font(SCOREBOARD_FONT_SIZE)
    board = font.render(snapshot.scoreboard, True, COLOR_TEXT)
    surface.blit(board, board.get_rect(midtop=(surface.get_width() // 2, 10)))

    if snapshot.message:
        _draw_overlay(surface, snapshot.message)


def _draw_overlay(surface: pygame.Surface, message: str) -> None:
    backdrop = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    backdrop.fill(COLOR_OVERLAY)
    surface.blit(backdrop, (0, 0))

    font = get_font(OVERLAY_FONT_SIZE)
    lines = message.split("\n")
    line_height = font.get_linesize()
    cx = surface.get_width() // 2
    top = surface.get_height() // 2 - line_height * len(lines) // 2
    for i, line in enumerate(lines):
        text = font.render(line, True, COLOR_TEXT)
        surface.blit(text, text.get_rect(midtop=(cx, top + i * line_height)))


def draw_frame(surface: pygame.Surface, snapshot: Snapshot, hud: bool = True) -> None:
    draw_world(surface, snapshot)
    if hud:
        draw_hud(surface, snapshot)
