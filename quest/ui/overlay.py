# quest/ui/overlay.py
from __future__ import annotations

from typing import Mapping, Optional

import pygame

from quest.dialogue.defs import DialogueDef
from quest.scene.snapshot import SceneSnapshot
from quest.ui.theme import THEME


def wrap_text(font: pygame.font.Font, text: str, max_width: int) -> list[str]:
    """Greedy word wrap against the rendered width."""
    words = (text or "").split(" ")
    lines: list[str] = []
    current = ""

    for w in words:
        test = (current + " " + w).strip()
        if font.size(test)[0] > max_width and current:
            lines.append(current)
            current = w
        else:
            current = test
    if current:
        lines.append(current)
    return lines


class SceneOverlay:
    """
    Draw-only overlay: inventory panel + dialogue boxes.

    Laws:
      - No simulation authority.
      - Reads a SceneSnapshot; never touches inventory/dialogue state.
    """

    def __init__(self) -> None:
        self._font_body: Optional[pygame.font.Font] = None
        self._font_list: Optional[pygame.font.Font] = None
        self._font_bold: Optional[pygame.font.Font] = None

    def _fonts(self) -> tuple[pygame.font.Font, pygame.font.Font, pygame.font.Font]:
        if self._font_body is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font_body = pygame.font.SysFont(THEME.font_name, THEME.font_size_body)
            self._font_list = pygame.font.SysFont(THEME.font_name, THEME.font_size_list)
            self._font_bold = pygame.font.SysFont(THEME.font_name, THEME.font_size_list, bold=True)
        return self._font_body, self._font_list, self._font_bold

    def draw(
        self,
        screen: pygame.Surface,
        snapshot: SceneSnapshot,
        dialogues: Mapping[str, DialogueDef],
    ) -> None:
        self.draw_inventory(screen, snapshot.inventory)

        # Stack upwards from the bottom anchor if several are up at once.
        bottom = screen.get_height() - THEME.dialog_bottom
        for dialogue_id in snapshot.visible_dialogues():
            d = dialogues.get(dialogue_id)
            if d is None:
                continue
            rect = self.draw_dialogue(screen, d, bottom=bottom)
            bottom = rect.top - THEME.dialog_gap

    # ------------------------------------------------------------------
    # Inventory panel (top-right)
    # ------------------------------------------------------------------

    def draw_inventory(self, screen: pygame.Surface, items: tuple[str, ...]) -> pygame.Rect:
        _, font_list, font_bold = self._fonts()

        header = font_bold.render("Inventory:", True, THEME.inventory_header)
        rows = [font_bold.render(f"- {name}", True, THEME.inventory_item) for name in items]

        line_h = font_list.get_linesize()
        w = max([header.get_width()] + [r.get_width() for r in rows])
        w = max(THEME.inventory_min_w, w + THEME.inventory_pad_x * 2)
        h = THEME.inventory_pad_y * 2 + line_h * (1 + len(rows))

        rect = pygame.Rect(0, 0, w, h)
        rect.topright = (screen.get_width() - THEME.inventory_margin, THEME.inventory_margin)

        panel = pygame.Surface(rect.size, pygame.SRCALPHA)
        pygame.draw.rect(panel, THEME.inventory_fill, panel.get_rect(), border_radius=THEME.inventory_radius)
        screen.blit(panel, rect.topleft)

        x = rect.x + THEME.inventory_pad_x
        y = rect.y + THEME.inventory_pad_y
        screen.blit(header, (x, y))
        for row in rows:
            y += line_h
            screen.blit(row, (x + 8, y))
        return rect

    # ------------------------------------------------------------------
    # Dialogue boxes (bottom-centre)
    # ------------------------------------------------------------------

    def draw_dialogue(self, screen: pygame.Surface, d: DialogueDef, *, bottom: int) -> pygame.Rect:
        font_body, _, _ = self._fonts()

        if d.style == "light":
            fill, fg = THEME.dialog_light_fill, THEME.dialog_light_text
        else:
            fill, fg = THEME.dialog_dark_fill, THEME.dialog_dark_text

        pad = THEME.dialog_pad
        max_text_w = min(THEME.dialog_max_w, screen.get_width() - pad * 4)
        lines = wrap_text(font_body, d.text, max_text_w)
        surfs = [font_body.render(line, True, fg) for line in lines]

        line_h = font_body.get_linesize()
        text_w = max((s.get_width() for s in surfs), default=0)
        rect = pygame.Rect(0, 0, text_w + pad * 2, line_h * max(1, len(surfs)) + pad * 2)
        rect.midbottom = (screen.get_width() // 2, bottom)

        panel = pygame.Surface(rect.size, pygame.SRCALPHA)
        pygame.draw.rect(panel, fill, panel.get_rect(), border_radius=THEME.dialog_radius)
        screen.blit(panel, rect.topleft)

        for i, s in enumerate(surfs):
            screen.blit(s, (rect.x + pad, rect.y + pad + i * line_h))
        return rect
