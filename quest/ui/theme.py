# quest/ui/theme.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

RGB = Tuple[int, int, int]
RGBA = Tuple[int, int, int, int]


@dataclass(frozen=True)
class OverlayTheme:
    """
    Centralized constants for the scene overlay.

    - Render-only values.
    - No pygame imports required.
    """

    # ---------- Inventory panel ----------
    inventory_fill: RGBA = (255, 255, 255, 230)
    inventory_header: RGB = (0, 0, 0)
    inventory_item: RGB = (255, 0, 0)
    inventory_margin: int = 20
    inventory_pad_x: int = 30
    inventory_pad_y: int = 20
    inventory_min_w: int = 180
    inventory_radius: int = 8

    # ---------- Dialogue boxes ----------
    dialog_dark_fill: RGBA = (0, 0, 0, 204)
    dialog_dark_text: RGB = (255, 255, 255)
    dialog_light_fill: RGBA = (252, 248, 248, 204)
    dialog_light_text: RGB = (0, 0, 0)
    dialog_bottom: int = 100
    dialog_pad: int = 20
    dialog_radius: int = 10
    dialog_max_w: int = 640
    dialog_gap: int = 12

    # ---------- Fonts ----------
    font_name: str = "consolas"
    font_size_body: int = 18
    font_size_list: int = 16


# Single shared theme instance (import and use directly if desired)
THEME = OverlayTheme()
