# quest/dialogue/defs.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


DialogueStyle = Literal["dark", "light"]

PICKUP_NOTICE_ID = "pickup_notice"


@dataclass(frozen=True)
class DialogueDef:
    id: str
    text: str
    style: DialogueStyle = "dark"
