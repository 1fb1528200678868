from __future__ import annotations

from typing import Tuple

WIN_LINES = 5
MAX_DISPLAY_LINES = 5

# Index 0 = no lines, index 5 = bingo
BINGO_STEPS: Tuple[str, ...] = ("", "B", "B I", "B I N", "B I N G", "B I N G O")


def clamp_score(lines: int) -> int:
    """Clamp a raw line count (0..10) to the displayable 0..5 range."""
    return max(0, min(MAX_DISPLAY_LINES, lines))


def score_label(lines: int) -> str:
    return BINGO_STEPS[clamp_score(lines)]
