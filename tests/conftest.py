from __future__ import annotations

from typing import List

import pytest

from bingo_duel.game import GameListener
from bingo_duel.grid import PlayerId


def identity_layout() -> List[int]:
    return list(range(1, 26))


def latin_layout() -> List[int]:
    """Number ``5r+c+1`` (row r, col c of the identity board) sits at row c, col (r+c)%5.

    No row or column of the identity board is a row or column here, so calling
    any four identity rows completes nothing on this board.
    """
    layout = [0] * 25
    for r in range(5):
        for c in range(5):
            layout[c * 5 + (r + c) % 5] = r * 5 + c + 1
    return layout


class RecordingListener(GameListener):
    def __init__(self) -> None:
        self.events: List[tuple] = []

    def on_reset(self) -> None:
        self.events.append(("reset",))

    def on_turn_changed(self, current_turn: PlayerId) -> None:
        self.events.append(("turn", current_turn))

    def on_score_changed(self, p1_lines: int, p2_lines: int) -> None:
        self.events.append(("score", p1_lines, p2_lines))

    def on_game_over(self, winner: PlayerId) -> None:
        self.events.append(("over", winner))


@pytest.fixture
def recorder() -> RecordingListener:
    return RecordingListener()
