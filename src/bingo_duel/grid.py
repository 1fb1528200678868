"""Single-player 5x5 board: layout, marking and line counting."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Tuple

from .rng import RandomSource
from .verify import CELL_COUNT, assert_valid_layout

GRID_SIZE = 5


class PlayerId(IntEnum):
    PLAYER_1 = 1
    PLAYER_2 = 2

    def other(self) -> "PlayerId":
        return PlayerId.PLAYER_2 if self is PlayerId.PLAYER_1 else PlayerId.PLAYER_1

    @property
    def label(self) -> str:
        return f"Player {self.value}"


@dataclass
class Cell:
    number: int
    row: int
    col: int
    marked: bool = False

    @property
    def position(self) -> int:
        return self.row * GRID_SIZE + self.col


@dataclass
class Grid:
    owner_id: PlayerId
    cells: List[Cell]
    cells_by_number: Dict[int, int]

    def numbers(self) -> List[int]:
        return [cell.number for cell in self.cells]

    def matrix(self) -> List[List[int]]:
        nums = self.numbers()
        return [nums[r * GRID_SIZE:(r + 1) * GRID_SIZE] for r in range(GRID_SIZE)]

    def row(self, r: int) -> List[Cell]:
        return self.cells[r * GRID_SIZE:(r + 1) * GRID_SIZE]

    def col(self, c: int) -> List[Cell]:
        return self.cells[c::GRID_SIZE]

    def marked_numbers(self) -> List[int]:
        return sorted(cell.number for cell in self.cells if cell.marked)


def create_grid(owner_id: PlayerId, rng: RandomSource) -> Grid:
    """Lay out a shuffled 1..25 row-major, all cells unmarked."""
    numbers = list(range(1, CELL_COUNT + 1))
    rng.shuffle(numbers)
    cells = [
        Cell(number=num, row=pos // GRID_SIZE, col=pos % GRID_SIZE)
        for pos, num in enumerate(numbers)
    ]
    cells_by_number = {cell.number: cell.position for cell in cells}
    assert_valid_layout(numbers, cells_by_number)
    return Grid(owner_id=owner_id, cells=cells, cells_by_number=cells_by_number)


def mark_number(grid: Grid, number: object) -> bool:
    """Mark ``number`` on the grid.

    Returns True only when a previously unmarked cell was marked. Numbers not on
    the grid (out of range, not an int) and repeat calls are no-ops.
    """
    # bools and floats would hash onto int keys
    if isinstance(number, bool) or not isinstance(number, int):
        return False
    idx = grid.cells_by_number.get(number)
    if idx is None:
        return False
    cell = grid.cells[idx]
    if cell.marked:
        return False
    cell.marked = True
    return True


def completed_lines(grid: Grid) -> List[Tuple[str, int]]:
    # diagonals never count
    lines: List[Tuple[str, int]] = []
    for r in range(GRID_SIZE):
        if all(cell.marked for cell in grid.row(r)):
            lines.append(("row", r))
    for c in range(GRID_SIZE):
        if all(cell.marked for cell in grid.col(c)):
            lines.append(("col", c))
    return lines


def count_completed_lines(grid: Grid) -> int:
    return len(completed_lines(grid))
