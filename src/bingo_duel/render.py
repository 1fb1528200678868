"""Terminal presentation. Renders what the controller reports, holds no rules."""

from __future__ import annotations

from rich.columns import Columns
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .game import GameListener, GameState
from .grid import GRID_SIZE, Grid, PlayerId
from .score import score_label


def grid_table(grid: Grid) -> Table:
    table = Table(show_header=False, box=None, padding=(0, 1))
    for _ in range(GRID_SIZE):
        table.add_column(justify="right", width=3)
    for r in range(GRID_SIZE):
        cells = []
        for cell in grid.row(r):
            if cell.marked:
                cells.append(f"[reverse]{cell.number:>2}[/reverse]")
            else:
                cells.append(f"{cell.number:>2}")
        table.add_row(*cells)
    return table


def render_boards(console: Console, state: GameState, p1_lines: int = 0, p2_lines: int = 0) -> None:
    lines = {PlayerId.PLAYER_1: p1_lines, PlayerId.PLAYER_2: p2_lines}
    panels = []
    for player in PlayerId:
        active = not state.is_over and state.current_turn is player
        title = player.label + (" *" if active else "")
        panels.append(
            Panel(
                grid_table(state.grids[player]),
                title=title,
                subtitle=score_label(lines[player]) or "-",
                border_style="green" if active else "dim",
            )
        )
    console.print(Columns(panels))


class ConsoleListener(GameListener):
    def __init__(self, console: Console):
        self.console = console
        self.scores = (0, 0)

    def on_reset(self) -> None:
        self.scores = (0, 0)
        self.console.rule("New game")

    def on_turn_changed(self, current_turn: PlayerId) -> None:
        self.console.print(f"{current_turn.label}'s turn")

    def on_score_changed(self, p1_lines: int, p2_lines: int) -> None:
        self.scores = (p1_lines, p2_lines)

    def on_game_over(self, winner: PlayerId) -> None:
        self.console.print(Panel(f"[bold]{winner.label.upper()} WINS![/bold]", border_style="magenta"))
