"""Two-player game controller: shared calls, independent boards."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .grid import Grid, PlayerId, count_completed_lines, create_grid, mark_number
from .rng import RandomSource, create_rng, derive_game_seed, entropy_seed
from .score import WIN_LINES, clamp_score
from .verify import layout_hash

logger = logging.getLogger(__name__)


class GameListener:
    """Presentation hooks. Override what you need; defaults do nothing."""

    def on_reset(self) -> None:
        pass

    def on_turn_changed(self, current_turn: PlayerId) -> None:
        pass

    def on_score_changed(self, p1_lines: int, p2_lines: int) -> None:
        pass

    def on_game_over(self, winner: PlayerId) -> None:
        pass


@dataclass
class GameState:
    grids: Dict[PlayerId, Grid]
    current_turn: PlayerId = PlayerId.PLAYER_1
    is_over: bool = False
    winner: Optional[PlayerId] = None
    # numbers that marked at least one board, in call order
    calls: List[int] = field(default_factory=list)
    game_index: int = 0
    seed: Optional[int] = None

    def grid(self, player: PlayerId) -> Grid:
        return self.grids[player]


@dataclass
class CallResult:
    """Outcome of one call. Line counts are raw (0..10), not display-clamped."""

    state: GameState
    p1_lines: int
    p2_lines: int
    accepted: bool


class GameController:
    """Owns the game state and drives turns and the win condition.

    Pass ``rng`` to control grid layouts directly (both grids are drawn from it,
    Player 1 first). Otherwise each game derives one source per player from
    ``seed`` and the game index, so any game of a session can be replayed on
    its own.
    """

    def __init__(
        self,
        rng: Optional[RandomSource] = None,
        *,
        seed: Optional[int] = None,
        engine: str = "py_random",
        listeners: Iterable[GameListener] = (),
    ):
        self._rng = rng
        self.engine = rng.engine if rng is not None else engine
        self.seed = seed
        self.listeners: List[GameListener] = list(listeners)
        self.game_index = -1
        self._state: Optional[GameState] = None

    @property
    def state(self) -> GameState:
        if self._state is None:
            raise RuntimeError("Game has not been started; call start_game() first")
        return self._state

    def add_listener(self, listener: GameListener) -> None:
        self.listeners.append(listener)

    def _grid_source(self, player: PlayerId) -> RandomSource:
        if self._rng is not None:
            return self._rng
        if self.seed is None:
            self.seed = entropy_seed()
            logger.info("No seed given, drew %d", self.seed)
        return create_rng(
            self.engine, derive_game_seed(self.seed, self.game_index, f"player{player.value}")
        )

    def start_game(self) -> GameState:
        for listener in self.listeners:
            listener.on_reset()

        self.game_index += 1
        grids = {player: create_grid(player, self._grid_source(player)) for player in PlayerId}
        self._state = GameState(grids=grids, game_index=self.game_index, seed=self.seed)
        logger.info(
            "Game %d started (seed=%s, engine=%s) p1=%s p2=%s",
            self.game_index,
            self.seed,
            self.engine,
            layout_hash(grids[PlayerId.PLAYER_1].matrix()),
            layout_hash(grids[PlayerId.PLAYER_2].matrix()),
        )

        for listener in self.listeners:
            listener.on_turn_changed(self._state.current_turn)
        return self._state

    def restart(self) -> GameState:
        return self.start_game()

    def call_number(self, number: object) -> CallResult:
        state = self.state
        if state.is_over:
            logger.debug("Ignoring call %r, game %d is over", number, state.game_index)
            p1, p2 = (count_completed_lines(state.grids[p]) for p in PlayerId)
            return CallResult(state=state, p1_lines=p1, p2_lines=p2, accepted=False)

        # every call lands on both boards
        marked = [mark_number(state.grids[p], number) for p in PlayerId]
        if any(marked):
            state.calls.append(number)  # type: ignore[arg-type]

        p1_lines = count_completed_lines(state.grids[PlayerId.PLAYER_1])
        p2_lines = count_completed_lines(state.grids[PlayerId.PLAYER_2])
        logger.debug(
            "Call %r by %s marked=%s lines=(%d, %d)",
            number,
            state.current_turn.label,
            marked,
            p1_lines,
            p2_lines,
        )

        for listener in self.listeners:
            listener.on_score_changed(clamp_score(p1_lines), clamp_score(p2_lines))

        # Player 1 is checked first and wins a simultaneous bingo
        if p1_lines >= WIN_LINES:
            self._finish(state, PlayerId.PLAYER_1)
        elif p2_lines >= WIN_LINES:
            self._finish(state, PlayerId.PLAYER_2)
        else:
            state.current_turn = state.current_turn.other()
            for listener in self.listeners:
                listener.on_turn_changed(state.current_turn)

        return CallResult(state=state, p1_lines=p1_lines, p2_lines=p2_lines, accepted=True)

    def on_number_called(self, number: object) -> CallResult:
        return self.call_number(number)

    def _finish(self, state: GameState, winner: PlayerId) -> None:
        state.is_over = True
        state.winner = winner
        logger.info(
            "Game %d over after %d calls: %s wins", state.game_index, len(state.calls), winner.label
        )
        for listener in self.listeners:
            listener.on_game_over(winner)
