from __future__ import annotations

import json
import platform
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Sequence

from .game import GameState
from .grid import PlayerId, completed_lines
from .verify import layout_hash


def ensure_parent(path: Path, *, mkdirs: bool) -> None:
    parent = path.parent
    if not parent.exists():
        if not mkdirs:
            raise FileNotFoundError(f"Parent directory does not exist: {parent}")
        parent.mkdir(parents=True, exist_ok=True)


def write_json(path: Path, data: object, *, mkdirs: bool, overwrite: bool) -> None:
    if path.exists() and not overwrite:
        raise FileExistsError(
            f"Refusing to overwrite existing file without --force: {path}"
        )
    ensure_parent(path, mkdirs=mkdirs)
    text = json.dumps(data, ensure_ascii=True, sort_keys=True, indent=2)
    path.write_text(text + "\n", encoding="utf-8")


def build_run_meta(
    *,
    app_version: str,
    params_hash: str,
    seed: int | None,
    rng_engine: str,
) -> Dict[str, object]:
    return {
        "app_version": app_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "python_version": sys.version.split()[0],
        "platform": platform.system().lower(),
        "params_hash": params_hash,
        "seed": seed,
        "rng_engine": rng_engine,
        "hash_algorithm": "sha256",
    }


def build_game_record(state: GameState, p1_lines: int, p2_lines: int) -> Dict[str, object]:
    players: Dict[str, object] = {}
    for player in PlayerId:
        grid = state.grids[player]
        matrix = grid.matrix()
        players[player.label] = {
            "matrix": matrix,
            "layout_hash": layout_hash(matrix),
            "completed_lines": [f"{kind}:{idx}" for kind, idx in completed_lines(grid)],
        }
    return {
        "game_index": state.game_index,
        "players": players,
        "calls": list(state.calls),
        "lines": {"Player 1": p1_lines, "Player 2": p2_lines},
        "is_over": state.is_over,
        "winner": state.winner.label if state.winner is not None else None,
    }


def emit_transcript_json(
    path: Path,
    *,
    run_meta: Dict[str, object],
    games: Sequence[Dict[str, object]],
    mkdirs: bool,
    overwrite: bool,
) -> None:
    data: Dict[str, object] = {
        "run_meta": run_meta,
        "games": list(games),
    }
    write_json(path, data, mkdirs=mkdirs, overwrite=overwrite)
