from __future__ import annotations

import sys
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import typer
from rich.table import Table

from .config import resolve_parameters
from .game import CallResult, GameController
from .grid import PlayerId
from .logging_setup import make_console, setup_logging
from .render import ConsoleListener, render_boards
from .rng import create_rng, derive_game_seed, entropy_seed
from .serialize import build_game_record, build_run_meta, emit_transcript_json
from .verify import CELL_COUNT
from .version import __version__

app = typer.Typer(help="Two-player Bingo: shared calls, independent boards")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(0)


@app.callback()
def common_options(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show application version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    pass


def _resolve(
    config: Optional[str],
    cli_overrides: Dict[str, Any],
) -> Tuple[Dict[str, Any], str]:
    resolved, params_hash, _cfg_path_unused = resolve_parameters(
        config_path_str=config, cli_overrides=cli_overrides
    )
    setup_logging(
        level=str(resolved.get("log_level", "INFO")),
        log_file=resolved.get("log_file"),
        colors=str(resolved.get("colors", "auto")),
    )
    return resolved, params_hash


def _overrides(**values: Any) -> Dict[str, Any]:
    return {key.replace("__", "."): value for key, value in values.items() if value is not None}


def _int_setting(value: Any, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise typer.BadParameter(f"{name} must be an integer, got {value!r}")


def _seed_of(resolved: Dict[str, Any]) -> int:
    """Configured base seed, or a fresh one from OS entropy."""
    value = resolved.get("seed", {}).get("value")
    if value is None:
        return entropy_seed()
    return _int_setting(value, "seed")


def _play_out(controller: GameController, order: List[int]) -> CallResult:
    for number in order:
        result = controller.call_number(number)
        if result.state.is_over:
            return result
    raise RuntimeError(f"Game {controller.game_index} ended without a winner")


@app.command()
def play(
    config: str = typer.Option(None, "--config", help="Path to config file (YAML/JSON)"),
    seed: int = typer.Option(None, "--seed", help="Base seed for grid layouts"),
    engine: str = typer.Option(None, "--engine", help="py_random|numpy_pcg64"),
    log_file: str = typer.Option(None, "--log-file", help="Log file path"),
    colors: str = typer.Option(None, "--colors", help="auto|always|never"),
    log_level: str = typer.Option(None, "--log-level", help="DEBUG|INFO|WARN|ERROR"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Resolve params and exit"),
) -> None:
    """Play an interactive game in the terminal."""
    resolved, params_hash = _resolve(
        config,
        _overrides(
            seed__value=seed, seed__engine=engine, log_file=log_file, colors=colors, log_level=log_level
        ),
    )
    if dry_run:
        typer.echo(f"Params hash: {params_hash}")
        raise typer.Exit(0)

    console = make_console(str(resolved.get("colors", "auto")))
    listener = ConsoleListener(console)
    controller = GameController(
        seed=_seed_of(resolved),
        engine=str(resolved["seed"].get("engine", "py_random")),
        listeners=[listener],
    )
    controller.start_game()

    while True:
        state = controller.state
        render_boards(console, state, *listener.scores)
        if state.is_over:
            prompt = "Game over. r to restart, q to quit"
        else:
            prompt = f"{state.current_turn.label}, call a number 1-{CELL_COUNT} (r restart, q quit)"
        raw = typer.prompt(prompt).strip().lower()
        if raw in ("q", "quit"):
            break
        if raw in ("r", "restart"):
            controller.restart()
            continue
        try:
            number = int(raw)
        except ValueError:
            console.print(f"Not a number: {raw!r}")
            continue
        controller.on_number_called(number)

    raise typer.Exit(code=0)


@app.command()
def simulate(
    config: str = typer.Option(None, "--config", help="Path to config file (YAML/JSON)"),
    games: int = typer.Option(None, "--games", min=1, help="Number of games to play"),
    seed: int = typer.Option(None, "--seed", help="Base seed for layouts and call order"),
    engine: str = typer.Option(None, "--engine", help="py_random|numpy_pcg64"),
    out_transcript: str = typer.Option(None, "--out-transcript", help="transcript.json output path"),
    log_file: str = typer.Option(None, "--log-file", help="Log file path"),
    colors: str = typer.Option(None, "--colors", help="auto|always|never"),
    log_level: str = typer.Option(None, "--log-level", help="DEBUG|INFO|WARN|ERROR"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Resolve params and exit"),
    force: bool = typer.Option(False, "--force", help="Overwrite outputs if they exist"),
    no_mkdirs: bool = typer.Option(False, "--no-mkdirs", help="Do not create parent directories"),
) -> None:
    """Play seeded games by calling numbers in random order until someone wins."""
    resolved, params_hash = _resolve(
        config,
        _overrides(
            games=games,
            seed__value=seed,
            seed__engine=engine,
            out_transcript=out_transcript,
            log_file=log_file,
            colors=colors,
            log_level=log_level,
        ),
    )
    if dry_run:
        typer.echo(f"Params hash: {params_hash}")
        raise typer.Exit(0)

    rng_engine = str(resolved["seed"].get("engine", "py_random"))
    n_games = _int_setting(resolved.get("games") or 1, "games")
    base_seed = _seed_of(resolved)
    controller = GameController(seed=base_seed, engine=rng_engine)

    wins: Counter = Counter()
    total_calls = 0
    records = []
    for _ in range(n_games):
        state = controller.start_game()
        order = list(range(1, CELL_COUNT + 1))
        create_rng(rng_engine, derive_game_seed(base_seed, state.game_index, "calls")).shuffle(order)

        result = _play_out(controller, order)

        wins[state.winner] += 1
        total_calls += len(state.calls)
        records.append(build_game_record(state, result.p1_lines, result.p2_lines))

    console = make_console(str(resolved.get("colors", "auto")))
    table = Table(title=f"{n_games} game(s), seed {base_seed}")
    table.add_column("Player")
    table.add_column("Wins", justify="right")
    for player in PlayerId:
        table.add_row(player.label, str(wins[player]))
    console.print(table)
    console.print(f"Average calls per game: {total_calls / n_games:.1f}")

    out_path = resolved.get("out_transcript")
    if out_path:
        run_meta = build_run_meta(
            app_version=__version__,
            params_hash=params_hash,
            seed=base_seed,
            rng_engine=rng_engine,
        )
        emit_transcript_json(
            Path(out_path),
            run_meta=run_meta,
            games=records,
            mkdirs=(not no_mkdirs),
            overwrite=force,
        )
        console.print(f"Transcript written to {out_path}")

    raise typer.Exit(code=0)


def main(_argv: list[str] | None = None) -> int:
    try:
        app(standalone_mode=True)
        return 0
    except SystemExit as e:
        return int(e.code) if e.code is not None else 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
