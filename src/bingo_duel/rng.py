from __future__ import annotations

import hashlib
import itertools
import random
from dataclasses import dataclass
from typing import Iterator, List, Sequence


try:  # optional dependency
    import numpy as _np  # type: ignore
except Exception:  # pragma: no cover - optional
    _np = None


@dataclass
class RandomSource:
    engine: str

    def shuffle(self, arr: List[int]) -> None:
        raise NotImplementedError


class PyRandomSource(RandomSource):
    def __init__(self, seed: int):
        super().__init__(engine="py_random")
        self._rng = random.Random(seed)

    def shuffle(self, arr: List[int]) -> None:
        self._rng.shuffle(arr)


class NumpyPCG64Source(RandomSource):  # pragma: no cover - covered when numpy present
    def __init__(self, seed: int):
        if _np is None:
            raise RuntimeError("numpy is not installed; install bingo-duel[pcg]")
        super().__init__(engine="numpy_pcg64")
        self._rng = _np.random.Generator(_np.random.PCG64(seed))

    def shuffle(self, arr: List[int]) -> None:
        perm = self._rng.permutation(len(arr))
        arr[:] = [arr[int(i)] for i in perm]


class FixedLayoutSource(RandomSource):
    """Replays scripted layouts instead of shuffling.

    Each ``shuffle`` call overwrites the list with the next layout, cycling
    back to the first one when the script runs out. Used to pin grids to an
    exact arrangement in tests and replays.
    """

    def __init__(self, layouts: Sequence[Sequence[int]]):
        if not layouts:
            raise ValueError("FixedLayoutSource needs at least one layout")
        super().__init__(engine="fixed")
        self._layouts: Iterator[Sequence[int]] = itertools.cycle([list(x) for x in layouts])

    def shuffle(self, arr: List[int]) -> None:
        layout = next(self._layouts)
        if len(layout) != len(arr):
            raise ValueError(f"Scripted layout has {len(layout)} entries, expected {len(arr)}")
        arr[:] = layout


def create_rng(engine: str, seed: int) -> RandomSource:
    engine = (engine or "py_random").strip().lower()
    if engine == "py_random":
        return PyRandomSource(seed)
    if engine == "numpy_pcg64":
        return NumpyPCG64Source(seed)
    raise ValueError(f"Unsupported RNG engine: {engine}")


def derive_game_seed(base_seed: int, game_index: int, purpose: str) -> int:
    """Derive a per-game seed from base seed, game index, and purpose using sha256.

    Returns a 63-bit positive integer suitable for seeding common RNGs.
    """
    s = f"{base_seed}|{game_index}|{purpose}".encode("utf-8")
    digest = hashlib.sha256(s).digest()
    # take first 8 bytes, mask to 63 bits to ensure non-negative
    val = int.from_bytes(digest[:8], byteorder="big") & ((1 << 63) - 1)
    return val


def entropy_seed() -> int:
    return random.SystemRandom().getrandbits(63)
