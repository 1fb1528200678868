from __future__ import annotations

import hashlib
import json
from collections import Counter
from dataclasses import dataclass
from typing import List, Mapping, Sequence

CELL_COUNT = 25


class GridInvariantError(AssertionError):
    """A grid layout is not a permutation of 1..25."""


@dataclass
class LayoutCheck:
    ok: bool
    reasons: List[str]


def check_layout(numbers: Sequence[int]) -> LayoutCheck:
    reasons: List[str] = []
    if len(numbers) != CELL_COUNT:
        reasons.append(f"expected {CELL_COUNT} cells, got {len(numbers)}")
    counts = Counter(numbers)
    dupes = sorted(x for x, c in counts.items() if c > 1)
    if dupes:
        reasons.append(f"duplicate numbers: {dupes}")
    out_of_range = sorted(x for x in counts if not 1 <= x <= CELL_COUNT)
    if out_of_range:
        reasons.append(f"numbers outside 1..{CELL_COUNT}: {out_of_range}")
    missing = [x for x in range(1, CELL_COUNT + 1) if x not in counts]
    if missing:
        reasons.append(f"missing numbers: {missing}")
    return LayoutCheck(ok=not reasons, reasons=reasons)


def check_index(numbers: Sequence[int], cells_by_number: Mapping[int, int]) -> LayoutCheck:
    reasons: List[str] = []
    if len(cells_by_number) != len(numbers):
        reasons.append("index size does not match cell count")
    for pos, num in enumerate(numbers):
        if cells_by_number.get(num) != pos:
            reasons.append(f"index maps {num} to {cells_by_number.get(num)}, cell sits at {pos}")
    return LayoutCheck(ok=not reasons, reasons=reasons)


def assert_valid_layout(numbers: Sequence[int], cells_by_number: Mapping[int, int]) -> None:
    reasons = check_layout(numbers).reasons + check_index(numbers, cells_by_number).reasons
    if reasons:
        raise GridInvariantError("; ".join(reasons))


def layout_hash(matrix: Sequence[Sequence[int]]) -> str:
    payload = json.dumps(matrix, ensure_ascii=True, separators=(",", ":"))
    return "sha256:" + hashlib.sha256(payload.encode("utf-8")).hexdigest()
