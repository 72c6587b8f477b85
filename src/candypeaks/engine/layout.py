"""Static three-peak tableau layout and its covering graph.

Row 0 holds the three peaks. A position at (row, column) is covered by the
positions of the row above at column - 1 and column + 1. Neighbors (used by
the bomb powerup) are coverers plus the positions it covers.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from .types import Position

ROWS: tuple[tuple[int, tuple[int, ...]], ...] = (
    (0, (4, 10, 16)),
    (1, (3, 5, 9, 11, 15, 17)),
    (2, (2, 4, 6, 8, 10, 12, 14, 16, 18)),
    (3, (1, 3, 5, 7, 9, 11, 13, 15, 17, 19)),
)


def _build_layout() -> tuple[Position, ...]:
    slots: list[Position] = []
    for row, columns in ROWS:
        for column in columns:
            slots.append(Position(id=len(slots), row=row, column=column))
    return tuple(slots)


def _lookup(layout: Sequence[Position]) -> dict[tuple[int, int], int]:
    return {(p.row, p.column): p.id for p in layout}


def _build_coverers(layout: Sequence[Position]) -> dict[int, tuple[int, ...]]:
    where = _lookup(layout)
    coverers: dict[int, tuple[int, ...]] = {}
    for p in layout:
        ids = [where.get((p.row - 1, p.column + dx)) for dx in (-1, 1)]
        coverers[p.id] = tuple(sorted(i for i in ids if i is not None))
    return coverers


def _build_neighbors(
    layout: Sequence[Position], coverers: Mapping[int, tuple[int, ...]]
) -> dict[int, tuple[int, ...]]:
    where = _lookup(layout)
    neighbors: dict[int, tuple[int, ...]] = {}
    for p in layout:
        found = set(coverers[p.id])
        for dx in (-1, 1):
            child = where.get((p.row + 1, p.column + dx))
            if child is not None:
                found.add(child)
        neighbors[p.id] = tuple(sorted(found))
    return neighbors


LAYOUT: tuple[Position, ...] = _build_layout()
COVERERS: Mapping[int, tuple[int, ...]] = _build_coverers(LAYOUT)
NEIGHBORS: Mapping[int, tuple[int, ...]] = _build_neighbors(LAYOUT, COVERERS)


def coverers(position_id: int) -> tuple[int, ...]:
    return COVERERS[position_id]


def neighbors(position_id: int) -> tuple[int, ...]:
    return NEIGHBORS[position_id]


def board_columns() -> int:
    return max(p.column for p in LAYOUT) + 1
