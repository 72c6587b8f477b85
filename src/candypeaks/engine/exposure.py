from __future__ import annotations

from collections.abc import Sequence

from .layout import COVERERS
from .types import Position


def is_exposed(position: Position, tableau: Sequence[Position]) -> bool:
    if position.card is None:
        return False
    for cover_id in COVERERS[position.id]:
        if tableau[cover_id].card is not None:
            return False
    return True


def exposed_ids(tableau: Sequence[Position]) -> tuple[int, ...]:
    return tuple(p.id for p in tableau if is_exposed(p, tableau))
