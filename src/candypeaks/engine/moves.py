from __future__ import annotations

from dataclasses import dataclass

from .exposure import exposed_ids, is_exposed
from .layout import NEIGHBORS
from .state import GameState
from .types import Powerup, RejectReason


def is_adjacent_rank(a: int, b: int, wrap_enabled: bool = True) -> bool:
    if abs(a - b) == 1:
        return True
    if not wrap_enabled:
        return False
    return {a, b} == {1, 13}


@dataclass(frozen=True)
class PlayVerdict:
    """Outcome of evaluating a click on a tableau position.

    `clear_ids` lists every position the play would empty, target first.
    `mode` is the powerup the play spends, or None for a plain match.
    """

    ok: bool
    target_id: int
    clear_ids: tuple[int, ...] = ()
    mode: Powerup | None = None
    reason: RejectReason | None = None

    @staticmethod
    def reject(target_id: int, reason: RejectReason, mode: Powerup | None = None) -> "PlayVerdict":
        return PlayVerdict(ok=False, target_id=target_id, mode=mode, reason=reason)


def propose_play(state: GameState, target_id: int) -> PlayVerdict:
    if state.status != "playing":
        return PlayVerdict.reject(target_id, "illegal-mode")
    if target_id < 0 or target_id >= len(state.tableau):
        return PlayVerdict.reject(target_id, "illegal-target")

    slot = state.tableau[target_id]
    if slot.card is None or not is_exposed(slot, state.tableau):
        return PlayVerdict.reject(target_id, "illegal-target")

    mode = state.active_powerup
    if mode is None:
        top = state.waste_top
        if top is None or not is_adjacent_rank(slot.card.rank, top.rank, state.wrap_enabled):
            return PlayVerdict.reject(target_id, "illegal-match")
        return PlayVerdict(ok=True, target_id=target_id, clear_ids=(target_id,))

    if state.powerups.get(mode) <= 0:
        return PlayVerdict.reject(target_id, "illegal-mode", mode)

    if mode == "wild":
        cleared: tuple[int, ...] = (target_id,)
    elif mode == "bomb":
        # An exposed target always covers its own children, so neighbors are
        # judged as the board stands once the target has left it.
        lifted = tuple(p.with_card(None) if p.id == target_id else p for p in state.tableau)
        open_after = exposed_ids(lifted)
        cleared = (target_id,) + tuple(n for n in NEIGHBORS[target_id] if n in open_after)
    else:
        rank = slot.card.rank
        matching = [
            i
            for i in exposed_ids(state.tableau)
            if state.tableau[i].card.rank == rank  # type: ignore[union-attr]
        ]
        cleared = (target_id,) + tuple(i for i in matching if i != target_id)
    return PlayVerdict(ok=True, target_id=target_id, clear_ids=cleared, mode=mode)


def playable_ids(state: GameState) -> tuple[int, ...]:
    """Exposed positions a click would currently clear, for highlighting."""
    return tuple(i for i in exposed_ids(state.tableau) if propose_play(state, i).ok)
