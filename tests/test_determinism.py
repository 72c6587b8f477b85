from __future__ import annotations

from candypeaks.engine.actions import Action, DrawAction, HoldAction, PlayAction, SelectPowerupAction
from candypeaks.engine.deal import deal, deck_is_conserved
from candypeaks.engine.moves import playable_ids
from candypeaks.engine.rules import replay, step
from candypeaks.engine.serialize import snapshot
from candypeaks.engine.state import GameState
from candypeaks.engine.types import POWERUP_ORDER


def _choose_action(state: GameState) -> Action:
    # Prefer a plain match, then spend a powerup, then draw.
    targets = playable_ids(state)
    if targets:
        return PlayAction(target_id=targets[0])
    for kind in POWERUP_ORDER:
        if state.powerups.get(kind) > 0 and state.active_powerup is None:
            return SelectPowerupAction(kind=kind)
    if state.stock:
        return DrawAction()
    return HoldAction()


def test_engine_determinism_replay() -> None:
    seed = "424242"
    state = deal(seed)

    actions: list[Action] = []
    for _ in range(120):
        if state.is_over:
            break
        a = _choose_action(state)
        actions.append(a)
        state = step(state, a).state
        assert deck_is_conserved(state)

    replayed = replay(seed, actions)
    assert snapshot(replayed) == snapshot(state)


def test_combo_never_decreases_between_draws() -> None:
    state = deal("monotone")
    for _ in range(120):
        if state.is_over:
            break
        a = _choose_action(state)
        nxt = step(state, a).state
        if isinstance(a, (DrawAction, HoldAction)):
            assert nxt.combo == 0
        else:
            assert nxt.combo >= state.combo
        assert nxt.powerup_cycle >= state.powerup_cycle
        assert min(nxt.powerups.to_dict().values()) >= 0
        state = nxt
