from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace

from .actions import (
    Action,
    DrawAction,
    HoldAction,
    PlayAction,
    SelectPowerupAction,
    ToggleWrapAction,
)
from .deal import deal
from .exposure import exposed_ids
from .moves import PlayVerdict, is_adjacent_rank, propose_play
from .state import GameState, RulesConfig
from .types import POWERUP_ORDER, Inventory, Powerup, RejectReason

Event = dict[str, object]


@dataclass(frozen=True)
class StepResult:
    state: GameState
    ok: bool
    reason: RejectReason | None = None
    events: list[Event] = field(default_factory=list)


def combo_multiplier(combo: int, rules: RulesConfig | None = None) -> float:
    cfg = rules or RulesConfig()
    if combo <= 0:
        return 1.0
    steps = combo // cfg.combo_step
    return 1.0 + min(steps * cfg.multiplier_step, cfg.multiplier_cap)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def grant_powerups(
    old_combo: int,
    new_combo: int,
    inventory: Inventory,
    cycle: int,
    combo_step: int = 3,
) -> tuple[Inventory, int, list[Powerup]]:
    """Grant one powerup per combo threshold crossed in (old_combo, new_combo]."""
    granted: list[Powerup] = []
    for combo in range(old_combo + 1, new_combo + 1):
        if combo % combo_step == 0:
            kind = POWERUP_ORDER[cycle % len(POWERUP_ORDER)]
            inventory = inventory.add(kind, 1)
            granted.append(kind)
            cycle += 1
    return inventory, cycle, granted


def evaluate(state: GameState) -> GameState:
    if state.status != "playing":
        return state

    if state.cards_in_tableau() == 0:
        if not state.bonus_awarded:
            return replace(
                state,
                score=state.score + len(state.stock) * state.rules.stock_bonus,
                status="won",
                bonus_awarded=True,
            )
        return replace(state, status="won")

    if not state.stock:
        exposed = exposed_ids(state.tableau)
        if not exposed:
            return replace(state, status="lost")

        # Holding any powerup counts as a move even if it could not apply.
        has_powerup = state.active_powerup is not None or state.powerups.total() > 0
        top = state.waste_top
        can_play = top is not None and any(
            is_adjacent_rank(state.tableau[i].card.rank, top.rank, state.wrap_enabled)  # type: ignore[union-attr]
            for i in exposed
        )
        if not has_powerup and not can_play:
            return replace(state, status="lost")

    return state


def clear(
    state: GameState,
    target_id: int,
    clear_ids: Sequence[int],
    powerup: Powerup | None = None,
) -> GameState:
    """Empty `clear_ids`, put the target's card on waste and score the clear.

    The powerup spent defaults to the state's active one.
    """
    if state.status != "playing":
        return state
    cleared = list(dict.fromkeys(clear_ids))
    if target_id not in cleared:
        return state
    if any(i < 0 or i >= len(state.tableau) or state.tableau[i].card is None for i in cleared):
        return state

    played = state.tableau[target_id].card
    if played is None:
        return state
    wanted = set(cleared)
    tableau = tuple(p.with_card(None) if p.id in wanted else p for p in state.tableau)

    cfg = state.rules
    count = len(cleared)
    combo = state.combo + count
    gain = _round_half_up(count * cfg.base_points * combo_multiplier(combo, cfg))

    if powerup is None:
        powerup = state.active_powerup
    inventory = state.powerups
    if powerup is not None:
        inventory = inventory.add(powerup, -1)
    inventory, cycle, _ = grant_powerups(
        state.combo, combo, inventory, state.powerup_cycle, cfg.combo_step
    )

    nxt = replace(
        state,
        tableau=tableau,
        waste=state.waste + (played,),
        combo=combo,
        score=state.score + gain,
        powerups=inventory,
        powerup_cycle=cycle,
        active_powerup=None,
    )
    return evaluate(nxt)


def play(state: GameState, target_id: int) -> GameState:
    verdict = propose_play(state, target_id)
    if not verdict.ok:
        return state
    return clear(state, verdict.target_id, verdict.clear_ids, verdict.mode)


def draw(state: GameState) -> GameState:
    if state.status != "playing" or not state.stock:
        return state
    nxt = replace(
        state,
        stock=state.stock[:-1],
        waste=state.waste + (state.stock[-1],),
        combo=0,
        active_powerup=None,
    )
    return evaluate(nxt)


def hold(state: GameState) -> GameState:
    if state.status != "playing" or not state.waste:
        return state
    waste = state.waste[:-1]
    if state.hold is not None:
        waste = waste + (state.hold,)
    nxt = replace(
        state,
        waste=waste,
        hold=state.waste[-1],
        combo=0,
        active_powerup=None,
    )
    return evaluate(nxt)


def toggle_wrap(state: GameState, enabled: bool) -> GameState:
    if state.wrap_enabled == enabled:
        return state
    return replace(state, wrap_enabled=enabled)


def select_powerup(state: GameState, kind: Powerup) -> GameState:
    if state.status != "playing" or state.powerups.get(kind) <= 0:
        return state
    active = None if state.active_powerup == kind else kind
    return replace(state, active_powerup=active)


def _terminal_events(prev: GameState, nxt: GameState) -> list[Event]:
    if prev.status == nxt.status:
        return []
    if nxt.status == "won":
        bonus = 0
        if nxt.bonus_awarded and not prev.bonus_awarded:
            bonus = len(nxt.stock) * nxt.rules.stock_bonus
        return [{"type": "GAME_WON", "score": nxt.score, "stock_bonus": bonus}]
    return [{"type": "GAME_LOST", "score": nxt.score}]


def _play(state: GameState, action: PlayAction) -> StepResult:
    verdict: PlayVerdict = propose_play(state, action.target_id)
    if not verdict.ok:
        return StepResult(state=state, ok=False, reason=verdict.reason)

    nxt = clear(state, verdict.target_id, verdict.clear_ids, verdict.mode)
    played = state.tableau[verdict.target_id].card
    assert played is not None
    events: list[Event] = [
        {
            "type": "CARDS_CLEARED",
            "target_id": verdict.target_id,
            "card_id": played.id,
            "cleared_ids": list(verdict.clear_ids),
            "combo": nxt.combo,
            "score_gain": nxt.score - state.score,
        }
    ]
    if verdict.mode is not None:
        events.append({"type": "POWERUP_SPENT", "kind": verdict.mode})
    _, _, granted = grant_powerups(
        state.combo, nxt.combo, Inventory(), state.powerup_cycle, state.rules.combo_step
    )
    for kind in granted:
        events.append({"type": "POWERUP_GRANTED", "kind": kind})
    events.extend(_terminal_events(state, nxt))
    return StepResult(state=nxt, ok=True, events=events)


def _draw(state: GameState) -> StepResult:
    if state.status != "playing":
        return StepResult(state=state, ok=False, reason="illegal-mode")
    if not state.stock:
        return StepResult(state=state, ok=False, reason="no-op")
    nxt = draw(state)
    events: list[Event] = [{"type": "CARD_DRAWN", "card_id": state.stock[-1].id}]
    events.extend(_terminal_events(state, nxt))
    return StepResult(state=nxt, ok=True, events=events)


def _hold(state: GameState) -> StepResult:
    if state.status != "playing":
        return StepResult(state=state, ok=False, reason="illegal-mode")
    if not state.waste:
        return StepResult(state=state, ok=False, reason="no-op")
    nxt = hold(state)
    assert nxt.hold is not None
    events: list[Event] = [
        {
            "type": "CARD_HELD",
            "card_id": nxt.hold.id,
            "released_id": state.hold.id if state.hold is not None else None,
        }
    ]
    events.extend(_terminal_events(state, nxt))
    return StepResult(state=nxt, ok=True, events=events)


def _toggle_wrap(state: GameState, action: ToggleWrapAction) -> StepResult:
    nxt = toggle_wrap(state, action.enabled)
    if nxt is state:
        return StepResult(state=state, ok=False, reason="no-op")
    return StepResult(
        state=nxt, ok=True, events=[{"type": "WRAP_TOGGLED", "enabled": nxt.wrap_enabled}]
    )


def _select_powerup(state: GameState, action: SelectPowerupAction) -> StepResult:
    nxt = select_powerup(state, action.kind)
    if nxt is state:
        return StepResult(state=state, ok=False, reason="illegal-mode")
    return StepResult(
        state=nxt,
        ok=True,
        events=[{"type": "POWERUP_SELECTED", "kind": action.kind, "active": nxt.active_powerup}],
    )


def step(state: GameState, action: Action) -> StepResult:
    """Apply a single action and describe what happened.

    Rejected actions return the very same state object with `ok=False`.
    """
    if isinstance(action, PlayAction):
        return _play(state, action)
    if isinstance(action, DrawAction):
        return _draw(state)
    if isinstance(action, HoldAction):
        return _hold(state)
    if isinstance(action, ToggleWrapAction):
        return _toggle_wrap(state, action)
    if isinstance(action, SelectPowerupAction):
        return _select_powerup(state, action)
    return StepResult(state=state, ok=False, reason="no-op")


def replay(seed: str, actions: Iterable[Action], rules: RulesConfig | None = None) -> GameState:
    state = deal(seed, rules)
    for a in actions:
        state = step(state, a).state
        if state.is_over:
            break
    return state
