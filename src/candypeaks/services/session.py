from __future__ import annotations

from dataclasses import dataclass, field

from candypeaks.engine.actions import (
    Action,
    DrawAction,
    HoldAction,
    PlayAction,
    SelectPowerupAction,
    ToggleWrapAction,
)
from candypeaks.engine.deal import deal
from candypeaks.engine.exposure import exposed_ids
from candypeaks.engine.history import History
from candypeaks.engine.moves import playable_ids
from candypeaks.engine.rules import StepResult, combo_multiplier, step
from candypeaks.engine.state import DEFAULT_SEED, GameState, RulesConfig
from candypeaks.engine.types import Card, Powerup

from .telemetry import TelemetryService


def normalize_seed(raw: str | None) -> str:
    seed = (raw or "").strip()
    return seed or DEFAULT_SEED


@dataclass
class GameSession:
    """Current game plus undo history, owned by a single caller (the UI).

    Card-moving actions and wrap toggles are committed to history; selecting
    a powerup is not.
    """

    state: GameState
    rules: RulesConfig = field(default_factory=RulesConfig)
    history: History = field(default_factory=History)
    telemetry: TelemetryService | None = None

    @staticmethod
    def start(
        seed: str | None = None,
        rules: RulesConfig | None = None,
        telemetry: TelemetryService | None = None,
    ) -> "GameSession":
        cfg = rules or RulesConfig()
        session = GameSession(state=deal(normalize_seed(seed), cfg), rules=cfg, telemetry=telemetry)
        session._log("GAME_DEALT", {"seed": session.state.seed})
        return session

    def _log(self, event_type: str, payload: dict[str, object]) -> None:
        if self.telemetry is not None:
            self.telemetry.log(event_type, payload)

    def new_game(self, seed: str | None = None) -> GameState:
        self.history.clear()
        self.state = deal(normalize_seed(seed), self.rules)
        self._log("GAME_DEALT", {"seed": self.state.seed})
        return self.state

    def replay_seed(self) -> GameState:
        return self.new_game(self.state.seed)

    def apply(self, action: Action, *, record: bool = True) -> StepResult:
        prior = self.state
        result = step(prior, action)
        if result.ok:
            self.state = self.history.commit(prior, result.state) if record else result.state
            if self.telemetry is not None:
                self.telemetry.log_events(result.events)
        return result

    def play(self, target_id: int) -> StepResult:
        return self.apply(PlayAction(target_id=target_id))

    def draw(self) -> StepResult:
        return self.apply(DrawAction())

    def hold(self) -> StepResult:
        return self.apply(HoldAction())

    def toggle_wrap(self, enabled: bool) -> StepResult:
        return self.apply(ToggleWrapAction(enabled=enabled))

    def select_powerup(self, kind: Powerup) -> StepResult:
        return self.apply(SelectPowerupAction(kind=kind), record=False)

    def undo(self) -> GameState | None:
        previous = self.history.undo()
        if previous is None:
            return None
        self.state = previous
        self._log("UNDO", {"depth": len(self.history)})
        return previous

    @property
    def exposed_ids(self) -> tuple[int, ...]:
        return exposed_ids(self.state.tableau)

    @property
    def playable_ids(self) -> tuple[int, ...]:
        return playable_ids(self.state)

    @property
    def waste_top(self) -> Card | None:
        return self.state.waste_top

    @property
    def combo_multiplier(self) -> float:
        return combo_multiplier(self.state.combo, self.state.rules)

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_hold(self) -> bool:
        return self.state.status == "playing" and bool(self.state.waste)
