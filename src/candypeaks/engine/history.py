from __future__ import annotations

from dataclasses import dataclass, field

from .state import GameState


@dataclass
class History:
    """Linear undo log of states that preceded committed transitions."""

    entries: list[GameState] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def can_undo(self) -> bool:
        return bool(self.entries)

    def commit(self, prior: GameState, nxt: GameState) -> GameState:
        """Record `prior` if `nxt` differs from it; return the state to keep."""
        if nxt is prior or nxt == prior:
            return prior
        self.entries.append(prior)
        return nxt

    def undo(self) -> GameState | None:
        if not self.entries:
            return None
        return self.entries.pop()

    def clear(self) -> None:
        self.entries.clear()
