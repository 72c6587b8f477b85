from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

from jsonschema import Draft202012Validator

from candypeaks.engine.actions import Action
from candypeaks.engine.deal import deck_is_conserved
from candypeaks.engine.serialize import action_from_dict, state_from_snapshot
from candypeaks.engine.state import GameState

SNAPSHOT_SCHEMA = "game_state.schema.json"
ACTIONS_SCHEMA = "actions.schema.json"


class SnapshotError(RuntimeError):
    pass


def load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise SnapshotError(f"Missing file: {path}") from e
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Invalid JSON in {path}: {e}") from e


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: [str(p) for p in e.path])
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise SnapshotError("\n".join(lines))


class DocumentValidator:
    """Checks snapshot and action-list documents against the bundled schemas."""

    def __init__(self, schema_dir: Path) -> None:
        self.schema_dir = schema_dir
        self._schemas: dict[str, object] = {}

    def _schema(self, name: str) -> object:
        if name not in self._schemas:
            self._schemas[name] = load_json(self.schema_dir / name)
        return self._schemas[name]

    def load_state(self, doc: object, *, context: str = "snapshot") -> GameState:
        validate_json(doc, self._schema(SNAPSHOT_SCHEMA), context=context)
        assert isinstance(doc, dict)
        try:
            state = state_from_snapshot(doc)
        except KeyError as e:
            raise SnapshotError(f"Unknown card in {context}: {e.args[0]}") from e
        if not deck_is_conserved(state):
            raise SnapshotError(f"Cards in {context} do not form exactly one 52-card deck")
        return state

    def load_actions(self, doc: object, *, context: str = "actions") -> list[Action]:
        validate_json(doc, self._schema(ACTIONS_SCHEMA), context=context)
        assert isinstance(doc, Sequence)
        return [action_from_dict(d) for d in doc]

    def validate_all(self) -> None:
        """Make sure every bundled schema is itself a valid JSON schema."""
        for name in (SNAPSHOT_SCHEMA, ACTIONS_SCHEMA):
            Draft202012Validator.check_schema(self._schema(name))
