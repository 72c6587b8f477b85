from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from candypeaks.engine.exposure import exposed_ids
from candypeaks.engine.rules import replay
from candypeaks.engine.serialize import snapshot
from candypeaks.engine.state import DEFAULT_SEED
from candypeaks.paths import get_paths
from candypeaks.services.session import GameSession, normalize_seed
from candypeaks.services.telemetry import TelemetryService
from candypeaks.services.validation import DocumentValidator, SnapshotError, load_json


def _print_json(doc: object) -> None:
    print(json.dumps(doc, indent=2, ensure_ascii=False))


def _cmd_deal(args: argparse.Namespace) -> int:
    telemetry = TelemetryService(Path(args.telemetry)) if args.telemetry else None
    session = GameSession.start(args.seed, telemetry=telemetry)
    _print_json(snapshot(session.state))
    return 0


def _cmd_replay(args: argparse.Namespace, validator: DocumentValidator) -> int:
    actions = validator.load_actions(load_json(Path(args.actions)), context=args.actions)
    state = replay(normalize_seed(args.seed), actions)
    _print_json(snapshot(state))
    return 0


def _cmd_check(args: argparse.Namespace, validator: DocumentValidator) -> int:
    state = validator.load_state(load_json(Path(args.snapshot)), context=args.snapshot)
    print(f"seed={state.seed} status={state.status} score={state.score} combo={state.combo}")
    print("exposed=" + ",".join(str(i) for i in exposed_ids(state.tableau)))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="candypeaks")
    sub = parser.add_subparsers(dest="command", required=True)

    p_deal = sub.add_parser("deal", help="Deal a game and print its snapshot")
    p_deal.add_argument("--seed", default=DEFAULT_SEED)
    p_deal.add_argument("--telemetry", default=None, help="Append events to this JSONL file")

    p_replay = sub.add_parser("replay", help="Replay an action list from a seed")
    p_replay.add_argument("--seed", default=DEFAULT_SEED)
    p_replay.add_argument("--actions", required=True, help="JSON file with a list of actions")

    p_check = sub.add_parser("check", help="Validate a snapshot file")
    p_check.add_argument("snapshot")

    args = parser.parse_args(argv)
    validator = DocumentValidator(get_paths().schema_dir)
    try:
        if args.command == "deal":
            return _cmd_deal(args)
        if args.command == "replay":
            return _cmd_replay(args, validator)
        return _cmd_check(args, validator)
    except SnapshotError as e:
        print(str(e), file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
