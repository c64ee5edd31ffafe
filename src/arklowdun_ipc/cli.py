from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from arklowdun_ipc import __version__
from arklowdun_ipc.config import load_settings
from arklowdun_ipc.contracts import list_commands
from arklowdun_ipc.dispatcher import FakeDispatcher
from arklowdun_ipc.models import ArklowdunIpcError
from arklowdun_ipc.rng import SeededRng
from arklowdun_ipc.scenarios import ScenarioLoader
from arklowdun_ipc.schemas import contract_schema

logger = logging.getLogger("arklowdun_ipc.cli")


def _print_json(value: Any) -> None:
    print(json.dumps(value, indent=2, sort_keys=True, default=str))


def cmd_commands(args: argparse.Namespace) -> int:
    for command in list_commands():
        print(command)
    return 0


def cmd_scenarios(args: argparse.Namespace) -> int:
    loader = ScenarioLoader()
    default = loader.load().name
    for name in loader.list():
        marker = " (default)" if name == default else ""
        print(f"{name}{marker}")
    return 0


def cmd_call(args: argparse.Namespace) -> int:
    try:
        payload = json.loads(args.payload) if args.payload else {}
    except json.JSONDecodeError as exc:
        print(f"[arklowdun-ipc] ERROR: --payload is not valid JSON: {exc}", file=sys.stderr)
        return 2

    settings = load_settings(env_file=args.env_file)
    seed = args.seed if args.seed is not None else settings.seed
    dispatcher = FakeDispatcher(
        rng=SeededRng(seed),
        scenario_name=args.scenario or settings.scenario,
        log_size=settings.log_size,
        expose_hooks=False,
    )
    try:
        result = asyncio.run(dispatcher.invoke(args.command, payload))
    finally:
        if args.logs:
            entries = [entry.to_dict() for entry in dispatcher.dump_logs()]
            print(json.dumps(entries, indent=2), file=sys.stderr)
    _print_json(result)
    return 0


def cmd_schema(args: argparse.Namespace) -> int:
    _print_json(contract_schema(args.command, args.direction))
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="arklowdun-ipc",
        description="Inspect and exercise the Arklowdun IPC contracts and fake backend",
    )
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    ap.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    sp = ap.add_subparsers(dest="cmd")

    p_commands = sp.add_parser("commands", help="list registered commands")
    p_commands.set_defaults(func=cmd_commands)

    p_scenarios = sp.add_parser("scenarios", help="list built-in scenarios")
    p_scenarios.set_defaults(func=cmd_scenarios)

    p_call = sp.add_parser("call", help="dispatch one command against the fake backend")
    p_call.add_argument("command")
    p_call.add_argument("--payload", help="request payload as JSON (default: {})")
    p_call.add_argument("--scenario", help="scenario name (default: IPC_SCENARIO)")
    p_call.add_argument("--seed", type=int, help="rng seed (default: IPC_SEED)")
    p_call.add_argument("--env-file", type=Path, help="extra .env file to read")
    p_call.add_argument("--logs", action="store_true", help="print the call log to stderr")
    p_call.set_defaults(func=cmd_call)

    p_schema = sp.add_parser("schema", help="print the JSON Schema for a command")
    p_schema.add_argument("command")
    p_schema.add_argument("--direction", choices=("request", "response"), default="request")
    p_schema.set_defaults(func=cmd_schema)

    return ap


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if not getattr(args, "func", None):
        ap.print_help()
        return 0
    try:
        return int(args.func(args))
    except ArklowdunIpcError as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"[arklowdun-ipc] ERROR: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
