"""
Prompt Orchestrator CLI — inspect routing and gating decisions.

Usage:
    prompt-orchestrator classify "Refactor the auth flow"   # Show mode, score, reasons
    prompt-orchestrator envelope "Summarize this file"      # Print the context envelope
    prompt-orchestrator check-tool exec --mode direct       # Allow/block a tool call
    prompt-orchestrator improver run                        # Print the improver advisory
    prompt-orchestrator improver serve                      # Log the advisory on schedule
    prompt-orchestrator version                             # Show version
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prompt_orchestrator.config import OrchestratorConfig

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="prompt-orchestrator",
        description="Prompt Orchestrator — complexity routing and tool gating for agents.",
    )
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    parser.add_argument("--config", type=str, help="YAML config file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command")

    # classify
    classify_parser = subparsers.add_parser("classify", help="Classify a request")
    classify_parser.add_argument("prompt", help="Request text")

    # envelope
    envelope_parser = subparsers.add_parser("envelope", help="Render the context envelope")
    envelope_parser.add_argument("prompt", help="Request text")

    # check-tool
    check_parser = subparsers.add_parser("check-tool", help="Check a tool call against policy")
    check_parser.add_argument("tool", help="Tool name")
    check_parser.add_argument(
        "--mode",
        choices=["direct", "simple_delegate", "orchestrator_delegate"],
        help="Session mode (default: unknown session)",
    )
    check_parser.add_argument(
        "--confirmed", action="store_true", help="Pass params.confirmed=true"
    )

    # improver
    improver_parser = subparsers.add_parser("improver", help="Prompt improver advisory")
    improver_parser.add_argument("args", nargs="*", help='"run" or "serve"')

    # version
    subparsers.add_parser("version", help="Show version")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )

    if args.version or args.command == "version":
        from prompt_orchestrator import __version__

        print(f"prompt-orchestrator {__version__}")
        return 0

    if args.command is None:
        parser.print_help()
        return 0

    if args.config and not Path(args.config).is_file():
        print(f"Error: config file not found: {args.config}")
        return 1

    from prompt_orchestrator.config import load_config

    config = load_config(args.config)

    if args.command == "classify":
        return _cmd_classify(args, config)
    elif args.command == "envelope":
        return _cmd_envelope(args, config)
    elif args.command == "check-tool":
        return _cmd_check_tool(args, config)
    elif args.command == "improver":
        return _cmd_improver(args, config)
    else:
        parser.print_help()
        return 0


def _cmd_classify(args: argparse.Namespace, config: OrchestratorConfig) -> int:
    from prompt_orchestrator.engine.router import classify_execution_mode

    decision = classify_execution_mode(args.prompt, config)
    print(f"mode: {decision.mode}")
    print(f"score: {decision.complexity_score}")
    print(f"threshold: {config.complexity_threshold}")
    print(f"reasons: {', '.join(decision.reasons) or 'none'}")
    return 0


def _cmd_envelope(args: argparse.Namespace, config: OrchestratorConfig) -> int:
    from prompt_orchestrator.engine.context import render_envelope
    from prompt_orchestrator.engine.router import classify_execution_mode

    decision = classify_execution_mode(args.prompt, config)
    print(render_envelope(args.prompt, decision, config))
    return 0


def _cmd_check_tool(args: argparse.Namespace, config: OrchestratorConfig) -> int:
    from prompt_orchestrator.engine.guardrails import check_tool_call
    from prompt_orchestrator.engine.models import ExecutionMode

    mode = ExecutionMode(args.mode) if args.mode else None
    params = {"confirmed": True} if args.confirmed else {}
    result = check_tool_call(args.tool, params, mode, config)
    if result.allowed:
        print("allow")
    else:
        print(f"block: {result.reason}")
    return 0


def _cmd_improver(args: argparse.Namespace, config: OrchestratorConfig) -> int:
    from prompt_orchestrator.engine.improver import ImproverService, run_improver_command

    words = " ".join(args.args)
    if words.strip().lower() == "serve":
        logging.getLogger().setLevel(logging.INFO)
        service = ImproverService(config)
        try:
            asyncio.run(service.serve())
        except KeyboardInterrupt:
            pass
        return 0

    print(run_improver_command(words, config))
    return 0


if __name__ == "__main__":
    sys.exit(main())
