"""
cli.py

Responsibility: CLI entrypoint for devflow.

High-level flow (single invocation, no subcommands):
1) Load the config file -> `Config` (a malformed file aborts startup)
2) Build the step context (command runner, release client, delete prompt)
3) Run the enabled features in their fixed order, stopping at the first failure

Concerns stay isolated:
- Config loading: `config.py`
- Command templates: `commands.py`
- Process launching: `runner.py`
- Release lookup: `releases.py`
- Steps and ordering: `features.py`, `pipeline.py`
"""

from __future__ import annotations

import argparse
import logging

from devflow.config import DEFAULT_CONFIG_PATH, MissingFieldError, load_config
from devflow.confirm import ConfirmationPrompt
from devflow.features import StepContext
from devflow.logging_utils import configure_logging
from devflow.pipeline import run_pipeline

LOG = logging.getLogger("devflow")


def run_cmd(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    ctx = StepContext(config=config, prompt=ConfirmationPrompt())

    try:
        report = run_pipeline(ctx)
    except MissingFieldError as e:
        LOG.error("An error occurred: %s", e)
        return 1 if args.fail_on_error else 0

    failed = report.failed
    if failed is not None:
        LOG.error("An error occurred: %s step failed; remaining steps were skipped.", failed.feature.value)
        return 1 if args.fail_on_error else 0
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="devflow",
        description="Clone/update a project and run its install, audit, lint, test, run and build steps",
    )
    p.add_argument(
        "--config",
        default=str(DEFAULT_CONFIG_PATH),
        help=f"Path to the config file (default: {DEFAULT_CONFIG_PATH})",
    )
    p.add_argument(
        "--fail-on-error",
        action="store_true",
        help="Exit with status 1 when a step fails (default: log and exit 0)",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Enable debug output",
    )
    p.set_defaults(func=run_cmd)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbosity=args.verbose)
    try:
        return int(args.func(args))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
