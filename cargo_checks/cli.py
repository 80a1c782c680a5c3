"""
cli.py

Responsibility: CLI entrypoint for cargo-checks.

High-level flow (no arguments required):
1) Load settings (only from --config, then CLI overrides)
2) Build the fixed step list: fmt -> clippy -> test -> build
3) Run the steps, stopping at the first failure
4) Exit with 0, or with the failing step's exact status

This module should orchestrate behavior but keep concerns isolated:
- Settings: `config.py`
- Step catalogue: `steps.py`
- Execution: `runner.py`
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from cargo_checks import __version__
from cargo_checks.config import ConfigError, Settings, load_settings
from cargo_checks.runner import CLIError, StepFailed, run_steps
from cargo_checks.steps import Step, default_steps

EXIT_USAGE = 2

log = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("cargo_checks")
    logger.setLevel(logging.INFO if verbose else logging.WARNING)
    # Bind to the current sys.stderr on every call.
    for old in list(logger.handlers):
        logger.removeHandler(old)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def _resolve_settings(args: argparse.Namespace) -> Settings:
    settings = load_settings(args.config)
    settings = settings.with_overrides(cargo=args.cargo, workdir=args.workdir)
    if settings.workdir is not None and not settings.workdir.is_dir():
        raise ConfigError(f"Workdir does not exist: {settings.workdir}")
    return settings


def _list_steps(steps: Sequence[Step]) -> None:
    for step in steps:
        print(step.command_line)


def check_cmd(args: argparse.Namespace) -> int:
    settings = _resolve_settings(args)
    steps = default_steps(settings.cargo)

    if args.list:
        _list_steps(steps)
        return 0

    done = run_steps(steps, cwd=settings.workdir)
    log.info("All %d steps passed: %s", len(done), ", ".join(done))
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="cargo-checks",
        description="Run cargo fmt --check, clippy, test and build in order, stopping at the first failure",
    )
    p.add_argument("--config", default=None, help="YAML settings file (default: none)")
    p.add_argument("--cargo", default=None, help="Cargo program to invoke (default: cargo)")
    p.add_argument("--workdir", default=None, help="Directory to run the checks in (default: current directory)")
    p.add_argument("--list", action="store_true", help="Print the commands that would run and exit")
    p.add_argument("-v", "--verbose", action="store_true", help="Log each step to stderr")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.set_defaults(func=check_cmd)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(bool(args.verbose))
    try:
        return int(args.func(args))
    except ConfigError as e:
        print(f"cargo-checks: {e}", file=sys.stderr)
        return EXIT_USAGE
    except StepFailed as e:
        log.info("%s", e)
        return e.returncode
    except CLIError as e:
        print(f"cargo-checks: {e}", file=sys.stderr)
        return EXIT_USAGE


if __name__ == "__main__":
    raise SystemExit(main())
