"""
steps.py

Responsibility: Define the fixed catalogue of checks and their order.

The order is part of the contract: format check, lint, test, build. Nothing in
the package reorders, skips or adds steps; callers may only choose which cargo
program runs them.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass

DEFAULT_CARGO = "cargo"


@dataclass(frozen=True)
class Step:
    """A single external invocation: program first, then its fixed flags."""

    name: str
    description: str
    args: tuple[str, ...]

    @property
    def command_line(self) -> str:
        return shlex.join(self.args)


def default_steps(cargo: str = DEFAULT_CARGO) -> tuple[Step, ...]:
    """
    Return the four checks, in run order, for the given cargo program.
    """
    if not cargo.strip():
        raise ValueError("cargo program cannot be empty")
    return (
        Step("fmt", "Formatting check", (cargo, "fmt", "--all", "--", "--check")),
        Step("clippy", "Lint", (cargo, "clippy", "--all-targets", "--all-features")),
        Step("test", "Test suite", (cargo, "test", "--all", "--verbose")),
        Step("build", "Build", (cargo, "build", "--all", "--verbose")),
    )
