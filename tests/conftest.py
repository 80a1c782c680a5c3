from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest


@dataclass
class _FakeProcess:
    returncode: int

    def wait(self) -> int:
        return self.returncode


@dataclass
class FakePopen:
    """Stands in for subprocess.Popen; outcome per cargo subcommand (args[1])."""

    outcomes: dict[str, int | BaseException] = field(default_factory=dict)
    calls: list[dict[str, Any]] = field(default_factory=list)

    def __call__(self, args: list[str], **kwargs: Any) -> _FakeProcess:
        self.calls.append({"args": list(args), **kwargs})
        outcome = self.outcomes.get(args[1], 0)
        if isinstance(outcome, BaseException):
            raise outcome
        return _FakeProcess(outcome)

    @property
    def subcommands(self) -> list[str]:
        return [c["args"][1] for c in self.calls]


@pytest.fixture
def fake_run(monkeypatch: pytest.MonkeyPatch) -> FakePopen:
    fake = FakePopen()
    monkeypatch.setattr("cargo_checks.runner.subprocess.Popen", fake)
    return fake
