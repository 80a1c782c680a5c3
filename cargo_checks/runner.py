"""
runner.py

Responsibility: Run the steps one after another, stopping at the first failure.

Rules:
- Steps run strictly in the order given; each blocks until its process exits.
- Child processes inherit stdin/stdout/stderr and the environment untouched.
  Nothing is captured, filtered or added to the tool's own output.
- Every exit status is checked before the next step starts. The first
  non-zero status raises `StepFailed` carrying that exact status.
- A program that cannot be started maps to the shell's statuses (127 when not
  found, 126 when not executable); a child killed by a signal maps to 128+N.

This module intentionally does NOT know about configuration files or CLI parsing.
"""

from __future__ import annotations

import logging
import signal
import subprocess
import threading
from pathlib import Path
from typing import Sequence

from cargo_checks.steps import Step

log = logging.getLogger(__name__)

EXIT_NOT_EXECUTABLE = 126
EXIT_NOT_FOUND = 127


class CLIError(RuntimeError):
    pass


class StepFailed(CLIError):
    def __init__(self, step: Step, returncode: int) -> None:
        super().__init__(f"Step {step.name!r} failed with exit status {returncode}: {step.command_line}")
        self.step = step
        self.returncode = returncode


def _normalize_status(returncode: int) -> int:
    # subprocess reports death by signal N as -N; the shell reports 128+N.
    if returncode < 0:
        return 128 - returncode
    return returncode


def _wait(proc: subprocess.Popen) -> int:
    # Ctrl-C goes to the whole foreground group; the child decides how to exit.
    restore = threading.current_thread() is threading.main_thread()
    previous = signal.signal(signal.SIGINT, signal.SIG_IGN) if restore else None
    try:
        while True:
            try:
                return proc.wait()
            except KeyboardInterrupt:
                # Delivered before SIG_IGN was installed.
                continue
    finally:
        if restore and previous is not None:
            signal.signal(signal.SIGINT, previous)


def _run(step: Step, *, cwd: Path | None) -> int:
    """
    Run one step to completion and return its exit status.
    """
    try:
        proc = subprocess.Popen(list(step.args), cwd=None if cwd is None else str(cwd))
    except FileNotFoundError:
        log.info("%s: command not found: %s", step.name, step.args[0])
        return EXIT_NOT_FOUND
    except OSError as e:
        log.info("%s: cannot execute %s: %s", step.name, step.args[0], e.strerror or e)
        return EXIT_NOT_EXECUTABLE
    return _normalize_status(_wait(proc))


def run_steps(steps: Sequence[Step], *, cwd: str | Path | None = None) -> list[str]:
    """
    Run `steps` in order and return the names of the steps that ran.

    Raises `StepFailed` for the first step with a non-zero status; no later
    step is started. A missing `cwd` raises `CLIError` before anything runs.
    """
    workdir = None if cwd is None else Path(cwd)
    if workdir is not None and not workdir.is_dir():
        raise CLIError(f"Workdir does not exist: {workdir}")
    done: list[str] = []
    for step in steps:
        log.info("Running %s: %s", step.name, step.command_line)
        status = _run(step, cwd=workdir)
        if status != 0:
            log.info("%s failed with exit status %d", step.name, status)
            raise StepFailed(step, status)
        log.info("%s passed", step.name)
        done.append(step.name)
    return done
