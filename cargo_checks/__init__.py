"""
cargo_checks package

This package implements the pre-push check sequence for a cargo workspace as a
CLI-first utility.

Key responsibilities are split across modules:
- `steps.py`: the fixed, ordered catalogue of checks (fmt, clippy, test, build)
- `config.py`: optional YAML settings (cargo program, working directory)
- `runner.py`: fail-fast sequential execution of the steps
- `cli.py`: CLI entrypoint and orchestration (config -> steps -> run -> exit status)
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
