#!/usr/bin/env python3
"""Run the photo editor test suite with Qt in offscreen mode.

Usage:
  python scripts/run_tests_offscreen.py [--timeout SECONDS] [--verbose] [--] [pytest args...]

Examples:
  python scripts/run_tests_offscreen.py tests/test_workflow_controller.py
  python scripts/run_tests_offscreen.py -- -k stale -q
"""

from __future__ import annotations

import argparse
import os
import shlex
import subprocess
import sys


def main() -> int:
    p = argparse.ArgumentParser(description="Run pytest headless (QT_QPA_PLATFORM=offscreen)")
    p.add_argument("--timeout", type=int, default=180, help="Maximum seconds for the whole run")
    p.add_argument("--verbose", action="store_true", help="Don't use -q (quiet)")
    p.add_argument("pytest_args", nargs=argparse.REMAINDER, help="Extra pytest args")
    args = p.parse_args()

    env = os.environ.copy()
    env.setdefault("QT_QPA_PLATFORM", "offscreen")
    # Never reach the real service from tests.
    env.pop("GEMINI_API_KEY", None)
    env.pop("GOOGLE_API_KEY", None)

    cmd = ["uv", "run", "python", "-m", "pytest"]
    if not args.verbose:
        cmd += ["-q", "-x"]
    # Per-test limit through pytest-timeout; the worker tests wait on real threads.
    cmd.append(f"--timeout={min(60, args.timeout)}")
    cmd += [a for a in args.pytest_args if a != "--"]

    print("Running:", " ".join(shlex.quote(c) for c in cmd))
    try:
        return subprocess.run(cmd, env=env, check=False, timeout=args.timeout).returncode
    except subprocess.TimeoutExpired:
        print(f"pytest run timed out after {args.timeout} seconds", file=sys.stderr)
        return 124


if __name__ == "__main__":
    raise SystemExit(main())
