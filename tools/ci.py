#!/usr/bin/env python3
# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the CI checks locally: format, lint, type check, tests and build.

Steps can be narrowed with ``--only`` or ``--skip``, e.g.::

    tools/ci.py --only tests
"""

import argparse
import pathlib
import subprocess
import sys
import time
from dataclasses import dataclass

from yachalk import chalk

REPO_ROOT = pathlib.Path(__file__).resolve().parent.parent

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class Step:
    key: str
    title: str
    command: tuple[str, ...]


STEPS: tuple[Step, ...] = (
    Step("format", "Format check", ("uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/")),
    Step("lint", "Lint", ("uv", "run", "ruff", "check", "src/", "tests/", "tools/")),
    Step("types", "Type check", ("uv", "run", "ty", "check", "src/")),
    Step("tests", "Tests", ("uv", "run", "pytest", "--cov=contract_transcode", "--cov-report=term-missing")),
    Step("build", "Build", ("uv", "build")),
)


def select_steps(only: list[str] | None = None, skip: list[str] | None = None) -> list[Step]:
    """Return the steps to run, in pipeline order.

    Raises:
        ValueError: If a step key is not known.
    """
    known = {step.key for step in STEPS}
    unknown = sorted((set(only or []) | set(skip or [])) - known)
    if unknown:
        raise ValueError(f"Unknown step(s): {', '.join(unknown)}. Known: {', '.join(s.key for s in STEPS)}")
    return [step for step in STEPS if (not only or step.key in only) and step.key not in (skip or [])]


def main(argv: list[str] | None = None) -> int:
    """Run the selected CI steps and print a summary."""
    parser = argparse.ArgumentParser(description="Run the CI checks locally.")
    parser.add_argument("--only", nargs="+", metavar="STEP", help="Run only these steps")
    parser.add_argument("--skip", nargs="+", metavar="STEP", help="Skip these steps")
    args = parser.parse_args(argv)

    try:
        steps = select_steps(args.only, args.skip)
    except ValueError as exc:
        print(chalk.red(str(exc)), file=sys.stderr)
        return 2

    results = [_run_step(step) for step in steps]
    _print_summary(results)
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################

_RULE = "=" * 60


def _run_step(step: Step) -> tuple[Step, bool, float]:
    print(f"\n{chalk.blue(_RULE)}\n{chalk.blue(step.title)}\n{chalk.blue(_RULE)}")
    start = time.monotonic()
    proc = subprocess.run(step.command, cwd=REPO_ROOT)
    return step, proc.returncode == 0, time.monotonic() - start


def _print_summary(results: list[tuple[Step, bool, float]]) -> None:
    print(f"\n{chalk.blue(_RULE)}\n{chalk.blue('  Summary')}\n{chalk.blue(_RULE)}")
    for step, passed, elapsed in results:
        status = "PASS" if passed else "FAIL"
        color = chalk.green if passed else chalk.red
        print(color(f"  {status}  {step.title} ({elapsed:.1f}s)"))
    print()


if __name__ == "__main__":
    sys.exit(main())
