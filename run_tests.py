#!/usr/bin/env python
"""
Test runner script for split-every.

Runs the test suite and optional quality checks with one command, locally or
in CI.

Usage:
    python run_tests.py                    # Run all tests
    python run_tests.py --coverage         # Run with coverage report
    python run_tests.py --all-checks       # Run all quality checks
    python run_tests.py --help             # Show all options
"""

import argparse
import os
import subprocess
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent
SOURCE_TARGETS = ["split_every"]


def _ensure_venv_python():
    """Re-run the script under `.venv` python so pytest inherits the project virtualenv."""
    if os.name == "nt":
        candidate = ROOT_DIR / ".venv" / "Scripts" / "python.exe"
    else:
        candidate = ROOT_DIR / ".venv" / "bin" / "python"

    if candidate.exists():
        candidate = candidate.resolve()
        current = Path(sys.executable).resolve()
        if current != candidate:
            print(f"Re-launching tests under virtual environment: {candidate}")
            os.execv(str(candidate), [str(candidate)] + sys.argv)


def _prepare_environment():
    """Use UTF-8 for child process I/O; the tests feed multi-byte input through stdin."""
    os.environ["PYTHONIOENCODING"] = "utf-8"
    _ensure_venv_python()


def run_command(cmd: list, description: str) -> bool:
    """Run a command and return True if successful."""
    print(f"\n{'='*80}")
    print(f"Running: {description}")
    print(f"Command: {' '.join(cmd)}")
    print(f"{'='*80}\n")

    result = subprocess.run(cmd, cwd=ROOT_DIR)
    success = result.returncode == 0

    print(f"\n{description} - {'PASSED' if success else 'FAILED'}")
    return success


def main():
    _prepare_environment()
    parser = argparse.ArgumentParser(
        description="Run split-every tests and quality checks"
    )
    parser.add_argument(
        "--coverage", action="store_true", help="Run tests with coverage report"
    )
    parser.add_argument(
        "--html-coverage", action="store_true", help="Generate HTML coverage report"
    )
    parser.add_argument("--mypy", action="store_true", help="Run mypy type checking")
    parser.add_argument("--flake8", action="store_true", help="Run flake8 linting")
    parser.add_argument(
        "--black-check", action="store_true", help="Check code formatting with black"
    )
    parser.add_argument(
        "--all-checks",
        action="store_true",
        help="Run all quality checks (tests, mypy, flake8, black)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")

    args = parser.parse_args()

    results = []

    pytest_cmd = [sys.executable, "-m", "pytest", "tests"]
    if args.verbose:
        pytest_cmd.append("-vv")
    if args.coverage or args.html_coverage or args.all_checks:
        pytest_cmd.extend(
            [f"--cov={target}" for target in SOURCE_TARGETS]
            + ["--cov-report=term-missing"]
        )
        if args.html_coverage or args.all_checks:
            pytest_cmd.append("--cov-report=html")
    results.append(run_command(pytest_cmd, "Unit Tests"))

    if args.mypy or args.all_checks:
        mypy_cmd = ["mypy", *SOURCE_TARGETS, "--ignore-missing-imports"]
        results.append(run_command(mypy_cmd, "Type Checking (mypy)"))

    if args.flake8 or args.all_checks:
        flake8_cmd = ["flake8", *SOURCE_TARGETS, "tests", "--max-line-length=120"]
        results.append(run_command(flake8_cmd, "Linting (flake8)"))

    if args.black_check or args.all_checks:
        black_cmd = ["black", "--check", "--line-length=120", *SOURCE_TARGETS, "tests"]
        results.append(run_command(black_cmd, "Code Formatting (black)"))

    print(f"\n{'='*80}")
    print("TEST SUMMARY")
    print(f"{'='*80}")

    passed = sum(results)
    total = len(results)

    print(f"\nPassed: {passed}/{total}")

    if all(results):
        print("\nALL CHECKS PASSED!")
        return 0
    else:
        print("\nSOME CHECKS FAILED")
        return 1


if __name__ == "__main__":
    sys.exit(main())
