#!/usr/bin/env python3
"""
Lint and test runner for sound-inference.

Wraps ruff, bandit and pytest behind one entry point, run through uv.
"""

import argparse
import os
import subprocess
import sys
from pathlib import Path

SOURCE_DIRS = ["src", "tests", "scripts"]


def run_step(title: str, cmd: list[str]) -> bool:
    """Run one tool and report whether it succeeded."""
    print("=" * 60)
    print(title)
    print("=" * 60)
    print(f"$ {' '.join(cmd)}")
    try:
        result = subprocess.run(cmd, check=True, capture_output=True, text=True)  # nosec B603
    except FileNotFoundError:
        print(f"❌ {cmd[0]} not found on PATH")
        return False
    except subprocess.CalledProcessError as e:
        print(f"❌ exited with {e.returncode}")
        if e.stdout:
            print(e.stdout)
        if e.stderr:
            print(e.stderr)
        return False
    if result.stdout:
        print(result.stdout)
    return True


def main() -> int:
    parser = argparse.ArgumentParser(description="Run linting, security checks and tests")
    parser.add_argument("--check", action="store_true", help="Ruff lint and format check (default)")
    parser.add_argument("--fix", action="store_true", help="Apply ruff fixes and formatting")
    parser.add_argument("--security", action="store_true", help="Scan src/ with bandit")
    parser.add_argument("--tests", action="store_true", help="Run the unit tests")
    parser.add_argument("--all", action="store_true", help="Fix, scan and test")
    parser.add_argument("paths", nargs="*", help="Restrict ruff to these paths")
    args = parser.parse_args()

    if not any([args.check, args.fix, args.security, args.tests, args.all]):
        args.check = True

    os.chdir(Path(__file__).resolve().parent.parent)
    paths = args.paths or SOURCE_DIRS
    steps: list[tuple[str, list[str]]] = []

    if args.check:
        steps.append(("RUFF CHECK", ["uv", "run", "ruff", "check", *paths]))
        steps.append(("RUFF FORMAT CHECK", ["uv", "run", "ruff", "format", "--check", *paths]))
    if args.fix or args.all:
        steps.append(("RUFF FIX", ["uv", "run", "ruff", "check", "--fix", *paths]))
        steps.append(("RUFF FORMAT", ["uv", "run", "ruff", "format", *paths]))
    if args.security or args.all:
        steps.append(("BANDIT", ["uv", "run", "bandit", "-c", "pyproject.toml", "-r", "src"]))
    if args.tests or args.all:
        steps.append(("PYTEST", ["uv", "run", "pytest", "-q"]))

    failed = [title for title, cmd in steps if not run_step(title, cmd)]

    if failed:
        print(f"\n❌ Failed: {', '.join(failed)}")
        return 1
    print("\n✅ All checks passed!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
