#!/usr/bin/env python3
"""
Run lint, type and test gates for contentkit and write a JSON report.

Exit codes: 0 all gates pass, 1 a gate failed, 2 the report could not be written.
"""

import datetime
import json
import subprocess
import sys
from pathlib import Path
from typing import TypedDict

# --- Types ---


class GateResult(TypedDict):
    status: str  # "pass" | "fail"
    exit_code: int
    output: str
    command: list[str]


# --- Config ---

ARTIFACTS_DIR = Path("artifacts")

GATES: dict[str, list[str]] = {
    "lint": [sys.executable, "-m", "ruff", "check", "contentkit", "tests"],
    "format": [sys.executable, "-m", "ruff", "format", "--check", "contentkit", "tests"],
    "types": [sys.executable, "-m", "mypy", "contentkit"],
    "tests": [
        sys.executable,
        "-m",
        "pytest",
        "-q",
        "--json-report",
        f"--json-report-file={ARTIFACTS_DIR / 'pytest-report.json'}",
    ],
}

# --- Execution ---


def run_gate(name: str, cmd: list[str]) -> GateResult:
    print(f"[{name}] {' '.join(cmd[1:])}", end=" ... ", flush=True)
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
    except OSError as e:
        print("ERROR")
        return {"status": "fail", "exit_code": -1, "output": str(e), "command": cmd}

    status = "pass" if proc.returncode == 0 else "fail"
    print(status.upper())
    return {
        "status": status,
        "exit_code": proc.returncode,
        "output": proc.stdout + proc.stderr,
        "command": cmd,
    }


def main() -> int:
    ARTIFACTS_DIR.mkdir(exist_ok=True)
    results = {name: run_gate(name, cmd) for name, cmd in GATES.items()}
    failed = [name for name, res in results.items() if res["status"] != "pass"]

    report = {
        "timestamp_utc": datetime.datetime.now(datetime.UTC).isoformat(),
        "overall_status": "fail" if failed else "pass",
        "gates": results,
    }
    report_path = ARTIFACTS_DIR / "quality_gates_run.json"
    try:
        report_path.write_text(json.dumps(report, indent=2))
    except OSError as e:
        print(f"Could not write {report_path}: {e}")
        return 2

    for name in failed:
        print(f"\n--- {name} (exit {results[name]['exit_code']}) ---")
        print(results[name]["output"].strip())

    print(f"\nReport: {report_path}")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
