"""Seeding and on-disk layout of self-test runs.

A run directory holds the cipher parameters (``spn_spec.json``), the full
evaluation report (``report.json``) and its text summary (``summary.txt``).
"""
from __future__ import annotations

import json
import random
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

import numpy as np


def set_global_seed(seed: int) -> None:
    random.seed(seed)
    np.random.seed(seed)


@dataclass(frozen=True)
class RunPaths:
    run_dir: Path

    @property
    def spec_json(self) -> Path:
        return self.run_dir / "spn_spec.json"

    @property
    def report_json(self) -> Path:
        return self.run_dir / "report.json"

    @property
    def summary_txt(self) -> Path:
        return self.run_dir / "summary.txt"

    def save(self, spec: Dict[str, Any], report: Dict[str, Any], summary: str) -> None:
        write_json(self.spec_json, spec)
        write_json(self.report_json, report)
        self.summary_txt.write_text(summary, encoding="utf-8")


def make_run_dir(runs_root: str | Path, spec_name: str) -> RunPaths:
    # 20260108T123456Z_SPN-16
    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    safe = re.sub(r"[^A-Za-z0-9_-]", "_", spec_name.strip())[:60]
    run_dir = Path(runs_root) / f"{stamp}_{safe}"
    run_dir.mkdir(parents=True, exist_ok=True)
    return RunPaths(run_dir)


def write_json(path: str | Path, obj: Any) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2, sort_keys=True), encoding="utf-8")


def read_json(path: str | Path) -> Any:
    return json.loads(Path(path).read_text(encoding="utf-8"))
