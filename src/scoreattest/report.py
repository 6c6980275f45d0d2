"""
scoreattest.report — CSV output and run summary.

One row per address that went through the pipeline, in input order.
"""

from __future__ import annotations

import csv
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from .models import AttestationOutcome

REPORT_FIELDS = ["address", "score", "txHash", "error"]


def write_report(outcomes: Iterable[AttestationOutcome], path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=REPORT_FIELDS)
        writer.writeheader()
        for outcome in outcomes:
            writer.writerow(outcome.to_row())
    return path


@dataclass
class RunSummary:
    """Counts for a finished run."""
    total: int = 0
    succeeded: int = 0
    failed: int = 0
    zero_scores: int = 0
    failures: list[AttestationOutcome] = field(default_factory=list)

    @property
    def success_rate(self) -> float:
        return self.succeeded / self.total if self.total > 0 else 0.0

    def summary(self) -> dict:
        return {
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "zero_scores": self.zero_scores,
            "success_rate": round(self.success_rate, 4),
            "failures": [
                {"address": o.address, "error": o.error}
                for o in self.failures
            ],
        }


def summarize(outcomes: Iterable[AttestationOutcome]) -> RunSummary:
    """Tally outcomes. Zero-score rows are counted as failed too."""
    summary = RunSummary()
    for outcome in outcomes:
        summary.total += 1
        if outcome.succeeded:
            summary.succeeded += 1
            continue
        summary.failed += 1
        summary.failures.append(outcome)
        if outcome.zero_score:
            summary.zero_scores += 1
    return summary
