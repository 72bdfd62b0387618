"""
Scan configuration.

Controls how a batch of candidates is processed: what happens when one
candidate cannot be decoded, how many worker threads run recoveries, and an
optional wall-clock budget after which no further candidates are dispatched.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

ON_ERROR_SKIP = "skip"
ON_ERROR_ABORT = "abort"


@dataclass(frozen=True)
class ScanConfig:
    """
    Batch policy for the Scanner.

    Args:
        on_error:     "skip" records a CandidateError and continues with the
                      rest of the batch; "abort" re-raises the first error.
        max_workers:  Number of worker threads; 1 scans sequentially.
        time_budget:  Seconds after which no new candidates are dispatched
                      (the result is marked truncated). None = unbounded.
    """
    on_error: str = ON_ERROR_SKIP
    max_workers: int = 1
    time_budget: float | None = None

    def __post_init__(self) -> None:
        if self.on_error not in (ON_ERROR_SKIP, ON_ERROR_ABORT):
            raise ValueError(
                f"on_error must be '{ON_ERROR_SKIP}' or '{ON_ERROR_ABORT}', got {self.on_error!r}"
            )
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.time_budget is not None and self.time_budget <= 0:
            raise ValueError(f"time_budget must be positive, got {self.time_budget}")

    @property
    def abort_on_error(self) -> bool:
        return self.on_error == ON_ERROR_ABORT

    @classmethod
    def from_env(cls, prefix: str = "ECPDKSAP_SCAN_") -> ScanConfig:
        """
        Load from ECPDKSAP_SCAN_ON_ERROR, ECPDKSAP_SCAN_WORKERS and
        ECPDKSAP_SCAN_TIME_BUDGET; unset variables keep the defaults.
        """
        budget = os.getenv(f"{prefix}TIME_BUDGET")
        return cls(
            on_error=os.getenv(f"{prefix}ON_ERROR", ON_ERROR_SKIP).strip().lower(),
            max_workers=int(os.getenv(f"{prefix}WORKERS", "1")),
            time_budget=float(budget) if budget else None,
        )
