"""
age_filter.py
~~~~~~~~~~~~~
Decides whether a file is old enough to be purged.
"""
from dataclasses import dataclass
from datetime import timedelta

MAX_AGE = timedelta(hours=24)

def compute_cutoff(now: float) -> float:
    """Epoch timestamp 24 hours before `now`."""
    return now - MAX_AGE.total_seconds()

def is_eligible(last_modified: float, cutoff: float) -> bool:
    # Inclusive: a file modified exactly at the cutoff goes.
    return last_modified <= cutoff

@dataclass(frozen=True)
class AgeFilter:
    """Holds the cutoff for one run so every file is judged against the same instant."""
    cutoff: float

    @classmethod
    def at(cls, now: float) -> "AgeFilter":
        return cls(cutoff=compute_cutoff(now))

    def accepts(self, last_modified: float) -> bool:
        return is_eligible(last_modified, self.cutoff)
