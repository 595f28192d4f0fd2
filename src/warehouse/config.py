"""Runtime settings read from the environment.

Each setting is read at the seam that needs it so tests can flip it with
``monkeypatch.setenv`` without re-importing modules.
"""

import os
from enum import Enum
from pathlib import Path


class ProgressPolicy(Enum):
    """How per-line receiving/picking progress treats quantities past the order."""

    ADDITIVE = "additive"  # unclamped, progress may overshoot the ordered quantity
    CLAMPED = "clamped"  # progress is capped at the ordered quantity


DEFAULT_SNAPSHOT_PATH = "data/warehouse.json"
DEFAULT_ADVISOR_TIMEOUT = 10.0


def get_progress_policy() -> ProgressPolicy:
    """Return the configured progress policy (``WAREHOUSE_PROGRESS_POLICY``)."""
    raw = os.getenv("WAREHOUSE_PROGRESS_POLICY", ProgressPolicy.ADDITIVE.value).strip().lower()
    try:
        return ProgressPolicy(raw)
    except ValueError:
        raise ValueError(f"Unknown progress policy: {raw}") from None


def get_snapshot_path() -> Path:
    return Path(os.getenv("WAREHOUSE_SNAPSHOT_PATH", DEFAULT_SNAPSHOT_PATH))


def get_advisor_timeout() -> float:
    """Seconds an advisory call may take before its fallback is used."""
    return float(os.getenv("ADVISOR_TIMEOUT_SECONDS", DEFAULT_ADVISOR_TIMEOUT))


def get_advisor_model() -> str:
    return os.getenv("ADVISOR_MODEL", "gpt-4o-mini")
