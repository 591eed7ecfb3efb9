"""
Application Settings

Environment configuration for the analysis pipeline.
"""

import os
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from solution_deps.domain.services.metrics_aggregator import (
    DEFAULT_COMPLEXITY_BANDS,
    DEFAULT_PRECISION,
    DEFAULT_TOP_N,
)


def _parse_bands(raw: str) -> Tuple[float, float, float]:
    parts = [p.strip() for p in raw.split(",") if p.strip()]
    if len(parts) != 3:
        raise ValueError(f"SOLUTION_DEPS_COMPLEXITY_BANDS needs three comma-separated numbers, got {raw!r}")
    return tuple(float(p) for p in parts)  # type: ignore[return-value]


@dataclass(frozen=True)
class Settings:
    """Application settings from environment."""

    # Metrics policy
    top_n: int = DEFAULT_TOP_N
    precision: Optional[int] = DEFAULT_PRECISION
    complexity_bands: Tuple[float, float, float] = DEFAULT_COMPLEXITY_BANDS

    # Logging
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        bands = os.getenv("SOLUTION_DEPS_COMPLEXITY_BANDS")
        precision = os.getenv("SOLUTION_DEPS_PRECISION")
        return cls(
            top_n=int(os.getenv("SOLUTION_DEPS_TOP_N", str(DEFAULT_TOP_N))),
            precision=(
                None if precision is not None and precision.lower() == "none"
                else int(precision) if precision is not None
                else DEFAULT_PRECISION
            ),
            complexity_bands=_parse_bands(bands) if bands else DEFAULT_COMPLEXITY_BANDS,
            log_level=os.getenv("SOLUTION_DEPS_LOG_LEVEL", "INFO").upper(),
        )

    def with_overrides(self, **overrides) -> "Settings":
        """Copy with every non-None override applied (CLI flags over environment)."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
