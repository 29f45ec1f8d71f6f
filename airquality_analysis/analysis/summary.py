"""Descriptive statistics over a filtered, chronologically sorted series."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

import pandas as pd

from airquality_analysis.data_access.records import Measurement

DEFAULT_UNIT = "µg/m³"


class InsufficientDataError(ValueError):
    """Raised when a series is too short to analyze or chart."""


class Trend(str, Enum):
    RISING = "rising"
    FALLING = "falling"
    FLAT = "flat"


@dataclass
class MeasurementSummary:
    metric: str
    count: int
    mean: float
    min_value: float
    min_timestamp: str
    max_value: float
    max_timestamp: str
    trend: Trend
    first_timestamp: str
    last_timestamp: str


def analyze_measurements(measurements: Sequence[Measurement]) -> MeasurementSummary:
    """Summarize a sorted series: mean, extremes with their dates, and trend.

    Trend compares only the first and last values. Ties on min/max report the
    earliest occurrence.
    """
    if len(measurements) < 2:
        raise InsufficientDataError(
            f"Need at least 2 measurements to analyze, got {len(measurements)}."
        )

    # Positional index keeps idxmin/idxmax unambiguous when timestamps repeat.
    values = pd.Series([m.value for m in measurements], dtype=float)
    min_pos = int(values.idxmin())
    max_pos = int(values.idxmax())
    first, last = measurements[0], measurements[-1]

    if first.value < last.value:
        trend = Trend.RISING
    elif first.value > last.value:
        trend = Trend.FALLING
    else:
        trend = Trend.FLAT

    return MeasurementSummary(
        metric=first.metric,
        count=len(measurements),
        mean=float(values.mean()),
        min_value=float(values.iloc[min_pos]),
        min_timestamp=measurements[min_pos].timestamp,
        max_value=float(values.iloc[max_pos]),
        max_timestamp=measurements[max_pos].timestamp,
        trend=trend,
        first_timestamp=first.timestamp,
        last_timestamp=last.timestamp,
    )


def format_summary(summary: MeasurementSummary, unit: str = DEFAULT_UNIT) -> str:
    """Render the plain-text analysis report."""
    return "\n".join(
        [
            f"Analysis - {summary.metric}",
            f"Range: {summary.first_timestamp} - {summary.last_timestamp}",
            f"Mean: {summary.mean:.2f} {unit}",
            f"Min: {summary.min_value:.2f} ({summary.min_timestamp})",
            f"Max: {summary.max_value:.2f} ({summary.max_timestamp})",
            f"Trend: {summary.trend.value}",
        ]
    )
