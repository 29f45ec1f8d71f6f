"""Metric/date-range selection over a station's measurements."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

import pandas as pd

from airquality_analysis.data_access.records import Measurement

FRAME_COLUMNS = ["metric", "timestamp", "value"]


def measurements_to_frame(measurements: Iterable[Measurement]) -> pd.DataFrame:
    """Tabulate measurements, one row per record, in input order."""
    rows = [(m.metric, m.timestamp, m.value) for m in measurements]
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def measurements_to_series(measurements: Sequence[Measurement]) -> pd.Series:
    """Timestamp-indexed values, e.g. for a chart. Assumes a single metric."""
    name = measurements[0].metric if measurements else None
    index = pd.Index([m.timestamp for m in measurements], name="timestamp")
    return pd.Series([m.value for m in measurements], index=index, name=name, dtype=float)


def available_metrics(measurements: Iterable[Measurement]) -> list[str]:
    """Distinct metric names present, sorted."""
    return sorted({m.metric for m in measurements})


def filter_measurements(
    measurements: Sequence[Measurement],
    metric: str,
    start: Optional[str] = "",
    end: Optional[str] = "",
) -> list[Measurement]:
    """Select one metric within ``[start, end]`` and sort chronologically.

    Bounds compare as plain strings against the fixed-width timestamps, so
    ``end="2024-01-02"`` excludes "2024-01-02 05:00". Empty or ``None`` bounds are open.
    Equal timestamps keep their input order.
    """
    measurements = list(measurements)
    frame = measurements_to_frame(measurements)
    mask = frame["metric"] == metric
    if start:
        mask &= frame["timestamp"] >= start
    if end:
        mask &= frame["timestamp"] <= end
    selected = frame[mask].sort_values("timestamp", kind="mergesort")
    return [measurements[i] for i in selected.index]
