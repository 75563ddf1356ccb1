"""Data-quality checks run on raw series before analysis."""

from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from .logging_config import get_logger
from .schemas import DataQualityReport, TimeGap

logger = get_logger(__name__)


def calculate_data_quality(values: Sequence[Any]) -> Optional[DataQualityReport]:
    """Summarize completeness, sign and noise of a numeric series.

    A spike is an interior valid point that differs from both of its valid
    neighbours by more than three standard deviations.

    Args:
        values: Numeric series; None, NaN and infinite values count as missing

    Returns:
        DataQualityReport, or None for an empty series
    """
    if values is None or len(values) == 0:
        return None

    data = np.array([np.nan if v is None else v for v in values], dtype=float)
    valid = data[np.isfinite(data)]
    total_count = len(data)
    valid_count = len(valid)

    if valid_count == 0:
        return DataQualityReport(
            valid_count=0,
            total_count=total_count,
            completeness=0.0,
            negative_count=0,
            negative_percentage=0.0,
            spike_count=0,
            min=float("nan"),
            max=float("nan"),
            mean=float("nan"),
            std=float("nan"),
        )

    negative_count = int(np.sum(valid < 0))
    std = float(np.std(valid))

    threshold = 3 * std
    spikes = 0
    for i in range(1, valid_count - 1):
        if (
            abs(valid[i] - valid[i - 1]) > threshold
            and abs(valid[i] - valid[i + 1]) > threshold
        ):
            spikes += 1

    return DataQualityReport(
        valid_count=valid_count,
        total_count=total_count,
        completeness=valid_count / total_count * 100.0,
        negative_count=negative_count,
        negative_percentage=negative_count / valid_count * 100.0,
        spike_count=spikes,
        min=float(np.min(valid)),
        max=float(np.max(valid)),
        mean=float(np.mean(valid)),
        std=std,
    )


def detect_time_gaps(
    times: Sequence[float], tolerance_factor: float = 2.1
) -> Tuple[List[TimeGap], float]:
    """Find intervals between samples that exceed the typical sampling step.

    The typical step is the median step over the first 1000 intervals.

    Args:
        times: Ordered sample times
        tolerance_factor: Multiple of the typical step counted as a gap

    Returns:
        Tuple of (gaps, typical_step)
    """
    if times is None or len(times) < 2:
        return [], 0.0

    t = np.asarray(times, dtype=float)
    steps = np.abs(np.diff(t))
    typical_step = float(np.sort(steps[:1000])[min(len(steps), 1000) // 2])
    tolerance = typical_step * tolerance_factor

    gaps = [
        TimeGap(
            start_time=float(t[i]),
            end_time=float(t[i + 1]),
            gap_size=float(steps[i]),
            index=int(i),
        )
        for i in np.flatnonzero(steps > tolerance)
    ]

    if gaps:
        logger.debug(f"Found {len(gaps)} time gaps (typical step {typical_step:g})")
    return gaps, typical_step
