"""Statistical outlier screening for numeric series.

Two screening methods are available:
- zscore: values more than ``threshold_sigma`` population standard deviations
  from the mean
- iqr: values outside the Tukey fences ``[q1 - 1.5 IQR, q3 + 1.5 IQR]``

Missing or non-finite entries (None, NaN, +/-inf) are excluded from the
statistics and never flagged, and reported indices always refer to positions
in the original series.
"""

from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from .config import AnalysisConfig, resolve_config
from .logging_config import get_logger
from .schemas import OutlierReport, Sample

logger = get_logger(__name__)

SCREENING_METHODS = ("zscore", "iqr")


def _to_array(values: Sequence[Any]) -> np.ndarray:
    """Convert to a float array with None mapped to NaN."""
    return np.array([np.nan if v is None else v for v in values], dtype=float)


def _bounds(valid: np.ndarray, threshold_sigma: float, method: str) -> Tuple[float, float]:
    if method == "zscore":
        mean = float(np.mean(valid))
        std = float(np.std(valid))
        return mean - threshold_sigma * std, mean + threshold_sigma * std

    ordered = np.sort(valid)
    n = len(ordered)
    q1 = float(ordered[int(np.floor(n * 0.25))])
    q3 = float(ordered[min(int(np.floor(n * 0.75)), n - 1)])
    iqr = q3 - q1
    return q1 - 1.5 * iqr, q3 + 1.5 * iqr


def detect_outliers(
    values: Sequence[Any],
    threshold_sigma: Optional[float] = None,
    method: Optional[str] = None,
    config: Optional[AnalysisConfig] = None,
) -> OutlierReport:
    """Flag entries of ``values`` that lie outside the screening bounds.

    Args:
        values: Numeric series; None, NaN and infinite entries are ignored
        threshold_sigma: Sigma multiplier for the zscore method (default 3)
        method: 'zscore' (default) or 'iqr'
        config: Optional AnalysisConfig supplying the defaults

    Returns:
        OutlierReport with flagged indices and the statistics used

    Example:
        >>> report = detect_outliers([10, 12, 11, 1000, 9, 11], threshold_sigma=2)
        >>> report.indices
        [3]
    """
    cfg = resolve_config(config)
    if threshold_sigma is None:
        threshold_sigma = cfg.screening.threshold_sigma
    if method is None:
        method = cfg.screening.method
    if method not in SCREENING_METHODS:
        raise ValueError(
            f"Unknown outlier method: {method}. Supported: {list(SCREENING_METHODS)}"
        )

    data = _to_array(values)
    valid_mask = np.isfinite(data)
    if not np.any(valid_mask):
        return OutlierReport(method=method)

    valid = data[valid_mask]
    lower, upper = _bounds(valid, threshold_sigma, method)

    outside = valid_mask & ((data < lower) | (data > upper))
    indices: List[int] = [int(i) for i in np.flatnonzero(outside)]

    stats = {
        "mean": float(np.mean(valid)),
        "std": float(np.std(valid)),
        "min": float(np.min(valid)),
        "max": float(np.max(valid)),
        "lower_bound": float(lower),
        "upper_bound": float(upper),
    }

    if indices:
        logger.debug(f"{len(indices)} outliers flagged ({method}) at {indices}")

    return OutlierReport(
        has_outliers=bool(indices),
        count=len(indices),
        indices=indices,
        stats=stats,
        method=method,
    )


def screen_samples(
    samples: Sequence[Sample],
    field: Optional[str] = None,
    threshold_sigma: Optional[float] = None,
    method: Optional[str] = None,
    config: Optional[AnalysisConfig] = None,
) -> Tuple[List[Sample], OutlierReport]:
    """Remove samples whose ``field`` value is an outlier.

    Args:
        samples: Ordered samples
        field: Sample attribute to screen ('pressure', 'rate' or 'time')
        threshold_sigma: Sigma multiplier (zscore method)
        method: Screening method
        config: Optional AnalysisConfig supplying the defaults

    Returns:
        Tuple of (kept samples in their original order, OutlierReport)
    """
    cfg = resolve_config(config)
    if field is None:
        field = cfg.screening.field
    if field not in ("time", "pressure", "rate"):
        raise ValueError(f"Cannot screen samples on field: {field}")

    series = [getattr(sample, field) for sample in samples]
    report = detect_outliers(series, threshold_sigma, method, config=cfg)

    flagged = set(report.indices)
    kept = [sample for i, sample in enumerate(samples) if i not in flagged]

    if flagged:
        logger.info(
            f"Screened out {len(flagged)} of {len(samples)} samples on '{field}'"
        )
    return kept, report
