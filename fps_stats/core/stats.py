"""Low-fps classification of collected samples."""

import math
from typing import Sequence

import numpy as np

from .model import FpsStats


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with halves going up (2.5 -> 3), unlike the builtin round().

    Args:
        value: Value to round
        ndigits: Decimal places to keep

    Returns:
        Rounded value
    """
    scale = 10 ** ndigits
    return math.floor(value * scale + 0.5) / scale


def period_fps(frames: int, elapsed_ms: float) -> int:
    """Average fps over one aggregation period, rounded half-up."""
    if elapsed_ms <= 0:
        return 0
    return int(round_half_up(frames / elapsed_ms * 1000))


def effective_threshold(
    low_threshold: float,
    rated_fps: int,
    low_threshold_percent: float,
) -> float:
    """Fps floor: the absolute threshold when set, else a share of the rated fps."""
    return low_threshold or rated_fps * low_threshold_percent


def classify_samples(
    samples: Sequence[int],
    threshold: float,
    low_sample_percent: float,
    rated_fps: int,
    frame_callback_count: int = 0,
) -> FpsStats:
    """Build the verdict for one collection window.

    A sample is low when ``fps <= threshold``. A window without any
    sample is classified as low.

    Args:
        samples: Fps samples in chronological order
        threshold: Fps floor
        low_sample_percent: Share of low samples needed for a low verdict
        rated_fps: Inferred rated fps to report
        frame_callback_count: Frame callback invocations to report

    Returns:
        FpsStats verdict
    """
    values = np.asarray(samples, dtype=np.int64)
    low_mask = values <= threshold
    low_values = values[low_mask]

    low_percent = float(low_mask.mean()) if values.size else 0.0
    is_low = values.size == 0 or low_percent >= low_sample_percent

    return FpsStats(
        is_low=bool(is_low),
        samples=tuple(int(v) for v in values),
        low_samples=tuple(int(v) for v in low_values),
        low_percent=round_half_up(low_percent, 1),
        rated_fps=rated_fps,
        frame_callback_count=frame_callback_count,
    )
