"""Rated refresh-rate inference.

No API reports the display's native refresh rate, so it is inferred
from inter-frame durations: each duration is bucketed into a tier and
the first tier (fastest first) that collects more than RATED_FRAME_NUM
observations freezes the rate for the lifetime of the estimator.
"""

from typing import Optional

from .constants import HIGH_FRAME_TIME, LOW_FRAME_TIME, NORMAL_FRAME_TIME, RATED_FRAME_NUM
from .logging import Logger, get_logger
from .model import RefreshTier


def classify_frame_time(frame_time: float) -> RefreshTier:
    """Map an inter-frame duration (ms) to its refresh tier.

    Bands are compared in ascending order, so shorter durations land
    in faster tiers.
    """
    if frame_time < HIGH_FRAME_TIME:
        return RefreshTier.ULTRA_HIGH
    if frame_time < NORMAL_FRAME_TIME:
        return RefreshTier.HIGH
    if frame_time < LOW_FRAME_TIME:
        return RefreshTier.NORMAL
    return RefreshTier.LOW


class RefreshRateEstimator:
    """Tier counters plus a freeze-once rated refresh rate.

    One instance is owned by the monitor and shared by reference with
    the sample collector, which is the only writer.
    """

    def __init__(
        self,
        evidence_threshold: int = RATED_FRAME_NUM,
        logger: Optional[Logger] = None,
    ) -> None:
        self._evidence_threshold = evidence_threshold
        self._logger = logger if logger is not None else get_logger()
        self._counts: dict[RefreshTier, int] = {tier: 0 for tier in RefreshTier}
        self._rated_fps = 0
        self._frozen = False

    @property
    def is_frozen(self) -> bool:
        """Whether the rated rate has been fixed."""
        return self._frozen

    @property
    def counts(self) -> dict[RefreshTier, int]:
        """Snapshot of the tier counters."""
        return dict(self._counts)

    def observe(self, frame_time: float) -> None:
        """Count one inter-frame duration (ms). No-op once frozen."""
        if self._frozen:
            return
        self._counts[classify_frame_time(frame_time)] += 1

    def try_freeze(self) -> int:
        """Attempt to fix the rated rate from the counters collected so far.

        Tiers are checked fastest to slowest; the first whose counter is
        strictly above the evidence threshold wins. When none qualifies
        all counters are reset so stale noise cannot accumulate across
        collection windows.

        Returns:
            The rated fps, or 0 if still unrated
        """
        if self._frozen:
            return self._rated_fps

        for tier in RefreshTier:
            if self._counts[tier] > self._evidence_threshold:
                self._rated_fps = tier.value
                self._frozen = True
                self._logger.info(f"额定帧率确定: {tier.name}", rated_fps=self._rated_fps)
                return self._rated_fps

        self._logger.debug(
            "帧时间样本不足,无法确定额定帧率: "
            + ", ".join(f"{t.name}={n}" for t, n in self._counts.items())
        )
        for tier in self._counts:
            self._counts[tier] = 0
        return 0

    def current_rate(self) -> int:
        """Return the frozen rated fps without side effects (0 if unrated)."""
        return self._rated_fps

    def rated_fps(self) -> int:
        """Rated fps, freezing it first if the evidence allows."""
        return self.try_freeze()
