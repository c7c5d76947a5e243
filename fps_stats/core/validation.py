"""Monitor configuration validation.

Invalid parameters do not raise: the monitor logs the messages and
stays inert.
"""

import math
from dataclasses import dataclass
from numbers import Real

from .constants import FPS_NORMAL
from .model import EventKind, MonitorConfig


@dataclass
class ValidationResult:
    """Result of a validation check.

    Attributes:
        valid: True if validation passed
        errors: List of error messages if validation failed
    """

    valid: bool
    errors: list[str]

    @classmethod
    def success(cls) -> "ValidationResult":
        """Create a successful validation result."""
        return cls(valid=True, errors=[])

    @classmethod
    def failure(cls, *errors: str) -> "ValidationResult":
        """Create a failed validation result with error messages."""
        return cls(valid=False, errors=list(errors))

    def __bool__(self) -> bool:
        """Allow using result in boolean context."""
        return self.valid


def _is_number(value: object) -> bool:
    """True for finite real numbers (bool excluded)."""
    return (
        isinstance(value, Real)
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def validate_collect_window(
    collect_interval: object,
    collect_duration: object,
) -> ValidationResult:
    """Validate aggregation period and collection window.

    Checks:
    - Both are positive finite numbers
    - collect_interval <= collect_duration

    Returns:
        ValidationResult indicating success or failure
    """
    if not (_is_number(collect_interval) and _is_number(collect_duration)) or (
        collect_interval <= 0 or collect_duration <= 0
    ):
        return ValidationResult.failure("collect_interval 和 collect_duration 必须是正数")

    if collect_interval > collect_duration:
        return ValidationResult.failure(
            "collect_interval 必须不大于 collect_duration 以采集正确的样本数"
        )

    return ValidationResult.success()


def validate_fraction(value: object, name: str) -> ValidationResult:
    """Validate that ``value`` is a number in [0, 1]."""
    if not _is_number(value) or not 0 <= value <= 1:
        return ValidationResult.failure(f"{name} 必须是[0, 1]之间的小数")
    return ValidationResult.success()


def validate_low_threshold(value: object) -> ValidationResult:
    """Validate the absolute fps floor.

    0 means unset. A set value must be positive and below the
    normal display rate, otherwise every sample would count as low.
    """
    if not _is_number(value):
        return ValidationResult.failure("low_threshold 必须是数字")
    if value and (value < 0 or value >= FPS_NORMAL):
        return ValidationResult.failure(
            f"low_threshold 必须是小于额定帧率({FPS_NORMAL})的正数"
        )
    return ValidationResult.success()


def validate_monitor_config(config: MonitorConfig) -> ValidationResult:
    """Validate a complete monitor configuration.

    Args:
        config: Configuration to check

    Returns:
        ValidationResult collecting every problem found
    """
    errors: list[str] = []

    for result in (
        validate_collect_window(config.collect_interval, config.collect_duration),
        validate_low_threshold(config.low_threshold),
        validate_fraction(config.low_threshold_percent, "low_threshold_percent"),
        validate_fraction(config.low_sample_percent, "low_sample_percent"),
    ):
        errors.extend(result.errors)

    max_count = config.collect_max_count
    if not isinstance(max_count, int) or isinstance(max_count, bool) or max_count < 0:
        errors.append("collect_max_count 必须是非负整数")

    for kind in config.monitor_events:
        if not isinstance(kind, EventKind) or kind is EventKind.BLUR:
            errors.append(f"不支持的触发事件: {kind!r}")

    if config.report is not None and not callable(config.report):
        errors.append("report 必须是可调用对象")

    if errors:
        return ValidationResult.failure(*errors)

    return ValidationResult.success()
