"""Global constants for fps sampling and classification."""

from typing import Final

# Rated refresh rates per tier
FPS_EX_HIGH: Final[int] = 144
"""超高刷新率屏幕"""

FPS_HIGH: Final[int] = 120
"""高刷新率屏幕"""

FPS_NORMAL: Final[int] = 60
"""普通刷新率屏幕"""

FPS_LOW: Final[int] = 30
"""低刷新率屏幕"""

# Frame time upper bounds (ms, exclusive) per tier
HIGH_FRAME_TIME: Final[float] = 8
NORMAL_FRAME_TIME: Final[float] = 16
LOW_FRAME_TIME: Final[float] = 33

RATED_FRAME_NUM: Final[int] = 3
"""帧时间落入某档位的次数须严格大于此值才能确定额定帧率"""

# Monitor defaults
LOW_THRESHOLD_DEFAULT: Final[float] = 0
LOW_THRESHOLD_PERCENT_DEFAULT: Final[float] = 0.5
LOW_SAMPLE_PERCENT_DEFAULT: Final[float] = 0.5
COLLECT_DURATION_MS_DEFAULT: Final[float] = 10 * 1000
COLLECT_INTERVAL_MS_DEFAULT: Final[float] = 1000
COLLECT_MAX_COUNT_DEFAULT: Final[int] = 0

# Cancellation reasons
REASON_LABEL: Final[str] = "fps_stats"
REASON_LOST_FOCUS: Final[str] = f"{REASON_LABEL}: window lost focus, fps collect stopped."
REASON_MONITOR_STOPPED: Final[str] = f"{REASON_LABEL}: fps monitor stopped, fps collect stopped."

# UI constants
LOG_BUFFER_SIZE: Final[int] = 200
"""日志环形缓冲最大条数"""

RENDER_LOAD_MAX_MS: Final[int] = 100
"""演示界面每帧人为渲染延迟上限 (毫秒)"""
