"""Tests for the circular log buffer and logger facade."""

from datetime import datetime

from fps_stats.core.logging import LogBuffer, LogEntry, Logger, LogLevel, get_logger, set_logger
from fps_stats.core.model import FpsStats


class TestLogEntryFormat:
    """Formatting of a single entry."""

    def test_plain_message(self) -> None:
        entry = LogEntry(timestamp=datetime(2024, 1, 1, 12, 30, 5), level=LogLevel.INFO, message="hello")
        assert entry.format() == "[12:30:05] hello"

    def test_context_fields(self) -> None:
        entry = LogEntry(
            timestamp=datetime(2024, 1, 1, 12, 30, 5),
            level=LogLevel.DEBUG,
            message="采样",
            state="Collecting",
            progress=(2, 5),
            fps=58,
            rated_fps=60,
        )
        assert entry.format() == "[12:30:05] [Collecting] [2/5] 采样 fps=58 rated=60"

    def test_unlimited_progress(self) -> None:
        entry = LogEntry(
            timestamp=datetime(2024, 1, 1), level=LogLevel.INFO, message="m", progress=(3, 0)
        )
        assert "[3]" in entry.format()

    def test_warning_level_shown(self) -> None:
        entry = LogEntry(timestamp=datetime(2024, 1, 1), level=LogLevel.WARNING, message="m")
        assert "[WARNING]" in entry.format()


class TestLogBuffer:
    """Circular buffer."""

    def test_discards_oldest(self) -> None:
        buffer = LogBuffer(max_size=3)
        logger = Logger(buffer)
        for i in range(5):
            logger.info(f"m{i}")

        assert len(buffer) == 3
        assert [e.message for e in buffer.get_all()] == ["m2", "m3", "m4"]

    def test_logger_keeps_empty_buffer(self) -> None:
        """An empty buffer handed to the logger is the one it writes to."""
        buffer = LogBuffer(max_size=5)
        logger = Logger(buffer)

        assert logger.buffer is buffer
        logger.info("m")
        assert len(buffer) == 1

    def test_get_recent_non_positive(self) -> None:
        logger = Logger()
        logger.info("m")

        assert logger.buffer.get_recent(0) == []

    def test_get_recent(self) -> None:
        logger = Logger()
        for i in range(4):
            logger.info(f"m{i}")

        assert [e.message for e in logger.buffer.get_recent(2)] == ["m2", "m3"]

    def test_listener_notified(self) -> None:
        logger = Logger()
        received = []
        logger.buffer.add_listener(received.append)

        logger.warning("w")
        logger.buffer.remove_listener(received.append)
        logger.info("i")

        assert [e.message for e in received] == ["w"]

    def test_listener_error_does_not_break_logging(self) -> None:
        logger = Logger()

        def broken(entry: LogEntry) -> None:
            raise ValueError("boom")

        logger.buffer.add_listener(broken)
        logger.info("still logged")

        assert len(logger.buffer) == 1


class TestLogger:
    """Logger facade."""

    def test_state_change_sets_context(self) -> None:
        logger = Logger()
        logger.state_change("Idle", "Armed")
        entry = logger.info("next")

        assert entry.state == "Armed"

    def test_verdict_message(self) -> None:
        logger = Logger()
        stats = FpsStats(
            is_low=True,
            samples=(20, 60),
            low_samples=(20,),
            low_percent=0.5,
            rated_fps=60,
        )

        entry = logger.verdict(stats)

        assert "低帧率" in entry.message
        assert entry.rated_fps == 60

    def test_sample_entry(self) -> None:
        entry = Logger().sample(59)
        assert entry.level == LogLevel.DEBUG
        assert entry.fps == 59

    def test_global_logger(self) -> None:
        previous = get_logger()
        custom = Logger()
        try:
            set_logger(custom)
            assert get_logger() is custom
        finally:
            set_logger(previous)
