"""Unit tests for the performance monitoring decorator."""

import logging

import pytest

from policy_pricing.services.performance_monitor import performance_monitor


class TestPerformanceMonitor:
    """Test timing logs around rating operations."""

    def test_returns_wrapped_result(self) -> None:
        """The decorator is transparent to callers."""

        @performance_monitor("double")
        def double(value: int) -> int:
            return value * 2

        assert double(21) == 42
        assert double.__name__ == "double"

    def test_slow_operation_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        """Exceeding the threshold logs a performance warning."""

        @performance_monitor("slow_op", max_duration_ms=-1)
        def slow_op() -> str:
            return "done"

        with caplog.at_level(logging.WARNING):
            slow_op()

        assert "PERFORMANCE WARNING: slow_op" in caplog.text

    def test_warning_can_be_disabled(self, caplog: pytest.LogCaptureFixture) -> None:
        """Slow calls stay quiet when slow-operation logging is off."""

        @performance_monitor("quiet_op", max_duration_ms=-1, log_slow_operations=False)
        def quiet_op() -> None:
            return None

        with caplog.at_level(logging.WARNING):
            quiet_op()

        assert caplog.text == ""

    def test_exceptions_logged_and_reraised(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Failures are logged with their duration and propagate."""

        @performance_monitor("failing_op")
        def failing_op() -> None:
            raise RuntimeError("boom")

        with caplog.at_level(logging.ERROR), pytest.raises(RuntimeError, match="boom"):
            failing_op()

        assert "failing_op failed after" in caplog.text
