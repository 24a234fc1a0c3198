"""Unit tests for slow-operation timing."""

import itertools
from unittest.mock import MagicMock

import pytest

from claudist import performance
from claudist.performance import measure


@pytest.fixture
def logger(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    """Replace the module logger with a mock."""
    mock = MagicMock()
    monkeypatch.setattr(performance, "logger", mock)
    return mock


class TestMeasure:
    """Tests for the measure context manager."""

    def _fake_timer(self, monkeypatch: pytest.MonkeyPatch, *values: float) -> None:
        ticks = itertools.chain(values, itertools.repeat(values[-1]))
        monkeypatch.setattr(performance.time, "perf_counter", lambda: next(ticks))

    def test_slow_block_is_logged(
        self, monkeypatch: pytest.MonkeyPatch, logger: MagicMock
    ) -> None:
        """Test that blocks over the threshold produce a warning."""
        self._fake_timer(monkeypatch, 0.0, 0.25)

        with measure("parse", threshold_ms=100):
            pass

        logger.warning.assert_called_once_with(
            "slow_operation", label="parse", duration_ms=250.0
        )

    def test_fast_block_is_silent(
        self, monkeypatch: pytest.MonkeyPatch, logger: MagicMock
    ) -> None:
        """Test that quick blocks log nothing."""
        self._fake_timer(monkeypatch, 0.0, 0.01)

        with measure("parse", threshold_ms=100):
            pass

        logger.warning.assert_not_called()

    def test_exceptions_propagate(self, logger: MagicMock) -> None:
        """Test that errors inside the block are not swallowed."""
        with pytest.raises(ValueError):
            with measure("parse"):
                raise ValueError("bad")

        logger.warning.assert_not_called()
