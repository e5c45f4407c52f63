# tests/test_slow_detector.py - Tests for slow operation detection
"""
Unit tests for SlowOperationDetector.
"""

from tsserver_profiler.analyzer.slow_detector import (
    INTERNAL_PREFIX,
    SLOW_OPERATION_THRESHOLD_US,
    SlowOperation,
    SlowOperationDetector,
    top_slow_operations,
)


class TestSlowOperationDetector:
    """Test cases for SlowOperationDetector"""

    def test_threshold_is_strict(self):
        """Test exactly 500ms is not slow and one microsecond more is"""
        detector = SlowOperationDetector()

        assert detector.threshold_us == SLOW_OPERATION_THRESHOLD_US
        assert not detector.is_slow(500_000)
        assert detector.is_slow(500_001)

    def test_detect_appends(self):
        """Test slow operations are appended with their details"""
        detector = SlowOperationDetector()
        ops = []

        assert detector.detect(ops, INTERNAL_PREFIX, 'updateGraph', '/p', 400_000, 10) is None
        op = detector.detect(ops, INTERNAL_PREFIX, 'updateGraph', '/p', 800_000, 20, {'name': '/p'})

        assert ops == [op]
        assert op.name == 'Internal: updateGraph'
        assert op.resource == '/p'
        assert op.duration_ms == 800.0
        assert op.timestamp == 20
        assert op.args == {'name': '/p'}

    def test_top_slow_operations(self):
        """Test ranking keeps the slowest first"""
        ops = [
            SlowOperation(name='a', duration_ms=600, timestamp=1),
            SlowOperation(name='b', duration_ms=900, timestamp=2),
            SlowOperation(name='c', duration_ms=700, timestamp=3),
        ]

        assert [op.name for op in top_slow_operations(ops, 2)] == ['b', 'c']
        assert [op.name for op in ops] == ['a', 'b', 'c']
        assert len(top_slow_operations(ops, None)) == 3

    def test_timestamp_seconds(self):
        """Test timestamp conversion used by the report"""
        op = SlowOperation(name='a', duration_ms=600, timestamp=12_340_000)

        assert op.timestamp_s == 12.34
