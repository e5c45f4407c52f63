# tsserver_profiler/analyzer/slow_detector.py - Slow operation detection
"""
Flags completed operations whose duration exceeds the reporting threshold.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


# 500ms, in the microsecond unit of trace timestamps
SLOW_OPERATION_THRESHOLD_US = 500_000

COMMAND_PREFIX = 'Command'
INTERNAL_PREFIX = 'Internal'


@dataclass(frozen=True)
class SlowOperation:
    """
    A single operation that exceeded the slow threshold.
    """
    name: str
    duration_ms: float
    timestamp: float
    resource: Optional[str] = None
    args: Dict[str, Any] = field(default_factory=dict)

    @property
    def timestamp_s(self) -> float:
        """Event timestamp in seconds"""
        return self.timestamp / 1_000_000.0

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'resource': self.resource,
            'duration_ms': self.duration_ms,
            'timestamp': self.timestamp,
            'args': self.args,
        }


class SlowOperationDetector:
    """
    Detects slow commands and internal operations.

    The threshold is strict: a duration equal to it is not slow.
    """

    def __init__(self, threshold_us: float = SLOW_OPERATION_THRESHOLD_US):
        """
        Initialize the detector.

        Args:
            threshold_us: Threshold in microseconds
        """
        self.threshold_us = threshold_us

    def is_slow(self, duration: float) -> bool:
        return duration > self.threshold_us

    def detect(self, slow_operations: List[SlowOperation], kind: str, name: str,
               resource: Optional[str], duration: float, timestamp: float,
               args: Optional[Dict[str, Any]] = None) -> Optional[SlowOperation]:
        """
        Record an operation if it is slow.

        Args:
            slow_operations: List the record is appended to
            kind: COMMAND_PREFIX or INTERNAL_PREFIX
            name: Command or operation name
            resource: Resource associated with the operation
            duration: Duration in microseconds
            timestamp: Event timestamp in microseconds
            args: Event arguments

        Returns:
            The appended SlowOperation, or None if the operation is not slow
        """
        if not self.is_slow(duration):
            return None

        operation = SlowOperation(
            name=f"{kind}: {name}",
            resource=resource,
            duration_ms=duration / 1000.0,
            timestamp=timestamp,
            args=dict(args or {})
        )
        slow_operations.append(operation)

        return operation


def top_slow_operations(operations: List[SlowOperation],
                        n: Optional[int] = 10) -> List[SlowOperation]:
    """
    Get the N slowest operations.

    Args:
        operations: Slow operations in detection order
        n: Number to return (None for all)

    Returns:
        Operations sorted by duration, slowest first
    """
    ranked = sorted(operations, key=lambda op: op.duration_ms, reverse=True)
    if n is None:
        return ranked
    return ranked[:n]
