# tsserver_profiler/collector/request_tracker.py - Request/response correlation
"""
Correlates tsserver request events with their responses.
Computes round-trip latency per command.
"""

from dataclasses import dataclass
from typing import Any, Optional
import logging

from tsserver_profiler.analyzer.resources import extract_resource
from tsserver_profiler.analyzer.slow_detector import COMMAND_PREFIX, SlowOperationDetector
from tsserver_profiler.analyzer.state import AnalyzerState
from tsserver_profiler.collector.aggregator import make_stats_key, record_stat
from tsserver_profiler.collector.event_decoder import TraceEvent


REQUEST_EVENT = 'request'
RESPONSE_EVENT = 'response'
UNKNOWN_COMMAND = 'unknown'


@dataclass(frozen=True)
class CompletedRequest:
    """
    A request matched with its response.
    """
    seq: Any
    command: str
    resource: Optional[str]
    start_time: float
    end_time: float

    @property
    def duration(self) -> float:
        """Round-trip latency in microseconds"""
        return self.end_time - self.start_time

    @property
    def duration_ms(self) -> float:
        """Round-trip latency in milliseconds"""
        return self.duration / 1000.0


def _sequence_number(value) -> Optional[Any]:
    # Only scalar JSON values can key the pending map; true would collide with 1
    if isinstance(value, (int, float, str)) and not isinstance(value, bool):
        return value
    return None


def is_request(event: TraceEvent) -> bool:
    return event.name == REQUEST_EVENT and _sequence_number(event.args.get('seq')) is not None


def is_response(event: TraceEvent) -> bool:
    return event.name == RESPONSE_EVENT and _sequence_number(event.args.get('seq')) is not None


def correlation_key(event: TraceEvent) -> Optional[Any]:
    """
    Sequence number a response answers.

    Some emitters put the request's number in the response's own "seq"
    field, so "seq" is used when "request_seq" is missing.

    Args:
        event: Response event

    Returns:
        The request sequence number, or None
    """
    request_seq = _sequence_number(event.args.get('request_seq'))
    if request_seq is not None:
        return request_seq
    return _sequence_number(event.args.get('seq'))


class RequestTracker:
    """
    Tracks outstanding requests and records command latency on response.
    """

    def __init__(self, detector: Optional[SlowOperationDetector] = None):
        """
        Initialize the request tracker.

        Args:
            detector: Slow operation detector (default threshold if omitted)
        """
        self.detector = detector or SlowOperationDetector()
        self.logger = logging.getLogger(__name__)

    def start_request(self, event: TraceEvent, state: AnalyzerState):
        """
        Remember when a request was sent.

        A sequence number seen again overwrites the earlier start time.

        Args:
            event: Request event
            state: Analyzer state (updated in place)
        """
        seq = _sequence_number(event.args.get('seq'))
        if seq is None:
            return

        state.pending_requests[seq] = event.timestamp

    def complete_request(self, event: TraceEvent,
                         state: AnalyzerState) -> Optional[CompletedRequest]:
        """
        Match a response with its pending request.

        Args:
            event: Response event
            state: Analyzer state (updated in place)

        Returns:
            CompletedRequest, or None if no request is pending for the response
        """
        seq = correlation_key(event)
        if seq is None or seq not in state.pending_requests:
            self.logger.debug(f"Discarding response without pending request (seq={seq})")
            return None

        command = event.args.get('command') or UNKNOWN_COMMAND
        if not isinstance(command, str):
            command = str(command)

        resource = extract_resource(event.args)

        completed = CompletedRequest(
            seq=seq,
            command=command,
            resource=resource,
            start_time=state.pending_requests[seq],
            end_time=event.timestamp
        )

        record_stat(
            state.command_stats,
            make_stats_key(command, resource),
            command,
            resource,
            completed.duration
        )

        self.detector.detect(
            state.slow_operations,
            COMMAND_PREFIX,
            command,
            resource,
            completed.duration,
            event.timestamp,
            event.args
        )

        del state.pending_requests[seq]

        return completed
