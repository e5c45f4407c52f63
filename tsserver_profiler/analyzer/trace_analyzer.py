# tsserver_profiler/analyzer/trace_analyzer.py - Trace analysis engine
"""
Stateful analyzer that consumes trace events one at a time.

Each event first updates the context used by enrichment (chat code block
activity, inferred project membership) and is then routed by kind:

- request: remembered until its response arrives
- response: correlated with its request to measure command latency
- complete span: recorded as an internal operation
- anything else: ignored

Processing never raises for malformed or unexpected events.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List
import logging

from tsserver_profiler.analyzer.enrichment import INFERRED_PROJECT_MARKER
from tsserver_profiler.analyzer.internal_handler import InternalEventHandler
from tsserver_profiler.analyzer.resources import is_chat_block
from tsserver_profiler.analyzer.slow_detector import SlowOperation, SlowOperationDetector
from tsserver_profiler.analyzer.state import AnalyzerState
from tsserver_profiler.collector.aggregator import PerformanceStat, copy_stats, merge_stats
from tsserver_profiler.collector.event_decoder import TraceEvent
from tsserver_profiler.collector.request_tracker import RequestTracker, is_request, is_response


PROJECT_INFO = 'projectInfo'


@dataclass
class AnalysisStats:
    """
    Result of analyzing one or more trace streams.
    """
    command_stats: Dict[str, PerformanceStat] = field(default_factory=dict)
    internal_stats: Dict[str, PerformanceStat] = field(default_factory=dict)
    slow_operations: List[SlowOperation] = field(default_factory=list)

    def merge(self, other: 'AnalysisStats') -> 'AnalysisStats':
        """
        Fold another result into this one.

        Args:
            other: Result of another stream

        Returns:
            self
        """
        merge_stats(self.command_stats, other.command_stats)
        merge_stats(self.internal_stats, other.internal_stats)
        self.slow_operations.extend(other.slow_operations)
        return self

    def to_dict(self) -> Dict:
        return {
            'command_stats': {k: v.to_dict() for k, v in self.command_stats.items()},
            'internal_stats': {k: v.to_dict() for k, v in self.internal_stats.items()},
            'slow_operations': [op.to_dict() for op in self.slow_operations],
        }


class TraceAnalyzer:
    """
    Analyzes a single tsserver trace stream.
    """

    def __init__(self, path_mapped_files: Iterable[str] = ()):
        """
        Initialize the analyzer.

        Args:
            path_mapped_files: Path fragments targeted by tsconfig path aliases
        """
        self.state = AnalyzerState.create(path_mapped_files)

        detector = SlowOperationDetector()
        self.request_tracker = RequestTracker(detector)
        self.internal_handler = InternalEventHandler(detector)

        self.event_count = 0
        self.logger = logging.getLogger(__name__)

    def process_event(self, event: TraceEvent):
        """
        Fold one event into the analyzer state.

        Args:
            event: Decoded trace event
        """
        self.event_count += 1
        self._track_context(event)

        if is_request(event):
            self.request_tracker.start_request(event, self.state)
        elif is_response(event):
            self.request_tracker.complete_request(event, self.state)
        elif event.is_complete_span:
            self.internal_handler.handle(event, self.state)

    def process_events(self, events: Iterable[TraceEvent]):
        for event in events:
            self.process_event(event)

    def _track_context(self, event: TraceEvent):
        state = self.state

        if is_chat_block(event.args):
            if state.last_chat_block_timestamp is None or event.timestamp > state.last_chat_block_timestamp:
                state.last_chat_block_timestamp = event.timestamp

        if event.name == PROJECT_INFO:
            project_name = event.args.get('projectName')
            file_names = event.args.get('fileNames')

            if (isinstance(project_name, str) and INFERRED_PROJECT_MARKER in project_name
                    and isinstance(file_names, list)):
                state.inferred_project_files[project_name] = [
                    f for f in file_names if isinstance(f, str)
                ]

    def get_stats(self) -> AnalysisStats:
        """
        Get the accumulated statistics.

        Returns:
            AnalysisStats detached from the analyzer's state
        """
        return AnalysisStats(
            command_stats=copy_stats(self.state.command_stats),
            internal_stats=copy_stats(self.state.internal_stats),
            slow_operations=list(self.state.slow_operations)
        )

    @property
    def pending_request_count(self) -> int:
        return len(self.state.pending_requests)

    def reset(self):
        """
        Start over for a new stream, keeping the path mapping configuration.
        """
        self.state = self.state.reset()
        self.event_count = 0
        self.logger.debug("Analyzer reset")
