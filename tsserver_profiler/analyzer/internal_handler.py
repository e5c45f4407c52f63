# tsserver_profiler/analyzer/internal_handler.py - Internal span handling
"""
Handles complete-span ('X') events emitted by the compiler internals.
"""

from typing import Optional
import logging

from tsserver_profiler.analyzer.enrichment import FIND_SOURCE_FILE, enrich_resource
from tsserver_profiler.analyzer.resources import extract_resource
from tsserver_profiler.analyzer.slow_detector import INTERNAL_PREFIX, SlowOperationDetector
from tsserver_profiler.analyzer.state import RECENT_FILES_WINDOW_US, AnalyzerState
from tsserver_profiler.collector.aggregator import PerformanceStat, make_stats_key, record_stat
from tsserver_profiler.collector.event_decoder import TraceEvent


class InternalEventHandler:
    """
    Records duration statistics for internal spans and keeps the
    findSourceFile window used by enrichment.
    """

    def __init__(self, detector: Optional[SlowOperationDetector] = None,
                 window_us: float = RECENT_FILES_WINDOW_US):
        self.detector = detector or SlowOperationDetector()
        self.window_us = window_us
        self.logger = logging.getLogger(__name__)

    def handle(self, event: TraceEvent, state: AnalyzerState) -> Optional[PerformanceStat]:
        """
        Process one internal span.

        Args:
            event: Event with a complete-span phase and a duration
            state: Analyzer state (updated in place)

        Returns:
            Updated PerformanceStat, or None if the event is not a complete span
        """
        if not event.is_complete_span:
            return None

        resource = extract_resource(event.args)
        if resource is not None:
            resource = enrich_resource(event, state, resource)

        stat = record_stat(
            state.internal_stats,
            make_stats_key(event.name, resource),
            event.name,
            resource,
            event.duration
        )

        if event.name == FIND_SOURCE_FILE and resource:
            pruned = state.remember_find_source_file(event.timestamp, resource, self.window_us)
            if pruned:
                self.logger.debug(f"Pruned {pruned} findSourceFile entries before ts={event.timestamp}")

        self.detector.detect(
            state.slow_operations,
            INTERNAL_PREFIX,
            event.name,
            resource,
            event.duration,
            event.timestamp,
            event.args
        )

        return stat
