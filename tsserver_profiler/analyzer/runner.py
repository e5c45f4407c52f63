# tsserver_profiler/analyzer/runner.py - Trace file analysis runner
"""
Streams trace files through a TraceAnalyzer.

Every file is analyzed from a clean state; the per-file results are then
merged into one combined report.
"""

from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Union
import logging

from tsserver_profiler.analyzer.trace_analyzer import AnalysisStats, TraceAnalyzer
from tsserver_profiler.collector.event_decoder import TraceEvent, decode_line


PathLike = Union[str, Path]


class TraceReader:
    """
    Reads a trace file line by line and decodes events.
    """

    def __init__(self, path: PathLike):
        self.path = Path(path)
        self.line_count = 0
        self.skipped_lines = 0

    def __iter__(self) -> Iterator[TraceEvent]:
        with open(self.path, 'r', encoding='utf-8', errors='replace') as f:
            yield from decode_lines(f, self)


def decode_lines(lines: Iterable[str], counter: Optional[TraceReader] = None) -> Iterator[TraceEvent]:
    """
    Decode an iterable of trace lines, skipping anything that is not an event.

    Args:
        lines: Raw lines
        counter: Optional reader whose line/skip counters are updated

    Yields:
        Decoded TraceEvent objects
    """
    for line in lines:
        event = decode_line(line)

        if counter is not None:
            counter.line_count += 1
            if event is None:
                counter.skipped_lines += 1

        if event is not None:
            yield event


class AnalysisRunner:
    """
    Runs the analyzer over one or more trace files.
    """

    def __init__(self, analyzer: Optional[TraceAnalyzer] = None,
                 path_mapped_files: Iterable[str] = ()):
        """
        Initialize the runner.

        Args:
            analyzer: Analyzer to use (created from path_mapped_files if omitted)
            path_mapped_files: Path alias fragments for a new analyzer
        """
        self.analyzer = analyzer or TraceAnalyzer(path_mapped_files)
        self.file_results: Dict[str, AnalysisStats] = {}
        self.skipped_files: List[str] = []
        self.logger = logging.getLogger(__name__)

    def analyze_lines(self, lines: Iterable[str]) -> AnalysisStats:
        """
        Analyze an in-memory stream of trace lines.

        Args:
            lines: Raw trace lines

        Returns:
            Statistics for this stream only
        """
        self.analyzer.reset()
        self.analyzer.process_events(decode_lines(lines))
        return self.analyzer.get_stats()

    def analyze_file(self, path: PathLike) -> AnalysisStats:
        """
        Analyze a single trace file.

        Args:
            path: Trace file path

        Returns:
            Statistics for this file only
        """
        reader = TraceReader(path)

        self.analyzer.reset()
        self.analyzer.process_events(reader)

        self.logger.debug(
            f"{reader.path}: {reader.line_count} lines, "
            f"{reader.skipped_lines} skipped, "
            f"{self.analyzer.pending_request_count} requests without response"
        )

        return self.analyzer.get_stats()

    def run(self, paths: Iterable[PathLike]) -> AnalysisStats:
        """
        Analyze every file and merge the results.

        Missing files are skipped with a warning.

        Args:
            paths: Trace file paths

        Returns:
            Combined AnalysisStats
        """
        combined = AnalysisStats()

        for path in paths:
            path = Path(path)

            if not path.is_file():
                self.logger.warning(f"Skipping missing file: {path}")
                self.skipped_files.append(str(path))
                continue

            self.logger.info(f"Analyzing {path}...")
            stats = self.analyze_file(path)

            self.file_results[str(path)] = stats
            combined.merge(stats)

        return combined
