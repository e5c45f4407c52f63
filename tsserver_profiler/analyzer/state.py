# tsserver_profiler/analyzer/state.py - Analyzer state model
"""
Mutable state accumulated while a single trace stream is analyzed.

One AnalyzerState belongs to exactly one sequential processing path; the
correlation map and the find-source-file window depend on event order.
"""

from bisect import bisect_left, insort
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional

from tsserver_profiler.collector.aggregator import PerformanceStat
from tsserver_profiler.analyzer.slow_detector import SlowOperation


# Entries older than this (relative to the findSourceFile event being recorded) are dropped
RECENT_FILES_WINDOW_US = 10_000_000


@dataclass(frozen=True, order=True)
class FindSourceFileEntry:
    """A findSourceFile event remembered for updateGraph correlation, ordered by timestamp"""
    timestamp: float
    file: str


def normalize_path_fragment(fragment: str) -> str:
    """Lowercase and convert backslashes so fragments compare across platforms"""
    return fragment.lower().replace('\\', '/')


@dataclass
class AnalyzerState:
    """
    All state the analyzer keeps for one trace stream.
    """
    path_mapped_files: FrozenSet[str] = frozenset()

    # Request seq -> start timestamp (microseconds)
    pending_requests: Dict[int, float] = field(default_factory=dict)
    last_chat_block_timestamp: Optional[float] = None

    # Inferred project name -> member file paths
    inferred_project_files: Dict[str, List[str]] = field(default_factory=dict)
    recent_find_source_files: List[FindSourceFileEntry] = field(default_factory=list)

    command_stats: Dict[str, PerformanceStat] = field(default_factory=dict)
    internal_stats: Dict[str, PerformanceStat] = field(default_factory=dict)
    slow_operations: List[SlowOperation] = field(default_factory=list)

    @classmethod
    def create(cls, path_mapped_files: Iterable[str] = ()) -> 'AnalyzerState':
        """
        Create a fresh state.

        Args:
            path_mapped_files: Path fragments from the project's path aliases

        Returns:
            New AnalyzerState
        """
        return cls(
            path_mapped_files=frozenset(
                normalize_path_fragment(p) for p in path_mapped_files if p
            )
        )

    def reset(self) -> 'AnalyzerState':
        """Fresh state that keeps only the path mapping configuration"""
        return AnalyzerState(path_mapped_files=self.path_mapped_files)

    def remember_find_source_file(self, timestamp: float, file: str,
                                  window: float = RECENT_FILES_WINDOW_US) -> int:
        """
        Insert a findSourceFile entry in timestamp order and prune the
        trailing window.

        Args:
            timestamp: Event timestamp (microseconds)
            file: Resource of the event
            window: Window length (microseconds)

        Returns:
            Number of entries pruned
        """
        entries = self.recent_find_source_files
        insort(entries, FindSourceFileEntry(timestamp, file))

        # Empty file name sorts first, so this is the first entry at or after threshold
        cutoff = bisect_left(entries, FindSourceFileEntry(timestamp - window, ''))
        if cutoff:
            del entries[:cutoff]
        return cutoff
