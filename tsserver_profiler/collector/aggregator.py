# tsserver_profiler/collector/aggregator.py - Per-operation statistics
"""
Aggregates operation durations into running statistics.
Keeps count, total and maximum duration per stats key.
"""

from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple


SORT_METRICS = ('total_duration', 'count', 'max_duration', 'avg_duration')


@dataclass
class PerformanceStat:
    """
    Aggregated statistics for one operation (optionally one resource).
    Durations are in microseconds.
    """
    name: str
    resource: Optional[str] = None
    count: int = 0
    total_duration: float = 0
    max_duration: float = 0

    @property
    def avg_duration(self) -> float:
        """Average duration in microseconds"""
        if self.count == 0:
            return 0.0
        return self.total_duration / self.count

    @property
    def avg_duration_ms(self) -> float:
        """Average duration in milliseconds"""
        return self.avg_duration / 1000.0

    @property
    def max_duration_ms(self) -> float:
        """Maximum duration in milliseconds"""
        return self.max_duration / 1000.0

    @property
    def total_duration_ms(self) -> float:
        """Total duration in milliseconds"""
        return self.total_duration / 1000.0

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'resource': self.resource,
            'count': self.count,
            'total_duration_us': self.total_duration,
            'max_duration_us': self.max_duration,
            'avg_duration_ms': self.avg_duration_ms,
        }


def make_stats_key(name: str, resource: Optional[str]) -> str:
    """
    Build the composite key used to bucket statistics.

    Args:
        name: Operation or command name
        resource: Resource string, if any

    Returns:
        "name (resource)" or just "name"
    """
    return f"{name} ({resource})" if resource else name


def record_stat(stats: Dict[str, PerformanceStat], key: str, name: str,
                resource: Optional[str], duration: float) -> PerformanceStat:
    """
    Fold one duration into the statistics for a key.

    The updated record is built before it is stored, so readers of the
    mapping only ever see complete records.

    Args:
        stats: Mapping of stats key to PerformanceStat (updated in place)
        key: Stats key
        name: Operation name used when the key is new
        resource: Resource used when the key is new
        duration: Duration in microseconds

    Returns:
        The stored PerformanceStat
    """
    current = stats.get(key) or PerformanceStat(name=name, resource=resource)

    updated = replace(
        current,
        count=current.count + 1,
        total_duration=current.total_duration + duration,
        max_duration=max(current.max_duration, duration)
    )
    stats[key] = updated

    return updated


def merge_stats(target: Dict[str, PerformanceStat],
                source: Dict[str, PerformanceStat]) -> Dict[str, PerformanceStat]:
    """
    Merge statistics from another stream into target.

    Args:
        target: Mapping updated in place
        source: Mapping to fold in (left untouched)

    Returns:
        The target mapping
    """
    for key, stat in source.items():
        existing = target.get(key)

        if existing is None:
            target[key] = replace(stat)
            continue

        target[key] = replace(
            existing,
            count=existing.count + stat.count,
            total_duration=existing.total_duration + stat.total_duration,
            max_duration=max(existing.max_duration, stat.max_duration)
        )

    return target


def copy_stats(stats: Dict[str, PerformanceStat]) -> Dict[str, PerformanceStat]:
    """Detached copy of a stats mapping"""
    return {key: replace(stat) for key, stat in stats.items()}


def top_stats(stats: Dict[str, PerformanceStat], n: Optional[int] = 10,
              sort_by: str = 'total_duration') -> List[Tuple[str, PerformanceStat]]:
    """
    Get top N stats by a specific metric.

    Args:
        stats: Mapping of stats key to PerformanceStat
        n: Number of entries to return (None for all)
        sort_by: Metric to sort by ('total_duration', 'count',
                 'max_duration', 'avg_duration')

    Returns:
        List of (key, stat) tuples, highest first
    """
    if sort_by not in SORT_METRICS:
        raise ValueError(f"Unknown sort metric: {sort_by}")

    sorted_stats = sorted(
        stats.items(),
        key=lambda x: getattr(x[1], sort_by),
        reverse=True
    )

    if n is None:
        return sorted_stats
    return sorted_stats[:n]
