# tsserver_profiler/exporters/prometheus.py - Prometheus metrics exporter
"""
Exports analysis results in Prometheus text format.
Suitable for the node_exporter textfile collector or a Pushgateway.
"""

from prometheus_client import CollectorRegistry, Counter, Gauge, generate_latest, write_to_textfile
import logging

from tsserver_profiler.analyzer.trace_analyzer import AnalysisStats


COMMAND_KIND = 'command'
INTERNAL_KIND = 'internal'


class PrometheusExporter:
    """
    Exports operation statistics to Prometheus.

    Uses a private registry so that several exporters can coexist in one
    process.
    """

    def __init__(self, registry: CollectorRegistry = None):
        """
        Initialize the Prometheus exporter.

        Args:
            registry: Registry to register metrics on (new one if omitted)
        """
        self.registry = registry or CollectorRegistry()
        self.logger = logging.getLogger(__name__)

        labels = ['kind', 'operation', 'resource']

        self.operation_count = Gauge(
            'tsserver_operation_count',
            'Number of completed operations',
            labels,
            registry=self.registry
        )

        self.operation_total = Gauge(
            'tsserver_operation_duration_microseconds_total',
            'Total duration of operations in microseconds',
            labels,
            registry=self.registry
        )

        self.operation_max = Gauge(
            'tsserver_operation_duration_microseconds_max',
            'Maximum duration of a single operation in microseconds',
            labels,
            registry=self.registry
        )

        self.slow_operations = Counter(
            'tsserver_slow_operations',
            'Number of operations slower than 500ms',
            ['operation'],
            registry=self.registry
        )

    def record_stats(self, stats: AnalysisStats):
        """
        Record analysis results as metrics.

        Args:
            stats: Analysis results
        """
        for kind, stats_map in ((COMMAND_KIND, stats.command_stats),
                                (INTERNAL_KIND, stats.internal_stats)):
            for stat in stats_map.values():
                labels = {
                    'kind': kind,
                    'operation': stat.name,
                    'resource': stat.resource or ''
                }
                self.operation_count.labels(**labels).set(stat.count)
                self.operation_total.labels(**labels).set(stat.total_duration)
                self.operation_max.labels(**labels).set(stat.max_duration)

        for op in stats.slow_operations:
            self.slow_operations.labels(operation=op.name).inc()

    def get_metrics_text(self) -> str:
        """
        Get current metrics in Prometheus text format.

        Returns:
            Metrics as text
        """
        return generate_latest(self.registry).decode('utf-8')

    def write_textfile(self, path: str) -> str:
        """
        Write metrics to a file for the textfile collector.

        Args:
            path: Output file path

        Returns:
            Path to output file
        """
        write_to_textfile(path, self.registry)
        self.logger.info(f"Wrote Prometheus metrics to {path}")
        return path
