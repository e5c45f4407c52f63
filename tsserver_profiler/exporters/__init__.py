# tsserver_profiler/exporters/__init__.py - Exporters module
"""
Exporters for outputting analysis results in various formats.

This module provides:
- stdout.py: Console report
- json_exporter.py: JSON format exporter
- prometheus.py: Prometheus text format exporter
"""
