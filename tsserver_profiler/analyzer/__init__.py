# tsserver_profiler/analyzer/__init__.py - Analysis module
"""
Analyzer module for turning trace events into performance statistics.

This module provides:
- trace_analyzer.py: Stateful analysis engine
- state.py: Analyzer state model
- resources.py: Resource extraction from event arguments
- enrichment.py: Resource annotations for updateGraph/findSourceFile
- internal_handler.py: Internal span handling
- slow_detector.py: Slow operation detection
- runner.py: Trace file analysis runner
"""
