# tsserver_profiler/collector/__init__.py - Event collection module
"""
Collector module for turning trace log lines into events and statistics.

This module provides:
- event_decoder.py: Decodes trace log lines into TraceEvent objects
- request_tracker.py: Request/response correlation
- aggregator.py: Per-operation statistics
"""
