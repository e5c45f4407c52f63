# tsserver_profiler/__init__.py - Package root
"""
TSServer trace profiler.

Analyzes trace logs written by the TypeScript language server and reports
per-operation latency statistics and slow operations.
"""

__version__ = "0.1.0"
