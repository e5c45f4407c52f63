# tsserver_profiler/utils/__init__.py - Utilities module
"""
Utility functions and helpers.

This module provides:
- config.py: Configuration management
- logger.py: Logging setup
- helpers.py: General helper functions
- log_finder.py: VS Code trace log discovery
- tsconfig.py: Path alias loading from tsconfig files
"""
