# tsserver_profiler/utils/log_finder.py - Trace log discovery
"""
Locates tsserver trace files written by VS Code.

Layout under the VS Code logs directory:
    <session YYYYMMDDTHHMMSS>/window*/exthost/vscode.typescript-language-features/
        tsserver-log-*/trace.*.json
"""

from pathlib import Path
from typing import List, Optional, Union
import logging
import os
import re
import sys


logger = logging.getLogger(__name__)

SESSION_DIR_PATTERN = re.compile(r'^\d{8}T\d{6}$')
TS_EXTENSION_DIR = Path('exthost') / 'vscode.typescript-language-features'


def default_logs_dir() -> Path:
    """
    Get the VS Code logs directory for the current platform.

    Returns:
        Path to the logs directory (may not exist)
    """
    if sys.platform == 'win32':
        return Path(os.environ.get('APPDATA', '')) / 'Code' / 'logs'
    elif sys.platform == 'darwin':
        return Path.home() / 'Library' / 'Application Support' / 'Code' / 'logs'
    else:
        return Path.home() / '.config' / 'Code' / 'logs'


def list_sessions(logs_dir: Path) -> List[Path]:
    """
    List session directories, newest first.

    Args:
        logs_dir: VS Code logs directory

    Returns:
        Session directories sorted by name descending
    """
    sessions = [
        p for p in logs_dir.iterdir()
        if p.is_dir() and SESSION_DIR_PATTERN.match(p.name)
    ]
    return sorted(sessions, key=lambda p: p.name, reverse=True)


def find_trace_files_in_session(session_dir: Path) -> List[Path]:
    """
    Collect every tsserver trace file of one session.

    Args:
        session_dir: Session directory

    Returns:
        Sorted list of trace file paths
    """
    trace_files = []

    for window in session_dir.glob('window*'):
        ts_log_dir = window / TS_EXTENSION_DIR
        if not ts_log_dir.is_dir():
            continue

        for server_log in ts_log_dir.glob('tsserver-log-*'):
            if server_log.is_dir():
                trace_files.extend(
                    p for p in server_log.glob('trace.*.json') if p.is_file()
                )

    return sorted(trace_files)


def find_session_trace_files(logs_dir: Optional[Union[str, Path]] = None) -> List[str]:
    """
    Find the trace files of the newest session that has any.

    Args:
        logs_dir: VS Code logs directory (platform default if omitted)

    Returns:
        Absolute paths of trace files, empty if none were found
    """
    logs_dir = Path(logs_dir) if logs_dir else default_logs_dir()

    if not logs_dir.is_dir():
        logger.info(f"Logs directory not found: {logs_dir}")
        return []

    sessions = list_sessions(logs_dir)
    if not sessions:
        logger.info(f"No session directories found in {logs_dir}")
        return []

    for session in sessions:
        trace_files = find_trace_files_in_session(session)
        if trace_files:
            logger.info(f"Found {len(trace_files)} trace files in session {session.name}")
            return [str(p.resolve()) for p in trace_files]

    return []
