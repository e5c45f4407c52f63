# tsserver_profiler/analyzer/enrichment.py - Resource enrichment
"""
Annotates resource strings with hints about why an operation ran.

A tsserver "updateGraph" on an inferred project is otherwise an opaque bucket.
The hints are inferred from events observed around it: a chat code block
being opened, the project's known member files, or files located while the
update was running. findSourceFile events are tagged when they resolve
through a path alias.
"""

from typing import List, Optional

from tsserver_profiler.analyzer.resources import file_basename, is_path_mapped
from tsserver_profiler.analyzer.state import AnalyzerState
from tsserver_profiler.collector.event_decoder import TraceEvent


UPDATE_GRAPH = 'updateGraph'
FIND_SOURCE_FILE = 'findSourceFile'
INFERRED_PROJECT_MARKER = 'inferredProject'

CHAT_TRIGGER_NOTE = ' (Triggered by Chat Code Block)'
PATH_MAPPING_NOTE = ' (Triggered by tsconfig paths)'


def format_contains(files: List[str]) -> str:
    """
    Format a " (Contains: ...)" note.

    Args:
        files: Non-empty list of file paths

    Returns:
        Note naming the first file and counting the rest
    """
    note = f" (Contains: {file_basename(files[0])}"
    if len(files) > 1:
        note += f" + {len(files) - 1} more"
    return note + ")"


def is_inferred_project_update(event: TraceEvent, resource: Optional[str]) -> bool:
    return (
        event.name == UPDATE_GRAPH
        and resource is not None
        and INFERRED_PROJECT_MARKER in resource
    )


def _within_span(timestamp: float, event: TraceEvent) -> bool:
    return event.timestamp <= timestamp <= event.end_timestamp


def _chat_note(event: TraceEvent, state: AnalyzerState) -> Optional[str]:
    chat_timestamp = state.last_chat_block_timestamp
    if chat_timestamp is not None and _within_span(chat_timestamp, event):
        return CHAT_TRIGGER_NOTE
    return None


def _project_files_note(state: AnalyzerState, resource: str) -> Optional[str]:
    files = state.inferred_project_files.get(resource)
    if files:
        return format_contains(files)
    return None


def _recent_files_note(event: TraceEvent, state: AnalyzerState) -> Optional[str]:
    # dict keeps first-occurrence order
    files = list(dict.fromkeys(
        entry.file
        for entry in state.recent_find_source_files
        if _within_span(entry.timestamp, event)
    ))
    if files:
        return format_contains(files)
    return None


def enrich_resource(event: TraceEvent, state: AnalyzerState, resource: str) -> str:
    """
    Append contextual annotations to a resource.

    Args:
        event: Event the resource was extracted from
        state: Current analyzer state (read only)
        resource: Extracted resource

    Returns:
        The annotated resource, or the resource unchanged
    """
    if is_inferred_project_update(event, resource):
        note = (
            _chat_note(event, state)
            or _project_files_note(state, resource)
            or _recent_files_note(event, state)
        )
        return resource + note if note else resource

    if event.name == FIND_SOURCE_FILE and is_path_mapped(state.path_mapped_files, resource):
        return resource + PATH_MAPPING_NOTE

    return resource
