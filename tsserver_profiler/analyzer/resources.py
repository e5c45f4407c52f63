# tsserver_profiler/analyzer/resources.py - Resource identification
"""
Best-effort extraction of a human-readable resource (file, project, ...)
from the arguments of a trace event.
"""

from typing import Any, Iterable, Mapping, Optional


CHAT_BLOCK_MARKER = 'vscode-chat-code-block'
CHAT_BLOCK_LABEL = '[Chat Code Block]'

# Checked in this order, first string value wins
RESOURCE_KEYS = ('name', 'file', 'fileName', 'path', 'projectName')


def is_chat_block(args: Optional[Mapping[str, Any]]) -> bool:
    """
    Check whether the arguments point at a chat code block virtual file.

    Args:
        args: Event arguments

    Returns:
        True if any resource field contains the chat block marker
    """
    if not args:
        return False

    for key in RESOURCE_KEYS:
        value = args.get(key)
        if isinstance(value, str) and CHAT_BLOCK_MARKER in value:
            return True

    return False


def extract_resource(args: Optional[Mapping[str, Any]]) -> Optional[str]:
    """
    Extract a resource identifier from event arguments.

    Args:
        args: Event arguments

    Returns:
        CHAT_BLOCK_LABEL for chat code blocks, otherwise the first string
        field among RESOURCE_KEYS, or None
    """
    if not args:
        return None

    if is_chat_block(args):
        return CHAT_BLOCK_LABEL

    for key in RESOURCE_KEYS:
        value = args.get(key)
        if isinstance(value, str):
            return value

    return None


def is_path_mapped(path_mapped_files: Iterable[str], file_path: str) -> bool:
    """
    Check whether a file path falls under one of the path alias targets.

    Args:
        path_mapped_files: Normalized (lowercase, forward slash) fragments
        file_path: Path to check

    Returns:
        True if the path contains any fragment
    """
    normalized = file_path.lower().replace('\\', '/')
    return any(fragment in normalized for fragment in path_mapped_files)


def file_basename(file_path: str) -> str:
    """Last path segment, or the whole string when it ends with a slash"""
    return file_path.rsplit('/', 1)[-1] or file_path
