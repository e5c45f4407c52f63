# tsserver_profiler/utils/tsconfig.py - Path alias loading
"""
Loads the targets of `compilerOptions.paths` from a tsconfig file.

Files resolved through these aliases are tagged in the report. A missing or
broken tsconfig only disables that tagging.
"""

from pathlib import Path
from typing import List, Union
import json
import logging
import re


logger = logging.getLogger(__name__)

DEFAULT_TSCONFIG = 'tsconfig.base.json'

# String literals are matched first so "src/*" is never read as a comment opener
_JSONC_PATTERN = re.compile(
    r'("(?:\\.|[^"\\])*")'      # string literal
    r'|/\*[\s\S]*?\*/'          # block comment
    r'|//[^\n]*'                # line comment
    r'|,(\s*[}\]])'             # trailing comma
)


def _jsonc_replacement(match) -> str:
    if match.group(1) is not None:
        return match.group(1)
    if match.group(2) is not None:
        return match.group(2)
    return ''


def strip_json_comments(content: str) -> str:
    """
    Turn tsconfig's JSON-with-comments into plain JSON.

    Removes // and /* */ comments and trailing commas outside of strings.

    Args:
        content: tsconfig file content

    Returns:
        Content that json.loads accepts
    """
    # Second pass catches commas that were followed by a comment
    without_comments = _JSONC_PATTERN.sub(_jsonc_replacement, content)
    return _JSONC_PATTERN.sub(_jsonc_replacement, without_comments)


def extract_path_mappings(tsconfig: dict) -> List[str]:
    """
    Collect alias targets from a parsed tsconfig.

    Args:
        tsconfig: Parsed tsconfig object

    Returns:
        Targets with wildcards removed and forward slashes
    """
    compiler_options = tsconfig.get('compilerOptions') or {}
    if not isinstance(compiler_options, dict):
        logger.warning("Ignoring tsconfig: compilerOptions is not an object")
        return []

    paths = compiler_options.get('paths') or {}
    if not isinstance(paths, dict):
        logger.warning("Ignoring tsconfig: compilerOptions.paths is not an object")
        return []

    mappings = []
    for targets in paths.values():
        if isinstance(targets, str):
            targets = [targets]
        if not isinstance(targets, list):
            continue

        for target in targets:
            if not isinstance(target, str):
                continue
            cleaned = target.replace('*', '').replace('\\', '/')
            if cleaned:
                mappings.append(cleaned)

    return mappings


def load_path_mappings(tsconfig_path: Union[str, Path] = DEFAULT_TSCONFIG) -> List[str]:
    """
    Load path alias targets from a tsconfig file.

    Args:
        tsconfig_path: Path to the tsconfig file

    Returns:
        List of path fragments, empty if the file is missing or invalid
    """
    path = Path(tsconfig_path)

    if not path.is_file():
        logger.warning(f"{path} not found. Path mapping detection will be disabled.")
        return []

    try:
        content = path.read_text(encoding='utf-8')
        tsconfig = json.loads(strip_json_comments(content))
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to parse {path}: {e}")
        return []

    if not isinstance(tsconfig, dict):
        logger.warning(f"Failed to parse {path}: expected a JSON object")
        return []

    return extract_path_mappings(tsconfig)
