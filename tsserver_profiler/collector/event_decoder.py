# tsserver_profiler/collector/event_decoder.py - Trace line decoding
"""
Decodes lines of a tsserver trace log into structured events.

Trace files are a JSON array written one event per line, so every line other
than the array delimiters is a JSON object followed by a trailing comma.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
import json


PHASE_METADATA = 'M'
PHASE_BEGIN = 'B'
PHASE_END = 'E'
PHASE_COMPLETE = 'X'
PHASE_INSTANT = 'I'

ARRAY_DELIMITERS = ('[', ']')


@dataclass(frozen=True)
class TraceEvent:
    """
    Structured representation of a single trace event.

    Events compare by value but are not hashable, since args is a dict.
    """
    __hash__ = None

    name: str
    phase: str
    timestamp: float
    pid: int = 0
    tid: int = 0
    category: Optional[str] = None
    duration: Optional[float] = None
    args: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_complete_span(self) -> bool:
        """True for 'X' events that carry a duration"""
        return self.phase == PHASE_COMPLETE and self.duration is not None

    @property
    def end_timestamp(self) -> float:
        """Timestamp at which the span ends (same as start for markers)"""
        return self.timestamp + (self.duration or 0)

    @property
    def duration_ms(self) -> Optional[float]:
        """Duration in milliseconds"""
        if self.duration is None:
            return None
        return self.duration / 1000.0

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> Optional['TraceEvent']:
        """
        Build an event from its wire representation.

        Args:
            raw: Decoded JSON object with name/ph/ts/pid/tid/dur/args keys

        Returns:
            TraceEvent or None if required fields are missing or malformed
        """
        name = raw.get('name')
        phase = raw.get('ph')
        timestamp = raw.get('ts')

        if not isinstance(name, str) or not isinstance(phase, str):
            return None
        if not _is_number(timestamp):
            return None

        duration = raw.get('dur')
        if not _is_number(duration):
            duration = None

        args = raw.get('args')
        if not isinstance(args, dict):
            args = {}

        category = raw.get('cat')

        return cls(
            name=name,
            phase=phase,
            timestamp=timestamp,
            pid=raw.get('pid', 0),
            tid=raw.get('tid', 0),
            category=category if isinstance(category, str) else None,
            duration=duration,
            args=args
        )


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def decode_line(line: str) -> Optional[TraceEvent]:
    """
    Decode one line of a trace log.

    Args:
        line: Raw line, with or without the trailing newline

    Returns:
        TraceEvent, or None for delimiters, blank lines and anything that
        does not parse
    """
    text = line.strip()

    if not text or text in ARRAY_DELIMITERS:
        return None

    if text.endswith(','):
        text = text[:-1]

    try:
        raw = json.loads(text)
    except (ValueError, RecursionError):
        return None

    if not isinstance(raw, dict):
        return None

    return TraceEvent.from_dict(raw)
