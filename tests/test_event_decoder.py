# tests/test_event_decoder.py - Tests for trace line decoding
"""
Unit tests for decode_line and TraceEvent.
"""

import pytest
from tsserver_profiler.collector.event_decoder import TraceEvent, decode_line


class TestDecodeLine:
    """Test cases for decode_line"""

    def test_decode_complete_event(self):
        """Test decoding a complete span with trailing comma"""
        line = ('{"pid":1,"tid":2,"ph":"X","cat":"session","ts":1500,"name":"updateGraph",'
                '"dur":250,"args":{"name":"/dev/null/inferredProject1*"}},\n')

        event = decode_line(line)

        assert event is not None
        assert event.name == 'updateGraph'
        assert event.phase == 'X'
        assert event.category == 'session'
        assert event.timestamp == 1500
        assert event.duration == 250
        assert event.pid == 1
        assert event.tid == 2
        assert event.args == {'name': '/dev/null/inferredProject1*'}
        assert event.is_complete_span

    def test_decode_without_trailing_comma(self):
        """Test the last element of the array has no comma"""
        event = decode_line('{"name":"request","ph":"M","ts":10,"pid":1,"tid":1,"args":{"seq":1}}')

        assert event is not None
        assert event.args['seq'] == 1
        assert event.duration is None
        assert not event.is_complete_span

    @pytest.mark.parametrize('line', ['[', ']', '  [  ', ']\n', '', '   \n'])
    def test_array_delimiters_and_blank_lines(self, line):
        """Test delimiters and blank lines are not events"""
        assert decode_line(line) is None

    @pytest.mark.parametrize('line', [
        'not json at all',
        '{"name": "request", "ph": "M", "ts": 1',
        '[1, 2, 3]',
        '"just a string"',
        '{"ph": "X", "ts": 1}',
        '{"name": "x", "ts": 1}',
        '{"name": "x", "ph": "X", "ts": "soon"}',
    ])
    def test_invalid_lines_are_skipped(self, line):
        """Test malformed or incomplete lines yield None"""
        assert decode_line(line) is None

    def test_missing_args_defaults_to_empty(self):
        """Test events without args get an empty args bag"""
        event = decode_line('{"name":"tracing","ph":"M","ts":0,"pid":1,"tid":1},')

        assert event is not None
        assert event.args == {}

    def test_non_numeric_duration_ignored(self):
        """Test a malformed dur is treated as absent"""
        event = decode_line('{"name":"x","ph":"X","ts":5,"dur":"long","pid":1,"tid":1}')

        assert event is not None
        assert event.duration is None
        assert not event.is_complete_span


class TestTraceEvent:
    """Test cases for TraceEvent"""

    def test_derived_values(self):
        """Test end timestamp and millisecond duration"""
        event = TraceEvent(name='findSourceFile', phase='X', timestamp=1000, duration=2500)

        assert event.end_timestamp == 3500
        assert event.duration_ms == 2.5

    def test_events_are_immutable(self):
        """Test decoded events cannot be modified"""
        event = TraceEvent(name='request', phase='M', timestamp=1)

        with pytest.raises(Exception):
            event.name = 'response'

    def test_events_compare_by_value_but_are_unhashable(self):
        """Test equality by fields and a clear error when hashing"""
        first = TraceEvent(name='request', phase='M', timestamp=1, args={'seq': 1})
        second = TraceEvent(name='request', phase='M', timestamp=1, args={'seq': 1})

        assert first == second
        with pytest.raises(TypeError):
            hash(first)
