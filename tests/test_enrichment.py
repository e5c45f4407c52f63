# tests/test_enrichment.py - Tests for resource enrichment
"""
Unit tests for the updateGraph / findSourceFile enrichment cascade.
"""

from tsserver_profiler.analyzer.enrichment import (
    CHAT_TRIGGER_NOTE,
    PATH_MAPPING_NOTE,
    enrich_resource,
    format_contains,
)
from tsserver_profiler.analyzer.state import AnalyzerState, FindSourceFileEntry
from tsserver_profiler.collector.event_decoder import TraceEvent


PROJECT = '/dev/null/inferredProject1*'


def update_graph(ts=1000, dur=500):
    return TraceEvent(name='updateGraph', phase='X', timestamp=ts, duration=dur,
                      args={'name': PROJECT})


class TestFormatContains:
    """Test cases for format_contains"""

    def test_single_file(self):
        """Test a single file has no 'more' suffix"""
        assert format_contains(['/repo/src/a.ts']) == ' (Contains: a.ts)'

    def test_multiple_files(self):
        """Test additional files are counted"""
        assert format_contains(['/repo/a.ts', '/repo/b.ts', '/repo/c.ts']) == ' (Contains: a.ts + 2 more)'


class TestUpdateGraphCascade:
    """Test cases for the inferred project cascade"""

    def test_chat_block_inside_span(self):
        """Test a chat block during the update wins over everything else"""
        state = AnalyzerState.create()
        state.last_chat_block_timestamp = 1500
        state.inferred_project_files[PROJECT] = ['/repo/a.ts']

        assert enrich_resource(update_graph(), state, PROJECT) == PROJECT + CHAT_TRIGGER_NOTE

    def test_chat_block_span_bounds_inclusive(self):
        """Test both ends of the span count"""
        state = AnalyzerState.create()

        state.last_chat_block_timestamp = 1000
        assert enrich_resource(update_graph(), state, PROJECT).endswith(CHAT_TRIGGER_NOTE)

        state.last_chat_block_timestamp = 1500
        assert enrich_resource(update_graph(), state, PROJECT).endswith(CHAT_TRIGGER_NOTE)

        state.last_chat_block_timestamp = 1501
        assert enrich_resource(update_graph(), state, PROJECT) == PROJECT

    def test_project_files(self):
        """Test known inferred project members are listed"""
        state = AnalyzerState.create()
        state.last_chat_block_timestamp = 50
        state.inferred_project_files[PROJECT] = ['/repo/src/main.ts', '/repo/src/util.ts']

        assert enrich_resource(update_graph(), state, PROJECT) == PROJECT + ' (Contains: main.ts + 1 more)'

    def test_empty_project_files_fall_through(self):
        """Test a project with no files uses the recent files"""
        state = AnalyzerState.create()
        state.inferred_project_files[PROJECT] = []
        state.recent_find_source_files = [FindSourceFileEntry(1200, '/repo/x.ts')]

        assert enrich_resource(update_graph(), state, PROJECT) == PROJECT + ' (Contains: x.ts)'

    def test_recent_files_unique_in_first_occurrence_order(self):
        """Test recent files inside the span are deduplicated"""
        state = AnalyzerState.create()
        state.recent_find_source_files = [
            FindSourceFileEntry(900, '/repo/before.ts'),
            FindSourceFileEntry(1100, '/repo/b.ts'),
            FindSourceFileEntry(1200, '/repo/a.ts'),
            FindSourceFileEntry(1300, '/repo/b.ts'),
            FindSourceFileEntry(1500, '/repo/c.ts'),
            FindSourceFileEntry(1600, '/repo/after.ts'),
        ]

        assert enrich_resource(update_graph(), state, PROJECT) == PROJECT + ' (Contains: b.ts + 2 more)'

    def test_nothing_matches(self):
        """Test the resource is unchanged without any hint"""
        state = AnalyzerState.create()
        state.recent_find_source_files = [FindSourceFileEntry(10, '/repo/old.ts')]

        assert enrich_resource(update_graph(), state, PROJECT) == PROJECT

    def test_configured_project_not_enriched(self):
        """Test only inferred projects are enriched"""
        state = AnalyzerState.create()
        state.last_chat_block_timestamp = 1200
        resource = '/repo/tsconfig.json'

        assert enrich_resource(update_graph(), state, resource) == resource

    def test_other_operations_not_enriched(self):
        """Test other operations on inferred projects pass through"""
        state = AnalyzerState.create()
        state.last_chat_block_timestamp = 1200
        event = TraceEvent(name='getUnresolvedImports', phase='X', timestamp=1000, duration=500)

        assert enrich_resource(event, state, PROJECT) == PROJECT


class TestPathMappingNote:
    """Test cases for the tsconfig paths tag"""

    def test_find_source_file_tagged(self):
        """Test files under an alias target are tagged"""
        state = AnalyzerState.create(['libs/shared/src/'])
        event = TraceEvent(name='findSourceFile', phase='X', timestamp=1, duration=1)
        resource = '/repo/libs/shared/src/index.ts'

        assert enrich_resource(event, state, resource) == resource + PATH_MAPPING_NOTE

    def test_unmapped_file_untouched(self):
        """Test files outside alias targets are untouched"""
        state = AnalyzerState.create(['libs/shared/src/'])
        event = TraceEvent(name='findSourceFile', phase='X', timestamp=1, duration=1)

        assert enrich_resource(event, state, '/repo/apps/a.ts') == '/repo/apps/a.ts'

    def test_only_find_source_file_tagged(self):
        """Test other operations are never tagged"""
        state = AnalyzerState.create(['libs/shared/src/'])
        event = TraceEvent(name='updateOpen', phase='X', timestamp=1, duration=1)
        resource = '/repo/libs/shared/src/index.ts'

        assert enrich_resource(event, state, resource) == resource
