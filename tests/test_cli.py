# tests/test_cli.py - Tests for the command-line interface
"""
Tests for the click commands.
"""

import json
import pytest
from click.testing import CliRunner

from tsserver_profiler.cli import cli


TRACE = """[
{"name":"request","ph":"M","ts":1000,"pid":1,"tid":1,"args":{"seq":1,"command":"completion"}},
{"name":"response","ph":"M","ts":2000,"pid":1,"tid":1,"args":{"seq":2,"request_seq":1,"command":"completion","success":true}},
{"name":"findSourceFile","ph":"X","ts":3000,"dur":800000,"pid":1,"tid":1,"args":{"fileName":"/repo/libs/shared/src/index.ts"}}
]
"""

TSCONFIG = '{"compilerOptions": {"paths": {"@shared/*": ["libs/shared/src/*"]}}}'


@pytest.fixture
def trace_file(tmp_path):
    path = tmp_path / 'trace.1.json'
    path.write_text(TRACE, encoding='utf-8')
    return path


@pytest.fixture
def tsconfig(tmp_path):
    path = tmp_path / 'tsconfig.base.json'
    path.write_text(TSCONFIG, encoding='utf-8')
    return path


class TestAnalyzeCommand:
    """Test cases for the analyze command"""

    def test_stdout_report(self, trace_file, tsconfig):
        """Test the default report"""
        result = CliRunner().invoke(cli, ['analyze', str(trace_file), '--tsconfig', str(tsconfig), '--no-color'])

        assert result.exit_code == 0
        assert '=== TSServer Trace Analysis Report ===' in result.output
        assert 'completion' in result.output
        assert 'Internal: findSourceFile' in result.output
        assert '(Triggered by tsconfig paths)' in result.output

    def test_json_output(self, trace_file, tsconfig, tmp_path):
        """Test --output-format json writes the requested file"""
        output = tmp_path / 'reports' / 'stats.json'

        result = CliRunner().invoke(cli, [
            'analyze', str(trace_file), '--tsconfig', str(tsconfig),
            '--output-format', 'json', '--output', str(output)
        ])

        assert result.exit_code == 0
        document = json.loads(output.read_text())
        assert document['trace_files'] == [str(trace_file)]
        assert document['statistics']['command_stats']['completion']['total_duration'] == 1000

    def test_prometheus_output(self, trace_file, tsconfig):
        """Test metrics are printed when no output file is given"""
        result = CliRunner().invoke(cli, [
            'analyze', str(trace_file), '--tsconfig', str(tsconfig), '--output-format', 'prometheus'
        ])

        assert result.exit_code == 0
        assert 'tsserver_operation_count' in result.output

    def test_config_file(self, trace_file, tsconfig, tmp_path):
        """Test output settings taken from the config file"""
        config = tmp_path / 'config.yaml'
        config.write_text(f'output:\n  format: json\n  directory: {tmp_path / "out"}\n')

        result = CliRunner().invoke(cli, [
            'analyze', str(trace_file), '--tsconfig', str(tsconfig), '--config', str(config)
        ])

        assert result.exit_code == 0
        assert len(list((tmp_path / 'out').glob('tsserver_stats_*.json'))) == 1

    def test_invalid_config(self, trace_file, tmp_path):
        """Test a broken config file aborts"""
        config = tmp_path / 'config.yaml'
        config.write_text('- not\n- a mapping\n')

        result = CliRunner().invoke(cli, ['analyze', str(trace_file), '--config', str(config)])

        assert result.exit_code == 1

    def test_missing_trace_file(self, tmp_path, tsconfig):
        """Test unreadable inputs fail"""
        result = CliRunner().invoke(cli, ['analyze', str(tmp_path / 'missing.json'), '--tsconfig', str(tsconfig)])

        assert result.exit_code == 1

    def test_no_trace_files_found(self, tmp_path, tsconfig):
        """Test discovery with no VS Code logs"""
        result = CliRunner().invoke(cli, [
            'analyze', '--tsconfig', str(tsconfig), '--logs-dir', str(tmp_path / 'logs')
        ])

        assert result.exit_code == 1


class TestFindCommand:
    """Test cases for the find command"""

    def test_lists_trace_files(self, tmp_path):
        """Test files of the newest session are listed"""
        directory = (tmp_path / '20240101T100000' / 'window1' / 'exthost'
                     / 'vscode.typescript-language-features' / 'tsserver-log-1')
        directory.mkdir(parents=True)
        (directory / 'trace.1.json').write_text('[\n]\n')

        result = CliRunner().invoke(cli, ['find', '--logs-dir', str(tmp_path)])

        assert result.exit_code == 0
        assert 'trace.1.json' in result.output

    def test_nothing_found(self, tmp_path):
        """Test exit status when no traces exist"""
        result = CliRunner().invoke(cli, ['find', '--logs-dir', str(tmp_path)])

        assert result.exit_code == 1


class TestPathsCommand:
    """Test cases for the paths command"""

    def test_lists_mappings(self, tsconfig):
        """Test alias targets are printed"""
        result = CliRunner().invoke(cli, ['paths', '--tsconfig', str(tsconfig)])

        assert result.exit_code == 0
        assert 'Loaded 1 path mappings' in result.output
        assert 'libs/shared/src/' in result.output

    def test_malformed_paths_section(self, tmp_path):
        """Test a tsconfig with list-valued paths loads no mappings"""
        path = tmp_path / 'tsconfig.json'
        path.write_text('{"compilerOptions": {"paths": ["a/*"]}}', encoding='utf-8')

        result = CliRunner().invoke(cli, ['paths', '--tsconfig', str(path)])

        assert result.exit_code == 0
        assert 'Loaded 0 path mappings' in result.output
