# tsserver_profiler/cli.py - Command-line interface
"""
Command-line interface for the TSServer trace profiler.
"""

import click
import sys
import yaml
from pathlib import Path

from tsserver_profiler.utils.logger import setup_logging, get_logger
from tsserver_profiler.utils.config import Config
from tsserver_profiler.utils.log_finder import find_session_trace_files
from tsserver_profiler.utils.tsconfig import load_path_mappings


logger = get_logger(__name__)


@click.group()
@click.option('--log-level', default='INFO', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']))
@click.option('--log-file', type=click.Path(), help='Log file path')
@click.pass_context
def cli(ctx, log_level, log_file):
    """
    TSServer Trace Profiler

    Analyzes TypeScript server trace logs and reports slow operations.
    """
    ctx.ensure_object(dict)

    setup_logging(level=log_level, log_file=log_file)

    ctx.obj['log_level'] = log_level
    ctx.obj['log_file'] = log_file


def _load_config(config_file):
    try:
        return Config(config_file)
    except (yaml.YAMLError, ValueError, OSError) as e:
        click.echo(f"Error: failed to load config {config_file}: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument('trace_files', nargs=-1, type=click.Path())
@click.option('--config', 'config_file', type=click.Path(), help='Configuration file')
@click.option('--tsconfig', type=click.Path(), help='tsconfig with path aliases (default: tsconfig.base.json)')
@click.option('--logs-dir', type=click.Path(), help='VS Code logs directory used when no trace file is given')
@click.option('--output-format', type=click.Choice(['stdout', 'json', 'prometheus']), help='Output format')
@click.option('--output', type=click.Path(), help='Output file (json/prometheus formats)')
@click.option('--no-color', is_flag=True, help='Disable colored output')
def analyze(trace_files, config_file, tsconfig, logs_dir, output_format, output, no_color):
    """
    Analyze one or more trace files.

    Without arguments, the trace files of the newest VS Code session are used.

    Example:
        tsserver-profiler analyze trace.1.json
        tsserver-profiler analyze --output-format json --output stats.json
    """
    from tsserver_profiler.analyzer.runner import AnalysisRunner
    from tsserver_profiler.exporters.stdout import StdoutExporter

    cfg = _load_config(config_file)

    if tsconfig:
        cfg.set('paths.tsconfig', tsconfig)
    if logs_dir:
        cfg.set('logs.directory', logs_dir)
    if output_format:
        cfg.set('output.format', output_format)

    trace_paths = list(trace_files)
    if not trace_paths:
        click.echo("No trace file provided. Looking for trace files from the latest VS Code session...")
        trace_paths = find_session_trace_files(cfg.get('logs.directory'))
        for path in trace_paths:
            click.echo(f" - {path}")

    if not trace_paths:
        click.echo("Please provide a valid path to a trace file or ensure VS Code logs exist.", err=True)
        click.echo("Usage: tsserver-profiler analyze [TRACE_FILES]...", err=True)
        sys.exit(1)

    tsconfig_path = cfg.get('paths.tsconfig')
    mapped_paths = load_path_mappings(tsconfig_path)
    logger.info(f"Loaded {len(mapped_paths)} path mappings from {tsconfig_path}")

    runner = AnalysisRunner(path_mapped_files=mapped_paths)
    stats = runner.run(trace_paths)

    if not runner.file_results:
        click.echo("Error: none of the trace files could be read", err=True)
        sys.exit(1)

    fmt = cfg.get('output.format', 'stdout')

    try:
        if fmt == 'json':
            from tsserver_profiler.exporters.json_exporter import JSONExporter

            if output:
                output_path = Path(output)
                exporter = JSONExporter(str(output_path.parent))
                filename = output_path.name
            else:
                exporter = JSONExporter(cfg.get('output.directory'))
                filename = None

            result_path = exporter.export_stats(stats, filename, trace_files=list(runner.file_results))
            click.echo(f"Wrote {result_path}")

        elif fmt == 'prometheus':
            from tsserver_profiler.exporters.prometheus import PrometheusExporter

            exporter = PrometheusExporter()
            exporter.record_stats(stats)
            if output:
                exporter.write_textfile(output)
                click.echo(f"Wrote {output}")
            else:
                click.echo(exporter.get_metrics_text(), nl=False)

        else:
            StdoutExporter(
                use_colors=not no_color,
                top_slow=cfg.get('report.top_slow_operations', 10),
                max_rows=cfg.get('report.max_table_rows', 50),
                args_preview_chars=cfg.get('report.args_preview_chars', 100)
            ).print_report(stats)

    except OSError as e:
        click.echo(f"Error: failed to write output: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option('--logs-dir', type=click.Path(), help='VS Code logs directory')
def find(logs_dir):
    """
    List the trace files of the newest VS Code session.

    Example:
        tsserver-profiler find
    """
    trace_paths = find_session_trace_files(logs_dir)

    if not trace_paths:
        click.echo("No trace files found", err=True)
        sys.exit(1)

    for path in trace_paths:
        click.echo(path)


@cli.command()
@click.option('--tsconfig', type=click.Path(), default='tsconfig.base.json', help='tsconfig with path aliases')
def paths(tsconfig):
    """
    Show the path alias targets used to tag findSourceFile events.

    Example:
        tsserver-profiler paths --tsconfig tsconfig.base.json
    """
    mapped_paths = load_path_mappings(tsconfig)

    click.echo(f"Loaded {len(mapped_paths)} path mappings from {tsconfig}")
    for mapped in mapped_paths:
        click.echo(f"  {mapped}")


if __name__ == '__main__':
    cli(obj={})
