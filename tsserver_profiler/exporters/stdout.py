# tsserver_profiler/exporters/stdout.py - Console output exporter
"""
Prints the trace analysis report to stdout in human-readable format.
"""

from typing import Dict
from colorama import Fore, Style

from tsserver_profiler.analyzer.slow_detector import top_slow_operations
from tsserver_profiler.analyzer.trace_analyzer import AnalysisStats
from tsserver_profiler.collector.aggregator import PerformanceStat, top_stats
from tsserver_profiler.utils.helpers import preview_json, truncate


OPERATION_DESCRIPTIONS = {
    'updateGraph': 'Re-calculates the project structure and dependencies.',
    'findSourceFile': 'Locates a source file on disk.',
    'finishCachingPerDirectoryResolution': 'Caches module resolutions for a directory.',
    'processRootFiles': 'Processes the root files of the project.',
    'resolveModuleNamesWorker': 'Resolves module imports.',
    'processTypeReferenceDirective': 'Handles /// <reference types="..." /> directives.',
    'updateOpen': 'Updates the state of an open file.',
    'configure': 'Sets up the server configuration.',
    'definitionAndBoundSpan': 'Finds definition and its span.',
    'getApplicableRefactors': 'Computes code refactorings.',
    'projectInfo': 'Retrieves project information.',
    'documentHighlights': 'Highlights references in the document.',
    'provideInlayHints': 'Computes inlay hints.',
    'configurePlugin': 'Configures a TS server plugin.',
    'compilerOptionsForInferredProjects': 'Sets options for inferred projects.',
    'getOutliningSpans': 'Computes folding ranges.',
    'linkedEditingRange': 'Computes linked editing ranges.',
    'navtree': 'Computes the navigation tree.',
    'resolveLibrary': 'Resolves a library file.',
    'getUnresolvedImports': 'Finds imports that could not be resolved.',
    'checkExpression': 'Type checks an expression.',
    'parseJsonSourceFileConfigFileContent': 'Parses tsconfig.json.',
    'loadConfiguredProject': 'Loads a configured project.',
    'resolveTypeReferenceDirectiveNamesWorker': 'Resolves type reference directives.',
    'getPackageJsonAutoImportProvider': 'Gets auto-import provider from package.json.',
    'tryReuseStructureFromOldProgram': 'Attempts to reuse old program structure.',
}

RULE = '=' * 120


class StdoutExporter:
    """
    Prints analysis results to stdout with colored output.
    """

    def __init__(self, use_colors: bool = True, top_slow: int = 10,
                 max_rows: int = 50, args_preview_chars: int = 100):
        """
        Initialize the stdout exporter.

        Args:
            use_colors: Whether to use colored output
            top_slow: Number of slow operations to list
            max_rows: Maximum rows per statistics table
            args_preview_chars: Length of the args preview for slow operations
        """
        self.use_colors = use_colors
        self.top_slow = top_slow
        self.max_rows = max_rows
        self.args_preview_chars = args_preview_chars

    def _color(self, color: str) -> str:
        return color if self.use_colors else ""

    @property
    def _reset(self) -> str:
        return Style.RESET_ALL if self.use_colors else ""

    def _print_header(self, title: str):
        print(f"\n{self._color(Fore.CYAN)}{RULE}{self._reset}")
        print(f"{self._color(Fore.CYAN)}{title}{self._reset}")
        print(f"{self._color(Fore.CYAN)}{RULE}{self._reset}\n")

    def print_slow_operations(self, stats: AnalysisStats):
        """
        Print the slowest operations.

        Args:
            stats: Analysis results
        """
        self._print_header(f"Top {self.top_slow} Slowest Operations (>500ms)")

        operations = top_slow_operations(stats.slow_operations, self.top_slow)
        if not operations:
            print("  No slow operations detected")
            return

        for op in operations:
            resource = f" ({op.resource})" if op.resource else ""
            print(f"{self._color(Fore.RED)}[{op.timestamp_s:.2f}s] {op.name}{resource}: "
                  f"{op.duration_ms:.2f}ms{self._reset}")
            if op.args:
                print(f"    Args: {preview_json(op.args, self.args_preview_chars)}")

    def print_stats_table(self, title: str, stats: Dict[str, PerformanceStat]):
        """
        Print a statistics table sorted by total time.

        Args:
            title: Table title
            stats: Mapping of stats key to PerformanceStat
        """
        self._print_header(title)

        if not stats:
            print("  No operations recorded")
            return

        print(f"{'Name':<32} {'Resource':<40} {'Count':>7} {'Avg (ms)':>10} "
              f"{'Max (ms)':>10} {'Total (ms)':>12}  Description")
        print('-' * 120)

        for _, stat in top_stats(stats, self.max_rows, sort_by='total_duration'):
            print(f"{truncate(stat.name, 32):<32} "
                  f"{truncate(stat.resource or '', 40):<40} "
                  f"{stat.count:>7} "
                  f"{stat.avg_duration_ms:>10.2f} "
                  f"{stat.max_duration_ms:>10.2f} "
                  f"{stat.total_duration_ms:>12.2f}  "
                  f"{OPERATION_DESCRIPTIONS.get(stat.name, '')}")

        if len(stats) > self.max_rows:
            print(f"\n{self._color(Fore.YELLOW)}... and {len(stats) - self.max_rows} more{self._reset}")

    def print_report(self, stats: AnalysisStats):
        """
        Print the complete report.

        Args:
            stats: Analysis results
        """
        print(f"{self._color(Fore.GREEN + Style.BRIGHT)}=== TSServer Trace Analysis Report ==={self._reset}")

        self.print_slow_operations(stats)
        self.print_stats_table("Command Statistics (Request/Response)", stats.command_stats)
        self.print_stats_table("Internal Compiler Performance", stats.internal_stats)

        print()
