# tsserver_profiler/exporters/json_exporter.py - JSON format exporter
"""
Exports analysis results as JSON files.
"""

import json
from pathlib import Path
from datetime import datetime
from typing import List, Optional
import logging

from tsserver_profiler.analyzer.trace_analyzer import AnalysisStats


class JSONExporter:
    """
    Exports analysis results to JSON format.

    Provides structured JSON output for further processing or visualization.
    """

    def __init__(self, output_dir: Optional[str] = None):
        """
        Initialize the JSON exporter.

        Args:
            output_dir: Directory to save JSON files (default: current directory)
        """
        self.output_dir = Path(output_dir) if output_dir else Path('.')
        self.logger = logging.getLogger(__name__)

    def build_document(self, stats: AnalysisStats, trace_files: Optional[List[str]] = None) -> dict:
        """
        Build the JSON document for a result.

        Args:
            stats: Analysis results
            trace_files: Files the results were computed from

        Returns:
            JSON-serializable dictionary
        """
        return {
            'timestamp': datetime.now().isoformat(),
            'trace_files': list(trace_files or []),
            'statistics': stats.to_dict()
        }

    def export_stats(self, stats: AnalysisStats, filename: Optional[str] = None,
                     trace_files: Optional[List[str]] = None) -> str:
        """
        Export statistics to JSON file.

        Args:
            stats: Analysis results
            filename: Output filename (auto-generated if not provided)
            trace_files: Files the results were computed from

        Returns:
            Path to output file
        """
        if not filename:
            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            filename = f'tsserver_stats_{timestamp}.json'

        self.output_dir.mkdir(parents=True, exist_ok=True)
        output_path = self.output_dir / filename

        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(self.build_document(stats, trace_files), f, indent=2, default=str)

        self.logger.info(f"Exported statistics to {output_path}")
        return str(output_path)
