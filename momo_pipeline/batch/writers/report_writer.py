"""
Run report writer.
"""

import json
from pathlib import Path

from momo_pipeline.core.models import BatchRunSummary


class RunReportWriter:
    """
    Writes the run summary as a JSON document, replacing the previous report.
    """

    def __init__(self, report_path: str | Path = "logs/processing-stats.json"):
        self.report_path = Path(report_path)

    def write(self, summary: BatchRunSummary) -> Path:
        """
        Write the report.

        Args:
            summary: Finalized run summary

        Returns:
            Path of the written report
        """
        self.report_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.report_path, "w", encoding="utf-8") as f:
            json.dump(summary.to_report(), f, indent=2)
        return self.report_path
