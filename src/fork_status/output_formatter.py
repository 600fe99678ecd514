"""
Output formatting for fork status reports.
"""

import json

from .data_models import ForkStatusReport

TABLE_HEADER = "| Age | Package | Branch | Fork PR | Merged | Description |"
TABLE_DIVIDER = "| ---- | ------- | ------ | ------- | ------ | ----------- |"


class StatusTableFormatter:
    """Renders a ForkStatusReport as markdown or JSON."""

    FORMATS = ("markdown", "json")

    def format(self, report: ForkStatusReport, format_type: str = "markdown") -> str:
        if format_type == "markdown":
            return self.format_markdown(report)
        if format_type == "json":
            return self.format_json(report)
        raise ValueError(f"Unsupported format type: {format_type}")

    def format_markdown(self, report: ForkStatusReport) -> str:
        lines = [TABLE_HEADER, TABLE_DIVIDER]
        lines.extend(row.to_markdown() for row in report.rows)
        return "\n".join(lines)

    def format_json(self, report: ForkStatusReport) -> str:
        data = {
            "manifest": report.manifest_path,
            "forks": [row.to_dict() for row in report.rows],
            "metadata": report.metadata,
        }
        return json.dumps(data, indent=2, ensure_ascii=False)
