"""Report rendering for repository comparisons."""

import json
from datetime import datetime
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.markup import escape

from .. import __version__
from .errors import RepoDiffError, describe_error
from .results import ComparisonReport, SimilarityResult


SEVERITY_STYLES = {
    "high": "red",
    "medium": "yellow",
    "low": "cyan",
}

RISK_MESSAGES = {
    "high": ("red", "High plagiarism risk detected!"),
    "moderate": ("yellow", "Moderate similarity detected"),
    "low": ("green", "Low plagiarism risk"),
}


class Reporter:
    """Render comparison reports as rich-markup text or JSON."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self.identical_preview = int(
            self.config.get("report", {}).get("identical_preview", 3)
        )

    def render_text(self, report: ComparisonReport) -> str:
        """Render a report as console markup.

        Args:
            report: Finalized comparison report

        Returns:
            Text containing rich markup tags
        """
        lines: List[str] = []
        summary = report.summary

        lines.append("[yellow]Similarity Report[/yellow]")
        lines.append("")

        if report.identical_pairs:
            lines.append(f"[blue]Identical files (skipped): {summary.identical_count}[/blue]")
            for pair in report.identical_pairs[:self.identical_preview]:
                lines.append(f"[bright_black]  {escape(pair.file_a)} <-> {escape(pair.file_b)}[/bright_black]")
            remaining = summary.identical_count - self.identical_preview
            if remaining > 0:
                lines.append(f"[bright_black]  ... and {remaining} more[/bright_black]")
            lines.append("")

        if not report.similar_pairs:
            lines.append("[green]No significant similarities found[/green]")
            return "\n".join(lines)

        for result in report.similar_pairs:
            lines.extend(self._format_result(result))

        lines.append("[blue]Summary:[/blue]")
        lines.append(f"[bright_black]  Similar files: {summary.similar_count}[/bright_black]")
        lines.append(f"[bright_black]  Identical files (skipped): {summary.identical_count}[/bright_black]")
        lines.append(f"[bright_black]  High similarity (>90%): {summary.high_similarity_count}[/bright_black]")
        lines.append(
            f"[bright_black]  Average similarity: {summary.average_similarity * 100:.1f}%[/bright_black]"
        )

        style, message = RISK_MESSAGES[report.risk_level]
        lines.append("")
        lines.append(f"[{style}]{message}[/{style}]")

        return "\n".join(lines)

    def render_json(self, report: ComparisonReport) -> str:
        """Render a report as JSON with generation metadata."""
        payload = {
            "metadata": {
                "tool": "repodiffmatch",
                "version": __version__,
                "generated": datetime.now().isoformat(),
            },
            **report.to_dict(),
        }
        return json.dumps(payload, indent=2)

    def print_report(self, report: ComparisonReport, console: Console) -> None:
        """Print the text rendering of a report."""
        console.print(self.render_text(report), highlight=False)

    @staticmethod
    def render_error(error: RepoDiffError) -> str:
        """Render a fatal error with suggested remedies."""
        description = describe_error(error)
        lines = [f"[red]{escape(description['title'])}[/red]"]
        if description['subject']:
            lines.append(escape(description['subject']))
        lines.append(f"Type: {escape(description['reason'])}")
        if description['solutions']:
            lines.append("Solutions:")
            for index, solution in enumerate(description['solutions'], start=1):
                lines.append(f"{index}. {escape(solution)}")
        return "\n".join(lines)

    @staticmethod
    def _format_result(result: SimilarityResult) -> List[str]:
        style = SEVERITY_STYLES[result.severity]
        return [
            f"[{style}]{result.score * 100:.1f}% similarity[/{style}]",
            f"[bright_black]  {escape(result.file_a)} <-> {escape(result.file_b)}[/bright_black]",
            "",
        ]
