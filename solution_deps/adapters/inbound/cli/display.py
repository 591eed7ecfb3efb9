"""
Console Display

Terminal rendering of analysis results and findings.
"""

from __future__ import annotations

from typing import List

from solution_deps.domain.models import AnalysisResult
from solution_deps.domain.services import Finding, FindingSummary


class ConsoleDisplay:
    """Colorized console output for analysis results."""

    class Colors:
        RED = "\033[91m"
        GREEN = "\033[92m"
        YELLOW = "\033[93m"
        BLUE = "\033[94m"
        CYAN = "\033[96m"
        GRAY = "\033[90m"
        BOLD = "\033[1m"
        RESET = "\033[0m"

    def __init__(self, use_color: bool = True) -> None:
        self.use_color = use_color

    def colored(self, text: str, color: str, bold: bool = False) -> str:
        if not self.use_color:
            return text
        style = self.Colors.BOLD if bold else ""
        return f"{style}{color}{text}{self.Colors.RESET}"

    def severity_color(self, severity: str) -> str:
        return {
            "HIGH": self.Colors.RED,
            "MEDIUM": self.Colors.YELLOW,
            "LOW": self.Colors.GRAY,
        }.get(severity, self.Colors.RESET)

    def print_header(self, title: str) -> None:
        print()
        print(self.colored("=" * 70, self.Colors.CYAN))
        print(self.colored(f" {title}", self.Colors.CYAN, bold=True))
        print(self.colored("=" * 70, self.Colors.CYAN))

    def render_result(self, result: AnalysisResult) -> List[str]:
        lines: List[str] = []
        summary = result.summary
        metrics = result.metrics

        lines.append(f"  Components:          {summary['components']}")
        lines.append(f"  Dependencies:        {summary['dependencies']}")
        lines.append(f"  Circular chains:     {summary['circularChains']}")
        lines.append(f"  Missing references:  {summary['missingReferences']}")
        lines.append(f"  Orphaned:            {summary['orphaned']}")
        lines.append(f"  Complexity score:    {metrics.complexity_score} ({metrics.complexity_band})")

        lines.append("")
        lines.append("  Component types:")
        for type_name, count in metrics.type_counts.items():
            if count:
                lines.append(f"    {type_name:<14} {count}")

        if metrics.most_connected:
            lines.append("")
            lines.append("  Most connected:")
            for entry in metrics.most_connected:
                lines.append(
                    f"    {entry.name:<30} {entry.type:<12} "
                    f"out={entry.out_degree} in={entry.in_degree} total={entry.total_degree}"
                )

        if result.chains:
            lines.append("")
            lines.append("  Circular chains:")
            for i, chain in enumerate(result.chains, start=1):
                lines.append(f"    {i}. {chain}")

        if result.missing_references:
            lines.append("")
            lines.append("  Missing references:")
            for ref in result.missing_references:
                lines.append(f"    {ref.from_id} -> {ref.to_id}")
        return lines

    def display_result(self, result: AnalysisResult) -> None:
        self.print_header("Solution Dependency Analysis")
        for line in self.render_result(result):
            print(line)

    def display_findings(self, findings: List[Finding], summary: FindingSummary) -> None:
        self.print_header("Findings")
        if not findings:
            print(self.colored("  No findings.", self.Colors.GREEN))
        for finding in findings:
            tag = self.colored(f"[{finding.severity}]", self.severity_color(finding.severity), bold=True)
            print(f"  {tag} {finding.title}")
            print(f"         {finding.description}")
        status = (
            self.colored("ready", self.Colors.GREEN) if summary.import_ready
            else self.colored("blocked", self.Colors.RED)
        )
        print()
        print(f"  Import readiness: {summary.readiness_score}/100 ({status})")
        if summary.excluded_managed:
            print(f"  Excluded managed baseline: {len(summary.excluded_managed)}")

    def display_warnings(self, warnings: List[str]) -> None:
        if not warnings:
            return
        self.print_header("Warnings")
        for warning in warnings:
            print(self.colored(f"  ! {warning}", self.Colors.YELLOW))
