"""
Markdown summary of a batch of diagnostic reports.
"""
from __future__ import annotations

import html
from pathlib import Path
from typing import Iterable

from .models import DiagnosticReport


SUMMARY_HEADING = "ReDOS Test Results"


def _cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")


def render_summary(reports: Iterable[DiagnosticReport]) -> str:
    """
    Render reports as a results table followed by one details block per
    report that has supplementary information.
    """
    reports = list(reports)
    lines = [
        f"## {SUMMARY_HEADING}",
        "",
        "| File | Diagnostic |",
        "| --- | --- |",
    ]
    lines.extend(f"| {_cell(report.label)} | {_cell(report.status_line)} |" for report in reports)
    lines.append("")

    for report in reports:
        if report.details is None:
            continue
        lines.extend([
            f"### {report.label}",
            "",
            "<details>",
            f"<summary>{html.escape(report.details.summary)}</summary>",
            "",
            report.details.body,
            "",
            "</details>",
            "",
        ])

    return "\n".join(lines)


def write_summary(text: str, path: str | Path) -> None:
    """Append a rendered summary to a file, e.g. $GITHUB_STEP_SUMMARY."""
    with open(path, "a", encoding="utf-8") as handle:
        handle.write(text)
        if not text.endswith("\n"):
            handle.write("\n")
