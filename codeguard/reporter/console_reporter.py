"""
Console reporter: renders a scan result as a grouped, colored terminal report.
"""

import logging
import textwrap

from codeguard.findings.models import Finding, ScanResult, Severity
from codeguard.findings.severity import SEVERITY_ORDER, count_by_severity, sort_by_severity
from codeguard.reporter.styles import ANSI, Style

logger = logging.getLogger(__name__)

WRAP_WIDTH = 56
NO_FILE_LABEL = "(no file)"


def wrap_text(text: str, width: int = WRAP_WIDTH) -> list[str]:
    """
    Wrap text to `width` columns on word boundaries.

    Whitespace is collapsed first. Words longer than `width` get a line of
    their own instead of being split.
    """
    normalized = " ".join(text.split())
    if not normalized:
        return []
    return textwrap.wrap(
        normalized,
        width=width,
        break_long_words=False,
        break_on_hyphens=False,
    )


def _location(f: Finding) -> str:
    if f.line_start < 1:
        return ""
    if f.line_end is not None and f.line_end > f.line_start:
        return f" (L{f.line_start}-{f.line_end})"
    return f" (L{f.line_start})"


def _group_by_file(findings: list[Finding]) -> dict[str, list[Finding]]:
    groups: dict[str, list[Finding]] = {}
    for f in findings:
        groups.setdefault(f.file_path, []).append(f)
    return groups


def _summary_lines(result: ScanResult, style: Style) -> list[str]:
    counts = count_by_severity(result.findings)
    lines = [
        f"  Grade:         {style.bold}{result.grade}{style.reset}",
        f"  Files scanned: {result.files_scanned}",
        "",
    ]
    for sev in SEVERITY_ORDER:
        label = f"{sev.value.capitalize()}:"
        lines.append(f"    {style.color(sev)}{label:10s}{style.reset}{counts[sev]}")
    return lines


def _finding_lines(f: Finding, style: Style) -> list[str]:
    lines = [
        f"  {style.badge(f.severity)} {style.bold}{f.title}{style.reset}{_location(f)}"
    ]
    for desc_line in wrap_text(f.description):
        lines.append(f"      {style.dim}{desc_line}{style.reset}")
    if f.suggestion:
        lines.append(f"      {style.cyan}→ Fix: {f.suggestion}{style.reset}")
    lines.append("")
    return lines


def report_console(result: ScanResult, show_all: bool = False, style: Style = ANSI) -> str:
    """
    Format a scan result as a console report.

    Args:
        result: The scan result to report.
        show_all: Include low severity findings in the detailed listing.
        style: Escape codes to use; PLAIN for uncolored output.

    Returns:
        The formatted report string.
    """
    lines = []

    # Header
    lines.append("")
    lines.append(f"{style.bold}{'=' * 60}{style.reset}")
    lines.append(f"{style.bold}  Security Report{style.reset}")
    lines.append(f"{style.bold}{'=' * 60}{style.reset}")
    lines.extend(_summary_lines(result, style))
    lines.append("")

    if not result.findings:
        lines.append(f"  {style.green}✅ No security issues found!{style.reset}")
        lines.append("")
        return "\n".join(lines)

    shown = result.findings
    if not show_all:
        shown = [f for f in result.findings if f.severity != Severity.LOW]
        hidden = len(result.findings) - len(shown)
        if hidden:
            lines.append(
                f"  Showing {len(shown)} issue(s) "
                f"(use --all to see {hidden} low severity issue(s))"
            )
            lines.append("")

    for file_path, file_findings in _group_by_file(sort_by_severity(shown)).items():
        lines.append(f"{style.bold}{file_path or NO_FILE_LABEL}{style.reset}")
        lines.append("─" * 60)
        for f in file_findings:
            lines.extend(_finding_lines(f, style))

    logger.info(
        "Console report: %d of %d finding(s) shown",
        len(shown), len(result.findings),
    )
    return "\n".join(lines)
