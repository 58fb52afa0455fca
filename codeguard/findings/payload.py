"""
Parser for analyzer payloads.

The analyzer answers with a JSON object shaped like:

    {
      "issues": [
        {"id": "SEC-001", "severity": "high", "category": "Security",
         "title": "...", "description": "...", "filePath": "src/app.py",
         "lineStart": 10, "lineEnd": 15, "suggestion": "..."}
      ],
      "grade": "B", "score": 12, "filesScanned": 40
    }

The payload is untrusted. Unknown severities are rejected; bad line numbers
are kept as-is (or dropped) and clamped later by the reporters.
"""

import json
import logging
import math
from pathlib import Path
from typing import Any, Optional

from codeguard.findings.models import Finding, ScanResult, Severity
from codeguard.findings.severity import count_by_severity

logger = logging.getLogger(__name__)

# Points per finding used to grade a scan
_GRADE_WEIGHTS: dict[Severity, int] = {
    Severity.CRITICAL: 10,
    Severity.HIGH: 5,
    Severity.MEDIUM: 2,
    Severity.LOW: 1,
}

# (max score, grade), checked in order; anything above the last is "F"
_GRADE_THRESHOLDS: list[tuple[int, str]] = [
    (5, "A"),
    (15, "B"),
    (30, "C"),
    (60, "D"),
]

_VALID_SEVERITIES = ", ".join(s.value for s in Severity)


def calculate_grade(findings: list[Finding]) -> tuple[str, int]:
    """Weight findings by severity and turn the total into a letter grade."""
    counts = count_by_severity(findings)
    score = sum(_GRADE_WEIGHTS[sev] * n for sev, n in counts.items())
    for limit, grade in _GRADE_THRESHOLDS:
        if score <= limit:
            return grade, score
    return "F", score


def _first(raw: dict[str, Any], *keys: str) -> Any:
    """Return the first key present in raw (camelCase first, then snake_case)."""
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return None


def _parse_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _parse_line(value: Any) -> Optional[int]:
    """Best-effort line number. Returns None when the value is unusable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value):
            return int(value)
        logger.debug("Ignoring non-finite line number: %r", value)
        return None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    logger.debug("Ignoring malformed line number: %r", value)
    return None


def _parse_severity(value: Any, index: int) -> Severity:
    if isinstance(value, str):
        try:
            return Severity(value)
        except ValueError:
            pass
    raise ValueError(
        f"Issue #{index}: invalid severity {value!r} (expected one of {_VALID_SEVERITIES})"
    )


def _parse_issue(raw: Any, index: int) -> Finding:
    """Parse one raw issue dict into a Finding."""
    if not isinstance(raw, dict):
        raise ValueError(f"Issue #{index} is not a JSON object")

    title = raw.get("title")
    if not isinstance(title, str):
        raise ValueError(f"Issue #{index} has no title")

    issue_id = _first(raw, "id", "rule_id", "ruleId")
    if issue_id is None:
        issue_id = f"issue-{index}"
        logger.debug("Issue #%d has no id, using %s", index, issue_id)

    return Finding(
        id=str(issue_id),
        severity=_parse_severity(raw.get("severity"), index),
        category=_parse_text(raw.get("category")),
        title=title,
        description=_parse_text(raw.get("description")),
        file_path=_parse_text(_first(raw, "filePath", "file_path")),
        line_start=_parse_line(_first(raw, "lineStart", "line_start")) or 0,
        line_end=_parse_line(_first(raw, "lineEnd", "line_end")),
        suggestion=_parse_text(_first(raw, "suggestion", "remediation")),
    )


def parse_payload(data: Any, files_scanned: Optional[int] = None) -> ScanResult:
    """
    Turn an analyzer payload into a ScanResult.

    Args:
        data: The decoded JSON payload.
        files_scanned: Overrides the payload's own filesScanned count.

    Returns:
        A ScanResult. Grade and score are computed when the payload has none.

    Raises:
        ValueError: If the payload shape is wrong or an issue has an
            unknown severity or no title.
    """
    if not isinstance(data, dict):
        raise ValueError("Analyzer payload is not a JSON object")

    issues_raw = data.get("issues", [])
    if issues_raw is None:
        issues_raw = []
    if not isinstance(issues_raw, list):
        raise ValueError("Analyzer payload 'issues' is not a list")

    findings = [_parse_issue(raw, i) for i, raw in enumerate(issues_raw, 1)]

    if files_scanned is None:
        files_scanned = _parse_line(_first(data, "filesScanned", "files_scanned")) or 0

    grade = data.get("grade")
    if isinstance(grade, str) and grade:
        score = _parse_line(data.get("score"))
        if score is None:
            _, score = calculate_grade(findings)
    else:
        grade, score = calculate_grade(findings)

    logger.debug(
        "Parsed payload: %d finding(s), grade=%s, score=%d, files=%d",
        len(findings), grade, score, files_scanned,
    )
    return ScanResult(
        findings=findings,
        files_scanned=files_scanned,
        grade=grade,
        score=score,
    )


def load_payload_file(file_path: str, files_scanned: Optional[int] = None) -> ScanResult:
    """
    Read and parse a saved analyzer payload.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file isn't valid JSON or isn't a valid payload.
    """
    path = Path(file_path)
    if not path.is_file():
        raise FileNotFoundError(f"Payload file not found: {file_path}")

    logger.info("Loading payload: %s", file_path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in payload file {file_path}: {e}") from e

    return parse_payload(data, files_scanned=files_scanned)
