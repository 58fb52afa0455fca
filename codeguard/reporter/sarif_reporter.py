"""
SARIF reporter: outputs findings in SARIF 2.1.0 format for GitHub Code Scanning.

SARIF (Static Analysis Results Interchange Format) is a JSON standard that
GitHub's Code Scanning feature understands. Upload the output to GitHub and
findings appear as annotations on the affected lines in the Security tab.

Reference: https://docs.github.com/en/code-security/code-scanning/integrating-with-code-scanning/sarif-support-for-code-scanning
"""

import json
import logging
from typing import Any

from codeguard import __version__
from codeguard.findings.models import Finding
from codeguard.findings.severity import sarif_level, security_severity

logger = logging.getLogger(__name__)

TOOL_NAME = "CodeGuard AI"
TOOL_VERSION = __version__
TOOL_URI = "https://security-guard-ai.vercel.app"
SARIF_SCHEMA = "https://json.schemastore.org/sarif-2.1.0.json"
SARIF_VERSION = "2.1.0"


def _build_rules(findings: list[Finding]) -> list[dict[str, Any]]:
    """Build the SARIF rules array, one entry per unique finding id.

    The first finding seen for an id defines the rule.
    """
    seen: dict[str, Finding] = {}
    for f in findings:
        first = seen.get(f.id)
        if first is None:
            seen[f.id] = f
        elif first.title != f.title:
            logger.warning(
                "Finding id %r reused with a different title (%r vs %r); keeping the first",
                f.id, first.title, f.title,
            )

    rules = []
    for rule_id, f in seen.items():
        rules.append({
            "id": rule_id,
            "name": f.title,
            "shortDescription": {"text": f.title},
            "fullDescription": {"text": f.description},
            "defaultConfiguration": {"level": sarif_level(f.severity)},
            "properties": {
                "security-severity": security_severity(f.severity),
                "category": f.category,
            },
        })
    return rules


def _build_region(f: Finding) -> dict[str, int]:
    """Clamp untrusted line numbers: startLine >= 1 and endLine >= startLine."""
    start = max(f.line_start, 1)
    end = max(f.line_end or 0, f.line_start, 1)
    return {"startLine": start, "endLine": end}


def _build_result(f: Finding) -> dict[str, Any]:
    """Build a single SARIF result object from a Finding."""
    return {
        "ruleId": f.id,
        "level": sarif_level(f.severity),
        # Viewers reject empty messages
        "message": {"text": f.description or f.title},
        "locations": [
            {
                "physicalLocation": {
                    "artifactLocation": {
                        "uri": f.file_path,
                        "uriBaseId": "%SRCROOT%",
                    },
                    "region": _build_region(f),
                },
            }
        ],
    }


def report_sarif(findings: list[Finding]) -> str:
    """
    Format findings as a SARIF 2.1.0 JSON string.

    The output can be uploaded to GitHub Code Scanning via:
      gh code-scanning upload-results --sarif results.sarif

    Or in a GitHub Actions workflow:
      - uses: github/codeql-action/upload-sarif@v3
        with:
          sarif_file: results.sarif

    Args:
        findings: List of Finding objects to report.

    Returns:
        A SARIF 2.1.0 JSON string.
    """
    sarif: dict[str, Any] = {
        "$schema": SARIF_SCHEMA,
        "version": SARIF_VERSION,
        "runs": [
            {
                "tool": {
                    "driver": {
                        "name": TOOL_NAME,
                        "version": TOOL_VERSION,
                        "informationUri": TOOL_URI,
                        "rules": _build_rules(findings),
                    }
                },
                "results": [_build_result(f) for f in findings],
            }
        ],
    }

    output = json.dumps(sarif, indent=2, ensure_ascii=False)
    logger.info("SARIF report: %d finding(s), %d bytes", len(findings), len(output))
    return output
