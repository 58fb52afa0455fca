"""
JSON reporter: outputs a compact summary plus issue list for CI/CD pipelines.

Key names and order are fixed; downstream consumers depend on them.
"""

import json
import logging

from codeguard.findings.models import ScanResult

logger = logging.getLogger(__name__)


def report_json(result: ScanResult) -> str:
    """
    Format a scan result as a JSON string.

    Args:
        result: The scan result to report.

    Returns:
        A JSON object with grade, filesScanned, issueCount and issues.
    """
    data = {
        "grade": result.grade,
        "filesScanned": result.files_scanned,
        "issueCount": len(result.findings),
        "issues": [
            {
                "severity": f.severity.value,
                "title": f.title,
                "file": f.file_path,
                "line": f.line_start,
                "description": f.description,
            }
            for f in result.findings
        ],
    }
    output = json.dumps(data, indent=2, ensure_ascii=False)
    logger.info("JSON report: %d finding(s), %d bytes", len(result.findings), len(output))
    return output
