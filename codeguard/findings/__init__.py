from .models import Finding, ScanResult, Severity
from .payload import calculate_grade, load_payload_file, parse_payload
from .severity import (
    SEVERITY_ORDER,
    count_by_severity,
    sarif_level,
    security_severity,
    severity_rank,
    sort_by_severity,
)

__all__ = [
    "Finding",
    "ScanResult",
    "Severity",
    "calculate_grade",
    "load_payload_file",
    "parse_payload",
    "SEVERITY_ORDER",
    "count_by_severity",
    "sarif_level",
    "security_severity",
    "severity_rank",
    "sort_by_severity",
]
