"""
Severity policy: the one ordering of severities and the mappings derived from it.

Every reporter goes through this module so the terminal, JSON and SARIF
outputs never disagree about what "high" means.
"""

from typing import Iterable

from codeguard.findings.models import Finding, Severity

# Most to least severe
SEVERITY_ORDER: tuple[Severity, ...] = (
    Severity.CRITICAL,
    Severity.HIGH,
    Severity.MEDIUM,
    Severity.LOW,
)

_RANK: dict[Severity, int] = {sev: i for i, sev in enumerate(SEVERITY_ORDER)}

# SARIF notification levels
_SARIF_LEVEL: dict[Severity, str] = {
    Severity.CRITICAL: "error",
    Severity.HIGH: "error",
    Severity.MEDIUM: "warning",
    Severity.LOW: "note",
}

# SARIF security-severity scores (CVSS-like 0.0–10.0), rendered by GitHub
_SECURITY_SEVERITY: dict[Severity, str] = {
    Severity.CRITICAL: "9.0",
    Severity.HIGH: "7.0",
    Severity.MEDIUM: "4.0",
    Severity.LOW: "1.0",
}

for _table in (_RANK, _SARIF_LEVEL, _SECURITY_SEVERITY):
    if set(_table) != set(Severity):
        raise RuntimeError("severity table must cover every Severity member")


def severity_rank(severity: Severity) -> int:
    """0 for critical, 3 for low. Raises KeyError for anything that isn't a Severity."""
    return _RANK[severity]


def sarif_level(severity: Severity) -> str:
    return _SARIF_LEVEL[severity]


def security_severity(severity: Severity) -> str:
    return _SECURITY_SEVERITY[severity]


def sort_by_severity(findings: Iterable[Finding]) -> list[Finding]:
    """Critical first. Findings of equal severity keep their input order."""
    return sorted(findings, key=lambda f: _RANK[f.severity])


def count_by_severity(findings: Iterable[Finding]) -> dict[Severity, int]:
    """Count findings per severity, zero-filled, in canonical order."""
    counts = {sev: 0 for sev in SEVERITY_ORDER}
    for f in findings:
        counts[f.severity] += 1
    return counts
