"""
Finding model: the in-memory shape of one issue reported by the analyzer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Severity(Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass
class Finding:
    """A single issue reported by the analyzer."""
    id: str               # e.g. "SEC-001", used as the SARIF rule key
    severity: Severity
    category: str         # e.g. "Input Validation"
    title: str            # short summary
    description: str = ""
    file_path: str = ""   # repository-relative, empty if not file-scoped
    line_start: int = 0   # 1-based, 0 when unknown
    line_end: Optional[int] = None
    suggestion: str = ""  # fix guidance


@dataclass
class ScanResult:
    """Everything a reporter needs: findings plus the upstream grade."""
    findings: list[Finding] = field(default_factory=list)
    files_scanned: int = 0
    grade: str = "A"
    score: int = 0
