"""
Terminal styles for the console reporter.

A Style is an immutable bundle of escape codes. Reporters take one as an
argument: ANSI for a terminal, PLAIN for files and pipes.
"""

from dataclasses import dataclass

from codeguard.findings.models import Severity


@dataclass(frozen=True)
class Style:
    bold: str = ""
    dim: str = ""
    reset: str = ""
    cyan: str = ""
    green: str = ""
    # (severity, escape code) pairs; a tuple keeps the Style hashable
    severity_colors: tuple[tuple[Severity, str], ...] = ()

    def color(self, severity: Severity) -> str:
        for sev, code in self.severity_colors:
            if sev is severity:
                return code
        return ""

    def badge(self, severity: Severity) -> str:
        label = severity.value.upper()
        return f"{self.color(severity)}{self.bold}[{label:8s}]{self.reset}"


ANSI = Style(
    bold="\033[1m",
    dim="\033[2m",
    reset="\033[0m",
    cyan="\033[36m",
    green="\033[32m",
    severity_colors=(
        (Severity.CRITICAL, "\033[91m"),  # bright red
        (Severity.HIGH,     "\033[31m"),  # red
        (Severity.MEDIUM,   "\033[33m"),  # yellow
        (Severity.LOW,      "\033[32m"),  # green
    ),
)

PLAIN = Style()
