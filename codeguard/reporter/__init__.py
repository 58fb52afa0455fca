from .console_reporter import report_console, wrap_text
from .json_reporter import report_json
from .sarif_reporter import report_sarif
from .styles import ANSI, PLAIN, Style

__all__ = ["report_console", "wrap_text", "report_json", "report_sarif", "ANSI", "PLAIN", "Style"]
