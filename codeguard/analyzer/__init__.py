from .claude_client import AnalysisError, analyze_files, build_prompt

__all__ = ["AnalysisError", "analyze_files", "build_prompt"]
