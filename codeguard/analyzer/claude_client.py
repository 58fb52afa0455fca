"""
Claude analyzer client: sends collected files to Claude and returns its findings payload.

The model does the vulnerability detection. This module only builds the
prompt, makes one API call, and pulls the JSON object out of the reply.
"""

import json
import logging
import os
import time
from typing import Any, Optional

from anthropic import Anthropic
from anthropic.types import TextBlock

from codeguard.collector.file_collector import CollectedFile

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-20250514"
MAX_CHARS_PER_FILE = 10_000


class AnalysisError(Exception):
    """The analyzer answered with something that isn't a findings payload."""


PROMPT_TEMPLATE = """You are a security auditor analyzing code for potential vulnerabilities.

## Files to Analyze

{file_list}

## Your Task

Analyze these files for security vulnerabilities and code quality issues. Focus on:

1. **Security Issues**
   - SQL/NoSQL injection
   - XSS vulnerabilities
   - Authentication/authorization flaws
   - Hardcoded secrets
   - Command injection
   - Path traversal
   - Insecure cryptography

2. **Code Quality**
   - Error handling issues
   - Resource leaks
   - Race conditions
   - Null pointer risks

## Output Format

Return ONLY a JSON object with this exact structure (no markdown, no explanation):

{{
  "issues": [
    {{
      "id": "SEC-001",
      "severity": "critical|high|medium|low",
      "category": "Security|Input Validation|Authentication|Cryptography|Error Handling|Code Quality",
      "title": "Brief title",
      "description": "Detailed description of the issue",
      "filePath": "path/to/file.ext",
      "lineStart": 10,
      "lineEnd": 15,
      "suggestion": "How to fix this issue"
    }}
  ]
}}

## Severity Guidelines

- **critical**: Easily exploitable, high impact (RCE, SQL injection, auth bypass)
- **high**: Serious issues requiring attention (XSS, CSRF, data exposure)
- **medium**: Issues requiring specific conditions (weak crypto, missing validation)
- **low**: Best practice violations (info disclosure, missing headers)

Return ONLY valid JSON. No markdown code blocks, no explanations."""


def build_prompt(files: list[CollectedFile]) -> str:
    """Build the analysis prompt; each file becomes a fenced block, truncated."""
    file_list = "\n\n".join(
        f"### {cf.path}\n```\n{cf.content[:MAX_CHARS_PER_FILE]}\n```"
        for cf in files
    )
    return PROMPT_TEMPLATE.format(file_list=file_list)


def _strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` wrapper if the model added one."""
    text = text.strip()
    if text.startswith("```json"):
        text = text[len("```json"):]
    elif text.startswith("```"):
        text = text[len("```"):]
    if text.endswith("```"):
        text = text[:-len("```")]
    return text.strip()


def analyze_files(
    files: list[CollectedFile],
    api_key: Optional[str] = None,
    model: str = DEFAULT_MODEL,
) -> dict[str, Any]:
    """
    Ask Claude to analyze a set of files in a single request.

    Args:
        files: Files from the collector.
        api_key: Anthropic API key. Falls back to ANTHROPIC_API_KEY env var.
        model: Claude model to use.

    Returns:
        The decoded payload dict (``{"issues": [...]}``), unvalidated.

    Raises:
        ValueError: If no API key is available.
        AnalysisError: If the reply has no text or isn't a JSON object.
    """
    key = api_key or os.environ.get("ANTHROPIC_API_KEY")
    if not key:
        raise ValueError(
            "No Anthropic API key provided. Set ANTHROPIC_API_KEY environment "
            "variable or pass api_key parameter."
        )

    if not files:
        return {"issues": []}

    logger.info("Analyzing %d file(s) in a single call (model=%s)", len(files), model)
    client = Anthropic(api_key=key)
    prompt = build_prompt(files)
    logger.debug("Prompt length: %d chars", len(prompt))

    t0 = time.monotonic()
    try:
        response = client.messages.create(
            model=model,
            max_tokens=4096,
            messages=[
                {"role": "user", "content": prompt},
            ],
        )
    except Exception as e:
        logger.error("Claude API request failed: %s", e)
        raise

    elapsed_ms = (time.monotonic() - t0) * 1000
    input_tokens = getattr(response.usage, "input_tokens", None)
    output_tokens = getattr(response.usage, "output_tokens", None)
    logger.info(
        "Claude response: %.0fms, tokens in=%s out=%s",
        elapsed_ms, input_tokens, output_tokens,
    )

    # Extract text; filter to TextBlock only (other block types lack .text)
    text_blocks = [b for b in response.content if isinstance(b, TextBlock)]
    if not text_blocks:
        raise AnalysisError("No text response from Claude")
    response_text = _strip_code_fences(text_blocks[0].text)
    logger.debug("Raw response (%d chars): %.200s", len(response_text), response_text)

    try:
        payload = json.loads(response_text)
    except json.JSONDecodeError as e:
        logger.warning("Failed to parse Claude response: %s. Response starts with: %.200s", e, response_text)
        raise AnalysisError(f"Could not parse analyzer response as JSON: {e}") from e

    if not isinstance(payload, dict):
        raise AnalysisError(
            f"Expected a JSON object from the analyzer, got {type(payload).__name__}"
        )

    issues = payload.get("issues")
    if isinstance(issues, list):
        logger.info("Analysis complete: %d issue(s) reported", len(issues))
    return payload
