"""Secret redaction for log output.

Bot credentials travel through configuration and, in the connection layer,
through ``Authorization`` headers and token responses. The redactor is
fail-closed: if a pattern fails to compile or apply, it raises instead of
letting text through unredacted.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import structlog

from qq_bot_adapter.utils.errors import AdapterError

if TYPE_CHECKING:
    from collections.abc import Sequence

log = structlog.get_logger()


class RedactionError(AdapterError):
    """Raised when secret redaction fails."""


class SecretRedactor:
    """Detects and redacts secrets from text.

    Usage:
        redactor = SecretRedactor()
        safe_text = redactor.redact(potentially_sensitive_text)

    Attributes:
        patterns: List of compiled regex patterns to detect secrets.
        placeholder: The string to replace secrets with (default: "[REDACTED]").
    """

    DEFAULT_PATTERNS: tuple[tuple[str, str], ...] = (
        # Generic key/value pairs
        (
            r"(?i)(client[_-]?secret|app[_-]?secret|secret|token|password)"
            r"\s*[=:]\s*[\"']?[\w.-]{16,}",
            "Generic secret",
        ),
        # Authorization header values
        (r"QQBot\s+[\w.-]{16,}", "QQBot access token"),
        (r"\bBot\s+\d+\.[\w.-]{16,}", "Bot app token"),
        # Token endpoint responses
        (r"\"access_token\"\s*:\s*\"[^\"]+\"", "Access token JSON"),
        # JWT tokens
        (
            r"eyJ[a-zA-Z0-9_-]*\.eyJ[a-zA-Z0-9_-]*\.[a-zA-Z0-9_-]*",
            "JWT token",
        ),
        # Private keys
        (
            r"-----BEGIN (?:RSA |EC |DSA |OPENSSH )?PRIVATE KEY-----",
            "Private key header",
        ),
    )

    def __init__(
        self,
        placeholder: str = "[REDACTED]",
        custom_patterns: Sequence[tuple[str, str]] | None = None,
    ) -> None:
        """Initialize the SecretRedactor.

        Args:
            placeholder: String to replace detected secrets with.
            custom_patterns: Additional (pattern, name) tuples to detect.

        Raises:
            RedactionError: If any pattern fails to compile.
        """
        self.placeholder = placeholder
        self._pattern_names: dict[re.Pattern[str], str] = {}

        all_patterns = list(self.DEFAULT_PATTERNS)
        if custom_patterns:
            all_patterns.extend(custom_patterns)

        for pattern_str, name in all_patterns:
            try:
                compiled = re.compile(pattern_str)
            except re.error as e:
                log.error("pattern_compilation_failed", pattern=pattern_str, error=str(e))
                raise RedactionError(f"Failed to compile secret pattern '{pattern_str}': {e}") from e
            self._pattern_names[compiled] = name

    @property
    def patterns(self) -> list[re.Pattern[str]]:
        """Return the list of compiled patterns."""
        return list(self._pattern_names.keys())

    def add_literal(self, secret: str, name: str = "Configured secret") -> None:
        """Redact an exact value, such as the configured bot secret.

        Values shorter than 8 characters are ignored to avoid masking
        common substrings.
        """
        if len(secret) < 8:
            return
        self._pattern_names[re.compile(re.escape(secret))] = name

    def redact(self, text: str) -> str:
        """Redact all secrets from the given text.

        Args:
            text: The text to scan and redact secrets from.

        Returns:
            The text with all detected secrets replaced with placeholder.

        Raises:
            RedactionError: If redaction fails for any reason.
        """
        if not text:
            return text

        try:
            result = text
            for pattern in self._pattern_names:
                result = pattern.sub(self.placeholder, result)
            return result
        except Exception as e:
            log.error("redaction_failed", error=str(e))
            raise RedactionError(f"Redaction failed: {e}") from e
