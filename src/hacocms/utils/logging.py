"""Secure logging configuration for hacocms.

Provides logging setup with credential masking for security.
Access tokens and draft tokens are completely masked in all log output.
"""

import logging
import re


class TokenMaskingFilter(logging.Filter):
    """Logging filter that masks API credentials for security.

    Bearer tokens, Project-Draft-Token header values and per-content
    draft tokens are replaced with [MASKED] to prevent credential
    leakage in logs.
    """

    # Each pattern captures (prefix)(secret value)
    TOKEN_PATTERNS = [
        # Authorization: Bearer VALUE, or dict format {"Authorization": "Bearer VALUE"}
        re.compile(r"(Authorization[\"']?\s*[=:]\s*[\"']?Bearer\s+)([^\s;,}\"']+)", re.IGNORECASE),
        # Haco-Project-Draft-Token: VALUE, or dict format {"Haco-Project-Draft-Token": "VALUE"}
        re.compile(r"(Haco-Project-Draft-Token[\"']?\s*[=:]\s*[\"']?)([^\s;,}\"']+)", re.IGNORECASE),
        # ?draft=VALUE query parameter
        re.compile(r"([?&]draft=)([^&\s\"']+)"),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter and mask credentials in log records.

        Args:
            record: Log record to process

        Returns:
            Always True (record is always passed through, just modified)
        """
        if record.msg:
            record.msg = self._mask_tokens(str(record.msg))
        if record.args and isinstance(record.args, tuple):
            # URLs and headers may be passed as non-str objects
            new_args: list[object] = []
            for arg in record.args:
                if isinstance(arg, int | float):
                    new_args.append(arg)
                    continue
                text = str(arg)
                masked = self._mask_tokens(text)
                new_args.append(masked if masked != text else arg)
            record.args = tuple(new_args)
        return True

    def _mask_tokens(self, text: str) -> str:
        """Mask all credential values in text.

        Args:
            text: Text potentially containing credentials

        Returns:
            Text with credential values replaced by [MASKED]
        """
        result = text
        for pattern in self.TOKEN_PATTERNS:
            result = pattern.sub(lambda m: m.group(1) + "[MASKED]", result)
        return result


def setup_logging(level: int = logging.INFO, name: str | None = None) -> logging.Logger:
    """Set up logging with credential masking.

    Args:
        level: Logging level (default: INFO)
        name: Logger name (default: "hacocms")

    Returns:
        Configured logger instance
    """
    logger_name = name or "hacocms"
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    handler.setFormatter(formatter)
    handler.addFilter(TokenMaskingFilter())

    logger.addHandler(handler)

    return logger
