"""Client configuration.

Settings can be given explicitly or read from environment variables.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict

from hacocms.models import ConfigurationError, ErrorCode

# Environment variable names
BASE_URL_ENV_VAR = "HACOCMS_BASE_URL"
ACCESS_TOKEN_ENV_VAR = "HACOCMS_ACCESS_TOKEN"
PROJECT_DRAFT_TOKEN_ENV_VAR = "HACOCMS_PROJECT_DRAFT_TOKEN"
TIMEOUT_ENV_VAR = "HACOCMS_TIMEOUT"

# Default timeout for requests (seconds)
DEFAULT_TIMEOUT = 30.0


class ClientSettings(BaseModel):
    """Settings for HacoCmsClient.

    Attributes:
        base_url: Project URL, e.g. ``https://{subdomain}.hacocms.com/``
        access_token: Project Access-Token
        project_draft_token: Project-Draft-Token, None to disable draft access
        timeout: Request timeout in seconds
    """

    model_config = ConfigDict(frozen=True)

    base_url: str
    access_token: str
    project_draft_token: str | None = None
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ClientSettings:
        """Load settings from environment variables.

        HACOCMS_BASE_URL and HACOCMS_ACCESS_TOKEN are required.
        HACOCMS_PROJECT_DRAFT_TOKEN and HACOCMS_TIMEOUT are optional;
        an empty value counts as unset.

        Args:
            environ: Mapping to read from (default: os.environ)

        Returns:
            Loaded settings

        Raises:
            ConfigurationError: If a required variable is missing or the timeout is invalid
        """
        env = os.environ if environ is None else environ

        def require(name: str) -> str:
            value = env.get(name)
            if not value:
                raise ConfigurationError(
                    code=ErrorCode.MISSING_SETTING,
                    message=f"{name} environment variable not set",
                    details={"variable": name},
                )
            return value

        base_url = require(BASE_URL_ENV_VAR)
        access_token = require(ACCESS_TOKEN_ENV_VAR)

        timeout = DEFAULT_TIMEOUT
        raw_timeout = env.get(TIMEOUT_ENV_VAR)
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as e:
                raise ConfigurationError(
                    code=ErrorCode.INVALID_SETTING,
                    message=f"{TIMEOUT_ENV_VAR} must be a number, got {raw_timeout!r}",
                    details={"variable": TIMEOUT_ENV_VAR},
                ) from e

        return cls(
            base_url=base_url,
            access_token=access_token,
            project_draft_token=env.get(PROJECT_DRAFT_TOKEN_ENV_VAR) or None,
            timeout=timeout,
        )
