"""SES client error types."""

from __future__ import annotations


class SESError(RuntimeError):
    """Base error."""


class SESUnavailableError(SESError):
    """SES endpoint could not be reached."""


class CredentialsError(SESError):
    """AWS credentials file is missing or invalid."""


class RenderError(SESError):
    """Response body could not be parsed or lacks a required node."""

    def __init__(self, message: str, *, action: str | None = None) -> None:
        super().__init__(message)
        self.action = action
