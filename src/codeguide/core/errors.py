"""Error taxonomy shared by repositories, services and transports."""

from __future__ import annotations


class GuidelineError(Exception):
    """Base class for every error raised by the engine."""

    code = "internal_error"


class InvalidRequestError(GuidelineError):
    code = "invalid_request"


class NotSupportedError(GuidelineError):
    code = "not_supported"


class LanguageNotSupportedError(NotSupportedError):
    def __init__(self, language: str) -> None:
        super().__init__(f"programming language not supported: {language}")
        self.language = language


class ProjectTypeNotSupportedError(NotSupportedError):
    def __init__(self, project_type: str) -> None:
        super().__init__(f"project type not supported: {project_type}")
        self.project_type = project_type


class NotFoundError(GuidelineError):
    code = "not_found"


class RequestCancelledError(GuidelineError):
    code = "cancelled"


class InternalError(GuidelineError):
    code = "internal_error"


class ConfigError(InternalError):
    """Configuration could not be read or did not validate."""
