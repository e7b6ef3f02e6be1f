"""Core engine: errors, request context and the rule service."""

from codeguide.core.context import RequestContext
from codeguide.core.errors import (
    ConfigError,
    GuidelineError,
    InternalError,
    InvalidRequestError,
    LanguageNotSupportedError,
    NotFoundError,
    NotSupportedError,
    ProjectTypeNotSupportedError,
    RequestCancelledError,
)
from codeguide.core.service import RuleService, split_csv

__all__ = [
    "ConfigError",
    "GuidelineError",
    "InternalError",
    "InvalidRequestError",
    "LanguageNotSupportedError",
    "NotFoundError",
    "NotSupportedError",
    "ProjectTypeNotSupportedError",
    "RequestCancelledError",
    "RequestContext",
    "RuleService",
    "split_csv",
]
