"""GuidelineService: language-keyed provider registry."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from codeguide.core.context import RequestContext, ensure_context
from codeguide.core.errors import (
    InvalidRequestError,
    LanguageNotSupportedError,
    ProjectTypeNotSupportedError,
)
from codeguide.guidelines.models import Guideline, GuidelineRequest


class GuidelineProvider(ABC):
    """Supplies guidelines for one programming language."""

    @abstractmethod
    def supports_project_type(self, project_type: str) -> bool: ...

    @abstractmethod
    def get_guidelines(
        self,
        project_type: str,
        options: dict[str, str] | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> list[Guideline]: ...


class GuidelineService:
    def __init__(self, *, logger: logging.Logger | None = None) -> None:
        self._providers: dict[str, GuidelineProvider] = {}
        self._logger = logger or logging.getLogger(__name__)

    def register_provider(self, language: str, provider: GuidelineProvider) -> None:
        """Register ``provider`` for ``language``; a later registration replaces an earlier one."""
        if language in self._providers:
            self._logger.warning("Replacing guideline provider for %s", language)
        self._providers[language] = provider

    def languages(self) -> list[str]:
        return sorted(self._providers)

    def get_guidelines(
        self, request: GuidelineRequest, *, ctx: RequestContext | None = None
    ) -> list[Guideline]:
        ensure_context(ctx).raise_if_cancelled()
        if not request.language:
            raise InvalidRequestError("invalid guideline request: language is required")
        if not request.project_type:
            raise InvalidRequestError("invalid guideline request: project_type is required")

        provider = self._providers.get(request.language)
        if provider is None:
            raise LanguageNotSupportedError(request.language)
        if not provider.supports_project_type(request.project_type):
            raise ProjectTypeNotSupportedError(request.project_type)

        return provider.get_guidelines(request.project_type, request.options, ctx=ctx)
