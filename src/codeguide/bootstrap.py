"""Wire configuration into repository, rule service and guideline service."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from codeguide.config import CodeguideConfig
from codeguide.core.service import RuleService
from codeguide.guidelines.go_provider import GoProvider
from codeguide.guidelines.repository_provider import RepositoryProvider
from codeguide.guidelines.service import GuidelineService
from codeguide.repository.factory import create_repository

logger = logging.getLogger(__name__)


@dataclass
class Services:
    rules: RuleService
    guidelines: GuidelineService


def build_services(config: CodeguideConfig) -> Services:
    """Create the repository once and share it between both services.

    Go guidelines are built in; every language listed under ``guidelines``
    is served from the repository and replaces a built-in of the same name.
    """
    repository = create_repository(config.repository)
    rules = RuleService(repository)

    guidelines = GuidelineService()
    guidelines.register_provider("go", GoProvider())
    for language, project_types in config.guidelines.items():
        guidelines.register_provider(
            language, RepositoryProvider(repository, language, project_types)
        )

    logger.debug("Guideline languages: %s", guidelines.languages())
    return Services(rules=rules, guidelines=guidelines)
