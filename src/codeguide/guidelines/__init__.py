"""Guideline providers keyed by programming language."""

from codeguide.guidelines.go_provider import GoProvider
from codeguide.guidelines.markdown import format_guidelines_markdown
from codeguide.guidelines.models import Guideline, GuidelineRequest, GuidelineRule
from codeguide.guidelines.repository_provider import RepositoryProvider
from codeguide.guidelines.service import GuidelineProvider, GuidelineService

__all__ = [
    "GoProvider",
    "Guideline",
    "GuidelineProvider",
    "GuidelineRequest",
    "GuidelineRule",
    "GuidelineService",
    "RepositoryProvider",
    "format_guidelines_markdown",
]
