"""Guideline provider backed by the rule repository."""

from __future__ import annotations

from collections.abc import Iterable

from codeguide.core.context import RequestContext
from codeguide.core.service import split_csv
from codeguide.guidelines.models import Guideline, GuidelineRule
from codeguide.guidelines.service import GuidelineProvider
from codeguide.repository.base import RuleRepository, matches_keywords


class RepositoryProvider(GuidelineProvider):
    """Serves configured rules for one language as guidelines.

    The project type acts as a keyword filter, so general rules (no keywords)
    are always included. ``options["categories"]`` narrows the categories.
    Rules are grouped by category in repository order, highest priority first.
    """

    def __init__(
        self,
        repository: RuleRepository,
        language: str,
        project_types: Iterable[str],
    ) -> None:
        self._repository = repository
        self._language = language
        self._project_types = frozenset(project_types)

    def supports_project_type(self, project_type: str) -> bool:
        return project_type in self._project_types

    def get_guidelines(
        self,
        project_type: str,
        options: dict[str, str] | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> list[Guideline]:
        categories = split_csv((options or {}).get("categories"))
        rules = self._repository.get_code_style(
            categories, [project_type], self._language, ctx=ctx
        )
        # Not every backend applies keywords.
        rules = [r for r in rules if matches_keywords(r, [project_type])]

        grouped: dict[str, Guideline] = {}
        for rule in sorted(rules, key=lambda r: -r.priority):
            guideline = grouped.setdefault(rule.category, Guideline(category=rule.category))
            guideline.rules.append(
                GuidelineRule(title=rule.name, description=rule.description, priority=rule.priority)
            )
            guideline.examples.extend(ex.code for ex in rule.examples if ex.code)

        order = list(dict.fromkeys(r.category for r in rules))
        return [grouped[c] for c in order]
